"""Test code for Bsmooth

"""
