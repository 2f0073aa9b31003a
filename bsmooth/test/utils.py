"""Utilities for tests

"""

import numpy as np


def assert_close(a, b, message='', rtol=1e-5, atol=1e-8):
    """Verify that floats in a and b are close

    """
    message_template = '{} not close to {}'
    if message:
        message_template = ': '.join((message, message_template))
    assert np.allclose(a, b, rtol=rtol, atol=atol), \
        message_template.format(a, b)


def dense_design_matrix(cache):
    """Expand the basis rows of a BasisCache into a full matrix

    """
    design = np.zeros((cache.sample_count, cache.basis_count))
    for i, (first, values) in enumerate(zip(cache.first, cache.values)):
        design[i, first:first + len(values)] = values
    return design


def transformation_matrix(reduction):
    """Dense matrix T with full coefficients = T @ free coefficients

    """
    n = reduction.basis_count
    transform = np.zeros((n, n - 2))
    transform[1:-1] = np.eye(n - 2)
    transform[0, :3] = reduction.left_weights
    transform[-1, -3:] = reduction.right_weights
    return transform


def banded_to_dense(ab):
    """Expand lower banded storage into a full symmetric matrix"""
    bandwidth, n = ab.shape
    dense = np.zeros((n, n))
    for offset in range(bandwidth):
        diagonal = ab[offset, :n - offset]
        dense += np.diag(diagonal, -offset)
        if offset:
            dense += np.diag(diagonal, offset)
    return dense
