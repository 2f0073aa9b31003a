"""Fixtures for bsmooth tests

"""

import os

import numpy as np

import pytest


SAMPLE_DATA_DIR = os.path.join(
    os.path.dirname(__file__),
    'sample_data')


# pylint: disable=redefined-outer-name
@pytest.fixture
def triangle_samples():
    """Period-4 triangle wave sampled at x = 0, 1, ..., 9

    """
    x = np.arange(10, dtype=float)
    y = np.array([0, 1, 0, -1, 0, 1, 0, -1, 0, 1], dtype=float)
    return (x, y)


@pytest.fixture
def noisy_samples():
    """Noisy sine wave on irregularly spaced abscissas

    """
    rng = np.random.default_rng(20091006)
    x = np.cumsum(rng.uniform(0.1, 0.5, size=80))
    y = 3.0 * np.sin(x / 2.0) + rng.normal(scale=0.3, size=len(x))
    return (x, y)


@pytest.fixture
def nonuniform_knots():
    """Cubic knot vector with uneven spacing and a double interior knot

    """
    return np.array([0, 0, 0, 0, 1.0, 3.0, 3.0, 3.5, 7.0, 7.0, 7.0, 7.0])


def get_sample_file_path(name):
    """Return path to a sample file

    """
    return os.path.join(SAMPLE_DATA_DIR, name)
