"""Test code for boundary conditions

"""

import numpy as np

import pytest

import bsmooth.basis as basis_mod
import bsmooth.knots as knots_mod
from bsmooth.boundary import BoundaryCondition, BoundaryReduction
from bsmooth.exceptions import InvalidBoundaryConditionError
from bsmooth.test.utils import (
    assert_close, dense_design_matrix, transformation_matrix)


@pytest.mark.parametrize('value, expected', [
    (0, BoundaryCondition.ZERO_ENDPOINTS),
    (1, BoundaryCondition.ZERO_FIRST_DERIVATIVE),
    (np.int64(2), BoundaryCondition.ZERO_SECOND_DERIVATIVE),
    ('1', BoundaryCondition.ZERO_FIRST_DERIVATIVE),
    ('zero-endpoints', BoundaryCondition.ZERO_ENDPOINTS),
    ('ZERO_SECOND_DERIVATIVE', BoundaryCondition.ZERO_SECOND_DERIVATIVE),
    ('zero-first', BoundaryCondition.ZERO_FIRST_DERIVATIVE),
    (BoundaryCondition.ZERO_FIRST_DERIVATIVE,
     BoundaryCondition.ZERO_FIRST_DERIVATIVE),
])
def test_coerce(value, expected):
    """Degrees and names convert to boundary conditions"""
    assert BoundaryCondition.coerce(value) is expected


@pytest.mark.parametrize('value', [3, -1, '5', 'natural', 1.0, True, None])
def test_coerce_invalid(value):
    """Out-of-range selectors are rejected"""
    with pytest.raises(InvalidBoundaryConditionError):
        BoundaryCondition.coerce(value)


def test_invalid_is_value_error():
    """Invalid boundary conditions are also ValueErrors"""
    with pytest.raises(ValueError):
        BoundaryCondition.coerce(7)


def make_cache(wavelength):
    """Basis cache for samples on [0, 9]"""
    x = np.linspace(0.0, 9.0, 19)
    knots = knots_mod.plan_knots(x[0], x[-1], wavelength=wavelength)
    return basis_mod.build_basis(knots, x)


@pytest.mark.parametrize('condition', list(BoundaryCondition))
@pytest.mark.parametrize('wavelength', [9.0, 4.0, 1.0])
def test_expand_satisfies_condition(condition, wavelength):
    """Expanded coefficients satisfy the condition at both ends"""
    cache = make_cache(wavelength)
    reduction = BoundaryReduction(condition, cache)
    assert reduction.free_count == cache.basis_count - 2
    free = np.random.default_rng(3).normal(size=reduction.free_count)
    coefficients = reduction.expand(free)
    assert np.array_equal(coefficients[1:-1], free)
    degree = int(condition)
    assert abs(np.dot(cache.left_end[degree], coefficients[:4])) < 1e-12
    assert abs(np.dot(cache.right_end[degree], coefficients[-4:])) < 1e-12


@pytest.mark.parametrize('condition', list(BoundaryCondition))
@pytest.mark.parametrize('wavelength', [9.0, 6.0, 4.0, 1.0])
def test_reduce_matches_transformation(condition, wavelength):
    """Reduced rows equal the design matrix times the transformation"""
    cache = make_cache(wavelength)
    reduction = BoundaryReduction(condition, cache)
    start, rows = reduction.reduce(cache.first, cache.values)
    assert rows.shape == (cache.sample_count, reduction.bandwidth)
    assert (start >= 0).all()
    assert (start + reduction.bandwidth <= reduction.free_count).all()
    reduced = np.zeros((cache.sample_count, reduction.free_count))
    for i, (offset, row) in enumerate(zip(start, rows)):
        reduced[i, offset:offset + len(row)] = row
    expected = dense_design_matrix(cache) @ transformation_matrix(reduction)
    assert_close(reduced, expected, atol=1e-12)


def test_zero_endpoints_weights():
    """Zero endpoint values fix the end coefficients at zero"""
    reduction = BoundaryReduction(
        BoundaryCondition.ZERO_ENDPOINTS, make_cache(4.0))
    assert (reduction.left_weights == 0).all()
    assert (reduction.right_weights == 0).all()


def test_zero_slope_weights():
    """Zero end slopes make the end coefficients equal their neighbours"""
    reduction = BoundaryReduction(
        BoundaryCondition.ZERO_FIRST_DERIVATIVE, make_cache(4.0))
    assert_close(reduction.left_weights, [1, 0, 0], atol=1e-12)
    assert_close(reduction.right_weights, [0, 0, 1], atol=1e-12)
