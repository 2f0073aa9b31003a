"""Cubic B-spline basis evaluation

Basis values are computed with the Cox-de Boor recursion, one
polynomial degree at a time, for all samples at once.  Only the
ORDER basis functions overlapping the knot interval of a sample are
nonzero, so each sample is represented by ORDER values and the index
of the first nonzero basis function.

"""

from dataclasses import dataclass

import numpy as np

from bsmooth.exceptions import SampleOutOfDomainError
from bsmooth.knots import DEGREE, ORDER


def find_interval(knots, x, degree=DEGREE):
    """Find the knot interval containing each value in x

    Returns integer indices left such that
    knots[left] <= x < knots[left + 1].  Values at or beyond the
    right end of the domain are assigned to the last nonempty
    interval and values below the left end to the first, so that
    the result is always a valid interval for a spline of the given
    degree.

    """
    n_coefficients = len(knots) - degree - 1
    left = np.searchsorted(knots, x, side='right') - 1
    return np.clip(left, degree, n_coefficients - 1)


def divide_or_zero(numerator, denominator):
    """Elementwise quotient with 0 / 0 taken as 0"""
    nonzero = denominator > 0
    return np.where(
        nonzero,
        numerator / np.where(nonzero, denominator, 1.0),
        0.0)


def _raise_degree(knots, x, left, lower, k):
    """Degree-k basis values from degree-(k - 1) values

    lower[:, m] is the value of basis function left - (k - 1) + m;
    the result column j holds basis function left - k + j.

    """
    result = np.zeros((len(x), k + 1))
    for j in range(k + 1):
        i = left - k + j
        if j >= 1:
            result[:, j] += divide_or_zero(
                x - knots[i], knots[i + k] - knots[i]) * lower[:, j - 1]
        if j <= k - 1:
            result[:, j] += divide_or_zero(
                knots[i + k + 1] - x,
                knots[i + k + 1] - knots[i + 1]) * lower[:, j]
    return result


def _differentiate(knots, left, lower, k):
    """Apply the B-spline derivative formula to degree-(k - 1) terms

    lower has the same layout as in _raise_degree, and may hold
    values or derivatives of the degree-(k - 1) basis functions; the
    result holds the derivative of one higher order of the degree-k
    basis functions.

    """
    result = np.zeros((len(left), k + 1))
    for j in range(k + 1):
        i = left - k + j
        if j >= 1:
            result[:, j] += k * divide_or_zero(
                lower[:, j - 1], knots[i + k] - knots[i])
        if j <= k - 1:
            result[:, j] -= k * divide_or_zero(
                lower[:, j], knots[i + k + 1] - knots[i + 1])
    return result


def basis_functions(knots, x, left, degree=DEGREE, derivatives=0):
    """Evaluate nonzero basis functions and their derivatives at x

    left are the knot intervals of x, as returned by find_interval.
    Returns an array of shape (derivatives + 1, len(x), degree + 1)
    in which [r, i, j] is the r'th derivative of basis function
    left[i] - degree + j at x[i].

    """
    if not 0 <= derivatives <= degree:
        raise ValueError(
            'derivative order must be in [0, {}], got {}'
            .format(degree, derivatives))
    x = np.atleast_1d(np.asarray(x, dtype=float))
    left = np.atleast_1d(left)
    levels = [np.ones((len(x), 1))]
    for k in range(1, degree + 1):
        levels.append(_raise_degree(knots, x, left, levels[-1], k))
    result = [levels[degree]]
    for order in range(1, derivatives + 1):
        terms = levels[degree - order]
        for k in range(degree - order + 1, degree + 1):
            terms = _differentiate(knots, left, terms, k)
        result.append(terms)
    return np.stack(result)


@dataclass(frozen=True)
class BasisCache:
    """Nonzero cubic basis values at a set of samples

    * knots: knot vector with endpoints of multiplicity ORDER
    * x: sample abscissas
    * first: index of the first nonzero basis function at each sample
    * values: (sample_count, ORDER) nonzero basis values
    * left_end, right_end: (3, ORDER) value, first and second
      derivative of the basis functions at x_min and x_max; the
      first nonzero index is 0 at x_min and basis_count - ORDER at
      x_max

    """
    knots: np.ndarray
    x: np.ndarray
    first: np.ndarray
    values: np.ndarray
    left_end: np.ndarray
    right_end: np.ndarray

    @property
    def sample_count(self):
        """Number of samples"""
        return len(self.x)

    @property
    def basis_count(self):
        """Number of basis functions"""
        return len(self.knots) - ORDER

    def combine(self, coefficients):
        """Spline values at the samples for a full coefficient vector"""
        columns = self.first[:, np.newaxis] + np.arange(ORDER)
        return (self.values * coefficients[columns]).sum(axis=1)


def build_basis(knots, x):
    """Evaluate the cubic basis for knots at samples x

    Raises SampleOutOfDomainError if any x lies outside the knot
    range.  Returns a BasisCache holding read-only copies of its
    arrays.

    """
    knots = np.array(knots, dtype=float)
    x = np.array(x, dtype=float)
    x_min, x_max = knots[0], knots[-1]
    outside = (x < x_min) | (x > x_max)
    if outside.any():
        raise SampleOutOfDomainError(
            '{} samples outside [{}, {}], first at x = {}'
            .format(outside.sum(), x_min, x_max, x[outside][0]))
    left = find_interval(knots, x)
    values = basis_functions(knots, x, left)[0]
    ends = np.array([x_min, x_max])
    end_rows = basis_functions(
        knots, ends, find_interval(knots, ends), derivatives=2)
    arrays = dict(
        knots=knots,
        x=x,
        first=left - DEGREE,
        values=values,
        left_end=np.ascontiguousarray(end_rows[:, 0, :]),
        right_end=np.ascontiguousarray(end_rows[:, 1, :]))
    for array in arrays.values():
        array.flags.writeable = False
    return BasisCache(**arrays)
