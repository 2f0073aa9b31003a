"""Boundary conditions at the ends of the spline domain

A boundary condition fixes the value, slope or curvature of the
spline to zero at both x_min and x_max.  With endpoint knots of
multiplicity ORDER, the r'th derivative at x_min involves only the
first r + 1 coefficients, and the leading one always has a nonzero
weight; so the condition can be solved for the first coefficient
and, likewise, for the last.  Those two coefficients are eliminated
from the least-squares problem, which is then posed over the
remaining free coefficients.

"""

import enum

import numpy as np

from bsmooth.exceptions import InvalidBoundaryConditionError
from bsmooth.knots import DEGREE, ORDER


class BoundaryCondition(enum.IntEnum):
    """Derivative of the spline that vanishes at both domain ends"""
    ZERO_ENDPOINTS = 0
    ZERO_FIRST_DERIVATIVE = 1
    ZERO_SECOND_DERIVATIVE = 2

    @classmethod
    def coerce(cls, value):
        """Convert value to a BoundaryCondition

        Accepts members, the derivative degrees 0, 1 and 2 (as
        integers or digit strings) and member names in either case,
        with '-' in place of '_' allowed, e.g. 'zero-first-derivative'.
        Short names 'zero-first' and 'zero-second' are also accepted.

        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace('-', '_')
            if key.isdigit():
                value = int(key)
            else:
                key = _ALIASES.get(key, key)
                try:
                    return cls[key]
                except KeyError:
                    raise InvalidBoundaryConditionError(
                        'unknown boundary condition {!r}; expected one of {}'
                        .format(value, [member.name for member in cls])
                    ) from None
        if isinstance(value, bool) or not isinstance(
                value, (int, np.integer)):
            raise InvalidBoundaryConditionError(
                'boundary condition must be a degree or name, got {!r}'
                .format(value))
        try:
            return cls(int(value))
        except ValueError:
            raise InvalidBoundaryConditionError(
                'boundary condition degree must be 0, 1 or 2, got {}'
                .format(value)) from None


_ALIASES = {
    'ZERO_FIRST': 'ZERO_FIRST_DERIVATIVE',
    'ZERO_SECOND': 'ZERO_SECOND_DERIVATIVE',
}


class BoundaryReduction:
    """Elimination of the end coefficients by a boundary condition

    With N basis functions, the condition at x_min gives
      c[0] = left_weights . c[1:ORDER]
    and the condition at x_max gives
      c[N - 1] = right_weights . c[N - ORDER:N - 1]
    The free coefficients are c[1:N - 1].

    """
    __slots__ = ['condition', 'basis_count', 'left_weights', 'right_weights']

    def __init__(self, condition, cache):
        self.condition = BoundaryCondition.coerce(condition)
        self.basis_count = cache.basis_count
        degree = int(self.condition)
        left_row = cache.left_end[degree]
        right_row = cache.right_end[degree]
        self.left_weights = -left_row[1:] / left_row[0]
        self.right_weights = -right_row[:-1] / right_row[-1]

    @property
    def free_count(self):
        """Number of coefficients remaining after elimination"""
        return self.basis_count - 2

    @property
    def bandwidth(self):
        """Width of reduced basis rows, and so of the normal equations"""
        return min(ORDER, self.free_count)

    def reduce(self, first, values):
        """Express basis rows in terms of the free coefficients

        first and values describe basis rows as in BasisCache.  Returns
        (start, reduced) in which reduced[i, j] is the weight of free
        coefficient start[i] + j in row i.

        """
        n_free = self.free_count
        width = self.bandwidth
        last = self.basis_count - 1
        start = np.clip(first - 1, 0, n_free - width)
        reduced = np.zeros((len(first), width))
        rows = np.arange(len(first))
        for j in range(ORDER):
            full = first + j
            interior = (full > 0) & (full < last)
            reduced[rows[interior],
                    full[interior] - 1 - start[interior]] += values[interior, j]
            at_left = full == 0
            for p, weight in enumerate(self.left_weights):
                reduced[rows[at_left], p - start[at_left]] += (
                    weight * values[at_left, j])
            at_right = full == last
            for p, weight in enumerate(self.right_weights):
                reduced[rows[at_right],
                        n_free - DEGREE + p - start[at_right]] += (
                            weight * values[at_right, j])
        return start, reduced

    def expand(self, free):
        """Full coefficient vector from free coefficients"""
        coefficients = np.empty(self.basis_count)
        coefficients[1:-1] = free
        coefficients[0] = np.dot(self.left_weights, free[:DEGREE])
        coefficients[-1] = np.dot(self.right_weights, free[-DEGREE:])
        return coefficients
