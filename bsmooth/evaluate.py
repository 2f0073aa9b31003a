"""Evaluate B-splines and their derivatives from coefficients

"""

from dataclasses import dataclass

import numpy as np

from bsmooth.basis import divide_or_zero, find_interval


def de_boor(knots, coefficients, x, degree):
    """Evaluate a B-spline at x by de Boor's algorithm

    x may be a scalar or an array and must lie within the knot range;
    the result has the shape of x.

    """
    x = np.asarray(x, dtype=float)
    left = np.asarray(find_interval(knots, x, degree))
    columns = left[..., np.newaxis] - degree + np.arange(degree + 1)
    d = np.array(coefficients[columns], dtype=float)
    for r in range(1, degree + 1):
        for j in range(degree, r - 1, -1):
            i = left - degree + j
            alpha = divide_or_zero(x - knots[i],
                                   knots[i + degree + 1 - r] - knots[i])
            d[..., j] = (1 - alpha) * d[..., j - 1] + alpha * d[..., j]
    return d[..., degree]


def derivative_representation(knots, coefficients, degree):
    """Knots and coefficients of the derivative of a B-spline

    The derivative of a degree-k spline is a degree-(k - 1) spline on
    the knots with one copy of each end knot removed, whose
    coefficients are the scaled differences
      k * (c[i] - c[i - 1]) / (t[i + k] - t[i])

    """
    if degree < 1:
        raise ValueError('cannot differentiate a degree {} spline'
                         .format(degree))
    n = len(coefficients)
    spans = knots[degree + 1:n + degree] - knots[1:n]
    return (knots[1:-1],
            degree * divide_or_zero(np.diff(coefficients), spans))


@dataclass(frozen=True)
class PiecewiseRepresentation:
    """B-spline given by knots, coefficients and degree

    Arguments outside the knot range are clamped to the nearest end
    of the domain.

    """
    knots: np.ndarray
    coefficients: np.ndarray
    degree: int

    def domain(self):
        """End points of spline domain (x_start, x_end)"""
        return (self.knots[0], self.knots[-1])

    def __call__(self, x):
        x = np.clip(np.asarray(x, dtype=float), *self.domain())
        return de_boor(self.knots, self.coefficients, x, self.degree)

    def derivative(self):
        """Representation of the first derivative"""
        knots, coefficients = derivative_representation(
            self.knots, self.coefficients, self.degree)
        knots.flags.writeable = False
        coefficients.flags.writeable = False
        return PiecewiseRepresentation(knots, coefficients, self.degree - 1)
