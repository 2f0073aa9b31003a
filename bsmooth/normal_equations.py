"""Assemble least-squares normal equations for spline coefficients

"""

from dataclasses import dataclass

import numpy as np

from bsmooth.exceptions import DimensionMismatchError, InvalidSampleError


@dataclass(frozen=True)
class NormalEquations:
    """Banded normal equations over the free spline coefficients

    gram is the symmetric matrix G = R^T W R in LAPACK lower banded
    storage, gram[i - j, j] == G[i, j], where R holds the basis rows
    after boundary elimination; rhs is R^T W y.

    """
    gram: np.ndarray
    rhs: np.ndarray

    @property
    def size(self):
        """Number of unknowns"""
        return len(self.rhs)


def validate_samples(cache, y, weights=None):
    """Check ordinates and weights against a basis cache

    Returns float64 copies of y and weights; weights default to 1.

    """
    y = np.array(y, dtype=float)
    if y.shape != (cache.sample_count,):
        raise DimensionMismatchError(
            'y has shape {}, expected ({},)'
            .format(y.shape, cache.sample_count))
    if not np.isfinite(y).all():
        raise InvalidSampleError('non-finite value in y')
    if weights is None:
        weights = np.ones(cache.sample_count)
    else:
        weights = np.array(weights, dtype=float)
        if weights.shape != (cache.sample_count,):
            raise DimensionMismatchError(
                'weights have shape {}, expected ({},)'
                .format(weights.shape, cache.sample_count))
        if not np.isfinite(weights).all():
            raise InvalidSampleError('non-finite value in weights')
        if (weights < 0).any():
            raise InvalidSampleError('negative value in weights')
    return y, weights


def assemble(cache, y, weights, reduction):
    """Assemble normal equations for a least-squares spline fit

    cache is the BasisCache of the samples, reduction the
    BoundaryReduction for the boundary condition.  Each sample adds
    the outer product of its reduced basis row, scaled by its
    weight, to the Gram matrix; the band of the Gram matrix has the
    width of the reduced rows.

    """
    y, weights = validate_samples(cache, y, weights)
    start, rows = reduction.reduce(cache.first, cache.values)
    width = rows.shape[1]
    gram = np.zeros((width, reduction.free_count))
    rhs = np.zeros(reduction.free_count)
    weighted = rows * weights[:, np.newaxis]
    for j in range(width):
        np.add.at(rhs, start + j, weighted[:, j] * y)
        for k in range(j + 1):
            np.add.at(gram[j - k], start + k, weighted[:, j] * rows[:, k])
    return NormalEquations(gram=gram, rhs=rhs)
