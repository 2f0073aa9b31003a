"""Banded Cholesky solution of symmetric positive definite systems

Matrices are held in LAPACK lower banded storage: for a matrix A
with lower bandwidth u, ab[i - j, j] == A[i, j] for j <= i <= j + u,
so that ab has shape (u + 1, n).

"""

import logging

import numpy as np

import scipy.linalg as linalg_mod

from bsmooth.exceptions import SingularSystemError


LOG = logging.getLogger('bsmooth.banded')


def factorize(ab):
    """Cholesky factor of a banded symmetric matrix

    Returns the lower triangular factor in the same storage.  Raises
    SingularSystemError if a pivot is not positive.

    """
    try:
        return linalg_mod.cholesky_banded(ab, lower=True)
    except np.linalg.LinAlgError as error:
        raise SingularSystemError(
            'banded Cholesky factorization failed: {}'.format(error)
        ) from error


def solve(factor, rhs):
    """Solve A x = rhs given the Cholesky factor of A"""
    return linalg_mod.cho_solve_banded((factor, True), rhs)


def solve_normal_equations(equations):
    """Solve NormalEquations for the free coefficients"""
    factor = factorize(equations.gram)
    LOG.debug('factored {0} x {0} system of bandwidth {1}; '
              'smallest diagonal of factor {2}'
              .format(equations.size, equations.gram.shape[0],
                      factor[0].min()))
    return solve(factor, equations.rhs)
