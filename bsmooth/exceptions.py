"""Package-specific exceptions"""


class BSplineError(Exception):
    """Base class for errors raised while setting up or solving a spline"""


class InvalidDomainError(BSplineError):
    """Abscissas or node count do not define a usable spline domain"""


class InvalidWavelengthError(BSplineError):
    """Non-positive wavelength given without an explicit node count"""


class SampleOutOfDomainError(BSplineError):
    """Basis evaluation requested outside the knot range"""


class SingularSystemError(BSplineError):
    """Banded factorization encountered a non-positive pivot"""


class DimensionMismatchError(BSplineError):
    """Array length does not match the number of basis samples"""


class InvalidSampleError(BSplineError):
    """Non-finite ordinate or invalid weight"""


class InvalidBoundaryConditionError(BSplineError, ValueError):
    """Boundary condition selector is not one of the admissible kinds"""


class FitFailedError(BSplineError):
    """Spline queried although its construction failed"""
