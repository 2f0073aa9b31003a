"""Place spline knots from a smoothing wavelength or node count

"""

import logging
import math

import numpy as np

from bsmooth.exceptions import InvalidDomainError, InvalidWavelengthError


DEGREE = 3
ORDER = DEGREE + 1
# Node spacing may not exceed this fraction of the wavelength
DEFAULT_NODE_INTERVAL_RATIO = 0.5
MIN_INTERVALS = 2
LOG = logging.getLogger('bsmooth.knots')


def validate_abscissas(x):
    """Check that x can serve as the abscissas of a spline basis

    Returns a float64 copy of x.  Raises InvalidDomainError if x is
    not one-dimensional, has fewer than 2 points, has non-finite
    values, or is not strictly increasing.

    """
    x = np.array(x, dtype=float)
    if x.ndim != 1:
        raise InvalidDomainError(
            'x must be one-dimensional, got shape {}'.format(x.shape))
    if len(x) < 2:
        raise InvalidDomainError(
            'at least 2 samples required, got {}'.format(len(x)))
    if not np.isfinite(x).all():
        raise InvalidDomainError('non-finite value in x')
    if not (np.diff(x) > 0).all():
        raise InvalidDomainError('x must be strictly increasing')
    return x


def count_intervals(x_min, x_max, wavelength=None, node_count=0,
                    node_interval_ratio=DEFAULT_NODE_INTERVAL_RATIO,
                    sample_count=None):
    """Number of knot intervals spanning [x_min, x_max]

    An explicit node_count (number of distinct breakpoints, endpoints
    included) takes precedence over the wavelength.  Otherwise the
    interval count is the smallest integer for which the node spacing
    does not exceed node_interval_ratio * wavelength.

    If sample_count is given, the free coefficients left after the
    boundary condition (n_intervals + DEGREE - 2 of them) may not
    outnumber the samples; such a fit could never be determined.

    """
    if not (np.isfinite(x_min) and np.isfinite(x_max)):
        raise InvalidDomainError(
            'non-finite domain [{}, {}]'.format(x_min, x_max))
    if x_max <= x_min:
        raise InvalidDomainError(
            'empty domain: x_max {} <= x_min {}'.format(x_max, x_min))
    if node_count is None:
        node_count = 0
    if node_count < 0:
        raise InvalidDomainError(
            'node count must be non-negative, got {}'.format(node_count))
    if node_count > 0:
        n_intervals = int(node_count) - 1
    else:
        if wavelength is None or not wavelength > 0:
            raise InvalidWavelengthError(
                'wavelength must be positive when no node count is '
                'given, got {}'.format(wavelength))
        if not math.isfinite(wavelength):
            raise InvalidWavelengthError(
                'non-finite wavelength {}'.format(wavelength))
        if not node_interval_ratio > 0:
            raise InvalidWavelengthError(
                'node interval ratio must be positive, got {}'
                .format(node_interval_ratio))
        max_spacing = float(node_interval_ratio) * float(wavelength)
        if not max_spacing > 0:
            raise InvalidWavelengthError(
                'wavelength {} too small for a node spacing'
                .format(wavelength))
        span_in_spacings = float(x_max - x_min) / max_spacing
        if not math.isfinite(span_in_spacings):
            raise InvalidWavelengthError(
                'wavelength {} too small for domain [{}, {}]'
                .format(wavelength, x_min, x_max))
        n_intervals = int(math.ceil(span_in_spacings))
    if n_intervals < MIN_INTERVALS:
        raise InvalidDomainError(
            '{} knot intervals is below the minimum of {} for a cubic basis'
            .format(n_intervals, MIN_INTERVALS))
    if sample_count is not None:
        free_count = n_intervals + DEGREE - 2
        if free_count > sample_count:
            raise InvalidDomainError(
                '{} knot intervals give {} free coefficients for only {} '
                'samples'.format(n_intervals, free_count, sample_count))
    return n_intervals


def plan_knots(x_min, x_max, wavelength=None, node_count=0,
               node_interval_ratio=DEFAULT_NODE_INTERVAL_RATIO,
               sample_count=None):
    """Construct an open-uniform cubic knot vector over [x_min, x_max]

    The endpoints are repeated ORDER times.  Returns a read-only
    array of length n_intervals + 2 * ORDER - 1.  See count_intervals
    for sample_count.

    """
    n_intervals = count_intervals(
        x_min, x_max,
        wavelength=wavelength,
        node_count=node_count,
        node_interval_ratio=node_interval_ratio,
        sample_count=sample_count)
    nodes = np.linspace(x_min, x_max, n_intervals + 1)
    knots = np.concatenate(([x_min] * DEGREE, nodes, [x_max] * DEGREE))
    LOG.debug('{} intervals of width {} over [{}, {}]'
              .format(n_intervals, (x_max - x_min) / n_intervals,
                      x_min, x_max))
    knots.flags.writeable = False
    return knots
