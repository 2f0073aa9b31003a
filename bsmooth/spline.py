"""Least-squares cubic B-spline smoothing

A SplineBasis holds the knots and basis values for one set of
abscissas and may be shared by any number of FittedSplines, each
of which owns the coefficients for one set of ordinates.  Neither
object raises on bad input: construction either succeeds, or the
object reports ok() == False and keeps the reason in .error.

"""

import logging

import numpy as np

import bsmooth.banded as banded_mod
import bsmooth.basis as basis_mod
import bsmooth.knots as knots_mod
import bsmooth.normal_equations as normal_equations_mod
from bsmooth.boundary import BoundaryCondition, BoundaryReduction
from bsmooth.evaluate import PiecewiseRepresentation
from bsmooth.exceptions import BSplineError, FitFailedError


DEFAULT_BOUNDARY_CONDITION = BoundaryCondition.ZERO_SECOND_DERIVATIVE
LOG = logging.getLogger('bsmooth.spline')


class SplineBasis:
    """Cubic B-spline basis over a fixed set of abscissas

    * x are the sample abscissas, strictly increasing
    * wavelength is the smoothing scale, in units of x; variation on
      shorter scales is attenuated by the fit
    * node_count, if positive, is the number of nodes (distinct knots,
      including both ends) and overrides the wavelength
    * node_interval_ratio is the largest allowed node spacing as a
      fraction of the wavelength
    * log receives diagnostic messages at DEBUG level

    x is copied; the basis is immutable once constructed.

    """
    def __init__(self, x, wavelength=None, node_count=0,
                 node_interval_ratio=knots_mod.DEFAULT_NODE_INTERVAL_RATIO,
                 log=None):
        self.log = LOG if log is None else log
        self._cache = None
        self._error = None
        try:
            x = knots_mod.validate_abscissas(x)
            knots = knots_mod.plan_knots(
                x[0], x[-1],
                wavelength=wavelength,
                node_count=node_count,
                node_interval_ratio=node_interval_ratio,
                sample_count=len(x))
            self._cache = basis_mod.build_basis(knots, x)
        except BSplineError as error:
            self._error = error
            self.log.debug('spline basis setup failed: {}'.format(error))
        else:
            self.log.debug(
                'spline basis: {} samples, {} nodes, node spacing {}, '
                'wavelength {}'.format(
                    self.sample_count, len(self.nodes),
                    self.node_spacing, wavelength))

    def ok(self):
        """Whether the basis was constructed successfully"""
        return self._cache is not None

    @property
    def error(self):
        """Exception that caused construction to fail, or None"""
        return self._error

    @property
    def cache(self):
        """BasisCache of the sample abscissas"""
        if self._cache is None:
            raise FitFailedError(
                'spline basis setup failed: {}'.format(self._error))
        return self._cache

    @property
    def knots(self):
        """Knot vector, with end knots repeated"""
        return self.cache.knots

    @property
    def nodes(self):
        """Distinct knots, both ends included"""
        return self.cache.knots[knots_mod.DEGREE:-knots_mod.DEGREE]

    @property
    def n_intervals(self):
        """Number of knot intervals"""
        return len(self.nodes) - 1

    @property
    def node_spacing(self):
        """Distance between adjacent nodes"""
        return (self.x_max - self.x_min) / self.n_intervals

    @property
    def x_min(self):
        """Left end of domain"""
        return self.cache.knots[0]

    @property
    def x_max(self):
        """Right end of domain"""
        return self.cache.knots[-1]

    @property
    def x(self):
        """Sample abscissas"""
        return self.cache.x

    @property
    def sample_count(self):
        """Number of samples the basis was built on"""
        return self.cache.sample_count

    @property
    def basis_count(self):
        """Number of basis functions (spline coefficients)"""
        return self.cache.basis_count

    def fit(self, y, weights=None,
            boundary_condition=DEFAULT_BOUNDARY_CONDITION, log=None):
        """Fit ordinates y on this basis; returns a FittedSpline"""
        return FittedSpline(self, y,
                            weights=weights,
                            boundary_condition=boundary_condition,
                            log=log)


class FittedSpline:
    """Smoothing spline fitted to samples on a SplineBasis

    * basis is a SplineBasis; it is not modified
    * y are the ordinates, one per basis sample
    * weights are optional non-negative sample weights, default 1
    * boundary_condition is a BoundaryCondition, or anything
      BoundaryCondition.coerce accepts
    * log receives diagnostic messages at DEBUG level, default the
      log of the basis

    The coefficients minimize the weighted sum of squared residuals
    subject to the boundary condition.

    """
    def __init__(self, basis, y, weights=None,
                 boundary_condition=DEFAULT_BOUNDARY_CONDITION, log=None):
        self.log = basis.log if log is None else log
        self.basis = basis
        self._representations = None
        self._error = None
        self._variance = None
        self.boundary_condition = None
        if not basis.ok():
            self._error = basis.error
            self.log.debug('not fitting on failed basis: {}'
                           .format(basis.error))
            return
        try:
            self.boundary_condition = BoundaryCondition.coerce(
                boundary_condition)
            cache = basis.cache
            y, weights = normal_equations_mod.validate_samples(
                cache, y, weights)
            reduction = BoundaryReduction(self.boundary_condition, cache)
            equations = normal_equations_mod.assemble(
                cache, y, weights, reduction)
            coefficients = reduction.expand(
                banded_mod.solve_normal_equations(equations))
        except BSplineError as error:
            self._error = error
            self.log.debug('spline fit failed: {}'.format(error))
            return
        coefficients.flags.writeable = False
        spline = PiecewiseRepresentation(
            cache.knots, coefficients, knots_mod.DEGREE)
        slope = spline.derivative()
        self._representations = (spline, slope, slope.derivative())
        residual = cache.combine(coefficients) - y
        self._variance = (weights * residual ** 2).sum() / weights.sum()
        self.log.debug('fitted {} coefficients with boundary condition {}; '
                       'residual variance {}'
                       .format(len(coefficients),
                               self.boundary_condition.name,
                               self._variance))

    @classmethod
    def from_samples(cls, x, y, wavelength=None, node_count=0,
                     weights=None,
                     boundary_condition=DEFAULT_BOUNDARY_CONDITION,
                     node_interval_ratio=knots_mod.DEFAULT_NODE_INTERVAL_RATIO,
                     log=None):
        """Build a basis on x and fit y in one step

        See SplineBasis and FittedSpline for the arguments.

        """
        basis = SplineBasis(x,
                            wavelength=wavelength,
                            node_count=node_count,
                            node_interval_ratio=node_interval_ratio,
                            log=log)
        return cls(basis, y,
                   weights=weights,
                   boundary_condition=boundary_condition,
                   log=log)

    def ok(self):
        """Whether the fit succeeded"""
        return self._representations is not None

    @property
    def error(self):
        """Exception that caused the fit to fail, or None"""
        return self._error

    def _check_ok(self):
        if self._representations is None:
            raise FitFailedError(
                'spline fit failed: {}'.format(self._error))

    @property
    def coefficients(self):
        """B-spline coefficients, one per basis function"""
        self._check_ok()
        return self._representations[0].coefficients

    @property
    def variance(self):
        """Weighted mean squared residual at the samples"""
        self._check_ok()
        return self._variance

    def domain(self):
        """End points of spline domain (x_start, x_end)"""
        return (self.basis.x_min, self.basis.x_max)

    def __call__(self, x, der=0):
        """Evaluate der'th derivative of spline at x

        der may be 0, 1 or 2.  Arguments outside the domain are
        clamped to the nearest end of the domain.  Returns a float for
        scalar x and an array otherwise.

        """
        self._check_ok()
        if der not in (0, 1, 2):
            raise ValueError(
                'derivative order must be 0, 1 or 2, got {}'.format(der))
        x_min, x_max = self.domain()
        outside = (np.asarray(x) < x_min) | (np.asarray(x) > x_max)
        if np.any(outside):
            self.log.debug('clamping {} arguments to [{}, {}]'
                           .format(np.count_nonzero(outside), x_min, x_max))
        result = self._representations[der](x)
        if np.ndim(result) == 0:
            return float(result)
        return result

    def evaluate(self, x):
        """Value of the spline at x"""
        return self(x)

    def slope(self, x):
        """First derivative of the spline at x"""
        return self(x, der=1)

    def curvature(self, x):
        """Second derivative of the spline at x"""
        return self(x, der=2)
