"""Plot samples with their smoothing spline

"""

import numpy as np

import matplotlib.pyplot as plt

import bsmooth.load as load_mod
import bsmooth.smooth as smooth_mod


def plot_spline(infile, parameters, n_points, show_slope=False):
    """Plot samples in infile and their smoothing spline

    If show_slope is set, the slope of the spline is drawn against a
    second y axis.  Returns the FittedSpline; nothing is plotted if
    the fit failed.

    """
    x, y = load_mod.read_samples(infile)
    x, y = load_mod.subsample(x, y, parameters['step'])
    spline, origin = smooth_mod.fit_samples(x, y, parameters)
    if not spline.ok():
        return spline

    fig = plt.figure()
    axes = fig.add_subplot(1, 1, 1)
    axes.set_xlabel('x')
    axes.set_ylabel('y')
    axes.plot(x, y, 'b.', label='samples')
    x_grid, y_grid = grid_spline(spline, n_points, origin)
    axes.plot(x_grid, y_grid, 'r-', label='spline')
    axes.legend(loc='best')
    if show_slope:
        slope_axes = axes.twinx()
        slope_axes.set_ylabel('slope')
        slope_axes.plot(
            *grid_spline(spline, n_points, origin, der=1),
            'g--')

    plt.show()
    return spline


def grid_spline(spline, n_points, origin=0.0, der=0):
    """Evaluate der'th derivative of spline on a regular grid

    Returns (x, values) with x spanning the spline domain, shifted
    by origin.

    """
    x_min, x_max = spline.domain()
    x_grid = np.linspace(x_min, x_max, n_points, dtype=float)
    return (x_grid + origin, spline(x_grid, der=der))
