"""Smooth sampled data and tabulate the smoothing spline

"""

import logging

import numpy as np

import bsmooth.load as load_mod
import bsmooth.spline as spline_mod


HEADER = ('x', 'y', 'spline(x)', 'slope(spline(x))')
COLUMN_WIDTHS = (10, 10, 15, 20)
LOG = logging.getLogger('bsmooth.smooth')


def smooth_samples(infile, outfile, parameters):
    """Fit a smoothing spline to samples in infile and tabulate it

    parameters is a mapping as returned by
    bsmooth.parameters.merge_parameters.  If the fit succeeds, a table
    of the spline and its slope is written to outfile.  Returns the
    FittedSpline, which the caller should check with ok().

    """
    x, y = load_mod.read_samples(infile)
    x, y = load_mod.subsample(x, y, parameters['step'])
    spline, origin = fit_samples(x, y, parameters)
    if spline.ok():
        write_table(outfile, x, y, spline, origin)
        LOG.debug('Variance: {}'.format(spline.variance))
    return spline


def fit_samples(x, y, parameters):
    """Fit a smoothing spline to x, y

    The spline is fitted on x relative to its first value; returns
    (spline, origin) where origin is the value to subtract from x
    before evaluating the spline.

    """
    LOG.info(
        'Using step interval {}, cutoff wavelength {}, number of nodes {}, '
        'node interval ratio {} and boundary condition {}'
        .format(parameters['step'],
                parameters['wavelength'],
                parameters['nodes'],
                parameters['node_interval_ratio'],
                parameters['boundary_condition'].name))
    origin = x[0] if len(x) else 0.0
    spline = spline_mod.FittedSpline.from_samples(
        x - origin, y,
        wavelength=parameters['wavelength'],
        node_count=parameters['nodes'],
        boundary_condition=parameters['boundary_condition'],
        node_interval_ratio=parameters['node_interval_ratio'])
    return (spline, origin)


def tabulate(x, y, spline, origin=0.0):
    """Spline value and slope at samples and midpoints between them

    Returns arrays (x, y, value, slope) with rows at each sample
    interleaved with rows at the midpoint of each pair of adjacent
    samples; y at a midpoint is the mean of the adjacent y values.

    """
    n_rows = 2 * len(x) - 1
    x_rows = np.empty(n_rows)
    y_rows = np.empty(n_rows)
    x_rows[0::2] = x
    y_rows[0::2] = y
    x_rows[1::2] = (x[:-1] + x[1:]) / 2
    y_rows[1::2] = (y[:-1] + y[1:]) / 2
    return (x_rows, y_rows,
            spline(x_rows - origin),
            spline(x_rows - origin, der=1))


def write_table(outfile, x, y, spline, origin=0.0):
    """Write spline table as whitespace-separated columns"""
    outfile.write(''.join(
        '{:>{}}'.format(name, width)
        for name, width in zip(HEADER, COLUMN_WIDTHS)) + '\n')
    for row in zip(*tabulate(x, y, spline, origin)):
        outfile.write(''.join(
            '{:>{}g}'.format(value, width)
            for value, width in zip(row, COLUMN_WIDTHS)) + '\n')
    outfile.flush()
