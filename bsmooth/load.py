"""Load samples for smoothing from text files

"""

import logging

import numpy as np


LOG = logging.getLogger('bsmooth.load')


def read_samples(infile):
    """Read x, y samples from a text file

    Each line holds two whitespace-separated floats, x and y; further
    columns are ignored.  Blank lines and lines starting with '#' are
    skipped.  Returns (x, y) as float arrays in file order.

    """
    x = []
    y = []
    for line_number, line in enumerate(infile, start=1):
        fields = line.split()
        if not fields or fields[0].startswith('#'):
            continue
        if len(fields) < 2:
            raise ValueError(
                'line {}: expected x and y, got {!r}'
                .format(line_number, line.rstrip()))
        try:
            x_value, y_value = float(fields[0]), float(fields[1])
        except ValueError as error:
            raise ValueError(
                'line {}: {}'.format(line_number, error)) from error
        x.append(x_value)
        y.append(y_value)
    LOG.info('read {} samples'.format(len(x)))
    return (np.array(x, dtype=float), np.array(y, dtype=float))


def subsample(x, y, step):
    """Keep every step'th sample, starting with the first

    A step of 0 or 1 keeps all samples.

    """
    if len(x) != len(y):
        raise ValueError(
            f'Argument lengths unequal: {len(x)} != {len(y)}'
        )
    if step is None or step <= 1:
        return (x, y)
    LOG.info('subsampling {} samples with step {}'.format(len(x), step))
    return (x[::step], y[::step])
