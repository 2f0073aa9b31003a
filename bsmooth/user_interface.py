"""User interface for Bsmooth

"""

import argparse
import logging
import os
import sys

import bsmooth.parameters as parameters_mod
import bsmooth.plot_spline as spline_plot_mod
import bsmooth.smooth as smooth_mod


LEVELS = [logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]
LOG = logging.getLogger('bsmooth.user_interface')


def main(argv):
    """CLI for Bsmooth

    """
    parser = create_parser()

    args = parser.parse_args(argv)
    if args.version:
        print(get_version())
        parser.exit()
    if args.task is None:
        parser.print_help()
        parser.exit()

    set_up_logging(args.logfile, args.verbosity)
    parameters = get_parameters(parser, args)

    try:
        if args.task == 'smooth':
            spline = smooth_mod.smooth_samples(
                infile=args.input,
                outfile=args.output,
                parameters=parameters)
        elif args.task == 'plot':
            spline = spline_plot_mod.plot_spline(
                infile=args.input,
                parameters=parameters,
                n_points=args.n_points,
                show_slope=args.slope)
        else:
            raise AssertionError('Bad task {}'.format(args.task))
    except ValueError as error:
        LOG.error('Reading samples from {} failed: {}'.format(
            args.input.name, error))
        return 1
    if not spline.ok():
        LOG.error('Spline setup failed: {}'.format(spline.error))
        return 1
    return 0


def create_parser():
    """Create bsmooth command-line parser and subparsers

    """
    parser = argparse.ArgumentParser(
        description='Least-squares cubic B-spline smoothing')
    parser.add_argument(
        '--version',
        help='Print version string and exit',
        action='store_true')

    subparsers = parser.add_subparsers(help='sub-command help',
                                       dest='task')
    smooth_parser = subparsers.add_parser(
        'smooth',
        help='Smooth x, y samples and tabulate the spline')
    add_fit_args(smooth_parser)
    add_smooth_args(smooth_parser)
    add_shared_args(smooth_parser)
    del smooth_parser

    plot_parser = subparsers.add_parser(
        'plot',
        help='Plot x, y samples with the smoothing spline')
    add_fit_args(plot_parser)
    add_plot_args(plot_parser)
    add_shared_args(plot_parser)
    del plot_parser

    return parser


def set_up_logging(logfile, verbosity):
    """Configure logging for bsmooth

    """
    loglevel, is_clipped = get_verbosity(verbosity)
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(stream=logfile,
                        level=loglevel)
    if is_clipped:
        LOG.warning('maximum verbosity exceeded, ignoring flag')


def get_parameters(parser, args):
    """Merge spline parameters from file and command line

    Command-line options take precedence over the parameter file.
    Exits through the parser if neither gives a wavelength or node
    count.

    """
    try:
        if args.parameters is not None:
            base = parameters_mod.load_parameters(args.parameters)
        else:
            base = parameters_mod.DEFAULT_PARAMETERS
        parameters = parameters_mod.merge_parameters(
            base,
            wavelength=args.wavelength,
            nodes=args.nodes,
            boundary_condition=args.bc_degree,
            step=args.step,
            node_interval_ratio=args.node_interval_ratio)
    except ValueError as error:
        parser.error(str(error))
    if parameters['wavelength'] is None and not parameters['nodes']:
        parser.error('a wavelength or number of nodes is required')
    return parameters


def add_shared_args(parser):
    """Add arguments shared across subparsers

    """
    parser.add_argument(
        '-v', '--verbose', dest='verbosity',
        action='count', default=0,
        help='Write more messages about what is being done')
    parser.add_argument(
        '--logfile',
        metavar='FILE',
        type=argparse.FileType('wt'),
        default=sys.stderr,
        help='File to write status messages, default stderr')


def add_fit_args(parser):
    """Add arguments that control the spline fit

    """
    parser.add_argument(
        '-i', '--input', metavar='FILE',
        type=argparse.FileType('rt'),
        default=sys.stdin,
        help='File of whitespace-separated x, y samples, default stdin')
    parser.add_argument(
        '-w', '--wavelength', type=float, default=None,
        help='Cutoff wavelength, in units of x')
    parser.add_argument(
        '-n', '--nodes', type=int, default=None,
        help='Number of nodes; overrides the wavelength if positive')
    parser.add_argument(
        '-b', '--bc-degree', type=int, choices=[0, 1, 2], default=None,
        help='Derivative that vanishes at the ends: 0 for value, '
        '1 for slope, 2 for curvature (default)')
    parser.add_argument(
        '-s', '--step', type=int, default=None,
        help='Use only every STEP\'th sample')
    parser.add_argument(
        '-r', '--node-interval-ratio', type=float, default=None,
        help='Largest node spacing as a fraction of the wavelength, '
        'default 0.5')
    parser.add_argument(
        '-p', '--parameters', metavar='YAML',
        type=argparse.FileType('rt'),
        help='YAML spline parameters')


def add_smooth_args(parser):
    """Add arguments for bsmooth smooth parser

    """
    parser.add_argument(
        '-o', '--output', metavar='FILE',
        help='Write output to file, default stdout',
        type=argparse.FileType('wt'),
        default=sys.stdout)


def add_plot_args(parser):
    """Add arguments for bsmooth plot parser

    """
    parser.add_argument(
        '--n-points', metavar='N', type=int,
        default=1000,
        help='Number of points at which to plot the spline')
    parser.add_argument(
        '--slope', action='store_true',
        help='Also plot the slope of the spline')


def get_verbosity(level_index):
    """Get verbosity of logging for an integer level_index

    Higher levels mean more verbose; the levels are:
      0: ERROR
      1: WARNING
      2: INFO
      3: DEBUG

    Returns a logging debug level and a flag for whether the
    level index was higher than the maximum.

    """
    if level_index >= len(LEVELS):
        level = LEVELS[-1]
        is_clipped = True
    else:
        level = LEVELS[level_index]
        is_clipped = False
    return (level, is_clipped)


def get_version():
    """Get project version

    """
    version_file_path = os.path.join(
        os.path.dirname(__file__),
        'VERSION.txt')
    with open(version_file_path) as version_file:
        return version_file.read().strip()
