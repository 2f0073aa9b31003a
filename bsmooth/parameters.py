"""Spline parameters from YAML files and command-line options

A parameter file has a "spline" section, for instance:

  spline:
    wavelength: 4.0
    boundary_condition: zero-second-derivative
    step: 2

"""

import yaml

import bsmooth.knots as knots_mod
import bsmooth.spline as spline_mod
from bsmooth.boundary import BoundaryCondition


DEFAULT_PARAMETERS = {
    'wavelength': None,
    'nodes': 0,
    'boundary_condition': spline_mod.DEFAULT_BOUNDARY_CONDITION,
    'step': 0,
    'node_interval_ratio': knots_mod.DEFAULT_NODE_INTERVAL_RATIO,
}


def load_parameters(parameter_file):
    """Load spline parameters from a YAML file

    Values missing from the file take their defaults from
    DEFAULT_PARAMETERS.

    """
    document = yaml.safe_load(parameter_file)
    if not isinstance(document, dict) or 'spline' not in document:
        raise ValueError(
            '"spline" section is required in parameters; got {}'
            .format(document))
    section = document['spline'] or {}
    if not isinstance(section, dict):
        raise ValueError(
            '"spline" section must be a mapping; got {}'.format(section))
    return merge_parameters(DEFAULT_PARAMETERS, **section)


def merge_parameters(base, **overrides):
    """Copy of parameters in base, updated with overrides

    Overrides that are None are ignored, so that unset command-line
    options leave file values in place.  Numeric values may be given
    as strings.  Raises ValueError for unknown parameter names, an
    invalid boundary condition or a value that is not a number.

    """
    unknown = set(overrides) - set(DEFAULT_PARAMETERS)
    if unknown:
        raise ValueError(
            'unknown spline parameters {}; expected some of {}'
            .format(sorted(unknown), sorted(DEFAULT_PARAMETERS)))
    parameters = dict(base)
    parameters.update(
        (key, value) for key, value in overrides.items()
        if value is not None)
    parameters['boundary_condition'] = BoundaryCondition.coerce(
        parameters['boundary_condition'])
    for key, convert in (('wavelength', float),
                         ('node_interval_ratio', float),
                         ('nodes', int),
                         ('step', int)):
        value = parameters[key]
        if value is None:
            continue
        try:
            parameters[key] = convert(value)
        except TypeError as error:
            raise ValueError(
                '{} must be a number, got {!r}'.format(key, value)
            ) from error
    parameters['nodes'] = parameters['nodes'] or 0
    parameters['step'] = parameters['step'] or 0
    return parameters
