#!/usr/bin/python3

"""Installation script for bsmooth

"""

import glob
import os.path
import re

from setuptools import setup


SCRIPTS = glob.glob('bin/*[!~]')
with open('README.txt') as readme_file:
    LONG_DESCRIPTION = readme_file.read()
    del readme_file


def get_version():
    """Get project version

    """
    version_file_path = os.path.join(
        os.path.dirname(__file__),
        'bsmooth',
        'VERSION.txt')
    with open(version_file_path) as version_file:
        version_string = version_file.read().strip()
    version_string_re = re.compile('[0-9.]+')
    match = version_string_re.match(version_string)
    if match is None:
        raise ValueError(
            'version string "{}" does not match regexp "{}"'
            .format(version_string, version_string_re.pattern))
    return match.group(0)


setup(name='bsmooth',
      version=get_version(),
      description='Least-squares cubic B-spline smoothing',
      long_description=LONG_DESCRIPTION,
      packages=['bsmooth',
                'bsmooth.test'],
      package_data={'bsmooth': ['VERSION.txt'],
                    'bsmooth.test': ['sample_data/*.txt',
                                     'sample_data/*.yml']},
      python_requires='>=3.9',
      install_requires=['numpy',
                        'scipy',
                        'PyYAML',
                        'matplotlib'],
      extras_require={'test': ['pytest']},
      scripts=SCRIPTS)
