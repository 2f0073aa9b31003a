"""Test code for command-line interface

"""

import logging
import os

import numpy as np

import pytest

from bsmooth.test import conftest
import bsmooth.plot_spline as spline_plot_mod
import bsmooth.user_interface as cli_mod


def test_get_version(capfd):
    """Invoking bsmooth --version returns version and exits with 0

    """
    with pytest.raises(SystemExit) as exception:
        cli_mod.main(['--version'])
    assert exception.type == SystemExit
    assert exception.value.code == 0
    out, _ = capfd.readouterr()
    with open(
            os.path.join(
                os.path.dirname(__file__),
                os.pardir,
                'VERSION.txt'), 'rt') as version_file:
        version = version_file.read()
    assert out.strip() == version.strip()


@pytest.mark.parametrize('argv', [
    ['--help'],
    ['smooth', '--help'],
    ['plot', '--help'],
])
def test_help(argv):
    """Invoking bsmooth help exits with code 0

    """
    with pytest.raises(SystemExit) as exception:
        cli_mod.main(argv)
    assert exception.type == SystemExit
    assert exception.value.code == 0


def test_no_task(capsys):
    """Invoking bsmooth without a task prints help and exits with 0

    """
    with pytest.raises(SystemExit) as exception:
        cli_mod.main([])
    assert exception.value.code == 0
    out, _ = capsys.readouterr()
    assert 'smooth' in out


def test_smooth(tmp_path):
    """'bsmooth smooth' writes a table with a row per sample and midpoint

    """
    output_path = tmp_path / 'smoothed.txt'
    status = cli_mod.main([
        'smooth',
        '-i', conftest.get_sample_file_path('triangle.txt'),
        '-o', str(output_path),
        '-w', '4',
        '-b', '2',
        '--logfile', str(tmp_path / 'log.txt')])
    assert status == 0
    lines = output_path.read_text().splitlines()
    assert lines[0].split() == ['x', 'y', 'spline(x)', 'slope(spline(x))']
    table = np.array([line.split() for line in lines[1:]], dtype=float)
    assert table.shape == (19, 4)
    assert np.array_equal(table[:, 0], np.arange(0.0, 9.5, 0.5))


def test_smooth_with_parameter_file(tmp_path):
    """Parameters may come from a YAML file

    """
    output_path = tmp_path / 'smoothed.txt'
    status = cli_mod.main([
        'smooth',
        '-i', conftest.get_sample_file_path('cubic.txt'),
        '-o', str(output_path),
        '-p', conftest.get_sample_file_path('parameters.yml'),
        '--logfile', str(tmp_path / 'log.txt')])
    assert status == 0
    table = np.loadtxt(str(output_path), skiprows=1)
    # Abscissas are written in their original units
    assert table[0, 0] == 100.0
    assert table[-1, 0] == 109.0
    # Zero first derivative at both ends
    assert abs(table[0, 3]) < 1e-4
    assert abs(table[-1, 3]) < 1e-4


def test_smooth_with_subsampling(tmp_path):
    """The step option thins the samples before fitting

    """
    output_path = tmp_path / 'smoothed.txt'
    status = cli_mod.main([
        'smooth',
        '-i', conftest.get_sample_file_path('triangle.txt'),
        '-o', str(output_path),
        '-n', '3',
        '-s', '3',
        '--logfile', str(tmp_path / 'log.txt')])
    assert status == 0
    table = np.loadtxt(str(output_path), skiprows=1)
    assert np.array_equal(table[0::2, 0], [0, 3, 6, 9])


def test_failed_fit(tmp_path):
    """A fit that fails gives exit status 1 and an error message

    """
    log_path = tmp_path / 'log.txt'
    status = cli_mod.main([
        'smooth',
        '-i', conftest.get_sample_file_path('triangle.txt'),
        '-o', str(tmp_path / 'smoothed.txt'),
        '-n', '60',
        '--logfile', str(log_path)])
    assert status == 1
    assert 'Spline setup failed' in log_path.read_text()


def test_wavelength_required(tmp_path):
    """Smoothing without a wavelength or node count is an error

    """
    with pytest.raises(SystemExit) as exception:
        cli_mod.main([
            'smooth',
            '-i', conftest.get_sample_file_path('triangle.txt'),
            '-o', str(tmp_path / 'smoothed.txt')])
    assert exception.value.code == 2


def test_bad_boundary_condition(tmp_path):
    """Boundary condition degrees above 2 are rejected

    """
    with pytest.raises(SystemExit) as exception:
        cli_mod.main([
            'smooth',
            '-i', conftest.get_sample_file_path('triangle.txt'),
            '-o', str(tmp_path / 'smoothed.txt'),
            '-w', '4',
            '-b', '3'])
    assert exception.value.code == 2


def test_plot(monkeypatch, tmp_path):
    """'bsmooth plot' draws the spline without error

    """
    shown = []
    monkeypatch.setattr(spline_plot_mod.plt, 'show',
                        lambda: shown.append(True))
    status = cli_mod.main([
        'plot',
        '-i', conftest.get_sample_file_path('triangle.txt'),
        '-w', '4',
        '--slope',
        '--n-points', '50',
        '--logfile', str(tmp_path / 'log.txt')])
    spline_plot_mod.plt.close('all')
    assert status == 0
    assert shown == [True]


@pytest.mark.parametrize('index, level, is_clipped', [
    (0, logging.ERROR, False),
    (2, logging.INFO, False),
    (3, logging.DEBUG, False),
    (5, logging.DEBUG, True),
])
def test_get_verbosity(index, level, is_clipped):
    """Verbosity flags map to logging levels

    """
    assert cli_mod.get_verbosity(index) == (level, is_clipped)


def test_malformed_input(caplog, tmp_path):
    """A sample file that cannot be parsed gives exit status 1

    """
    input_path = tmp_path / 'samples.txt'
    input_path.write_text('0 1\n1 one\n2 3\n')
    with caplog.at_level(logging.ERROR, logger='bsmooth.user_interface'):
        status = cli_mod.main([
            'smooth',
            '-i', str(input_path),
            '-o', str(tmp_path / 'smoothed.txt'),
            '-w', '4',
            '--logfile', str(tmp_path / 'log.txt')])
    assert status == 1
    assert 'line 2' in caplog.text
    assert 'samples.txt' in caplog.text
