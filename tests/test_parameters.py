"""
Tests for the lattice-unit flow parameters.
"""

import dataclasses

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from lbmflow.parameters import FlowParameters, write_log_file, round_to_int, LOG_FILE_NAME


@pytest.fixture
def channel_parameters():
    """Parameters of the Poiseuille tutorial."""
    return FlowParameters(1e-2, 100.0, 100, 2.0, 1.0)


class TestDerivedQuantities:
    """Conversion to lattice units."""

    def test_grid_dimensions(self, channel_parameters):
        assert channel_parameters.nx == 200
        assert channel_parameters.ny == 100

    def test_grid_dimensions_are_rounded(self):
        p = FlowParameters(0.02, 50.0, 33, lx=1.5, ly=0.5)

        assert p.nx == 50     # 49.5 rounds away from zero
        assert p.ny == 17     # 16.5

    def test_viscosity_and_relaxation(self, channel_parameters):
        p = channel_parameters

        assert np.isclose(p.lattice_nu, 0.01)
        assert np.isclose(p.tau, 0.53)
        assert np.isclose(p.omega, 1.0 / 0.53)
        assert p.relaxation_parameter == p.omega

    def test_stability_bound(self, channel_parameters):
        p = channel_parameters

        assert p.lattice_nu > 0
        assert 0 < p.relaxation_parameter < 2

    def test_time_step(self, channel_parameters):
        assert np.isclose(channel_parameters.delta_x, 0.01)
        assert np.isclose(channel_parameters.delta_t, 1e-4)

    @pytest.mark.parametrize("u, re, n", [
        (1e-3, 1.0, 1), (0.05, 1000.0, 10), (0.5, 20.0, 400), (0.99, 1e6, 3),
    ])
    def test_positive_for_valid_inputs(self, u, re, n):
        p = FlowParameters(u, re, n)

        assert p.relaxation_parameter > 0
        assert p.tau > 0.5
        assert p.delta_t > 0

    def test_deterministic(self, channel_parameters):
        """Recomputing derived values gives identical results."""
        p = channel_parameters
        first = (p.nx, p.ny, p.omega, p.delta_t)
        second = (p.nx, p.ny, p.omega, p.delta_t)

        assert first == second
        assert FlowParameters(1e-2, 100.0, 100, 2.0, 1.0) == p

    def test_immutable(self, channel_parameters):
        with pytest.raises(dataclasses.FrozenInstanceError):
            channel_parameters.reynolds = 10.0


class TestNStep:
    """Dimensionless time to lattice steps."""

    def test_save_interval(self, channel_parameters):
        assert channel_parameters.n_step(0.1) == 1000

    def test_total_time(self, channel_parameters):
        assert channel_parameters.n_step(3.1) == 31000

    def test_at_least_one_step(self, channel_parameters):
        assert channel_parameters.n_step(1e-9) == 1

    @pytest.mark.parametrize("t", [0.0, -0.1])
    def test_non_positive_interval_rejected(self, channel_parameters, t):
        with pytest.raises(ValueError):
            channel_parameters.n_step(t)


class TestConfigurationErrors:
    """Invalid inputs are rejected at construction."""

    @pytest.mark.parametrize("kwargs", [
        dict(reynolds=0.0),
        dict(reynolds=-10.0),
        dict(resolution=0),
        dict(resolution=-5),
        dict(resolution=10.5),
        dict(lx=0.0),
        dict(ly=-1.0),
        dict(lattice_u=0.0),
        dict(lattice_u=1.0),
        dict(lattice_u=-0.01),
    ])
    def test_rejected(self, kwargs):
        values = dict(lattice_u=1e-2, reynolds=100.0, resolution=100, lx=2.0, ly=1.0)
        values.update(kwargs)

        with pytest.raises(ValueError):
            FlowParameters(**values)


class TestLogFile:
    """Run log with the parameter summary."""

    def test_write_log_file(self, channel_parameters, tmp_path):
        path = write_log_file(channel_parameters, "Poiseuille flow", str(tmp_path))

        assert path == os.path.join(str(tmp_path), LOG_FILE_NAME)
        text = open(path).read()
        assert text.startswith("Poiseuille flow")
        assert "Re=100.0" in text
        assert "N=100" in text
        assert "nx=200, ny=100" in text

    def test_missing_directory_raises(self, channel_parameters, tmp_path):
        with pytest.raises(OSError):
            write_log_file(channel_parameters, "x", str(tmp_path / "missing"))


def test_round_to_int():
    assert round_to_int(2.5) == 3
    assert round_to_int(-2.5) == -3
    assert round_to_int(2.4999) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
