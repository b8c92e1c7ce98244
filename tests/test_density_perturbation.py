"""
Density Perturbation Tutorial Tests

Small periodic and bounded runs of the density perturbation program.
"""

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from simulations.density_perturbation import run_density_perturbation, main
from lbmflow.initializers import PerturbationShape


class TestDensityPerturbation:

    @pytest.mark.parametrize("shape", [PerturbationShape.SQUARE, PerturbationShape.DISK])
    def test_frames_and_steps(self, tmp_path, shape):
        lattice, frames = run_density_perturbation(
            nx=30, ny=30, max_iter=20, save_every=8, shape=shape,
            output_dir=str(tmp_path), verbose=False,
        )

        assert lattice.step_count == 20
        assert frames == ["u000000", "u000008", "u000016"]
        assert sorted(p.name for p in tmp_path.iterdir()) == [f + ".gif" for f in frames]

    def test_periodic_run_conserves_mass(self, tmp_path):
        lattice, _ = run_density_perturbation(
            nx=30, ny=30, max_iter=0, save_every=10,
            output_dir=str(tmp_path), verbose=False,
        )
        mass = lattice.total_mass()

        lattice, _ = run_density_perturbation(
            nx=30, ny=30, max_iter=50, save_every=10,
            output_dir=str(tmp_path), verbose=False,
        )

        assert np.isclose(lattice.total_mass(), mass, rtol=1e-12)

    def test_wave_spreads(self, tmp_path):
        lattice, _ = run_density_perturbation(
            nx=36, ny=36, max_iter=15, save_every=100, delta_rho=1e-3,
            output_dir=str(tmp_path), verbose=False,
        )

        speed = lattice.compute_velocity_norm()
        assert np.all(np.isfinite(speed))
        assert speed.max() > 0.0
        assert speed.max() < 1e-2

    def test_bounded_axes(self, tmp_path):
        lattice, _ = run_density_perturbation(
            nx=24, ny=24, max_iter=10, save_every=5,
            periodic_x=False, periodic_y=False,
            output_dir=str(tmp_path), verbose=False,
        )

        assert not lattice.periodicity.x
        assert not lattice.periodicity.y
        assert np.all(np.isfinite(lattice.f))

    def test_creates_output_dir(self, tmp_path):
        out = tmp_path / "frames"
        run_density_perturbation(nx=12, ny=12, max_iter=1, save_every=1,
                                 output_dir=str(out), verbose=False)

        assert (out / "u000000.gif").exists()

    def test_verbose_summary(self, tmp_path, capsys):
        run_density_perturbation(nx=12, ny=12, max_iter=4, save_every=2,
                                 output_dir=str(tmp_path), verbose=True)

        out = capsys.readouterr().out
        assert "Density Perturbation (square)" in out
        assert "Writing GIF file at iT=2" in out
        assert "Frames written: 2" in out
        assert "Viscosity: 0.166667" in out
        assert "Mass drift:" in out

    def test_invalid_omega_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            run_density_perturbation(nx=12, ny=12, omega=2.5,
                                     output_dir=str(tmp_path), verbose=False)

    def test_cli(self, tmp_path):
        status = main([
            "--shape", "disk", "--nx", "18", "--ny", "18", "--max-iter", "6",
            "--save-every", "3", "--no-periodic-y", "--colormap", "fire",
            "--output-dir", str(tmp_path), "--quiet",
        ])

        assert status == 0
        assert sorted(p.name for p in tmp_path.iterdir()) == ["u000000.gif", "u000003.gif"]

    def test_cli_rejects_unknown_shape(self):
        with pytest.raises(SystemExit):
            main(["--shape", "triangle"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
