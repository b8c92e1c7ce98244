"""
Poiseuille Channel Flow

Channel flow driven by velocity boundaries. The parabolic profile

    u_x(y) = 4 * U * (y - y^2),    y in [0, 1]

is prescribed on the whole perimeter of the block and used as the initial
state, so the flow stays on the analytical solution while the density
settles.

The block has N rows per channel height, rows iy = 0 .. N - 1 at
y = iy / N. The bottom row is a no-slip wall, but the top row lies at
y = 1 - 1/N and is held at the small velocity 4 * U * (N - 1) / N**2
(about 0.04 U for N = 100), not at rest.

Defaults: U = 0.01, Re = 100, N = 100 cells per channel height, a 2 x 1
channel, run until T = 3.1 with a 600 x 600 frame every 0.1 time units.
"""

import argparse
import os
import time

import numpy as np

from lbmflow.block_lattice import BlockLattice2D
from lbmflow.domain import channel_setup
from lbmflow.initializers import poiseuille_velocity
from lbmflow.parameters import FlowParameters, write_log_file
from lbmflow.simulation import physical_time_loop
from visualization.image_writer import ImageWriter


def get_analytical_profile(parameters):
    """
    Analytical streamwise velocity on every lattice row.

    Returns
    -------
    y : ndarray
        Row indices
    ux_analytical : ndarray
    """
    y = np.arange(parameters.ny)
    return y, np.array([poiseuille_velocity(iy, parameters) for iy in y])


def get_numerical_profile(lattice, x_loc=None):
    """Streamwise velocity along a vertical line, mid-channel by default."""
    if x_loc is None:
        x_loc = lattice.nx // 2
    ux, _ = lattice.compute_velocity()
    return np.arange(lattice.ny), ux[:, x_loc]


def compute_profile_error(lattice, parameters):
    """
    L2 difference between the numerical and analytical profiles.

    Returns
    -------
    l2_error : float
    l2_relative : float
    """
    _, ux_analytical = get_analytical_profile(parameters)
    _, ux_numerical = get_numerical_profile(lattice)

    diff = ux_numerical - ux_analytical
    l2_error = np.sqrt(np.mean(diff**2))
    l2_relative = l2_error / np.sqrt(np.mean(ux_analytical**2))

    return l2_error, l2_relative


def run_poiseuille_channel(lattice_u=1e-2, reynolds=100.0, resolution=100,
                           lx=2.0, ly=1.0, max_t=3.1, save_interval=0.1,
                           image_size=(600, 600), output_dir='./tmp/',
                           colormap='leeloo', verbose=True):
    """
    Set up and run the Poiseuille channel.

    Parameters
    ----------
    lattice_u : float
        Reference (maximum) velocity in lattice units
    reynolds : float
        Reynolds number
    resolution : int
        Cells per channel height
    lx, ly : float
        Channel length and height in units of the height
    max_t : float
        Dimensionless simulated time
    save_interval : float
        Dimensionless time between frames
    image_size : tuple of int, optional
        Frame size in pixels; None for one pixel per cell
    output_dir : str
        Directory receiving the frames and the log file (created if missing)
    colormap : str
        Colour map of the frames
    verbose : bool
        Print progress information

    Returns
    -------
    lattice : BlockLattice2D
    parameters : FlowParameters
    frames : list of str
    """
    parameters = FlowParameters(lattice_u, reynolds, resolution, lx, ly)
    os.makedirs(output_dir, exist_ok=True)
    write_log_file(parameters, "Poiseuille flow", output_dir)

    if verbose:
        print("Poiseuille Channel Flow")
        print("=" * 50)
        print(f"Grid: {parameters.nx} x {parameters.ny}")
        print(f"Omega: {parameters.omega:.4f}, Viscosity: {parameters.lattice_nu:.6f}")
        print(f"Time step: {parameters.delta_t:.2e}, steps: "
              f"{int(np.ceil(max_t / parameters.delta_t))}")
        print()

    lattice = BlockLattice2D(parameters.nx, parameters.ny, parameters.relaxation_parameter)
    channel_setup(lattice, parameters)

    loop = physical_time_loop(
        lattice, parameters, max_t, save_interval,
        image_writer=ImageWriter(colormap, output_dir),
        image_size=image_size,
        verbose=verbose,
    )

    start = time.perf_counter()
    loop.run()
    elapsed = time.perf_counter() - start

    if verbose:
        l2_error, l2_relative = compute_profile_error(lattice, parameters)
        print()
        print(f"Simulation time: {elapsed:.2f}s")
        print(f"Steps: {loop.step}, frames: {len(loop.frames)}")
        print(f"L2 Error: {l2_error:.6e}")
        print(f"L2 Relative Error: {l2_relative:.4%}")

    return lattice, parameters, loop.frames


def _parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Poiseuille channel flow")
    ap.add_argument("--lattice-u", type=float, default=1e-2)
    ap.add_argument("--reynolds", type=float, default=100.0)
    ap.add_argument("--resolution", type=int, default=100)
    ap.add_argument("--lx", type=float, default=2.0)
    ap.add_argument("--ly", type=float, default=1.0)
    ap.add_argument("--max-t", type=float, default=3.1)
    ap.add_argument("--save-interval", type=float, default=0.1)
    ap.add_argument("--image-size", type=int, nargs=2, default=(600, 600),
                    metavar=("WIDTH", "HEIGHT"))
    ap.add_argument("--colormap", default="leeloo")
    ap.add_argument("--output-dir", default="./tmp/")
    ap.add_argument("--quiet", action="store_true")
    return ap.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    run_poiseuille_channel(
        lattice_u=args.lattice_u, reynolds=args.reynolds,
        resolution=args.resolution, lx=args.lx, ly=args.ly,
        max_t=args.max_t, save_interval=args.save_interval,
        image_size=tuple(args.image_size), output_dir=args.output_dir,
        colormap=args.colormap, verbose=not args.quiet,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
