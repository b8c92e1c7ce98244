"""
Flow Parameters

Conversion from the dimensionless description of an incompressible flow
(Reynolds number, reference velocity, domain extent) to lattice units.

With a reference length resolved by N cells and a reference velocity U
in lattice units:

    delta_x = 1 / N
    delta_t = delta_x * U
    nu      = U * N / Re
    tau     = nu / c_s^2 + 0.5
    omega   = 1 / tau
"""

import math
import os
from dataclasses import dataclass

from .collision import tau_from_viscosity

LOG_FILE_NAME = "simulation_log.dat"


def round_to_int(value):
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class FlowParameters:
    """
    Immutable lattice-unit parameters of an incompressible flow.

    Parameters
    ----------
    lattice_u : float
        Reference velocity in lattice units, 0 < U < 1
    reynolds : float
        Reynolds number, > 0
    resolution : int
        Number of cells per reference length, >= 1
    lx, ly : float
        Domain extent in units of the reference length

    Raises
    ------
    ValueError
        On any non-physical input
    """

    lattice_u: float
    reynolds: float
    resolution: int
    lx: float = 1.0
    ly: float = 1.0

    def __post_init__(self):
        if not self.reynolds > 0:
            raise ValueError(f"Reynolds number must be > 0, got {self.reynolds}")
        if isinstance(self.resolution, bool) or int(self.resolution) != self.resolution:
            raise ValueError(f"resolution must be an integer, got {self.resolution}")
        if self.resolution < 1:
            raise ValueError(f"resolution must be >= 1, got {self.resolution}")
        if not self.lx > 0 or not self.ly > 0:
            raise ValueError(
                f"Domain extents must be > 0, got lx={self.lx}, ly={self.ly}"
            )
        if not 0 < self.lattice_u < 1:
            raise ValueError(
                f"lattice_u must lie in (0, 1), got {self.lattice_u}"
            )
        object.__setattr__(self, "resolution", int(self.resolution))

    @property
    def nx(self):
        return round_to_int(self.lx * self.resolution)

    @property
    def ny(self):
        return round_to_int(self.ly * self.resolution)

    @property
    def delta_x(self):
        return 1.0 / self.resolution

    @property
    def delta_t(self):
        """Dimensionless time covered by one lattice step."""
        return self.delta_x * self.lattice_u

    @property
    def lattice_nu(self):
        return self.lattice_u * self.resolution / self.reynolds

    @property
    def tau(self):
        return tau_from_viscosity(self.lattice_nu)

    @property
    def omega(self):
        return 1.0 / self.tau

    @property
    def relaxation_parameter(self):
        """Relaxation frequency handed to the BGK dynamics."""
        return self.omega

    def n_step(self, t):
        """
        Number of lattice steps covering the dimensionless interval ``t``.

        Rounded to the nearest integer and never less than one.
        """
        if not t > 0:
            raise ValueError(f"Time interval must be > 0, got {t}")
        return max(1, round_to_int(t / self.delta_t))

    def describe(self, title):
        lines = [
            title,
            "",
            f"Velocity in lattice units: u={self.lattice_u}",
            f"Reynolds number:           Re={self.reynolds}",
            f"Lattice resolution:        N={self.resolution}",
            f"Relaxation frequency:      omega={self.omega}",
            f"Extent of the system:      lx={self.lx}",
            f"Extent of the system:      ly={self.ly}",
            f"Grid size:                 nx={self.nx}, ny={self.ny}",
            f"Grid spacing deltaX:       dx={self.delta_x}",
            f"Time step deltaT:          dt={self.delta_t}",
        ]
        return "\n".join(lines) + "\n"


def write_log_file(parameters, title, output_dir):
    """
    Write the parameter summary of a run to ``output_dir``.

    Returns
    -------
    path : str
        Path of the written log file
    """
    path = os.path.join(output_dir, LOG_FILE_NAME)
    with open(path, "w") as fh:
        fh.write(parameters.describe(title))
    return path
