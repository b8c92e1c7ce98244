"""
Field Initializers

Per-cell density and velocity functionals used to seed initial conditions
and to prescribe boundary velocities on a block lattice.

Every functional offers two queries:

    velocity(ix, iy)              -> (ux, uy)
    density_and_velocity(ix, iy)  -> (rho, (ux, uy))

The lattice calls the first one when setting boundary velocities and the
second one when initializing at equilibrium.
"""

from dataclasses import dataclass
from enum import Enum

from .geometry import Box2D
from .parameters import FlowParameters

# Relative density excess of the perturbed region
DEFAULT_DELTA_RHO = 1.0e-4


def poiseuille_velocity(iy, parameters):
    """
    Streamwise velocity of the parabolic channel profile at row ``iy``.

        u(y) = 4 * U * (y - y^2),   y = iy / N

    Zero at y = 0 and y = 1, maximum U at y = 0.5. With ny = N rows the top
    row sits at y = (N - 1) / N, so it moves at about 4 * U / N instead of
    being a no-slip wall.
    """
    y = iy / parameters.resolution
    return 4.0 * parameters.lattice_u * (y - y * y)


@dataclass(frozen=True)
class PoiseuilleVelocity:
    """Parabolic channel profile bound to a set of flow parameters."""

    parameters: FlowParameters

    def velocity(self, ix, iy):
        return poiseuille_velocity(iy, self.parameters), 0.0

    def density_and_velocity(self, ix, iy):
        return 1.0, self.velocity(ix, iy)


class PerturbationShape(Enum):
    SQUARE = "square"
    DISK = "disk"


@dataclass(frozen=True)
class DensityPerturbation:
    """
    Fluid at rest with uniform density except on a square or a disk.

    Parameters
    ----------
    center_x, center_y : int
        Centre of the perturbed region
    radius : int
        Half-width of the square, or radius of the disk
    shape : PerturbationShape
    rho0 : float
        Background density
    delta_rho : float
        Density excess inside the region
    strict_disk : bool
        For the disk, whether cells at exactly ``radius`` from the centre
        are left out (``d^2 < r^2``) or included (``d^2 <= r^2``)
    """

    center_x: int
    center_y: int
    radius: int
    shape: PerturbationShape = PerturbationShape.SQUARE
    rho0: float = 1.0
    delta_rho: float = DEFAULT_DELTA_RHO
    strict_disk: bool = True

    def __post_init__(self):
        if self.radius < 0:
            raise ValueError(f"radius must be >= 0, got {self.radius}")
        object.__setattr__(self, "shape", PerturbationShape(self.shape))

    @classmethod
    def for_grid(cls, nx, ny, shape=PerturbationShape.SQUARE, **kwargs):
        """Region of radius nx/6 centred at (nx/3, ny/4), as in the tutorials."""
        return cls(center_x=nx // 3, center_y=ny // 4, radius=nx // 6,
                   shape=shape, **kwargs)

    def box(self):
        """The square region as a Box2D."""
        return Box2D(
            self.center_x - self.radius, self.center_x + self.radius,
            self.center_y - self.radius, self.center_y + self.radius,
        )

    def contains(self, ix, iy):
        if self.shape is PerturbationShape.SQUARE:
            return self.box().contains(ix, iy)

        dist_sq = (ix - self.center_x) ** 2 + (iy - self.center_y) ** 2
        r_sq = self.radius * self.radius
        if self.strict_disk:
            return dist_sq < r_sq
        return dist_sq <= r_sq

    def density(self, ix, iy):
        if self.contains(ix, iy):
            return self.rho0 + self.delta_rho
        return self.rho0

    def velocity(self, ix, iy):
        return 0.0, 0.0

    def density_and_velocity(self, ix, iy):
        return self.density(ix, iy), self.velocity(ix, iy)
