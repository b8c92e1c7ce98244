"""
Block Lattice

A regular 2D D2Q9 lattice with BGK dynamics. The tutorial programs only
talk to the solver through this object: they choose periodicity, seed
initial and boundary values, call :meth:`BlockLattice2D.initialize` once,
then alternate :meth:`BlockLattice2D.collide_and_stream` with snapshots of
:meth:`BlockLattice2D.compute_velocity_norm`.

Fields are stored as (Q, ny, nx) arrays; cell ``(ix, iy)`` is element
``[:, iy, ix]``.
"""

import numpy as np

from .geometry import Box2D
from .equilibrium import compute_equilibrium, compute_equilibrium_fast, equilibrium_single_site
from .observables import (
    compute_macroscopic_fast,
    compute_velocity_magnitude,
    compute_vorticity,
)
from .collision import bgk_collision_fast, validate_omega, viscosity_from_tau
from .streaming import stream
from .boundary import (
    create_perimeter_mask,
    velocity_boundary_density,
    apply_velocity_boundary,
)

MIN_BLOCK_SIZE = 3


class Periodicity:
    """Wrap-around flags of a lattice, axis 0 is x and axis 1 is y."""

    def __init__(self):
        self._flags = [False, False]

    def toggle(self, axis, flag):
        if axis not in (0, 1):
            raise ValueError(f"axis must be 0 (x) or 1 (y), got {axis}")
        self._flags[axis] = bool(flag)

    def toggle_all(self, flag):
        self._flags = [bool(flag), bool(flag)]

    def get(self, axis):
        return self._flags[axis]

    @property
    def x(self):
        return self._flags[0]

    @property
    def y(self):
        return self._flags[1]


class BlockLattice2D:
    """
    D2Q9 lattice of ``nx`` by ``ny`` cells with BGK collision.

    Parameters
    ----------
    nx, ny : int
        Number of cells along x and y (at least 3 each)
    omega : float
        BGK relaxation frequency, 0 < omega < 2

    Raises
    ------
    ValueError
        If the grid is too small or omega is outside the stable range
    """

    def __init__(self, nx, ny, omega):
        if nx < MIN_BLOCK_SIZE or ny < MIN_BLOCK_SIZE:
            raise ValueError(
                f"Lattice must be at least {MIN_BLOCK_SIZE}x{MIN_BLOCK_SIZE} "
                f"cells, got {nx}x{ny}"
            )
        self.nx = int(nx)
        self.ny = int(ny)
        self.omega = validate_omega(omega)
        self.periodicity = Periodicity()

        self.f = compute_equilibrium(
            np.ones((self.ny, self.nx)),
            np.zeros((self.ny, self.nx)),
            np.zeros((self.ny, self.nx)),
        )
        self.rho, self.ux, self.uy = compute_macroscopic_fast(self.f)

        # Velocity (Dirichlet) boundary nodes and their prescribed velocity
        self.velocity_nodes = np.zeros((self.ny, self.nx), dtype=bool)
        self.ux_bc = np.zeros((self.ny, self.nx), dtype=np.float64)
        self.uy_bc = np.zeros((self.ny, self.nx), dtype=np.float64)

        self.step_count = 0
        self._initialized = False

    @property
    def tau(self):
        return 1.0 / self.omega

    @property
    def viscosity(self):
        """Lattice kinematic viscosity of the BGK dynamics."""
        return viscosity_from_tau(self.tau)

    @property
    def bounding_box(self):
        return Box2D(0, self.nx - 1, 0, self.ny - 1)

    @property
    def is_initialized(self):
        return self._initialized

    def _check_domain(self, domain):
        if not domain.is_within(self.nx, self.ny):
            raise ValueError(
                f"{domain} lies outside the {self.nx}x{self.ny} lattice"
            )

    def initialize_at_equilibrium(self, domain, rho, u):
        """Set every cell of ``domain`` to equilibrium at constant (rho, u)."""
        self._check_domain(domain)
        ux, uy = u
        self.f[(slice(None),) + domain.slices()] = equilibrium_single_site(
            rho, ux, uy
        )[:, None, None]
        self._initialized = False

    def initialize_at_equilibrium_from(self, domain, functional):
        """
        Set each cell of ``domain`` to equilibrium at a per-cell state.

        ``functional.density_and_velocity(ix, iy)`` is called once per cell
        and must return ``(rho, (ux, uy))``. The states are gathered on the
        box and turned into populations with a single equilibrium call.
        """
        self._check_domain(domain)
        rho = np.empty((domain.ny, domain.nx), dtype=np.float64)
        ux = np.empty_like(rho)
        uy = np.empty_like(rho)
        for ix, iy in domain.cells():
            j, i = iy - domain.y0, ix - domain.x0
            rho[j, i], (ux[j, i], uy[j, i]) = functional.density_and_velocity(ix, iy)

        self.f[(slice(None),) + domain.slices()] = compute_equilibrium(rho, ux, uy)
        self._initialized = False

    def set_velocity_condition_on_block_boundaries(self):
        """Turn every perimeter cell into a velocity boundary node."""
        self.velocity_nodes |= create_perimeter_mask(self.nx, self.ny)
        self._initialized = False

    def set_boundary_velocity(self, domain, functional):
        """
        Prescribe the velocity of the boundary nodes inside ``domain``.

        ``functional.velocity(ix, iy)`` is called once per velocity boundary
        node and must return ``(ux, uy)``; other cells are left alone.
        """
        self._check_domain(domain)
        iy_nodes, ix_nodes = np.nonzero(self.velocity_nodes[domain.slices()])
        iy_nodes += domain.y0
        ix_nodes += domain.x0
        if ix_nodes.size == 0:
            self._initialized = False
            return

        u = np.array([functional.velocity(ix, iy)
                      for ix, iy in zip(ix_nodes.tolist(), iy_nodes.tolist())],
                     dtype=np.float64)
        self.ux_bc[iy_nodes, ix_nodes] = u[:, 0]
        self.uy_bc[iy_nodes, ix_nodes] = u[:, 1]
        self._initialized = False

    def initialize(self):
        """
        Consistency pass after the initial and boundary values are set.

        Recomputes the macroscopic fields from the populations and makes the
        lattice ready to step.
        """
        if not np.all(np.isfinite(self.f)):
            raise ValueError("Initial populations contain non-finite values")
        self.rho, self.ux, self.uy = compute_macroscopic_fast(self.f)
        self._initialized = True

    def collide_and_stream(self):
        """Advance the lattice by one time step."""
        if not self._initialized:
            raise RuntimeError(
                "Lattice must be initialized with initialize() before stepping"
            )

        rho, ux, uy = compute_macroscopic_fast(self.f)
        f_eq = compute_equilibrium_fast(rho, ux, uy)
        f_post = bgk_collision_fast(self.f, f_eq, self.omega)

        self.f = stream(f_post, self.periodicity.x, self.periodicity.y)

        if self.velocity_nodes.any():
            rho_bc = velocity_boundary_density(self.f, self.ux_bc, self.uy_bc)
            self.f = apply_velocity_boundary(
                self.f, self.velocity_nodes, rho_bc, self.ux_bc, self.uy_bc
            )

        self.rho, self.ux, self.uy = compute_macroscopic_fast(self.f)
        self.step_count += 1

    def compute_density(self):
        return self.rho.copy()

    def compute_velocity(self):
        return self.ux.copy(), self.uy.copy()

    def compute_velocity_norm(self):
        """Velocity magnitude, shape (ny, nx)."""
        return compute_velocity_magnitude(self.ux, self.uy)

    def compute_vorticity(self):
        return compute_vorticity(self.ux, self.uy)

    def total_mass(self):
        return float(np.sum(self.f))

    def __repr__(self):
        return (f"BlockLattice2D(nx={self.nx}, ny={self.ny}, omega={self.omega}, "
                f"periodic=({self.periodicity.x}, {self.periodicity.y}))")
