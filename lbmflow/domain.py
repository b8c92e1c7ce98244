"""
Domain Setup

Boundary and initial conditions of the tutorial flows. Each setup ends
with exactly one call to ``lattice.initialize()``.
"""

from .initializers import PoiseuilleVelocity, PerturbationShape


def channel_setup(lattice, parameters):
    """
    Poiseuille channel: parabolic velocity on the whole perimeter and as
    the initial state, with unit density.

    Parameters
    ----------
    lattice : BlockLattice2D
    parameters : FlowParameters
    """
    profile = PoiseuilleVelocity(parameters)

    lattice.set_velocity_condition_on_block_boundaries()
    lattice.set_boundary_velocity(lattice.bounding_box, profile)

    lattice.initialize_at_equilibrium_from(lattice.bounding_box, profile)

    lattice.initialize()


def define_initial_density(lattice, perturbation, two_pass=True):
    """
    Fluid at rest with a slight density excess on a sub-region.

    The whole lattice is first set to ``rho0``. A square perturbation is
    then applied as a second uniform initialization on its box when
    ``two_pass`` is set; otherwise, and always for a disk, the
    per-cell functional is evaluated over the whole lattice.

    Parameters
    ----------
    lattice : BlockLattice2D
    perturbation : DensityPerturbation
    two_pass : bool
    """
    u0 = (0.0, 0.0)
    lattice.initialize_at_equilibrium(lattice.bounding_box, perturbation.rho0, u0)

    if two_pass and perturbation.shape is PerturbationShape.SQUARE:
        # Only the part of the square lying on the lattice is perturbed
        box = perturbation.box().intersection(lattice.bounding_box)
        if box is not None:
            lattice.initialize_at_equilibrium(
                box, perturbation.rho0 + perturbation.delta_rho, u0
            )
    else:
        lattice.initialize_at_equilibrium_from(lattice.bounding_box, perturbation)

    lattice.initialize()
