"""
BGK Collision

Single-relaxation-time collision used by the block lattice:

    f_out = f - omega * (f - f_eq)

The relaxation time tau = 1/omega fixes the lattice viscosity,

    nu = c_s^2 * (tau - 0.5)

with c_s^2 = 1/3 and dt = 1 in lattice units. Stability requires
tau > 0.5, i.e. 0 < omega < 2.
"""

import numpy as np
from numba import njit, prange
from .lattice import CS2


def tau_from_viscosity(nu, cs2=CS2):
    """
    Relaxation time from lattice viscosity: tau = nu / c_s^2 + 0.5.

    Affine in ``nu``; this is how the flow parameters turn a Reynolds
    number into the engine's relaxation parameter.
    """
    return nu / cs2 + 0.5


def viscosity_from_tau(tau, cs2=CS2):
    """Lattice viscosity from relaxation time, nu = c_s^2 * (tau - 0.5)."""
    validate_tau(tau)
    return cs2 * (tau - 0.5)


def validate_tau(tau, name="tau"):
    """
    Check that a relaxation time is in the stable range.

    Raises
    ------
    ValueError
        If tau <= 0.5 (non-positive viscosity)
    """
    if not tau > 0.5:
        raise ValueError(
            f"{name} must be > 0.5 for stability (got {tau}). "
            f"This corresponds to nu > 0."
        )
    return tau


def validate_omega(omega):
    """
    Check a relaxation frequency; stable BGK needs 0 < omega < 2.

    Returns
    -------
    omega : float
    """
    if not 0.0 < omega < 2.0:
        raise ValueError(
            f"omega must lie in (0, 2) for stability (got {omega}). "
            f"This corresponds to tau = 1/omega > 0.5."
        )
    return float(omega)


def bgk_collision(f, f_eq, omega):
    """
    NumPy BGK collision.

    Parameters
    ----------
    f : ndarray
        Populations, shape (Q, ny, nx)
    f_eq : ndarray
        Equilibrium populations, same shape
    omega : float
        Relaxation frequency

    Returns
    -------
    f_out : ndarray
        Post-collision populations
    """
    validate_omega(omega)
    return f - omega * (f - f_eq)


@njit(parallel=True, cache=True)
def _bgk_kernel(f, f_eq, omega, f_out):
    q, ny, nx = f.shape

    for j in prange(ny):
        for i in range(nx):
            for k in range(q):
                f_out[k, j, i] = f[k, j, i] - omega * (f[k, j, i] - f_eq[k, j, i])


def bgk_collision_fast(f, f_eq, omega):
    """Numba version of :func:`bgk_collision`."""
    validate_omega(omega)
    f_out = np.empty_like(f)
    _bgk_kernel(np.ascontiguousarray(f), np.ascontiguousarray(f_eq), omega, f_out)
    return f_out
