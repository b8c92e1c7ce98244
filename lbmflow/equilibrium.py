"""
Equilibrium Distribution Functions

Second-order Maxwell-Boltzmann equilibrium for the D2Q9 lattice:

    f_i^eq = w_i * rho * [1 + (e_i . u)/c_s^2 + (e_i . u)^2/(2*c_s^4) - u^2/(2*c_s^2)]

Every initialization routine of the block lattice and the velocity
boundary condition reset populations through these functions.
"""

import numpy as np
from numba import njit, prange
from .lattice import EX, EY, W, CS2, CS4, Q


def compute_equilibrium(rho, ux, uy):
    """
    Equilibrium populations for arrays of density and velocity.

    Works for any matching shapes of ``rho``, ``ux`` and ``uy``; the
    population index is prepended, so an ``(ny, nx)`` field gives
    ``(Q, ny, nx)`` and a flat list of ``n`` cells gives ``(Q, n)``.

    Parameters
    ----------
    rho : ndarray
        Density
    ux, uy : ndarray
        Velocity components

    Returns
    -------
    f_eq : ndarray
        Equilibrium populations, shape ``(Q,) + rho.shape``
    """
    rho = np.asarray(rho, dtype=np.float64)
    ux = np.asarray(ux, dtype=np.float64)
    uy = np.asarray(uy, dtype=np.float64)

    f_eq = np.empty((Q,) + rho.shape, dtype=np.float64)
    u_sq = ux * ux + uy * uy

    for i in range(Q):
        eu = EX[i] * ux + EY[i] * uy
        f_eq[i] = W[i] * rho * (
            1.0
            + eu / CS2
            + (eu * eu) / (2.0 * CS4)
            - u_sq / (2.0 * CS2)
        )

    return f_eq


@njit(parallel=True, cache=True)
def _equilibrium_kernel(rho, ux, uy, f_eq, ex, ey, w, cs2, cs4):
    q, ny, nx = f_eq.shape

    for j in prange(ny):
        for i in range(nx):
            rho_ij = rho[j, i]
            ux_ij = ux[j, i]
            uy_ij = uy[j, i]
            u_sq = ux_ij * ux_ij + uy_ij * uy_ij

            for k in range(q):
                eu = ex[k] * ux_ij + ey[k] * uy_ij
                f_eq[k, j, i] = w[k] * rho_ij * (
                    1.0
                    + eu / cs2
                    + (eu * eu) / (2.0 * cs4)
                    - u_sq / (2.0 * cs2)
                )


def compute_equilibrium_fast(rho, ux, uy):
    """
    Numba version of :func:`compute_equilibrium` for ``(ny, nx)`` fields.

    Used once per time step by the collision of the block lattice.
    """
    ny, nx = rho.shape
    f_eq = np.empty((Q, ny, nx), dtype=np.float64)

    _equilibrium_kernel(
        np.ascontiguousarray(rho, dtype=np.float64),
        np.ascontiguousarray(ux, dtype=np.float64),
        np.ascontiguousarray(uy, dtype=np.float64),
        f_eq, EX.astype(np.float64), EY.astype(np.float64), W, CS2, CS4,
    )

    return f_eq


def equilibrium_single_site(rho, ux, uy):
    """
    Equilibrium populations of one cell, shape ``(Q,)``.

    Used to seed a box at one constant (rho, u) state.
    """
    return compute_equilibrium(np.float64(rho), np.float64(ux), np.float64(uy))
