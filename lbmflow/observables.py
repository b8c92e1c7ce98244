"""
Macroscopic Observables

Moments of the populations and the derived scalar fields written to disk
by the tutorials.

    rho   = sum_i f_i
    rho*u = sum_i f_i * e_i
"""

import numpy as np
from numba import njit, prange
from .lattice import EX, EY, Q

# Below this density a cell is treated as empty and given zero velocity
RHO_FLOOR = 1e-10


def compute_density(f):
    """Density field, shape (ny, nx), from populations of shape (Q, ny, nx)."""
    return np.sum(f, axis=0)


def compute_velocity(f, rho=None):
    """
    Velocity field from populations.

    Parameters
    ----------
    f : ndarray
        Populations, shape (Q, ny, nx)
    rho : ndarray, optional
        Density field. Computed from ``f`` when omitted.

    Returns
    -------
    ux, uy : ndarray
        Velocity components, shape (ny, nx)
    """
    if rho is None:
        rho = compute_density(f)

    rho_ux = np.tensordot(EX.astype(np.float64), f, axes=(0, 0))
    rho_uy = np.tensordot(EY.astype(np.float64), f, axes=(0, 0))

    rho_safe = np.where(rho > RHO_FLOOR, rho, 1.0)
    ux = np.where(rho > RHO_FLOOR, rho_ux / rho_safe, 0.0)
    uy = np.where(rho > RHO_FLOOR, rho_uy / rho_safe, 0.0)

    return ux, uy


def compute_macroscopic(f):
    """Return ``(rho, ux, uy)`` computed with NumPy."""
    rho = compute_density(f)
    ux, uy = compute_velocity(f, rho)
    return rho, ux, uy


@njit(parallel=True, cache=True)
def _moments_kernel(f, rho, ux, uy, ex, ey, rho_floor):
    q, ny, nx = f.shape

    for j in prange(ny):
        for i in range(nx):
            rho_local = 0.0
            rho_ux = 0.0
            rho_uy = 0.0

            for k in range(q):
                f_k = f[k, j, i]
                rho_local += f_k
                rho_ux += f_k * ex[k]
                rho_uy += f_k * ey[k]

            rho[j, i] = rho_local

            if rho_local > rho_floor:
                ux[j, i] = rho_ux / rho_local
                uy[j, i] = rho_uy / rho_local
            else:
                ux[j, i] = 0.0
                uy[j, i] = 0.0


def compute_macroscopic_fast(f):
    """Numba version of :func:`compute_macroscopic`."""
    q, ny, nx = f.shape
    rho = np.empty((ny, nx), dtype=np.float64)
    ux = np.empty((ny, nx), dtype=np.float64)
    uy = np.empty((ny, nx), dtype=np.float64)

    _moments_kernel(np.ascontiguousarray(f), rho, ux, uy,
                    EX.astype(np.float64), EY.astype(np.float64), RHO_FLOOR)

    return rho, ux, uy


def compute_velocity_magnitude(ux, uy):
    """
    Velocity norm |u| = sqrt(ux^2 + uy^2).

    This is the field exported as image frames by every tutorial.
    """
    return np.sqrt(ux * ux + uy * uy)


def compute_vorticity(ux, uy, dx=1.0):
    """
    Vorticity du_y/dx - du_x/dy by central differences.

    One-sided differences are used on the first and last row/column, so
    the result is meaningful for both periodic and bounded lattices.
    """
    duy_dx = np.gradient(uy, dx, axis=1)
    dux_dy = np.gradient(ux, dx, axis=0)
    return duy_dx - dux_dy
