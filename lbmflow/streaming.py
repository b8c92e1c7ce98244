"""
Streaming Step

Propagation of populations along the lattice velocities,

    f_i(x + e_i, t + 1) = f_i^out(x, t)

Each axis of the block is either periodic (populations leaving one edge
re-enter at the opposite edge) or bounded. On a bounded axis nothing
enters from outside: the populations that would have come in keep their
post-collision value, to be overwritten by a boundary condition if one
is set on that edge.
"""

import numpy as np
from numba import njit, prange
from .lattice import EX, EY, Q


def stream_periodic(f):
    """
    Push streaming with wrap-around on both axes (np.roll).

    Parameters
    ----------
    f : ndarray
        Populations, shape (Q, ny, nx)

    Returns
    -------
    f_streamed : ndarray
    """
    f_out = np.empty_like(f)

    for i in range(Q):
        f_out[i] = np.roll(np.roll(f[i], EX[i], axis=1), EY[i], axis=0)

    return f_out


@njit(parallel=True, cache=True)
def _pull_periodic_kernel(f, f_out, ex, ey):
    q, ny, nx = f.shape

    for j in prange(ny):
        for i in range(nx):
            for k in range(q):
                i_src = (i - ex[k] + nx) % nx
                j_src = (j - ey[k] + ny) % ny
                f_out[k, j, i] = f[k, j_src, i_src]


def stream_periodic_fast(f):
    """Numba pull-scheme version of :func:`stream_periodic`."""
    f_out = np.empty_like(f)
    _pull_periodic_kernel(np.ascontiguousarray(f), f_out, EX, EY)
    return f_out


def stream(f, periodic_x=True, periodic_y=True):
    """
    Streaming with per-axis periodicity.

    Parameters
    ----------
    f : ndarray
        Post-collision populations, shape (Q, ny, nx)
    periodic_x, periodic_y : bool
        Wrap-around along each axis

    Returns
    -------
    f_streamed : ndarray
    """
    f_out = stream_periodic_fast(f)

    if not periodic_x:
        for i in range(Q):
            if EX[i] > 0:
                f_out[i, :, 0] = f[i, :, 0]
            elif EX[i] < 0:
                f_out[i, :, -1] = f[i, :, -1]

    if not periodic_y:
        for i in range(Q):
            if EY[i] > 0:
                f_out[i, 0, :] = f[i, 0, :]
            elif EY[i] < 0:
                f_out[i, -1, :] = f[i, -1, :]

    return f_out
