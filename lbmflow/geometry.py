"""
Sub-regions of a block lattice.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Box2D:
    """
    Axis-aligned rectangle of cells, bounds inclusive on both ends.

    ``Box2D(x0, x1, y0, y1)`` covers the cells ``x0 <= ix <= x1`` and
    ``y0 <= iy <= y1``.
    """

    x0: int
    x1: int
    y0: int
    y1: int

    def __post_init__(self):
        if self.x0 > self.x1 or self.y0 > self.y1:
            raise ValueError(
                f"Box2D bounds must satisfy x0 <= x1 and y0 <= y1, got {self}"
            )

    @property
    def nx(self):
        return self.x1 - self.x0 + 1

    @property
    def ny(self):
        return self.y1 - self.y0 + 1

    def contains(self, ix, iy):
        return self.x0 <= ix <= self.x1 and self.y0 <= iy <= self.y1

    def is_within(self, nx, ny):
        """True if the box lies inside an ``nx`` by ``ny`` grid."""
        return 0 <= self.x0 and self.x1 < nx and 0 <= self.y0 and self.y1 < ny

    def intersection(self, other):
        """Overlap with another box, or None if they are disjoint."""
        x0, x1 = max(self.x0, other.x0), min(self.x1, other.x1)
        y0, y1 = max(self.y0, other.y0), min(self.y1, other.y1)
        if x0 > x1 or y0 > y1:
            return None
        return Box2D(x0, x1, y0, y1)

    def cells(self):
        """Iterate over ``(ix, iy)`` with ``iy`` varying fastest."""
        for ix in range(self.x0, self.x1 + 1):
            for iy in range(self.y0, self.y1 + 1):
                yield ix, iy

    def slices(self):
        """Index of the box into an array of shape (..., ny, nx)."""
        return (slice(self.y0, self.y1 + 1), slice(self.x0, self.x1 + 1))

    def mask(self, nx, ny):
        """
        Boolean mask of the box on an ``nx`` by ``ny`` grid.

        Returns
        -------
        mask : ndarray
            Shape (ny, nx), True inside the box
        """
        mask = np.zeros((ny, nx), dtype=bool)
        mask[self.slices()] = True
        return mask
