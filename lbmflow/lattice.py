"""
D2Q9 Lattice Descriptor

Velocity set, weights and the per-edge population groups used by the
boundary conditions of the tutorial lattices.
"""
import numpy as np

# D2Q9 lattice velocities
#     6   2   5
#       \ | /
#     3 - 0 - 1
#       / | \
#     7   4   8

EX = np.array([0, 1, 0, -1, 0, 1, -1, -1, 1], dtype=np.int32)
EY = np.array([0, 0, 1, 0, -1, 1, 1, -1, -1], dtype=np.int32)

W = np.array([4/9, 1/9, 1/9, 1/9, 1/9, 1/36, 1/36, 1/36, 1/36], dtype=np.float64)

CS2 = 1.0 / 3.0
CS4 = CS2 * CS2

Q = 9

# Populations at rest or moving tangentially to each edge of the block
TANGENTIAL = {
    'left': (0, 2, 4),
    'right': (0, 2, 4),
    'bottom': (0, 1, 3),
    'top': (0, 1, 3),
}

# Populations leaving the domain through each edge (known after streaming)
OUTGOING = {
    'left': (3, 6, 7),
    'right': (1, 5, 8),
    'bottom': (4, 7, 8),
    'top': (2, 5, 6),
}
