"""
D2Q9 lattice Boltzmann block lattice and the setup of the tutorial flows.
"""

__version__ = "0.1.0"
