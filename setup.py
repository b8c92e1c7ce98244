"""
Setup script for lbm_flow_tutorials package.
"""

from setuptools import setup, find_packages

setup(
    name="lbm_flow_tutorials",
    version="0.1.0",
    description="Lattice Boltzmann tutorial flows: density perturbations and Poiseuille channel",
    author="Andrey",
    packages=find_packages(include=["lbmflow", "lbmflow.*", "visualization", "simulations"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20",
        "numba>=0.56",
        "matplotlib>=3.5",
        "pillow>=9.1",
    ],
    extras_require={
        "dev": ["pytest>=7.0", "black", "flake8"],
    },
)
