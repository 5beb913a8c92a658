"""Sparse voxel grids and level-set tools: sampling, CSG, filters, morphology, meshing and ray casting."""

__version__ = "0.1.0"