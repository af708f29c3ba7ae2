"""Building blocks for molecular docking: matrices, geometry, quaternions, conformations, local optimizers, scoring tables and PDB/PDBQT utilities."""

__version__ = "0.1.0"