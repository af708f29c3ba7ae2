[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dockcore"
version = "0.1.0"
description = "Building blocks for molecular docking: conformations, quaternions, local optimizers, tabulated scoring functions and PDB/PDBQT utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["docking", "molecular", "pdbqt", "pdb", "bfgs", "quaternion", "chemistry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dockcore-split = "dockcore.split:main"

[tool.hatch.build.targets.wheel]
packages = ["dockcore"]

[tool.pytest.ini_options]
addopts = "-ra"
