[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sparsevox"
version = "0.1.0"
description = "Sparse voxel grids and level-set tools: sampling, CSG, filtering, morphology, meshing and ray casting."
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "level set", "sdf", "marching cubes", "sparse grid", "volume"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sparsevox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
