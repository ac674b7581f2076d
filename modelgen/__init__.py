"""Generate cubes, spheres and cylinders, transform them and export them to OBJ, STL and glTF."""

__version__ = "0.1.0"

__all__ = ["__version__"]