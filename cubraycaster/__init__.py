"""A grid-based first-person raycaster: .cub scene parsing, XPM textures and a pygame window."""

__version__ = "0.1.0"
__all__ = ["__version__"]