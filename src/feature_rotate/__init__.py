"""Feature Rotate - pointer-driven rotation of map features about their center."""

__version__ = '1.0.0'
