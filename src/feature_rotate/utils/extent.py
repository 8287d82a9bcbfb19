"""Bounding extent helpers.

An extent is a list ``[min_x, min_y, max_x, max_y]``. The empty extent is
``[inf, inf, -inf, -inf]`` so that extending it with any real extent yields
that extent.
"""
import math


def create_empty():
    """Return a new empty extent."""
    return [math.inf, math.inf, -math.inf, -math.inf]


def is_empty(extent) -> bool:
    """True if the extent covers no area and no point."""
    return extent[2] < extent[0] or extent[3] < extent[1]


def extend(extent, other):
    """Grow ``extent`` in place to include ``other`` and return it."""
    if other[0] < extent[0]:
        extent[0] = other[0]
    if other[1] < extent[1]:
        extent[1] = other[1]
    if other[2] > extent[2]:
        extent[2] = other[2]
    if other[3] > extent[3]:
        extent[3] = other[3]
    return extent


def get_width(extent) -> float:
    return extent[2] - extent[0]


def get_height(extent) -> float:
    return extent[3] - extent[1]


def contains_xy(extent, x, y, tolerance=0.0) -> bool:
    """Check whether (x, y) lies inside the extent grown by ``tolerance``."""
    return (extent[0] - tolerance <= x <= extent[2] + tolerance and
            extent[1] - tolerance <= y <= extent[3] + tolerance)
