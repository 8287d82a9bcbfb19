"""Pivot computation - bounding-box center of a set of geometries.

Also owns the synthetic pivot marker: a non-rotatable Point feature that
shows where the pivot is and is excluded from rotation by identity.
"""
from typing import Iterable, Optional

from feature_rotate.constants import PIVOT_FEATURE_ID
from feature_rotate.models.coordinate import Coordinate
from feature_rotate.models.feature import Feature
from feature_rotate.models.geometry import Point
from feature_rotate.utils import extent as extent_utils


def center_of_extent(extent) -> Coordinate:
    """Midpoint of an extent [min_x, min_y, max_x, max_y]."""
    x = extent[0] + (extent[2] - extent[0]) / 2
    y = extent[1] + (extent[3] - extent[1]) / 2
    return Coordinate(x, y)


def center_of(geometries: Iterable) -> Coordinate:
    """Center of the union of the geometries' extents.

    Args:
        geometries: Non-empty iterable of Geometry objects

    Returns:
        Coordinate of the bounding-box center

    Raises:
        ValueError: If no geometry is given
    """
    bounds = extent_utils.create_empty()
    count = 0
    for geometry in geometries:
        extent_utils.extend(bounds, geometry.get_extent())
        count += 1
    if count == 0:
        raise ValueError("Cannot compute a pivot from an empty set of geometries")
    return center_of_extent(bounds)


def create_pivot_marker() -> Feature:
    """New pivot marker feature (no geometry until the first refresh)."""
    return Feature(feature_id=PIVOT_FEATURE_ID)


def is_pivot_marker(feature: Feature, marker: Optional[Feature] = None) -> bool:
    """True if ``feature`` is the pivot marker, by object identity or id."""
    if marker is not None and feature is marker:
        return True
    return feature.get_id() == PIVOT_FEATURE_ID
