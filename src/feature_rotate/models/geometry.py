"""
Feature Rotate - Planar Geometries

Numpy-backed geometry types used as feature shapes:
- Point: a single position
- LineString: an open sequence of positions
- Polygon: an exterior ring plus optional interior rings (holes)

Every geometry stores its positions as one or more (N, 2) float arrays
("parts") and supports in-place rotation about an anchor, deep cloning,
extent computation and tolerance-based hit testing.

This module is pure domain logic - no UI dependencies.
"""

import copy
import math
from abc import ABC, abstractmethod
from typing import List

import numpy as np

from feature_rotate.utils import extent as extent_utils


def _as_part(positions) -> np.ndarray:
    """Convert a sequence of (x, y) positions to an (N, 2) float array."""
    part = np.array(positions, dtype=float)
    if part.ndim != 2 or part.shape[1] != 2:
        raise ValueError(f"Expected a sequence of (x, y) positions, got shape {part.shape}")
    return part


def _distance_to_part(part: np.ndarray, x: float, y: float) -> float:
    """Shortest distance from (x, y) to the polyline through ``part``."""
    if len(part) == 1:
        return math.hypot(part[0, 0] - x, part[0, 1] - y)

    start = part[:-1]
    segment = part[1:] - start
    offset = np.array([x, y]) - start

    length_sq = (segment ** 2).sum(axis=1)
    safe_length_sq = np.where(length_sq > 0, length_sq, 1.0)
    t = np.where(length_sq > 0, (offset * segment).sum(axis=1) / safe_length_sq, 0.0)
    t = np.clip(t, 0.0, 1.0)

    closest = start + segment * t[:, None]
    distances = np.hypot(closest[:, 0] - x, closest[:, 1] - y)
    return float(distances.min())


def _ring_contains(ring: np.ndarray, x: float, y: float) -> bool:
    """Even-odd ray casting test; the ring may be open or closed."""
    xi, yi = ring[:, 0], ring[:, 1]
    xj, yj = np.roll(xi, 1), np.roll(yi, 1)
    crosses = (yi > y) != (yj > y)
    with np.errstate(divide='ignore', invalid='ignore'):
        x_at_y = (xj - xi) * (y - yi) / (yj - yi) + xi
    return bool(np.count_nonzero(crosses & (x < x_at_y)) % 2)


class Geometry(ABC):
    """Abstract base class for planar geometries.

    Subclasses must implement:
    - get_type(): geometry type name
    - get_coordinates(): nested Python lists of positions
    - set_coordinates(): replace all positions
    - intersects_coordinate(): hit test with tolerance
    """

    def __init__(self):
        self._parts: List[np.ndarray] = []

    @abstractmethod
    def get_type(self) -> str:
        pass

    @abstractmethod
    def get_coordinates(self):
        pass

    @abstractmethod
    def set_coordinates(self, coordinates):
        pass

    @abstractmethod
    def intersects_coordinate(self, coordinate, tolerance: float = 0.0) -> bool:
        """Test whether ``coordinate`` touches this geometry.

        Args:
            coordinate: Position (x, y) in map units
            tolerance: Extra distance in map units counted as a hit

        Returns:
            bool: True if the coordinate hits the geometry
        """
        pass

    def rotate(self, angle: float, anchor):
        """Rotate in place about ``anchor``.

        Positive angles rotate counter-clockwise in a y-up frame. An angle of
        exactly zero leaves every position untouched.

        Args:
            angle: Rotation in radians
            anchor: Pivot position (x, y)
        """
        if angle == 0:
            return
        anchor_x, anchor_y = anchor
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        for part in self._parts:
            dx = part[:, 0] - anchor_x
            dy = part[:, 1] - anchor_y
            part[:, 0] = dx * cos_a - dy * sin_a + anchor_x
            part[:, 1] = dx * sin_a + dy * cos_a + anchor_y

    def clone(self) -> 'Geometry':
        """Deep copy: the clone shares no arrays with this geometry."""
        geometry = copy.copy(self)
        geometry._parts = [part.copy() for part in self._parts]
        return geometry

    def get_extent(self):
        """Bounding extent [min_x, min_y, max_x, max_y] of all positions."""
        bounds = extent_utils.create_empty()
        for part in self._parts:
            if len(part) == 0:
                continue
            mins = part.min(axis=0)
            maxs = part.max(axis=0)
            extent_utils.extend(bounds, [float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])])
        return bounds

    def equals(self, other) -> bool:
        """Exact (bit-for-bit) positional equality with another geometry."""
        if not isinstance(other, Geometry) or other.get_type() != self.get_type():
            return False
        if len(other._parts) != len(self._parts):
            return False
        return all(np.array_equal(a, b) for a, b in zip(self._parts, other._parts))

    def almost_equals(self, other, tolerance: float = 1e-9) -> bool:
        """Positional equality within ``tolerance`` per ordinate."""
        if not isinstance(other, Geometry) or other.get_type() != self.get_type():
            return False
        if len(other._parts) != len(self._parts):
            return False
        return all(a.shape == b.shape and np.allclose(a, b, rtol=0.0, atol=tolerance)
                   for a, b in zip(self._parts, other._parts))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.get_coordinates()!r})"


class Point(Geometry):
    """Single position."""

    def __init__(self, coordinates):
        super().__init__()
        self.set_coordinates(coordinates)

    def get_type(self) -> str:
        return 'Point'

    def get_coordinates(self):
        return self._parts[0][0].tolist()

    def set_coordinates(self, coordinates):
        x, y = coordinates
        self._parts = [_as_part([(x, y)])]

    def intersects_coordinate(self, coordinate, tolerance: float = 0.0) -> bool:
        x, y = coordinate
        return _distance_to_part(self._parts[0], x, y) <= tolerance


class LineString(Geometry):
    """Open polyline through two or more positions."""

    def __init__(self, coordinates):
        super().__init__()
        self.set_coordinates(coordinates)

    def get_type(self) -> str:
        return 'LineString'

    def get_coordinates(self):
        return self._parts[0].tolist()

    def set_coordinates(self, coordinates):
        part = _as_part(coordinates)
        if len(part) < 2:
            raise ValueError("LineString needs at least two positions")
        self._parts = [part]

    def intersects_coordinate(self, coordinate, tolerance: float = 0.0) -> bool:
        x, y = coordinate
        return _distance_to_part(self._parts[0], x, y) <= tolerance


class Polygon(Geometry):
    """Polygon made of an exterior ring and optional holes.

    Rings are given as sequences of positions; closing the ring (repeating
    the first position) is optional.
    """

    def __init__(self, coordinates):
        super().__init__()
        self.set_coordinates(coordinates)

    @classmethod
    def from_extent(cls, extent) -> 'Polygon':
        """Rectangle covering ``extent``, as a closed counter-clockwise ring."""
        min_x, min_y, max_x, max_y = extent
        return cls([[
            (min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y), (min_x, min_y)
        ]])

    def get_type(self) -> str:
        return 'Polygon'

    def get_coordinates(self):
        return [ring.tolist() for ring in self._parts]

    def set_coordinates(self, coordinates):
        rings = [_as_part(ring) for ring in coordinates]
        if not rings or len(rings[0]) < 3:
            raise ValueError("Polygon needs an exterior ring with at least three positions")
        self._parts = rings

    def get_exterior(self) -> np.ndarray:
        return self._parts[0]

    def intersects_coordinate(self, coordinate, tolerance: float = 0.0) -> bool:
        x, y = coordinate
        exterior, holes = self._parts[0], self._parts[1:]
        if _ring_contains(exterior, x, y) and not any(_ring_contains(hole, x, y) for hole in holes):
            return True
        # Boundary and near-boundary hits
        closed = [np.vstack([ring, ring[:1]]) for ring in self._parts]
        return any(_distance_to_part(ring, x, y) <= tolerance for ring in closed)
