"""
Feature Rotate - Azimuth Math

Pure functions for bearings and rotation angles used by the rotate
interaction:
- azimuth(): clockwise bearing from +Y, in degrees [0, 360)
- rotation_delta(): signed rotation (radians) between two bearings
- point_from_direction(): inverse of azimuth() at a given distance

Direction note: rotation_delta() is applied with Geometry.rotate(), which
is counter-clockwise for positive angles. A pointer sweeping clockwise about
the pivot therefore turns the geometry counter-clockwise, and the reverse.
The formula is kept as is because replayed drags depend on it.

No state and no UI dependencies.
"""

import math

from feature_rotate.models.coordinate import Coordinate


def azimuth(from_coordinate, to_coordinate) -> float:
    """Bearing from ``from_coordinate`` to ``to_coordinate`` in degrees.

    The quadrant is resolved explicitly from the signs of (dx, dy):

    - dx > 0, dy > 0: atan(dx / dy)
    - dx > 0, dy < 0: atan(dx / dy) + 180
    - dx < 0, dy < 0: atan(dx / dy) + 180
    - dx < 0, dy > 0: atan(dx / dy) + 360

    Axis-aligned vectors resolve to 0, 90, 180 or 270 (the limits of the
    quadrant rules) and a zero-length vector resolves to 0.

    Args:
        from_coordinate: Reference point (x, y)
        to_coordinate: Target point (x, y)

    Returns:
        Bearing in degrees, in the range [0, 360)
    """
    x1, y1 = from_coordinate
    x2, y2 = to_coordinate
    dx = x2 - x1
    dy = y2 - y1

    if dx == 0 and dy == 0:
        return 0.0
    if dy == 0:
        return 90.0 if dx > 0 else 270.0
    if dx == 0:
        return 0.0 if dy > 0 else 180.0

    angle = math.atan(dx / dy)
    if dx > 0 and dy > 0:
        # First quadrant
        pass
    elif dy < 0:
        # Second and third quadrants (south of the reference point)
        angle += math.pi
    else:
        # Fourth quadrant
        angle += 2 * math.pi

    degrees = math.degrees(angle)
    if degrees >= 360.0:
        degrees -= 360.0
    return degrees


def rotation_delta(start_azimuth: float, current_azimuth: float) -> float:
    """Rotation to apply to geometry for a pointer moving between bearings.

    Args:
        start_azimuth: Bearing (degrees) of the pointer when the drag started
        current_azimuth: Bearing (degrees) of the pointer now

    Returns:
        Angle in radians: -(start_azimuth - current_azimuth) * pi / 180

    Note:
        The resulting turn is opposite to the pointer's sweep about the
        pivot (e.g. pointer east -> north gives a 90 degree clockwise turn).
    """
    return -(start_azimuth - current_azimuth) * math.pi / 180


def point_from_direction(origin, azimuth_degrees: float, distance: float) -> Coordinate:
    """Point reached from ``origin`` travelling ``distance`` along a bearing.

    Negative bearings are wrapped by adding 360 and a bearing of exactly 360
    is treated as 0.

    Args:
        origin: Start point (x, y)
        azimuth_degrees: Bearing in degrees, clockwise from +Y
        distance: Distance in map units

    Returns:
        Coordinate of the destination point
    """
    x, y = origin
    theta = azimuth_degrees
    if theta < 0:
        theta = 360 + theta
    if theta == 360:
        theta = 0

    radians = math.radians(theta)
    return Coordinate(x + math.sin(radians) * distance, y + math.cos(radians) * distance)
