"""
Tests for pivot computation and the pivot marker.
"""
import pytest

from feature_rotate.constants import PIVOT_FEATURE_ID
from feature_rotate.models.coordinate import Coordinate
from feature_rotate.models.feature import Feature
from feature_rotate.models.geometry import Point, LineString, Polygon
from feature_rotate.services.pivot import center_of, center_of_extent, create_pivot_marker, is_pivot_marker

from conftest import SQUARE_RING


class TestCenterOf:

    def test_single_square(self):
        assert center_of([Polygon([SQUARE_RING])]) == Coordinate(0, 0)

    def test_union_of_extents(self):
        geometries = [Point((0, 0)), LineString([(10, 4), (20, 8)])]
        assert center_of(geometries) == Coordinate(10, 4)

    def test_single_point_is_its_own_center(self):
        assert center_of([Point((3.5, -2))]) == Coordinate(3.5, -2)

    def test_accepts_generator(self):
        center = center_of(g for g in [Point((0, 0)), Point((4, 4))])
        assert center == Coordinate(2, 2)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            center_of([])

    def test_center_of_extent(self):
        assert center_of_extent([-4, 2, 6, 10]) == Coordinate(1, 6)


class TestPivotMarker:

    def test_marker_has_reserved_id_and_no_geometry(self):
        marker = create_pivot_marker()
        assert marker.get_id() == PIVOT_FEATURE_ID
        assert marker.get_geometry() is None

    def test_identity_match(self):
        marker = create_pivot_marker()
        marker.set_id('renamed')
        assert is_pivot_marker(marker, marker)
        assert not is_pivot_marker(marker)

    def test_reserved_id_match(self):
        assert is_pivot_marker(Feature(Point((0, 0)), feature_id=PIVOT_FEATURE_ID))

    def test_ordinary_feature(self):
        assert not is_pivot_marker(Feature(Point((0, 0)), feature_id='a'), create_pivot_marker())
