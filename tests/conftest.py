"""
Shared fixtures for Feature Rotate tests.

Provides reusable square features, a scriptable fake map host and a
pointer event factory.
"""
import sys
import os
import pytest

# Run Qt headless when no display is available
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from feature_rotate.components.pointer_interaction import MapHost
from feature_rotate.models.events import MapPointerEvent
from feature_rotate.models.feature import Feature, FeatureCollection
from feature_rotate.models.geometry import Polygon


# ── Sample geometry ─────────────────────────────────────────────────────

# Axis-aligned 20x20 square centered on the origin, closed ring
SQUARE_RING = [(-10, -10), (10, -10), (10, 10), (-10, 10), (-10, -10)]

# Same square rotated 90° clockwise about the origin, vertex for vertex
SQUARE_RING_CW90 = [(-10, 10), (-10, -10), (10, -10), (10, 10), (-10, 10)]


def make_square(feature_id='square', offset=(0, 0), size=10):
    """Square feature of half-width ``size`` centered on ``offset``"""
    ox, oy = offset
    ring = [(ox - size, oy - size), (ox + size, oy - size), (ox + size, oy + size),
            (ox - size, oy + size), (ox - size, oy - size)]
    return Feature(Polygon([ring]), {'name': feature_id}, feature_id=feature_id)


class FakeHost(MapHost):
    """Map host whose hit test returns a scripted feature.

    Records every indicate_rotatable() call as (rotatable, grabbing).
    """

    def __init__(self, hit=None, layer=None):
        self.hit = hit
        self.layer = layer
        self.layers = [layer] if layer is not None else []
        self.indications = []
        self.hit_tests = []

    def hit_test(self, pixel, predicate, layer_filter=None, hit_tolerance=0):
        self.hit_tests.append((pixel, hit_tolerance))
        if self.hit is None:
            return None
        if layer_filter is not None and not layer_filter(self.layer):
            return None
        return self.hit if predicate(self.hit, self.layer) else None

    def indicate_rotatable(self, rotatable, grabbing=False):
        self.indications.append((rotatable, grabbing))

    def get_layers(self):
        return list(self.layers)


@pytest.fixture
def square_feature():
    """20x20 square around the origin with id 'square'"""
    return make_square()


@pytest.fixture
def two_squares():
    """Collection of two squares whose combined extent is centered at (20, 0)"""
    return FeatureCollection([make_square('left', offset=(0, 0)), make_square('right', offset=(40, 0))])


@pytest.fixture
def fake_host(square_feature):
    """Host that reports the square under every pixel"""
    return FakeHost(hit=square_feature)


@pytest.fixture
def make_event():
    """Factory: make_event(type, coordinate, host=None, pixel=None)"""
    def _make(event_type, coordinate, host=None, pixel=None, original_event=None):
        return MapPointerEvent(
            type=event_type,
            pixel=pixel if pixel is not None else tuple(coordinate),
            coordinate=coordinate,
            map=host,
            original_event=original_event,
        )
    return _make
