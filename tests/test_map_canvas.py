"""
pytest-qt tests for the map canvas host widget.

These tests use qtbot to:
- Create a real MapCanvas
- Check pixel <-> coordinate conversion and hit testing
- Drive a rotation with synthesized mouse events
- Verify the rotatable cursor affordance
"""
import pytest
from PyQt5.QtCore import Qt, QEvent, QPointF
from PyQt5.QtGui import QMouseEvent

from feature_rotate.components.map_canvas import MapCanvas
from feature_rotate.components.pointer_interaction import MapHost, PointerInteraction
from feature_rotate.components.rotate_interaction import RotateInteraction
from feature_rotate.models.coordinate import Coordinate
from feature_rotate.models.vector_source import VectorSource

from conftest import SQUARE_RING_CW90, make_square


def _mouse(event_type, x, y, button=Qt.LeftButton, buttons=None):
    if buttons is None:
        buttons = button if event_type != QEvent.MouseButtonRelease else Qt.NoButton
    return QMouseEvent(event_type, QPointF(x, y), button, buttons, Qt.NoModifier)


@pytest.fixture
def canvas(qtbot):
    """200x200 canvas with the origin at the center pixel and 1 unit per pixel"""
    widget = MapCanvas()
    qtbot.addWidget(widget)
    widget.resize(200, 200)
    widget.set_center((0, 0))
    widget.set_resolution(1.0)
    return widget


@pytest.fixture
def square_layer(canvas):
    layer = VectorSource('data', [make_square()])
    canvas.add_layer(layer)
    return layer


# ══════════════════════════════════════════════════════════════════════════
# View
# ══════════════════════════════════════════════════════════════════════════

class TestView:

    def test_center_pixel_is_center_coordinate(self, canvas):
        assert canvas.get_coordinate_from_pixel((100, 100)) == Coordinate(0, 0)

    def test_y_axis_points_up(self, canvas):
        assert canvas.get_coordinate_from_pixel((100, 90)) == Coordinate(0, 10)
        assert canvas.get_pixel_from_coordinate((10, 0)) == (110, 100)

    def test_resolution_scales(self, canvas):
        canvas.set_resolution(2.0)
        assert canvas.get_coordinate_from_pixel((110, 100)) == Coordinate(20, 0)

    def test_invalid_resolution(self, canvas):
        with pytest.raises(ValueError):
            canvas.set_resolution(0)

    def test_fit_extent(self, canvas):
        canvas.fit_extent([0, 0, 60, 60], padding=20)
        assert canvas.get_center() == Coordinate(30, 30)
        assert canvas.get_resolution() == pytest.approx(60 / 160)

    def test_canvas_is_map_host(self, canvas):
        assert isinstance(canvas, MapHost)

    def test_fit_empty_extent_is_noop(self, canvas):
        canvas.fit_extent(VectorSource().get_extent())
        assert canvas.get_resolution() == 1.0


# ══════════════════════════════════════════════════════════════════════════
# Layers and hit testing
# ══════════════════════════════════════════════════════════════════════════

class TestHitTest:

    def test_hit_inside_feature(self, canvas, square_layer):
        feature = square_layer.get_features()[0]
        assert canvas.hit_test((100, 100), lambda f, l: True) is feature

    def test_miss(self, canvas, square_layer):
        assert canvas.hit_test((150, 100), lambda f, l: True) is None

    def test_tolerance_in_pixels(self, canvas, square_layer):
        canvas.set_resolution(0.5)
        # 25 px east of center is 12.5 units, 2.5 units outside the square
        assert canvas.hit_test((125, 100), lambda f, l: True) is None
        assert canvas.hit_test((125, 100), lambda f, l: True, hit_tolerance=5) is not None

    def test_predicate_and_layer_filter(self, canvas, square_layer):
        assert canvas.hit_test((100, 100), lambda f, l: False) is None
        assert canvas.hit_test((100, 100), lambda f, l: True, layer_filter=lambda l: False) is None

    def test_hidden_layer_skipped(self, canvas, square_layer):
        square_layer.visible = False
        assert canvas.hit_test((100, 100), lambda f, l: True) is None

    def test_topmost_layer_wins(self, canvas, square_layer):
        top = VectorSource('top', [make_square('top')])
        canvas.add_layer(top)
        assert canvas.hit_test((100, 100), lambda f, l: True).get_id() == 'top'

    def test_remove_layer(self, canvas, square_layer):
        assert canvas.remove_layer(square_layer)
        assert canvas.get_layers() == []
        assert not canvas.remove_layer(square_layer)


# ══════════════════════════════════════════════════════════════════════════
# Mouse input
# ══════════════════════════════════════════════════════════════════════════

class TestMouseRotation:

    @pytest.fixture
    def rotate(self, canvas, square_layer):
        interaction = RotateInteraction(layers=[square_layer])
        canvas.add_interaction(interaction)
        return interaction

    def test_drag_rotates_square(self, canvas, square_layer, rotate):
        feature = square_layer.get_features()[0]
        canvas.mousePressEvent(_mouse(QEvent.MouseButtonPress, 110, 100))
        assert rotate.is_dragging()
        assert canvas.cursor().shape() == Qt.ClosedHandCursor

        canvas.mouseMoveEvent(_mouse(QEvent.MouseMove, 100, 90, button=Qt.NoButton, buttons=Qt.LeftButton))
        canvas.mouseReleaseEvent(_mouse(QEvent.MouseButtonRelease, 100, 90))

        assert not rotate.is_dragging()
        for got, want in zip(feature.get_geometry().get_coordinates()[0], SQUARE_RING_CW90):
            assert got == pytest.approx(list(want), abs=1e-9)
        assert rotate.snapshot_cache.get_baseline('square').equals(feature.get_geometry())

    def test_right_button_ignored(self, canvas, square_layer, rotate):
        canvas.mousePressEvent(_mouse(QEvent.MouseButtonPress, 110, 100, button=Qt.RightButton))
        assert not rotate.is_dragging()

    def test_hover_cursor(self, canvas, square_layer, rotate):
        canvas.mouseMoveEvent(_mouse(QEvent.MouseMove, 100, 100, button=Qt.NoButton, buttons=Qt.NoButton))
        assert canvas.cursor().shape() == Qt.OpenHandCursor
        assert canvas.is_rotatable_hover()
        canvas.mouseMoveEvent(_mouse(QEvent.MouseMove, 190, 190, button=Qt.NoButton, buttons=Qt.NoButton))
        assert canvas.cursor().shape() == Qt.ArrowCursor

    def test_event_carries_canvas_and_original(self, canvas, square_layer, rotate):
        events = []
        rotate.on(events.append)
        press = _mouse(QEvent.MouseButtonPress, 110, 100)
        canvas.mousePressEvent(press)
        pointer_event = events[0].map_browser_event
        assert pointer_event.map is canvas
        assert pointer_event.original_event is press
        assert pointer_event.coordinate == Coordinate(10, 0)

    def test_consumed_press_hides_event_from_lower_interactions(self, canvas, square_layer, rotate):
        seen = []

        class Lower(PointerInteraction):
            def handle_down_event(self, event):
                seen.append(event.type)
                return False

        lower = Lower()
        canvas.remove_interaction(rotate)
        canvas.add_interaction(lower)
        canvas.add_interaction(rotate)

        canvas.mousePressEvent(_mouse(QEvent.MouseButtonPress, 110, 100))
        assert seen == []
        canvas.mouseReleaseEvent(_mouse(QEvent.MouseButtonRelease, 110, 100))
        canvas.mousePressEvent(_mouse(QEvent.MouseButtonPress, 190, 190))
        assert seen == ['pointerdown']

    def test_remove_interaction_detaches(self, canvas, rotate):
        assert canvas.remove_interaction(rotate)
        assert rotate.get_map() is None
        assert canvas.get_interactions() == []


class TestPaint:

    def test_paints_layers_and_pivot(self, canvas, square_layer, qtbot):
        pivot_source = VectorSource('pivot')
        canvas.add_layer(pivot_source)
        rotate = RotateInteraction(layers=[square_layer], pivot_source=pivot_source)
        canvas.add_interaction(rotate)
        canvas.mousePressEvent(_mouse(QEvent.MouseButtonPress, 110, 100))
        assert len(pivot_source) == 1
        # Rendering must not raise
        canvas.grab()
