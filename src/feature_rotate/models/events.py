"""Event records exchanged between the host map and interactions."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from feature_rotate.constants import POINTER_DOWN, POINTER_DRAG, POINTER_MOVE, POINTER_UP
from feature_rotate.models.coordinate import Coordinate
from feature_rotate.models.feature import FeatureCollection


class RotateEventType(str, Enum):
    """Lifecycle notifications emitted by the rotate interaction."""
    ROTATESTART = 'rotatestart'
    ROTATING = 'rotating'
    ROTATEEND = 'rotateend'


POINTER_EVENT_TYPES = (POINTER_DOWN, POINTER_DRAG, POINTER_UP, POINTER_MOVE)


@dataclass
class MapPointerEvent:
    """Pointer input delivered by the host, already converted to map space.

    Attributes:
        type: 'pointerdown', 'pointerdrag', 'pointerup' or 'pointermove'
        pixel: Position in widget pixels (x, y)
        coordinate: Position in map units
        map: The host that produced the event
        original_event: Toolkit event (e.g. QMouseEvent), may be None
        dragging: True while a button is held during a move
    """
    type: str
    pixel: Tuple[float, float]
    coordinate: Coordinate
    map: Any = None
    original_event: Any = None
    dragging: bool = False

    def __post_init__(self):
        if self.type not in POINTER_EVENT_TYPES:
            raise ValueError(f"Unknown pointer event type '{self.type}'")
        self.coordinate = Coordinate.of(self.coordinate)


@dataclass(frozen=True)
class RotateEvent:
    """Notification for one rotation lifecycle step.

    Attributes:
        type: RotateEventType of the step
        features: The features being rotated
        coordinate: Pointer coordinate of this step
        start_coordinate: Pointer coordinate when the rotation started
        map_browser_event: The originating pointer event
    """
    type: RotateEventType
    features: FeatureCollection
    coordinate: Coordinate
    start_coordinate: Coordinate
    map_browser_event: Optional[MapPointerEvent] = None
