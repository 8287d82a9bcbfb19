"""Drag session dataclass for the rotate interaction.

Transient state of one press-drag-release cycle.
"""

from dataclasses import dataclass
from typing import Optional

from feature_rotate.models.coordinate import Coordinate
from feature_rotate.models.feature import Feature, FeatureCollection


@dataclass
class DragSession:
    """State of the rotation drag in progress.

    The pivot and start azimuth are frozen at press time; only
    ``last_coordinate`` changes while dragging.
    """
    pivot_coordinate: Coordinate
    start_coordinate: Coordinate
    start_azimuth: float  # degrees, bearing from pivot to the press position
    features: FeatureCollection  # fixed collection or singleton of the hit feature
    last_coordinate: Optional[Coordinate] = None
    hit_feature: Optional[Feature] = None

    def __post_init__(self):
        if self.last_coordinate is None:
            self.last_coordinate = self.start_coordinate
