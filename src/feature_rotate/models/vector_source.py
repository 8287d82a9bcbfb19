"""Vector source: a named, toggleable store of features.

Used for rotatable data layers shown on the map canvas and as the sink the
rotate interaction adds its pivot marker to.
"""
import logging
from typing import Iterable, List, Optional

from feature_rotate.models.feature import Feature
from feature_rotate.utils import extent as extent_utils


class VectorSource:
    """Feature store with extent queries.

    Properties:
        name: Display name
        visible: Whether the canvas draws and hit-tests this source
    """

    def __init__(self, name: str = '', features: Optional[Iterable[Feature]] = None, visible: bool = True):
        self._logger = logging.getLogger('VectorSource')
        self.name = name
        self.visible = visible
        self._features: List[Feature] = []
        if features:
            self.add_features(features)

    def add_feature(self, feature: Feature):
        """Add a feature; adding a feature already present is a no-op."""
        if self.has_feature(feature):
            return
        self._features.append(feature)

    def add_features(self, features: Iterable[Feature]):
        for feature in features:
            self.add_feature(feature)

    def remove_feature(self, feature: Feature) -> bool:
        for index, member in enumerate(self._features):
            if member is feature:
                del self._features[index]
                return True
        return False

    def has_feature(self, feature: Feature) -> bool:
        return any(member is feature for member in self._features)

    def get_features(self) -> List[Feature]:
        """Copy of the feature list in insertion order."""
        return list(self._features)

    def get_feature_by_id(self, feature_id) -> Optional[Feature]:
        for feature in self._features:
            if feature.get_id() == feature_id:
                return feature
        return None

    def get_extent(self):
        """Union of the extents of all features that have a geometry."""
        bounds = extent_utils.create_empty()
        for feature in self._features:
            geometry = feature.get_geometry()
            if geometry is not None:
                extent_utils.extend(bounds, geometry.get_extent())
        return bounds

    def clear(self):
        self._features.clear()
        self._logger.debug(f"Cleared source '{self.name}'")

    def __len__(self):
        return len(self._features)

    def __repr__(self):
        return f"VectorSource(name={self.name!r}, features={len(self._features)})"
