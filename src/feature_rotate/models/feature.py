"""Feature and feature collection models.

A Feature is an externally owned map entity: an identifier (possibly None),
a replaceable geometry and a free-form properties dict. The rotate
interaction only ever reads and replaces feature geometries.
"""
from copy import deepcopy
from typing import Any, Dict, Iterable, List, Optional

from feature_rotate.models.geometry import Geometry


class Feature:
    """Map feature with identity, geometry and properties."""

    def __init__(self, geometry: Optional[Geometry] = None, properties: Optional[Dict[str, Any]] = None,
                 feature_id=None):
        self._id = feature_id
        self._geometry = geometry
        self.properties = dict(properties) if properties else {}

    def get_id(self):
        return self._id

    def set_id(self, feature_id):
        self._id = feature_id

    def get_geometry(self) -> Optional[Geometry]:
        return self._geometry

    def set_geometry(self, geometry: Optional[Geometry]):
        self._geometry = geometry

    @property
    def geometry(self) -> Optional[Geometry]:
        return self._geometry

    @geometry.setter
    def geometry(self, geometry: Optional[Geometry]):
        self._geometry = geometry

    def clone(self) -> 'Feature':
        """Copy with cloned geometry and copied properties. The id is not copied."""
        geometry = self._geometry.clone() if self._geometry is not None else None
        return Feature(geometry, deepcopy(self.properties))

    def __repr__(self):
        return f"Feature(id={self._id!r}, geometry={self._geometry!r})"


class FeatureCollection:
    """Ordered collection of features.

    Membership is by identity: two distinct Feature objects with equal
    content are different members.
    """

    def __init__(self, features: Optional[Iterable[Feature]] = None):
        self._array: List[Feature] = list(features) if features else []

    def push(self, feature: Feature) -> int:
        """Append a feature and return the new length."""
        self._array.append(feature)
        return len(self._array)

    def extend(self, features: Iterable[Feature]):
        for feature in features:
            self.push(feature)
        return self

    def remove(self, feature: Feature) -> Optional[Feature]:
        """Remove the first occurrence of ``feature``; return it or None."""
        for index, member in enumerate(self._array):
            if member is feature:
                return self._array.pop(index)
        return None

    def clear(self):
        self._array.clear()

    def get_array(self) -> List[Feature]:
        """The live backing list."""
        return self._array

    def get_length(self) -> int:
        return len(self._array)

    def item(self, index: int) -> Feature:
        return self._array[index]

    def __contains__(self, feature) -> bool:
        return any(member is feature for member in self._array)

    def __iter__(self):
        return iter(list(self._array))

    def __len__(self):
        return len(self._array)

    def __repr__(self):
        return f"FeatureCollection({self._array!r})"
