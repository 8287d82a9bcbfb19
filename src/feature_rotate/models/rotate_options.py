"""Construction options for the rotate interaction."""
from dataclasses import dataclass, fields
from typing import Any, Callable, MutableMapping, Optional

from feature_rotate.constants import DEFAULT_HIT_TOLERANCE
from feature_rotate.models.feature import FeatureCollection
from feature_rotate.models.vector_source import VectorSource
from feature_rotate.utils.conditions import always


@dataclass
class RotateOptions:
    """Options recognised by RotateInteraction.

    Attributes:
        condition: Predicate on a MapPointerEvent gating activation
        features: Fixed collection rotated together; when given, ``layers``
            and ``filter`` are ignored
        layers: Layers whose features may be rotated, as a list or a
            predicate on a layer. None means every visible layer
        filter: Predicate (feature, layer) -> bool for per-feature eligibility
        hit_tolerance: Pixel radius checked around the pointer
        pivot_source: Source the pivot marker is added to so it renders
        snapshot_store: Host-owned map of feature id -> baseline geometry
    """
    condition: Callable[[Any], bool] = always
    features: Optional[FeatureCollection] = None
    layers: Any = None
    filter: Optional[Callable[[Any, Any], bool]] = None
    hit_tolerance: float = DEFAULT_HIT_TOLERANCE
    pivot_source: Optional[VectorSource] = None
    snapshot_store: Optional[MutableMapping] = None

    def __post_init__(self):
        if self.condition is None:
            self.condition = always
        if self.hit_tolerance is None:
            self.hit_tolerance = DEFAULT_HIT_TOLERANCE
        if self.hit_tolerance < 0:
            raise ValueError(f"hit_tolerance must be >= 0, got {self.hit_tolerance}")

    @classmethod
    def from_config(cls, config: dict, **overrides) -> 'RotateOptions':
        """Build options from a loaded config dict plus keyword overrides.

        Args:
            config: Dict as returned by feature_rotate.config.load_config
            **overrides: Any RotateOptions field

        Raises:
            TypeError: If an override is not a RotateOptions field
        """
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown rotate option(s): {', '.join(sorted(unknown))}")
        values = {'hit_tolerance': config.get('hit_tolerance', DEFAULT_HIT_TOLERANCE)}
        values.update(overrides)
        return cls(**values)
