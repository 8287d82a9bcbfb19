"""
Geometry Snapshot Cache

Keeps the pristine (pre-rotation) geometry of every feature touched by the
rotate interaction, keyed by feature id, so that each drag step rotates a
fresh copy of the same baseline instead of compounding small rotations on
already-rotated geometry.

The backing map is injected by the host and outlives drag sessions: the
host decides when to clear it (e.g. between unrelated editing sessions).
Only snapshot() and commit() write to it.

Features without a stable id all share the ``None`` key and cannot be
reliably restored across sessions.
"""

import logging
from typing import MutableMapping, Optional

from feature_rotate.models.geometry import Geometry


class GeometrySnapshotCache:
    """Baseline geometries per feature id, backed by a persistence map."""

    def __init__(self, store: Optional[MutableMapping] = None):
        """
        Args:
            store: Host-owned mapping of feature id -> Geometry. A private
                dict is used when omitted.
        """
        self._logger = logging.getLogger('SnapshotCache')
        self._store = store if store is not None else {}

    @property
    def store(self) -> MutableMapping:
        """The backing persistence map (owned by the host)."""
        return self._store

    def snapshot(self, feature_id, live_geometry: Geometry) -> Geometry:
        """Return a fresh copy of the baseline for ``feature_id``.

        The first time an id is seen, a clone of ``live_geometry`` becomes
        its baseline. Afterwards ``live_geometry`` is ignored and the stored
        baseline is the ground truth.

        Args:
            feature_id: Feature identifier (may be None)
            live_geometry: The feature's current geometry

        Returns:
            A clone of the baseline, safe to mutate
        """
        if feature_id not in self._store:
            if feature_id is None:
                self._logger.debug("Seeding baseline for a feature without id; it cannot be restored reliably")
            self._store[feature_id] = live_geometry.clone()
            self._logger.debug(f"Seeded baseline for feature {feature_id!r}")
        return self._store[feature_id].clone()

    def commit(self, feature_id, final_geometry: Geometry):
        """Replace the baseline for ``feature_id`` with a clone of ``final_geometry``."""
        self._store[feature_id] = final_geometry.clone()
        self._logger.debug(f"Committed baseline for feature {feature_id!r}")

    def has_baseline(self, feature_id) -> bool:
        return feature_id in self._store

    def get_baseline(self, feature_id) -> Optional[Geometry]:
        """Clone of the stored baseline, or None if the id has none."""
        baseline = self._store.get(feature_id)
        return baseline.clone() if baseline is not None else None

    def __contains__(self, feature_id) -> bool:
        return feature_id in self._store

    def __len__(self):
        return len(self._store)
