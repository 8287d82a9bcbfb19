"""Rotate interaction - press on a feature and drag to rotate it about a pivot.

All features of the target set rotate in unison about the bounding-box
center of the set, following the pointer's bearing from that center.

Every drag step restores each feature from its cached baseline geometry and
applies the TOTAL rotation since the press, so replaying a pointer position
always reproduces the same geometry.
"""
import logging

from feature_rotate.components.pointer_interaction import PointerInteraction
from feature_rotate.constants import PIVOT_FEATURE_ID
from feature_rotate.models.coordinate import Coordinate
from feature_rotate.models.drag_session import DragSession
from feature_rotate.models.events import RotateEvent, RotateEventType
from feature_rotate.models.feature import Feature, FeatureCollection
from feature_rotate.models.geometry import Point
from feature_rotate.models.rotate_options import RotateOptions
from feature_rotate.models.snapshot_cache import GeometrySnapshotCache
from feature_rotate.services.pivot import center_of, create_pivot_marker, is_pivot_marker
from feature_rotate.utils.azimuth import azimuth, rotation_delta


def _accept_layer(layer):
	return True


def _accept_feature(feature, layer):
	return True


class RotateInteraction(PointerInteraction):
	"""Interaction for rotating features with the pointer.

	To rotate several features in one action (for example the current
	selection), pass them as the ``features`` option.

	States:
		Idle: no drag session; a qualifying press opens one
		Dragging: a session is open; drags rotate, the release closes it

	Notifications (see on()/un()):
		rotatestart, rotating, rotateend - each a RotateEvent
	"""

	def __init__(self, options=None, **kwargs):
		"""
		Args:
			options: RotateOptions instance
			**kwargs: RotateOptions fields, when ``options`` is not given

		Raises:
			TypeError: If both ``options`` and keyword options are given, or
				a keyword is not a RotateOptions field
		"""
		super().__init__()
		if options is None:
			options = RotateOptions(**kwargs)
		elif kwargs:
			raise TypeError("Pass either a RotateOptions instance or keyword options, not both")

		self._logger = logging.getLogger('RotateInteraction')

		self._features = options.features

		if options.layers is not None and self._features is None:
			if callable(options.layers):
				layer_filter = options.layers
			else:
				layers = list(options.layers)

				def layer_filter(layer):
					return any(layer is allowed for allowed in layers)
		else:
			layer_filter = _accept_layer
		self._layer_filter = layer_filter

		if options.filter is not None and self._features is None:
			self._filter = options.filter
		else:
			self._filter = _accept_feature

		self._hit_tolerance = options.hit_tolerance
		self._condition = options.condition
		self._pivot_source = options.pivot_source
		self._snapshot_cache = GeometrySnapshotCache(options.snapshot_store)

		self._pivot_feature = create_pivot_marker()
		self._last_feature = None
		self._session = None
		self._edited_features = {}
		self._listeners = []

	# ========================================
	# Pointer handlers
	# ========================================

	def handle_down_event(self, event):
		"""Open a drag session if a rotatable feature is under the pointer.

		Returns:
			bool: True if the press started a rotation
		"""
		if self._session is not None:
			self._logger.debug("Press ignored: a rotation is already in progress")
			return False
		if not self._condition(event):
			return False

		host = self._host_for(event)
		if host is None:
			return False
		hit = self._feature_at_pixel(event.pixel, host)
		if hit is None:
			return False
		self._last_feature = hit

		features = self._features if self._features is not None else FeatureCollection([hit])
		pivot = self._update_pivot(features)
		if pivot is None:
			self._logger.debug("Press ignored: no rotatable geometry in the target set")
			return False

		start = Coordinate.of(event.coordinate)
		self._session = DragSession(
			pivot_coordinate=pivot,
			start_coordinate=start,
			start_azimuth=azimuth(pivot, start),
			features=features,
			hit_feature=hit,
		)
		host.indicate_rotatable(True, grabbing=True)

		self._logger.debug(f"Rotation started: pivot=({pivot.x:.3f}, {pivot.y:.3f}), "
			f"start azimuth={self._session.start_azimuth:.2f}°, {len(features)} feature(s)")
		self._dispatch(RotateEventType.ROTATESTART, features, start, start, event)
		return True

	def handle_drag_event(self, event):
		"""Rotate the session's features to follow the pointer.

		Returns:
			bool: True if a session was open
		"""
		session = self._session
		if session is None:
			return False

		coordinate = Coordinate.of(event.coordinate)
		current_azimuth = azimuth(session.pivot_coordinate, coordinate)
		delta = rotation_delta(session.start_azimuth, current_azimuth)

		for feature in session.features:
			if not self._is_rotatable_member(feature):
				continue
			feature_id = feature.get_id()
			# Always start from the baseline (prevents compounding)
			geometry = self._snapshot_cache.snapshot(feature_id, feature.get_geometry())
			geometry.rotate(delta, session.pivot_coordinate)
			feature.set_geometry(geometry)
			self._edited_features[feature_id] = feature

		session.last_coordinate = coordinate
		self._dispatch(RotateEventType.ROTATING, session.features, coordinate, session.start_coordinate, event)
		return True

	def handle_up_event(self, event):
		"""Commit final geometries as new baselines and close the session.

		Returns:
			bool: True if a session was open
		"""
		session = self._session
		if session is None:
			return False

		committed = 0
		for feature in session.features:
			if not self._is_rotatable_member(feature):
				continue
			self._snapshot_cache.commit(feature.get_id(), feature.get_geometry())
			committed += 1
		self._session = None

		host = self._host_for(event)
		if host is not None:
			self._indicate_hover(event, host)

		self._logger.debug(f"Rotation ended: committed {committed} baseline(s)")
		self._dispatch(RotateEventType.ROTATEEND, session.features, Coordinate.of(event.coordinate),
			session.start_coordinate, event)
		return True

	def handle_move_event(self, event):
		"""Update the host's rotatable affordance for the hovered feature."""
		host = self._host_for(event)
		if host is not None:
			self._indicate_hover(event, host)

	# ========================================
	# Pivot
	# ========================================

	def refresh_features_pivot(self):
		"""Recompute the pivot over the current target set and show the marker.

		The target set is the fixed ``features`` collection, or the last
		feature hit by a press. An open session keeps the pivot it started
		with.

		Returns:
			Coordinate of the pivot, or None if there is nothing to rotate
		"""
		if self._features is not None:
			features = self._features
		elif self._last_feature is not None:
			features = FeatureCollection([self._last_feature])
		else:
			return None
		return self._update_pivot(features)

	def _update_pivot(self, features):
		geometries = [feature.get_geometry() for feature in features if self._is_rotatable_member(feature)]
		if not geometries:
			return None
		center = center_of(geometries)

		self._pivot_feature.set_geometry(Point((center.x, center.y)))
		self._pivot_feature.set_id(PIVOT_FEATURE_ID)
		if self._pivot_source is not None:
			self._pivot_source.add_feature(self._pivot_feature)

		self._logger.debug(f"Pivot refreshed at ({center.x:.3f}, {center.y:.3f})")
		return center

	def get_pivot_feature(self):
		return self._pivot_feature

	# ========================================
	# Hit testing
	# ========================================

	def _host_for(self, event):
		host = getattr(event, 'map', None)
		return host if host is not None else self.get_map()

	def _is_rotatable_member(self, feature):
		"""Member of the target set that actually gets rotated."""
		return not is_pivot_marker(feature, self._pivot_feature) and feature.get_geometry() is not None

	def _accepts(self, feature, layer):
		if not isinstance(feature, Feature) or not self._filter(feature, layer):
			return False
		if self._features is not None and feature not in self._features:
			return False
		return True

	def _feature_at_pixel(self, pixel, host):
		return host.hit_test(pixel, self._accepts, layer_filter=self._layer_filter,
			hit_tolerance=self._hit_tolerance)

	def _indicate_hover(self, event, host):
		hit = self._feature_at_pixel(event.pixel, host) is not None
		host.indicate_rotatable(hit, grabbing=self._session is not None)

	def get_hit_tolerance(self):
		"""Hit-detection tolerance in pixels."""
		return self._hit_tolerance

	def set_hit_tolerance(self, hit_tolerance):
		"""Set the pixel radius around the pointer checked for features."""
		self._hit_tolerance = hit_tolerance

	# ========================================
	# Map / activation
	# ========================================

	def set_map(self, host):
		old_map = self.get_map()
		super().set_map(host)
		self._update_state(old_map)

	def set_active(self, active):
		super().set_active(active)
		self._update_state(None)

	def _update_state(self, old_map):
		host = self.get_map()
		if host is None or not self.get_active():
			if host is None:
				host = old_map
			if host is not None:
				host.indicate_rotatable(False, grabbing=False)

	# ========================================
	# State queries
	# ========================================

	@property
	def snapshot_cache(self):
		return self._snapshot_cache

	def get_features(self):
		"""The fixed feature collection, or None when rotating hit features."""
		return self._features

	def get_session(self):
		return self._session

	def is_dragging(self):
		return self._session is not None

	def get_edited_features(self):
		"""Map of feature id -> feature for every feature rotated so far."""
		return dict(self._edited_features)

	# ========================================
	# Notifications
	# ========================================

	def on(self, callback):
		"""Subscribe ``callback(rotate_event)`` to rotatestart/rotating/rotateend."""
		self._listeners.append(callback)

	def un(self, callback):
		"""Remove a subscribed callback."""
		if callback in self._listeners:
			self._listeners.remove(callback)

	def _dispatch(self, event_type, features, coordinate, start_coordinate, event):
		rotate_event = RotateEvent(event_type, features, coordinate, start_coordinate, event)
		for callback in list(self._listeners):
			try:
				callback(rotate_event)
			except Exception:
				self._logger.exception(f"Error notifying {event_type.value} listener")
		return rotate_event
