"""Pointer interaction base and the host map contract.

The host (e.g. MapCanvas) converts toolkit input into MapPointerEvent and
hands it to each installed interaction through handle_event(). This module
routes those events to press/drag/release/move handlers.
"""
from abc import ABC, abstractmethod

from feature_rotate.constants import POINTER_DOWN, POINTER_DRAG, POINTER_MOVE, POINTER_UP


class MapHost(ABC):
	"""Contract an interaction expects from the map it is attached to.

	Subclasses must implement:
	- hit_test(): feature lookup under a pixel
	- indicate_rotatable(): visual affordance for rotatable features
	- get_layers(): layers available for hit testing

	Qt widgets implementing the contract need a metaclass deriving from both
	the widget's metaclass and ABCMeta (see MapCanvas).
	"""

	@abstractmethod
	def hit_test(self, pixel, predicate, layer_filter=None, hit_tolerance=0):
		"""Find the top-most feature under ``pixel`` accepted by ``predicate``.

		Args:
			pixel: Widget pixel (x, y)
			predicate: Callable (feature, layer) -> bool
			layer_filter: Callable (layer) -> bool restricting the layers searched
			hit_tolerance: Pixel radius around ``pixel``

		Returns:
			Feature or None
		"""
		pass

	@abstractmethod
	def indicate_rotatable(self, rotatable, grabbing=False):
		"""Show whether the pointer is over a rotatable feature.

		Args:
			rotatable: True when a rotatable feature is under the pointer
			grabbing: True while a rotation drag is in progress
		"""
		pass

	@abstractmethod
	def get_layers(self):
		pass


class PointerInteraction:
	"""Base class routing pointer events to handler methods.

	Subclasses override handle_down_event / handle_up_event (return True when
	consumed), handle_drag_event and handle_move_event.
	"""

	def __init__(self):
		self._map = None
		self._active = True
		self.handling_down_event = False

	def get_map(self):
		return self._map

	def set_map(self, host):
		self._map = host

	def get_active(self):
		return self._active

	def set_active(self, active):
		self._active = bool(active)

	def handle_event(self, event):
		"""Dispatch ``event`` to the matching handler.

		Returns:
			bool: False to stop propagation to interactions below this one
		"""
		if not self._active:
			return True

		stop_event = False
		if event.type == POINTER_DRAG:
			if self.handling_down_event:
				self.handle_drag_event(event)
				stop_event = True
		elif event.type == POINTER_MOVE:
			self.handle_move_event(event)
		elif event.type == POINTER_DOWN:
			handled = self.handle_down_event(event)
			# A refused press must not abandon a gesture already in progress
			self.handling_down_event = handled or self.handling_down_event
			stop_event = handled
		elif event.type == POINTER_UP:
			if self.handling_down_event:
				handled_up = self.handle_up_event(event)
				self.handling_down_event = False
				stop_event = handled_up
		return not stop_event

	def handle_down_event(self, event):
		return False

	def handle_drag_event(self, event):
		return False

	def handle_up_event(self, event):
		return False

	def handle_move_event(self, event):
		pass
