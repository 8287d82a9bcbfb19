"""
Map Canvas - QWidget host for vector layers and pointer interactions

Provides:
- A y-up map view (center + resolution) with pixel <-> coordinate conversion
- Drawing of vector sources with QPainter
- Pixel hit testing over visible layers, top-most first
- Translation of mouse input into MapPointerEvent for installed interactions
- Cursor affordance for rotatable features
"""

import logging
from abc import ABCMeta

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QPointF, QSize
from PyQt5.QtGui import QPainter, QPen, QBrush, QColor, QPolygonF, QPainterPath

from feature_rotate.components.pointer_interaction import MapHost
from feature_rotate.constants import (
	POINTER_DOWN, POINTER_DRAG, POINTER_UP, POINTER_MOVE,
	DEFAULT_CENTER, DEFAULT_RESOLUTION, FIT_PADDING_PX,
	CANVAS_BACKGROUND_COLOR, FEATURE_STROKE_COLOR, FEATURE_FILL_COLOR, FEATURE_STROKE_WIDTH,
	PIVOT_COLOR, POINT_RADIUS_PX, PIVOT_RADIUS_PX,
)
from feature_rotate.models.coordinate import Coordinate
from feature_rotate.models.events import MapPointerEvent
from feature_rotate.services.pivot import is_pivot_marker
from feature_rotate.utils import extent as extent_utils


class _WidgetHostMeta(type(QWidget), ABCMeta):
	"""Metaclass combining sip's widget metaclass with ABCMeta"""
	pass


class MapCanvas(QWidget, MapHost, metaclass=_WidgetHostMeta):
	"""Widget showing vector layers and feeding pointer input to interactions"""

	def __init__(self, parent=None):
		super().__init__(parent)
		self.setMouseTracking(True)
		self.setCursor(Qt.ArrowCursor)

		self._logger = logging.getLogger('MapCanvas')

		self._layers = []  # Bottom to top
		self._interactions = []  # Installation order; dispatch runs top-most first
		self._center = Coordinate.of(DEFAULT_CENTER)
		self._resolution = DEFAULT_RESOLUTION  # Map units per pixel
		self._dragging = False
		self._rotatable_hover = False

	def sizeHint(self):
		return QSize(800, 600)

	# ========================================
	# Layers and interactions
	# ========================================

	def add_layer(self, source):
		"""Add a vector source on top of the existing layers"""
		if any(layer is source for layer in self._layers):
			return
		self._layers.append(source)
		self.update()

	def remove_layer(self, source):
		for index, layer in enumerate(self._layers):
			if layer is source:
				del self._layers[index]
				self.update()
				return True
		return False

	def get_layers(self):
		"""Copy of the layer list, bottom to top"""
		return list(self._layers)

	def add_interaction(self, interaction):
		"""Install an interaction; later interactions receive input first"""
		self._interactions.append(interaction)
		interaction.set_map(self)

	def remove_interaction(self, interaction):
		if interaction in self._interactions:
			self._interactions.remove(interaction)
			interaction.set_map(None)
			return True
		return False

	def get_interactions(self):
		return list(self._interactions)

	# ========================================
	# View
	# ========================================

	def get_center(self):
		return self._center

	def set_center(self, center):
		self._center = Coordinate.of(center)
		self.update()

	def get_resolution(self):
		return self._resolution

	def set_resolution(self, resolution):
		if resolution <= 0:
			raise ValueError(f"Resolution must be positive, got {resolution}")
		self._resolution = float(resolution)
		self.update()

	def fit_extent(self, extent, padding=FIT_PADDING_PX):
		"""Center the view on ``extent`` and zoom so it fits with padding"""
		if extent_utils.is_empty(extent):
			return
		usable_w = max(self.width() - 2 * padding, 1)
		usable_h = max(self.height() - 2 * padding, 1)
		width = extent_utils.get_width(extent)
		height = extent_utils.get_height(extent)
		resolution = max(width / usable_w, height / usable_h)
		if resolution <= 0:
			resolution = DEFAULT_RESOLUTION
		self._resolution = resolution
		self._center = Coordinate((extent[0] + extent[2]) / 2, (extent[1] + extent[3]) / 2)
		self._logger.debug(f"View fitted: center=({self._center.x:.3f}, {self._center.y:.3f}), "
			f"resolution={resolution:.5f}")
		self.update()

	def get_coordinate_from_pixel(self, pixel):
		"""Convert widget pixels (y down) to map coordinates (y up)"""
		px, py = pixel
		x = self._center.x + (px - self.width() / 2) * self._resolution
		y = self._center.y - (py - self.height() / 2) * self._resolution
		return Coordinate(x, y)

	def get_pixel_from_coordinate(self, coordinate):
		"""Convert map coordinates (y up) to widget pixels (y down)"""
		x, y = coordinate
		px = (x - self._center.x) / self._resolution + self.width() / 2
		py = (self._center.y - y) / self._resolution + self.height() / 2
		return (px, py)

	# ========================================
	# MapHost
	# ========================================

	def hit_test(self, pixel, predicate, layer_filter=None, hit_tolerance=0):
		"""Return the top-most accepted feature under ``pixel``, or None"""
		coordinate = self.get_coordinate_from_pixel(pixel)
		tolerance = hit_tolerance * self._resolution
		for layer in reversed(self._layers):
			if not layer.visible:
				continue
			if layer_filter is not None and not layer_filter(layer):
				continue
			for feature in reversed(layer.get_features()):
				geometry = feature.get_geometry()
				if geometry is None:
					continue
				if not extent_utils.contains_xy(geometry.get_extent(), coordinate.x, coordinate.y, tolerance):
					continue
				if geometry.intersects_coordinate(coordinate, tolerance) and predicate(feature, layer):
					return feature
		return None

	def indicate_rotatable(self, rotatable, grabbing=False):
		"""Open hand over rotatable features, closed hand while rotating"""
		self._rotatable_hover = rotatable
		if grabbing:
			self.setCursor(Qt.ClosedHandCursor)
		elif rotatable:
			self.setCursor(Qt.OpenHandCursor)
		else:
			self.setCursor(Qt.ArrowCursor)

	def is_rotatable_hover(self):
		return self._rotatable_hover

	# ========================================
	# Input
	# ========================================

	def _pointer_event(self, event_type, qt_event):
		pixel = (qt_event.pos().x(), qt_event.pos().y())
		return MapPointerEvent(
			type=event_type,
			pixel=pixel,
			coordinate=self.get_coordinate_from_pixel(pixel),
			map=self,
			original_event=qt_event,
			dragging=self._dragging,
		)

	def dispatch_pointer_event(self, pointer_event):
		"""Hand ``pointer_event`` to interactions, top-most first

		Propagation stops at the first interaction returning False.
		"""
		for interaction in reversed(list(self._interactions)):
			if not interaction.handle_event(pointer_event):
				break
		self.update()

	def mousePressEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mousePressEvent(event)
			return
		self._dragging = True
		self.dispatch_pointer_event(self._pointer_event(POINTER_DOWN, event))

	def mouseMoveEvent(self, event):
		event_type = POINTER_DRAG if self._dragging else POINTER_MOVE
		self.dispatch_pointer_event(self._pointer_event(event_type, event))

	def mouseReleaseEvent(self, event):
		if event.button() != Qt.LeftButton or not self._dragging:
			super().mouseReleaseEvent(event)
			return
		self._dragging = False
		self.dispatch_pointer_event(self._pointer_event(POINTER_UP, event))

	# ========================================
	# Drawing
	# ========================================

	def paintEvent(self, event):
		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)
		painter.fillRect(self.rect(), QColor(*CANVAS_BACKGROUND_COLOR))

		feature_pen = QPen(QColor(*FEATURE_STROKE_COLOR), FEATURE_STROKE_WIDTH)
		feature_brush = QBrush(QColor(*FEATURE_FILL_COLOR))

		for layer in self._layers:
			if not layer.visible:
				continue
			for feature in layer.get_features():
				geometry = feature.get_geometry()
				if geometry is None:
					continue
				if is_pivot_marker(feature):
					self._paint_pivot(painter, geometry)
				else:
					painter.setPen(feature_pen)
					painter.setBrush(feature_brush)
					self._paint_geometry(painter, geometry)
		painter.end()

	def _to_qpoints(self, positions):
		return [QPointF(*self.get_pixel_from_coordinate(position)) for position in positions]

	def _paint_geometry(self, painter, geometry):
		geometry_type = geometry.get_type()
		if geometry_type == 'Point':
			center = QPointF(*self.get_pixel_from_coordinate(geometry.get_coordinates()))
			painter.drawEllipse(center, POINT_RADIUS_PX, POINT_RADIUS_PX)
		elif geometry_type == 'LineString':
			painter.drawPolyline(QPolygonF(self._to_qpoints(geometry.get_coordinates())))
		elif geometry_type == 'Polygon':
			path = QPainterPath()
			path.setFillRule(Qt.OddEvenFill)
			for ring in geometry.get_coordinates():
				path.addPolygon(QPolygonF(self._to_qpoints(ring)))
				path.closeSubpath()
			painter.drawPath(path)
		else:
			self._logger.warning(f"Cannot draw geometry type '{geometry_type}'")

	def _paint_pivot(self, painter, geometry):
		center = QPointF(*self.get_pixel_from_coordinate(geometry.get_coordinates()))
		painter.setPen(QPen(QColor(*PIVOT_COLOR), 2))
		painter.setBrush(Qt.NoBrush)
		painter.drawEllipse(center, PIVOT_RADIUS_PX, PIVOT_RADIUS_PX)
		painter.drawLine(QPointF(center.x() - PIVOT_RADIUS_PX * 1.5, center.y()),
			QPointF(center.x() + PIVOT_RADIUS_PX * 1.5, center.y()))
		painter.drawLine(QPointF(center.x(), center.y() - PIVOT_RADIUS_PX * 1.5),
			QPointF(center.x(), center.y() + PIVOT_RADIUS_PX * 1.5))
