"""Qt signal bridge for rotate lifecycle notifications."""

from PyQt5.QtCore import QObject, pyqtSignal

from feature_rotate.models.events import RotateEventType


class RotateSignalBridge(QObject):
	"""Re-emits a RotateInteraction's notifications as Qt signals"""

	# Signals
	rotateStarted = pyqtSignal(object)  # RotateEvent
	rotating = pyqtSignal(object)  # RotateEvent, once per drag step
	rotateEnded = pyqtSignal(object)  # RotateEvent (for history saving)

	def __init__(self, parent=None):
		super().__init__(parent)
		self._interaction = None

	def attach(self, interaction):
		"""Subscribe to ``interaction``, detaching from any previous one"""
		self.detach()
		self._interaction = interaction
		interaction.on(self._relay)

	def detach(self):
		if self._interaction is not None:
			self._interaction.un(self._relay)
			self._interaction = None

	def get_interaction(self):
		return self._interaction

	def _relay(self, rotate_event):
		if rotate_event.type == RotateEventType.ROTATESTART:
			self.rotateStarted.emit(rotate_event)
		elif rotate_event.type == RotateEventType.ROTATING:
			self.rotating.emit(rotate_event)
		elif rotate_event.type == RotateEventType.ROTATEEND:
			self.rotateEnded.emit(rotate_event)
