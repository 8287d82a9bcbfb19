"""Input conditions: predicates on a MapPointerEvent.

Conditions inspect the toolkit event carried in ``original_event``. Events
without one (synthesized input) carry no modifiers and count as a primary
action.
"""
from PyQt5.QtCore import Qt


def _modifiers(event):
    original = getattr(event, 'original_event', None)
    if original is None or not hasattr(original, 'modifiers'):
        return Qt.NoModifier
    return original.modifiers()


def always(event) -> bool:
    return True


def never(event) -> bool:
    return False


def no_modifier_keys(event) -> bool:
    """True if no Shift/Ctrl/Alt/Meta key is held."""
    return int(_modifiers(event)) == int(Qt.NoModifier)


def shift_key_only(event) -> bool:
    return int(_modifiers(event)) == int(Qt.ShiftModifier)


def primary_action(event) -> bool:
    """True for left-button input (or input without a toolkit event)."""
    original = getattr(event, 'original_event', None)
    if original is None or not hasattr(original, 'button'):
        return True
    button = original.button()
    if button == Qt.NoButton and hasattr(original, 'buttons'):
        return bool(original.buttons() & Qt.LeftButton)
    return button == Qt.LeftButton
