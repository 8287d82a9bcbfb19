"""
Feature Rotate - Constants and Configuration

This module contains all constant values used throughout the package:
- Pivot marker identity
- Interaction defaults (hit tolerance, conditions)
- Map view defaults
- Canvas drawing and cursor settings
- Configuration file locations
"""

# ======================================================================
# PIVOT MARKER
# ======================================================================
# Identifier of the synthetic pivot feature. Any feature carrying this id is
# never rotated and never used for pivot computation.
PIVOT_FEATURE_ID = 'PIVOT_ID'

# ======================================================================
# INTERACTION DEFAULTS
# ======================================================================
DEFAULT_HIT_TOLERANCE = 0  # Pixels around the pointer checked for features

# ======================================================================
# POINTER EVENT TYPES
# ======================================================================
POINTER_DOWN = 'pointerdown'
POINTER_DRAG = 'pointerdrag'
POINTER_UP = 'pointerup'
POINTER_MOVE = 'pointermove'

# ======================================================================
# MAP VIEW DEFAULTS
# ======================================================================
DEFAULT_CENTER = (0.0, 0.0)
DEFAULT_RESOLUTION = 1.0  # Map units per pixel
FIT_PADDING_PX = 40       # Padding kept around an extent when fitting the view

# ======================================================================
# CANVAS DRAWING
# ======================================================================
CANVAS_BACKGROUND_COLOR = (245, 243, 238)
FEATURE_STROKE_COLOR = (51, 102, 153)
FEATURE_FILL_COLOR = (90, 141, 191, 90)
FEATURE_STROKE_WIDTH = 2
PIVOT_COLOR = (200, 60, 40)
POINT_RADIUS_PX = 5
PIVOT_RADIUS_PX = 6

# ======================================================================
# CONFIGURATION
# ======================================================================
CONFIG_DIR_NAME = '.feature_rotate'
CONFIG_FILE_NAME = 'config.json'
