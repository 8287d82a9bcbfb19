"""Feature Rotate demo application

Opens a map canvas with a few sample shapes. Press on a shape and drag to
rotate it about the center of its bounding box.

Usage:
    feature-rotate [--config PATH] [--verbose]
    python -m feature_rotate [--config PATH] [--verbose]
"""

import argparse
import logging
import sys

from PyQt5 import QtWidgets
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QPalette
from PyQt5.QtWidgets import QLabel, QMainWindow

from feature_rotate.components.map_canvas import MapCanvas
from feature_rotate.components.rotate_interaction import RotateInteraction
from feature_rotate.components.rotate_signals import RotateSignalBridge
from feature_rotate.config import load_config
from feature_rotate.models.feature import Feature
from feature_rotate.models.geometry import LineString, Point, Polygon
from feature_rotate.models.rotate_options import RotateOptions
from feature_rotate.models.vector_source import VectorSource
from feature_rotate.utils.azimuth import azimuth
from feature_rotate.utils.logger import loggerRaise, set_main_window


def create_sample_features():
    """A square, a triangle with a hole, a road and a point of interest"""
    return [
        Feature(Polygon([[(-120, -20), (-40, -20), (-40, 60), (-120, 60), (-120, -20)]]),
            {'name': 'Square'}, feature_id='square'),
        Feature(Polygon([
            [(20, -60), (140, -60), (80, 50), (20, -60)],
            [(65, -40), (95, -40), (80, -10), (65, -40)],
        ]), {'name': 'Triangle'}, feature_id='triangle'),
        Feature(LineString([(-100, -120), (-20, -90), (60, -130), (130, -100)]),
            {'name': 'Road'}, feature_id='road'),
        Feature(Point((0, 100)), {'name': 'Well'}, feature_id='well'),
    ]


class FeatureRotateWindow(QMainWindow):
    """Main window hosting the map canvas and the rotate interaction"""

    def __init__(self, config):
        super().__init__()
        self.setWindowTitle("Feature Rotate")
        self.resize(900, 700)
        self._logger = logging.getLogger('FeatureRotateWindow')
        self.config = config

        # Persistence map for baseline geometries, kept for the window's lifetime
        self.snapshot_store = {}

        self.canvas = MapCanvas(self)
        self.setCentralWidget(self.canvas)

        self.data_source = VectorSource('shapes', create_sample_features())
        self.pivot_source = VectorSource('pivot', visible=config['show_pivot'])
        self.canvas.add_layer(self.data_source)
        self.canvas.add_layer(self.pivot_source)
        self.canvas.set_resolution(config['resolution'])

        options = RotateOptions.from_config(
            config,
            layers=[self.data_source],
            pivot_source=self.pivot_source,
            snapshot_store=self.snapshot_store,
        )
        self.rotate_interaction = RotateInteraction(options)
        self.canvas.add_interaction(self.rotate_interaction)

        self.rotate_signals = RotateSignalBridge(self)
        self.rotate_signals.attach(self.rotate_interaction)
        self.rotate_signals.rotateStarted.connect(self._on_rotate_started)
        self.rotate_signals.rotating.connect(self._on_rotating)
        self.rotate_signals.rotateEnded.connect(self._on_rotate_ended)

        self.status_label = QLabel("Press on a shape and drag to rotate it")
        self.statusBar().addWidget(self.status_label, 1)

        set_main_window(self)

    def _feature_names(self, features):
        return ', '.join(str(feature.properties.get('name', feature.get_id())) for feature in features)

    def _on_rotate_started(self, rotate_event):
        self.status_label.setText(f"Rotating {self._feature_names(rotate_event.features)}")

    def _on_rotating(self, rotate_event):
        session = self.rotate_interaction.get_session()
        if session is None:
            return
        angle = azimuth(session.pivot_coordinate, rotate_event.coordinate) - session.start_azimuth
        self.status_label.setText(f"Rotating {self._feature_names(rotate_event.features)}: {angle:+.1f}°")

    def _on_rotate_ended(self, rotate_event):
        self.status_label.setText(f"Rotated {self._feature_names(rotate_event.features)}")
        self._logger.info(f"Rotation committed for {len(rotate_event.features)} feature(s)")

    def showEvent(self, event):
        super().showEvent(event)
        self.canvas.fit_extent(self.data_source.get_extent())


def _apply_dark_palette(app):
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)
    app.setPalette(dark_palette)


def main(argv=None):
    """Main entry point for the Feature Rotate demo"""
    parser = argparse.ArgumentParser(
        description='Rotate map features by dragging them around their center.',
    )
    parser.add_argument(
        '-c', '--config',
        default=None,
        help='Path to a JSON config file (default: ~/.feature_rotate/config.json).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)

    # Logging
    level = logging.DEBUG if args.verbose else getattr(logging, config['log_level'].upper())
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    app = QtWidgets.QApplication(sys.argv[:1])
    _apply_dark_palette(app)

    try:
        window = FeatureRotateWindow(config)
    except Exception as e:
        loggerRaise(e, "Error starting Feature Rotate", "Startup Error")
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
