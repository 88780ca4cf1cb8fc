"""
Main window — assembles the molecular canvas, control panel, and menu bar.
"""

from __future__ import annotations

import logging

from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QAction,
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QSizePolicy,
    QWidget,
)

from . import __version__
from .canvas import MolecularCanvas
from .controls import ControlPanel
from .engine import MolecularEngine

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window for the molecular vapor animation."""

    def __init__(
        self,
        engine: MolecularEngine,
        render_scale: float = 0.5,
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"Molecular Vapor  v{__version__}")
        self.setMinimumSize(720, 480)

        self.engine = engine
        self.canvas = MolecularCanvas(engine, render_scale)
        self.controls = ControlPanel(self.canvas, engine)

        # Layout
        central = QWidget()
        self.setCentralWidget(central)
        h_layout = QHBoxLayout(central)
        h_layout.setContentsMargins(0, 0, 8, 0)
        h_layout.setSpacing(8)

        self.canvas.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        h_layout.addWidget(self.canvas, stretch=1)
        h_layout.addWidget(self.controls)

        self._build_menu()
        self.statusBar().showMessage("Ready")

        self.controls.save_requested.connect(self._save)
        self.canvas.running_changed.connect(self._on_running)

    def _build_menu(self) -> None:
        menu = self.menuBar()

        file_menu = menu.addMenu("&File")
        save_act = QAction("&Save Image…", self)
        save_act.setShortcut(QKeySequence.Save)
        save_act.triggered.connect(self._save)
        file_menu.addAction(save_act)
        file_menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.Quit)
        quit_act.triggered.connect(self.close)
        file_menu.addAction(quit_act)

        edit_menu = menu.addMenu("&Edit")
        pause_act = QAction("&Pause / Resume", self)
        pause_act.setShortcut(QKeySequence("Space"))
        pause_act.triggered.connect(self._toggle_pause)
        edit_menu.addAction(pause_act)
        reset_act = QAction("&Reseed Field", self)
        reset_act.setShortcut(QKeySequence("Ctrl+R"))
        reset_act.triggered.connect(self.engine.reset)
        edit_menu.addAction(reset_act)

        help_menu = menu.addMenu("&Help")
        about_act = QAction("&About", self)
        about_act.triggered.connect(self._about)
        help_menu.addAction(about_act)

    def _save(self) -> None:
        img = self.canvas.get_image()
        if img is None:
            QMessageBox.warning(self, "Save Error", "No image to save yet.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Frame", "molecular.png",
            "PNG (*.png);;JPEG (*.jpg);;All (*)",
        )
        if path:
            if img.save(path):
                self.statusBar().showMessage(f"Saved to {path}")
                logger.info("Saved frame to %s", path)
            else:
                QMessageBox.critical(self, "Save Error", f"Failed to save:\n{path}")

    def _toggle_pause(self) -> None:
        self.controls._pause_btn.setChecked(not self.canvas.paused)

    def _on_running(self, running: bool) -> None:
        self.statusBar().showMessage("Running" if running else "Stopped")

    def showEvent(self, event):
        super().showEvent(event)
        self.canvas.start()

    def closeEvent(self, event):
        self.canvas.stop()
        super().closeEvent(event)

    def _about(self) -> None:
        QMessageBox.about(
            self,
            "About Molecular Vapor",
            f"<h3>Molecular Vapor v{__version__}</h3>"
            "<p>A field of connected dots that shy away from the pointer, "
            "drifting over slow vapor clouds.</p>"
            "<ul>"
            "<li>Inverse-distance repulsion inside the reach radius</li>"
            "<li>Eased return to each dot's home position</li>"
            "<li>Proximity links fading with distance</li>"
            "<li>Sharp focus disc following the eased pointer</li>"
            "</ul>",
        )
