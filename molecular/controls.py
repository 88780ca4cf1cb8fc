"""
Control panel — user-adjustable parameters for the molecular field.

Organised into groups:
  - Colour scheme (preset or custom particle colour)
  - Motion (repulsion reach, home return, cursor easing)
  - Connections & focus
  - Rendering quality
  - Actions (pause, reset, save)
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QColorDialog,
    QComboBox,
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from .canvas import MolecularCanvas
from .engine import MolecularEngine
from .focus import focus_radius
from .palettes import SCHEMES, create_custom_scheme, get_scheme, list_schemes

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Labelled slider helper
# ---------------------------------------------------------------------------

class LSlider(QWidget):
    """Horizontal slider with label and readout."""

    valueChanged = pyqtSignal(int)

    def __init__(self, label, lo, hi, val, suffix="", parent=None):
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 1, 0, 1)

        self._lbl = QLabel(label)
        self._lbl.setFixedWidth(120)
        lay.addWidget(self._lbl)

        self._slider = QSlider(Qt.Horizontal)
        self._slider.setRange(lo, hi)
        self._slider.setValue(val)
        lay.addWidget(self._slider, stretch=1)

        self._suffix = suffix
        self._ro = QLabel(f"{val}{suffix}")
        self._ro.setFixedWidth(48)
        self._ro.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        lay.addWidget(self._ro)

        self._slider.valueChanged.connect(self._changed)

    def _changed(self, v):
        self._ro.setText(f"{v}{self._suffix}")
        self.valueChanged.emit(v)

    def value(self):
        return self._slider.value()

    def setValue(self, v):
        self._slider.setValue(v)


def _swatch(rgb, border="#555") -> QWidget:
    sw = QWidget()
    sw.setFixedSize(20, 20)
    sw.setStyleSheet(
        f"background: rgb({rgb[0]},{rgb[1]},{rgb[2]}); "
        f"border-radius: 10px; border: 1px solid {border};"
    )
    return sw


# ---------------------------------------------------------------------------
# Control panel
# ---------------------------------------------------------------------------

class ControlPanel(QWidget):
    """Side panel with all animation controls."""

    save_requested = pyqtSignal()

    def __init__(
        self,
        canvas: MolecularCanvas,
        engine: MolecularEngine,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.canvas = canvas
        self.engine = engine
        self.setFixedWidth(320)

        # ── Scroll wrapper ────────────────────────────────────────────────
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        outer.addWidget(scroll)

        inner = QWidget()
        scroll.setWidget(inner)
        layout = QVBoxLayout(inner)
        layout.setSpacing(8)

        # ══════════════════════════════════════════════════════════════════
        # COLOUR SCHEME
        # ══════════════════════════════════════════════════════════════════
        color_group = QGroupBox("Colour Scheme")
        cg = QVBoxLayout(color_group)

        self._scheme_combo = QComboBox()
        for key in list_schemes():
            self._scheme_combo.addItem(SCHEMES[key].name, key)
        current = self._scheme_combo.findText(engine.scheme.name)
        if current >= 0:
            self._scheme_combo.setCurrentIndex(current)
        self._scheme_combo.currentIndexChanged.connect(self._on_scheme_changed)
        cg.addWidget(self._scheme_combo)

        self._swatch_layout = QHBoxLayout()
        cg.addLayout(self._swatch_layout)

        pick_row = QHBoxLayout()
        pick_row.addWidget(QLabel("Custom Particle:"))
        pick_btn = QPushButton("Pick…")
        pick_btn.setFixedWidth(60)
        pick_btn.clicked.connect(self._pick_particle_color)
        pick_row.addWidget(pick_btn)
        pick_row.addStretch()
        cg.addLayout(pick_row)

        layout.addWidget(color_group)

        # ══════════════════════════════════════════════════════════════════
        # MOTION
        # ══════════════════════════════════════════════════════════════════
        motion_group = QGroupBox("Motion")
        mg = QVBoxLayout(motion_group)

        p = engine.params
        self._reach_slider = LSlider("Repel Reach", 20, 300, int(p.interaction_radius), "px")
        self._reach_slider.valueChanged.connect(
            lambda v: setattr(self.engine.params, "interaction_radius", float(v))
        )
        mg.addWidget(self._reach_slider)

        self._home_slider = LSlider("Home Return", 1, 30, int(round(p.home_rate * 100)), "%")
        self._home_slider.valueChanged.connect(
            lambda v: setattr(self.engine.params, "home_rate", v / 100)
        )
        mg.addWidget(self._home_slider)

        self._easing_slider = LSlider("Cursor Easing", 1, 100, int(round(p.cursor_easing * 100)), "%")
        self._easing_slider.valueChanged.connect(
            lambda v: setattr(self.engine.params, "cursor_easing", v / 100)
        )
        mg.addWidget(self._easing_slider)

        layout.addWidget(motion_group)

        # ══════════════════════════════════════════════════════════════════
        # CONNECTIONS & FOCUS
        # ══════════════════════════════════════════════════════════════════
        link_group = QGroupBox("Connections && Focus")
        lg = QVBoxLayout(link_group)

        self._link_slider = LSlider("Link Distance", 20, 200, int(p.connection_distance), "px")
        self._link_slider.valueChanged.connect(
            lambda v: setattr(self.engine.params, "connection_distance", float(v))
        )
        lg.addWidget(self._link_slider)

        self._focus_slider = LSlider("Focus Size", 10, 100, int(round(p.focus_fraction * 100)), "%")
        self._focus_slider.valueChanged.connect(self._on_focus_changed)
        lg.addWidget(self._focus_slider)

        layout.addWidget(link_group)

        # ══════════════════════════════════════════════════════════════════
        # RENDERING
        # ══════════════════════════════════════════════════════════════════
        render_group = QGroupBox("Rendering")
        rg = QVBoxLayout(render_group)

        self._quality_slider = LSlider("Quality", 15, 100, int(round(canvas.render_scale * 100)), "%")
        self._quality_slider.valueChanged.connect(
            lambda v: self.canvas.set_render_scale(v / 100)
        )
        rg.addWidget(self._quality_slider)

        self._blur_slider = LSlider("Blur", 1, 16, canvas.blur_factor, "×")
        self._blur_slider.valueChanged.connect(
            lambda v: setattr(self.canvas, "blur_factor", v)
        )
        rg.addWidget(self._blur_slider)

        layout.addWidget(render_group)

        # ══════════════════════════════════════════════════════════════════
        # ACTIONS
        # ══════════════════════════════════════════════════════════════════
        action_group = QGroupBox("Actions")
        ag = QGridLayout(action_group)

        self._pause_btn = QPushButton("⏸  Pause")
        self._pause_btn.setCheckable(True)
        self._pause_btn.toggled.connect(self._on_pause)
        ag.addWidget(self._pause_btn, 0, 0)

        reset_btn = QPushButton("↻  Reseed")
        reset_btn.clicked.connect(self._on_reset)
        ag.addWidget(reset_btn, 0, 1)

        save_btn = QPushButton("↓  Save PNG")
        save_btn.clicked.connect(self.save_requested.emit)
        ag.addWidget(save_btn, 1, 0, 1, 2)

        layout.addWidget(action_group)

        # ── Status ────────────────────────────────────────────────────────
        self._status = QLabel("Move the pointer over the field")
        self._status.setWordWrap(True)
        self._status.setStyleSheet("color: #778; font-size: 11px; font-style: italic;")
        layout.addWidget(self._status)

        layout.addStretch()

        canvas.fps_changed.connect(self._on_fps)
        self._update_swatches()

    # ── colour slots ──────────────────────────────────────────────────────

    def _on_scheme_changed(self, idx: int) -> None:
        key = self._scheme_combo.currentData()
        try:
            self.canvas.set_scheme(get_scheme(key))
            self._update_swatches()
        except KeyError as e:
            logger.error("Scheme error: %s", e)

    def _pick_particle_color(self) -> None:
        p = self.canvas.scheme.particle
        color = QColorDialog.getColor(QColor(*p), self, "Particle Colour")
        if not color.isValid():
            return
        scheme = create_custom_scheme("Custom", (color.red(), color.green(), color.blue()))
        self.canvas.set_scheme(scheme)
        self._update_swatches()

    def _update_swatches(self) -> None:
        while self._swatch_layout.count():
            item = self._swatch_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        scheme = self.canvas.scheme
        self._swatch_layout.addWidget(_swatch(scheme.particle, "#fff"))
        for c in (scheme.vapor_core, scheme.vapor_mid, scheme.background):
            self._swatch_layout.addWidget(_swatch(c))
        self._swatch_layout.addStretch()

    # ── parameter slots ───────────────────────────────────────────────────

    def _on_focus_changed(self, pct: int) -> None:
        self.engine.params.focus_fraction = pct / 100
        self.engine.focus_radius = focus_radius(
            self.engine.width, self.engine.height, self.engine.params.focus_fraction,
        )

    # ── action slots ──────────────────────────────────────────────────────

    def _on_pause(self, checked: bool) -> None:
        self.canvas.paused = checked
        self._pause_btn.setText("▶  Play" if checked else "⏸  Pause")

    def _on_reset(self) -> None:
        self.engine.reset()

    def _on_fps(self, fps: float) -> None:
        self._status.setText(
            f"{len(self.engine.particles)} particles  •  "
            f"{len(self.engine.vapor)} vapor  •  {fps:.0f} fps"
        )
