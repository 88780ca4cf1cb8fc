"""
Molecular canvas widget — animated display with a QTimer-driven ticker.

Each tick runs one engine frame into numpy layers and converts them to
pixmaps.  The molecular layer is shown softened (down/up-scaled) with
the sharp focus layer on top, so dots look crisp only near the cursor.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from PyQt5.QtCore import QTimer, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QImage, QPainter, QPixmap
from PyQt5.QtWidgets import QWidget

from .engine import Layers, MolecularEngine
from .palettes import ColorScheme
from .surface import RasterSurface

logger = logging.getLogger(__name__)


def surface_to_pixmap(surface: RasterSurface, width: int, height: int) -> QPixmap:
    """Convert a raster layer into a pixmap of *width* × *height*."""
    img = surface.to_rgba8()
    h, w, ch = img.shape
    qimg = QImage(img.data, w, h, ch * w, QImage.Format_RGBA8888_Premultiplied).copy()
    return QPixmap.fromImage(qimg).scaled(
        width, height,
        Qt.IgnoreAspectRatio,
        Qt.SmoothTransformation,
    )


def soften(pixmap: QPixmap, factor: int = 6) -> QPixmap:
    """Cheap blur: shrink by *factor* and smooth back up."""
    w, h = pixmap.width(), pixmap.height()
    small = pixmap.scaled(
        max(1, w // factor), max(1, h // factor),
        Qt.IgnoreAspectRatio, Qt.SmoothTransformation,
    )
    return small.scaled(w, h, Qt.IgnoreAspectRatio, Qt.SmoothTransformation)


class MolecularCanvas(QWidget):
    """Animated molecular field.

    Signals:
        fps_changed(float):   current rendering FPS
        running_changed(bool): ticker started / stopped
    """

    fps_changed = pyqtSignal(float)
    running_changed = pyqtSignal(bool)

    FRAME_MS = 16

    def __init__(
        self,
        engine: MolecularEngine,
        render_scale: float = 0.5,
        blur_factor: int = 6,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.engine = engine
        self.render_scale = max(0.15, min(1.0, render_scale))
        self.blur_factor = blur_factor
        self.layers = Layers.create(engine.width, engine.height, self.render_scale)
        self._frame: Optional[QPixmap] = None
        self._paused = False

        # Timing
        self._last_time = time.perf_counter()
        self._frame_count = 0
        self._fps_accum = 0.0

        self.setMouseTracking(True)
        self.setMinimumSize(320, 240)

        self._timer = QTimer(self)
        self._timer.setInterval(self.FRAME_MS)
        self._timer.timeout.connect(self._tick)

    # ── ticker control ────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if self.running:
            return
        self._last_time = time.perf_counter()
        self._timer.start()
        self.running_changed.emit(True)
        logger.debug("Ticker started")

    def stop(self) -> None:
        if not self.running:
            return
        self._timer.stop()
        self.running_changed.emit(False)
        logger.debug("Ticker stopped")

    # ── properties ────────────────────────────────────────────────────────

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, val: bool) -> None:
        self._paused = val
        if not val:
            self._last_time = time.perf_counter()

    @property
    def scheme(self) -> ColorScheme:
        return self.engine.scheme

    def set_scheme(self, scheme: ColorScheme) -> None:
        self.engine.scheme = scheme

    def set_render_scale(self, scale: float) -> None:
        self.render_scale = max(0.15, min(1.0, scale))
        self.layers = Layers.create(self.engine.width, self.engine.height, self.render_scale)

    # ── animation loop ────────────────────────────────────────────────────

    def _tick(self) -> None:
        now = time.perf_counter()
        dt = now - self._last_time
        self._last_time = now

        if self._paused:
            return

        self.engine.frame(self.layers)
        self._frame = self._compose()
        self.update()

        # FPS tracking
        self._frame_count += 1
        self._fps_accum += dt
        if self._fps_accum >= 1.0:
            fps = self._frame_count / self._fps_accum
            self.fps_changed.emit(fps)
            self._frame_count = 0
            self._fps_accum = 0.0

    def _compose(self) -> QPixmap:
        w, h = self.width(), self.height()
        out = QPixmap(w, h)
        out.fill(QColor(*self.engine.scheme.background))
        painter = QPainter(out)
        painter.drawPixmap(0, 0, surface_to_pixmap(self.layers.vapor, w, h))
        painter.drawPixmap(
            0, 0, soften(surface_to_pixmap(self.layers.molecular, w, h), self.blur_factor),
        )
        painter.drawPixmap(0, 0, surface_to_pixmap(self.layers.focus, w, h))
        painter.end()
        return out

    # ── events ────────────────────────────────────────────────────────────

    def resizeEvent(self, event):
        w, h = max(1, self.width()), max(1, self.height())
        self.engine.resize(w, h)
        self.layers.resize(w, h)
        super().resizeEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        if self._frame is not None:
            painter.drawPixmap(0, 0, self._frame)
        else:
            painter.fillRect(self.rect(), QColor(*self.engine.scheme.background))

        if self._paused:
            painter.setPen(QColor(200, 210, 230, 160))
            painter.drawText(self.rect(), Qt.AlignCenter, "⏸ PAUSED")
        painter.end()

    def mouseMoveEvent(self, event):
        self.engine.pointer_moved(event.x(), event.y())

    def leaveEvent(self, event):
        self.engine.pointer_left()
        super().leaveEvent(event)

    # ── save ──────────────────────────────────────────────────────────────

    def get_image(self) -> Optional[QImage]:
        if self._frame is not None:
            return self._frame.toImage()
        return None
