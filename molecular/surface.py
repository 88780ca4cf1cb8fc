"""
Raster drawing surface — numpy-backed 2D layer with canvas-style primitives.

Pixels are stored as premultiplied RGBA floats in 0..1 with shape
(H, W, 4).  All drawing coordinates are given in logical viewport units
and multiplied by ``scale`` to reach pixel space, so a layer can be
rendered at reduced resolution and smoothed back up by the Qt painter.

Colours are ``(r, g, b, a)`` tuples with 0–255 channels and a 0–1 alpha,
mirroring CSS ``rgba()``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

logger = logging.getLogger(__name__)

RGBA = Tuple[float, float, float, float]


def premultiply(color: RGBA) -> np.ndarray:
    """Convert an ``(r, g, b, a)`` colour to premultiplied 0..1 floats."""
    r, g, b, a = color
    a = max(0.0, min(1.0, float(a)))
    return np.array([r / 255.0 * a, g / 255.0 * a, b / 255.0 * a, a], dtype=np.float64)


# ---------------------------------------------------------------------------
# Radial gradient
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RadialGradient:
    """Multi-stop colour ramp evaluated over normalised radius 0..1.

    Stops are ``(offset, rgba)`` pairs in ascending offset order.
    Interpolation happens in premultiplied space; beyond the last stop
    the final colour is held.
    """
    stops: Tuple[Tuple[float, RGBA], ...]

    def __post_init__(self):
        if not self.stops:
            raise ValueError("RadialGradient needs at least one colour stop")
        offsets = [o for o, _ in self.stops]
        if offsets != sorted(offsets):
            raise ValueError(f"Gradient offsets must ascend, got {offsets}")

    @classmethod
    def of(cls, *stops: Tuple[float, RGBA]) -> "RadialGradient":
        return cls(tuple(stops))

    def sample(self, t: np.ndarray) -> np.ndarray:
        """Evaluate at normalised radii *t* → (..., 4) premultiplied RGBA."""
        t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)
        offsets = np.array([o for o, _ in self.stops], dtype=np.float64)
        colors = np.stack([premultiply(c) for _, c in self.stops])
        out = np.empty(t.shape + (4,), dtype=np.float64)
        for ch in range(4):
            out[..., ch] = np.interp(t, offsets, colors[:, ch])
        return out


# ---------------------------------------------------------------------------
# Surface
# ---------------------------------------------------------------------------

class RasterSurface:
    """A single drawable layer.

    Parameters:
        width:  Logical width (viewport units).
        height: Logical height (viewport units).
        scale:  Pixels per logical unit (e.g. 0.5 = half resolution).
    """

    def __init__(self, width: float, height: float, scale: float = 1.0) -> None:
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.scale = float(scale)
        self.pixels = np.zeros((1, 1, 4), dtype=np.float64)
        self.resize(width, height)

    # ── geometry ──────────────────────────────────────────────────────────

    def resize(self, width: float, height: float) -> None:
        """Reallocate to a new logical size; contents are cleared."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        pw = max(1, int(round(width * self.scale)))
        ph = max(1, int(round(height * self.scale)))
        self.pixels = np.zeros((ph, pw, 4), dtype=np.float64)

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """(width, height) in pixels."""
        return self.pixels.shape[1], self.pixels.shape[0]

    def _pixel_box(self, x: float, y: float, radius: float):
        """Clipped pixel bounding box of a circle, or None if off-surface."""
        pw, ph = self.pixel_size
        s = self.scale
        x0 = max(0, int(math.floor((x - radius) * s)) - 1)
        x1 = min(pw, int(math.ceil((x + radius) * s)) + 1)
        y0 = max(0, int(math.floor((y - radius) * s)) - 1)
        y1 = min(ph, int(math.ceil((y + radius) * s)) + 1)
        if x0 >= x1 or y0 >= y1:
            return None
        return x0, x1, y0, y1

    def _distances(self, x: float, y: float, box) -> np.ndarray:
        """Pixel-centre distances (in pixels) from logical point (x, y)."""
        x0, x1, y0, y1 = box
        s = self.scale
        ys, xs = np.ogrid[y0:y1, x0:x1]
        dx = xs + 0.5 - x * s
        dy = ys + 0.5 - y * s
        return np.sqrt(dx * dx + dy * dy)

    # ── compositing helpers ───────────────────────────────────────────────

    @staticmethod
    def _over(dst: np.ndarray, src: np.ndarray) -> None:
        """In-place source-over of premultiplied *src* onto *dst*."""
        dst *= (1.0 - src[..., 3:4])
        dst += src

    # ── primitives ────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Reset every pixel to transparent black."""
        self.pixels.fill(0.0)

    def fill(self, color: RGBA) -> None:
        """Paint *color* over the whole surface (source-over)."""
        src = premultiply(color)
        self._over(self.pixels, np.broadcast_to(src, self.pixels.shape))

    def fill_circle(self, x: float, y: float, radius: float, color: RGBA) -> None:
        """Filled, antialiased circle."""
        box = self._pixel_box(x, y, radius)
        if box is None or radius <= 0:
            return
        x0, x1, y0, y1 = box
        dist = self._distances(x, y, box)
        coverage = np.clip(radius * self.scale + 0.5 - dist, 0.0, 1.0)
        src = coverage[..., np.newaxis] * premultiply(color)
        self._over(self.pixels[y0:y1, x0:x1], src)

    def fill_radial(self, x: float, y: float, radius: float, gradient: RadialGradient) -> None:
        """Fill a circle of *radius* with *gradient* centred on (x, y)."""
        box = self._pixel_box(x, y, radius)
        if box is None or radius <= 0:
            return
        x0, x1, y0, y1 = box
        dist = self._distances(x, y, box)
        r_px = radius * self.scale
        src = gradient.sample(dist / r_px)
        src *= (dist <= r_px)[..., np.newaxis]
        self._over(self.pixels[y0:y1, x0:x1], src)

    def stroke_line(
        self,
        x0: float, y0: float,
        x1: float, y1: float,
        color: RGBA,
        width: float = 1.0,
    ) -> None:
        """Stroke a straight segment, sampled once per pixel of length.

        Pixel coverage is approximated by scaling alpha with ``width * scale``:
        at half resolution a 1-unit line covers half a pixel, so it is stored
        at half alpha and the smooth upscale spreads it back to roughly the
        full-resolution ink.
        """
        s = self.scale
        length = math.hypot(x1 - x0, y1 - y0) * s
        n = max(2, int(math.ceil(length)) + 1)
        t = np.linspace(0.0, 1.0, n)
        px = np.floor((x0 + (x1 - x0) * t) * s).astype(np.intp)
        py = np.floor((y0 + (y1 - y0) * t) * s).astype(np.intp)
        pw, ph = self.pixel_size
        inside = (px >= 0) & (px < pw) & (py >= 0) & (py < ph)
        if not inside.any():
            return
        # One blend per covered pixel.
        flat = np.unique(py[inside] * pw + px[inside])
        rows, cols = np.divmod(flat, pw)
        src = premultiply(color) * min(1.0, width * s)
        dst = self.pixels[rows, cols]
        self._over(dst, np.broadcast_to(src, dst.shape))
        self.pixels[rows, cols] = dst

    def draw_surface(self, other: "RasterSurface") -> None:
        """Composite another surface of the same pixel size over this one."""
        if other.pixels.shape != self.pixels.shape:
            raise ValueError(
                f"Surface size mismatch: {other.pixel_size} onto {self.pixel_size}"
            )
        self._over(self.pixels, other.pixels)

    def mask_radial(self, x: float, y: float, radius: float, gradient: RadialGradient) -> None:
        """Destination-in: keep existing pixels only where the mask is opaque.

        The mask is *gradient* centred on (x, y), extending its last stop
        over the rest of the surface.
        """
        pw, ph = self.pixel_size
        dist = self._distances(x, y, (0, pw, 0, ph))
        r_px = max(radius * self.scale, 1e-9)
        alpha = gradient.sample(dist / r_px)[..., 3]
        self.pixels *= alpha[..., np.newaxis]

    # ── readback ──────────────────────────────────────────────────────────

    def alpha_at(self, x: float, y: float) -> float:
        """Alpha of the pixel under logical point (x, y)."""
        col = min(self.pixel_size[0] - 1, max(0, int(x * self.scale)))
        row = min(self.pixel_size[1] - 1, max(0, int(y * self.scale)))
        return float(self.pixels[row, col, 3])

    def to_rgba8(self) -> np.ndarray:
        """(H, W, 4) uint8 premultiplied RGBA, ready for ``QImage``."""
        return np.ascontiguousarray(
            np.clip(self.pixels * 255.0 + 0.5, 0, 255).astype(np.uint8)
        )
