"""
Vapor field — large, faint radial blobs drifting behind the molecules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np

if TYPE_CHECKING:
    from .palettes import ColorScheme
    from .surface import RasterSurface

logger = logging.getLogger(__name__)


@dataclass
class VaporPoint:
    """One vapor blob.  Resets in place instead of being removed."""
    x: float = 0.0
    y: float = 0.0
    size: float = 400.0
    speed_x: float = 0.0
    speed_y: float = 0.0
    intensity: float = 0.1

    def reset(self, width: float, height: float, rng: np.random.Generator) -> None:
        """Re-roll position, size, drift and intensity."""
        self.x = rng.uniform(0, width)
        self.y = rng.uniform(0, height)
        self.size = rng.uniform(400.0, 1000.0)
        self.speed_x = rng.uniform(-0.1, 0.1)
        self.speed_y = rng.uniform(-0.1, 0.1)
        self.intensity = rng.uniform(0.1, 0.35)

    def is_outside(self, width: float, height: float) -> bool:
        """True once the blob's bounding square has fully left the viewport."""
        return (
            self.x < -self.size or self.x > width + self.size
            or self.y < -self.size or self.y > height + self.size
        )


def update_vapor(
    v: VaporPoint,
    width: float,
    height: float,
    rng: np.random.Generator,
) -> None:
    v.x += v.speed_x
    v.y += v.speed_y
    if v.is_outside(width, height):
        v.reset(width, height, rng)


def draw_vapor(v: VaporPoint, surface: "RasterSurface", scheme: "ColorScheme") -> None:
    surface.fill_radial(v.x, v.y, v.size, scheme.vapor_gradient(v.intensity))


class VaporField:
    """Fixed-size pool of self-resetting vapor blobs."""

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng
        self.points: List[VaporPoint] = []

    def __len__(self) -> int:
        return len(self.points)

    def clear(self) -> None:
        self.points = []

    def populate(self, width: float, height: float, count: int = 8) -> None:
        self.points = []
        for _ in range(count):
            v = VaporPoint()
            v.reset(width, height, self.rng)
            self.points.append(v)
        logger.debug("Vapor field seeded: %d points", count)

    def update(self, width: float, height: float) -> None:
        for v in self.points:
            update_vapor(v, width, height, self.rng)

    def draw(self, surface: "RasterSurface", scheme: "ColorScheme") -> None:
        for v in self.points:
            draw_vapor(v, surface, scheme)
