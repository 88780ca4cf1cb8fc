"""
Molecular animation engine.

Owns the particle field, the vapor field and the eased cursor, and runs
one frame of update + draw into a set of injected raster layers.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .focus import compose_focus, focus_radius
from .palettes import DEFAULT_SCHEME, ColorScheme, get_scheme
from .particles import ParticleField, draw_connections
from .surface import RasterSurface
from .vapor import VaporField

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scene parameters (user-tunable)
# ---------------------------------------------------------------------------

@dataclass
class SceneParams:
    """All tuneable animation constants.

    Distances are in viewport units (pixels at 100% quality).
    """
    # Particles
    interaction_radius: float = 100.0   # cursor repulsion reach
    home_rate: float = 1 / 20           # fraction of home offset recovered per frame
    area_per_particle: float = 9000.0   # viewport area per particle

    # Connections
    connection_distance: float = 100.0

    # Vapor
    vapor_count: int = 8

    # Cursor / focus
    cursor_easing: float = 0.15
    focus_fraction: float = 0.4         # of min(width, height)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.interaction_radius <= 0:
            raise ValueError("interaction_radius must be positive")
        if not (0.0 < self.home_rate <= 1.0):
            raise ValueError("home_rate must be in (0, 1]")
        if self.area_per_particle <= 0:
            raise ValueError("area_per_particle must be positive")
        if self.connection_distance <= 0:
            raise ValueError("connection_distance must be positive")
        if self.vapor_count < 0:
            raise ValueError("vapor_count must be non-negative")
        if not (0.0 <= self.cursor_easing <= 1.0):
            raise ValueError("cursor_easing must be in [0, 1]")
        if self.focus_fraction <= 0:
            raise ValueError("focus_fraction must be positive")


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------

@dataclass
class Cursor:
    """Eased cursor: ``x, y`` chase ``target_x, target_y``."""
    x: float = 0.0
    y: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0

    def center_on(self, width: float, height: float) -> None:
        self.x = self.target_x = width / 2
        self.y = self.target_y = height / 2

    def aim(self, x: float, y: float) -> None:
        self.target_x = x
        self.target_y = y

    def ease(self, easing: float) -> None:
        self.x += (self.target_x - self.x) * easing
        self.y += (self.target_y - self.y) * easing


# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------

@dataclass
class Layers:
    """The three drawing surfaces a frame renders into."""
    vapor: RasterSurface
    molecular: RasterSurface
    focus: RasterSurface

    @classmethod
    def create(cls, width: float, height: float, scale: float = 1.0) -> "Layers":
        return cls(
            vapor=RasterSurface(width, height, scale),
            molecular=RasterSurface(width, height, scale),
            focus=RasterSurface(width, height, scale),
        )

    def resize(self, width: float, height: float) -> None:
        for surface in (self.vapor, self.molecular, self.focus):
            surface.resize(width, height)


class LoopState(enum.Enum):
    RUNNING = "running"
    RECONFIGURING = "reconfiguring"


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class MolecularEngine:
    """Manages the particle/vapor fields, cursor state and frame stepping.

    Parameters:
        width, height: Initial viewport size.
        params:        Scene parameters (or defaults).
        scheme:        Colour scheme (or the default scheme).
        seed:          RNG seed for reproducibility (None = random).
    """

    def __init__(
        self,
        width: float = 1280,
        height: float = 720,
        params: Optional[SceneParams] = None,
        scheme: Optional[ColorScheme] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.params = params or SceneParams()
        self.scheme = scheme or get_scheme(DEFAULT_SCHEME)
        self.rng = np.random.default_rng(seed)
        self.cursor = Cursor()
        self.particles = ParticleField(self.rng)
        self.vapor = VaporField(self.rng)
        self.state = LoopState.RUNNING
        self.frame_count = 0
        self.width = 0.0
        self.height = 0.0
        self.focus_radius = 0.0
        self.resize(width, height)

    # ── viewport ──────────────────────────────────────────────────────────

    def resize(self, width: float, height: float) -> None:
        """Adopt a new viewport size and re-seed both fields."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be positive, got {width}x{height}")
        self.state = LoopState.RECONFIGURING
        self.particles.clear()
        self.vapor.clear()

        self.width = float(width)
        self.height = float(height)
        self.focus_radius = focus_radius(self.width, self.height, self.params.focus_fraction)
        self.cursor.center_on(self.width, self.height)

        self.particles.populate(self.width, self.height, self.params)
        self.vapor.populate(self.width, self.height, self.params.vapor_count)
        self.state = LoopState.RUNNING
        logger.info(
            "Viewport %dx%d: %d particles, %d vapor points",
            self.width, self.height, len(self.particles), len(self.vapor),
        )

    def reset(self) -> None:
        """Re-seed at the current viewport size."""
        self.resize(self.width, self.height)

    # ── pointer input ─────────────────────────────────────────────────────

    def pointer_moved(self, x: float, y: float) -> None:
        self.cursor.aim(x, y)

    def pointer_left(self) -> None:
        self.cursor.aim(self.width / 2, self.height / 2)

    def update_mouse_position(self) -> None:
        self.cursor.ease(self.params.cursor_easing)

    # ── frame ─────────────────────────────────────────────────────────────

    def frame(self, layers: Layers) -> None:
        """Advance and render one frame into *layers*."""
        p = self.params
        w, h = self.width, self.height

        layers.molecular.clear()
        layers.vapor.clear()
        layers.vapor.fill(self.scheme.background_rgba())

        self.update_mouse_position()

        self.vapor.update(w, h)
        self.vapor.draw(layers.vapor, self.scheme)

        draw_connections(
            self.particles.particles, layers.molecular, self.scheme, p.connection_distance,
        )
        self.particles.update(self.cursor, w, h, p)
        self.particles.draw(layers.molecular, self.scheme)

        compose_focus(
            layers.focus, layers.molecular,
            self.cursor.x, self.cursor.y, self.focus_radius,
        )
        self.frame_count += 1

    def run(self, layers: Layers, frames: int) -> None:
        """Headless stepping: render *frames* consecutive frames."""
        for _ in range(frames):
            self.frame(layers)
