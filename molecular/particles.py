"""
Particle field — cursor-repelled dots joined by proximity lines.

Each particle drifts at a constant velocity, bounces off the viewport
edges, is pushed away from the cursor inside the interaction radius and
otherwise eases back to its home position.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Tuple

import numpy as np

if TYPE_CHECKING:
    from .engine import Cursor, SceneParams
    from .palettes import ColorScheme
    from .surface import RasterSurface

logger = logging.getLogger(__name__)

# Below this cursor distance the repulsion direction is undefined.
EPSILON = 1e-9


@dataclass
class Particle:
    """A single molecular dot."""
    x: float
    y: float
    base_x: float = 0.0
    base_y: float = 0.0
    size: float = 2.0
    speed_x: float = 0.0
    speed_y: float = 0.0
    density: float = 10.0

    @classmethod
    def spawn(cls, x: float, y: float, rng: np.random.Generator) -> "Particle":
        """Particle at (x, y) with randomised size, drift and density."""
        return cls(
            x=x, y=y,
            base_x=x, base_y=y,
            size=rng.uniform(1.0, 4.0),
            speed_x=rng.uniform(-0.5, 0.5),
            speed_y=rng.uniform(-0.5, 0.5),
            density=rng.uniform(1.0, 31.0),
        )


def update_particle(
    p: Particle,
    cursor_x: float,
    cursor_y: float,
    width: float,
    height: float,
    params: "SceneParams",
) -> None:
    """Advance one particle by a single frame."""
    dx = cursor_x - p.x
    dy = cursor_y - p.y
    distance = math.sqrt(dx * dx + dy * dy)
    radius = params.interaction_radius

    if distance < radius:
        # Coincident cursor: no defined direction, so no push.
        if distance > EPSILON:
            force = (radius - distance) / radius * p.density
            p.x -= dx / distance * force
            p.y -= dy / distance * force
    else:
        if p.x != p.base_x:
            p.x -= (p.x - p.base_x) * params.home_rate
        if p.y != p.base_y:
            p.y -= (p.y - p.base_y) * params.home_rate

    # Elastic wall bounce
    if p.x < 0 or p.x > width:
        p.speed_x = -p.speed_x
    if p.y < 0 or p.y > height:
        p.speed_y = -p.speed_y

    p.x += p.speed_x
    p.y += p.speed_y


def draw_particle(p: Particle, surface: "RasterSurface", scheme: "ColorScheme") -> None:
    surface.fill_circle(p.x, p.y, p.size, scheme.particle_rgba())


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

def iter_connections(
    particles: List[Particle],
    max_distance: float = 100.0,
) -> Iterator[Tuple[Particle, Particle, float]]:
    """Yield ``(a, b, alpha)`` for every close unordered pair.

    Pairs closer than *max_distance* (strictly) get
    ``alpha = 1 - distance / max_distance``.
    """
    n = len(particles)
    for i in range(n):
        a = particles[i]
        for j in range(i + 1, n):
            b = particles[j]
            dx = a.x - b.x
            dy = a.y - b.y
            distance = math.sqrt(dx * dx + dy * dy)
            if distance < max_distance:
                yield a, b, 1.0 - distance / max_distance


def draw_connections(
    particles: List[Particle],
    surface: "RasterSurface",
    scheme: "ColorScheme",
    max_distance: float = 100.0,
) -> int:
    """Stroke all proximity lines; returns how many were drawn."""
    count = 0
    for a, b, alpha in iter_connections(particles, max_distance):
        surface.stroke_line(a.x, a.y, b.x, b.y, scheme.particle_rgba(alpha), 1.0)
        count += 1
    return count


# ---------------------------------------------------------------------------
# Field
# ---------------------------------------------------------------------------

def particle_count(width: float, height: float, area_per_particle: float) -> int:
    """Capacity for a viewport: one particle per *area_per_particle*."""
    return int(math.floor(width * height / area_per_particle))


class ParticleField:
    """Owns the particle collection for one viewport.

    Parameters:
        rng: Shared random generator (seeded by the engine).
    """

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng
        self.particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def clear(self) -> None:
        self.particles = []

    def populate(self, width: float, height: float, params: "SceneParams") -> None:
        """Seed uniformly random particles for a *width* × *height* viewport."""
        count = particle_count(width, height, params.area_per_particle)
        self.particles = [
            Particle.spawn(self.rng.uniform(0, width), self.rng.uniform(0, height), self.rng)
            for _ in range(count)
        ]
        logger.debug("Particle field seeded: %d particles", count)

    def update(self, cursor: "Cursor", width: float, height: float, params: "SceneParams") -> None:
        for p in self.particles:
            update_particle(p, cursor.x, cursor.y, width, height, params)

    def draw(self, surface: "RasterSurface", scheme: "ColorScheme") -> None:
        for p in self.particles:
            draw_particle(p, surface, scheme)
