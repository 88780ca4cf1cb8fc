"""
Colour schemes for the molecular field.

Each scheme defines:
  - particle:    Dot and connection colour (RGB)
  - background:  Opaque fill behind the vapor layer
  - vapor_core:  Vapor blob centre colour
  - vapor_mid:   Vapor blob colour at the 40% stop
  - vapor_edge:  Vapor blob rim colour (drawn fully transparent)

Custom schemes can be derived from a single particle colour.
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .surface import RGBA, RadialGradient

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ColorScheme:
    """Immutable colour scheme for the animation."""
    name: str
    particle: RGB
    background: RGB
    vapor_core: RGB
    vapor_mid: RGB
    vapor_edge: RGB

    def particle_rgba(self, alpha: float = 1.0) -> RGBA:
        return (*self.particle, alpha)

    def background_rgba(self) -> RGBA:
        return (*self.background, 1.0)

    def vapor_gradient(self, intensity: float) -> RadialGradient:
        """Three-stop vapor ramp: core → half-strength mid → clear rim."""
        return RadialGradient.of(
            (0.0, (*self.vapor_core, intensity)),
            (0.4, (*self.vapor_mid, intensity * 0.5)),
            (1.0, (*self.vapor_edge, 0.0)),
        )


# ── Built-in schemes ─────────────────────────────────────────────────────

SCHEMES: Dict[str, ColorScheme] = {
    "abyss": ColorScheme(
        name="Abyss",
        particle=(30, 61, 89), background=(9, 9, 14),
        vapor_core=(0, 8, 32), vapor_mid=(0, 6, 24), vapor_edge=(9, 9, 14),
    ),
    "ember": ColorScheme(
        name="Ember",
        particle=(140, 62, 24), background=(14, 8, 6),
        vapor_core=(40, 10, 0), vapor_mid=(28, 8, 2), vapor_edge=(14, 8, 6),
    ),
    "verdigris": ColorScheme(
        name="Verdigris",
        particle=(40, 120, 100), background=(6, 12, 11),
        vapor_core=(0, 30, 24), vapor_mid=(0, 20, 18), vapor_edge=(6, 12, 11),
    ),
    "nebula": ColorScheme(
        name="Nebula",
        particle=(110, 60, 150), background=(10, 6, 16),
        vapor_core=(24, 0, 40), vapor_mid=(18, 2, 30), vapor_edge=(10, 6, 16),
    ),
    "graphite": ColorScheme(
        name="Graphite",
        particle=(150, 150, 160), background=(10, 10, 12),
        vapor_core=(30, 30, 36), vapor_mid=(20, 20, 24), vapor_edge=(10, 10, 12),
    ),
}

DEFAULT_SCHEME = "abyss"


# ── Derived schemes ───────────────────────────────────────────────────────

def _clamp_rgb(r: float, g: float, b: float) -> RGB:
    return (
        max(0, min(255, int(r * 255))),
        max(0, min(255, int(g * 255))),
        max(0, min(255, int(b * 255))),
    )


def _shade(base: RGB, value: float, saturation: float = 1.0) -> RGB:
    """Same hue as *base* at a fixed HSV value."""
    h, s, _ = colorsys.rgb_to_hsv(base[0]/255, base[1]/255, base[2]/255)
    r, g, b = colorsys.hsv_to_rgb(h, min(1.0, s * saturation), value)
    return _clamp_rgb(r, g, b)


def create_custom_scheme(name: str, particle: RGB) -> ColorScheme:
    """Build a complete scheme from just a particle colour."""
    background = _shade(particle, 0.055, 0.4)
    return ColorScheme(
        name=name,
        particle=particle,
        background=background,
        vapor_core=_shade(particle, 0.125),
        vapor_mid=_shade(particle, 0.094),
        vapor_edge=background,
    )


def hex_to_rgb(value: str) -> RGB:
    """Parse ``#rrggbb`` (or ``rrggbb``)."""
    text = value.lstrip("#")
    if len(text) != 6:
        raise ValueError(f"Expected a #rrggbb colour, got '{value}'")
    return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))


# ── Accessors ─────────────────────────────────────────────────────────────

def get_scheme(name: str) -> ColorScheme:
    if name not in SCHEMES:
        available = ", ".join(sorted(SCHEMES.keys()))
        raise KeyError(f"Unknown scheme '{name}'. Available: {available}")
    return SCHEMES[name]


def list_schemes() -> List[str]:
    return sorted(SCHEMES.keys())
