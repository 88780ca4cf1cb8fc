"""
Focus compositor — sharp particle layer cut out around the cursor.

The particle layer is copied onto the focus layer and then masked
(destination-in) by a soft white disc: fully kept out to half the focus
radius, faded to a trace by 80%, gone at the rim.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .surface import RadialGradient

if TYPE_CHECKING:
    from .surface import RasterSurface

FOCUS_MASK = RadialGradient.of(
    (0.0, (255, 255, 255, 1.0)),
    (0.5, (255, 255, 255, 1.0)),
    (0.8, (255, 255, 255, 0.1)),
    (1.0, (0, 0, 0, 0.0)),
)


def focus_radius(width: float, height: float, fraction: float = 0.4) -> float:
    return min(width, height) * fraction


def compose_focus(
    dest: "RasterSurface",
    source: "RasterSurface",
    cursor_x: float,
    cursor_y: float,
    radius: float,
    mask: RadialGradient = FOCUS_MASK,
) -> None:
    """Replace *dest* with *source* kept only inside the focus disc."""
    dest.clear()
    dest.draw_surface(source)
    dest.mask_radial(cursor_x, cursor_y, radius, mask)
