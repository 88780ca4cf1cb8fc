import numpy as np
import pytest

from molecular.focus import FOCUS_MASK, compose_focus, focus_radius
from molecular.surface import RasterSurface


def test_focus_radius_uses_shorter_side():
    assert focus_radius(1000, 600) == pytest.approx(240.0)
    assert focus_radius(300, 900) == pytest.approx(120.0)


def test_mask_ramp():
    alpha = FOCUS_MASK.sample(np.array([0.0, 0.5, 0.65, 0.8, 1.0, 2.0]))[..., 3]
    assert alpha == pytest.approx([1.0, 1.0, 0.55, 0.1, 0.0, 0.0])


def test_compose_keeps_particles_near_cursor():
    source = RasterSurface(400, 400)
    source.fill((30, 61, 89, 1.0))
    dest = RasterSurface(400, 400)

    compose_focus(dest, source, 200.0, 200.0, 100.0)

    assert dest.alpha_at(200.0, 200.0) == pytest.approx(1.0)
    assert dest.alpha_at(240.0, 200.0) == pytest.approx(1.0)
    assert dest.alpha_at(280.0, 200.0) == pytest.approx(0.1, abs=0.01)
    assert dest.alpha_at(320.0, 200.0) == 0.0
    assert dest.alpha_at(10.0, 10.0) == 0.0
    # source untouched
    assert source.alpha_at(10.0, 10.0) == pytest.approx(1.0)


def test_compose_clears_previous_contents():
    source = RasterSurface(50, 50)
    dest = RasterSurface(50, 50)
    dest.fill((255, 0, 0, 1.0))

    compose_focus(dest, source, 25.0, 25.0, 20.0)

    assert not dest.pixels.any()
