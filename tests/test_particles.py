import math

import numpy as np
import pytest

from molecular.engine import SceneParams
from molecular.palettes import get_scheme
from molecular.particles import (
    Particle,
    ParticleField,
    draw_connections,
    iter_connections,
    particle_count,
    update_particle,
)
from molecular.surface import RasterSurface


def still_particle(x, y, base_x=None, base_y=None, density=10.0):
    return Particle(
        x=x, y=y,
        base_x=x if base_x is None else base_x,
        base_y=y if base_y is None else base_y,
        size=2.0, speed_x=0.0, speed_y=0.0, density=density,
    )


def test_coincident_cursor_keeps_position_finite():
    params = SceneParams()
    particle = still_particle(50.0, 50.0)

    update_particle(particle, 50.0, 50.0, 200.0, 200.0, params)

    assert math.isfinite(particle.x) and math.isfinite(particle.y)
    assert particle.x == 50.0
    assert particle.y == 50.0


def test_coincident_cursor_still_drifts():
    params = SceneParams()
    particle = still_particle(50.0, 50.0)
    particle.speed_x = 0.25

    for _ in range(5):
        update_particle(particle, particle.x, particle.y, 200.0, 200.0, params)

    assert math.isfinite(particle.x)
    assert particle.x == pytest.approx(51.25)


def test_far_cursor_eases_particle_home():
    params = SceneParams()
    particle = still_particle(100.0, 50.0, base_x=50.0, base_y=50.0)

    offsets = []
    for _ in range(20):
        update_particle(particle, 1500.0, 1500.0, 2000.0, 2000.0, params)
        offsets.append(abs(particle.x - particle.base_x))

    assert all(b < a for a, b in zip(offsets, offsets[1:]))
    assert offsets[-1] == pytest.approx(50.0 * 0.95 ** 20)
    assert particle.y == 50.0

    for _ in range(60):
        update_particle(particle, 1500.0, 1500.0, 2000.0, 2000.0, params)
    assert abs(particle.x - 50.0) < 1.0


def test_cursor_repels_inside_interaction_radius():
    params = SceneParams()
    particle = still_particle(50.0, 50.0, density=10.0)

    # distance 50 -> force (100 - 50) / 100 * 10 = 5, pushed away along +x
    update_particle(particle, 0.0, 50.0, 200.0, 200.0, params)

    assert particle.x == pytest.approx(55.0)
    assert particle.y == pytest.approx(50.0)


def test_repulsion_vanishes_at_radius_edge():
    params = SceneParams()
    particle = still_particle(150.0, 50.0, base_x=150.0)

    update_particle(particle, 50.0, 50.0, 200.0, 200.0, params)

    assert particle.x == 150.0


def test_wall_bounce_flips_velocity():
    params = SceneParams()
    particle = still_particle(-1.0, 50.0)
    particle.speed_x = -0.5

    update_particle(particle, 1000.0, 1000.0, 100.0, 100.0, params)

    assert particle.speed_x == 0.5
    assert particle.x == pytest.approx(-0.5)


def test_connection_alpha_just_inside_distance():
    a = still_particle(0.0, 0.0)
    b = still_particle(99.0, 0.0)

    links = list(iter_connections([a, b], 100.0))

    assert len(links) == 1
    assert links[0][2] == pytest.approx(0.01)


def test_no_connection_at_exact_distance():
    a = still_particle(0.0, 0.0)
    b = still_particle(100.0, 0.0)

    assert list(iter_connections([a, b], 100.0)) == []


def test_no_self_connections():
    lone = still_particle(10.0, 10.0)
    assert list(iter_connections([lone], 100.0)) == []

    trio = [still_particle(0.0, 0.0), still_particle(30.0, 0.0), still_particle(0.0, 40.0)]
    pairs = {(id(a), id(b)) for a, b, _ in iter_connections(trio, 100.0)}
    assert len(pairs) == 3


def test_draw_connections_strokes_between_particles():
    surface = RasterSurface(100, 20)
    scheme = get_scheme("abyss")
    particles = [still_particle(10.0, 10.5), still_particle(60.0, 10.5)]

    drawn = draw_connections(particles, surface, scheme, 100.0)

    assert drawn == 1
    assert surface.alpha_at(35.0, 10.5) == pytest.approx(0.5)
    assert surface.alpha_at(80.0, 10.5) == 0.0


def test_particle_count_from_area():
    assert particle_count(1280, 720, 9000) == 102
    assert particle_count(90, 90, 9000) == 0
    assert particle_count(300, 300, 9000) == 10


def test_spawn_attribute_ranges():
    rng = np.random.default_rng(7)
    for _ in range(200):
        p = Particle.spawn(5.0, 6.0, rng)
        assert (p.base_x, p.base_y) == (5.0, 6.0)
        assert 1.0 <= p.size < 4.0
        assert -0.5 <= p.speed_x < 0.5
        assert -0.5 <= p.speed_y < 0.5
        assert 1.0 <= p.density < 31.0


def test_field_populates_inside_viewport():
    field = ParticleField(np.random.default_rng(3))
    field.populate(600.0, 300.0, SceneParams())

    assert len(field) == 20
    assert all(0 <= p.x < 600 and 0 <= p.y < 300 for p in field.particles)

    field.clear()
    assert len(field) == 0
