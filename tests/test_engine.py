import math

import pytest

from molecular.engine import Cursor, Layers, LoopState, MolecularEngine, SceneParams


def test_initial_population_matches_viewport():
    engine = MolecularEngine(300, 300, seed=1)

    assert len(engine.particles) == 10
    assert len(engine.vapor) == 8
    assert engine.state is LoopState.RUNNING


def test_resize_repopulates_both_collections():
    engine = MolecularEngine(300, 300, seed=1)
    old_particles = list(engine.particles.particles)

    engine.resize(900, 600)

    assert len(engine.particles) == math.floor(900 * 600 / 9000)
    assert len(engine.vapor) == 8
    assert not set(map(id, old_particles)) & set(map(id, engine.particles.particles))
    assert engine.focus_radius == pytest.approx(240.0)
    assert (engine.cursor.x, engine.cursor.y) == (450.0, 300.0)
    assert (engine.cursor.target_x, engine.cursor.target_y) == (450.0, 300.0)


def test_resize_reconfigures_before_running(monkeypatch):
    engine = MolecularEngine(300, 300, seed=1)
    seen = []
    original = engine.particles.populate

    def spy(width, height, params):
        seen.append((engine.state, len(engine.vapor)))
        original(width, height, params)

    monkeypatch.setattr(engine.particles, "populate", spy)
    engine.resize(400, 400)

    assert seen == [(LoopState.RECONFIGURING, 0)]
    assert engine.state is LoopState.RUNNING


def test_resize_rejects_empty_viewport():
    engine = MolecularEngine(300, 300, seed=1)
    with pytest.raises(ValueError):
        engine.resize(0, 300)


def test_easing_at_rest_is_idempotent():
    engine = MolecularEngine(400, 200, seed=2)
    before = (engine.cursor.x, engine.cursor.y)

    engine.update_mouse_position()

    assert (engine.cursor.x, engine.cursor.y) == before


def test_easing_moves_fraction_of_remaining_distance():
    engine = MolecularEngine(400, 200, seed=2)
    engine.pointer_moved(300.0, 100.0)

    engine.update_mouse_position()
    assert engine.cursor.x == pytest.approx(215.0)

    engine.update_mouse_position()
    assert engine.cursor.x == pytest.approx(215.0 + 85.0 * 0.15)


def test_pointer_leave_retargets_centre():
    engine = MolecularEngine(400, 200, seed=2)
    engine.pointer_moved(10.0, 10.0)
    engine.pointer_left()

    assert (engine.cursor.target_x, engine.cursor.target_y) == (200.0, 100.0)


def test_cursor_ease():
    cursor = Cursor(x=0.0, y=0.0, target_x=100.0, target_y=-100.0)
    cursor.ease(0.5)
    assert (cursor.x, cursor.y) == (50.0, -50.0)


def test_same_seed_same_field():
    a = MolecularEngine(600, 300, seed=42)
    b = MolecularEngine(600, 300, seed=42)

    assert [(p.x, p.y) for p in a.particles.particles] == [
        (p.x, p.y) for p in b.particles.particles
    ]


def test_frame_renders_all_layers():
    engine = MolecularEngine(300, 300, seed=4)
    layers = Layers.create(300, 300, scale=0.25)

    engine.frame(layers)

    assert engine.frame_count == 1
    # opaque background under the vapor
    assert layers.vapor.pixels[..., 3].min() == pytest.approx(1.0)
    assert layers.molecular.pixels[..., 3].max() > 0.0
    # corner lies outside the 120-unit focus disc around the centre
    assert layers.focus.alpha_at(0.0, 0.0) == 0.0
    assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in engine.particles.particles)


def test_run_steps_many_frames():
    engine = MolecularEngine(300, 300, seed=4)
    layers = Layers.create(300, 300, scale=0.2)

    engine.run(layers, 3)

    assert engine.frame_count == 3


def test_layers_resize_together():
    layers = Layers.create(100, 100, scale=0.5)
    layers.resize(200, 80)
    assert {s.pixel_size for s in (layers.vapor, layers.molecular, layers.focus)} == {(100, 40)}


@pytest.mark.parametrize(
    "overrides",
    [
        {"interaction_radius": 0.0},
        {"home_rate": 0.0},
        {"area_per_particle": -1.0},
        {"connection_distance": 0.0},
        {"vapor_count": -1},
        {"cursor_easing": 1.5},
        {"focus_fraction": 0.0},
    ],
)
def test_invalid_params_raise(overrides):
    with pytest.raises(ValueError):
        SceneParams(**overrides)
