import math

import pytest

from threebody.config import SimulationConfig
from threebody.physics import (
    GravitySolver,
    effective_distance,
    force_magnitude,
    integrate_bodies,
    spawn_bodies,
    total_velocity,
)
from threebody.vector_utils import Vector2

from conftest import make_body


def equilateral(side=100.0, mass=40.0):
    h = side * math.sqrt(3) / 2
    return [
        make_body(0.0, 0.0, mass),
        make_body(side, 0.0, mass),
        make_body(side / 2, h, mass),
    ]


def test_scenario_a_pairwise_magnitude(scenario_config):
    a, b, _ = equilateral()
    impulse = GravitySolver().pair_impulse(a, b, scenario_config)
    assert impulse.length() == pytest.approx(0.016)
    # Along the connecting line, pointing from b toward a
    assert impulse.x == pytest.approx(-0.016)
    assert impulse.y == pytest.approx(0.0)


def test_scenario_a_applied_to_all_pairs(scenario_config):
    bodies = equilateral()
    GravitySolver().apply(bodies, scenario_config)
    # Each body gets two 0.016 pulls 60 degrees apart
    expected = 2 * 0.016 * math.cos(math.radians(30))
    for body in bodies:
        assert body.velocity.length() == pytest.approx(expected)
    assert total_velocity(bodies) == pytest.approx((0.0, 0.0), abs=1e-12)


def test_pair_deltas_are_equal_and_opposite(scenario_config):
    a = make_body(10.0, 20.0, 30.0, vx=0.3, vy=-0.2)
    b = make_body(95.0, -40.0, 55.0, vx=-0.1, vy=0.4)
    va, vb = a.velocity, b.velocity
    GravitySolver().apply([a, b], scenario_config)
    da = a.velocity - va
    db = b.velocity - vb
    assert da.x == pytest.approx(-db.x)
    assert da.y == pytest.approx(-db.y)
    assert da.length() == pytest.approx(db.length())
    # Attraction: a moves toward b
    assert da.dot(b.position - a.position) > 0


def test_effective_distance_floor():
    assert effective_distance(Vector2(0.0, 0.0), 10.0) == 10.0
    assert effective_distance(Vector2(3.0, 4.0), 10.0) == 10.0
    assert effective_distance(Vector2(30.0, 40.0), 10.0) == 50.0


@pytest.mark.parametrize("separation", [0.0, 1e-9, 0.5, 5.0])
def test_force_never_exceeds_cap(separation):
    config = SimulationConfig(gravity_strength=100.0, min_distance=0.1, force_cap=50.0, force_scale=1.0)
    a = make_body(0.0, 0.0, mass=1000.0)
    b = make_body(separation, 0.0, mass=1000.0)
    impulse = GravitySolver().pair_impulse(a, b, config)
    assert impulse.length() <= config.force_cap + 1e-9


def test_coincident_bodies_do_not_blow_up(scenario_config):
    a = make_body(50.0, 50.0)
    b = make_body(50.0, 50.0)
    GravitySolver().apply([a, b], scenario_config)
    assert a.velocity == Vector2(0.0, 0.0)
    assert b.velocity == Vector2(0.0, 0.0)


def test_force_magnitude_uses_scale_after_cap():
    config = SimulationConfig(gravity_strength=1.0, force_cap=10.0, force_scale=0.5)
    assert force_magnitude(100.0, 100.0, 10.0, config) == 5.0


def test_dead_bodies_are_not_paired(scenario_config):
    a = make_body(0.0, 0.0)
    b = make_body(100.0, 0.0)
    b.alive = False
    GravitySolver().apply([a, b], scenario_config)
    assert a.velocity == Vector2(0.0, 0.0)
    assert b.velocity == Vector2(0.0, 0.0)


def test_integrate_bodies_moves_by_velocity():
    bodies = [make_body(0.0, 0.0, vx=1.0, vy=2.0), make_body(5.0, 5.0, vx=-1.0)]
    integrate_bodies(bodies, trail_capacity=10)
    assert bodies[0].position == Vector2(1.0, 2.0)
    assert bodies[1].position == Vector2(4.0, 5.0)
    assert list(bodies[0].trail) == [Vector2(0.0, 0.0)]


def test_spawn_bodies_within_margin(rng):
    config = SimulationConfig()
    w, h = 1100.0, 800.0
    margin = config.spawn_margin_px(w, h)
    for _ in range(50):
        bodies = spawn_bodies(w, h, config, rng)
        assert len(bodies) == 3
        for body, color in zip(bodies, config.colors):
            assert margin <= body.position.x <= w - margin
            assert margin <= body.position.y <= h - margin
            assert 22.0 <= body.mass < 66.0
            assert body.color == color
            assert body.trail.maxlen == config.trail_capacity
            assert 0.025 - 1e-9 <= body.velocity.length() < 1.125 + 1e-9
