import dataclasses
import math

import pytest

from orbital.constants import SUBSTEP_DT
from orbital.data_models import SimulationConfig
from orbital.physics import (
    advance,
    circular_orbit_velocity,
    compute_forces,
    kinetic_energy,
    orbital_period,
    potential_energy,
    total_momentum,
)


def _run(bodies, config, steps, dt=SUBSTEP_DT):
    for _ in range(steps):
        bodies = advance(bodies, config, dt)
    return bodies


def test_pair_forces_are_equal_and_opposite(make_body, config):
    bodies = [make_body((0.0, 0.0), mass=30.0), make_body((17.3, -4.1), mass=7.0)]
    forces = compute_forces(bodies, config)
    assert forces[0][0] == -forces[1][0]
    assert forces[0][1] == -forces[1][1]


def test_forces_are_attractive(make_body, config):
    bodies = [make_body((0.0, 0.0)), make_body((10.0, 0.0))]
    forces = compute_forces(bodies, config)
    assert forces[0][0] > 0
    assert forces[1][0] < 0
    expected = config.G * 100.0 * 100.0 / 100.0
    assert forces[0][0] == pytest.approx(expected)


def test_softening_bounds_force(make_body, config):
    bodies = [make_body((0.0, 0.0)), make_body((2.0, 0.0))]
    hard = compute_forces(bodies, config)[0][0]
    soft = compute_forces(bodies, dataclasses.replace(config, softening=5.0))[0][0]
    assert soft == pytest.approx(config.G * 100 * 100 / (4.0 + 25.0))
    assert soft < hard


def test_net_force_vanishes_for_many_bodies(make_body, config):
    bodies = [make_body((i * 13.0, (i * 7) % 5 * 11.0), mass=10.0 + i) for i in range(8)]
    forces = compute_forces(bodies, config)
    assert abs(forces[:, 0].sum()) < 1e-9
    assert abs(forces[:, 1].sum()) < 1e-9


def test_close_pairs_exert_no_force(make_body, config):
    bodies = [make_body((0.0, 0.0)), make_body((0.5, 0.0))]
    forces = compute_forces(bodies, config)
    assert forces.tolist() == [[0.0, 0.0], [0.0, 0.0]]


def test_advance_is_pure(make_body, config):
    bodies = [make_body((0.0, 0.0), (1.0, 0.0)), make_body((50.0, 0.0))]
    before = list(bodies)
    result = advance(bodies, config, SUBSTEP_DT)
    assert bodies == before
    assert result is not bodies
    assert result[0].position != bodies[0].position


def test_semi_implicit_euler_update(make_body, config):
    bodies = [make_body((0.0, 0.0), (0.0, 1.0), mass=2.0), make_body((10.0, 0.0), mass=100.0, is_fixed=True)]
    dt = 0.1
    result = advance(bodies, config, dt)
    ax = config.G * 2.0 * 100.0 / 100.0 / 2.0
    vx = ax * dt
    assert result[0].velocity.x == pytest.approx(vx)
    assert result[0].velocity.y == pytest.approx(1.0)
    # position uses the updated velocity
    assert result[0].position.x == pytest.approx(vx * dt)
    assert result[0].position.y == pytest.approx(0.1)


def test_time_scale_multiplies_step(make_body, config):
    bodies = [make_body((0.0, 0.0), (2.0, 0.0))]
    fast = advance(bodies, dataclasses.replace(config, time_scale=3.0), 0.5)
    assert fast[0].position.x == pytest.approx(3.0)


def test_empty_list(config):
    assert advance([], config, SUBSTEP_DT) == []


def test_fixed_body_never_moves(make_body, config):
    anchor = make_body((0.0, 0.0), (5.0, 5.0), mass=10.0, is_fixed=True)
    heavy = make_body((30.0, 0.0), mass=10_000.0)
    bodies = _run([anchor, heavy], config, 200)
    assert bodies[0] is anchor
    assert bodies[0].position == (0.0, 0.0)
    assert bodies[0].velocity == (5.0, 5.0)
    # the fixed body still pulls on the other one
    assert bodies[1].velocity.x < 0


def test_momentum_is_conserved(make_body):
    config = SimulationConfig(G=0.5, time_scale=5.0, softening=5.0)
    bodies = [
        make_body((0.0, 0.0), (0.0, -0.5), mass=400.0),
        make_body((120.0, 10.0), (0.0, 2.0), mass=50.0),
        make_body((-80.0, 60.0), (1.0, 0.0), mass=120.0),
    ]
    p0 = total_momentum(bodies)
    bodies = _run(bodies, config, 500)
    p1 = total_momentum(bodies)
    assert p1.x == pytest.approx(p0.x, abs=1e-8)
    assert p1.y == pytest.approx(p0.y, abs=1e-8)


def test_energy_stays_bounded(make_body):
    config = SimulationConfig(G=0.5, time_scale=5.0, softening=5.0)
    bodies = [make_body((0.0, 0.0), mass=5000.0, is_fixed=True),
              make_body((200.0, 0.0), (0.0, 3.5), mass=50.0)]
    e0 = kinetic_energy(bodies) + potential_energy(bodies, config)
    bodies = _run(bodies, config, 2000)
    e1 = kinetic_energy(bodies) + potential_energy(bodies, config)
    assert e1 == pytest.approx(e0, rel=1e-2)


def test_coincident_bodies_stay_finite(make_body, config):
    bodies = [make_body((5.0, 5.0)), make_body((5.0, 5.0)), make_body((40.0, 0.0))]
    bodies = _run(bodies, config, 50)
    for b in bodies:
        assert all(math.isfinite(c) for c in (*b.position, *b.velocity))
        assert all(math.isfinite(c) for p in b.trail for c in p)


def test_non_finite_update_keeps_previous_state(make_body):
    config = SimulationConfig(time_scale=1e10, softening=0.0)
    runaway = make_body((0.0, 0.0), (1e308, 0.0), mass=1.0)
    calm = make_body((0.0, 500.0), (0.0, 0.0), mass=1.0)
    result = advance([runaway, calm], config, SUBSTEP_DT)
    assert result[0] is runaway
    assert math.isfinite(result[1].position.y)


def test_trail_is_bounded_and_ends_at_position(make_body):
    config = SimulationConfig(time_scale=1.0, trail_length=5, softening=0.0)
    bodies = _run([make_body((0.0, 0.0), (1000.0, 0.0))], config, 20)
    assert len(bodies[0].trail) == 5
    assert bodies[0].trail[-1] == bodies[0].position
    xs = [p.x for p in bodies[0].trail]
    assert xs == sorted(xs)


def test_trail_is_decimated_during_slow_motion(make_body, config):
    bodies = _run([make_body((0.0, 0.0), (0.1, 0.0))], config, 10)
    assert len(bodies[0].trail) == 1


def test_zero_trail_length_keeps_trail_empty(make_body):
    config = SimulationConfig(trail_length=0)
    bodies = _run([make_body((0.0, 0.0), (100.0, 0.0))], config, 5)
    assert bodies[0].trail == ()


def test_lowered_trail_length_bounds_every_body(make_body, config):
    long_trail = tuple((float(i) * 5.0, 0.0) for i in range(50))
    resting = dataclasses.replace(make_body((245.0, 0.0)), trail=long_trail)
    anchored = dataclasses.replace(make_body((0.0, 900.0), is_fixed=True), trail=long_trail)
    config = dataclasses.replace(config, trail_length=10)

    result = advance([resting, anchored], config, SUBSTEP_DT)

    for body in result:
        assert len(body.trail) == 10
        assert body.trail == long_trail[-10:]
    assert result[1].position == anchored.position
    assert result[1].velocity == anchored.velocity


def test_fixed_body_within_trail_length_is_passed_through(make_body, config):
    sun = make_body((0.0, 0.0), is_fixed=True)
    result = advance([sun, make_body((100.0, 0.0))], config, SUBSTEP_DT)
    assert result[0] is sun


def test_circular_orbit_returns_to_start(make_body, config):
    config = dataclasses.replace(config, time_scale=5.0)
    G, central, r = config.G, 1000.0, 100.0
    v = circular_orbit_velocity(G, central, r)
    assert v == pytest.approx(math.sqrt(G * central / r))
    sun = make_body((0.0, 0.0), mass=central, is_fixed=True)
    planet = make_body((r, 0.0), (0.0, v), mass=1.0)

    dt = SUBSTEP_DT
    steps = round(orbital_period(G, central, r) / (dt * config.time_scale))
    bodies = _run([sun, planet], config, steps, dt)
    end = bodies[1].position
    assert math.hypot(end.x - r, end.y) < 1.0


def test_period_helpers():
    assert circular_orbit_velocity(1.0, 1.0, 0.0) == 0.0
    assert orbital_period(1.0, 0.0, 10.0) == math.inf
    assert orbital_period(1.0, 1.0, 1.0) == pytest.approx(2 * math.pi)
