import numpy as np
import pytest

from boids import Flock, FlockConfigError, create_flock, initialize_flock, step_flock
from boids.flock import alignment_steer, cohesion_steer, separation_steer


@pytest.fixture
def crowded_flock():
    # Small cube so neighborhoods overlap and every rule is active
    return initialize_flock(120, 60.0, seed=11)


def test_initialize_flock_builds_requested_population():
    flock = initialize_flock(25, 100.0, seed=1)

    assert len(flock) == 25
    assert flock.tick == 0
    assert flock.positions.shape == (25, 3)
    np.testing.assert_allclose(np.linalg.norm(flock.velocities, axis=1), 1.0)
    assert np.all(np.abs(flock.positions) <= 100.0)
    np.testing.assert_array_equal(flock.alignment, np.zeros((25, 3)))


def test_initialize_flock_passes_overrides():
    flock = initialize_flock(5, 100.0, seed=1, alignment_radius=12.0, separation_force=0.5)
    assert flock.settings.alignment_radius == 12.0
    assert flock.settings.separation_force == 0.5


def test_seeded_initialization_is_reproducible():
    a = initialize_flock(30, 200.0, seed=5)
    b = initialize_flock(30, 200.0, seed=5)
    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.velocities, b.velocities)


def test_create_flock_uses_given_generator(settings):
    rng = np.random.default_rng(3)
    flock = create_flock(4, settings, rng)
    assert len(flock) == 4
    assert [boid.index for boid in flock] == [0, 1, 2, 3]


def test_velocity_stays_unit_length(crowded_flock):
    for _ in range(200):
        step_flock(crowded_flock)
        np.testing.assert_allclose(np.linalg.norm(crowded_flock.velocities, axis=1), 1.0, atol=1e-12)
    assert crowded_flock.tick == 200


def test_positions_stay_inside_bounds(crowded_flock):
    bounds = crowded_flock.settings.bounds
    for _ in range(200):
        step_flock(crowded_flock)
        assert np.all(crowded_flock.positions <= bounds)
        assert np.all(crowded_flock.positions >= -bounds)


def test_lone_boid_moves_in_a_straight_line(make_flock):
    flock = make_flock([[0.0, 0.0, 0.0]], [[0.6, 0.8, 0.0]])
    for tick in range(1, 11):
        step_flock(flock)
        np.testing.assert_array_equal(flock.alignment[0], np.zeros(3))
        np.testing.assert_array_equal(flock.cohesion[0], np.zeros(3))
        np.testing.assert_array_equal(flock.separation[0], np.zeros(3))
        np.testing.assert_allclose(flock.velocities[0], [0.6, 0.8, 0.0], rtol=1e-12)
        np.testing.assert_allclose(flock.positions[0], [0.6 * tick, 0.8 * tick, 0.0], rtol=1e-12)


def test_lone_boid_eventually_wraps(make_flock):
    flock = make_flock([[0.0, 0.0, 0.0]], [[1.0, 0.0, 0.0]], bounds=10.0)
    for _ in range(10):
        step_flock(flock)
    assert flock.positions[0, 0] == 10.0
    step_flock(flock)
    assert flock.positions[0, 0] == -10.0


def test_wrap_teleports_to_opposite_face(make_flock):
    flock = make_flock([[500.0 + 1e-6, 0.0, 0.0]], [[1.0, 0.0, 0.0]])
    step_flock(flock)
    np.testing.assert_array_equal(flock.positions[0], [-500.0, 0.0, 0.0])


def test_wrap_negative_face_per_axis(make_flock):
    flock = make_flock([[3.0, 2.0, -499.5]], [[0.0, 0.0, -1.0]])
    step_flock(flock)
    np.testing.assert_array_equal(flock.positions[0], [3.0, 2.0, 500.0])


def test_step_is_deterministic(crowded_flock):
    for _ in range(5):
        step_flock(crowded_flock)
    positions, velocities = crowded_flock.snapshot()

    a = Flock.from_arrays(positions, velocities, crowded_flock.settings)
    b = Flock.from_arrays(positions, velocities, crowded_flock.settings)
    for _ in range(3):
        step_flock(a)
        step_flock(b)

    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.velocities, b.velocities)


def test_steering_reads_only_the_previous_tick(crowded_flock):
    s = crowded_flock.settings
    positions, velocities = crowded_flock.snapshot()
    step_flock(crowded_flock)

    for i in range(len(crowded_flock)):
        np.testing.assert_array_equal(
            crowded_flock.alignment[i],
            alignment_steer(i, positions, velocities, s.alignment_radius, s.alignment_force))
        np.testing.assert_array_equal(
            crowded_flock.cohesion[i],
            cohesion_steer(i, positions, velocities, s.cohesion_radius, s.cohesion_force))
        np.testing.assert_array_equal(
            crowded_flock.separation[i],
            separation_steer(i, positions, velocities, s.separation_radius, s.separation_force))


def test_result_does_not_depend_on_boid_order(crowded_flock):
    positions, velocities = crowded_flock.snapshot()
    order = np.random.default_rng(0).permutation(len(crowded_flock))

    shuffled = Flock.from_arrays(positions[order], velocities[order], crowded_flock.settings)
    step_flock(crowded_flock)
    step_flock(shuffled)

    np.testing.assert_allclose(shuffled.positions, crowded_flock.positions[order], atol=1e-9)
    np.testing.assert_allclose(shuffled.velocities, crowded_flock.velocities[order], atol=1e-9)


def test_acceleration_is_fresh_sum_of_steering(crowded_flock):
    crowded_flock.accelerations[:] = 99.0
    step_flock(crowded_flock)
    np.testing.assert_array_equal(
        crowded_flock.accelerations,
        crowded_flock.alignment + crowded_flock.cohesion + crowded_flock.separation
    )


def test_zero_velocity_sum_keeps_previous_heading(make_flock):
    flock = make_flock([[0.0, 0.0, 0.0]], [[0.02, 0.0, 0.0]])
    flock.alignment[0] = [-0.02, 0.0, 0.0]
    flock.integrate()

    np.testing.assert_array_equal(flock.velocities[0], [0.02, 0.0, 0.0])
    np.testing.assert_array_equal(flock.positions[0], [0.02, 0.0, 0.0])
    assert np.all(np.isfinite(flock.velocities))


def test_coincident_flock_stays_finite(make_flock):
    velocities = np.random.default_rng(2).normal(size=(6, 3))
    velocities /= np.linalg.norm(velocities, axis=1, keepdims=True)
    flock = make_flock(np.zeros((6, 3)), velocities)
    for _ in range(20):
        step_flock(flock)
    assert np.all(np.isfinite(flock.positions))
    assert np.all(np.isfinite(flock.velocities))
    np.testing.assert_allclose(np.linalg.norm(flock.velocities, axis=1), 1.0, atol=1e-12)


def test_radius_larger_than_cube_is_valid(make_flock):
    flock = make_flock(
        [[-400.0, 0.0, 0.0], [400.0, 0.0, 0.0]],
        [[0.0, 1.0, 0.0], [1.0, 0.0, 0.0]],
        alignment_radius=5000.0, cohesion_radius=5000.0, separation_radius=5000.0,
    )
    step_flock(flock)
    assert np.all(np.isfinite(flock.velocities))
    assert np.linalg.norm(flock.separation[0]) == pytest.approx(0.08)


def test_empty_flock_steps(settings):
    flock = Flock.from_arrays(np.zeros((0, 3)), np.zeros((0, 3)), settings)
    step_flock(flock)
    assert len(flock) == 0
    assert flock.tick == 1
    assert flock.look_targets().shape == (0, 3)


def test_look_targets_face_along_velocity(crowded_flock):
    step_flock(crowded_flock)
    np.testing.assert_array_equal(
        crowded_flock.look_targets(), crowded_flock.positions + crowded_flock.velocities
    )
    boid = crowded_flock[7]
    np.testing.assert_array_equal(boid.look_target(), crowded_flock.look_targets()[7])


def test_boid_view_aliases_flock_storage(make_flock):
    flock = make_flock([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]], [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    boid = flock[-1]
    assert boid.index == 1
    boid.position[0] = 42.0
    assert flock.positions[1, 0] == 42.0
    with pytest.raises(IndexError):
        flock[2]


def test_snapshot_is_a_copy(make_flock):
    flock = make_flock([[0.0, 0.0, 0.0]], [[1.0, 0.0, 0.0]])
    positions, _ = flock.snapshot()
    step_flock(flock)
    np.testing.assert_array_equal(positions, [[0.0, 0.0, 0.0]])


@pytest.mark.parametrize("positions, velocities", [
    (np.zeros((3, 2)), np.zeros((3, 2))),
    (np.zeros((3, 3)), np.zeros((2, 3))),
    (np.zeros(3), np.zeros(3)),
    (np.full((1, 3), np.nan), np.zeros((1, 3))),
])
def test_from_arrays_rejects_bad_state(settings, positions, velocities):
    with pytest.raises(FlockConfigError):
        Flock.from_arrays(positions, velocities, settings)
