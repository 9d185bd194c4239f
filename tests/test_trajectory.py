import math

import numpy as np
import pytest
import torch

from hermite_motion import (
    CubicWaypoint,
    EmptyTrajectoryError,
    ParameterDomainError,
    QuinticWaypoint,
    Segment,
    SepticWaypoint,
    Trajectory,
    UnsupportedDerivativeError,
    acceleration_at,
    get_segment,
    jerk_at,
    position_at,
    vec2,
    vec3,
    velocity_at,
)


# ---------------------------------------------------------------------------
# Segment selection
# ---------------------------------------------------------------------------


def test_get_segment_returns_bounding_pair(stop_and_go):
    subdiv = 4
    for i in range(2 * subdiv + 1):
        t = i / subdiv
        fract = t - math.floor(t)
        if fract == 0.0:
            expected = Segment(0.0, stop_and_go[int(t)], stop_and_go[int(t)])
        else:
            expected = Segment(fract, stop_and_go[int(t)], stop_and_go[int(t) + 1])
        assert stop_and_go.get_segment(t) == expected


def test_get_segment_on_empty_sequence_is_none():
    assert Trajectory([]).get_segment(0.5) is None
    assert get_segment([], 0.0) is None


@pytest.mark.parametrize("t", [-0.5, -1e-12, 2.5, 3.0, math.nan, math.inf])
def test_out_of_domain_parameter_raises(stop_and_go, t):
    with pytest.raises(ParameterDomainError):
        stop_and_go.position_at(t)


def test_last_index_is_in_domain(stop_and_go):
    assert stop_and_go.position_at(2.0) == stop_and_go[2].position


def test_single_waypoint_resolves_to_itself():
    wp = QuinticWaypoint(vec3(1.0, 2.0, 3.0), vec3(0.5, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
    traj = Trajectory([wp])

    assert traj.position_at(0.0) == wp.position
    assert traj.velocity_at(0.0) == wp.velocity
    assert traj.acceleration_at(0.0) == wp.acceleration
    with pytest.raises(ParameterDomainError):
        traj.position_at(0.5)


def test_scalar_query_accepts_zero_dim_arrays(straight_line):
    assert straight_line.position_at(np.float64(0.5)) == vec3(0.0, 0.5, 0.0)
    assert straight_line.position_at(torch.tensor(0.5)) == vec3(0.0, 0.5, 0.0)
    with pytest.raises(ParameterDomainError):
        straight_line.position_at(np.array([0.5, 0.6]))


# ---------------------------------------------------------------------------
# Empty trajectories
# ---------------------------------------------------------------------------


def test_queries_on_empty_sequence_return_none():
    for fn in (position_at, velocity_at, acceleration_at, jerk_at):
        assert fn([], 0.0) is None
        assert fn([], 0.5) is None

    traj = Trajectory([])
    assert len(traj) == 0
    assert traj.family is None
    assert traj.state_at(0.0) is None


def test_sample_on_empty_sequence_raises():
    with pytest.raises(EmptyTrajectoryError):
        Trajectory([]).sample([0.0])


# ---------------------------------------------------------------------------
# Quintic evaluation
# ---------------------------------------------------------------------------


def test_position_straight_line(straight_line):
    assert straight_line.position_at(0.0) == straight_line[0].position
    assert straight_line.position_at(0.5) == vec3(0.0, 0.5, 0.0)
    assert straight_line.position_at(1.0) == straight_line[1].position


def test_velocity_straight_line_opposite_starts(opposite_starts):
    assert opposite_starts.velocity_at(0.0) == opposite_starts[0].velocity
    assert opposite_starts.velocity_at(0.5) == vec3(0.0, 1.4375, 0.0)
    assert opposite_starts.velocity_at(1.0) == opposite_starts[1].velocity


def test_acceleration_curve(curve):
    assert curve.acceleration_at(0.0) == curve[0].acceleration
    assert curve.acceleration_at(0.5) == vec3(1.25, -1.25, 0.0)
    assert curve.acceleration_at(1.0) == curve[1].acceleration


def test_module_level_helpers_accept_plain_lists(curve):
    waypoints = list(curve)

    assert position_at(waypoints, 0.5) == curve.position_at(0.5)
    assert velocity_at(waypoints, 0.5) == curve.velocity_at(0.5)
    assert acceleration_at(waypoints, 0.5) == vec3(1.25, -1.25, 0.0)


def test_all_set_points_hit(stop_and_go):
    for i, wp in enumerate(stop_and_go):
        assert stop_and_go.position_at(float(i)) == wp.position
        assert stop_and_go.velocity_at(float(i)) == wp.velocity
        assert stop_and_go.acceleration_at(float(i)) == wp.acceleration


def test_start_acceleration_uses_its_own_weight():
    traj = Trajectory([
        QuinticWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0)),
        QuinticWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0)),
    ])

    # h5(0.5, 2) = 1/64; the velocity weight h5(0.5, 1) would give 5/32
    np.testing.assert_allclose(traj.position_at(0.5).to_numpy(), [1.0 / 64.0, 0.0, 0.0])


def test_motion_is_continuous_across_waypoints(stop_and_go):
    for order in range(3):
        before = stop_and_go.evaluate(1.0 - 1e-9, order)
        after = stop_and_go.evaluate(1.0 + 1e-9, order)
        assert before.allclose(after, atol=1e-6)


def test_jerk_not_available_for_quintic(straight_line):
    with pytest.raises(UnsupportedDerivativeError):
        straight_line.jerk_at(0.5)


def test_state_at_bundles_all_queries(curve):
    state = curve.state_at(0.25)

    assert isinstance(state, QuinticWaypoint)
    assert state.position == curve.position_at(0.25)
    assert state.velocity == curve.velocity_at(0.25)
    assert state.acceleration == curve.acceleration_at(0.25)


# ---------------------------------------------------------------------------
# Cubic and septic evaluation
# ---------------------------------------------------------------------------


@pytest.fixture
def cubic_opposite_starts():
    return Trajectory([
        CubicWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0)),
        CubicWaypoint(vec3(0.0, 1.0, 0.0), vec3(0.0, 0.0, 0.0)),
    ])


def test_cubic_trajectory(cubic_opposite_starts):
    traj = cubic_opposite_starts

    assert traj.position_at(0.5) == vec3(0.0, 0.625, 0.0)
    assert traj.velocity_at(0.5) == vec3(0.0, 1.25, 0.0)
    assert traj.position_at(1.0) == traj[1].position
    assert traj.velocity_at(0.0) == traj[0].velocity


def test_cubic_has_no_acceleration(cubic_opposite_starts):
    with pytest.raises(UnsupportedDerivativeError):
        cubic_opposite_starts.acceleration_at(0.5)
    assert isinstance(cubic_opposite_starts.state_at(0.5), CubicWaypoint)


@pytest.fixture
def septic_pair():
    return Trajectory([
        SepticWaypoint(vec2(0.0, 0.0), vec2(1.0, 0.0), vec2(0.0, 0.5), vec2(0.25, 0.0)),
        SepticWaypoint(vec2(1.0, 1.0), vec2(0.0, 1.0), vec2(-0.5, 0.0), vec2(0.0, -0.25)),
    ])


def test_septic_hits_every_boundary_state(septic_pair):
    for t, wp in ((0.0, septic_pair[0]), (1.0, septic_pair[1])):
        assert septic_pair.position_at(t) == wp.position
        assert septic_pair.velocity_at(t) == wp.velocity
        assert septic_pair.acceleration_at(t) == wp.acceleration
        assert septic_pair.jerk_at(t) == wp.jerk


def test_septic_jerk_matches_finite_difference(septic_pair):
    step = 1e-5
    t = 0.4
    numeric = (septic_pair.acceleration_at(t + step) - septic_pair.acceleration_at(t - step)) / (2 * step)
    assert numeric.allclose(septic_pair.jerk_at(t), atol=1e-4)


def test_septic_straight_line_midpoint():
    zero = vec3(0.0, 0.0, 0.0)
    traj = Trajectory([
        SepticWaypoint(zero, zero, zero, zero),
        SepticWaypoint(vec3(0.0, 1.0, 0.0), zero, zero, zero),
    ])

    assert traj.position_at(0.5) == vec3(0.0, 0.5, 0.0)
    assert jerk_at(list(traj), 0.0) == zero


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_mixed_waypoint_kinds_raise():
    with pytest.raises(ValueError, match="Mixed waypoint kinds"):
        Trajectory([
            CubicWaypoint(vec2(0.0, 0.0), vec2(0.0, 0.0)),
            QuinticWaypoint(vec2(0.0, 0.0), vec2(0.0, 0.0), vec2(0.0, 0.0)),
        ])


def test_mixed_dimensions_raise():
    with pytest.raises(ValueError, match="Dimension mismatch"):
        Trajectory([
            CubicWaypoint(vec2(0.0, 0.0), vec2(0.0, 0.0)),
            CubicWaypoint(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0)),
        ])


def test_non_waypoint_raises():
    with pytest.raises(TypeError):
        Trajectory([(vec2(0.0, 0.0), vec2(0.0, 0.0))])


def test_from_arrays_picks_kind(stop_and_go):
    positions = np.array([[0.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 2.0, 0.0]])
    velocities = np.array([[0.0, 1.0, 0.0], [0.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    accelerations = np.zeros((3, 3))

    traj = Trajectory.from_arrays(positions, velocities, accelerations)

    assert traj.family == stop_and_go.family
    assert list(traj) == list(stop_and_go)
    assert Trajectory.from_arrays(positions, velocities).family.value == "cubic"
    with pytest.raises(ValueError):
        Trajectory.from_arrays(positions, velocities, jerks=accelerations)
    with pytest.raises(ValueError):
        Trajectory.from_arrays(positions, velocities[:2])


def test_trajectory_metadata(stop_and_go):
    assert len(stop_and_go) == 3
    assert stop_and_go.dim == 3
    assert stop_and_go.backend == "numpy"
    assert stop_and_go.duration == 2.0
    assert "quintic" in repr(stop_and_go)


# ---------------------------------------------------------------------------
# Batched sampling
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("order", [0, 1, 2])
def test_sample_matches_scalar_queries(stop_and_go, order):
    query = stop_and_go.linspace(17)
    result = stop_and_go.sample(query, order=order)

    assert result.shape == (17, 3)
    expected = np.stack([stop_and_go.evaluate(float(t), order).to_numpy() for t in query])
    np.testing.assert_allclose(result, expected, atol=1e-12)


def test_sample_rejects_out_of_range(stop_and_go):
    with pytest.raises(ParameterDomainError):
        stop_and_go.sample([0.0, 2.5])
    with pytest.raises(ParameterDomainError):
        stop_and_go.sample([-0.1, 1.0])


def test_sample_torch_backend_matches_numpy(stop_and_go):
    torch_traj = Trajectory([
        QuinticWaypoint(
            *(vec3(*state.tolist(), backend="torch") for state in wp.states)
        )
        for wp in stop_and_go
    ])

    query = torch_traj.linspace(9)
    result = torch_traj.sample(query, order=1)

    assert isinstance(result, torch.Tensor)
    assert result.dtype == torch.float64
    np.testing.assert_allclose(result.numpy(), stop_and_go.sample(query.numpy(), order=1), atol=1e-12)
    assert torch_traj.velocity_at(0.5).allclose(vec3(0.0, 1.4375, 0.0, backend="torch"))


def test_sample_rejects_multidimensional_query(stop_and_go):
    with pytest.raises(ValueError, match="shape"):
        stop_and_go.sample(np.array([[0.0, 0.5], [1.0, 1.5]]))


def test_segment_blend_matches_queries(curve):
    segment = curve.get_segment(0.5)

    assert segment.blend() == curve.position_at(0.5)
    assert segment.blend(2) == vec3(1.25, -1.25, 0.0)


def test_module_level_helpers_reuse_trajectory(curve, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("trajectory was rebuilt")

    monkeypatch.setattr(Trajectory, "__post_init__", fail)

    assert position_at(curve, 0.5) == curve.position_at(0.5)
    assert get_segment(curve, 0.5) == curve.get_segment(0.5)
