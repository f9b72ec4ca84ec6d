import numpy as np
import pytest

from toptw_grasp.config.enums import STATUS_COMPLETE, STATUS_INCOMPLETE
from toptw_grasp.engine.instance import ProblemInstance
from toptw_grasp.engine.route_state import RouteState
from toptw_grasp.operators.construction import greedy_randomized_construction


def _two_point_instance(b_due=50.0, n_vehicles=1):
    inst = ProblemInstance(2, n_vehicles)
    inst.set_node(0, 0.0, 0.0, service=0.0, reward=0.0, ready=0.0, due=100.0)
    inst.set_node(1, 10.0, 0.0, service=0.0, reward=5.0, ready=0.0, due=50.0)
    inst.set_node(2, 20.0, 0.0, service=0.0, reward=5.0, ready=0.0, due=b_due)
    inst.compute_distance_matrix()
    inst.max_time_per_route = 100.0
    return inst


def _late_point_instance(n_vehicles=1):
    inst = ProblemInstance(1, n_vehicles)
    inst.set_node(0, 0.0, 0.0, service=0.0, reward=0.0, ready=0.0, due=100.0)
    inst.set_node(1, 10.0, 0.0, service=0.0, reward=7.0, ready=150.0, due=200.0)
    inst.compute_distance_matrix()
    inst.max_time_per_route = 100.0
    return inst


@pytest.mark.parametrize("policy", ["random", "best_value", "alpha_cut"])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_two_points_share_one_route(policy, seed):
    state = RouteState(_two_point_instance())
    result = greedy_randomized_construction(
        state, rcl_size=3, policy=policy, rng=np.random.default_rng(seed)
    )

    assert result["status"] == STATUS_COMPLETE
    assert result["fitness"] == pytest.approx(10.0)
    assert result["unrouted"].size == 0
    assert state.routes()[0] in ([1, 2], [2, 1])
    assert state.created_routes == 1
    assert state.check_cycles()
    assert state.is_feasible()


def test_unreachable_window_leaves_point_out():
    state = RouteState(_two_point_instance(b_due=5.0))
    result = greedy_randomized_construction(state, rng=np.random.default_rng(0))

    assert result["fitness"] == pytest.approx(5.0)
    assert result["status"] == STATUS_INCOMPLETE
    assert result["unrouted"].tolist() == [2]
    assert state.routes() == [[1]]


def test_point_ready_after_route_bound_is_dropped():
    state = RouteState(_late_point_instance())
    result = greedy_randomized_construction(state, rng=np.random.default_rng(0))

    assert result["fitness"] == 0.0
    assert result["status"] == STATUS_INCOMPLETE
    assert result["unrouted"].tolist() == [1]
    assert result["inserted"] == 0
    assert state.routes() == [[]]


def test_spare_vehicles_are_opened_before_giving_up():
    state = RouteState(_late_point_instance(n_vehicles=3))
    result = greedy_randomized_construction(state, rng=np.random.default_rng(0))

    assert result["status"] == STATUS_INCOMPLETE
    assert result["routes_opened"] == 2
    assert state.created_routes == 3
    assert state.add_route() is None


def test_points_needing_separate_routes():
    inst = ProblemInstance(2, 2)
    inst.set_node(0, 0.0, 0.0, service=0.0, reward=0.0, ready=0.0, due=100.0)
    inst.set_node(1, 40.0, 0.0, service=0.0, reward=3.0, ready=0.0, due=100.0)
    inst.set_node(2, -40.0, 0.0, service=0.0, reward=4.0, ready=0.0, due=45.0)
    inst.compute_distance_matrix()
    inst.max_time_per_route = 100.0

    state = RouteState(inst)
    result = greedy_randomized_construction(state, policy="random", rng=np.random.default_rng(4))

    assert result["status"] == STATUS_COMPLETE
    assert result["routes_opened"] == 1
    assert result["fitness"] == pytest.approx(7.0)
    assert sorted(state.routes()) == [[1], [2]]
    assert state.check_cycles()
    assert state.is_feasible()


def test_rcl_size_one_with_best_value_is_greedy_by_cost():
    state = RouteState(_two_point_instance())
    greedy_randomized_construction(state, rcl_size=1, policy="best_value")
    # 1 is the cheapest first insertion; 2 then ties at both positions and
    # the first scanned position (after the depot) is kept
    assert state.routes() == [[2, 1]]


def test_fitness_matches_running_objective():
    state = RouteState(_two_point_instance())
    result = greedy_randomized_construction(state, rng=np.random.default_rng(7))
    assert state.objective == pytest.approx(result["fitness"])


def test_invalid_rcl_size():
    state = RouteState(_two_point_instance())
    with pytest.raises(ValueError):
        greedy_randomized_construction(state, rcl_size=0)
