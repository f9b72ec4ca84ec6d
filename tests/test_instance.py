import numpy as np
import pytest

from toptw_grasp.config.enums import F_NODE_F, NODE_TW_CLOSE, NODE_TW_OPEN
from toptw_grasp.engine.instance import ProblemInstance


def _line_instance(n_vehicles=3):
    inst = ProblemInstance(2, n_vehicles)
    inst.set_node(0, 0.0, 0.0, service=0.0, reward=0.0, ready=0.0, due=100.0)
    inst.set_node(1, 10.0, 0.0, service=2.0, reward=5.0, ready=0.0, due=50.0)
    inst.set_node(2, 20.0, 0.0, service=0.0, reward=7.0, ready=4.0, due=50.0)
    inst.compute_distance_matrix()
    inst.max_time_per_route = 100.0
    return inst


def test_distance_matrix_is_symmetric_euclidean():
    inst = _line_instance()
    np.testing.assert_allclose(inst.dist, inst.dist.T)
    np.testing.assert_allclose(np.diag(inst.dist), 0.0)
    assert inst.distance(0, 2) == pytest.approx(20.0)
    assert inst.travel_time(1, 2) == pytest.approx(10.0)


def test_virtual_depots_alias_the_depot():
    inst = _line_instance(n_vehicles=3)
    for virtual in (3, 4):
        assert inst.is_depot(virtual)
        assert inst.x(virtual) == inst.x(0)
        assert inst.due_time(virtual) == inst.due_time(0)
        assert inst.ready_time(virtual) == inst.ready_time(0)
        assert inst.reward(virtual) == inst.reward(0)
        assert inst.distance(virtual, 1) == inst.distance(0, 1)
    assert not inst.is_depot(1)
    assert inst.is_depot(0)


def test_extended_columns_cover_virtual_depots():
    inst = _line_instance(n_vehicles=3)
    reward, service, ready, due = inst.extended_columns()
    assert reward.shape == (5,)
    assert reward[2] == 7.0
    assert service[1] == 2.0
    assert ready[2] == 4.0
    assert due[4] == due[0] == 100.0
    np.testing.assert_array_equal(inst.alias, np.array([0, 1, 2, 0, 0]))


def test_from_arrays_uses_depot_due_time_as_route_bound():
    coords = np.array([[0.0, 0.0], [3.0, 4.0]])
    node_f = np.zeros((2, F_NODE_F))
    node_f[:, NODE_TW_OPEN] = 0.0
    node_f[:, NODE_TW_CLOSE] = [80.0, 40.0]

    inst = ProblemInstance.from_arrays(coords, node_f, n_vehicles=2)
    assert inst.max_time_per_route == 80.0
    assert inst.distance(0, 1) == pytest.approx(5.0)

    inst = ProblemInstance.from_arrays(coords, node_f, n_vehicles=2, max_time_per_route=60.0)
    assert inst.max_time_per_route == 60.0


def test_route_distance_and_max_reward():
    inst = _line_instance()
    assert inst.route_distance([0, 1, 2, 0]) == pytest.approx(40.0)
    assert inst.route_distance([0, 3]) == pytest.approx(0.0)
    assert inst.max_reward() == 7.0


def test_to_frame_lists_static_nodes():
    frame = _line_instance().to_frame()
    assert frame.shape == (3, 6)
    assert frame.loc[2, "reward"] == 7.0


def test_out_of_range_index_is_rejected():
    inst = _line_instance()
    with pytest.raises(IndexError):
        inst.set_x(5, 1.0)
