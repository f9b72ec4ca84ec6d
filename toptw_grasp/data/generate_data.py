import numpy as np
from ..config.enums import *
from ..engine.instance import ProblemInstance

def generate_data(n_pois=40, n_vehicles=3, horizon=400.0, seed=0):
    rng = np.random.default_rng(seed)
    # Nodes: 0 is depot, 1..n_pois are points of interest
    n = n_pois + 1

    # coords
    coords = np.zeros((n, 2), dtype=np.float64)
    coords[0] = np.array([50.0, 50.0])  # depot at center
    coords[1:] = rng.uniform(0, 100, size=(n_pois, 2))

    node_f = np.zeros((n, F_NODE_F), dtype=np.float64)

    # rewards 1..20, depot collects nothing
    node_f[1:, NODE_REWARD] = rng.integers(1, 21, size=n_pois).astype(np.float64)

    # service times small (2..10)
    node_f[1:, NODE_SERVICE] = rng.integers(2, 11, size=n_pois).astype(np.float64)

    # windows: random open in the first half of the horizon, width 30..150
    opens = rng.uniform(0.0, 0.5 * horizon, size=n_pois)
    widths = rng.uniform(30.0, 150.0, size=n_pois)
    node_f[1:, NODE_TW_OPEN] = np.floor(opens)
    node_f[1:, NODE_TW_CLOSE] = np.minimum(np.floor(opens + widths), horizon)

    # depot window spans the whole horizon and bounds every route
    node_f[0, NODE_TW_OPEN] = 0.0
    node_f[0, NODE_TW_CLOSE] = horizon

    return ProblemInstance.from_arrays(coords, node_f, n_vehicles, max_time_per_route=horizon)
