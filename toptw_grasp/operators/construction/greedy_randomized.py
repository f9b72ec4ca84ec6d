import numpy as np

from ...config.enums import (
    C_POINT,
    C_PRED,
    C_REWARD,
    C_ROUTE,
    STATUS_COMPLETE,
    STATUS_INCOMPLETE,
)
from ..selection import get_selection_policy
from .evaluation import comprehensive_evaluation, sort_candidates


def commit_insertion(state, candidate):
    """Splice ``candidate`` into its route and refresh downstream departures."""

    point = int(candidate[C_POINT])
    route_idx = int(candidate[C_ROUTE])
    pred = int(candidate[C_PRED])

    succ = state.get_successor(pred)
    state.set_predecessor(point, pred)
    state.set_successor(point, succ)
    state.set_successor(pred, point)
    state.set_predecessor(succ, point)

    state.refresh_departures(route_idx, pred)
    state.objective += float(candidate[C_REWARD])
    return point


def greedy_randomized_construction(state, rcl_size=3, policy="alpha_cut", rng=None, alpha=0.8):
    """Build one solution from scratch with RCL-randomized best insertion.

    Every pass re-evaluates all unrouted points against the current routes,
    keeps the ``rcl_size`` cheapest candidates and lets ``policy`` pick one.
    When nothing fits a new route is opened; once the fleet is used up the
    remaining points are dropped and the run is reported ``INCOMPLETE``.
    """

    rcl_size = int(rcl_size)
    if rcl_size < 1:
        raise ValueError("rcl_size must be >= 1")
    select = get_selection_policy(policy)
    if rng is None:
        rng = np.random.default_rng()

    state.init_solution()
    unrouted = list(range(1, state.instance.n_pois + 1))
    inserted = 0
    opened = 0
    status = STATUS_COMPLETE

    while unrouted:
        candidates = sort_candidates(comprehensive_evaluation(state, unrouted))
        if candidates.shape[0] > 0:
            rcl = candidates[: min(rcl_size, candidates.shape[0])]
            chosen = rcl[select(rcl, rng, alpha)]
            point = commit_insertion(state, chosen)
            unrouted.remove(point)
            inserted += 1
        elif state.add_route() is not None:
            opened += 1
        else:
            status = STATUS_INCOMPLETE
            break

    return {
        "status": status,
        "fitness": state.evaluate_fitness(),
        "inserted": inserted,
        "routes_opened": opened,
        "unrouted": np.asarray(unrouted, dtype=np.int64),
    }
