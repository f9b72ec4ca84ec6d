import numpy as np

from ..config.enums import STATUS_COMPLETE
from ..operators.construction import greedy_randomized_construction
from ..operators.selection import get_selection_policy
from .route_state import RouteState


def run_grasp(instance, params, metrics, rng=None, local_search=None):
    """Repeat the randomized construction and keep the best solution.

    Each iteration starts from a clean :class:`RouteState`.  ``local_search``
    is an optional ``callable(state)`` applied after construction; no
    improvement phase ships with the solver.
    """

    if rng is None:
        rng = np.random.default_rng()

    iters = int(params.get("iters", 100))
    if iters < 1:
        raise ValueError("iters must be >= 1")
    log_period = max(1, int(params.get("log_period", 1)))
    rcl_size = int(params.get("rcl_size", 3))
    alpha = float(params.get("alpha", 0.8))
    policy = get_selection_policy(params.get("selection", "alpha_cut"))

    state = RouteState(instance)
    best_state = None
    best_result = None
    best_fitness = -np.inf
    total_fitness = 0.0
    complete_runs = 0

    for it in range(1, iters + 1):
        result = greedy_randomized_construction(
            state, rcl_size=rcl_size, policy=policy, rng=rng, alpha=alpha
        )
        if local_search is not None:
            local_search(state)
        fitness = state.evaluate_fitness()
        total_fitness += fitness
        if result["status"] == STATUS_COMPLETE:
            complete_runs += 1

        if fitness > best_fitness:
            best_fitness = fitness
            best_state = state.copy()
            best_result = result

        if (it % log_period) == 0 or it == 1 or it == iters:
            metrics.append(
                it,
                fitness,
                best_fitness,
                total_fitness / it,
                routes_used=sum(1 for r in state.routes() if r),
                unrouted=int(result["unrouted"].size),
                status=result["status"],
            )

    return {
        "best_fitness": float(best_fitness),
        "average_fitness": total_fitness / iters,
        "best_state": best_state,
        "best_status": best_result["status"],
        "best_unrouted": best_result["unrouted"],
        "iters": iters,
        "complete_runs": complete_runs,
    }
