import numpy as np

from ...config.enums import C_COST, F_CAND
from ...engine._numba_kernels import collect_candidates


def comprehensive_evaluation(state, points):
    """Best feasible insertion of every point across all active routes.

    Returns a ``(k, F_CAND)`` array with one row per point that can be
    inserted somewhere, in the order of ``points``.  Points without any
    feasible position are left out.  ``state`` is not modified.
    """

    points = np.asarray(points, dtype=np.int64)
    out = np.empty((points.shape[0], F_CAND), dtype=np.float64)
    if points.size == 0:
        return out

    inst = state.instance
    count = collect_candidates(
        points,
        state.succ,
        state.depart,
        np.ascontiguousarray(state.active_depots()),
        inst.alias,
        inst.dist,
        state.node_reward,
        state.node_service,
        state.node_ready,
        state.node_due,
        float(inst.max_time_per_route),
        out,
    )
    return out[:count]


def sort_candidates(candidates):
    """Sort candidate rows by ascending insertion cost (stable)."""

    if candidates.shape[0] < 2:
        return candidates
    order = np.argsort(candidates[:, C_COST], kind="stable")
    return candidates[order]
