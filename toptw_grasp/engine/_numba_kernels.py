"""Numba-accelerated kernels for insertion evaluation and schedule updates.

All kernels work on the flat route arrays of :class:`RouteState`:

``succ``
    Successor per node over the extended index space (POIs + virtual depots).
``depart``
    Departure time per node.  Depot entries stay at ``0.0``.
``alias``
    Maps an extended node index onto its row in the distance matrix.
``service, ready, due``
    Node columns over the extended index space.
"""

from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def insertion_cost(c, pre, suc, depot, succ, depart, alias, dist, service, ready, due, max_time):
    """Cascaded completion time of a route after inserting ``c`` between ``pre`` and ``suc``.

    Returns ``np.inf`` when the insertion breaks a time window or the route
    duration bound at ``c`` or at any node downstream of it, closing depot
    included.
    """

    arrival = depart[pre] + dist[alias[pre], alias[c]]
    if arrival >= due[c]:
        return np.inf
    leave = max(arrival, ready[c]) + service[c]
    if leave > max_time:
        return np.inf

    node = c
    nxt = suc
    while True:
        arrival = leave + dist[alias[node], alias[nxt]]
        if arrival >= due[nxt]:
            return np.inf
        leave = max(arrival, ready[nxt]) + service[nxt]
        if leave > max_time:
            return np.inf
        if nxt == depot:
            break
        node = nxt
        nxt = succ[node]
    return leave


@njit(cache=True)
def best_insertion_for_point(c, succ, depart, depots, alias, dist, service, ready, due, max_time):
    """Scan every position of every active route for point ``c``.

    Returns ``(route_index, predecessor, cost)``; ``route_index`` is ``-1``
    when no feasible position exists.  Ties keep the first position scanned.
    """

    best_route = -1
    best_pred = -1
    best_cost = np.inf
    for k in range(depots.shape[0]):
        depot = depots[k]
        pre = depot
        while True:
            suc = succ[pre]
            cost = insertion_cost(c, pre, suc, depot, succ, depart, alias, dist, service, ready, due, max_time)
            if cost < best_cost:
                best_cost = cost
                best_route = k
                best_pred = pre
            pre = suc
            if suc == depot:
                break
    return best_route, best_pred, best_cost


@njit(cache=True)
def collect_candidates(points, succ, depart, depots, alias, dist, reward, service, ready, due, max_time, out):
    """Populate ``out`` with the best feasible insertion of each point.

    Parameters
    ----------
    points : ndarray
        Unrouted point indices.
    out : ndarray
        ``(len(points), F_CAND)`` float buffer receiving candidate rows.

    Returns
    -------
    int
        Number of populated rows.
    """

    count = 0
    for i in range(points.shape[0]):
        c = points[i]
        route, pred, cost = best_insertion_for_point(
            c, succ, depart, depots, alias, dist, service, ready, due, max_time
        )
        if route < 0:
            continue
        out[count, 0] = c
        out[count, 1] = route
        out[count, 2] = pred
        out[count, 3] = cost
        out[count, 4] = reward[c]
        count += 1
    return count


@njit(cache=True)
def propagate_departures(start, depot, succ, depart, alias, dist, service, ready):
    """Recompute departures downstream of ``start`` up to ``depot``.

    Stores the new departure of every POI visited and returns the time the
    route closes at its depot.
    """

    t = depart[start]
    pre = start
    while True:
        suc = succ[pre]
        t = t + dist[alias[pre], alias[suc]]
        if t < ready[suc]:
            t = ready[suc]
        t = t + service[suc]
        if suc == depot:
            break
        depart[suc] = t
        pre = suc
    return t
