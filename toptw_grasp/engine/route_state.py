"""Mutable route topology for TOPTW construction.

Routes are disjoint cycles stored in flat ``pred``/``succ`` arrays over the
extended node space ``0 .. n_pois + n_vehicles - 1``.  Route ``0`` uses the
real depot (node ``0``); route ``k > 0`` uses the virtual depot
``n_pois + k``.  An empty route is a self-loop on its depot.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np

from ..config.enums import NO_INITIALIZED
from ._numba_kernels import propagate_departures
from .instance import ProblemInstance


class RouteState:
    def __init__(self, instance: ProblemInstance):
        if instance.n_vehicles < 1:
            raise ValueError("instance must provide at least one vehicle")
        self.instance = instance
        size = instance.n_pois + instance.n_vehicles
        self.pred = np.full(size, NO_INITIALIZED, dtype=np.int64)
        self.succ = np.full(size, NO_INITIALIZED, dtype=np.int64)
        self.depart = np.zeros(size, dtype=np.float64)
        self.depots = np.full(instance.n_vehicles, NO_INITIALIZED, dtype=np.int64)
        self.route_end = np.zeros(instance.n_vehicles, dtype=np.float64)
        self.available_vehicles = instance.n_vehicles
        self.objective = 0.0

        (
            self.node_reward,
            self.node_service,
            self.node_ready,
            self.node_due,
        ) = instance.extended_columns()

    def init_solution(self) -> None:
        """Reset to a single empty route rooted at the real depot."""

        self.pred.fill(NO_INITIALIZED)
        self.succ.fill(NO_INITIALIZED)
        self.depart.fill(0.0)
        self.depots.fill(NO_INITIALIZED)
        self.route_end.fill(0.0)
        self.depots[0] = 0
        self.pred[0] = 0
        self.succ[0] = 0
        self.available_vehicles = self.instance.n_vehicles - 1
        self.objective = 0.0

    @property
    def created_routes(self) -> int:
        return self.instance.n_vehicles - self.available_vehicles

    def active_depots(self) -> np.ndarray:
        return self.depots[: self.created_routes]

    def add_route(self) -> Optional[int]:
        """Open a new empty route; returns its depot or ``None`` when the fleet is used up."""

        if self.available_vehicles <= 0:
            return None
        slot = self.created_routes
        depot = self.instance.n_pois + slot
        self.depots[slot] = depot
        self.pred[depot] = depot
        self.succ[depot] = depot
        self.depart[depot] = 0.0
        self.route_end[slot] = 0.0
        self.available_vehicles -= 1
        return depot

    def is_depot(self, node: int) -> bool:
        return self.instance.is_depot(node)

    def get_index_route(self, k: int) -> int:
        return int(self.depots[k])

    def get_predecessor(self, node: int) -> int:
        return int(self.pred[node])

    def get_successor(self, node: int) -> int:
        return int(self.succ[node])

    def set_predecessor(self, node: int, value: int) -> None:
        self.pred[node] = value

    def set_successor(self, node: int, value: int) -> None:
        self.succ[node] = value

    def get_departure(self, node: int) -> float:
        return float(self.depart[node])

    def refresh_departures(self, route_index: int, start: int) -> float:
        """Propagate departure times from ``start`` to the end of route ``route_index``."""

        depot = self.get_index_route(route_index)
        end = propagate_departures(
            start,
            depot,
            self.succ,
            self.depart,
            self.instance.alias,
            self.instance.dist,
            self.node_service,
            self.node_ready,
        )
        self.route_end[route_index] = end
        return float(end)

    # traversal ------------------------------------------------------------

    def route(self, k: int) -> List[int]:
        depot = self.get_index_route(k)
        nodes = []
        node = self.get_successor(depot)
        while node != depot:
            nodes.append(node)
            node = self.get_successor(node)
        return nodes

    def routes(self) -> List[List[int]]:
        return [self.route(k) for k in range(self.created_routes)]

    def routed_points(self) -> np.ndarray:
        nodes = [v for r in self.routes() for v in r]
        return np.asarray(sorted(nodes), dtype=np.int64)

    def evaluate_fitness(self) -> float:
        total = 0.0
        for k in range(self.created_routes):
            depot = self.get_index_route(k)
            node = self.get_successor(depot)
            while node != depot:
                if not self.is_depot(node):
                    total += float(self.node_reward[node])
                node = self.get_successor(node)
        return total

    def check_cycles(self) -> bool:
        """Verify every route is one closed cycle and no node is shared."""

        seen = set()
        limit = self.pred.shape[0]
        for k in range(self.created_routes):
            depot = self.get_index_route(k)
            node = depot
            steps = 0
            while True:
                nxt = self.get_successor(node)
                if nxt < 0 or self.get_predecessor(nxt) != node:
                    return False
                node = nxt
                if node == depot:
                    break
                if node in seen or self.is_depot(node):
                    return False
                seen.add(node)
                steps += 1
                if steps > limit:
                    return False
        return True

    def route_schedule(self, k: int) -> List[Dict[str, float]]:
        """Recompute arrival, service start and departure along route ``k``.

        The first row is the depot at time zero and the last row is the
        return to the depot.
        """

        inst = self.instance
        depot = self.get_index_route(k)
        rows = [
            {
                "node": depot,
                "arrival": 0.0,
                "start": 0.0,
                "departure": 0.0,
                "ready_time": inst.ready_time(depot),
                "due_time": inst.due_time(depot),
            }
        ]
        t = 0.0
        pre = depot
        while True:
            suc = self.get_successor(pre)
            arrival = t + inst.travel_time(pre, suc)
            start = max(arrival, inst.ready_time(suc))
            t = start + inst.service_time(suc)
            rows.append(
                {
                    "node": suc,
                    "arrival": arrival,
                    "start": start,
                    "departure": t,
                    "ready_time": inst.ready_time(suc),
                    "due_time": inst.due_time(suc),
                }
            )
            if suc == depot:
                break
            pre = suc
        return rows

    def is_feasible(self) -> bool:
        max_time = self.instance.max_time_per_route
        for k in range(self.created_routes):
            for row in self.route_schedule(k)[1:]:
                if row["arrival"] >= row["due_time"] or row["departure"] > max_time:
                    return False
        return True

    def copy(self) -> "RouteState":
        clone = RouteState.__new__(RouteState)
        clone.__dict__.update(self.__dict__)
        clone.pred = self.pred.copy()
        clone.succ = self.succ.copy()
        clone.depart = self.depart.copy()
        clone.depots = self.depots.copy()
        clone.route_end = self.route_end.copy()
        return clone

    def __eq__(self, other) -> bool:
        if not isinstance(other, RouteState):
            return NotImplemented
        return np.array_equal(self.pred, other.pred)

    __hash__ = None
