"""Static TOPTW instance data.

The instance stores the real depot (index ``0``) and ``n_pois`` points of
interest.  Route construction additionally uses one virtual depot per extra
route; those carry indices above ``n_pois`` and every accessor maps them back
to the real depot so that the static attributes stay shared while each route
keeps its own node in the successor/predecessor arrays.
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from ..config.enums import (
    F_NODE_F,
    NODE_REWARD,
    NODE_SERVICE,
    NODE_TW_CLOSE,
    NODE_TW_OPEN,
)


def compute_euclid(coords: np.ndarray) -> np.ndarray:
    """Pairwise Euclidean distances between the rows of ``coords``."""

    diff = coords[:, None, :] - coords[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=-1))


class ProblemInstance:
    def __init__(self, n_pois: int, n_vehicles: int):
        self.n_pois = int(n_pois)
        self.n_vehicles = int(n_vehicles)
        n = self.n_pois + 1
        self.coords = np.zeros((n, 2), dtype=np.float64)
        self.node_f = np.zeros((n, F_NODE_F), dtype=np.float64)
        self.dist = np.zeros((n, n), dtype=np.float64)
        self.max_time_per_route = 0.0

        # node index -> static row; virtual depots collapse onto the depot
        self.alias = np.arange(self.n_pois + self.n_vehicles, dtype=np.int64)
        self.alias[n:] = 0

    @classmethod
    def from_arrays(
        cls,
        coords: np.ndarray,
        node_f: np.ndarray,
        n_vehicles: int,
        max_time_per_route: Optional[float] = None,
    ) -> "ProblemInstance":
        """Build an instance from ``(n, 2)`` coordinates and ``(n, F_NODE_F)`` features.

        Row 0 is the depot.  When ``max_time_per_route`` is omitted the depot's
        due time is used, matching the benchmark file convention.
        """

        coords = np.asarray(coords, dtype=np.float64)
        node_f = np.asarray(node_f, dtype=np.float64)
        inst = cls(coords.shape[0] - 1, n_vehicles)
        inst.coords[:] = coords
        inst.node_f[:] = node_f
        if max_time_per_route is None:
            max_time_per_route = inst.node_f[0, NODE_TW_CLOSE]
        inst.max_time_per_route = float(max_time_per_route)
        inst.compute_distance_matrix()
        return inst

    def is_depot(self, index: int) -> bool:
        return index == 0 or index > self.n_pois

    def _row(self, index: int) -> int:
        return 0 if index > self.n_pois else index

    # setters -------------------------------------------------------------

    def set_x(self, index: int, value: float) -> None:
        self.coords[index, 0] = value

    def set_y(self, index: int, value: float) -> None:
        self.coords[index, 1] = value

    def set_reward(self, index: int, value: float) -> None:
        self.node_f[index, NODE_REWARD] = value

    def set_service_time(self, index: int, value: float) -> None:
        self.node_f[index, NODE_SERVICE] = value

    def set_ready_time(self, index: int, value: float) -> None:
        self.node_f[index, NODE_TW_OPEN] = value

    def set_due_time(self, index: int, value: float) -> None:
        self.node_f[index, NODE_TW_CLOSE] = value

    def set_node(self, index, x, y, service, reward, ready, due) -> None:
        self.coords[index] = (x, y)
        self.node_f[index, NODE_REWARD] = reward
        self.node_f[index, NODE_SERVICE] = service
        self.node_f[index, NODE_TW_OPEN] = ready
        self.node_f[index, NODE_TW_CLOSE] = due

    # getters (virtual depots alias the depot) -----------------------------

    def x(self, index: int) -> float:
        return float(self.coords[self._row(index), 0])

    def y(self, index: int) -> float:
        return float(self.coords[self._row(index), 1])

    def reward(self, index: int) -> float:
        return float(self.node_f[self._row(index), NODE_REWARD])

    def service_time(self, index: int) -> float:
        return float(self.node_f[self._row(index), NODE_SERVICE])

    def ready_time(self, index: int) -> float:
        return float(self.node_f[self._row(index), NODE_TW_OPEN])

    def due_time(self, index: int) -> float:
        return float(self.node_f[self._row(index), NODE_TW_CLOSE])

    def distance(self, i: int, j: int) -> float:
        return float(self.dist[self._row(i), self._row(j)])

    # travel time equals distance (unit speed)
    travel_time = distance

    def compute_distance_matrix(self) -> np.ndarray:
        self.dist = compute_euclid(self.coords)
        return self.dist

    def extended_columns(self):
        """Return ``(reward, service, ready, due)`` over the extended node space.

        Each array has length ``n_pois + n_vehicles`` so the kernels can index
        virtual depots directly.
        """

        ext = self.node_f[self.alias]
        return (
            np.ascontiguousarray(ext[:, NODE_REWARD]),
            np.ascontiguousarray(ext[:, NODE_SERVICE]),
            np.ascontiguousarray(ext[:, NODE_TW_OPEN]),
            np.ascontiguousarray(ext[:, NODE_TW_CLOSE]),
        )

    def route_distance(self, route: Iterable[int]) -> float:
        seq = [int(v) for v in route]
        return float(sum(self.distance(a, b) for a, b in zip(seq[:-1], seq[1:])))

    def max_reward(self) -> float:
        return float(self.node_f[:, NODE_REWARD].max())

    def to_frame(self):
        """Node table as a ``pandas.DataFrame`` (one row per static node)."""

        import pandas as pd

        return pd.DataFrame(
            {
                "x": self.coords[:, 0],
                "y": self.coords[:, 1],
                "reward": self.node_f[:, NODE_REWARD],
                "ready_time": self.node_f[:, NODE_TW_OPEN],
                "due_time": self.node_f[:, NODE_TW_CLOSE],
                "service_time": self.node_f[:, NODE_SERVICE],
            },
            index=pd.RangeIndex(self.n_pois + 1, name="node"),
        )

    def __repr__(self) -> str:
        return (
            f"ProblemInstance(n_pois={self.n_pois}, n_vehicles={self.n_vehicles}, "
            f"max_time_per_route={self.max_time_per_route})"
        )
