"""Human readable rendering of a constructed solution."""

from __future__ import annotations

import pandas as pd


def schedule_frame(state, k: int) -> pd.DataFrame:
    """Per-node schedule of route ``k`` with coordinates and time windows."""

    inst = state.instance
    rows = state.route_schedule(k)
    frame = pd.DataFrame(rows)
    frame.insert(1, "x", [inst.x(v) for v in frame["node"]])
    frame.insert(2, "y", [inst.y(v) for v in frame["node"]])
    frame["service_time"] = [inst.service_time(v) for v in frame["node"]]
    return frame


def format_solution(state) -> str:
    inst = state.instance
    lines = [
        "",
        f"NODES: {inst.n_pois}",
        f"MAX TIME PER ROUTE: {inst.max_time_per_route}",
        f"MAX NUMBER OF ROUTES: {inst.n_vehicles}",
    ]
    summary = ["", "SOLUTION:"]
    time_cost = 0.0
    for k in range(state.created_routes):
        depot = state.get_index_route(k)
        frame = schedule_frame(state, k)
        summary.append(" - ".join(str(int(v)) for v in [depot, *state.route(k), depot]))
        time_cost += float(frame["departure"].iloc[-1])
        lines.append("")
        lines.append(f"ROUTE {k}")
        lines.append(frame.to_string(index=False, float_format=lambda v: f"{v:.2f}"))

    summary.append(f"FEASIBLE SOLUTION: {state.is_feasible()}")
    summary.append(f"SCORE: {state.evaluate_fitness()}")
    summary.append(f"TIME COST: {time_cost}")
    return "\n".join(summary + lines) + "\n"
