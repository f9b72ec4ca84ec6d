import csv
import json


class Metrics:
    def __init__(self):
        self.rows = []

    def append(
        self,
        it,
        fitness,
        best,
        average,
        routes_used=0,
        unrouted=0,
        status="",
    ):
        self.rows.append(
            (
                it,
                float(fitness),
                float(best),
                float(average),
                int(routes_used),
                int(unrouted),
                status,
            )
        )

    def save_csv(self, path):
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(
                [
                    "iter",
                    "fitness",
                    "best_fitness",
                    "average_fitness",
                    "routes_used",
                    "unrouted",
                    "status",
                ]
            )
            for row in self.rows:
                w.writerow(list(row))


def save_metrics_json(path, metrics, summary, params, *, extra=None):
    data = {
        "best_fitness": float(summary["best_fitness"]),
        "average_fitness": float(summary["average_fitness"]),
        "best_status": summary["best_status"],
        "best_unrouted": [int(v) for v in summary["best_unrouted"]],
        "complete_runs": int(summary["complete_runs"]),
        "iters_logged": len(metrics.rows),
        "params": params,
    }
    if extra:
        data.update(extra)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def save_routes_csv(path, state):
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["route_id", "pos", "node_id"])
        for r, nodes in enumerate(state.routes()):
            for i, node in enumerate(nodes):
                w.writerow([r, i + 1, int(node)])
