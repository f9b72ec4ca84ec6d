"""Dataset and configuration helpers for the command-line glue layer.

Two instance sources are supported: the whitespace separated TOPTW benchmark
files (Solomon/Cordeau layout, one node per line) and Pandas friendly node
tables in CSV or Parquet.  Both end in a fully populated
:class:`~toptw_grasp.engine.instance.ProblemInstance` whose route duration
bound is the depot's due time unless configured otherwise.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
import yaml

from ..config.enums import (
    F_NODE_F,
    NODE_REWARD,
    NODE_SERVICE,
    NODE_TW_CLOSE,
    NODE_TW_OPEN,
)
from ..engine.instance import ProblemInstance


def load_config(path_yaml: Path) -> Dict:
    """Read a YAML (or JSON) configuration file.

    Parameters
    ----------
    path_yaml:
        Path to the configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Empty files resolve to ``{}``.
    """

    path = Path(path_yaml)
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}

    if path.suffix.lower() == ".json":
        return json.loads(text)

    cfg = yaml.safe_load(text)
    return cfg or {}


def _fields(line: Optional[str], lineno: int, path: Path) -> List[str]:
    if line is None:
        raise ValueError(f"{path}: unexpected end of file at line {lineno}")
    parts = line.split()
    if not parts:
        raise ValueError(f"{path}: empty line {lineno}")
    return parts


def load_instance(path_txt: Path) -> ProblemInstance:
    """Parse a TOPTW benchmark instance.

    The first line carries ``k vehicles pois ...``; the second line is
    skipped.  Each of the following ``pois + 1`` lines starts with
    ``i x y service reward``.  The depot's window sits in fields 7 and 8,
    every other node's in fields 8 and 9.
    """

    path = Path(path_txt)
    if not path.exists():
        raise FileNotFoundError(path)

    lines = path.read_text(encoding="utf-8").splitlines()
    try:
        header = _fields(lines[0] if lines else None, 1, path)
        n_vehicles = int(header[1])
        n_pois = int(header[2])
    except (IndexError, ValueError) as exc:
        raise ValueError(f"{path}: malformed header line") from exc

    inst = ProblemInstance(n_pois, n_vehicles)
    for i in range(n_pois + 1):
        lineno = i + 3
        parts = _fields(lines[lineno - 1] if lineno <= len(lines) else None, lineno, path)
        tw = (7, 8) if i == 0 else (8, 9)
        try:
            inst.set_node(
                i,
                x=float(parts[1]),
                y=float(parts[2]),
                service=float(parts[3]),
                reward=float(parts[4]),
                ready=float(parts[tw[0]]),
                due=float(parts[tw[1]]),
            )
        except (IndexError, ValueError) as exc:
            raise ValueError(f"{path}: malformed node line {lineno}") from exc

    inst.compute_distance_matrix()
    inst.max_time_per_route = inst.due_time(0)
    return inst


def _read_frame(path_like: Path):
    """Return a Pandas ``DataFrame`` from CSV or Parquet input."""

    path = Path(path_like)
    if path.suffix.lower() in {".parquet", ".pq"}:
        df = pd.read_parquet(path)
    else:
        df = pd.read_csv(path)
    return df.fillna(0)


def load_nodes(
    path_table: Path,
    n_vehicles: int,
    max_time_per_route: Optional[float] = None,
) -> ProblemInstance:
    """Load depot + POIs from a CSV/Parquet table (row 0 is the depot)."""

    df = _read_frame(path_table)
    if not {"x", "y"}.issubset(df.columns):
        raise ValueError("node table must contain 'x' and 'y' columns")
    if "tw_close" not in df.columns:
        raise ValueError("node table must contain a 'tw_close' column")

    n = len(df.index)
    coords = df[["x", "y"]].to_numpy(dtype=np.float64, copy=True)
    node_f = np.zeros((n, F_NODE_F), dtype=np.float64)

    def _get(name: str) -> np.ndarray:
        if name in df.columns:
            return df[name].to_numpy(dtype=np.float64, copy=True)
        return np.zeros(n, dtype=np.float64)

    node_f[:, NODE_REWARD] = _get("reward")
    node_f[:, NODE_SERVICE] = _get("service")
    node_f[:, NODE_TW_OPEN] = _get("tw_open")
    node_f[:, NODE_TW_CLOSE] = _get("tw_close")

    return ProblemInstance.from_arrays(
        coords, node_f, int(n_vehicles), max_time_per_route=max_time_per_route
    )


def validate_instance(inst: ProblemInstance) -> None:
    """Run lightweight consistency checks on a loaded instance."""

    n = inst.n_pois + 1
    if inst.n_vehicles < 1:
        raise ValueError("instance must provide at least one vehicle")
    if inst.coords.shape != (n, 2):
        raise ValueError("coords must have shape (n, 2)")
    if inst.node_f.shape != (n, F_NODE_F):
        raise ValueError("node_f must have shape (n, F_NODE_F)")
    if inst.dist.shape != (n, n):
        raise ValueError("dist must have shape (n, n)")
    if not np.all(np.isfinite(inst.coords)):
        raise ValueError("coordinates must be finite")
    if not np.all(np.isfinite(inst.node_f)):
        raise ValueError("node attributes must be finite")
    if np.any(inst.node_f[:, NODE_REWARD] < 0):
        raise ValueError("rewards must be >= 0")
    if np.any(inst.node_f[:, NODE_SERVICE] < 0):
        raise ValueError("service times must be >= 0")
    if np.any(inst.node_f[:, NODE_TW_OPEN] > inst.node_f[:, NODE_TW_CLOSE]):
        raise ValueError("time windows must satisfy ready <= due")
    if not inst.max_time_per_route > 0:
        raise ValueError("max_time_per_route must be positive")


__all__ = [
    "load_config",
    "load_instance",
    "load_nodes",
    "validate_instance",
]
