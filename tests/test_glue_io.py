import json
from pathlib import Path

import numpy as np
import pytest

from toptw_grasp.config.enums import NODE_TW_OPEN
from toptw_grasp.glue.io import (
    load_config,
    load_instance,
    load_nodes,
    validate_instance,
)

INSTANCE_TEXT = """\
0   2   3   100
0 200
0  35.0  35.0  0  0  0  0  0  230
1  41.0  49.0  10 10 0  1  1  0  204
2  35.0  17.0  7  12 0  1  2  10 202
3  55.0  45.0  13 13 0  1  3  0  197
"""


def _write_instance(tmp_path: Path, text=INSTANCE_TEXT):
    path = tmp_path / "inst.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_yaml(tmp_path):
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("seed: 7\nparams:\n  iters: 12\n", encoding="utf-8")

    cfg = load_config(cfg_path)
    assert cfg["seed"] == 7
    assert cfg["params"]["iters"] == 12


def test_load_config_json(tmp_path):
    cfg_path = tmp_path / "cfg.json"
    cfg = {"seed": 5}
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    loaded = load_config(cfg_path)
    assert loaded == cfg


def test_load_config_empty_and_missing(tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config(empty) == {}
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_instance(tmp_path):
    inst = load_instance(_write_instance(tmp_path))

    assert inst.n_pois == 3
    assert inst.n_vehicles == 2
    assert inst.max_time_per_route == 230.0
    assert inst.due_time(0) == 230.0
    assert inst.x(1) == 41.0
    assert inst.service_time(2) == 7.0
    assert inst.reward(3) == 13.0
    assert inst.ready_time(2) == 10.0
    assert inst.due_time(2) == 202.0
    assert inst.distance(0, 1) == pytest.approx(np.hypot(6.0, 14.0))
    validate_instance(inst)


def test_load_instance_rejects_truncated_file(tmp_path):
    truncated = "\n".join(INSTANCE_TEXT.splitlines()[:4]) + "\n"
    with pytest.raises(ValueError):
        load_instance(_write_instance(tmp_path, truncated))


def test_load_instance_rejects_bad_numbers(tmp_path):
    broken = INSTANCE_TEXT.replace("41.0", "forty-one")
    with pytest.raises(ValueError):
        load_instance(_write_instance(tmp_path, broken))


def test_load_instance_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_instance(tmp_path / "nope.txt")


def _write_nodes(tmp_path: Path):
    path = tmp_path / "nodes.csv"
    path.write_text(
        """x,y,service,reward,tw_open,tw_close
0,0,0,0,0,100
10,0,2,5,0,50
0,10,1,4,5,60
""",
        encoding="utf-8",
    )
    return path


def test_load_nodes_table(tmp_path):
    inst = load_nodes(_write_nodes(tmp_path), n_vehicles=2)

    assert inst.n_pois == 2
    assert inst.n_vehicles == 2
    assert inst.max_time_per_route == 100.0
    assert inst.reward(1) == 5.0
    assert inst.ready_time(2) == 5.0
    assert inst.distance(1, 2) == pytest.approx(np.sqrt(200.0))
    validate_instance(inst)


def test_load_nodes_requires_coordinates(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("x,reward,tw_close\n0,0,10\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_nodes(path, n_vehicles=1)


def test_validate_instance_rejects_inverted_window(tmp_path):
    inst = load_instance(_write_instance(tmp_path))
    inst.node_f[2, NODE_TW_OPEN] = 500.0
    with pytest.raises(ValueError):
        validate_instance(inst)


def test_validate_instance_rejects_empty_fleet(tmp_path):
    text = INSTANCE_TEXT.replace("0   2   3", "0   0   3", 1)
    inst = load_instance(_write_instance(tmp_path, text))
    with pytest.raises(ValueError):
        validate_instance(inst)
