# gridpath/core/maps.py
#!/usr/bin/env python3
"""
Loader for JSON map files.

{
  "width": 7, "height": 5,
  "cells": [[0, 0, 1, ...], ...],     # [row][col]; 1 = wall
  "start": [col, row], "goal": [col, row],
  "weights": {"2": 5, "3": "BLOCK"}   # optional: code -> cost or BLOCK
}
"""

import json
from pathlib import Path
from typing import Any, Dict, Union
import logging

from gridpath.core.types import Lattice

logger = logging.getLogger(__name__)

BLOCK = "BLOCK"


def _as_point(value: Any, what: str) -> tuple:
    if (isinstance(value, (list, tuple)) and len(value) == 2
            and all(isinstance(v, int) for v in value)):
        return int(value[0]), int(value[1])
    raise ValueError(f"Invalid {what}: {value!r}")


def _as_size(value: Any, what: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    raise ValueError(f"Invalid {what}: {value!r}")


def lattice_from_dict(data: Dict[str, Any]) -> Lattice:
    if not isinstance(data, dict):
        raise ValueError(f"map must be a JSON object, got {type(data).__name__}")
    width = _as_size(data["width"], "width")
    height = _as_size(data["height"], "height")
    cells = data["cells"]
    weights = data.get("weights")
    if weights is None:
        weights = {}
    if not isinstance(weights, dict):
        raise ValueError("weights must be an object of code -> cost")
    if not isinstance(cells, list) or not all(isinstance(r, list) for r in cells):
        raise ValueError("cells must be a list of rows")
    if len(cells) != height or any(len(r) != width for r in cells):
        raise ValueError("cells size mismatch")

    sx, sy = _as_point(data["start"], "start")
    gx, gy = _as_point(data["goal"], "goal")

    lat = Lattice(height, width)
    for row in range(height):
        for col in range(width):
            v = cells[row][col]
            w = weights.get(str(v), 1)
            if w == BLOCK or v == 1:
                lat.set_wall(row, col, True)
            elif not lat.set_weight(row, col, w):
                raise ValueError(f"Invalid weight {w!r} for cell code {v!r}")

    for (x, y), what in (((sx, sy), "start"), ((gx, gy), "goal")):
        if not lat.in_bounds(y, x):
            raise ValueError(f"{what} out of bounds")
        if lat.cells[y][x].is_wall:
            raise ValueError(f"{what} is on a wall")
    if (sx, sy) == (gx, gy):
        raise ValueError("start and goal coincide")
    lat.set_start(sy, sx)
    lat.set_end(gy, gx)
    return lat


def load_map(path: Union[str, Path]) -> Lattice:
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    try:
        lat = lattice_from_dict(data)
    except KeyError as e:
        raise ValueError(f"{p.name}: missing field {e}") from e
    logger.info("load_ok %s %dx%d weighted=%s", p.name, lat.rows, lat.cols, lat.is_weighted())
    return lat
