"""
Run configuration for the pixel-maze solver.

Defaults below can be overridden by a .json / .yml run file (load_config),
which in turn is overridden by command-line flags.
"""

from __future__ import annotations
import json
import os
from typing import Any, Dict, Optional, Tuple

import yaml

# -------------------- Defaults --------------------
DEFAULT_IMAGE_PATH = "maze.png"
# closest pixels inside the green (start) and red (end) blocks of the reference maze
DEFAULT_START = (10, 11)
DEFAULT_END = (795, 798)
PROGRESS_EVERY = 10000

# HSV ranges for marker detection
HSV_GREEN_LO = (35, 40, 40);  HSV_GREEN_HI = (90, 255, 255)
HSV_RED1_LO  = (0,  60, 60);  HSV_RED1_HI  = (10, 255, 255)
HSV_RED2_LO  = (170,60, 60);  HSV_RED2_HI  = (180,255,255)
MIN_MARKER_AREA_PX = 4

CONFIG_KEYS = ("image", "start", "end", "max_expansions", "auto_markers")


def parse_point(value: Any) -> Tuple[int, int]:
    """Accept "x,y", "x y", [x, y] or (x, y)."""
    if isinstance(value, str):
        tokens = value.replace(",", " ").split()
    elif isinstance(value, (list, tuple)):
        tokens = list(value)
    else:
        raise ValueError(f"Bad point {value!r}, expected 'x,y'.")
    if len(tokens) != 2:
        raise ValueError(f"Bad point {value!r}, expected 'x,y'.")
    try:
        return (int(tokens[0]), int(tokens[1]))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Bad point {value!r}, coordinates must be integers.") from e


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """
    Read a run file. JSON when the name ends in .json, YAML otherwise.
    Returns only known keys, with start/end normalised to (x, y) tuples.
    """
    if not path:
        return {}
    if not os.path.exists(path):
        raise RuntimeError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        if path.lower().endswith(".json"):
            data = json.load(f)
        else:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Bad config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must hold a mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    cfg = dict(data)
    for key in ("start", "end"):
        if cfg.get(key) is not None:
            cfg[key] = parse_point(cfg[key])
    if cfg.get("max_expansions") is not None:
        try:
            cfg["max_expansions"] = int(cfg["max_expansions"])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Bad max_expansions {cfg['max_expansions']!r} in {path}, expected an integer.") from e
    if "auto_markers" in cfg:
        cfg["auto_markers"] = bool(cfg["auto_markers"])
    return cfg
