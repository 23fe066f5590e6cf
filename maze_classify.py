#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maze_classify.py
----------------
Binary wall/open classification of a maze raster.

Only exact black (R=G=B=0) is a wall. White, the colored start/end marker
blocks and any other color are passable; no marker semantics are inferred.
"""

from typing import Sequence

import numpy as np


class MalformedGridError(ValueError):
    """Pixel matrix cannot be turned into a grid (wrong shape, zero size)."""


def classify_pixel(pixel: Sequence[int]) -> bool:
    r, g, b = int(pixel[0]), int(pixel[1]), int(pixel[2])
    return not (r == 0 and g == 0 and b == 0)


def build_passable_grid(rgb: np.ndarray) -> np.ndarray:
    """
    Classify a (H, W, 3) or (H, W, 4) pixel matrix.
    Returns a read-only (H, W) bool array, True = passable. Alpha is ignored.
    Raises MalformedGridError for anything that is not a non-empty color image.
    """
    arr = np.asarray(rgb)
    if arr.ndim != 3:
        raise MalformedGridError(f"Expected a (H, W, C) pixel matrix, got shape {arr.shape}")
    h, w, c = arr.shape
    if c not in (3, 4):
        raise MalformedGridError(f"Expected 3 or 4 color channels, got {c}")
    if h == 0 or w == 0:
        raise MalformedGridError(f"Grid has zero size: width={w}, height={h}")
    passable = np.any(arr[:, :, :3] != 0, axis=2)
    passable.setflags(write=False)
    return passable
