#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maze_grid.py
------------
Implicit 4-connected grid graph over a classified maze (True = open pixel).
"""

from __future__ import annotations
from typing import List, Tuple

import numpy as np

from maze_classify import MalformedGridError, build_passable_grid

Cell = Tuple[int, int]

# north, south, east, west; fixes tie-breaking between equal-length paths
N4: Tuple[Cell, ...] = ((0, -1), (0, 1), (1, 0), (-1, 0))


class GridGraph:
    """
    Implicit 4-connected graph over a classified grid.
    Cells are (x, y); the backing array is indexed [y, x]. No edges are
    stored, neighbors are derived from the grid on every call.
    """

    def __init__(self, passable: np.ndarray):
        grid = np.asarray(passable, dtype=bool)
        if grid.ndim != 2 or grid.shape[0] == 0 or grid.shape[1] == 0:
            raise MalformedGridError(f"Classified grid must be a non-empty 2-D array, got shape {grid.shape}")
        if grid.flags.writeable:
            grid = grid.copy()
            grid.setflags(write=False)
        self._grid = grid
        self.height, self.width = grid.shape

    @classmethod
    def from_rgb(cls, rgb: np.ndarray) -> "GridGraph":
        return cls(build_passable_grid(rgb))

    @property
    def grid(self) -> np.ndarray:
        return self._grid

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def passable(self, cell: Cell) -> bool:
        x, y = cell
        return self.in_bounds(cell) and bool(self._grid[y, x])

    def neighbors(self, cell: Cell) -> List[Cell]:
        x, y = cell
        out = []
        for dx, dy in N4:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height and self._grid[ny, nx]:
                out.append((nx, ny))
        return out

    def passable_count(self) -> int:
        return int(np.count_nonzero(self._grid))

    def __repr__(self) -> str:
        return f"GridGraph(width={self.width}, height={self.height})"
