#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maze_bfs.py
-----------
Unweighted shortest path over a GridGraph (breadth-first search).

All edges cost 1, so cells leave the FIFO queue in non-decreasing distance
order and the first time the end cell is dequeued its distance is the
shortest path length. Neighbors are expanded north, south, east, west, which
makes the reconstructed path reproducible when several shortest paths exist.

Per-search state (distance + parent) lives in a SearchRecord, never on the
graph, so one GridGraph can serve any number of searches.
"""

import operator
from collections import deque
from typing import Callable, List, NamedTuple, Optional, Tuple

import numpy as np

from maze_grid import Cell, GridGraph

UNVISITED = -1


class InvalidCoordinatesError(ValueError):
    """An endpoint is not an integer (x, y) cell inside the grid."""


class SearchBudgetExceeded(RuntimeError):
    """The search expanded more cells than max_expansions allows."""


class PathResult(NamedTuple):
    distance: int
    path: List[Cell]


class SearchRecord:
    """
    Distance and predecessor bookkeeping for one search.
    distance[y, x] == -1 means unvisited; parent[y, x] == (-1, -1) means none.
    A record may be reused for sequential searches; shortest_path resets it.
    """

    def __init__(self, height: int, width: int):
        self.distance = np.full((height, width), UNVISITED, dtype=np.int64)
        self.parent = np.full((height, width, 2), -1, dtype=np.int32)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.distance.shape

    def reset(self) -> None:
        self.distance.fill(UNVISITED)
        self.parent.fill(-1)

    def visited(self, cell: Cell) -> bool:
        x, y = cell
        return self.distance[y, x] != UNVISITED


def reconstruct_path(record: SearchRecord, start: Cell, end: Cell) -> List[Cell]:
    """Walk parents back from end to start and reverse. [] if end was never reached."""
    if not record.visited(end):
        return []
    path = [end]
    x, y = end
    while (x, y) != start:
        px, py = record.parent[y, x]
        if px == -1:
            return []
        x, y = int(px), int(py)
        path.append((x, y))
    path.reverse()
    return path


def _check_endpoint(graph: GridGraph, cell: Cell, name: str) -> Cell:
    try:
        if len(cell) != 2:
            raise ValueError(f"expected 2 coordinates, got {len(cell)}")
        x, y = operator.index(cell[0]), operator.index(cell[1])
    except (TypeError, ValueError) as e:
        raise InvalidCoordinatesError(f"{name} must be an (x, y) pair, got {cell!r}") from e
    if not graph.in_bounds((x, y)):
        raise InvalidCoordinatesError(
            f"{name} {(x, y)} is outside the {graph.width}x{graph.height} grid")
    return (x, y)


def shortest_path(graph: GridGraph,
                  start: Cell,
                  end: Cell,
                  *,
                  record: Optional[SearchRecord] = None,
                  max_expansions: Optional[int] = None,
                  progress: Optional[Callable[[int, int], None]] = None,
                  progress_every: int = 10000
                  ) -> Optional[PathResult]:
    """
    BFS from start to end.

    Returns PathResult(distance, path) or None when end cannot be reached,
    including when start or end is a wall. Raises InvalidCoordinatesError for
    out-of-bounds endpoints and SearchBudgetExceeded if max_expansions is set
    and exhausted. `progress(expanded, distance)` is called every
    `progress_every` expansions.
    """
    start = _check_endpoint(graph, start, "start")
    end = _check_endpoint(graph, end, "end")
    if not graph.passable(start) or not graph.passable(end):
        return None

    if record is None:
        record = SearchRecord(graph.height, graph.width)
    elif record.shape != (graph.height, graph.width):
        raise ValueError(
            f"SearchRecord shape {record.shape} does not match grid {(graph.height, graph.width)}")
    else:
        record.reset()

    dist = record.distance
    parent = record.parent
    sx, sy = start
    dist[sy, sx] = 0
    queue = deque([start])
    expanded = 0

    while queue:
        current = queue.popleft()
        cx, cy = current
        expanded += 1
        if progress is not None and progress_every > 0 and expanded % progress_every == 0:
            progress(expanded, int(dist[cy, cx]))
        if current == end:
            return PathResult(int(dist[cy, cx]), reconstruct_path(record, start, end))
        if max_expansions is not None and expanded >= max_expansions:
            raise SearchBudgetExceeded(
                f"Gave up after expanding {expanded} cells (max_expansions={max_expansions})")

        d = dist[cy, cx] + 1
        for nx, ny in graph.neighbors(current):
            if dist[ny, nx] == UNVISITED:
                dist[ny, nx] = d
                parent[ny, nx] = (cx, cy)
                queue.append((nx, ny))

    return None


def shortest_distance(graph: GridGraph, start: Cell, end: Cell, **kwargs) -> Optional[int]:
    result = shortest_path(graph, start, end, **kwargs)
    return None if result is None else result.distance
