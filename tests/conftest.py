"""
Pytest configuration and shared fixtures.

Mazes are written as rows of text: '#' is a black wall pixel, '.' is white,
'G' / 'R' are green / red marker pixels.
"""

import cv2
import numpy as np
import pytest

from maze_grid import GridGraph

COLORS = {
    "#": (0, 0, 0),
    ".": (255, 255, 255),
    "G": (0, 255, 0),
    "R": (255, 0, 0),
}


def rgb_from_rows(rows):
    """Build an (H, W, 3) uint8 RGB matrix from text rows."""
    h, w = len(rows), len(rows[0])
    rgb = np.zeros((h, w, 3), dtype=np.uint8)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            rgb[y, x] = COLORS[ch]
    return rgb


def graph_from_rows(rows):
    return GridGraph.from_rgb(rgb_from_rows(rows))


def save_rgb_png(rgb, path):
    cv2.imwrite(str(path), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    return path


@pytest.fixture
def open_graph():
    """A 7x5 maze with no walls."""
    return graph_from_rows(["......."] * 5)


@pytest.fixture
def gap_wall_graph():
    """5x5, wall at x=2 on rows 0-3, gap at (2, 4)."""
    return graph_from_rows([
        "..#..",
        "..#..",
        "..#..",
        "..#..",
        ".....",
    ])


@pytest.fixture
def center_wall_graph():
    """3x3 with a single wall in the center."""
    return graph_from_rows([
        "...",
        ".#.",
        "...",
    ])


@pytest.fixture
def split_graph():
    """Two halves separated by a full-height wall."""
    return graph_from_rows([
        "..#..",
        "..#..",
        "..#..",
    ])


@pytest.fixture
def marker_maze_png(tmp_path):
    """A 20x12 PNG maze with a green start block and a red end block."""
    rows = [
        "####################",
        "#GGG.....#.........#",
        "#GGG.....#.........#",
        "#GGG.....#.........#",
        "#........#.........#",
        "#........#.........#",
        "#........#.........#",
        "#..................#",
        "#..............RRR.#",
        "#..............RRR.#",
        "#..............RRR.#",
        "####################",
    ]
    return save_rgb_png(rgb_from_rows(rows), tmp_path / "maze.png")
