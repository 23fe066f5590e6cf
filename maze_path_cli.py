#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maze_path_cli.py
----------------
Least number of pixels to travel between two points of a maze image without
crossing a black pixel. Movement is 4-connected (no diagonals); every
non-black pixel, including the colored start/end blocks, is open.

Usage examples:
  - Reference maze with the built-in endpoints:
      python maze_path_cli.py --image maze.png

  - Explicit endpoints, save the path:
      python maze_path_cli.py --image maze.png --start 10,11 --end 795,798 \
        --path-csv path_px.csv --report-json report.json

  - Endpoints from the green/red marker blocks:
      python maze_path_cli.py --image maze.png --auto-markers

  - Endpoints and image from a run file (.json or .yml):
      python maze_path_cli.py --config run.yml

Exit status: 0 path found, 2 no path exists, 1 on errors.

Dependencies: Python 3.8+, opencv-python, numpy, pyyaml
"""

import argparse, sys
from typing import List, Optional

import maze_config
from maze_bfs import shortest_path
from maze_classify import build_passable_grid
from maze_grid import GridGraph
from maze_image import (acquire_image, build_report, locate_endpoints,
                        write_path_csv, write_report_json)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_PATH = 2


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Shortest 4-connected pixel path through a black-walled maze image")
    ap.add_argument("--config", type=str, default="",
                    help="Optional run file (.json/.yml) with image/start/end/max_expansions/auto_markers.")
    ap.add_argument("--image", type=str, default=None,
                    help=f"Path to the maze image (default: {maze_config.DEFAULT_IMAGE_PATH}).")
    ap.add_argument("--camera-index", type=int, default=-1,
                    help="If >=0, capture a single frame from this camera instead of --image.")
    ap.add_argument("--start", type=maze_config.parse_point, default=None,
                    help=f"Start pixel 'x,y' (default: {maze_config.DEFAULT_START[0]},{maze_config.DEFAULT_START[1]}).")
    ap.add_argument("--end", type=maze_config.parse_point, default=None,
                    help=f"End pixel 'x,y' (default: {maze_config.DEFAULT_END[0]},{maze_config.DEFAULT_END[1]}).")
    ap.add_argument("--auto-markers", action="store_true", default=None,
                    help="Use the centers of the green (start) and red (end) blocks as endpoints.")
    ap.add_argument("--max-expansions", type=int, default=None,
                    help="Abort the search after expanding this many pixels.")
    ap.add_argument("--path-csv", type=str, default="", help="Write the path pixels (x_px,y_px) to this CSV.")
    ap.add_argument("--report-json", type=str, default="", help="Write a run summary to this JSON file.")
    ap.add_argument("--verbose", action="store_true", help="Print search progress.")
    return ap


class _Progress:
    """Carriage-return progress line; remembers whether anything was printed."""

    def __init__(self):
        self.shown = False

    def __call__(self, expanded: int, distance: int) -> None:
        self.shown = True
        print(f"\r[i] Current distance: {distance}; expanded {expanded} px", end="", flush=True)

    def end_line(self) -> None:
        if self.shown:
            print()
            self.shown = False


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    progress = _Progress()

    try:
        cfg = maze_config.load_config(args.config)
        image_path = args.image if args.image is not None else cfg.get("image", maze_config.DEFAULT_IMAGE_PATH)
        auto_markers = args.auto_markers if args.auto_markers is not None else cfg.get("auto_markers", False)
        max_exp = args.max_expansions if args.max_expansions is not None else cfg.get("max_expansions")

        rgb = acquire_image(image_path, args.camera_index)
        passable = build_passable_grid(rgb)
        graph = GridGraph(passable)
        print(f"[i] Maze {graph.width}x{graph.height}, {graph.passable_count()} open px")

        start = args.start if args.start is not None else cfg.get("start")
        end = args.end if args.end is not None else cfg.get("end")
        if auto_markers and (start is None or end is None):
            gpt, rpt = locate_endpoints(rgb)
            print(f"[i] Markers: start={gpt} end={rpt}")
            start = gpt if start is None else start
            end = rpt if end is None else end
        if start is None:
            start = maze_config.DEFAULT_START
        if end is None:
            end = maze_config.DEFAULT_END

        result = shortest_path(graph, start, end,
                               max_expansions=max_exp,
                               progress=progress if args.verbose else None,
                               progress_every=maze_config.PROGRESS_EVERY)
        progress.end_line()
    except (RuntimeError, ValueError) as e:
        # covers MalformedGridError, InvalidCoordinatesError, SearchBudgetExceeded
        progress.end_line()
        print(f"[ERROR] {e}")
        return EXIT_ERROR

    distance = None if result is None else result.distance
    if args.report_json:
        try:
            write_report_json(build_report(passable, start, end, distance), args.report_json)
            print(f"[i] Report saved: {args.report_json}")
        except OSError as e:
            print(f"[WARN] Could not write report JSON: {e}")

    if result is None:
        print(f"[WARN] No path from {start} to {end}: end is unreachable.")
        return EXIT_NO_PATH

    if args.path_csv:
        try:
            write_path_csv(result.path, args.path_csv)
            print(f"[i] Path ({len(result.path)} px) saved: {args.path_csv}")
        except OSError as e:
            print(f"[WARN] Could not write path CSV: {e}")

    print(f"[OK] Least number of pixels traveled: {result.distance}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
