#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
maze_image.py
-------------
Image-side glue around the solver core:
  - decode a maze image (file or single camera frame) into an RGB matrix
  - optionally locate the green (start) / red (end) marker blocks
  - export a solved path as CSV and a run summary as JSON

Nothing here decides passability; that is maze_classify's job.
"""

from __future__ import annotations
import csv
import json
import os
import time
from typing import Any, Dict, List, Optional, Tuple

import cv2
import numpy as np

from maze_config import (HSV_GREEN_HI, HSV_GREEN_LO, HSV_RED1_HI, HSV_RED1_LO,
                         HSV_RED2_HI, HSV_RED2_LO, MIN_MARKER_AREA_PX)


# -------------------- Acquisition --------------------
def acquire_image(image_path: str, camera_index: int = -1) -> np.ndarray:
    """
    Return an (H, W, 3) uint8 RGB matrix.
    Camera takes precedence when index >= 0, otherwise image_path is read.
    Raises RuntimeError on any acquisition failure.
    """
    if camera_index is not None and camera_index >= 0:
        cap = cv2.VideoCapture(camera_index)
        time.sleep(0.5)
        ok, frame = cap.read()
        cap.release()
        if not ok:
            raise RuntimeError("Camera read failed. Try a different --camera-index or use --image.")
        bgr = frame
    else:
        if not image_path:
            raise RuntimeError("Provide --image PATH or set --camera-index >= 0")
        if not os.path.exists(image_path):
            raise RuntimeError(f"Image not found: {image_path}")
        bgr = cv2.imread(image_path, cv2.IMREAD_COLOR)
        if bgr is None:
            raise RuntimeError(f"Failed to load image: {image_path}")
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


# -------------------- Markers --------------------
def _largest_blob_center(mask: np.ndarray) -> Optional[Tuple[int, int]]:
    cnts, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    cnts = [c for c in cnts if cv2.contourArea(c) >= MIN_MARKER_AREA_PX]
    if not cnts:
        return None
    c = max(cnts, key=cv2.contourArea)
    M = cv2.moments(c)
    if M['m00'] == 0:
        return None
    return (int(M['m10'] / M['m00']), int(M['m01'] / M['m00']))


def find_markers(rgb: np.ndarray) -> Tuple[Optional[Tuple[int, int]], Optional[Tuple[int, int]]]:
    """Centroids (x, y) of the largest green and red blobs; None where not found."""
    img = np.ascontiguousarray(np.asarray(rgb)[:, :, :3], dtype=np.uint8)
    hsv = cv2.cvtColor(img, cv2.COLOR_RGB2HSV)
    gmask = cv2.inRange(hsv, np.array(HSV_GREEN_LO), np.array(HSV_GREEN_HI))
    rmask1 = cv2.inRange(hsv, np.array(HSV_RED1_LO), np.array(HSV_RED1_HI))
    rmask2 = cv2.inRange(hsv, np.array(HSV_RED2_LO), np.array(HSV_RED2_HI))
    rmask = cv2.bitwise_or(rmask1, rmask2)
    return _largest_blob_center(gmask), _largest_blob_center(rmask)


def locate_endpoints(rgb: np.ndarray) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    gpt, rpt = find_markers(rgb)
    if gpt is None or rpt is None:
        raise RuntimeError("Could not detect both green (start) and red (end) markers.")
    return gpt, rpt


# -------------------- Export --------------------
def write_path_csv(path: List[Tuple[int, int]], out_path: str) -> None:
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["x_px", "y_px"])
        for x, y in path:
            w.writerow([int(x), int(y)])


def build_report(passable: np.ndarray,
                 start: Tuple[int, int],
                 end: Tuple[int, int],
                 distance: Optional[int]) -> Dict[str, Any]:
    h, w = passable.shape
    return {
        "image_w": int(w),
        "image_h": int(h),
        "passable_pct": float(np.count_nonzero(passable)) / float(passable.size) * 100.0,
        "start": [int(start[0]), int(start[1])],
        "end": [int(end[0]), int(end[1])],
        "reachable": distance is not None,
        "distance_px": (int(distance) if distance is not None else None),
    }


def write_report_json(report: Dict[str, Any], out_path: str) -> None:
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
