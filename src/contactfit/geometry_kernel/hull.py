# -*- coding: utf-8 -*-
"""
Hull
====

Convex hull of a near-planar 3D point cloud and boundary resampling.

The contact points of two meshes lie (close to) one plane, so the hull is
taken in 2D: points are expressed in their best-fit plane frame
(``plane_fit``), hulled with ``scipy.spatial.ConvexHull`` and the hull
vertices are returned as the original 3D points, in boundary order
(counter-clockwise around the plane normal).
"""
from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from .config import GEOM_EPS, HULL_EDGE_EPS, HULL_MIN_EDGE_FLOOR
from .plane_fit import fit_plane

logger = logging.getLogger(__name__)


def unique_points(points: Any, eps: float = GEOM_EPS) -> np.ndarray:
    """Remove points closer than ``eps`` per coordinate; first occurrence order is kept."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    if len(pts) == 0:
        return pts
    keys = np.round(pts / eps).astype(np.int64)
    _, first = np.unique(keys, axis=0, return_index=True)
    return pts[np.sort(first)]


def _extremal_points(pts: np.ndarray) -> np.ndarray:
    # collinear set: the two ends along the principal direction
    centered = pts - pts.mean(axis=0)
    _, _, vt = np.linalg.svd(centered, full_matrices=False)
    t = centered @ vt[0]
    lo, hi = int(np.argmin(t)), int(np.argmax(t))
    if lo == hi:
        return pts[[lo]]
    return pts[[lo, hi]]


def convex_hull_3d(points: Any, eps: float = GEOM_EPS) -> np.ndarray:
    """Hull vertices of a near-planar point cloud, in boundary order.

    Args:
        points: (N, 3) point cloud.
        eps: Points closer than this are merged before hulling.

    Returns:
        (K, 3) hull vertices. Fewer than 3 distinct points are returned as
        they are; a collinear set returns its two end points.
    """
    pts = unique_points(points, eps)
    if len(pts) < 3:
        return pts

    plane = fit_plane(pts)
    uv = plane.to_plane_coordinates(pts)
    try:
        hull = ConvexHull(uv)
    except QhullError:
        logger.debug("Convex hull: %d points are collinear, returning end points.", len(pts))
        return _extremal_points(pts)
    return pts[hull.vertices]


def hull_min_edge(
    hull_points: Any,
    min_edge_floor: float = HULL_MIN_EDGE_FLOOR,
    edge_eps: float = HULL_EDGE_EPS,
) -> float:
    """Target spacing of the refined boundary.

    Starts at ``min_edge_floor`` and is lowered to the shortest hull edge
    (closing edge included) that is at least ``edge_eps`` long.
    """
    pts = np.asarray(hull_points, dtype=np.float64).reshape(-1, 3)
    min_dist = float(min_edge_floor)
    if len(pts) < 2:
        return min_dist
    lengths = np.linalg.norm(np.roll(pts, -1, axis=0) - pts, axis=1)
    valid = lengths[lengths >= edge_eps]
    if valid.size:
        min_dist = min(min_dist, float(valid.min()))
    return min_dist


def refine_hull(
    hull_points: Any,
    min_edge_floor: float = HULL_MIN_EDGE_FLOOR,
    edge_eps: float = HULL_EDGE_EPS,
) -> np.ndarray:
    """Resample a closed hull boundary so no step is longer than ``hull_min_edge``.

    Every edge ``p_i -> p_{i+1}`` (including the closing edge back to
    ``p_0``) is split into ``ceil(length / min_dist)`` equal segments. The
    output starts at ``p_0`` and does not repeat it at the end.
    """
    pts = np.asarray(hull_points, dtype=np.float64).reshape(-1, 3)
    if len(pts) < 3:
        return pts.copy()

    min_dist = hull_min_edge(pts, min_edge_floor, edge_eps)
    refined = []
    for start, end in zip(pts, np.roll(pts, -1, axis=0)):
        length = float(np.linalg.norm(end - start))
        n_seg = max(1, math.ceil(length / min_dist))
        steps = np.arange(n_seg, dtype=np.float64)[:, None] / n_seg
        refined.append(start + steps * (end - start))
    out = np.vstack(refined)
    logger.debug("Hull refinement: %d -> %d points (spacing %.6g).", len(pts), len(out), min_dist)
    return out
