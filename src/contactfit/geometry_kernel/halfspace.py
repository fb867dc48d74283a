# -*- coding: utf-8 -*-
"""
Half-space body filter
======================

A closed triangulated solid is turned into one inequality per face:

    n_f · (x − v_f) ≤ 0

with ``n_f`` the unit outward normal (edge cross product, outward for a
counter-clockwise winding seen from outside) and ``v_f`` the first vertex
of the face. A point is inside iff every inequality holds within
``GEOM_EPS``.

The test is exact for convex solids. For a non-convex solid it accepts
points in the convex "shadow" of concave regions as well (an
over-approximation), which is acceptable because it only pre-filters
affordance vertices before the triangle intersections.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

import numpy as np

from .collision_object import CollisionObject
from .config import GEOM_EPS
from .static_class import PointLocation
from .transforms import apply_pose, as_pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HalfSpaceSystem:
    """Stacked face inequalities ``normals[i] · (x − points[i]) ≤ 0``."""
    normals: np.ndarray  # (F, 3) unit outward normals
    points: np.ndarray   # (F, 3) a vertex of each face
    eps: float = GEOM_EPS

    def __len__(self) -> int:
        return int(len(self.normals))

    @property
    def offsets(self) -> np.ndarray:
        return np.einsum("ij,ij->i", self.normals, self.points)

    def evaluate(self, points: Any) -> np.ndarray:
        """(N, F) matrix of ``n_f · x − n_f · v_f``; positive means outside face f."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        return pts @ self.normals.T - self.offsets

    def contains(self, points: Any) -> np.ndarray:
        """Boolean mask over ``points`` (N, 3): inside (or on the boundary) of every face."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        if len(self) == 0:
            return np.zeros(len(pts), dtype=bool)
        return np.all(self.evaluate(pts) <= self.eps, axis=1)

    def locate(self, point: Any) -> PointLocation:
        """Classify a single point as INSIDE, ON_BOUNDARY or OUTSIDE."""
        if len(self) == 0:
            return PointLocation.OUTSIDE
        values = self.evaluate(point)[0]
        if np.any(values > self.eps):
            return PointLocation.OUTSIDE
        if np.any(np.abs(values) <= self.eps):
            return PointLocation.ON_BOUNDARY
        return PointLocation.INSIDE


def build_inequalities(
    solid: Union[CollisionObject, Tuple[Any, Any]],
    pose: Optional[Tuple[Optional[Iterable], Optional[Iterable[float]]]] = None,
    eps: float = GEOM_EPS,
) -> HalfSpaceSystem:
    """Build the half-space system of a closed solid in the world frame.

    Args:
        solid: A ``CollisionObject`` or a ``(vertices, triangles)`` pair.
        pose: ``(rotation, translation)``. Defaults to the object's own pose,
            or the identity for raw arrays.
        eps: Containment tolerance; faces whose normal is shorter than
            ``eps²`` (zero area) are skipped.

    Returns:
        HalfSpaceSystem with one row per non-degenerate face.
    """
    if isinstance(solid, CollisionObject):
        vertices, triangles = solid.vertices, solid.triangles
        if pose is None:
            pose = (solid.rotation, solid.translation)
    else:
        vertices, triangles = solid
    R, t = as_pose(*(pose or (None, None)))

    world = apply_pose(np.asarray(vertices, dtype=np.float64), R, t)
    tris = world[np.asarray(triangles, dtype=np.int64)]
    raw = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    length = np.linalg.norm(raw, axis=1)

    keep = length >= eps * eps
    skipped = int(np.count_nonzero(~keep))
    if skipped:
        logger.debug("Half-space system: skipped %d degenerate faces.", skipped)

    normals = raw[keep] / length[keep, None]
    return HalfSpaceSystem(normals=normals, points=tris[keep, 0], eps=eps)


def is_inside(system: HalfSpaceSystem, point: Any) -> bool:
    """True iff ``point`` satisfies every face inequality of ``system``."""
    return bool(system.contains(point)[0])
