# -*- coding: utf-8 -*-
"""
Plane primitives
================

Triangle plane equations and signed distances.

A plane is stored as ``n·x + d = 0`` with a unit normal ``n``. The normal of
a triangle (p1, p2, p3) is always built as (p2 - p1) × (p3 - p1), so two
triangles compared against each other share the same sign convention.

Signed distances closer to zero than ``GEOM_EPS`` are snapped to exactly 0:
a vertex that close to a plane is "touching" it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .config import GEOM_EPS
from .exceptions import DegenerateGeometryError


@dataclass(frozen=True)
class PlaneEquation:
    """Plane ``normal·x + offset = 0`` with a unit ``normal``."""
    normal: np.ndarray
    offset: float

    def signed_distance(self, points: np.ndarray, eps: float = GEOM_EPS) -> np.ndarray:
        return signed_distances(self, points, eps)

    def point(self) -> np.ndarray:
        """Point of the plane closest to the origin."""
        return -self.offset * self.normal


def normalize(v: Iterable[float], eps: float = GEOM_EPS) -> np.ndarray:
    """Return ``v / |v|``.

    Raises:
        DegenerateGeometryError: If ``|v| < eps``.
    """
    v = np.asarray(v, dtype=np.float64)
    length = float(np.linalg.norm(v))
    if length < eps or not np.isfinite(length):
        raise DegenerateGeometryError(f"Cannot normalize vector {v} (length {length:.3g}).")
    return v / length


def triangle_normal(p1, p2, p3) -> np.ndarray:
    """Raw (non-normalized) normal (p2 - p1) × (p3 - p1); its length is twice the area."""
    p1 = np.asarray(p1, dtype=np.float64)
    return np.cross(np.asarray(p2, dtype=np.float64) - p1, np.asarray(p3, dtype=np.float64) - p1)


def plane_equation(p1, p2, p3, eps: float = GEOM_EPS) -> PlaneEquation:
    """Plane equation of the triangle (p1, p2, p3).

    Raises:
        DegenerateGeometryError: If the triangle has (numerically) zero area.
    """
    raw = triangle_normal(p1, p2, p3)
    if float(np.linalg.norm(raw)) < eps * eps:
        raise DegenerateGeometryError("Triangle has zero area; its plane is undefined.")
    n = raw / np.linalg.norm(raw)
    d = -float(np.dot(n, np.asarray(p1, dtype=np.float64)))
    return PlaneEquation(normal=n, offset=d)


def signed_distances(plane: PlaneEquation, points: np.ndarray, eps: float = GEOM_EPS) -> np.ndarray:
    """Signed distances of ``points`` (N, 3) to ``plane``, snapped to 0 within ``eps``."""
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    dist = pts @ plane.normal + plane.offset
    dist[np.abs(dist) < eps] = 0.0
    return dist


def strict_sign(values: np.ndarray) -> np.ndarray:
    """Element-wise -1 / 0 / +1. Zero is its own class."""
    return np.sign(np.asarray(values, dtype=np.float64)).astype(np.int8)


def same_strict_sign(values: np.ndarray) -> bool:
    """True iff every value is strictly positive or every value is strictly negative."""
    s = strict_sign(values)
    return bool(np.all(s > 0) or np.all(s < 0))


def is_zero(values: np.ndarray, eps: float = GEOM_EPS) -> bool:
    return bool(np.all(np.abs(np.asarray(values, dtype=np.float64)) < eps))
