# -*- coding: utf-8 -*-
"""
Intersection
============

Pure geometry intersection utilities.

This module must be stateless:
- no dependency on collision objects / extractor / fitting
- only takes raw triangles and returns points

Primary use in contact extraction:
    triangle(affordance)  ∩  triangle(rom)  ->  segment [X, Y]

The test follows "A Fast Triangle-Triangle Intersection Test" (T. Möller,
1997): reject on the signed distances of each triangle to the other one's
plane, intersect both triangles with the common line of the two planes and
overlap the two scalar intervals along that line.

Coplanar pairs have no common line. What happens to them is chosen with
:class:`CoplanarPolicy`:
    RAISE  -> DegenerateGeometryError
    CLIP   -> 2D polygon clipping of the two triangles (pyclipper)
    IGNORE -> empty result
"""
from __future__ import annotations

import logging
from typing import List, Tuple, Union

import numpy as np
import pyclipper

from .config import CLIPPER_SCALE, GEOM_EPS
from .exceptions import DegenerateGeometryError
from .plane import PlaneEquation, is_zero, plane_equation, same_strict_sign, signed_distances
from .static_class import CoplanarPolicy
from .transforms import rotate_z_to_vector
from .triangle import Triangle, as_vertices

logger = logging.getLogger(__name__)

TriangleLike = Union[Triangle, np.ndarray, list, tuple]


def intersect_triangles(
    tri_a: TriangleLike,
    tri_b: TriangleLike,
    coplanar: Union[CoplanarPolicy, str] = CoplanarPolicy.RAISE,
    eps: float = GEOM_EPS,
) -> List[np.ndarray]:
    """Intersect two triangles in 3D.

    Args:
        tri_a: First triangle, (3, 3) vertices or :class:`Triangle`.
        tri_b: Second triangle.
        coplanar: Policy for coplanar pairs.
        eps: Zero tolerance for signed distances and vector components.

    Returns:
        ``[]`` if the triangles are disjoint, ``[X, Y]`` (the end points of
        the intersection segment, possibly equal when they only touch in a
        point) otherwise. Under ``CoplanarPolicy.CLIP`` a coplanar pair
        returns the vertices of the overlap polygon instead.

    Raises:
        DegenerateGeometryError: If a triangle has zero area, or the pair is
            coplanar and ``coplanar`` is ``RAISE``.

    Example:
        >>> a = [[-1, -1, 0], [1, -1, 0], [0, 1, 0]]
        >>> b = [[0, 0, -1], [0, 0, 1], [0, 2, 0]]
        >>> len(intersect_triangles(a, b))
        2
    """
    a = as_vertices(tri_a)
    b = as_vertices(tri_b)
    coplanar = CoplanarPolicy(coplanar)

    # 1) vertices of B against the plane of A
    plane_a = plane_equation(*a, eps=eps)
    dist_b = signed_distances(plane_a, b, eps)
    if same_strict_sign(dist_b):
        return []

    # 2) vertices of A against the plane of B
    plane_b = plane_equation(*b, eps=eps)
    dist_a = signed_distances(plane_b, a, eps)
    if same_strict_sign(dist_a):
        return []

    # 3) coplanar (or parallel within tolerance): no common line
    cross = np.cross(plane_b.normal, plane_a.normal)
    cross_len = float(np.linalg.norm(cross))
    if is_zero(dist_a, eps) or is_zero(dist_b, eps) or cross_len < eps:
        return _handle_coplanar(a, b, plane_a, coplanar)

    # 4) common line L(t) = p + t * D
    direction = cross / cross_len
    p = intersection_line_point(plane_a, plane_b, direction)

    # 5) + 6) scalar interval of each triangle along L
    lo_a, hi_a = _line_interval(a, dist_a, p, direction)
    lo_b, hi_b = _line_interval(b, dist_b, p, direction)

    # 7) overlap of the two intervals
    t1 = max(lo_a, lo_b)
    t2 = min(hi_a, hi_b)
    if t1 > t2 + eps:
        return []
    t2 = max(t1, t2)
    return [p + direction * t1, p + direction * t2]


def intersection_line_point(plane_a: PlaneEquation, plane_b: PlaneEquation, direction: np.ndarray) -> np.ndarray:
    """A point on the common line of two non-parallel planes.

    The coordinate along the dominant axis of ``direction`` is fixed to 0 and
    the two plane equations are solved for the other two coordinates. The
    2x2 determinant equals that component of ``n_a × n_b`` (up to sign), so
    picking the largest one keeps the denominator away from zero. A
    horizontal line (D_z ≈ 0) therefore solves in x or y, a general line in z.
    """
    axis = int(np.argmax(np.abs(direction)))
    i, j = [k for k in range(3) if k != axis]
    m = np.array([[plane_a.normal[i], plane_a.normal[j]],
                  [plane_b.normal[i], plane_b.normal[j]]], dtype=np.float64)
    rhs = -np.array([plane_a.offset, plane_b.offset], dtype=np.float64)
    sol = np.linalg.solve(m, rhs)
    p = np.zeros(3, dtype=np.float64)
    p[i] = sol[0]
    p[j] = sol[1]
    return p


def apex_index(dist: np.ndarray) -> int:
    """Index of the vertex on the opposite side of the plane from the other two.

    Zero distances are touching vertices. When two vertices are on the
    plane, the third one is the apex so the edge on the plane becomes the
    interval.
    """
    d0, d1, d2 = dist
    if d0 * d1 > 0:
        return 2
    if d0 * d2 > 0:
        return 1
    if d1 * d2 > 0 or d0 != 0:
        return 0
    if d1 != 0:
        return 1
    if d2 != 0:
        return 2
    raise DegenerateGeometryError("All signed distances are zero; triangle lies in the plane.")


def _line_interval(verts: np.ndarray, dist: np.ndarray, p: np.ndarray, direction: np.ndarray) -> Tuple[float, float]:
    proj = (verts - p) @ direction
    apex = apex_index(dist)
    ts = []
    for k in range(3):
        if k == apex:
            continue
        dk = dist[k]
        da = dist[apex]
        if dk == 0.0 or dk == da:
            ts.append(float(proj[k]))
        else:
            ts.append(float(proj[k] + (proj[apex] - proj[k]) * dk / (dk - da)))
    return min(ts), max(ts)


def _handle_coplanar(a: np.ndarray, b: np.ndarray, plane_a: PlaneEquation, policy: CoplanarPolicy) -> List[np.ndarray]:
    if policy == CoplanarPolicy.RAISE:
        raise DegenerateGeometryError(
            "Coplanar triangles: intersection is a polygon, not a segment. "
            "Use CoplanarPolicy.CLIP to clip them in 2D."
        )
    if policy == CoplanarPolicy.IGNORE:
        logger.debug("Coplanar triangle pair ignored.")
        return []
    return clip_coplanar_triangles(a, b, plane_a.normal)


def clip_coplanar_triangles(
    tri_a: TriangleLike,
    tri_b: TriangleLike,
    normal: np.ndarray,
    scale: float = CLIPPER_SCALE,
) -> List[np.ndarray]:
    """Overlap polygon of two coplanar triangles, as 3D points in the plane of ``tri_a``.

    Both triangles are expressed in a frame whose Z axis is ``normal``
    (rotate -> project to XY), quantized to integers and intersected with
    pyclipper. The clipped polygon is lifted back onto the plane of ``tri_a``.

    Returns:
        Vertices of the overlap polygon, ``[]`` if the triangles only touch
        or do not overlap.
    """
    a = as_vertices(tri_a)
    b = as_vertices(tri_b)
    R = rotate_z_to_vector(normal)
    origin = a[0]

    uv_a = ((a - origin) @ R)[:, :2]
    uv_b = ((b - origin) @ R)[:, :2]

    pc = pyclipper.Pyclipper()
    try:
        pc.AddPath(_to_clipper(uv_a, scale), pyclipper.PT_SUBJECT, True)
        pc.AddPath(_to_clipper(uv_b, scale), pyclipper.PT_CLIP, True)
    except pyclipper.ClipperException:
        # a triangle collapsed to a line or a point after quantization
        logger.debug("Coplanar triangle pair too small to clip at scale %s.", scale)
        return []
    result = pc.Execute(pyclipper.CT_INTERSECTION, pyclipper.PFT_NONZERO, pyclipper.PFT_NONZERO)

    points: List[np.ndarray] = []
    for path in result:
        uv = np.asarray(path, dtype=np.float64) / scale
        uvw = np.column_stack([uv, np.zeros(len(uv))])
        points.extend(origin + uvw @ R.T)
    return points


def _to_clipper(uv: np.ndarray, scale: float) -> List[Tuple[int, int]]:
    return [(int(round(x * scale)), int(round(y * scale))) for x, y in uv]
