"""
Tests for the triangle-triangle intersector.

Covers the separating-plane rejection, crossing and touching pairs,
argument-order symmetry and the three coplanar policies.
"""

from __future__ import annotations

import numpy as np
import pytest

from contactfit.geometry_kernel import (
    CoplanarPolicy,
    DegenerateGeometryError,
    Triangle,
    intersect_triangles,
)
from contactfit.geometry_kernel.intersection import apex_index

BASE = np.array([[-1.0, -1.0, 0.0], [1.0, -1.0, 0.0], [0.0, 1.0, 0.0]])


def _as_set(points, decimals: int = 6) -> set:
    return {tuple(np.round(np.asarray(p, dtype=float), decimals) + 0.0) for p in points}


def test_disjoint_triangles_return_empty() -> None:
    above = BASE + np.array([0.0, 0.0, 1.0])
    assert intersect_triangles(BASE, above) == []


def test_triangle_on_one_side_of_other_plane_returns_empty() -> None:
    # b crosses the plane of a, but far outside a itself
    b = np.array([[5.0, 0.0, -1.0], [5.0, 0.0, 1.0], [5.0, 2.0, 0.0]])
    assert intersect_triangles(BASE, b) == []


@pytest.mark.parametrize(
    "tri_b, expected",
    [
        # b in plane x=0, touching z=0 with one vertex
        ([[0, 0, -1], [0, 0, 1], [0, 2, 0]], {(0.0, 0.0, 0.0), (0.0, 1.0, 0.0)}),
        # b in plane x=0.25, general crossing
        ([[0.25, -0.5, -1], [0.25, -0.5, 1], [0.25, 3, -0.5]], {(0.25, -0.5, 0.0), (0.25, 0.5, 0.0)}),
    ],
)
def test_crossing_triangles_return_segment(tri_b, expected) -> None:
    result = intersect_triangles(BASE, tri_b)
    assert len(result) == 2
    assert _as_set(result) == expected
    for point in result:
        assert abs(point[2]) < 1e-9


def test_vertex_touching_returns_degenerate_segment() -> None:
    b = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 1.0], [0.0, 1.0, 1.0]])
    x, y = intersect_triangles(BASE, b)
    np.testing.assert_allclose(x, [0.0, 0.0, 0.0], atol=1e-9)
    np.testing.assert_allclose(y, [0.0, 0.0, 0.0], atol=1e-9)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_intersection_is_symmetric(seed: int) -> None:
    rng = np.random.default_rng(seed)
    a = rng.uniform(-1.0, 1.0, size=(3, 3))
    b = rng.uniform(-1.0, 1.0, size=(3, 3))
    ab = intersect_triangles(a, b)
    ba = intersect_triangles(b, a)
    assert len(ab) == len(ba)
    if ab:
        direct = np.linalg.norm(ab[0] - ba[0]) + np.linalg.norm(ab[1] - ba[1])
        swapped = np.linalg.norm(ab[0] - ba[1]) + np.linalg.norm(ab[1] - ba[0])
        assert min(direct, swapped) < 1e-9


def test_segment_lies_in_both_triangles_planes() -> None:
    a = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.5], [0.0, 2.0, -0.5]])
    b = np.array([[0.5, 0.5, -1.0], [0.7, 0.4, 1.0], [0.3, 1.5, 0.2]])
    result = intersect_triangles(a, b)
    assert len(result) == 2
    for tri in (Triangle(a), Triangle(b)):
        distances = tri.plane.signed_distance(np.vstack(result))
        np.testing.assert_allclose(distances, 0.0, atol=1e-9)


def test_coplanar_raise_is_default() -> None:
    b = BASE * 0.5
    with pytest.raises(DegenerateGeometryError):
        intersect_triangles(BASE, b)


def test_coplanar_ignore_returns_empty() -> None:
    assert intersect_triangles(BASE, BASE * 0.5, coplanar=CoplanarPolicy.IGNORE) == []


def test_coplanar_clip_returns_overlap_polygon() -> None:
    a = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
    b = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    result = intersect_triangles(a, b, coplanar="CLIP")
    assert _as_set(result) == _as_set(b)


def test_coplanar_clip_partial_overlap() -> None:
    a = np.array([[0.0, 0.0, 1.0], [2.0, 0.0, 1.0], [0.0, 2.0, 1.0]])
    b = np.array([[1.0, 0.0, 1.0], [3.0, 0.0, 1.0], [1.0, 2.0, 1.0]])
    result = np.vstack(intersect_triangles(a, b, coplanar=CoplanarPolicy.CLIP))
    # overlap is the triangle (1,0) (2,0) (1,1) in the plane z=1
    assert _as_set(result) == {(1.0, 0.0, 1.0), (2.0, 0.0, 1.0), (1.0, 1.0, 1.0)}


def test_coplanar_clip_disjoint_returns_empty() -> None:
    b = BASE + np.array([10.0, 0.0, 0.0])
    assert intersect_triangles(BASE, b, coplanar=CoplanarPolicy.CLIP) == []


def test_zero_area_triangle_raises() -> None:
    flat = np.array([[0.0, 0.0, -1.0], [0.0, 0.0, 1.0], [0.0, 0.0, 0.5]])
    with pytest.raises(DegenerateGeometryError):
        intersect_triangles(BASE, flat)


@pytest.mark.parametrize(
    "dist, apex",
    [
        ([1.0, 1.0, -1.0], 2),
        ([1.0, -1.0, 1.0], 1),
        ([-1.0, 1.0, 1.0], 0),
        ([1.0, -1.0, 0.0], 0),
        ([0.0, 1.0, -1.0], 1),
        ([0.0, 0.0, 1.0], 2),
    ],
)
def test_apex_is_the_vertex_on_the_other_side(dist, apex) -> None:
    assert apex_index(np.array(dist)) == apex
