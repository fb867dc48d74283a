"""
Shared fixtures: a unit cube ROM centered at the origin and square
affordance patches.

Cube faces are wound counter-clockwise seen from outside, so edge cross
products point outward.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from contactfit.geometry_kernel import CollisionObject, CollisionResult

CUBE_VERTICES = np.array([
    [-0.5, -0.5, -0.5],  # 0
    [0.5, -0.5, -0.5],   # 1
    [0.5, 0.5, -0.5],    # 2
    [-0.5, 0.5, -0.5],   # 3
    [-0.5, -0.5, 0.5],   # 4
    [0.5, -0.5, 0.5],    # 5
    [0.5, 0.5, 0.5],     # 6
    [-0.5, 0.5, 0.5],    # 7
])

CUBE_TRIANGLES = np.array([
    [0, 2, 1], [0, 3, 2],  # bottom (z=-0.5)
    [4, 5, 6], [4, 6, 7],  # top (z=0.5)
    [0, 1, 5], [0, 5, 4],  # front (y=-0.5)
    [3, 7, 6], [3, 6, 2],  # back (y=0.5)
    [0, 4, 7], [0, 7, 3],  # left (x=-0.5)
    [1, 2, 6], [1, 6, 5],  # right (x=0.5)
])


def square_patch(half: float, z: float) -> tuple[np.ndarray, np.ndarray]:
    """Horizontal square of side ``2 * half`` at height ``z``, two triangles."""
    vertices = np.array([
        [-half, -half, z],
        [half, -half, z],
        [half, half, z],
        [-half, half, z],
    ])
    triangles = np.array([[0, 1, 2], [0, 2, 3]])
    return vertices, triangles


def write_amf(path: Path, objects: list[tuple[str, np.ndarray, np.ndarray]], color=None) -> Path:
    """Write a minimal AMF file with one <object> per (name, vertices, triangles)."""
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', '<amf unit="millimeter">']
    for index, (name, vertices, triangles) in enumerate(objects):
        parts.append(f'  <object id="{index}">')
        parts.append(f'    <metadata type="name">{name}</metadata>')
        if color is not None:
            parts.append(f"    <color><r>{color[0]}</r><g>{color[1]}</g><b>{color[2]}</b></color>")
        parts.append("    <mesh><vertices>")
        for x, y, z in vertices:
            parts.append(f"      <vertex><coordinates><x>{x}</x><y>{y}</y><z>{z}</z></coordinates></vertex>")
        parts.append("    </vertices><volume>")
        for v1, v2, v3 in triangles:
            parts.append(f"      <triangle><v1>{v1}</v1><v2>{v2}</v2><v3>{v3}</v3></triangle>")
        parts.append("    </volume></mesh>")
        parts.append("  </object>")
    parts.append("</amf>")
    path.write_text("\n".join(parts), encoding="utf-8")
    return path


class StubCollisionQuery:
    """Narrow-phase stand-in that records its calls."""

    def __init__(self, is_colliding: bool = False):
        self.is_colliding = is_colliding
        self.calls = 0

    def __call__(self, rom, affordance) -> CollisionResult:
        self.calls += 1
        return CollisionResult(is_colliding=self.is_colliding)


@pytest.fixture
def cube() -> CollisionObject:
    return CollisionObject.from_arrays(CUBE_VERTICES, CUBE_TRIANGLES, name="rom")


@pytest.fixture
def make_patch():
    def _make(half: float = 0.3, z: float = 0.0, translation=None, rotation=None) -> CollisionObject:
        vertices, triangles = square_patch(half, z)
        return CollisionObject.from_arrays(vertices, triangles, rotation, translation, name="affordance")
    return _make


@pytest.fixture
def no_contact_query() -> StubCollisionQuery:
    return StubCollisionQuery(is_colliding=False)


@pytest.fixture
def contact_query() -> StubCollisionQuery:
    return StubCollisionQuery(is_colliding=True)
