# -*- coding: utf-8 -*-
"""
Collision objects
=================

A ``CollisionObject`` is a triangulated solid (``MeshData``) placed in the
world by a rigid pose ``x_w = R @ x + t``. The contact extractor only needs

- ``num_triangles``, ``triangles`` (M, 3) and ``vertices`` (N, 3)
- ``rotation`` (3, 3) and ``translation`` (3,)

plus a narrow-phase query that says whether two objects collide.

The default narrow phase is ``trimesh.collision.CollisionManager`` (FCL
backend, needs ``python-fcl``). Any callable with the signature of
:func:`fcl_collision_query` can be passed to the extractor instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

import numpy as np
import trimesh
from trimesh.collision import CollisionManager

from ..file_parser.mesh_data import MeshData
from .config import MAX_CONTACTS
from .transforms import apply_pose, as_pose, matrix_to_pose, pose_to_matrix

logger = logging.getLogger(__name__)


class CollisionObject:
    """Mesh + world pose."""

    def __init__(
        self,
        mesh: MeshData,
        rotation: Optional[Iterable] = None,
        translation: Optional[Iterable[float]] = None,
        name: Optional[str] = None,
    ):
        self.mesh = mesh
        self.rotation, self.translation = as_pose(rotation, translation)
        self.name = name or mesh.name or f"mesh_{mesh.id}"

    @classmethod
    def from_arrays(
        cls,
        vertices: Any,
        triangles: Any,
        rotation: Optional[Iterable] = None,
        translation: Optional[Iterable[float]] = None,
        name: Optional[str] = None,
    ) -> "CollisionObject":
        return cls(MeshData(vertices=vertices, triangles=triangles, name=name), rotation, translation, name)

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh, transform: Optional[Iterable] = None, name: Optional[str] = None) -> "CollisionObject":
        """Wrap a ``trimesh.Trimesh``; ``transform`` is a 4x4 homogeneous pose."""
        rotation, translation = (None, None) if transform is None else matrix_to_pose(transform)
        return cls.from_arrays(mesh.vertices, mesh.faces, rotation, translation, name)

    @property
    def vertices(self) -> np.ndarray:
        return self.mesh.vertices

    @property
    def triangles(self) -> np.ndarray:
        return self.mesh.triangles

    @property
    def num_triangles(self) -> int:
        return int(len(self.mesh.triangles))

    @property
    def transform(self) -> np.ndarray:
        """4x4 homogeneous pose."""
        return pose_to_matrix(self.rotation, self.translation)

    def world_vertices(self) -> np.ndarray:
        """(N, 3) vertices in the world frame."""
        return apply_pose(self.vertices, self.rotation, self.translation)

    def world_triangles(self) -> np.ndarray:
        """(M, 3, 3) triangle corner positions in the world frame."""
        return self.world_vertices()[self.triangles]

    def to_trimesh(self) -> trimesh.Trimesh:
        """World-frame ``trimesh.Trimesh`` (vertices and faces kept as is)."""
        return trimesh.Trimesh(vertices=self.world_vertices(), faces=self.triangles, process=False)

    def __repr__(self):
        return (f"CollisionObject(name={self.name!r}, "
                f"vertices={self.vertices.shape}, triangles={self.triangles.shape}, "
                f"translation={self.translation.tolist()})")


@dataclass
class CollisionResult:
    """Outcome of a narrow-phase query."""
    is_colliding: bool
    contacts: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))

    def __bool__(self) -> bool:
        return self.is_colliding


CollisionQuery = Callable[[CollisionObject, CollisionObject], CollisionResult]


def fcl_collision_query(
    rom: CollisionObject,
    affordance: CollisionObject,
    max_contacts: int = MAX_CONTACTS,
) -> CollisionResult:
    """Narrow-phase collision test of two objects with contact points.

    Both meshes are registered in their own ``CollisionManager`` with their
    pose as transform and tested against each other.

    Args:
        rom: Range-of-motion solid.
        affordance: Affordance patch.
        max_contacts: Maximum number of contact points kept.

    Returns:
        CollisionResult with at most ``max_contacts`` points.

    Raises:
        ValueError: If no FCL backend (python-fcl) is available.
    """
    cm_rom = CollisionManager()
    cm_rom.add_object(rom.name, trimesh.Trimesh(vertices=rom.vertices, faces=rom.triangles, process=False),
                      transform=rom.transform)
    cm_aff = CollisionManager()
    cm_aff.add_object(affordance.name,
                      trimesh.Trimesh(vertices=affordance.vertices, faces=affordance.triangles, process=False),
                      transform=affordance.transform)

    is_hit, _names, data = cm_rom.in_collision_other(cm_aff, return_names=True, return_data=True)
    if not is_hit:
        return CollisionResult(is_colliding=False)

    points = [np.asarray(c.point, dtype=np.float64) for c in data[:max_contacts]]
    contacts = np.vstack(points) if points else np.zeros((0, 3), dtype=np.float64)
    logger.debug("Narrow phase: %s vs %s -> %d contacts.", rom.name, affordance.name, len(contacts))
    return CollisionResult(is_colliding=True, contacts=contacts)
