# -*- coding: utf-8 -*-
"""
Contact-region extractor
========================

Point cloud of the contact boundary between a range-of-motion solid (ROM)
and an affordance patch.

Pipeline:
    1. both meshes -> world-frame triangles (degenerate ones dropped)
    2. ROM half-space system; affordance vertices inside the ROM are kept
    3. nothing inside and no narrow-phase contact -> empty result
    4. every (affordance triangle, ROM triangle) pair -> intersection points
    5. convex hull of all points in their best-fit plane
    6. hull boundary resampled at a bounded spacing

Step 2 covers a patch lying completely inside the ROM volume, which has no
boundary crossings at all.
"""
from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
from tqdm import tqdm

from .collision_object import CollisionObject, CollisionQuery, CollisionResult, fcl_collision_query
from .config import COPLANAR_POLICY, GEOM_EPS, HULL_EDGE_EPS, HULL_MIN_EDGE_FLOOR, SHOW_PROGRESS
from .halfspace import build_inequalities
from .hull import convex_hull_3d, refine_hull
from .intersection import intersect_triangles
from .static_class import CoplanarPolicy

logger = logging.getLogger(__name__)


def _empty() -> np.ndarray:
    return np.zeros((0, 3), dtype=np.float64)


class ContactExtractor:
    """Contact-region extractor with its numeric policy.

    Args:
        eps: Zero tolerance of the intersector and the half-space filter.
        min_edge_floor: Initial candidate spacing of the refined boundary.
        edge_eps: Hull edges shorter than this do not lower the spacing.
        coplanar: Handling of coplanar triangle pairs.
        collision_query: Narrow-phase callable ``(rom, affordance) -> CollisionResult``.
            Defaults to :func:`fcl_collision_query`.
        progress: Show a tqdm bar over the triangle pairs.
    """

    def __init__(
        self,
        eps: float = GEOM_EPS,
        min_edge_floor: float = HULL_MIN_EDGE_FLOOR,
        edge_eps: float = HULL_EDGE_EPS,
        coplanar: Union[CoplanarPolicy, str] = COPLANAR_POLICY,
        collision_query: Optional[CollisionQuery] = None,
        progress: bool = SHOW_PROGRESS,
    ):
        self.eps = eps
        self.min_edge_floor = min_edge_floor
        self.edge_eps = edge_eps
        self.coplanar = CoplanarPolicy(coplanar)
        self.collision_query = collision_query or fcl_collision_query
        self.progress = progress

    def world_triangles(self, obj: CollisionObject) -> np.ndarray:
        """(M', 3, 3) world-frame triangles of ``obj`` without the zero-area ones."""
        tris = obj.world_triangles()
        if len(tris) == 0:
            return tris.reshape(0, 3, 3)
        area2 = np.linalg.norm(np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0]), axis=1)
        keep = area2 >= self.eps * self.eps
        dropped = int(np.count_nonzero(~keep))
        if dropped:
            logger.debug("%s: dropped %d degenerate triangles.", obj.name, dropped)
        return tris[keep]

    def inside_vertices(self, rom: CollisionObject, affordance: CollisionObject) -> np.ndarray:
        """Affordance world vertices inside the ROM half-space system."""
        system = build_inequalities(rom, eps=self.eps)
        verts = affordance.world_vertices()
        if len(verts) == 0:
            return _empty()
        return verts[system.contains(verts)]

    def collision_result(self, rom: CollisionObject, affordance: CollisionObject) -> CollisionResult:
        """Narrow-phase query result (contact points capped by the query)."""
        return self.collision_query(rom, affordance)

    def _intersect_pair(self, pair: Tuple[np.ndarray, np.ndarray]) -> List[np.ndarray]:
        aff_tri, rom_tri = pair
        return intersect_triangles(aff_tri, rom_tri, coplanar=self.coplanar, eps=self.eps)

    def pairwise_points(self, aff_tris: np.ndarray, rom_tris: np.ndarray) -> np.ndarray:
        """Intersection points of every (affordance, ROM) triangle pair, (K, 3).

        Map: pair -> list of points. Reduce: concatenation. Pairs are
        independent, the order of the result is not significant.
        """
        pairs: Iterable = itertools.product(aff_tris, rom_tris)
        pairs = tqdm(
            pairs,
            total=len(aff_tris) * len(rom_tris),
            desc="Triangle pairs",
            unit="pair",
            leave=False,
            disable=not self.progress,
        )
        points = [p for result in map(self._intersect_pair, pairs) for p in result]
        if not points:
            return _empty()
        return np.vstack(points)

    def extract(self, rom: CollisionObject, affordance: CollisionObject) -> np.ndarray:
        """Refined contact boundary between ``rom`` and ``affordance``.

        Returns:
            (N, 3) world-frame points; empty (0, 3) when the objects do not
            touch. Fewer than 3 points are returned without hull/refinement.
        """
        aff_tris = self.world_triangles(affordance)
        rom_tris = self.world_triangles(rom)

        inside = self.inside_vertices(rom, affordance)
        logger.info("%d affordance vertices inside %s.", len(inside), rom.name)

        if len(inside) == 0 and not self.collision_result(rom, affordance).is_colliding:
            logger.warning("Affordance %s is out of reach of ROM %s: no intersection found.",
                           affordance.name, rom.name)
            return _empty()

        crossings = self.pairwise_points(aff_tris, rom_tris)
        logger.info("%d intersection points from %d x %d triangle pairs.",
                    len(crossings), len(aff_tris), len(rom_tris))

        points = np.vstack([inside, crossings])
        hull = convex_hull_3d(points, self.eps)
        if len(hull) < 3:
            logger.info("Contact region degenerates to %d point(s).", len(hull))
            return hull
        refined = refine_hull(hull, self.min_edge_floor, self.edge_eps)
        logger.info("Contact hull: %d vertices, %d refined points.", len(hull), len(refined))
        return refined

    __call__ = extract


def get_intersection_points(rom: CollisionObject, affordance: CollisionObject, **kwargs) -> np.ndarray:
    """Contact boundary points of ``rom`` and ``affordance``; see :class:`ContactExtractor`."""
    return ContactExtractor(**kwargs).extract(rom, affordance)
