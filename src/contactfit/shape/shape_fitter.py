# -*- coding: utf-8 -*-
"""
Shape Fitter Orchestrator
=========================
Main entry point of the contact pipeline.
Coordinating ContactExtractor -> PlaneFit -> Conic fit -> ContactShape.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import numpy as np

from ..geometry_kernel.collision_object import CollisionObject
from ..geometry_kernel.conic import Circle, Ellipse, fit_conic, recover_shape
from ..geometry_kernel.contact import ContactExtractor
from ..geometry_kernel.config import GEOM_EPS
from ..geometry_kernel.exceptions import InsufficientPointsError, InvalidConicError, NoValidEllipseError
from ..geometry_kernel.plane_fit import PlaneFit, fit_plane
from ..geometry_kernel.static_class import ConicKind
from ..geometry_kernel.transforms import rotate_z_to_vector


@dataclass(frozen=True)
class ContactShape:
    """
    Fitted contact region.

    Attributes:
        points (np.ndarray): (N, 3) refined contact boundary, world frame.
        normal (np.ndarray): Unit normal of the contact plane.
        centroid (np.ndarray): Origin of the plane frame (mean of ``points``).
        rotation (np.ndarray): 3x3 plane-to-world rotation; third column is ``normal``.
        points_2d (np.ndarray): (N, 2) ``points`` in the plane frame.
        params (np.ndarray): Unit-norm conic coefficients (A, B, C, D, E, F) in the plane frame.
        shape (Circle | Ellipse): Recovered shape, plane frame.
        kind (ConicKind): Which fit produced ``params``.
    """
    points: np.ndarray
    normal: np.ndarray
    centroid: np.ndarray
    rotation: np.ndarray
    points_2d: np.ndarray
    params: np.ndarray
    shape: Union[Circle, Ellipse]
    kind: ConicKind

    @property
    def center(self) -> np.ndarray:
        """Shape center in the world frame."""
        return self.to_world(self.shape.center)[0]

    def to_world(self, uv: Any) -> np.ndarray:
        uv = np.atleast_2d(np.asarray(uv, dtype=np.float64))
        uvw = np.column_stack([uv, np.zeros(len(uv))])
        return self.centroid + uvw @ self.rotation.T

    def boundary(self, n: int = 64) -> np.ndarray:
        """``n`` points of the fitted shape in the world frame, (n, 3)."""
        return self.to_world(self.shape.sample(n))


class ContactShapeFitter:
    """
    Shape Fitter Orchestrator.

    Attributes:
        extractor (ContactExtractor): Contact-region backend.
        kind (ConicKind): Preferred conic.
        fallback_to_circle (bool): Retry with a circle when the ellipse fit fails.
    """

    def __init__(
        self,
        extractor: Optional[ContactExtractor] = None,
        kind: Union[ConicKind, str] = ConicKind.ELLIPSE,
        fallback_to_circle: bool = True,
    ):
        self.extractor = extractor or ContactExtractor()
        self.kind = ConicKind.parse(kind)
        self.fallback_to_circle = fallback_to_circle
        self.logger = logging.getLogger("ContactShapeFitter")

    def fit(self, rom: CollisionObject, affordance: CollisionObject) -> Optional[ContactShape]:
        """
        Execute the full pipeline on a ROM / affordance pair.

        Returns:
            ContactShape, or None when the objects are not in contact.
        """
        self.logger.info(f"Extracting contact between {rom.name} and {affordance.name}")
        points = self.extractor.extract(rom, affordance)
        if len(points) == 0:
            self.logger.warning("No contact region, nothing to fit.")
            return None
        return self.fit_points(points)

    def fit_points(self, points: Any) -> ContactShape:
        """
        Fit a plane and a conic to a 3D contact point cloud.

        One or two points (a point or edge contact) give a circle around
        their midpoint with half their distance as radius; see
        :meth:`fit_segment`.

        Raises:
            InsufficientPointsError: No points, or too few for the ellipse fit.
            NoValidEllipseError, InvalidConicError: Ellipse fit failed and
                ``fallback_to_circle`` is False.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(pts) == 0:
            raise InsufficientPointsError("fit_points", 1, 0)
        if len(pts) < 3:
            return self.fit_segment(pts)
        plane = fit_plane(pts)
        uv = plane.to_plane_coordinates(pts)

        kind = self.kind
        try:
            params = fit_conic(uv, kind)
            shape = recover_shape(params)
        except (NoValidEllipseError, InvalidConicError) as e:
            if kind == ConicKind.CIRCLE or not self.fallback_to_circle:
                raise
            self.logger.warning(f"Ellipse fit failed ({e}); falling back to circle.")
            kind = ConicKind.CIRCLE
            params = fit_conic(uv, kind)
            shape = recover_shape(params)

        self.logger.info(f"Fitted {kind.value} to {len(pts)} points: {shape}")
        return ContactShape(
            points=pts,
            normal=plane.normal,
            centroid=plane.centroid,
            rotation=plane.rotation,
            points_2d=uv,
            params=params,
            shape=shape,
            kind=kind,
        )

    def fit_segment(self, points: Any) -> ContactShape:
        """
        Circle of a point or edge contact (1 or 2 points).

        The plane contains the segment; its normal is the first in-plane
        axis of ``rotate_z_to_vector(direction)``. A single point (or two
        coincident ones) gets a zero-radius circle in the XY plane.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        centroid = pts.mean(axis=0)
        direction = pts[-1] - pts[0]
        if np.linalg.norm(direction) < GEOM_EPS:
            normal = np.array([0.0, 0.0, 1.0])
        else:
            normal = rotate_z_to_vector(direction)[:, 0]
        plane = PlaneFit(normal=normal, centroid=centroid, eigenvalues=np.zeros(3))
        uv = plane.to_plane_coordinates(pts)
        shape = Circle(center=np.zeros(2), radius=float(np.max(np.linalg.norm(uv, axis=1))))

        self.logger.warning(f"Degenerate contact of {len(pts)} point(s); fitted circle of radius {shape.radius:.6g}.")
        return ContactShape(
            points=pts,
            normal=plane.normal,
            centroid=plane.centroid,
            rotation=plane.rotation,
            points_2d=uv,
            params=shape.to_params(),
            shape=shape,
            kind=ConicKind.CIRCLE,
        )

    def show(
        self,
        shape: ContactShape,
        rom: Optional[CollisionObject] = None,
        affordance: Optional[CollisionObject] = None,
        visualizer: Optional[Any] = None,
    ):
        """Show meshes, contact points and the fitted boundary."""
        from ..visualizer import IVisualizer
        vis = visualizer or IVisualizer.create()
        if rom is not None:
            vis.add_object(rom, color="lightblue", opacity=0.3)
        if affordance is not None:
            vis.add_object(affordance, color="orange", opacity=0.6)
        vis.add_shape(shape)
        vis.show()
        return vis
