# -*- coding: utf-8 -*-
"""
Plane fitter
============

Best-fit plane of a near-coplanar 3D point set by principal-axis
decomposition:

    c = mean(x_i),   X = [x_i − c],   X^T X = V Λ V^T

The normal is the eigenvector of the smallest eigenvalue (least variance
direction). The other two eigen-directions span the plane; a right-handed
in-plane frame is taken from ``rotate_z_to_vector(normal)`` so that 2D
coordinates are reproducible for a given normal.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .exceptions import InsufficientPointsError
from .transforms import rotate_z_to_vector


@dataclass(frozen=True)
class PlaneFit:
    """Unit ``normal`` and ``centroid`` of a fitted plane."""
    normal: np.ndarray
    centroid: np.ndarray
    eigenvalues: np.ndarray

    @property
    def rotation(self) -> np.ndarray:
        """3x3 plane-to-world rotation; its third column is ``normal``."""
        return rotate_z_to_vector(self.normal)

    def project(self, points: Any) -> np.ndarray:
        return project_to_plane(points, self.normal, self.centroid)

    def residuals(self, points: Any) -> np.ndarray:
        """Signed distances of ``points`` to the plane."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        return (pts - self.centroid) @ self.normal

    def to_plane_coordinates(self, points: Any) -> np.ndarray:
        """(N, 2) in-plane coordinates relative to the centroid."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        return ((pts - self.centroid) @ self.rotation)[:, :2]

    def from_plane_coordinates(self, uv: Any) -> np.ndarray:
        """Lift (N, 2) in-plane coordinates back to (N, 3) world points."""
        uv = np.atleast_2d(np.asarray(uv, dtype=np.float64))
        uvw = np.column_stack([uv, np.zeros(len(uv))])
        return self.centroid + uvw @ self.rotation.T


def fit_plane(points: Any) -> PlaneFit:
    """Fit a plane to ``points`` (N, 3).

    Raises:
        InsufficientPointsError: If fewer than 3 points are given.

    Example:
        >>> pts = [[0, 0, 1], [1, 0, 1], [0, 1, 1], [1, 1, 1]]
        >>> fit = fit_plane(pts)
        >>> [round(float(v), 6) for v in fit.normal]
        [0.0, 0.0, 1.0]
    """
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"points shape {pts.shape} is not (N, 3)")
    if len(pts) < 3:
        raise InsufficientPointsError("fit_plane", 3, len(pts))

    centroid = pts.mean(axis=0)
    X = pts - centroid
    # eigh returns ascending eigenvalues
    eigenvalues, eigenvectors = np.linalg.eigh(X.T @ X)
    normal = eigenvectors[:, 0]

    # sign: largest-magnitude component positive
    if normal[int(np.argmax(np.abs(normal)))] < 0:
        normal = -normal
    return PlaneFit(normal=normal / np.linalg.norm(normal), centroid=centroid, eigenvalues=eigenvalues)


def project_to_plane(points: Any, normal: Any, centroid: Any) -> np.ndarray:
    """Orthogonal projection ``x − ((x − c)·n) n`` of ``points`` onto the plane (n, c)."""
    pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
    n = np.asarray(normal, dtype=np.float64)
    n = n / np.linalg.norm(n)
    c = np.asarray(centroid, dtype=np.float64)
    return pts - np.outer((pts - c) @ n, n)
