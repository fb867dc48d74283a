# -*- coding: utf-8 -*-
"""
Conic fitter
============

Fits a conic ``A x² + B xy + C y² + D x + E y + F = 0`` to a 2D point set
and recovers its geometric parameters.

- ``fit_ellipse``: direct least-squares ellipse fit ("Direct Least Squares
  Fitting of Ellipses", Fitzgibbon, Pilu & Fisher, IEEE PAMI 21, 1999) in the
  numerically stable form of N. Chernov's DirectEllipseFit. It only returns
  ellipses, even when a hyperbola would fit better, and is slightly biased
  toward smaller ellipses.
- ``fit_circle``: centroid + mean radius.
- ``recover_shape``: coefficient vector -> ``Circle`` or ``Ellipse``.

Coefficient vectors are normalized to unit norm (sign is arbitrary).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from .config import CONIC_EPS, MIN_ELLIPSE_POINTS
from .exceptions import (
    InsufficientPointsError,
    InvalidConicError,
    InvalidParameterCountError,
    NoValidEllipseError,
)
from .static_class import ConicKind

logger = logging.getLogger(__name__)

ConicParams = np.ndarray


@dataclass(frozen=True)
class Circle:
    center: np.ndarray
    radius: float

    kind = ConicKind.CIRCLE

    def sample(self, n: int = 64) -> np.ndarray:
        """``n`` points on the circle, (n, 2)."""
        t = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
        return self.center + self.radius * np.column_stack([np.cos(t), np.sin(t)])

    def to_params(self) -> ConicParams:
        cx, cy = self.center
        params = np.array([1.0, 0.0, 1.0, -2.0 * cx, -2.0 * cy, cx * cx + cy * cy - self.radius ** 2])
        return params / np.linalg.norm(params)


@dataclass(frozen=True)
class Ellipse:
    """Ellipse with ``radius1 >= radius2``; ``tau`` is the angle of the longer axis with X."""
    center: np.ndarray
    radius1: float
    radius2: float
    tau: float

    kind = ConicKind.ELLIPSE

    def sample(self, n: int = 64) -> np.ndarray:
        """``n`` points on the ellipse, (n, 2)."""
        t = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
        local = np.column_stack([self.radius1 * np.cos(t), self.radius2 * np.sin(t)])
        c, s = math.cos(self.tau), math.sin(self.tau)
        R = np.array([[c, -s], [s, c]])
        return self.center + local @ R.T

    def to_params(self) -> ConicParams:
        cx, cy = self.center
        c, s = math.cos(self.tau), math.sin(self.tau)
        ia, ib = 1.0 / self.radius1 ** 2, 1.0 / self.radius2 ** 2
        A = c * c * ia + s * s * ib
        B = 2.0 * s * c * (ia - ib)
        C = s * s * ia + c * c * ib
        D = -2.0 * A * cx - B * cy
        E = -B * cx - 2.0 * C * cy
        F = A * cx * cx + B * cx * cy + C * cy * cy - 1.0
        params = np.array([A, B, C, D, E, F])
        return params / np.linalg.norm(params)


Conic = Union[Circle, Ellipse]


def _as_points_2d(points: Any) -> np.ndarray:
    # 3D input: x and y are used, points are assumed to lie in a plane z = const
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    pts = np.atleast_2d(pts)
    if pts.shape[1] < 2:
        raise ValueError(f"points shape {pts.shape} has fewer than 2 coordinates")
    return pts[:, :2]


def fit_ellipse(points: Any) -> ConicParams:
    """Direct least-squares ellipse fit.

    With centered coordinates the design matrix is split into quadratic
    terms ``D1 = [x², xy, y²]`` and linear terms ``D2 = [x, y, 1]``. The
    linear part is eliminated (``T = −S3⁻¹ S2ᵀ``) and the remaining 3x3
    problem is premultiplied by the inverse of the constraint matrix
    ``4AC − B² = 1``. The eigenvector satisfying ``4AC − B² > 0`` gives the
    quadratic coefficients; the fit is then moved back to the original frame.

    Args:
        points: (N, 2) points, N >= 6.

    Returns:
        Unit-norm coefficient vector (A, B, C, D, E, F).

    Raises:
        InsufficientPointsError: Fewer than 6 points.
        NoValidEllipseError: No eigenvector is elliptic, or the linear scatter
            matrix is singular (e.g. collinear points).
    """
    xy = _as_points_2d(points)
    if len(xy) < MIN_ELLIPSE_POINTS:
        raise InsufficientPointsError("fit_ellipse", MIN_ELLIPSE_POINTS, len(xy))

    cx, cy = xy.mean(axis=0)
    x = xy[:, 0] - cx
    y = xy[:, 1] - cy

    D1 = np.column_stack([x * x, x * y, y * y])
    D2 = np.column_stack([x, y, np.ones_like(x)])
    S1 = D1.T @ D1
    S2 = D1.T @ D2
    S3 = D2.T @ D2

    if np.linalg.matrix_rank(S3) < 3:
        raise NoValidEllipseError("fit_ellipse: points are collinear; try the circle fit instead.")
    try:
        T = -np.linalg.solve(S3, S2.T)
    except np.linalg.LinAlgError as exc:
        raise NoValidEllipseError("fit_ellipse: singular scatter matrix; try the circle fit instead.") from exc

    M_orig = S1 + S2 @ T
    M = np.vstack([M_orig[2] / 2.0, -M_orig[1], M_orig[0] / 2.0])

    _, evec = np.linalg.eig(M)
    evec = np.real(evec)
    cond = 4.0 * evec[0] * evec[2] - evec[1] ** 2
    valid = np.flatnonzero(cond > 0.0)
    if len(valid) == 0:
        raise NoValidEllipseError("fit_ellipse: could not create ellipse approximation; try the circle fit instead.")

    a0 = evec[:, valid[0]]
    A = np.concatenate([a0, T @ a0])

    # back to the original (non-centered) frame
    A3 = A[3] - 2.0 * A[0] * cx - A[1] * cy
    A4 = A[4] - 2.0 * A[2] * cy - A[1] * cx
    A5 = A[5] + A[0] * cx * cx + A[2] * cy * cy + A[1] * cx * cy - A[3] * cx - A[4] * cy
    A[3], A[4], A[5] = A3, A4, A5
    return A / np.linalg.norm(A)


def fit_circle(points: Any) -> ConicParams:
    """Circle through the centroid with the mean centroid distance as radius.

    Needs at least one point. Degenerate input (collinear or coincident
    points) gives a radius close to 0 that the caller has to validate.
    """
    xy = _as_points_2d(points)
    if len(xy) < 1:
        raise InsufficientPointsError("fit_circle", 1, 0)
    cx, cy = xy.mean(axis=0)
    radius = float(np.mean(np.hypot(xy[:, 0] - cx, xy[:, 1] - cy)))
    logger.debug("Circle fit: center=(%.6g, %.6g) radius=%.6g", cx, cy, radius)
    return Circle(center=np.array([cx, cy]), radius=radius).to_params()


def fit_conic(points: Any, kind: Union[ConicKind, str] = ConicKind.ELLIPSE) -> ConicParams:
    """Fit an ellipse or a circle to a 2D point set.

    Raises:
        InsufficientPointsError: Empty point set, or too few points for the
            ellipse fit.
        NoValidEllipseError: See :func:`fit_ellipse`.
    """
    kind = ConicKind.parse(kind)
    xy = _as_points_2d(points)
    if len(xy) == 0:
        raise InsufficientPointsError(f"fit_conic[{kind.value}]", 1, 0)
    if kind == ConicKind.CIRCLE:
        return fit_circle(xy)
    return fit_ellipse(xy)


def recover_shape(params: Any, eps: float = CONIC_EPS) -> Conic:
    """Geometric parameters of a conic coefficient vector.

    ``B == 0`` (within ``eps``) with ``A == C`` is a circle. Otherwise the
    ellipse is recovered from

        M0 = [[F, D/2, E/2], [D/2, A, B/2], [E/2, B/2, C]],   M = [[A, B/2], [B/2, C]]

    with radii ``sqrt(−det M0 / (det M · λ_i))`` for the eigenvalues ``λ_i``
    of ``M``. ``λ_1`` is the eigenvalue closer to ``A``, i.e. the one along
    ``τ = atan(B / (A − C)) / 2``. When the first radius is the shorter one
    ``τ`` is turned by ``−π/2`` so that it always gives the longer axis.

    Raises:
        InvalidParameterCountError: ``params`` does not have 6 entries.
        InvalidConicError: Coefficients are not a real circle or ellipse.
    """
    p = np.asarray(params, dtype=np.float64).reshape(-1)
    if p.size != 6:
        raise InvalidParameterCountError(p.size)
    if not np.all(np.isfinite(p)):
        raise InvalidConicError(f"Conic coefficients are not finite: {p}")
    A, B, C, D, E, F = p

    if abs(B) < eps and abs(A - C) < eps:
        return _recover_circle(p)
    return _recover_ellipse(A, B, C, D, E, F)


def _recover_circle(p: np.ndarray) -> Circle:
    if abs(p[0]) < CONIC_EPS:
        raise InvalidConicError("Circle coefficients have A == 0.")
    A, _, _, D, E, F = p / p[0]
    center = np.array([-D / 2.0, -E / 2.0])
    radicand = float(center @ center - F)
    if radicand < 0.0:
        raise InvalidConicError(f"Imaginary circle: r^2 = {radicand:.6g}")
    return Circle(center=center, radius=math.sqrt(radicand))


def _recover_ellipse(A, B, C, D, E, F) -> Ellipse:
    disc = 4.0 * A * C - B * B
    if disc <= 0.0:
        raise InvalidConicError(f"Conic is not an ellipse: 4AC - B^2 = {disc:.6g}")

    M0 = np.array([[F, D / 2.0, E / 2.0],
                   [D / 2.0, A, B / 2.0],
                   [E / 2.0, B / 2.0, C]])
    M = np.array([[A, B / 2.0],
                  [B / 2.0, C]])

    if A == C:
        tau = math.copysign(math.pi / 4.0, B)
    else:
        tau = math.atan(B / (A - C)) / 2.0

    # eigenvalue of M along tau; the other one follows from the trace
    c, s = math.cos(tau), math.sin(tau)
    lam1 = A * c * c + B * s * c + C * s * s
    lam2 = A + C - lam1

    det0 = np.linalg.det(M0)
    det = np.linalg.det(M)
    q1 = -det0 / (det * lam1)
    q2 = -det0 / (det * lam2)
    if not (q1 > 0.0 and q2 > 0.0):
        raise InvalidConicError(f"Imaginary or degenerate ellipse: r^2 = ({q1:.6g}, {q2:.6g})")
    r1, r2 = math.sqrt(q1), math.sqrt(q2)

    center = np.array([(B * E - 2.0 * C * D) / disc, (B * D - 2.0 * A * E) / disc])

    if r1 < r2:
        tau -= math.pi / 2.0
        r1, r2 = r2, r1
    return Ellipse(center=center, radius1=r1, radius2=r2, tau=tau)
