"""
Geometry transforms.

Rigid-pose helpers: object poses are ``(R, t)`` pairs with ``x_w = R @ x + t``.

Functions:
    rotate_z_to_vector: Plane frame whose third axis is a given direction.
    as_pose: Validate and normalize a (rotation, translation) pair.
    apply_pose: Map local points into the world frame.
    pose_to_matrix: Pack a pose into a 4x4 homogeneous transform.
    matrix_to_pose: Split a 4x4 homogeneous transform into a pose.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple
import numpy as np


def rotate_z_to_vector(v: Iterable[float]) -> np.ndarray:
    """Minimal rotation taking +Z onto the direction of ``v``.

    With ``u = v / |v| = (x, y, z)`` this is Rodrigues' formula about the
    axis ``Z × u`` written out in closed form:

        R = [[1 − x²/(1+z),  −xy/(1+z),    x],
             [−xy/(1+z),     1 − y²/(1+z), y],
             [−x,            −y,           z]]

    ``R[:, 2] == u`` and ``R[:, 0]``, ``R[:, 1]`` span the plane orthogonal
    to ``u``; plane frames (coplanar clipping, plane fit) use them as their
    in-plane axes. ``u = −Z`` has no unique minimal rotation and maps to the
    half turn about X, ``diag(1, −1, −1)``.

    Raises:
        ValueError: ``v`` is zero or not finite.

    Example:
        >>> R = rotate_z_to_vector([0.0, 3.0, 0.0])
        >>> np.allclose(R @ [0.0, 0.0, 1.0], [0.0, 1.0, 0.0])
        True
    """
    v = np.asarray(v, dtype=np.float64).reshape(3)
    norm = float(np.linalg.norm(v))
    if not np.isfinite(norm) or norm == 0.0:
        raise ValueError(f"Cannot align +Z with {v.tolist()}: vector must be non-zero and finite")
    x, y, z = v / norm

    if np.isclose(z, -1.0):
        return np.diag([1.0, -1.0, -1.0])

    h = 1.0 / (1.0 + z)
    return np.array([[1.0 - x * x * h, -x * y * h, x],
                     [-x * y * h, 1.0 - y * y * h, y],
                     [-x, -y, z]], dtype=np.float64)


def as_pose(
    rotation: Optional[Iterable] = None,
    translation: Optional[Iterable[float]] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(R, t)`` as float64 arrays of shape (3, 3) and (3,).

    ``None`` stands for the identity rotation / zero translation.

    Raises:
        ValueError: If the shapes are wrong or R is not a rotation.
    """
    if rotation is None:
        R = np.eye(3, dtype=np.float64)
    else:
        R = np.asarray(rotation, dtype=np.float64)
        if R.shape != (3, 3):
            raise ValueError(f"rotation shape {R.shape} != (3, 3)")
        if not np.allclose(R @ R.T, np.eye(3), atol=1e-6):
            raise ValueError("rotation must be orthonormal")
    if translation is None:
        t = np.zeros(3, dtype=np.float64)
    else:
        t = np.asarray(translation, dtype=np.float64).reshape(-1)
        if t.shape != (3,):
            raise ValueError(f"translation shape {t.shape} != (3,)")
    return R, t


def apply_pose(points: np.ndarray, rotation: np.ndarray, translation: np.ndarray) -> np.ndarray:
    """Map points from a local frame to the world frame: ``x_w = R @ x + t``.

    Works on any array whose last axis has length 3, e.g. (N, 3) vertices or
    (M, 3, 3) triangle stacks.
    """
    pts = np.asarray(points, dtype=np.float64)
    return pts @ np.asarray(rotation, dtype=np.float64).T + np.asarray(translation, dtype=np.float64)


def pose_to_matrix(rotation: np.ndarray, translation: np.ndarray) -> np.ndarray:
    """Pack (R, t) into a 4x4 homogeneous transform."""
    T = np.eye(4, dtype=np.float64)
    T[:3, :3] = rotation
    T[:3, 3] = translation
    return T


def matrix_to_pose(matrix: Iterable) -> Tuple[np.ndarray, np.ndarray]:
    """Split a 4x4 homogeneous transform into (R, t)."""
    T = np.asarray(matrix, dtype=np.float64)
    if T.shape != (4, 4):
        raise ValueError(f"transform shape {T.shape} != (4, 4)")
    return as_pose(T[:3, :3], T[:3, 3])
