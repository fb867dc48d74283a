"""
Tests for the principal-axis plane fitter.
"""

from __future__ import annotations

import numpy as np
import pytest

from contactfit.geometry_kernel import InsufficientPointsError, fit_plane, project_to_plane


def _plane_points(normal, centroid, n=40, seed=0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    normal = np.asarray(normal, dtype=float) / np.linalg.norm(normal)
    helper = np.array([1.0, 0.0, 0.0]) if abs(normal[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
    u = np.cross(normal, helper)
    u /= np.linalg.norm(u)
    v = np.cross(normal, u)
    st = rng.uniform(-2.0, 2.0, size=(n, 2))
    return np.asarray(centroid, dtype=float) + st[:, :1] * u + st[:, 1:] * v


@pytest.mark.parametrize(
    "normal, centroid",
    [
        ([0.0, 0.0, 1.0], [0.0, 0.0, 0.5]),
        ([1.0, 2.0, 2.0], [1.0, -1.0, 3.0]),
        ([-0.3, 0.1, 0.9], [10.0, 5.0, -2.0]),
    ],
)
def test_normal_is_parallel_to_known_normal(normal, centroid) -> None:
    points = _plane_points(normal, centroid)
    fit = fit_plane(points)
    unit = np.asarray(normal) / np.linalg.norm(normal)
    assert abs(float(fit.normal @ unit)) == pytest.approx(1.0, abs=1e-9)
    np.testing.assert_allclose(fit.residuals(points), 0.0, atol=1e-9)


def test_normal_sign_is_deterministic() -> None:
    points = _plane_points([0.0, 0.0, -1.0], [0.0, 0.0, 0.0])
    fit = fit_plane(points)
    np.testing.assert_allclose(fit.normal, [0.0, 0.0, 1.0], atol=1e-9)


def test_projection_has_zero_residual() -> None:
    rng = np.random.default_rng(3)
    points = _plane_points([1.0, 1.0, 0.0], [0.0, 0.0, 0.0]) + rng.normal(scale=0.01, size=(40, 3))
    fit = fit_plane(points)
    projected = project_to_plane(points, fit.normal, fit.centroid)
    np.testing.assert_allclose(fit.residuals(projected), 0.0, atol=1e-12)
    np.testing.assert_allclose(fit.project(points), projected)


def test_plane_coordinates_round_trip() -> None:
    points = _plane_points([0.2, -0.5, 1.0], [1.0, 2.0, 3.0], n=10)
    fit = fit_plane(points)
    uv = fit.to_plane_coordinates(points)
    assert uv.shape == (10, 2)
    np.testing.assert_allclose(fit.from_plane_coordinates(uv), points, atol=1e-9)
    np.testing.assert_allclose(fit.rotation[:, 2], fit.normal, atol=1e-12)


@pytest.mark.parametrize("n", [0, 1, 2])
def test_fewer_than_three_points_raise(n) -> None:
    with pytest.raises(InsufficientPointsError):
        fit_plane(np.zeros((n, 3)) + np.arange(n)[:, None])
