"""
Tests for the shape fitter: plane + conic fit of contact point clouds and
the full pipeline on the cube fixture.
"""

from __future__ import annotations

import numpy as np
import pytest

from contactfit.geometry_kernel import (
    Circle,
    ConicKind,
    ContactExtractor,
    Ellipse,
    InsufficientPointsError,
    NoValidEllipseError,
)
from contactfit.geometry_kernel.transforms import rotate_z_to_vector
from contactfit.shape import ContactShape, ContactShapeFitter


def _radii(shape) -> tuple:
    if isinstance(shape, Circle):
        return shape.radius, shape.radius
    return shape.radius1, shape.radius2


def _tilted(points_2d: np.ndarray, normal, origin) -> np.ndarray:
    R = rotate_z_to_vector(normal)
    local = np.column_stack([points_2d, np.zeros(len(points_2d))])
    return local @ R.T + np.asarray(origin)


def test_tilted_circle() -> None:
    points = _tilted(Circle(center=np.zeros(2), radius=0.8).sample(32), [1.0, 1.0, 1.0], [2.0, -1.0, 0.5])
    result = ContactShapeFitter().fit_points(points)

    assert isinstance(result, ContactShape)
    assert result.kind is ConicKind.ELLIPSE
    unit = np.ones(3) / np.sqrt(3.0)
    assert abs(float(result.normal @ unit)) == pytest.approx(1.0)
    np.testing.assert_allclose(result.center, [2.0, -1.0, 0.5], atol=1e-6)
    r1, r2 = _radii(result.shape)
    assert r1 == pytest.approx(0.8, rel=1e-6)
    assert r2 == pytest.approx(0.8, rel=1e-6)


def test_tilted_ellipse_boundary_lies_on_points() -> None:
    ellipse = Ellipse(center=np.array([0.2, -0.1]), radius1=1.0, radius2=0.4, tau=0.3)
    points = _tilted(ellipse.sample(48), [0.0, -1.0, 2.0], [0.0, 0.0, 1.0])
    result = ContactShapeFitter(kind="ellipse").fit_points(points)

    assert isinstance(result.shape, Ellipse)
    assert result.shape.radius1 == pytest.approx(1.0, rel=1e-6)
    assert result.shape.radius2 == pytest.approx(0.4, rel=1e-6)
    assert result.points_2d.shape == (48, 2)
    np.testing.assert_allclose(result.to_world(result.points_2d), points, atol=1e-9)
    boundary = result.boundary(16)
    assert boundary.shape == (16, 3)
    # boundary stays in the contact plane
    np.testing.assert_allclose((boundary - result.centroid) @ result.normal, 0.0, atol=1e-9)


def test_circle_kind_uses_circle_fit() -> None:
    ellipse = Ellipse(center=np.zeros(2), radius1=1.0, radius2=0.5, tau=0.0)
    points = _tilted(ellipse.sample(20), [0.0, 0.0, 1.0], [0.0, 0.0, 0.0])
    result = ContactShapeFitter(kind=ConicKind.CIRCLE).fit_points(points)
    assert result.kind is ConicKind.CIRCLE
    assert isinstance(result.shape, Circle)
    assert 0.5 < result.shape.radius < 1.0


def test_collinear_points_fall_back_to_circle() -> None:
    t = np.linspace(-1.0, 1.0, 8)[:, None]
    points = t * np.array([1.0, 2.0, 0.5]) + np.array([0.0, 1.0, 0.0])
    result = ContactShapeFitter().fit_points(points)
    assert result.kind is ConicKind.CIRCLE
    assert isinstance(result.shape, Circle)
    np.testing.assert_allclose(result.center, [0.0, 1.0, 0.0], atol=1e-9)


def test_fallback_can_be_disabled() -> None:
    t = np.linspace(-1.0, 1.0, 8)[:, None]
    points = t * np.array([1.0, 2.0, 0.5])
    with pytest.raises(NoValidEllipseError):
        ContactShapeFitter(fallback_to_circle=False).fit_points(points)


def test_no_contact_gives_none(cube, make_patch, no_contact_query) -> None:
    fitter = ContactShapeFitter(ContactExtractor(collision_query=no_contact_query))
    assert fitter.fit(cube, make_patch(translation=[3.0, 0.0, 0.0])) is None


def test_cube_and_patch_pipeline(cube, make_patch, no_contact_query) -> None:
    fitter = ContactShapeFitter(ContactExtractor(collision_query=no_contact_query))
    result = fitter.fit(cube, make_patch(half=0.3, z=0.0))

    assert result is not None
    np.testing.assert_allclose(np.abs(result.normal), [0.0, 0.0, 1.0], atol=1e-9)
    np.testing.assert_allclose(result.center, [0.0, 0.0, 0.0], atol=1e-6)
    r1, r2 = _radii(result.shape)
    # symmetric square outline: a circle between the inscribed and the circumscribed one
    assert r1 == pytest.approx(r2, rel=1e-6)
    assert 0.3 <= r1 <= 0.3 * np.sqrt(2.0)


def test_edge_contact_gives_circle_around_the_edge(cube, make_patch, contact_query) -> None:
    # cube turned 45 degrees about Y: its top edge runs along Y at x=0, z=sqrt(1/2)
    c = s = np.sqrt(0.5)
    cube.rotation = np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])
    patch = make_patch(half=1.0, z=np.sqrt(0.5))
    fitter = ContactShapeFitter(ContactExtractor(collision_query=contact_query))

    result = fitter.fit(cube, patch)

    assert result is not None
    assert result.kind is ConicKind.CIRCLE
    assert isinstance(result.shape, Circle)
    np.testing.assert_allclose(result.center, [0.0, 0.0, np.sqrt(0.5)], atol=1e-9)
    assert result.shape.radius == pytest.approx(0.5)
    assert abs(float(result.normal[1])) == pytest.approx(0.0, abs=1e-9)


def test_two_points_give_circle_on_their_segment() -> None:
    points = np.array([[1.0, 0.0, 2.0], [1.0, 3.0, 6.0]])
    result = ContactShapeFitter().fit_points(points)

    assert result.kind is ConicKind.CIRCLE
    np.testing.assert_allclose(result.center, [1.0, 1.5, 4.0], atol=1e-12)
    assert result.shape.radius == pytest.approx(2.5)
    assert float(result.normal @ (points[1] - points[0])) == pytest.approx(0.0, abs=1e-12)
    # both end points lie on the fitted circle
    np.testing.assert_allclose(np.linalg.norm(result.points_2d, axis=1), 2.5)


def test_single_point_gives_zero_radius_circle() -> None:
    result = ContactShapeFitter().fit_points([[0.5, -0.5, 0.25]])
    assert result.shape.radius == 0.0
    np.testing.assert_allclose(result.center, [0.5, -0.5, 0.25])
    np.testing.assert_allclose(result.normal, [0.0, 0.0, 1.0])


def test_empty_point_set_raises() -> None:
    with pytest.raises(InsufficientPointsError):
        ContactShapeFitter().fit_points(np.zeros((0, 3)))
