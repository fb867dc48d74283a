__version__ = "1.0.0"
__author__ = "QilongJiang"
__license__ = "MIT"
# -*- coding: utf-8 -*-

from .config import CONFIG_VERSION, DEFAULTS, GEOM_EPS
from .static_class import CoplanarPolicy, ConicKind, PointLocation
from .exceptions import (
    ContactFitError,
    DegenerateGeometryError,
    InsufficientInputError,
    InsufficientPointsError,
    InvalidConicError,
    InvalidParameterCountError,
    NoValidEllipseError,
)
from .plane import PlaneEquation, plane_equation, signed_distances
from .triangle import Triangle
from .intersection import clip_coplanar_triangles, intersect_triangles
from .collision_object import CollisionObject, CollisionResult, fcl_collision_query
from .halfspace import HalfSpaceSystem, build_inequalities, is_inside
from .plane_fit import PlaneFit, fit_plane, project_to_plane
from .hull import convex_hull_3d, hull_min_edge, refine_hull
from .conic import Circle, Ellipse, fit_circle, fit_conic, fit_ellipse, recover_shape
from .contact import ContactExtractor, get_intersection_points

__all__ = [
    "CONFIG_VERSION",
    "DEFAULTS",
    "GEOM_EPS",
    "Circle",
    "CollisionObject",
    "CollisionResult",
    "ConicKind",
    "ContactExtractor",
    "ContactFitError",
    "CoplanarPolicy",
    "DegenerateGeometryError",
    "Ellipse",
    "HalfSpaceSystem",
    "InsufficientInputError",
    "InsufficientPointsError",
    "InvalidConicError",
    "InvalidParameterCountError",
    "NoValidEllipseError",
    "PlaneEquation",
    "PlaneFit",
    "PointLocation",
    "Triangle",
    "build_inequalities",
    "clip_coplanar_triangles",
    "convex_hull_3d",
    "fcl_collision_query",
    "fit_circle",
    "fit_conic",
    "fit_ellipse",
    "fit_plane",
    "get_intersection_points",
    "hull_min_edge",
    "intersect_triangles",
    "is_inside",
    "plane_equation",
    "project_to_plane",
    "recover_shape",
    "refine_hull",
    "signed_distances",
]
