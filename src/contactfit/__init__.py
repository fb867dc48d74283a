# -*- coding: utf-8 -*-
"""
ContactFit
==========

Contact region between a range-of-motion (ROM) solid and an affordance
patch, and a circle/ellipse fitted to it.

Usage Example:
    from contactfit import ContactShapeFitter, parse_file

    rom = parse_file("rom.stl").collision_object(0)
    affordance = parse_file("wall.amf").collision_object(0, translation=[0, 0, 0.4])
    shape = ContactShapeFitter().fit(rom, affordance)
"""

__version__ = "1.0.0"
__author__ = "QilongJiang"
__license__ = "MIT"

from .default_config import CONFIG_VERSION, DEFAULTS
from .file_parser import MeshData, Model, parse_file
from .geometry_kernel import (
    Circle,
    CollisionObject,
    CollisionResult,
    ConicKind,
    ContactExtractor,
    CoplanarPolicy,
    Ellipse,
    build_inequalities,
    convex_hull_3d,
    fit_conic,
    fit_plane,
    get_intersection_points,
    intersect_triangles,
    is_inside,
    project_to_plane,
    recover_shape,
    refine_hull,
)
from .shape import ContactShape, ContactShapeFitter

__all__ = [
    "CONFIG_VERSION",
    "DEFAULTS",
    "Circle",
    "CollisionObject",
    "CollisionResult",
    "ConicKind",
    "ContactExtractor",
    "ContactShape",
    "ContactShapeFitter",
    "CoplanarPolicy",
    "Ellipse",
    "MeshData",
    "Model",
    "build_inequalities",
    "convex_hull_3d",
    "fit_conic",
    "fit_plane",
    "get_intersection_points",
    "intersect_triangles",
    "is_inside",
    "parse_file",
    "project_to_plane",
    "recover_shape",
    "refine_hull",
]
