# -*- coding: utf-8 -*-
"""
ContactFit Visualizer Configuration
===================================

Visualizer defaults read from ``contactfit.default_config``.

Attributes:
    DEFAULT_VISUALIZER (VisualizerType): Backend used by ``IVisualizer.create()``.
    MESH_OPACITY (float): Opacity of ROM / affordance meshes.
    POINT_SIZE (float): Size of contact points in pixels.
"""
from ..default_config import DEFAULTS
from .visualizer_type import VisualizerType

DEFAULT_VISUALIZER = VisualizerType[DEFAULTS["DEFAULT_VISUALIZER"]]
MESH_OPACITY = DEFAULTS["MESH_OPACITY"]
POINT_SIZE = DEFAULTS["POINT_SIZE"]
