# -*- coding: utf-8 -*-
try:
    import pyvista as pv
except ImportError:
    pv = None

import logging
import os
from datetime import datetime
from typing import Any, Optional, TYPE_CHECKING

import numpy as np

from .visualizer_interface import IVisualizer
from .config import MESH_OPACITY, POINT_SIZE

if TYPE_CHECKING:
    from ..geometry_kernel import CollisionObject
    from ..shape import ContactShape

logger = logging.getLogger(__name__)


class PyVistaVisualizer(IVisualizer):
    """
    PyVista backend: one ``pv.Plotter`` per scene.
    """

    def __init__(self, **kwargs):
        if pv is None:
            raise ImportError("PyVistaVisualizer needs pyvista; install it with `pip install pyvista`.")
        try:
            self.plotter = pv.Plotter(**kwargs)
        except TypeError as e:
            logger.warning(f"PyVistaVisualizer init failed with kwargs: {e}. Fallback to default.")
            self.plotter = pv.Plotter()

    def add_object(self, obj: "CollisionObject", color: Optional[Any] = None, opacity: float = MESH_OPACITY):
        """
        Add a collision object in its world pose.
        """
        if color is None:
            color = obj.mesh.color_tuple
        self.plotter = visualize_vertices_and_triangles(
            obj.world_vertices(), obj.triangles, plotter=self.plotter, color=color, opacity=opacity
        )

    def add_points(self, points: np.ndarray, color: Any = "red", point_size: float = POINT_SIZE):
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(pts) == 0:
            logger.warning("add_points: empty point cloud, nothing to draw.")
            return
        self.plotter.add_points(pts, color=color, point_size=point_size, render_points_as_spheres=True)

    def add_polyline(self, points: np.ndarray, color: Any = "black", closed: bool = True):
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(pts) < 2:
            logger.warning("add_polyline: fewer than 2 points, nothing to draw.")
            return
        self.plotter.add_mesh(pv.lines_from_points(pts, close=closed), color=color, line_width=3)

    def add_shape(self, shape: "ContactShape", color: Any = "green", n: int = 128):
        """
        Add the fitted boundary (polyline), the contact points and the plane normal.
        """
        self.add_points(shape.points)
        self.add_polyline(shape.boundary(n), color=color, closed=True)
        self.plotter.add_arrows(shape.centroid.reshape(1, 3), shape.normal.reshape(1, 3), mag=0.1, color=color)

    def show(self, **kwargs):
        """
        Add axes and open the plotter window.
        """
        self.plotter.add_axes()
        self.plotter.show(**kwargs)

    def save(self, file_path: Optional[str] = None, name: Optional[str] = None, **kwargs):
        """
        Write the scene to disk.

        Supports:
        - .png, .jpg, .jpeg, .bmp, .tiff: off-screen screenshot
        - Interactive 3D: .gltf, .glb

        Args:
            file_path: Output path; None writes "screenshots/snapshot_<timestamp>[_<name>].<format>".
            name: Optional tag to include in the auto-generated filename (e.g. 'rom_vs_aff').
            **kwargs:
                - format (str): Suffix of the generated name when file_path is None (default "png").
                - off_screen (bool): Render screenshots without a window (default True).
        """
        fmt = kwargs.pop('format', None)

        if file_path is None:
            output_dir = "screenshots"
            os.makedirs(output_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            ext = f".{fmt}" if fmt else ".png"
            if name:
                safe_name = "".join([c for c in name if c.isalnum() or c in ('-', '_')]).strip()
                filename = f"snapshot_{timestamp}_{safe_name}{ext}"
            else:
                filename = f"snapshot_{timestamp}{ext}"
            file_path = os.path.join(output_dir, filename)

        _, ext = os.path.splitext(file_path)
        ext = ext.lower()

        if ext in ['.gltf', '.glb']:
            self.plotter.export_gltf(file_path, **kwargs)
        else:
            self.plotter.off_screen = kwargs.pop('off_screen', True)
            self.plotter.show(screenshot=file_path, **kwargs)
        logger.info(f"Saved visualization to: {file_path}")
        return file_path


def visualize_vertices_and_triangles(
    vertices: np.ndarray, triangles: np.ndarray,
    plotter: "pv.Plotter",
    color="#66b3ff",
    show_edges=True,
    edge_color="black",
    opacity=0.8,
    smooth_shading=False,
):
    """
    Add a triangle mesh to ``plotter`` and return the plotter.
    """
    # PyVista faces: [3, v1, v2, v3, 3, v4, v5, v6, ...]
    faces = np.hstack([np.full((triangles.shape[0], 1), 3), triangles]).flatten()
    mesh = pv.PolyData(np.asarray(vertices, dtype=np.float32), faces)

    plotter.add_mesh(
        mesh,
        color=color,
        show_edges=show_edges,
        edge_color=edge_color,
        opacity=opacity,
        smooth_shading=smooth_shading,
    )
    return plotter
