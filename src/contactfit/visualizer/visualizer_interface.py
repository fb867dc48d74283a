# -*- coding: utf-8 -*-
from abc import ABC, abstractmethod
import numpy as np
from typing import Optional, TYPE_CHECKING, Any

from .visualizer_type import VisualizerType
from .config import DEFAULT_VISUALIZER, MESH_OPACITY, POINT_SIZE

if TYPE_CHECKING:
    from ..geometry_kernel import CollisionObject
    from ..shape import ContactShape


class IVisualizer(ABC):
    """
    Scene of a contact query: meshes in their world pose, contact points and
    fitted shapes.

    The shape fitter and the file readers only talk to this interface; the
    backend is picked with ``IVisualizer.create()``.
    """

    def __init__(self, **kwargs):
        """
        Args:
            **kwargs: Backend options (e.g. ``off_screen``, ``window_size``).
        """
        pass

    @abstractmethod
    def add_object(
        self,
        obj: "CollisionObject",
        color: Optional[Any] = None,
        opacity: float = MESH_OPACITY,
    ):
        """
        Draw a CollisionObject at its world pose.

        Args:
            obj: ROM or affordance object.
            color: Mesh color; ``None`` uses the MeshData color.
            opacity: 0 (invisible) to 1 (opaque).
        """
        pass

    @abstractmethod
    def add_points(
        self,
        points: np.ndarray,
        color: Any = "red",
        point_size: float = POINT_SIZE,
    ):
        """
        Draw (N, 3) world points, e.g. the refined contact boundary.
        """
        pass

    @abstractmethod
    def add_polyline(
        self,
        points: np.ndarray,
        color: Any = "black",
        closed: bool = True,
    ):
        """
        Draw a polyline through (N, 3) points; ``closed`` joins the last point to the first.
        """
        pass

    @abstractmethod
    def add_shape(self, shape: "ContactShape", color: Any = "green", n: int = 128):
        """
        Draw a fitted contact shape: its contact points, the circle/ellipse
        boundary sampled with ``n`` points and the plane normal.
        """
        pass

    @abstractmethod
    def show(self, **kwargs):
        """
        Open the interactive window (blocks until it is closed).
        """
        pass

    @abstractmethod
    def save(self, file_path: Optional[str] = None, **kwargs):
        """
        Write the scene to ``file_path`` (image screenshot or 3D export,
        depending on the suffix) and return the path written.

        Args:
            file_path: Output path; ``None`` lets the backend pick a
                timestamped name.
        """
        pass

    @staticmethod
    def create(visualizer_type: Optional[VisualizerType] = DEFAULT_VISUALIZER, **kwargs) -> "IVisualizer":
        """
        Instantiate the backend registered for ``visualizer_type``.

        Args:
            visualizer_type: Backend; ``None`` means ``DEFAULT_VISUALIZER``.
            **kwargs: Forwarded to the backend constructor.

        Raises:
            ValueError: Unknown backend.
            ImportError: The backend library is not installed.
        """
        kind = DEFAULT_VISUALIZER if visualizer_type is None else visualizer_type
        if kind == VisualizerType.PyVista:
            from .pyvista_visualizer import PyVistaVisualizer
            return PyVistaVisualizer(**kwargs)
        raise ValueError(f"No visualizer backend for {kind!r}; available: {[t.name for t in VisualizerType]}")
