# -*- coding: utf-8 -*-
from dataclasses import dataclass, field
import numpy as np
from typing import Tuple, Optional, ClassVar


@dataclass
class MeshData:
    """
    Data class representing a triangulated 3D mesh.

    Attributes:
        vertices: (N, 3) float64 numpy array of vertex coordinates (local frame).
        triangles: (M, 3) int64 numpy array of triangle indices.
        color: (3,) float numpy array representing RGB color in [0, 1].
        name: Optional label (object name in the source file).
        id: Unique identifier for the mesh instance (auto-generated).
    """
    count: ClassVar[int] = 0

    vertices: np.ndarray
    triangles: np.ndarray
    color: np.ndarray = field(default_factory=lambda: np.array([0.5, 0.5, 0.5], dtype=float))
    name: Optional[str] = None
    id: int = field(init=False)

    def __post_init__(self):
        # float64 so that signed distances near GEOM_EPS are meaningful
        self.vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)
        self.triangles = np.asarray(self.triangles, dtype=np.int64).reshape(-1, 3)
        self.color = np.asarray(self.color, dtype=float)
        if len(self.triangles) and (self.triangles.min() < 0 or self.triangles.max() >= len(self.vertices)):
            raise ValueError(
                f"Triangle indices out of range [0, {len(self.vertices)}) in mesh {self.name!r}"
            )

        self.id = MeshData.count
        MeshData.count += 1

    @property
    def color_tuple(self) -> Tuple[float, float, float]:
        """Returns color as a tuple (r, g, b)."""
        return tuple(self.color)

    def __repr__(self):
        return (f"MeshData(id={self.id}, name={self.name!r}, "
                f"vertices_shape={self.vertices.shape}, "
                f"triangles_shape={self.triangles.shape}, "
                f"color={self.color})")
