import numpy as np
from typing import Optional, Any

from .config import GEOM_EPS
from .plane import PlaneEquation, plane_equation, triangle_normal


class Triangle:
    """Three ordered 3D points (p1, p2, p3) with cached area and unit normal.

    Triangles are ephemeral: they are built per use from a mesh and a pose
    and never written back.
    """
    vertices: np.ndarray
    normal: Optional[np.ndarray] = None
    area: float = None
    id: Optional[int] = None

    def __init__(self, vertices: Any, triangle_id: Optional[int] = None):
        vertices = np.asarray(vertices, dtype=np.float64)
        if vertices.shape != (3, 3):
            raise ValueError(f"Triangle.vertices shape {vertices.shape} != (3, 3)")
        self.vertices = vertices
        self.id = triangle_id
        self.process_area()

    @classmethod
    def from_points(cls, p1, p2, p3) -> "Triangle":
        return cls(np.vstack([p1, p2, p3]))

    @property
    def p1(self) -> np.ndarray:
        return self.vertices[0]

    @property
    def p2(self) -> np.ndarray:
        return self.vertices[1]

    @property
    def p3(self) -> np.ndarray:
        return self.vertices[2]

    def process_area(self):
        raw = triangle_normal(*self.vertices)
        length = float(np.linalg.norm(raw))
        self.area = 0.5 * length
        self.normal = None if length < GEOM_EPS * GEOM_EPS else raw / length

    @property
    def is_degenerate(self) -> bool:
        return self.normal is None

    @property
    def plane(self) -> PlaneEquation:
        """Plane equation; raises DegenerateGeometryError for a zero-area triangle."""
        return plane_equation(*self.vertices)

    def __iter__(self):
        return iter(self.vertices)

    def __repr__(self):
        return f"Triangle(id={self.id}, vertices={self.vertices.tolist()})"


def as_vertices(triangle: Any) -> np.ndarray:
    """(3, 3) float64 vertex array of a Triangle or any 3x3 array-like."""
    if isinstance(triangle, Triangle):
        return triangle.vertices
    verts = np.asarray(triangle, dtype=np.float64)
    if verts.shape != (3, 3):
        raise ValueError(f"triangle shape {verts.shape} != (3, 3)")
    return verts
