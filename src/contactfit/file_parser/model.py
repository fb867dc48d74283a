from dataclasses import dataclass, field
from typing import Iterable, List, Optional, TYPE_CHECKING

from .mesh_data import MeshData

if TYPE_CHECKING:
    from ..geometry_kernel import CollisionObject
    from ..visualizer.visualizer_interface import IVisualizer


@dataclass
class Model:
    """
    Data class representing a collection of 3D mesh objects.

    Attributes:
        meshes: List of MeshData objects.
        source: Path of the file the meshes were read from.
    """
    meshes: List[MeshData] = field(default_factory=list)
    source: str = field(default_factory=str)

    @property
    def count(self) -> int:
        """Dynamic property returning the number of meshes."""
        return len(self.meshes)

    def add_mesh(self, mesh: MeshData):
        """Add a MeshData object to the model."""
        self.meshes.append(mesh)

    def get(self, key=0) -> MeshData:
        """Mesh by index or by name.

        Raises:
            KeyError: If no mesh has that name.
            IndexError: If the index is out of range.
        """
        if isinstance(key, str):
            for mesh in self.meshes:
                if mesh.name == key:
                    return mesh
            raise KeyError(f"No mesh named {key!r} in {self.source or 'model'}")
        return self.meshes[key]

    def collision_object(
        self,
        key=0,
        rotation: Optional[Iterable] = None,
        translation: Optional[Iterable[float]] = None,
    ) -> "CollisionObject":
        """Place mesh ``key`` in the world with the given pose."""
        from ..geometry_kernel.collision_object import CollisionObject
        return CollisionObject(self.get(key), rotation, translation)

    def show(self, visualizer: "IVisualizer"):
        """Show the model (identity pose) using the provided visualizer."""
        for index in range(self.count):
            visualizer.add_object(self.collision_object(index), opacity=0.5)
