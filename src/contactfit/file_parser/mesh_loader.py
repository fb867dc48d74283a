# -*- coding: utf-8 -*-
"""
Mesh Loader
Reads any mesh format trimesh understands (.stl, .obj, .ply, .off, .glb, ...)
into a Model.

Main interface:
- read_trimesh: load a file with trimesh, one MeshData per geometry
"""

import logging
from pathlib import Path
from typing import Any, Union

import numpy as np
import trimesh

from .mesh_data import MeshData
from .model import Model

logger = logging.getLogger(__name__)

TRIMESH_SUFFIXES = (".stl", ".obj", ".ply", ".off", ".glb", ".gltf", ".3mf", ".dae")


def _color_of(mesh: trimesh.Trimesh) -> np.ndarray:
    main_color = getattr(mesh.visual, "main_color", None)
    if main_color is None:
        return np.array([0.5, 0.5, 0.5], dtype=float)
    return np.asarray(main_color[:3], dtype=float) / 255.0


def _to_mesh_data(mesh: trimesh.Trimesh, name: str) -> MeshData:
    return MeshData(vertices=mesh.vertices, triangles=mesh.faces, color=_color_of(mesh), name=name)


def read_trimesh(file_path: Union[str, Path], **kwargs: Any) -> Model:
    """Load a mesh file with ``trimesh.load``.

    A scene is split into one MeshData per geometry (each in its own
    geometry frame); a single mesh gives a one-mesh Model.

    Args:
        file_path: Mesh file path.
        **kwargs: Ignored; accepted so that parse_file can forward options.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no triangle mesh.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    loaded = trimesh.load(str(path))
    model = Model(source=str(path))
    if isinstance(loaded, trimesh.Scene):
        for name, geometry in loaded.geometry.items():
            if isinstance(geometry, trimesh.Trimesh):
                model.add_mesh(_to_mesh_data(geometry, name))
    elif isinstance(loaded, trimesh.Trimesh):
        model.add_mesh(_to_mesh_data(loaded, path.stem))

    if model.count == 0:
        raise ValueError(f"No triangle mesh found in {path.name}")
    logger.info("Read %d meshes from %s", model.count, path.name)
    return model
