# -*- coding: utf-8 -*-
"""
ContactFit File Parser Package
==============================

Reads ROM and affordance meshes into `Model` / `MeshData`.

Currently supported formats:
- AMF (Additive Manufacturing File), built-in reader
- STL, OBJ, PLY, OFF, GLB/GLTF, 3MF, DAE through trimesh

Usage Example:
    from contactfit.file_parser import parse_file
    model = parse_file("rom.amf", progress=False)
    rom = model.collision_object(0)
"""

__version__ = "1.0.0"
__author__ = "QilongJiang"
__license__ = "MIT"

from .amf_parser import read_amf_objects
from .mesh_data import MeshData
from .mesh_loader import read_trimesh
from .model import Model
from .file_dispatcher import parse_file
file_parser = parse_file

__all__ = [
    "read_amf_objects",
    "read_trimesh",
    "MeshData",
    "Model",
    "parse_file",
    "file_parser",
]
