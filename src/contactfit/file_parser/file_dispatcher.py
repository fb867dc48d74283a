# -*- coding: utf-8 -*-
"""
File Dispatcher
Single entry point for file parsing; dispatches on the file suffix.

Main interface:
- parse_file: generic entry point, returns a Model

Dependencies:
- stdlib: pathlib, typing
- local: amf_parser.read_amf_objects, mesh_loader.read_trimesh
"""

from pathlib import Path
from typing import Any, Union

from .model import Model
from .amf_parser import read_amf_objects
from .mesh_loader import TRIMESH_SUFFIXES, read_trimesh


def parse_file(file_path: Union[str, Path], **kwargs: Any) -> Model:
    """Dispatch file parsing based on file suffix and return Model.

    Args:
        file_path: File path, str or Path.
        **kwargs: Forwarded to the concrete parser, e.g. progress, show, visualizer_type.

    Returns:
        Model: The parsed model.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file type is not supported.

    Examples:
        >>> from contactfit.file_parser.file_dispatcher import parse_file
        >>> model = parse_file("rom.stl")
        >>> model.count >= 1
        True
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix == ".amf":
        return read_amf_objects(file_path, **kwargs)
    if suffix in TRIMESH_SUFFIXES:
        return read_trimesh(file_path, **kwargs)
    raise ValueError(
        f"Unsupported file format: {suffix}. Supported: .amf, {', '.join(TRIMESH_SUFFIXES)}."
    )
