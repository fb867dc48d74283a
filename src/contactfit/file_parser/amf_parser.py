"""AMF Reader
Reads the objects of an AMF (Additive Manufacturing File) document as ROM /
affordance meshes.

Main interface:
- read_amf_objects: AMF file -> Model, one MeshData per <object>

Only the geometry is read: <vertex>/<coordinates>, every <volume>/<triangle>
of an object, an optional object <color> and the object name. Materials,
constellations and curved-triangle edges are ignored.

Dependencies:
- stdlib: pathlib, typing, xml.etree.ElementTree
- third party: numpy, tqdm
- local: MeshData, Model, VisualizerType
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union
import xml.etree.ElementTree as ET

import numpy as np
from tqdm import tqdm

from .mesh_data import MeshData
from .model import Model
from ..visualizer.visualizer_type import VisualizerType

logger = logging.getLogger(__name__)

# objects with fewer elements are read without a progress bar
_PROGRESS_MIN_ITEMS = 2000


def _strip_namespaces(root: ET.Element) -> ET.Element:
    # "{uri}vertex" / "amf:vertex" -> "vertex"
    for elem in root.iter():
        if isinstance(elem.tag, str):
            elem.tag = elem.tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]
    return root


def _child_values(elem: ET.Element, tags: Sequence[str]) -> List[str]:
    values = []
    for tag in tags:
        child = elem.find(tag)
        if child is None or child.text is None:
            raise ValueError(f"<{elem.tag}> is missing <{tag}>")
        values.append(child.text.strip())
    return values


def _rows(elems: Sequence[ET.Element], tags: Sequence[str], desc: str, unit: str, progress: bool) -> Iterable[List[str]]:
    bar = tqdm(
        elems,
        desc=desc,
        unit=unit,
        leave=False,
        disable=not progress or len(elems) < _PROGRESS_MIN_ITEMS,
    )
    for elem in bar:
        yield _child_values(elem, tags)


def _read_vertices(obj_xml: ET.Element, progress: bool, label: str) -> np.ndarray:
    """(N, 3) float64 vertex coordinates of an AMF object."""
    coords = obj_xml.findall(".//vertex/coordinates")
    rows = list(_rows(coords, ("x", "y", "z"), f"[{label}] vertices", "v", progress))
    return np.asarray(rows, dtype=np.float64).reshape(-1, 3)


def _read_triangles(obj_xml: ET.Element, progress: bool, label: str) -> np.ndarray:
    """(M, 3) int64 vertex indices of all volumes of an AMF object."""
    tris = obj_xml.findall(".//triangle")
    rows = list(_rows(tris, ("v1", "v2", "v3"), f"[{label}] triangles", "tri", progress))
    return np.asarray(rows, dtype=np.int64).reshape(-1, 3)


def _read_color(obj_xml: ET.Element) -> Optional[np.ndarray]:
    color = obj_xml.find("color")
    if color is None:
        color = obj_xml.find(".//color")
    if color is None:
        return None
    return np.asarray(_child_values(color, ("r", "g", "b")), dtype=float)


def _read_name(obj_xml: ET.Element, index: int) -> str:
    for meta in obj_xml.findall("metadata"):
        if meta.get("type") == "name" and meta.text:
            return meta.text.strip()
    return obj_xml.get("id") or f"object_{index}"


def read_amf_objects(
    file_path: Union[str, Path],
    progress: bool = True,
    show: bool = False,
    visualizer_type: Optional[VisualizerType] = None,
    **kwargs: Any,
) -> Model:
    """Read every <object> of an AMF file into a Model.

    Objects are named by their ``<metadata type="name">`` entry, else by
    their ``id`` attribute. An object without ``<color>`` gets the MeshData
    default gray.

    Args:
        file_path: AMF file.
        progress: Show tqdm bars (per object, and per large vertex/triangle list).
        show: Open a visualizer with all objects after reading.
        visualizer_type: Backend for ``show``.
        **kwargs: Ignored; accepted so that parse_file can forward options.

    Raises:
        FileNotFoundError: The file does not exist.
        ET.ParseError: The file is not well-formed XML.
        ValueError: A vertex or triangle entry is incomplete, or a triangle
            references a missing vertex.

    Examples:
        >>> from contactfit.file_parser.amf_parser import read_amf_objects
        >>> model = read_amf_objects("rom.amf", progress=False)
        >>> rom = model.collision_object(0)
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    root = _strip_namespaces(ET.parse(path).getroot())
    model = Model(source=str(path))

    for index, obj_xml in enumerate(
        tqdm(root.findall(".//object"), desc="AMF objects", unit="obj", disable=not progress)
    ):
        name = _read_name(obj_xml, index)
        mesh_kwargs = {}
        color = _read_color(obj_xml)
        if color is not None:
            mesh_kwargs["color"] = color
        model.add_mesh(MeshData(
            vertices=_read_vertices(obj_xml, progress, name),
            triangles=_read_triangles(obj_xml, progress, name),
            name=name,
            **mesh_kwargs,
        ))
    logger.info("Read %d objects from %s", model.count, path.name)

    if show:
        from ..visualizer import IVisualizer
        vis = IVisualizer.create(visualizer_type)
        model.show(vis)
        vis.show()

    return model
