"""
Tests for the mesh file readers: AMF, trimesh formats and the suffix
dispatcher.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import numpy as np
import pytest
import trimesh

from conftest import CUBE_TRIANGLES, CUBE_VERTICES, square_patch, write_amf
from contactfit.file_parser import MeshData, Model, parse_file, read_amf_objects


@pytest.fixture
def amf_file(tmp_path):
    patch_vertices, patch_triangles = square_patch(0.3, 0.0)
    return write_amf(
        tmp_path / "scene.amf",
        [("rom", CUBE_VERTICES, CUBE_TRIANGLES), ("affordance", patch_vertices, patch_triangles)],
        color=(1.0, 0.0, 0.25),
    )


def test_amf_objects_are_read(amf_file) -> None:
    model = parse_file(amf_file, progress=False)
    assert isinstance(model, Model)
    assert model.count == 2
    rom = model.get("rom")
    assert rom.vertices.shape == (8, 3)
    assert rom.vertices.dtype == np.float64
    np.testing.assert_array_equal(rom.triangles, CUBE_TRIANGLES)
    np.testing.assert_allclose(rom.color, [1.0, 0.0, 0.25])
    assert model.get(1).name == "affordance"
    assert model.source.endswith("scene.amf")


def test_amf_without_name_or_color(tmp_path) -> None:
    path = tmp_path / "plain.amf"
    path.write_text(
        '<amf xmlns="http://www.astm.org/Standards/F2915"><object id="7"><mesh><vertices>'
        "<vertex><coordinates><x>0</x><y>0</y><z>0</z></coordinates></vertex>"
        "<vertex><coordinates><x>1</x><y>0</y><z>0</z></coordinates></vertex>"
        "<vertex><coordinates><x>0</x><y>1</y><z>0</z></coordinates></vertex>"
        "</vertices><volume><triangle><v1>0</v1><v2>1</v2><v3>2</v3></triangle></volume>"
        "</mesh></object></amf>",
        encoding="utf-8",
    )
    model = read_amf_objects(path, progress=False)
    mesh = model.get(0)
    assert mesh.name == "7"
    assert mesh.triangles.shape == (1, 3)
    np.testing.assert_allclose(mesh.color, [0.5, 0.5, 0.5])


def test_model_collision_object(amf_file) -> None:
    model = parse_file(amf_file, progress=False)
    obj = model.collision_object("affordance", translation=[0.0, 0.0, 1.0])
    assert obj.name == "affordance"
    np.testing.assert_allclose(obj.world_vertices()[:, 2], 1.0)


def test_unknown_mesh_name_raises(amf_file) -> None:
    model = parse_file(amf_file, progress=False)
    with pytest.raises(KeyError):
        model.get("missing")


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "nope.amf")


def test_malformed_amf_raises(tmp_path) -> None:
    path = tmp_path / "broken.amf"
    path.write_text("<amf><object>", encoding="utf-8")
    with pytest.raises(ET.ParseError):
        parse_file(path, progress=False)


def test_unsupported_suffix_raises(tmp_path) -> None:
    path = tmp_path / "mesh.txt"
    path.write_text("0 0 0", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_file(path)


def test_stl_is_read_through_trimesh(tmp_path) -> None:
    path = tmp_path / "box.stl"
    trimesh.creation.box(extents=(1.0, 1.0, 1.0)).export(str(path))
    model = parse_file(path)
    assert model.count == 1
    mesh = model.get(0)
    assert mesh.name == "box"
    assert mesh.triangles.shape == (12, 3)
    np.testing.assert_allclose(np.abs(mesh.vertices).max(), 0.5)


def test_mesh_data_validates_indices() -> None:
    with pytest.raises(ValueError):
        MeshData(vertices=np.zeros((3, 3)), triangles=[[0, 1, 3]])


def test_mesh_data_ids_are_unique() -> None:
    a = MeshData(vertices=np.zeros((3, 3)), triangles=[[0, 1, 2]])
    b = MeshData(vertices=np.zeros((3, 3)), triangles=[[0, 1, 2]])
    assert b.id == a.id + 1
    assert a.color_tuple == (0.5, 0.5, 0.5)
