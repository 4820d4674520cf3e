from __future__ import annotations

"""Forest helper tests for node/bone parent chains."""
import pytest

from cxmf.api import decode_model, encode_model
from cxmf.codec.errors import E_FORMAT, E_INDEX, FormatError
from cxmf.model.entities import Bone, Mat4x4, MeshNode
from cxmf.model.hierarchy import (
    ancestors,
    children,
    find_cycles,
    roots,
    world_transforms,
)

from model_factory import make_static, translation


def _chain():
    return [
        MeshNode(name="root", local_transform=translation(1.0, 0.0, 0.0)),
        MeshNode(name="mid", local_transform=translation(0.0, 2.0, 0.0), parent_index=0),
        MeshNode(name="leaf", local_transform=translation(0.0, 0.0, 4.0), parent_index=1),
        MeshNode(name="other"),
    ]


def test_roots_and_children():
    nodes = _chain()
    assert roots(nodes) == [0, 3]
    assert children(nodes) == {0: [1], 1: [2]}


def test_ancestors_nearest_first():
    assert ancestors(_chain(), 2) == [1, 0]
    assert ancestors(_chain(), 0) == []


def test_ancestors_detects_cycle():
    bones = [Bone(parent_index=2), Bone(parent_index=0), Bone(parent_index=1)]
    with pytest.raises(FormatError) as exc:
        ancestors(bones, 0)
    assert exc.value.code == E_FORMAT


def test_ancestors_out_of_range_parent():
    nodes = [MeshNode(parent_index=4)]
    with pytest.raises(FormatError) as exc:
        ancestors(nodes, 0)
    assert exc.value.code == E_INDEX


def test_find_cycles():
    nodes = [
        MeshNode(),
        MeshNode(parent_index=2),
        MeshNode(parent_index=1),
        MeshNode(parent_index=3),
        MeshNode(parent_index=1),
    ]
    assert find_cycles(nodes) == [[1, 2], [3]]
    assert find_cycles(_chain()) == []


def test_world_transforms_compose_translations():
    world = world_transforms(_chain())
    assert [world[2].at(r, 3) for r in range(3)] == [1.0, 2.0, 4.0]
    assert [world[1].at(r, 3) for r in range(3)] == [1.0, 2.0, 0.0]
    assert world[3] == Mat4x4.identity()


def test_world_transforms_unordered_parents():
    nodes = [
        MeshNode(local_transform=translation(0.0, 0.0, 1.0), parent_index=1),
        MeshNode(local_transform=translation(3.0, 0.0, 0.0)),
    ]
    world = world_transforms(nodes)
    assert [world[0].at(r, 3) for r in range(3)] == [3.0, 0.0, 1.0]


def test_decoded_cyclic_file_is_safe_to_walk():
    model = make_static()
    model.common.mesh_nodes = [MeshNode(parent_index=1), MeshNode(parent_index=0)]
    decoded = decode_model(encode_model(model))
    assert find_cycles(decoded.common.mesh_nodes) == [[0, 1]]
    with pytest.raises(FormatError):
        world_transforms(decoded.common.mesh_nodes)


def test_matrix_multiply_column_major():
    a = translation(1.0, 2.0, 3.0)
    scale = Mat4x4()
    scale[0] = 2.0
    scale[5] = 2.0
    scale[10] = 2.0
    m = a @ scale
    assert m.at(0, 0) == 2.0
    assert m.at(0, 3) == 1.0
    with pytest.raises(ValueError):
        Mat4x4([0.0] * 15)
