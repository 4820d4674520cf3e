from __future__ import annotations

"""Model validator tests: pool addressing, references, bounds, cycles."""
from cxmf.model.entities import Bone, MeshNode
from cxmf.model.validator import validate_model

from model_factory import make_skinned, make_static


def _codes(issues):
    return {i.code for i in issues}


def _paths(issues):
    return {i.path for i in issues}


def test_factory_models_are_valid():
    assert validate_model(make_static()) == []
    assert validate_model(make_skinned()) == []


def test_mesh_vertex_range_outside_pool():
    model = make_static()
    model.common.meshes[0].vertex_offset = 2
    issues = validate_model(model)
    assert "E_RANGE" in _codes(issues)
    assert "meshes[0]" in _paths(issues)


def test_vertex_count_sum_mismatch():
    model = make_static()
    model.payload.vertices.append(model.payload.vertices[0])
    issues = validate_model(model)
    assert "E_COUNT" in _codes(issues)


def test_meshlet_range_outside_shared_pools():
    model = make_static()
    model.common.meshlets[0].triangle_count = 2
    model.common.meshlets[0].vertex_offset = 1
    issues = validate_model(model)
    assert [i.path for i in issues if i.code == "E_RANGE"] == [
        "meshlets[0]",
        "meshlets[0]",
    ]


def test_meshlet_triangle_index_beyond_local_vertices():
    model = make_static()
    model.common.meshlet_triangles = bytes([0, 1, 3])
    issues = validate_model(model)
    assert "meshlets[0].triangles" in _paths(issues)


def test_mesh_meshlet_range_checked():
    model = make_static()
    model.common.meshes[0].meshlet_count = 4
    assert "E_RANGE" in _codes(validate_model(model))


def test_dangling_references():
    model = make_static()
    model.common.textures[0].sampler_index = 3
    model.common.materials[0].texture_index = 1
    model.common.meshes[0].material_index = 2
    model.common.mesh_nodes[0].parent_index = 5
    paths = _paths(validate_model(model))
    assert {
        "textures[0].sampler_index",
        "materials[0].texture_index",
        "meshes[0].material_index",
        "mesh_nodes[0].parent_index",
    } <= paths


def test_skinned_bone_references():
    model = make_skinned()
    model.payload.vertices[1].bone_ids[3] = 2
    model.payload.bones[1].parent_index = 7
    paths = _paths(validate_model(model))
    assert "vertices[1].bone_ids[3]" in paths
    assert "bones[1].parent_index" in paths


def test_negative_radius():
    model = make_static()
    model.common.bounds.radius = -1.0
    issues = validate_model(model)
    assert "E_BOUNDS" in _codes(issues)


def test_node_and_bone_cycles_reported():
    model = make_skinned()
    model.common.mesh_nodes = [
        MeshNode(name="a", parent_index=1),
        MeshNode(name="b", parent_index=0),
    ]
    model.payload.bones = [Bone(name="self", parent_index=0)]
    for v in model.payload.vertices:
        v.bone_ids = [0, None, None, None]
    issues = [i for i in validate_model(model) if i.code == "E_CYCLE"]
    assert {i.path for i in issues} == {"mesh_nodes", "bones"}


def test_issue_to_dict():
    model = make_static()
    model.common.bounds.radius = -0.5
    d = validate_model(model)[0].to_dict()
    assert d == {"code": "E_BOUNDS", "message": "Negative radius -0.5", "path": "bounds"}


def test_bound_vertex_weights_must_sum_to_one():
    model = make_skinned()
    for v in model.payload.vertices:
        v.weights = [5.0, 3.0, 0.0, 7.0]
    issues = [i for i in validate_model(model) if i.code == "E_WEIGHT"]
    paths = {i.path for i in issues}
    assert "vertices[0].weights" in paths
    messages = [i.message for i in issues]
    assert any("sum to 15.0" in m for m in messages)
    assert any("unused influence slot 3" in m for m in messages)


def test_weight_sum_tolerates_float_rounding():
    model = make_skinned()
    model.payload.vertices[0].weights = [0.7, 0.2, 0.1, 0.0]
    assert validate_model(model) == []


def test_unbound_vertex_must_have_zero_weights():
    model = make_skinned()
    model.payload.vertices[0].bone_ids = [None] * 4
    issues = [i for i in validate_model(model) if i.code == "E_WEIGHT"]
    assert [i.path for i in issues] == ["vertices[0].weights"] * 3
    assert issues[-1].message == "Unbound vertex has non-zero weights"
    model.payload.vertices[0].weights = [0.0] * 4
    assert validate_model(model) == []
