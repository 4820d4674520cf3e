from __future__ import annotations

"""Encode/decode round-trip tests for both model kinds.

Covers the cube/skinned reference models, every compression level, explicit
byte orders and the header-carried flags/version fields.
"""
import pytest

from cxmf.api import decode_model, encode_model, load_from_memory
from cxmf.codec.compression import CompressionLevel
from cxmf.codec.version import make_version
from cxmf.config import CodecOptions
from cxmf.model.entities import Model, ModelKind

from model_factory import make_skinned, make_static


def test_static_cube_roundtrip_default_level():
    model = make_static("Cube")
    data = encode_model(model)
    decoded = load_from_memory(data)
    assert decoded is not None
    assert decoded == model
    assert decoded.kind == ModelKind.STATIC
    assert decoded.common.textures[0].path == "cube.dds"
    assert decoded.common.textures[0].sampler_index is None
    assert decoded.common.materials[0].texture_index == 0
    assert decoded.common.meshlet_vertices == [0, 1, 2]
    assert decoded.common.meshlet_triangles == bytes([0, 1, 2])


def test_skinned_bone_chain_and_weights_roundtrip():
    model = make_skinned()
    decoded = decode_model(encode_model(model))
    skinned = decoded.as_skinned()
    assert skinned is not None
    assert decoded.as_static() is None
    assert [b.parent_index for b in skinned.bones] == [None, 0]
    for v in skinned.vertices:
        assert v.bone_ids == [0, 1, None, None]
        assert v.weights == [0.75, 0.25, 0.0, 0.0]
        assert sum(v.weights) == 1.0
    assert skinned.bones[1].inverse_bind_transform.at(1, 3) == -1.0
    assert decoded == model


@pytest.mark.parametrize("level", list(CompressionLevel))
@pytest.mark.parametrize("factory", [make_static, make_skinned])
def test_roundtrip_all_levels(level, factory):
    model = factory()
    assert decode_model(encode_model(model, level)) == model


def test_level_none_is_stored_passthrough():
    model = make_static()
    stored = encode_model(model, CompressionLevel.NONE)
    packed = encode_model(model, CompressionLevel.MIN_SIZE)
    assert decode_model(stored) == model
    # Stored blocks carry the raw payload plus framing overhead.
    assert len(stored) > len(packed)


@pytest.mark.parametrize("byte_order", ["little", "big"])
def test_roundtrip_explicit_byte_order(byte_order):
    opts = CodecOptions(byte_order=byte_order)
    model = make_skinned()
    data = encode_model(model, options=opts)
    assert decode_model(data, options=opts) == model


def test_byte_order_mismatch_fails_magic_gate():
    data = encode_model(make_static(), options=CodecOptions(byte_order="big"))
    assert load_from_memory(data, options=CodecOptions(byte_order="little")) is None


def test_flags_and_version_come_from_header():
    model = make_static()
    model.common.flags = 0xA5
    model.common.version = make_version(1, 2, 7)
    decoded = decode_model(encode_model(model))
    assert decoded.common.flags == 0xA5
    assert decoded.common.version == make_version(1, 2, 7)


def test_empty_models_roundtrip():
    for model in (Model.static(), Model.skinned()):
        decoded = decode_model(encode_model(model))
        assert decoded == model
        assert decoded.kind == model.kind


def test_skinned_without_bones_stays_skinned():
    model = make_skinned()
    model.payload.bones = []
    for v in model.payload.vertices:
        v.bone_ids = [None] * 4
    decoded = decode_model(encode_model(model))
    assert decoded.kind == ModelKind.SKINNED
    assert decoded.as_skinned().bones == []


def test_non_ascii_and_raw_byte_names_roundtrip():
    model = make_static("Würfel 一")
    # Lone surrogate stands for an undecodable byte and must survive.
    model.common.generator = b"gen\xff".decode("utf-8", "surrogateescape")
    decoded = decode_model(encode_model(model))
    assert decoded.name == "Würfel 一"
    assert decoded.common.generator.encode("utf-8", "surrogateescape") == b"gen\xff"


def test_trailing_bytes_after_payload_are_ignored():
    model = make_static()
    data = encode_model(model) + b"\x00" * 7
    assert decode_model(data) == model


def test_sentinel_indices_preserved_everywhere():
    model = make_skinned()
    common = model.common
    common.textures[0].sampler_index = None
    common.materials[0].texture_index = None
    common.meshes[0].material_index = None
    common.mesh_nodes[0].mesh_index = None
    common.mesh_nodes[0].parent_index = None
    decoded = decode_model(encode_model(model))
    dc = decoded.common
    assert dc.textures[0].sampler_index is None
    assert not dc.textures[0].has_sampler
    assert not dc.materials[0].has_texture
    assert not dc.meshes[0].has_material
    assert not dc.mesh_nodes[0].has_mesh
    assert not dc.mesh_nodes[0].has_parent
    assert decoded.as_skinned().vertices[0].bone_ids[2:] == [None, None]
