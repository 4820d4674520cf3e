"""Model serialization: shared base fields followed by the variant tail.

Base layout::

    counts block (11 x u32): name len, textures, samplers, materials, meshes,
        mesh nodes, meshlet vertices, meshlet triangles, meshlets,
        copyright len, generator len
    name bytes
    textures[] samplers[] materials[] meshes[] mesh_nodes[]
    meshlet_vertices (flat u32 block) meshlet_triangles (flat u8 block)
    meshlets[]
    bounds
    copyright bytes, generator bytes

Variant tail: static = vertex count + Vertex[]; skinned = vertex count +
bone count + WeightedVertex[] + Bone[].
"""

from __future__ import annotations

from typing import Callable, List, TypeVar

from ..logging import get_logger
from ..model.entities import (
    Model,
    ModelCommon,
    ModelKind,
    SkinnedPayload,
    StaticPayload,
)
from .entities import (
    BONE_RECORD_MIN,
    MATERIAL_RECORD_MIN,
    MESH_NODE_RECORD_MIN,
    MESH_RECORD_MIN,
    MESHLET_RECORD_SIZE,
    SAMPLER_RECORD_MIN,
    TEXTURE_RECORD_MIN,
    VERTEX_RECORD_SIZE,
    WEIGHTED_VERTEX_RECORD_SIZE,
    read_bone,
    read_bounds,
    read_material,
    read_mesh,
    read_mesh_node,
    read_meshlet,
    read_sampler,
    read_texture,
    read_vertex,
    read_weighted_vertex,
    write_bone,
    write_bounds,
    write_material,
    write_mesh,
    write_mesh_node,
    write_meshlet,
    write_sampler,
    write_texture,
    write_vertex,
    write_weighted_vertex,
)
from .errors import E_FORMAT, E_KIND, format_error
from .fields import FieldReader, FieldWriter

__all__ = ["serialize_model", "deserialize_model"]

T = TypeVar("T")


def _write_common(w: FieldWriter, common: ModelCommon) -> None:
    name = w.encode_text(common.name)
    copyright_ = w.encode_text(common.copyright)
    generator = w.encode_text(common.generator)
    try:
        triangles = bytes(common.meshlet_triangles)
    except (TypeError, ValueError) as e:
        raise format_error(
            E_FORMAT, f"Cannot encode meshlet_triangles as u8 indices: {e}"
        ) from e
    for count in (
        len(name),
        len(common.textures),
        len(common.samplers),
        len(common.materials),
        len(common.meshes),
        len(common.mesh_nodes),
        len(common.meshlet_vertices),
        len(triangles),
        len(common.meshlets),
        len(copyright_),
        len(generator),
    ):
        w.u32(count)
    w.raw(name)
    for tex in common.textures:
        write_texture(w, tex)
    for sampler in common.samplers:
        write_sampler(w, sampler)
    for material in common.materials:
        write_material(w, material)
    for mesh in common.meshes:
        write_mesh(w, mesh)
    for node in common.mesh_nodes:
        write_mesh_node(w, node)
    w.u32_array(common.meshlet_vertices)
    w.raw(triangles)
    for meshlet in common.meshlets:
        write_meshlet(w, meshlet)
    write_bounds(w, common.bounds)
    w.raw(copyright_)
    w.raw(generator)


def _read_records(
    r: FieldReader,
    count: int,
    min_size: int,
    label: str,
    read_one: Callable[[FieldReader], T],
) -> List[T]:
    r.ensure_available(count, min_size, label)
    return [read_one(r) for _ in range(count)]


def _read_common(r: FieldReader) -> ModelCommon:
    (
        name_len,
        textures_count,
        samplers_count,
        materials_count,
        meshes_count,
        nodes_count,
        meshlet_vertices_count,
        meshlet_triangles_count,
        meshlets_count,
        copyright_len,
        generator_len,
    ) = r.u32_array(11, "model.counts")
    common = ModelCommon()
    common.name = r.text_bytes(name_len, "model.name")
    common.textures = _read_records(
        r, textures_count, TEXTURE_RECORD_MIN, "textures", read_texture
    )
    common.samplers = _read_records(
        r, samplers_count, SAMPLER_RECORD_MIN, "samplers", read_sampler
    )
    common.materials = _read_records(
        r, materials_count, MATERIAL_RECORD_MIN, "materials", read_material
    )
    common.meshes = _read_records(
        r, meshes_count, MESH_RECORD_MIN, "meshes", read_mesh
    )
    common.mesh_nodes = _read_records(
        r, nodes_count, MESH_NODE_RECORD_MIN, "mesh_nodes", read_mesh_node
    )
    r.ensure_available(meshlet_vertices_count, 4, "meshlet_vertices")
    common.meshlet_vertices = r.u32_array(
        meshlet_vertices_count, "meshlet_vertices"
    )
    common.meshlet_triangles = r.raw(
        meshlet_triangles_count, "meshlet_triangles"
    )
    common.meshlets = _read_records(
        r, meshlets_count, MESHLET_RECORD_SIZE, "meshlets", read_meshlet
    )
    common.bounds = read_bounds(r)
    common.copyright = r.text_bytes(copyright_len, "model.copyright")
    common.generator = r.text_bytes(generator_len, "model.generator")
    return common


def _write_static(w: FieldWriter, payload: StaticPayload) -> None:
    w.u32(len(payload.vertices))
    for v in payload.vertices:
        write_vertex(w, v)


def _read_static(r: FieldReader) -> StaticPayload:
    vertex_count = r.u32("vertex_count")
    return StaticPayload(
        vertices=_read_records(
            r, vertex_count, VERTEX_RECORD_SIZE, "vertices", read_vertex
        )
    )


def _write_skinned(w: FieldWriter, payload: SkinnedPayload) -> None:
    w.u32(len(payload.vertices))
    w.u32(len(payload.bones))
    for v in payload.vertices:
        write_weighted_vertex(w, v)
    for bone in payload.bones:
        write_bone(w, bone)


def _read_skinned(r: FieldReader) -> SkinnedPayload:
    vertex_count = r.u32("vertex_count")
    bone_count = r.u32("bone_count")
    r.ensure_available(
        vertex_count * WEIGHTED_VERTEX_RECORD_SIZE + bone_count * BONE_RECORD_MIN,
        1,
        "skinned tail",
    )
    vertices = _read_records(
        r,
        vertex_count,
        WEIGHTED_VERTEX_RECORD_SIZE,
        "vertices",
        read_weighted_vertex,
    )
    bones = _read_records(r, bone_count, BONE_RECORD_MIN, "bones", read_bone)
    return SkinnedPayload(vertices=vertices, bones=bones)


def serialize_model(model: Model, byte_order: str = "native") -> bytes:
    """Serialize ``model`` into the uncompressed base payload."""
    w = FieldWriter(byte_order)
    _write_common(w, model.common)
    if model.kind == ModelKind.STATIC:
        _write_static(w, model.payload)  # type: ignore[arg-type]
    elif model.kind == ModelKind.SKINNED:
        _write_skinned(w, model.payload)  # type: ignore[arg-type]
    else:  # pragma: no cover
        raise format_error(E_KIND, f"Invalid model kind {model.kind!r}")
    get_logger().debug(
        "Serialized %s model '%s' (%d bytes)",
        model.kind.name.lower(),
        model.common.name,
        len(w),
    )
    return w.getvalue()


def deserialize_model(
    data: bytes | bytearray | memoryview,
    kind: ModelKind,
    byte_order: str = "native",
) -> Model:
    """Rebuild a model of ``kind`` from an uncompressed base payload."""
    r = FieldReader(data, byte_order)
    common = _read_common(r)
    if kind == ModelKind.STATIC:
        model = Model(kind, common, _read_static(r))
    elif kind == ModelKind.SKINNED:
        model = Model(kind, common, _read_skinned(r))
    else:
        raise format_error(E_KIND, f"Invalid model kind {kind!r}")
    if r.remaining:
        get_logger().debug(
            "Ignoring %d trailing payload bytes after model '%s'",
            r.remaining,
            common.name,
        )
    return model
