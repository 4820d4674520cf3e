"""Per-entity binary read/write functions.

Each ``write_*`` emits the entity's fields in the fixed wire order and the
matching ``read_*`` consumes them in the identical order. Individual fields
are not range-checked here beyond what the field codec guarantees; callers
bound collection counts with the ``*_RECORD_MIN`` sizes.
"""

from __future__ import annotations

from .errors import E_FORMAT, format_error
from .fields import FieldReader, FieldWriter
from ..model.entities import (
    AddressMode,
    AlphaMode,
    Bone,
    BoundingSphere,
    Filter,
    Mat4x4,
    Material,
    Mesh,
    Meshlet,
    MeshNode,
    MipmapMode,
    Sampler,
    Texture,
    Vertex,
    WeightedVertex,
)

__all__ = [
    "TEXTURE_RECORD_MIN",
    "SAMPLER_RECORD_MIN",
    "MATERIAL_RECORD_MIN",
    "MESH_RECORD_MIN",
    "MESHLET_RECORD_SIZE",
    "MESH_NODE_RECORD_MIN",
    "BONE_RECORD_MIN",
    "VERTEX_RECORD_SIZE",
    "WEIGHTED_VERTEX_RECORD_SIZE",
    "write_bounds",
    "read_bounds",
    "write_matrix",
    "read_matrix",
    "write_vertex",
    "read_vertex",
    "write_weighted_vertex",
    "read_weighted_vertex",
    "write_texture",
    "read_texture",
    "write_sampler",
    "read_sampler",
    "write_material",
    "read_material",
    "write_mesh",
    "read_mesh",
    "write_meshlet",
    "read_meshlet",
    "write_mesh_node",
    "read_mesh_node",
    "write_bone",
    "read_bone",
]

_TEXT_PREFIX = 4
BOUNDS_SIZE = 16
MATRIX_SIZE = 64

# Smallest possible encoding of each record (empty strings).
TEXTURE_RECORD_MIN = _TEXT_PREFIX + 4
SAMPLER_RECORD_MIN = _TEXT_PREFIX + 5
MATERIAL_RECORD_MIN = _TEXT_PREFIX + 16 + 12 + 12 + 4 + 1 + 4 + 1 + 1
MESH_RECORD_MIN = _TEXT_PREFIX + BOUNDS_SIZE + 20
MESHLET_RECORD_SIZE = BOUNDS_SIZE + 16
MESH_NODE_RECORD_MIN = _TEXT_PREFIX + MATRIX_SIZE + 8
BONE_RECORD_MIN = _TEXT_PREFIX + 2 * MATRIX_SIZE + 4
VERTEX_RECORD_SIZE = 11 * 4
WEIGHTED_VERTEX_RECORD_SIZE = VERTEX_RECORD_SIZE + 16 + 16


def write_bounds(w: FieldWriter, bounds: BoundingSphere) -> None:
    w.f32_array(bounds.center, 3)
    w.f32(bounds.radius)


def read_bounds(r: FieldReader) -> BoundingSphere:
    center = r.f32_array(3, "bounds.center")
    return BoundingSphere(center=center, radius=r.f32("bounds.radius"))


def write_matrix(w: FieldWriter, mat: Mat4x4) -> None:
    w.f32_array(mat.data, 16)


def read_matrix(r: FieldReader, label: str = "matrix") -> Mat4x4:
    return Mat4x4(r.f32_array(16, label))


def _write_vertex_base(w: FieldWriter, v: Vertex | WeightedVertex) -> None:
    w.f32_array(v.position, 3)
    w.f32_array(v.normal, 3)
    w.f32_array(v.uv, 2)
    w.f32_array(v.tangent, 3)


def write_vertex(w: FieldWriter, v: Vertex) -> None:
    _write_vertex_base(w, v)


def read_vertex(r: FieldReader) -> Vertex:
    return Vertex(
        position=r.f32_array(3, "vertex.position"),
        normal=r.f32_array(3, "vertex.normal"),
        uv=r.f32_array(2, "vertex.uv"),
        tangent=r.f32_array(3, "vertex.tangent"),
    )


def write_weighted_vertex(w: FieldWriter, v: WeightedVertex) -> None:
    _write_vertex_base(w, v)
    if len(v.bone_ids) != 4:
        raise format_error(
            E_FORMAT, f"Expected 4 bone ids, got {len(v.bone_ids)}"
        )
    w.indices(v.bone_ids, "vertex.bone_ids")
    w.f32_array(v.weights, 4)


def read_weighted_vertex(r: FieldReader) -> WeightedVertex:
    return WeightedVertex(
        position=r.f32_array(3, "vertex.position"),
        normal=r.f32_array(3, "vertex.normal"),
        uv=r.f32_array(2, "vertex.uv"),
        tangent=r.f32_array(3, "vertex.tangent"),
        bone_ids=r.indices(4, "vertex.bone_ids"),
        weights=r.f32_array(4, "vertex.weights"),
    )


def write_texture(w: FieldWriter, tex: Texture) -> None:
    w.text(tex.path)
    w.index(tex.sampler_index, "texture.sampler_index")


def read_texture(r: FieldReader) -> Texture:
    path = r.text("texture.path")
    return Texture(path=path, sampler_index=r.index("texture.sampler_index"))


def write_sampler(w: FieldWriter, s: Sampler) -> None:
    w.text(s.name)
    w.enum(s.mag_filter)
    w.enum(s.min_filter)
    w.enum(s.mipmap_mode)
    w.enum(s.address_mode_u)
    w.enum(s.address_mode_v)


def read_sampler(r: FieldReader) -> Sampler:
    return Sampler(
        name=r.text("sampler.name"),
        mag_filter=r.enum(Filter, "sampler.mag_filter"),
        min_filter=r.enum(Filter, "sampler.min_filter"),
        mipmap_mode=r.enum(MipmapMode, "sampler.mipmap_mode"),
        address_mode_u=r.enum(AddressMode, "sampler.address_mode_u"),
        address_mode_v=r.enum(AddressMode, "sampler.address_mode_v"),
    )


def write_material(w: FieldWriter, m: Material) -> None:
    w.text(m.name)
    w.f32_array(m.base_color, 4)
    w.f32(m.roughness)
    w.f32(m.metallic)
    w.f32(m.ambient_occlusion)
    w.f32_array(m.emissive, 3)
    w.index(m.texture_index, "material.texture_index")
    w.enum(m.alpha_mode)
    w.f32(m.alpha_cutoff)
    w.boolean(m.double_sided)
    w.boolean(m.shadeless)


def read_material(r: FieldReader) -> Material:
    return Material(
        name=r.text("material.name"),
        base_color=r.f32_array(4, "material.base_color"),
        roughness=r.f32("material.roughness"),
        metallic=r.f32("material.metallic"),
        ambient_occlusion=r.f32("material.ambient_occlusion"),
        emissive=r.f32_array(3, "material.emissive"),
        texture_index=r.index("material.texture_index"),
        alpha_mode=r.enum(AlphaMode, "material.alpha_mode"),
        alpha_cutoff=r.f32("material.alpha_cutoff"),
        double_sided=r.boolean("material.double_sided"),
        shadeless=r.boolean("material.shadeless"),
    )


def write_mesh(w: FieldWriter, mesh: Mesh) -> None:
    w.text(mesh.name)
    write_bounds(w, mesh.bounds)
    w.u32(mesh.vertex_offset)
    w.u32(mesh.vertex_count)
    w.u32(mesh.meshlet_offset)
    w.u32(mesh.meshlet_count)
    w.index(mesh.material_index, "mesh.material_index")


def read_mesh(r: FieldReader) -> Mesh:
    return Mesh(
        name=r.text("mesh.name"),
        bounds=read_bounds(r),
        vertex_offset=r.u32("mesh.vertex_offset"),
        vertex_count=r.u32("mesh.vertex_count"),
        meshlet_offset=r.u32("mesh.meshlet_offset"),
        meshlet_count=r.u32("mesh.meshlet_count"),
        material_index=r.index("mesh.material_index"),
    )


def write_meshlet(w: FieldWriter, m: Meshlet) -> None:
    # Wire order: offsets first, then counts.
    write_bounds(w, m.bounds)
    w.u32(m.vertex_offset)
    w.u32(m.triangle_offset)
    w.u32(m.vertex_count)
    w.u32(m.triangle_count)


def read_meshlet(r: FieldReader) -> Meshlet:
    return Meshlet(
        bounds=read_bounds(r),
        vertex_offset=r.u32("meshlet.vertex_offset"),
        triangle_offset=r.u32("meshlet.triangle_offset"),
        vertex_count=r.u32("meshlet.vertex_count"),
        triangle_count=r.u32("meshlet.triangle_count"),
    )


def write_mesh_node(w: FieldWriter, node: MeshNode) -> None:
    w.text(node.name)
    write_matrix(w, node.local_transform)
    w.index(node.mesh_index, "node.mesh_index")
    w.index(node.parent_index, "node.parent_index")


def read_mesh_node(r: FieldReader) -> MeshNode:
    return MeshNode(
        name=r.text("node.name"),
        local_transform=read_matrix(r, "node.local_transform"),
        mesh_index=r.index("node.mesh_index"),
        parent_index=r.index("node.parent_index"),
    )


def write_bone(w: FieldWriter, bone: Bone) -> None:
    w.text(bone.name)
    write_matrix(w, bone.inverse_bind_transform)
    write_matrix(w, bone.offset_matrix)
    w.index(bone.parent_index, "bone.parent_index")


def read_bone(r: FieldReader) -> Bone:
    return Bone(
        name=r.text("bone.name"),
        inverse_bind_transform=read_matrix(r, "bone.inverse_bind_transform"),
        offset_matrix=read_matrix(r, "bone.offset_matrix"),
        parent_index=r.index("bone.parent_index"),
    )
