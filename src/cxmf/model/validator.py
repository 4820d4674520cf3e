"""Structural validation of in-memory models.

Checks pool addressing (meshes into vertices/meshlets, meshlets into the
shared meshlet pools), index references, skinning weights, bounding radii
and parent cycles.

Returns a list of ValidationIssue; empty list means success. Decoding never
runs these checks implicitly.
"""

from __future__ import annotations

import math
from typing import List, Optional

from .entities import BoundingSphere, Model
from .hierarchy import find_cycles

__all__ = ["ValidationIssue", "validate_model"]


class ValidationIssue:
    def __init__(self, code: str, message: str, path: str = "") -> None:
        self.code = code
        self.message = message
        self.path = path

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "path": self.path}

    def __repr__(self) -> str:  # convenience for tests
        return f"ValidationIssue(code={self.code}, path={self.path}, message={self.message})"


def _err(issues: List[ValidationIssue], code: str, message: str, path: str):
    issues.append(ValidationIssue(code, message, path))


def _check_ref(
    issues: List[ValidationIssue],
    value: Optional[int],
    size: int,
    target: str,
    path: str,
) -> None:
    if value is not None and not 0 <= value < size:
        _err(
            issues,
            "E_REF",
            f"Reference {value} outside {target} ({size} entries)",
            path,
        )


def _check_range(
    issues: List[ValidationIssue],
    offset: int,
    count: int,
    size: int,
    target: str,
    path: str,
) -> bool:
    if offset < 0 or count < 0 or offset + count > size:
        _err(
            issues,
            "E_RANGE",
            f"Range [{offset}, {offset + count}) outside {target} ({size} entries)",
            path,
        )
        return False
    return True


def _check_bounds(
    issues: List[ValidationIssue], bounds: BoundingSphere, path: str
) -> None:
    if bounds.radius < 0:
        _err(issues, "E_BOUNDS", f"Negative radius {bounds.radius}", path)


def _meshlet_phase(model: Model, issues: List[ValidationIssue]) -> None:
    common = model.common
    pool_vertices = len(common.meshlet_vertices)
    pool_triangles = len(common.meshlet_triangles)
    for i, m in enumerate(common.meshlets):
        path = f"meshlets[{i}]"
        _check_bounds(issues, m.bounds, path + ".bounds")
        _check_range(
            issues,
            m.vertex_offset,
            m.vertex_count,
            pool_vertices,
            "meshlet_vertices",
            path,
        )
        # Triangles are 3 local vertex indices, one byte each.
        if not _check_range(
            issues,
            m.triangle_offset,
            m.triangle_count * 3,
            pool_triangles,
            "meshlet_triangles",
            path,
        ):
            continue
        end = m.triangle_offset + m.triangle_count * 3
        local = common.meshlet_triangles[m.triangle_offset : end]
        if local and max(local) >= m.vertex_count:
            _err(
                issues,
                "E_REF",
                f"Triangle index {max(local)} >= meshlet vertex count {m.vertex_count}",
                path + ".triangles",
            )


def _mesh_phase(model: Model, issues: List[ValidationIssue]) -> None:
    common = model.common
    vertex_total = len(model.vertices)
    counted = 0
    for i, mesh in enumerate(common.meshes):
        path = f"meshes[{i}]"
        _check_bounds(issues, mesh.bounds, path + ".bounds")
        _check_range(
            issues,
            mesh.vertex_offset,
            mesh.vertex_count,
            vertex_total,
            "vertices",
            path,
        )
        _check_range(
            issues,
            mesh.meshlet_offset,
            mesh.meshlet_count,
            len(common.meshlets),
            "meshlets",
            path,
        )
        _check_ref(
            issues,
            mesh.material_index,
            len(common.materials),
            "materials",
            path + ".material_index",
        )
        counted += mesh.vertex_count
    if counted != vertex_total:
        _err(
            issues,
            "E_COUNT",
            f"Mesh vertex counts sum to {counted}, model has {vertex_total} vertices",
            "vertices",
        )


def _reference_phase(model: Model, issues: List[ValidationIssue]) -> None:
    common = model.common
    for i, tex in enumerate(common.textures):
        _check_ref(
            issues,
            tex.sampler_index,
            len(common.samplers),
            "samplers",
            f"textures[{i}].sampler_index",
        )
    for i, mat in enumerate(common.materials):
        _check_ref(
            issues,
            mat.texture_index,
            len(common.textures),
            "textures",
            f"materials[{i}].texture_index",
        )
    for i, node in enumerate(common.mesh_nodes):
        path = f"mesh_nodes[{i}]"
        _check_ref(issues, node.mesh_index, len(common.meshes), "meshes", path + ".mesh_index")
        _check_ref(
            issues,
            node.parent_index,
            len(common.mesh_nodes),
            "mesh_nodes",
            path + ".parent_index",
        )
    skinned = model.as_skinned()
    if skinned is None:
        return
    bone_total = len(skinned.bones)
    for i, bone in enumerate(skinned.bones):
        _check_ref(issues, bone.parent_index, bone_total, "bones", f"bones[{i}].parent_index")
    for i, v in enumerate(skinned.vertices):
        for slot, bone_id in enumerate(v.bone_ids):
            _check_ref(issues, bone_id, bone_total, "bones", f"vertices[{i}].bone_ids[{slot}]")


def _weight_phase(model: Model, issues: List[ValidationIssue]) -> None:
    skinned = model.as_skinned()
    if skinned is None:
        return
    for i, v in enumerate(skinned.vertices):
        path = f"vertices[{i}].weights"
        for slot, (bone_id, weight) in enumerate(zip(v.bone_ids, v.weights)):
            if bone_id is None and weight != 0.0:
                _err(
                    issues,
                    "E_WEIGHT",
                    f"Weight {weight} on unused influence slot {slot}",
                    path,
                )
        total = sum(v.weights)
        if any(b is not None for b in v.bone_ids):
            if not math.isclose(total, 1.0, abs_tol=1e-3):
                _err(issues, "E_WEIGHT", f"Weights sum to {total}, expected 1.0", path)
        elif any(w != 0.0 for w in v.weights):
            _err(issues, "E_WEIGHT", "Unbound vertex has non-zero weights", path)


def _cycle_phase(model: Model, issues: List[ValidationIssue]) -> None:
    for cycle in find_cycles(model.common.mesh_nodes):
        _err(issues, "E_CYCLE", f"Parent cycle through nodes {cycle}", "mesh_nodes")
    skinned = model.as_skinned()
    if skinned is not None:
        for cycle in find_cycles(skinned.bones):
            _err(issues, "E_CYCLE", f"Parent cycle through bones {cycle}", "bones")


def validate_model(model: Model) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    _check_bounds(issues, model.common.bounds, "bounds")
    _mesh_phase(model, issues)
    _meshlet_phase(model, issues)
    _reference_phase(model, issues)
    _weight_phase(model, issues)
    _cycle_phase(model, issues)
    return issues
