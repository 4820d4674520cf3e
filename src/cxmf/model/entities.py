"""Dataclass models for CXMF model assets.

Optional references are ``None`` in memory; the codec maps them to the
``INVALID_INDEX`` sentinel on the wire.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Union

from ..codec.version import get_version

__all__ = [
    "Filter",
    "MipmapMode",
    "AddressMode",
    "AlphaMode",
    "ModelKind",
    "Mat4x4",
    "BoundingSphere",
    "Vertex",
    "WeightedVertex",
    "Sampler",
    "Texture",
    "Material",
    "Mesh",
    "Meshlet",
    "MeshNode",
    "Bone",
    "ModelCommon",
    "StaticPayload",
    "SkinnedPayload",
    "Model",
]

BONES_PER_VERTEX = 4


class Filter(IntEnum):
    NEAREST = 0  # VK_FILTER_NEAREST
    LINEAR = 1  # VK_FILTER_LINEAR


class MipmapMode(IntEnum):
    NONE = -1
    NEAREST = 0  # VK_SAMPLER_MIPMAP_MODE_NEAREST
    LINEAR = 1  # VK_SAMPLER_MIPMAP_MODE_LINEAR


class AddressMode(IntEnum):
    REPEAT = 0
    MIRRORED_REPEAT = 1
    CLAMP_TO_EDGE = 2


class AlphaMode(IntEnum):
    OPAQUE = 0
    MASK = 1
    BLEND = 2


class ModelKind(IntEnum):
    STATIC = 0
    SKINNED = 1


def _identity() -> List[float]:
    return [
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ]  # fmt: skip


@dataclass(slots=True)
class Mat4x4:
    """Column-major 4x4 float matrix; element ``(row, col)`` is ``data[col*4+row]``."""

    data: List[float] = field(default_factory=_identity)

    def __post_init__(self) -> None:
        if len(self.data) != 16:
            raise ValueError(f"Mat4x4 needs 16 floats, got {len(self.data)}")

    def __getitem__(self, idx: int) -> float:
        return self.data[idx]

    def __setitem__(self, idx: int, value: float) -> None:
        self.data[idx] = value

    def at(self, row: int, col: int) -> float:
        return self.data[col * 4 + row]

    def __matmul__(self, other: "Mat4x4") -> "Mat4x4":
        a = self.data
        b = other.data
        out = [0.0] * 16
        for col in range(4):
            for row in range(4):
                out[col * 4 + row] = sum(
                    a[k * 4 + row] * b[col * 4 + k] for k in range(4)
                )
        return Mat4x4(out)

    @classmethod
    def identity(cls) -> "Mat4x4":
        return cls()


@dataclass(slots=True)
class BoundingSphere:
    center: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    radius: float = 0.0


@dataclass(slots=True)
class Vertex:
    position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    normal: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    uv: List[float] = field(default_factory=lambda: [0.0, 0.0])
    tangent: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])


@dataclass(slots=True)
class WeightedVertex:
    position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    normal: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    uv: List[float] = field(default_factory=lambda: [0.0, 0.0])
    tangent: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    # None marks an unused influence slot
    bone_ids: List[Optional[int]] = field(
        default_factory=lambda: [None] * BONES_PER_VERTEX
    )
    weights: List[float] = field(
        default_factory=lambda: [0.0] * BONES_PER_VERTEX
    )


@dataclass(slots=True)
class Sampler:
    name: str = ""
    mag_filter: Filter = Filter.LINEAR
    min_filter: Filter = Filter.LINEAR
    mipmap_mode: MipmapMode = MipmapMode.LINEAR
    address_mode_u: AddressMode = AddressMode.REPEAT
    address_mode_v: AddressMode = AddressMode.REPEAT


@dataclass(slots=True)
class Texture:
    """Texture file reference.

    Suffix convention for ``path``: none for base color, ``_n`` for normal
    maps, ``_arm`` for AO/roughness/metallic, ``_emi`` for emissive.
    """

    path: str = ""
    sampler_index: Optional[int] = None

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    @property
    def has_sampler(self) -> bool:
        return self.sampler_index is not None


@dataclass(slots=True)
class Material:
    name: str = ""
    base_color: List[float] = field(
        default_factory=lambda: [1.0, 1.0, 1.0, 1.0]
    )
    roughness: float = 1.0
    metallic: float = 0.0
    ambient_occlusion: float = 1.0
    emissive: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    texture_index: Optional[int] = None
    alpha_mode: AlphaMode = AlphaMode.OPAQUE
    alpha_cutoff: float = 0.5
    double_sided: bool = False
    shadeless: bool = False

    @property
    def has_texture(self) -> bool:
        return self.texture_index is not None


@dataclass(slots=True)
class Mesh:
    name: str = ""
    bounds: BoundingSphere = field(default_factory=BoundingSphere)
    vertex_offset: int = 0
    vertex_count: int = 0
    meshlet_offset: int = 0
    meshlet_count: int = 0
    material_index: Optional[int] = None

    @property
    def has_material(self) -> bool:
        return self.material_index is not None


@dataclass(slots=True)
class Meshlet:
    bounds: BoundingSphere = field(default_factory=BoundingSphere)
    vertex_offset: int = 0
    triangle_offset: int = 0
    vertex_count: int = 0
    triangle_count: int = 0


@dataclass(slots=True)
class MeshNode:
    name: str = ""
    local_transform: Mat4x4 = field(default_factory=Mat4x4)
    mesh_index: Optional[int] = None
    parent_index: Optional[int] = None

    @property
    def has_parent(self) -> bool:
        return self.parent_index is not None

    @property
    def has_mesh(self) -> bool:
        return self.mesh_index is not None


@dataclass(slots=True)
class Bone:
    name: str = ""
    inverse_bind_transform: Mat4x4 = field(default_factory=Mat4x4)
    offset_matrix: Mat4x4 = field(default_factory=Mat4x4)
    parent_index: Optional[int] = None

    @property
    def has_parent(self) -> bool:
        return self.parent_index is not None


@dataclass(slots=True)
class ModelCommon:
    name: str = ""
    textures: List[Texture] = field(default_factory=list)
    samplers: List[Sampler] = field(default_factory=list)
    materials: List[Material] = field(default_factory=list)
    meshes: List[Mesh] = field(default_factory=list)
    mesh_nodes: List[MeshNode] = field(default_factory=list)
    meshlet_vertices: List[int] = field(default_factory=list)
    meshlet_triangles: bytes = b""
    meshlets: List[Meshlet] = field(default_factory=list)
    bounds: BoundingSphere = field(default_factory=BoundingSphere)
    copyright: str = ""
    generator: str = ""
    flags: int = 0
    version: int = field(default_factory=get_version)


@dataclass(slots=True)
class StaticPayload:
    vertices: List[Vertex] = field(default_factory=list)


@dataclass(slots=True)
class SkinnedPayload:
    vertices: List[WeightedVertex] = field(default_factory=list)
    bones: List[Bone] = field(default_factory=list)


Payload = Union[StaticPayload, SkinnedPayload]

_PAYLOAD_TYPES = {
    ModelKind.STATIC: StaticPayload,
    ModelKind.SKINNED: SkinnedPayload,
}


@dataclass(slots=True)
class Model:
    """Tagged model variant: ``kind`` decides the concrete ``payload`` type."""

    kind: ModelKind
    common: ModelCommon = field(default_factory=ModelCommon)
    payload: Optional[Payload] = None

    def __post_init__(self) -> None:
        self.kind = ModelKind(self.kind)
        expected = _PAYLOAD_TYPES[self.kind]
        if self.payload is None:
            self.payload = expected()
        elif not isinstance(self.payload, expected):
            raise TypeError(
                f"{self.kind.name} model requires {expected.__name__}, "
                f"got {type(self.payload).__name__}"
            )

    @classmethod
    def static(
        cls,
        common: ModelCommon | None = None,
        vertices: List[Vertex] | None = None,
    ) -> "Model":
        return cls(
            ModelKind.STATIC,
            common or ModelCommon(),
            StaticPayload(list(vertices or [])),
        )

    @classmethod
    def skinned(
        cls,
        common: ModelCommon | None = None,
        vertices: List[WeightedVertex] | None = None,
        bones: List[Bone] | None = None,
    ) -> "Model":
        return cls(
            ModelKind.SKINNED,
            common or ModelCommon(),
            SkinnedPayload(list(vertices or []), list(bones or [])),
        )

    @property
    def name(self) -> str:
        return self.common.name

    @property
    def vertices(self) -> list:
        return self.payload.vertices  # type: ignore[union-attr]

    def as_static(self) -> StaticPayload | None:
        if self.kind == ModelKind.STATIC:
            return self.payload  # type: ignore[return-value]
        return None

    def as_skinned(self) -> SkinnedPayload | None:
        if self.kind == ModelKind.SKINNED:
            return self.payload  # type: ignore[return-value]
        return None
