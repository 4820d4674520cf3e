"""Small, fully consistent models for tests.

All float values are exactly representable as f32 so decoded models compare
equal to the originals.
"""

from __future__ import annotations

from cxmf.model.entities import (
    Bone,
    BoundingSphere,
    Mat4x4,
    Material,
    Mesh,
    Meshlet,
    MeshNode,
    Model,
    ModelCommon,
    Sampler,
    Texture,
    Vertex,
    WeightedVertex,
)

_POSITIONS = [
    [0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0],
]


def translation(x: float, y: float, z: float) -> Mat4x4:
    m = Mat4x4()
    m[12] = x
    m[13] = y
    m[14] = z
    return m


def make_common(name: str = "Cube") -> ModelCommon:
    return ModelCommon(
        name=name,
        textures=[Texture(path="cube.dds", sampler_index=None)],
        samplers=[Sampler(name="linear")],
        materials=[
            Material(
                name="cube_mat",
                base_color=[1.0, 0.5, 0.25, 1.0],
                roughness=0.5,
                metallic=0.25,
                emissive=[0.0, 0.125, 0.0],
                texture_index=0,
            )
        ],
        meshes=[
            Mesh(
                name="cube_mesh",
                bounds=BoundingSphere([0.5, 0.5, 0.0], 1.0),
                vertex_offset=0,
                vertex_count=3,
                meshlet_offset=0,
                meshlet_count=1,
                material_index=0,
            )
        ],
        mesh_nodes=[MeshNode(name="root", mesh_index=0)],
        meshlet_vertices=[0, 1, 2],
        meshlet_triangles=bytes([0, 1, 2]),
        meshlets=[
            Meshlet(
                bounds=BoundingSphere([0.5, 0.5, 0.0], 1.0),
                vertex_offset=0,
                triangle_offset=0,
                vertex_count=3,
                triangle_count=1,
            )
        ],
        bounds=BoundingSphere([0.5, 0.5, 0.0], 1.0),
        copyright="(c) cxmf tests",
        generator="model_factory",
    )


def make_static(name: str = "Cube") -> Model:
    vertices = [
        Vertex(
            position=list(p),
            normal=[0.0, 0.0, 1.0],
            uv=[p[0], p[1]],
            tangent=[1.0, 0.0, 0.0],
        )
        for p in _POSITIONS
    ]
    return Model.static(make_common(name), vertices)


def make_skinned(name: str = "Rig") -> Model:
    vertices = [
        WeightedVertex(
            position=list(p),
            normal=[0.0, 0.0, 1.0],
            uv=[p[0], p[1]],
            tangent=[1.0, 0.0, 0.0],
            bone_ids=[0, 1, None, None],
            weights=[0.75, 0.25, 0.0, 0.0],
        )
        for p in _POSITIONS
    ]
    bones = [
        Bone(name="hip", parent_index=None),
        Bone(
            name="knee",
            inverse_bind_transform=translation(0.0, -1.0, 0.0),
            offset_matrix=translation(0.0, 1.0, 0.0),
            parent_index=0,
        ),
    ]
    return Model.skinned(make_common(name), vertices, bones)
