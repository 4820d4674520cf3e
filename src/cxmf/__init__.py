"""CXMF: compressed binary container for renderer-ready 3D models."""

from .api import (
    decode_model,
    encode_model,
    load_from_file,
    load_from_memory,
    save_to_file,
    save_to_stream,
)
from .codec.compression import CompressionLevel
from .codec.constants import INVALID_INDEX, MAGIC
from .codec.errors import (
    CompressionError,
    CxmfError,
    FormatError,
    ImporterError,
    ImporterFault,
    ModelIOError,
    ValidationFailed,
    VersionError,
)
from .codec.version import decode_version, get_version, make_version
from .config import CodecOptions, load_options
from .importer import get_importer, has_importer, set_importer
from .logging import CollectingLogger, ReporterLogger, StdLogger
from .model.entities import (
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
    Model,
    ModelCommon,
    ModelKind,
    Sampler,
    SkinnedPayload,
    StaticPayload,
    Texture,
    Vertex,
    WeightedVertex,
)
from .model.validator import validate_model

__all__ = [
    "load_from_file",
    "load_from_memory",
    "save_to_file",
    "save_to_stream",
    "encode_model",
    "decode_model",
    "CompressionLevel",
    "INVALID_INDEX",
    "MAGIC",
    "CxmfError",
    "ModelIOError",
    "FormatError",
    "VersionError",
    "CompressionError",
    "ImporterError",
    "ImporterFault",
    "ValidationFailed",
    "make_version",
    "decode_version",
    "get_version",
    "CodecOptions",
    "load_options",
    "set_importer",
    "get_importer",
    "has_importer",
    "ReporterLogger",
    "StdLogger",
    "CollectingLogger",
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
    "validate_model",
]
