"""Binary format constants for CXMF containers."""

from __future__ import annotations

__all__ = [
    "MAGIC",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "INVALID_INDEX",
    "HEADER_SIZE",
    "KIND_TAG_SIZE",
    "PREAMBLE_SIZE",
    "MAX_PAYLOAD_SIZE",
    "NATIVE_EXTENSION",
    "IMPORT_EXTENSIONS",
    "DEFAULT_MODEL_NAME",
    "BYTE_ORDERS",
]

# 'CXMF' read as a u32 in the producing process's byte order.
MAGIC = (ord("F") << 24) | (ord("M") << 16) | (ord("X") << 8) | ord("C")

VERSION_MAJOR = 1
VERSION_MINOR = 2
VERSION_PATCH = 0

INVALID_INDEX = 0xFFFFFFFF

# magic, version, compressed_size, base_size, flags
HEADER_SIZE = 20
KIND_TAG_SIZE = 1
PREAMBLE_SIZE = HEADER_SIZE + KIND_TAG_SIZE

# Size fields are u32; the base payload must stay strictly below the max.
MAX_PAYLOAD_SIZE = 0xFFFFFFFF

NATIVE_EXTENSION = ".cxmf"
IMPORT_EXTENSIONS = (".gltf", ".glb")
DEFAULT_MODEL_NAME = "unnamed"

# struct prefixes; "=" keeps standard sizes without alignment padding.
BYTE_ORDERS = {
    "native": "=",
    "little": "<",
    "big": ">",
}
