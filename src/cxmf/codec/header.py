"""Container preamble: fixed header, version gate and model-kind tag."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple

from ..model.entities import ModelKind
from .constants import (
    HEADER_SIZE,
    MAGIC,
    PREAMBLE_SIZE,
    VERSION_MAJOR,
    VERSION_MINOR,
)
from .errors import (
    E_FORMAT,
    E_KIND,
    E_MAGIC,
    E_SIZE,
    E_TRUNCATED,
    E_VERSION,
    VersionError,
    format_error,
)
from .fields import byte_order_prefix
from .version import decode_version, is_compatible

__all__ = [
    "Header",
    "pack_preamble",
    "parse_header",
    "read_preamble",
]

_HEADER_FMT = "IIIII"


@dataclass(slots=True)
class Header:
    magic: int
    version: int
    compressed_size: int
    base_size: int
    flags: int

    def pack(self, byte_order: str = "native") -> bytes:
        try:
            data = struct.pack(
                byte_order_prefix(byte_order) + _HEADER_FMT,
                self.magic,
                self.version,
                self.compressed_size,
                self.base_size,
                self.flags,
            )
        except struct.error as e:
            raise format_error(E_FORMAT, f"Header field out of range: {e}") from e
        if len(data) != HEADER_SIZE:  # pragma: no cover
            raise format_error(E_SIZE, f"Header size mismatch: {len(data)}")
        return data

    @property
    def version_triple(self) -> Tuple[int, int, int]:
        return decode_version(self.version)


def pack_preamble(header: Header, kind: ModelKind, byte_order: str = "native") -> bytes:
    return header.pack(byte_order) + bytes([int(kind)])


def parse_header(data: bytes | memoryview, byte_order: str = "native") -> Header:
    """Unpack the fixed header without validating any field."""
    if len(data) < HEADER_SIZE:
        raise format_error(
            E_TRUNCATED, f"Buffer too small for header: {len(data)}<{HEADER_SIZE}"
        )
    fields = struct.unpack_from(byte_order_prefix(byte_order) + _HEADER_FMT, data, 0)
    return Header(*fields)


def read_preamble(
    data: bytes | memoryview, byte_order: str = "native"
) -> Tuple[Header, ModelKind]:
    """Validate header and kind tag, short-circuiting on the first failure.

    Order: buffer length, magic, size fields, version (major/minor only),
    kind tag. Nothing is decompressed here.
    """
    if len(data) <= PREAMBLE_SIZE:
        raise format_error(
            E_TRUNCATED,
            f"Buffer too small: {len(data)} bytes (need more than {PREAMBLE_SIZE})",
        )
    header = parse_header(data, byte_order)
    if header.magic != MAGIC:
        raise format_error(E_MAGIC, "Invalid model magic!")
    available = len(data) - PREAMBLE_SIZE
    if (
        header.base_size == 0
        or header.compressed_size == 0
        or header.compressed_size > available
    ):
        raise format_error(
            E_SIZE,
            "Invalid model size!",
            {
                "base_size": header.base_size,
                "compressed_size": header.compressed_size,
                "available": available,
            },
        )
    if not is_compatible(header.version):
        major, minor, patch = header.version_triple
        raise VersionError(
            code=E_VERSION,
            message=(
                f"Incorrect model version {major}.{minor}.{patch} | "
                f"Supported: {VERSION_MAJOR}.{VERSION_MINOR}.X"
            ),
        )
    tag = data[HEADER_SIZE]
    try:
        kind = ModelKind(tag)
    except ValueError:
        raise format_error(E_KIND, "Invalid model type!", {"tag": tag}) from None
    return header, kind
