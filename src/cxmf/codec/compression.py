"""Compression framing for the serialized model payload.

Both directions work on the whole in-memory buffer in one pass with a fresh
zlib session per call.
"""

from __future__ import annotations

import zlib
from enum import Enum

from ..logging import get_logger
from .errors import E_COMPRESSION, CompressionError

__all__ = ["CompressionLevel", "compress_payload", "decompress_payload"]


class CompressionLevel(Enum):
    NONE = "none"  # stored blocks, no compression
    DEFAULT = "default"
    SPEED = "speed"  # max speed
    MIN_SIZE = "min_size"  # max compression

    @property
    def zlib_level(self) -> int:
        return _ZLIB_LEVELS[self]

    @classmethod
    def parse(cls, value: "CompressionLevel | str") -> "CompressionLevel":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown compression level '{value}' "
                f"(expected one of {[m.value for m in cls]})"
            ) from None


_ZLIB_LEVELS = {
    CompressionLevel.NONE: zlib.Z_NO_COMPRESSION,
    CompressionLevel.DEFAULT: zlib.Z_DEFAULT_COMPRESSION,
    CompressionLevel.SPEED: zlib.Z_BEST_SPEED,
    CompressionLevel.MIN_SIZE: zlib.Z_BEST_COMPRESSION,
}


def compress_payload(
    data: bytes, level: CompressionLevel = CompressionLevel.DEFAULT
) -> bytes:
    try:
        comp = zlib.compressobj(level.zlib_level)
        out = comp.compress(data) + comp.flush(zlib.Z_FINISH)
    except zlib.error as e:
        raise CompressionError(
            code=E_COMPRESSION, message=f"ERROR: deflate ({e})"
        ) from e
    get_logger().debug(
        "Deflated payload %d -> %d bytes (level=%s)",
        len(data),
        len(out),
        level.value,
    )
    return out


def decompress_payload(data: bytes | memoryview, base_size: int) -> bytes:
    """Inflate ``data`` into a ``base_size`` buffer.

    The stream must end within ``base_size`` output bytes; running out of
    input before the stream end, or producing more than ``base_size`` bytes,
    is a :class:`CompressionError`. A stream that ends early leaves the rest
    of the buffer zero-filled.
    """
    decomp = zlib.decompressobj()
    try:
        out = decomp.decompress(data, base_size)
        if not decomp.eof and decomp.unconsumed_tail:
            # Output is full; only the stream end may be left.
            extra = decomp.decompress(decomp.unconsumed_tail, 1)
            if extra:
                raise CompressionError(
                    code=E_COMPRESSION,
                    message=f"ERROR: inflate (output exceeds {base_size} bytes)",
                )
    except zlib.error as e:
        raise CompressionError(
            code=E_COMPRESSION, message=f"ERROR: inflate ({e})"
        ) from e
    if not decomp.eof:
        raise CompressionError(
            code=E_COMPRESSION,
            message="ERROR: inflate (stream ended before completion)",
            context={"produced": len(out), "expected": base_size},
        )
    if len(out) < base_size:
        get_logger().debug(
            "Inflated %d of %d declared bytes; zero-filling the rest",
            len(out),
            base_size,
        )
        out += bytes(base_size - len(out))
    return out
