"""IO helpers: bounded file reads and ``OutputStream`` adapters."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from ..codec.errors import io_error
from ..logging import get_logger

__all__ = [
    "OutputStream",
    "BinaryOutputStream",
    "BufferOutputStream",
    "read_file_bytes",
]


@runtime_checkable
class OutputStream(Protocol):
    """Byte sink; ``write`` returns False when the bytes could not be stored."""

    def write(self, data: bytes) -> bool: ...


class BinaryOutputStream:
    """Adapts a binary file object to :class:`OutputStream`."""

    def __init__(self, fileobj: BinaryIO) -> None:
        self._file = fileobj

    def write(self, data: bytes) -> bool:
        try:
            written = self._file.write(data)
        except OSError as e:
            get_logger().debug("Stream write failed: %s", e)
            return False
        # Raw (unbuffered) files may report a short write.
        return written is None or written == len(data)


class BufferOutputStream:
    """Collects written bytes in memory."""

    def __init__(self) -> None:
        self.buffer = bytearray()

    def write(self, data: bytes) -> bool:
        self.buffer += data
        return True

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


def read_file_bytes(path: Path, max_size: int = 1024 * 1024 * 1024) -> bytes:
    try:
        if not path.is_file():
            raise io_error(f"Can't open '{path}'", {"path": str(path)})
        size = path.stat().st_size
        if size > max_size:
            raise io_error(
                f"File too large: {size}>{max_size}",
                {"path": str(path), "size": size},
            )
        return path.read_bytes()
    except OSError as e:
        raise io_error(f"Can't open '{path}'", {"path": str(path)}) from e
