"""Primitive field codec: fixed-size scalars, arrays, enums, text.

Values are written back to back with no alignment padding, in the byte order
selected by the writer/reader (the producing process's native order unless
configured otherwise).
"""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Type, TypeVar

from .constants import BYTE_ORDERS, INVALID_INDEX
from .errors import E_ENUM, E_FORMAT, E_INDEX, E_SIZE, E_TRUNCATED, format_error

__all__ = ["FieldWriter", "FieldReader", "byte_order_prefix"]

E = TypeVar("E", bound=IntEnum)

_TEXT_ENCODING = "utf-8"
_TEXT_ERRORS = "surrogateescape"


def byte_order_prefix(byte_order: str) -> str:
    try:
        return BYTE_ORDERS[byte_order]
    except KeyError:
        raise ValueError(
            f"Unknown byte order '{byte_order}' (expected one of {sorted(BYTE_ORDERS)})"
        ) from None


def _index_to_wire(value: Optional[int], label: str) -> int:
    if value is None:
        return INVALID_INDEX
    if not isinstance(value, int) or value < 0 or value >= INVALID_INDEX:
        raise format_error(
            E_INDEX,
            f"{label} must be None or in [0, 0xFFFFFFFF), got {value!r}",
        )
    return value


class FieldWriter:
    def __init__(self, byte_order: str = "native") -> None:
        self.prefix = byte_order_prefix(byte_order)
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def _pack(self, fmt: str, *values) -> None:
        try:
            self._buf += struct.pack(self.prefix + fmt, *values)
        except struct.error as e:
            raise format_error(
                E_FORMAT, f"Cannot encode {values!r} as '{fmt}': {e}"
            ) from e

    def u8(self, value: int) -> None:
        self._pack("B", value)

    def i8(self, value: int) -> None:
        self._pack("b", value)

    def u32(self, value: int) -> None:
        self._pack("I", value)

    def f32(self, value: float) -> None:
        self._pack("f", value)

    def boolean(self, value: bool) -> None:
        self._pack("?", bool(value))

    def f32_array(self, values: Sequence[float], count: int) -> None:
        if len(values) != count:
            raise format_error(
                E_FORMAT, f"Expected {count} floats, got {len(values)}"
            )
        self._pack(f"{count}f", *values)

    def u32_array(self, values: Sequence[int]) -> None:
        if values:
            self._pack(f"{len(values)}I", *values)

    def raw(self, data: bytes) -> None:
        self._buf += data

    def enum(self, value: IntEnum | int) -> None:
        self.i8(int(value))

    def index(self, value: Optional[int], label: str = "index") -> None:
        self.u32(_index_to_wire(value, label))

    def indices(self, values: Iterable[Optional[int]], label: str) -> None:
        for v in values:
            self.index(v, label)

    @staticmethod
    def encode_text(text: str) -> bytes:
        return text.encode(_TEXT_ENCODING, _TEXT_ERRORS)

    def text(self, text: str) -> None:
        data = self.encode_text(text)
        self.u32(len(data))
        self.raw(data)


class FieldReader:
    def __init__(
        self, data: bytes | bytearray | memoryview, byte_order: str = "native"
    ) -> None:
        self.prefix = byte_order_prefix(byte_order)
        self._data = memoryview(data)
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def _take(self, size: int, label: str) -> memoryview:
        if size < 0 or size > self.remaining:
            raise format_error(
                E_TRUNCATED,
                f"Out of range read for {label}: {self.offset}+{size}>{len(self._data)}",
            )
        start = self.offset
        self.offset += size
        return self._data[start : self.offset]

    def _unpack(self, fmt: str, label: str) -> tuple:
        full = self.prefix + fmt
        chunk = self._take(struct.calcsize(full), label)
        return struct.unpack(full, chunk)

    def u8(self, label: str = "u8") -> int:
        return self._unpack("B", label)[0]

    def i8(self, label: str = "i8") -> int:
        return self._unpack("b", label)[0]

    def u32(self, label: str = "u32") -> int:
        return self._unpack("I", label)[0]

    def f32(self, label: str = "f32") -> float:
        return self._unpack("f", label)[0]

    def boolean(self, label: str = "bool") -> bool:
        return self._unpack("?", label)[0]

    def f32_array(self, count: int, label: str = "f32[]") -> List[float]:
        return list(self._unpack(f"{count}f", label))

    def u32_array(self, count: int, label: str = "u32[]") -> List[int]:
        if count == 0:
            return []
        return list(self._unpack(f"{count}I", label))

    def raw(self, size: int, label: str = "bytes") -> bytes:
        return bytes(self._take(size, label))

    def enum(self, enum_type: Type[E], label: str = "enum") -> E:
        code = self.i8(label)
        try:
            return enum_type(code)
        except ValueError:
            raise format_error(
                E_ENUM, f"Unknown {enum_type.__name__} code {code} for {label}"
            ) from None

    def index(self, label: str = "index") -> Optional[int]:
        value = self.u32(label)
        return None if value == INVALID_INDEX else value

    def indices(self, count: int, label: str = "index[]") -> List[Optional[int]]:
        return [self.index(label) for _ in range(count)]

    def text_bytes(self, size: int, label: str = "text") -> str:
        return self.raw(size, label).decode(_TEXT_ENCODING, _TEXT_ERRORS)

    def text(self, label: str = "text") -> str:
        size = self.u32(label + ".length")
        return self.text_bytes(size, label)

    def ensure_available(self, count: int, record_size: int, label: str) -> None:
        """Reject a declared element count that cannot fit in what remains."""
        if count * record_size > self.remaining:
            raise format_error(
                E_SIZE,
                f"Declared {label} count {count} exceeds remaining payload "
                f"({count}*{record_size}>{self.remaining})",
            )
