"""Header-only inspection of encoded CXMF buffers.

Public functions:
- inspect_bytes(data) -> dict
- inspect_file(path) -> dict
- validate_container(info) -> list[str]

Nothing is inflated; the payload is only measured against the header.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from ..model.entities import ModelKind
from .constants import HEADER_SIZE, MAGIC, PREAMBLE_SIZE
from .header import parse_header
from .version import is_compatible

__all__ = ["inspect_bytes", "inspect_file", "validate_container"]


def inspect_bytes(data: bytes, byte_order: str = "native") -> Dict[str, Any]:
    info: Dict[str, Any] = {"file_size": len(data), "byte_order": byte_order}
    if len(data) < HEADER_SIZE:
        info["header"] = None
        return info
    header = parse_header(data, byte_order)
    available = max(len(data) - PREAMBLE_SIZE, 0)
    info["header"] = {
        "magic": header.magic,
        "magic_ok": header.magic == MAGIC,
        "version": header.version,
        "version_triple": header.version_triple,
        "version_ok": is_compatible(header.version),
        "compressed_size": header.compressed_size,
        "base_size": header.base_size,
        "flags": header.flags,
    }
    info["payload"] = {
        "available": available,
        "sizes_ok": (
            header.base_size != 0
            and header.compressed_size != 0
            and header.compressed_size <= available
        ),
        "trailing": max(available - header.compressed_size, 0),
    }
    if len(data) > HEADER_SIZE:
        tag = data[HEADER_SIZE]
        try:
            kind: str | None = ModelKind(tag).name.lower()
        except ValueError:
            kind = None
        info["kind"] = {"tag": tag, "name": kind}
    else:
        info["kind"] = None
    return info


def inspect_file(path: str | Path, byte_order: str = "native") -> Dict[str, Any]:
    p = Path(path)
    info = inspect_bytes(p.read_bytes(), byte_order)
    info["path"] = str(p)
    return info


def validate_container(info: Dict[str, Any]) -> List[str]:
    """Summarise an :func:`inspect_bytes` result as human-readable issues."""
    issues: List[str] = []
    header = info.get("header")
    if header is None:
        issues.append("File too small for header")
        return issues
    if not header["magic_ok"]:
        issues.append("Header magic mismatch")
    if not info["payload"]["sizes_ok"]:
        issues.append("Size fields inconsistent with file size")
    if not header["version_ok"]:
        major, minor, patch = header["version_triple"]
        issues.append(f"Unsupported version {major}.{minor}.{patch}")
    kind = info.get("kind")
    if kind is None:
        issues.append("Missing model kind tag")
    elif kind["name"] is None:
        issues.append(f"Unknown model kind tag {kind['tag']}")
    return issues
