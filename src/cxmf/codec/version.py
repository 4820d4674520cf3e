"""Packed format version helpers: major (8 bits), minor (8 bits), patch (16 bits)."""

from __future__ import annotations

from typing import Tuple

from .constants import VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH

__all__ = ["make_version", "decode_version", "get_version", "is_compatible"]


def make_version(major: int, minor: int, patch: int) -> int:
    return ((major & 0xFF) << 24) | ((minor & 0xFF) << 16) | (patch & 0xFFFF)


def decode_version(version: int) -> Tuple[int, int, int]:
    return (version >> 24) & 0xFF, (version >> 16) & 0xFF, version & 0xFFFF


def get_version() -> int:
    return make_version(VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)


def is_compatible(version: int) -> bool:
    """Patch-level differences are compatible; major/minor must match."""
    major, minor, _ = decode_version(version)
    return major == VERSION_MAJOR and minor == VERSION_MINOR
