"""Codec options and their JSON/YAML loader."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .codec.compression import CompressionLevel
from .codec.constants import BYTE_ORDERS, DEFAULT_MODEL_NAME, NATIVE_EXTENSION

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

__all__ = ["CodecOptions", "load_options", "options_from_dict"]


@dataclass(slots=True)
class CodecOptions:
    compression: CompressionLevel = CompressionLevel.DEFAULT
    # "native" is the writing host's order; "little"/"big" pin it.
    byte_order: str = "native"
    validate_on_save: bool = False
    default_name: str = DEFAULT_MODEL_NAME
    extension: str = NATIVE_EXTENSION
    # Upper bound for files read by load_from_file (bytes)
    max_file_size: int = 1024 * 1024 * 1024
    # Importer handing over a node with several meshes: raise ImporterFault
    # when True, report a failed load when False.
    fatal_import_faults: bool = False

    def __post_init__(self) -> None:
        self.compression = CompressionLevel.parse(self.compression)
        if self.byte_order not in BYTE_ORDERS:
            raise ValueError(
                f"byte_order must be one of {sorted(BYTE_ORDERS)}, got '{self.byte_order}'"
            )
        if not self.extension.startswith("."):
            raise ValueError(f"extension must start with '.', got '{self.extension}'")
        if self.max_file_size <= 0:
            raise ValueError("max_file_size must be positive")


def options_from_dict(data: dict[str, Any]) -> CodecOptions:
    known = {f.name for f in fields(CodecOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown codec option(s): {', '.join(unknown)}")
    return CodecOptions(**data)


def load_options(path: str | Path) -> CodecOptions:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("YAML options provided but PyYAML not installed")
        data: Any = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Root of options file must be an object")
    return options_from_dict(data)
