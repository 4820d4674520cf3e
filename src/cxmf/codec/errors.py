"""Error definitions for the CXMF codec."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_IO = "E_IO"
E_FORMAT = "E_FORMAT"
E_MAGIC = "E_MAGIC"
E_SIZE = "E_SIZE"
E_KIND = "E_KIND"
E_EXTENSION = "E_EXTENSION"
E_TRUNCATED = "E_TRUNCATED"
E_ENUM = "E_ENUM"
E_INDEX = "E_INDEX"
E_VERSION = "E_VERSION"
E_COMPRESSION = "E_COMPRESSION"
E_IMPORT = "E_IMPORT"
E_VALIDATION = "E_VALIDATION"


@dataclass
class CxmfError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class ModelIOError(CxmfError):
    pass


class FormatError(CxmfError):
    pass


class VersionError(CxmfError):
    pass


class CompressionError(CxmfError):
    pass


class ImporterError(CxmfError):
    pass


class ValidationFailed(CxmfError):
    pass


class ImporterFault(RuntimeError):
    """Import collaborator handed over a structurally impossible model.

    Not a :class:`CxmfError`, so the public load/save functions let it
    propagate.
    """


def format_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> FormatError:
    return FormatError(code=code, message=message, context=context)


def io_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ModelIOError:
    return ModelIOError(code=E_IO, message=message, context=context)


__all__ = [
    "CxmfError",
    "ModelIOError",
    "FormatError",
    "VersionError",
    "CompressionError",
    "ImporterError",
    "ValidationFailed",
    "ImporterFault",
    "format_error",
    "io_error",
    "E_IO",
    "E_FORMAT",
    "E_MAGIC",
    "E_SIZE",
    "E_KIND",
    "E_EXTENSION",
    "E_TRUNCATED",
    "E_ENUM",
    "E_INDEX",
    "E_VERSION",
    "E_COMPRESSION",
    "E_IMPORT",
    "E_VALIDATION",
]
