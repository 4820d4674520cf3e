"""Registry for the external asset-import front-end.

The front-end (glTF/GLB parsing, meshlet building) lives outside this
package; hosts register a single import function at start-up.
"""

from __future__ import annotations

from typing import Callable, Optional

from .codec.errors import E_IMPORT, ImporterError, ImporterFault
from .logging import Logger, get_logger
from .model.entities import Model

__all__ = [
    "ImportFunc",
    "set_importer",
    "get_importer",
    "has_importer",
    "ensure_single_mesh",
]

ImportFunc = Callable[[str, Optional[Logger]], Optional[Model]]

_IMPORTER: ImportFunc | None = None


def set_importer(func: ImportFunc | None) -> None:
    """Register (or clear with None) the process-wide import function."""
    global _IMPORTER
    _IMPORTER = func
    get_logger().debug(
        "Importer %s", "cleared" if func is None else f"set to {func!r}"
    )


def get_importer() -> ImportFunc | None:
    return _IMPORTER


def has_importer() -> bool:
    return _IMPORTER is not None


def ensure_single_mesh(node_name: str, mesh_count: int, *, fatal: bool = False) -> None:
    """Reject scene nodes carrying more than one mesh.

    With ``fatal`` the fault escapes the load/save boundary as
    :class:`ImporterFault`; otherwise it is an ordinary failed load.
    """
    if mesh_count <= 1:
        return
    message = f"Node '{node_name}' has {mesh_count} meshes; only one per node is supported"
    if fatal:
        raise ImporterFault(message)
    raise ImporterError(
        code=E_IMPORT,
        message=message,
        context={"node": node_name, "mesh_count": mesh_count},
    )
