"""Parent-index forest helpers for mesh nodes and bones.

Decoded files are not cycle-checked, so every walk here is iterative and
guarded by a visited set.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence

from ..codec.errors import E_FORMAT, E_INDEX, format_error
from .entities import Mat4x4, MeshNode

__all__ = ["roots", "children", "ancestors", "find_cycles", "world_transforms"]


class _HasParent(Protocol):
    parent_index: Optional[int]


def roots(items: Sequence[_HasParent]) -> List[int]:
    return [i for i, item in enumerate(items) if item.parent_index is None]


def children(items: Sequence[_HasParent]) -> Dict[int, List[int]]:
    out: Dict[int, List[int]] = {}
    for i, item in enumerate(items):
        if item.parent_index is not None:
            out.setdefault(item.parent_index, []).append(i)
    return out


def ancestors(items: Sequence[_HasParent], index: int) -> List[int]:
    """Return the parent chain of ``index``, nearest first."""
    chain: List[int] = []
    seen = {index}
    current = items[index].parent_index
    while current is not None:
        if current >= len(items):
            raise format_error(
                E_INDEX,
                f"Parent index {current} out of range ({len(items)} entries)",
                {"index": index},
            )
        if current in seen:
            raise format_error(
                E_FORMAT,
                f"Parent cycle detected through index {current}",
                {"index": index},
            )
        seen.add(current)
        chain.append(current)
        current = items[current].parent_index
    return chain


def find_cycles(items: Sequence[_HasParent]) -> List[List[int]]:
    """Find every parent cycle; each cycle is listed once, in walk order."""
    state = [0] * len(items)  # 0 unvisited, 1 on current walk, 2 done
    cycles: List[List[int]] = []
    for start in range(len(items)):
        if state[start]:
            continue
        path: List[int] = []
        current: Optional[int] = start
        while current is not None and current < len(items) and state[current] == 0:
            state[current] = 1
            path.append(current)
            current = items[current].parent_index
        if current is not None and current < len(items) and state[current] == 1:
            cycles.append(path[path.index(current) :])
        for i in path:
            state[i] = 2
    return cycles


def world_transforms(nodes: Sequence[MeshNode]) -> List[Mat4x4]:
    """Compose each node's local transform with its ancestors'."""
    world: List[Optional[Mat4x4]] = [None] * len(nodes)
    for i in range(len(nodes)):
        if world[i] is not None:
            continue
        chain = [i] + ancestors(nodes, i)
        # Walk down from the outermost ancestor not yet resolved.
        pending = []
        for idx in chain:
            if world[idx] is not None:
                break
            pending.append(idx)
        for idx in reversed(pending):
            parent = nodes[idx].parent_index
            local = nodes[idx].local_transform
            world[idx] = local if parent is None else world[parent] @ local  # type: ignore[operator]
    return world  # type: ignore[return-value]
