"""Tree datatypes shared by the builder, the reconciler and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    DIR = "dir"
    LEAF = "leaf"


@dataclass(frozen=True)
class TreeNode:
    """One file or directory of a job's reconciled tree.

    ``identifier`` is the entry's path relative to the job's download dir in
    POSIX form, so it survives rebuilds that reorder or re-create nodes.
    """

    display_name: str
    kind: NodeKind
    identifier: str
    children: tuple[TreeNode, ...] = ()

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIR


@dataclass(frozen=True)
class TreeRow:
    """One visible row after flattening open directories."""

    node: TreeNode
    depth: int
    is_open: bool = False


def parent_identifier(identifier: str) -> str | None:
    head, sep, _tail = identifier.rpartition("/")
    if not sep:
        return None
    return head


def is_under(identifier: str, ancestor: str) -> bool:
    """Return whether ``identifier`` equals ``ancestor`` or sits below it."""
    return identifier == ancestor or identifier.startswith(ancestor + "/")


__all__ = ["NodeKind", "TreeNode", "TreeRow", "is_under", "parent_identifier"]
