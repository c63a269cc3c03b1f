"""Keeps one job's file tree current while preserving open/selected state."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..daemon.types import Job
from .build import build_job_tree
from .types import TreeNode, TreeRow, is_under, parent_identifier

TreeSignature = tuple[int, str, tuple[tuple[str, bool], ...]]


def tree_signature(job: Job) -> TreeSignature:
    """Identity of everything a build depends on: job, dir and manifest."""
    return (job.id, job.download_dir, tuple((item.name, item.done) for item in job.files))


class TreeReconciler:
    """Owner of the reconciled tree for the currently selected job.

    The open set and the selection are stored as identifiers, so both are
    re-applied by lookup after every rebuild.
    """

    def __init__(
        self,
        builder: Callable[[str | Path, tuple], list[TreeNode]] = build_job_tree,
    ) -> None:
        self._builder = builder
        self.nodes: list[TreeNode] = []
        self.open: set[str] = set()
        self.selected: str | None = None
        self._signature: TreeSignature | None = None
        self._by_id: dict[str, TreeNode] = {}

    @property
    def signature(self) -> TreeSignature | None:
        return self._signature

    def clear(self) -> None:
        self.nodes = []
        self.open = set()
        self.selected = None
        self._signature = None
        self._by_id = {}

    def reconcile(self, job: Job | None, force: bool = False) -> bool:
        """Rebuild for ``job`` when its signature changed; return whether it did.

        ``None`` clears the tree. Switching to a different job starts with
        every directory closed.
        """
        if job is None:
            had_tree = self._signature is not None
            self.clear()
            return had_tree
        signature = tree_signature(job)
        if not force and signature == self._signature:
            return False
        if self._signature is not None and self._signature[0] != job.id:
            self.open = set()
            self.selected = None
        self.nodes = self._builder(job.download_dir, job.files)
        self._signature = signature
        self._by_id = {}
        self._index(self.nodes)
        self.open = {
            identifier
            for identifier in self.open
            if identifier in self._by_id and self._by_id[identifier].is_dir
        }
        if self.selected not in self._by_id or not self._is_reachable(self.selected):
            rows = self.visible_rows()
            self.selected = rows[0].node.identifier if rows else None
        return True

    def _index(self, nodes: list[TreeNode] | tuple[TreeNode, ...]) -> None:
        for node in nodes:
            self._by_id[node.identifier] = node
            self._index(node.children)

    def _is_reachable(self, identifier: str | None) -> bool:
        if identifier is None:
            return False
        parent = parent_identifier(identifier)
        while parent is not None:
            if parent not in self.open:
                return False
            parent = parent_identifier(parent)
        return True

    def visible_rows(self) -> list[TreeRow]:
        rows: list[TreeRow] = []

        def walk(nodes: tuple[TreeNode, ...] | list[TreeNode], depth: int) -> None:
            for node in nodes:
                is_open = node.is_dir and node.identifier in self.open
                rows.append(TreeRow(node, depth, is_open))
                if is_open:
                    walk(node.children, depth + 1)

        walk(self.nodes, 0)
        return rows

    def selected_index(self) -> int | None:
        for idx, row in enumerate(self.visible_rows()):
            if row.node.identifier == self.selected:
                return idx
        return None

    def selected_node(self) -> TreeNode | None:
        if self.selected is None:
            return None
        return self._by_id.get(self.selected)

    def _move(self, delta: int) -> None:
        rows = self.visible_rows()
        if not rows:
            self.selected = None
            return
        current = self.selected_index()
        target = 0 if current is None else max(0, min(len(rows) - 1, current + delta))
        self.selected = rows[target].node.identifier

    def select_next(self) -> None:
        self._move(1)

    def select_previous(self) -> None:
        self._move(-1)

    def toggle(self) -> None:
        node = self.selected_node()
        if node is None or not node.is_dir:
            return
        if node.identifier in self.open:
            self.open.discard(node.identifier)
        else:
            self.open.add(node.identifier)

    def expand(self) -> None:
        node = self.selected_node()
        if node is not None and node.is_dir:
            self.open.add(node.identifier)

    def collapse(self) -> None:
        """Close the selected dir, or move to the parent of a leaf/closed dir."""
        node = self.selected_node()
        if node is None:
            return
        if node.is_dir and node.identifier in self.open:
            self.open.discard(node.identifier)
            return
        parent = parent_identifier(node.identifier)
        if parent is not None and parent in self._by_id:
            self.selected = parent

    def selected_file_indices(self, job: Job | None) -> list[int]:
        """Manifest indices at or below the selected node."""
        if job is None or self.selected is None:
            return []
        prefix = self.selected
        return [item.index for item in job.files if is_under(item.name.strip("/"), prefix)]


__all__ = ["TreeReconciler", "TreeSignature", "tree_signature"]
