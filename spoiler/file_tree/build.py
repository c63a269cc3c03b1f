"""Filesystem walk that keeps only the entries belonging to one job."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from ..daemon.types import JobFile
from .types import NodeKind, TreeNode

logger = logging.getLogger(__name__)


def _parts(relative: str) -> tuple[str, ...]:
    return tuple(part for part in PurePosixPath(relative).parts if part not in ("", "."))


def _is_prefix(shorter: tuple[str, ...], longer: tuple[str, ...]) -> bool:
    return len(shorter) <= len(longer) and longer[: len(shorter)] == shorter


@dataclass
class _WalkContext:
    """Accumulator threaded through the recursion.

    ``excluded`` holds every relative path already rejected by the membership
    test; anything at or below one of them is skipped without a rescan.
    """

    manifest: tuple[tuple[str, ...], ...]
    excluded: set[tuple[str, ...]] = field(default_factory=set)
    visited: set[tuple[str, ...]] = field(default_factory=set)
    # Real paths of the directories currently being walked; a symlink back
    # to one of them is shown as a leaf.
    open_dirs: set[str] = field(default_factory=set)

    def belongs(self, parts: tuple[str, ...]) -> bool:
        return any(_is_prefix(parts, path) or _is_prefix(path, parts) for path in self.manifest)

    def is_excluded(self, parts: tuple[str, ...]) -> bool:
        return any(parts[:depth] in self.excluded for depth in range(1, len(parts) + 1))


@dataclass(frozen=True)
class _Entry:
    name: str
    path: Path
    is_dir: bool


def _scan(directory: Path) -> list[_Entry]:
    """List ``directory`` dirs-first, then by name; raises ``OSError``."""
    entries: list[_Entry] = []
    with os.scandir(directory) as children:
        for child in children:
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            entries.append(_Entry(child.name, Path(child.path), is_dir))
    entries.sort(key=lambda item: (not item.is_dir, item.name))
    return entries


def _walk(directory: Path, prefix: tuple[str, ...], context: _WalkContext) -> list[TreeNode]:
    nodes: list[TreeNode] = []
    for entry in _scan(directory):
        parts = prefix + (entry.name,)
        if parts in context.visited or context.is_excluded(parts):
            continue
        context.visited.add(parts)
        if not context.belongs(parts):
            context.excluded.add(parts)
            continue
        identifier = "/".join(parts)
        if not entry.is_dir:
            nodes.append(TreeNode(entry.name, NodeKind.LEAF, identifier))
            continue
        real = os.path.realpath(entry.path)
        if real in context.open_dirs:
            logger.debug("not following symlink loop at %s", entry.path)
            nodes.append(TreeNode(entry.name, NodeKind.LEAF, identifier))
            continue
        context.open_dirs.add(real)
        try:
            children = _walk(entry.path, parts, context)
        except OSError as exc:
            logger.debug("cannot list %s: %s", entry.path, exc)
            nodes.append(TreeNode(entry.name, NodeKind.LEAF, identifier))
            continue
        finally:
            context.open_dirs.discard(real)
        nodes.append(TreeNode(entry.name, NodeKind.DIR, identifier, tuple(children)))
    return nodes


def build_job_tree(download_dir: str | Path, manifest: Iterable[JobFile | str]) -> list[TreeNode]:
    """Build the collapsible tree of ``download_dir`` entries owned by a job.

    An entry is kept when it is an ancestor or a descendant of some manifest
    path, compared component by component. Kept directories are recursed
    into. An unreadable directory becomes a leaf named after itself; when the
    download dir itself cannot be listed the result is that single leaf.
    """
    root = Path(download_dir).expanduser()
    paths: list[tuple[str, ...]] = []
    for item in manifest:
        name = item.name if isinstance(item, JobFile) else str(item)
        parts = _parts(name)
        if parts:
            paths.append(parts)
    context = _WalkContext(manifest=tuple(paths), open_dirs={os.path.realpath(root)})
    try:
        return _walk(root, (), context)
    except OSError as exc:
        logger.debug("cannot list download dir %s: %s", root, exc)
        label = root.name or str(root)
        return [TreeNode(label, NodeKind.LEAF, label)]


__all__ = ["build_job_tree"]
