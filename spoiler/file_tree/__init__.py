"""Per-job file trees.

This package contains non-UI tree primitives:
- node/row datatypes keyed by relative-path identifiers
- the manifest-scoped filesystem walk
- the reconciler that keeps open/selected state across rebuilds
- the torrent-file listing behind the add-job picker
"""

from __future__ import annotations

from .build import build_job_tree
from .candidates import TORRENT_SUFFIX, list_torrent_candidates
from .reconciler import TreeReconciler, TreeSignature, tree_signature
from .types import NodeKind, TreeNode, TreeRow, is_under, parent_identifier

__all__ = [
    "NodeKind",
    "TORRENT_SUFFIX",
    "TreeNode",
    "TreeReconciler",
    "TreeRow",
    "TreeSignature",
    "build_job_tree",
    "is_under",
    "list_torrent_candidates",
    "parent_identifier",
    "tree_signature",
]
