"""Shared job state: snapshots, ordering, column layout, and the sync thread.

The sync thread writes snapshots into ``StateStore``; the render/input loop
only reads them. Column layout and rate history belong to the loop.
"""

from __future__ import annotations

from .columns import Column, ColumnSpec
from .rates import RateHistory, RateSample, sparkline
from .sorting import DEFAULT_SORT, SortKey, SortSpec, float_order_key, sort_jobs
from .store import EMPTY_SNAPSHOT, Snapshot, StateStore
from .sync import SyncLoop

__all__ = [
    "Column",
    "ColumnSpec",
    "DEFAULT_SORT",
    "EMPTY_SNAPSHOT",
    "RateHistory",
    "RateSample",
    "Snapshot",
    "SortKey",
    "SortSpec",
    "StateStore",
    "SyncLoop",
    "float_order_key",
    "sort_jobs",
    "sparkline",
]
