"""Mutable state owned by the single-threaded input/render loop."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from ..file_tree import TreeReconciler
from ..navigation import DetailTab, NavigationStack, OverlayState
from ..state import EMPTY_SNAPSHOT, ColumnSpec, RateHistory, Snapshot

STATUS_MESSAGE_SECONDS = 4.0


@dataclass
class DashboardState:
    navigation: NavigationStack = field(default_factory=NavigationStack)
    overlay: OverlayState = field(default_factory=OverlayState)
    tree: TreeReconciler = field(default_factory=TreeReconciler)
    columns: ColumnSpec = field(default_factory=ColumnSpec.default)
    rates: RateHistory = field(default_factory=RateHistory)
    snapshot: Snapshot = EMPTY_SNAPSHOT
    selected_job_id: int | None = None
    selected_index: int = 0
    list_start: int = 0
    tree_start: int = 0
    selected_tab: DetailTab = DetailTab.OVERVIEW
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True
    daemon_unreachable: bool = False

    def set_status_message(self, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
        """Show ``message`` in the status bar for a short interval."""
        self.status_message = message
        self.status_message_until = time.monotonic() + seconds
        self.dirty = True

    def clear_status_message(self) -> None:
        self.status_message = ""
        self.status_message_until = 0.0


__all__ = ["DashboardState", "STATUS_MESSAGE_SECONDS"]
