"""Read-only inputs for one rendered frame."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..daemon.types import Job
from ..file_tree import TreeRow
from ..navigation import DetailTab, OverlayState, Route
from ..state import ColumnSpec, Snapshot, SortSpec
from ..ui_theme import DEFAULT_THEME, UITheme


@dataclass
class RenderContext:
    snapshot: Snapshot
    route: Route
    overlay: OverlayState
    columns: ColumnSpec
    width: int
    height: int
    pending_sort: SortSpec | None = None
    selected_index: int | None = None
    list_start: int = 0
    selected_job: Job | None = None
    selected_tab: DetailTab = DetailTab.OVERVIEW
    tree_rows: list[TreeRow] = field(default_factory=list)
    tree_selected: str | None = None
    tree_start: int = 0
    theme: UITheme = DEFAULT_THEME
    status_message: str = ""
    download_history: list[int] = field(default_factory=list)
    upload_history: list[int] = field(default_factory=list)
    daemon_unreachable: bool = False

    @property
    def body_rows(self) -> int:
        """Rows available above the status bar."""
        return max(1, self.height - 1)


def scroll_start(selected: int | None, start: int, visible_rows: int, total: int) -> int:
    """Return a window start that keeps ``selected`` inside ``visible_rows``."""
    visible_rows = max(1, visible_rows)
    if selected is not None:
        if selected < start:
            start = selected
        elif selected >= start + visible_rows:
            start = selected - visible_rows + 1
    return max(0, min(start, max(0, total - visible_rows)))


__all__ = ["RenderContext", "scroll_start"]
