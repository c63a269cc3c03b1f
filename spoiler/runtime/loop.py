"""Main interactive event loop for the dashboard.

Each iteration picks up a newly published snapshot, surfaces command
failures, renders when something changed, then waits one tick for a key.
A key is routed exactly once; a tick only lets the loop notice new state.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..daemon import CommandDispatcher
from ..input import InputRouter, read_key
from ..render import RenderContext, render_frame, scroll_start
from ..state import StateStore
from ..ui_theme import DEFAULT_THEME, UITheme
from .state import DashboardState
from .terminal import TerminalController

DEFAULT_TICK_SECONDS = 0.2


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    tick_seconds: float = DEFAULT_TICK_SECONDS


def build_render_context(
    state: DashboardState,
    store: StateStore,
    router: InputRouter,
    columns: int,
    lines: int,
    theme: UITheme = DEFAULT_THEME,
) -> RenderContext:
    return RenderContext(
        snapshot=state.snapshot,
        route=state.navigation.current(),
        overlay=state.overlay,
        columns=state.columns,
        width=columns,
        height=lines,
        pending_sort=store.sort(),
        selected_index=state.snapshot.index_of(state.selected_job_id),
        list_start=state.list_start,
        selected_job=router.selected_job(),
        selected_tab=state.selected_tab,
        tree_rows=state.tree.visible_rows(),
        tree_selected=state.tree.selected,
        tree_start=state.tree_start,
        theme=theme,
        status_message=state.status_message,
        download_history=state.rates.downloads(),
        upload_history=state.rates.uploads(),
        daemon_unreachable=state.daemon_unreachable,
    )


def absorb_snapshot(state: DashboardState, store: StateStore, router: InputRouter) -> bool:
    """Adopt the store's snapshot when its generation is new."""
    snapshot = store.read()
    if snapshot.generation == state.snapshot.generation:
        return False
    state.snapshot = snapshot
    state.rates.append(snapshot.stats)
    router.sync_selection()
    state.dirty = True
    return True


def run_main_loop(
    state: DashboardState,
    router: InputRouter,
    store: StateStore,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    *,
    dispatcher: CommandDispatcher | None = None,
    theme: UITheme = DEFAULT_THEME,
    is_failing: Callable[[], bool] | None = None,
) -> None:
    """Run the interactive loop until the quit key is routed."""
    tick_ms = max(1, int(timing.tick_seconds * 1000))
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            now = time.monotonic()
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                state.dirty = True
            absorb_snapshot(state, store, router)

            if dispatcher is not None:
                failures = dispatcher.drain_failures()
                if failures:
                    latest = failures[-1]
                    state.set_status_message(f"{latest.label} failed: {latest.message}")

            if is_failing is not None:
                failing = bool(is_failing())
                if failing != state.daemon_unreachable:
                    state.daemon_unreachable = failing
                    state.dirty = True

            if state.status_message and now >= state.status_message_until:
                state.clear_status_message()
                state.dirty = True

            visible_rows = max(1, term.lines - 2)
            prev_list_start = state.list_start
            state.list_start = scroll_start(
                state.snapshot.index_of(state.selected_job_id),
                state.list_start,
                visible_rows,
                len(state.snapshot.jobs),
            )
            if state.list_start != prev_list_start:
                state.dirty = True

            prev_tree_start = state.tree_start
            state.tree_start = scroll_start(
                state.tree.selected_index(),
                state.tree_start,
                max(1, term.lines - 3),
                len(state.tree.visible_rows()),
            )
            if state.tree_start != prev_tree_start:
                state.dirty = True

            if state.dirty:
                render_frame(
                    build_render_context(state, store, router, term.columns, term.lines, theme)
                )
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=tick_ms)
            except KeyboardInterrupt:
                # Ctrl+C in raw mode arrives as a byte; a stray SIGINT must not exit.
                continue
            if key == "":
                continue
            if router.handle_key(key):
                break


__all__ = [
    "DEFAULT_TICK_SECONDS",
    "RuntimeLoopTiming",
    "absorb_snapshot",
    "build_render_context",
    "run_main_loop",
]
