"""Key routing: the open overlay first, then the focused widget.

One key produces at most one dispatch. While an overlay is open only its own
bindings run and every other key, including quit, is swallowed. Commands go
to the ``CommandDispatcher`` and never block; their effect shows up on the
next sync tick.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..daemon import CommandDispatcher, DaemonGateway, FilePriority, Job, JobAction
from ..file_tree import list_torrent_candidates
from ..navigation import DetailTab, Focus, NavEvent, OverlayWidget, Screen
from ..runtime.state import DashboardState
from ..state import SortSpec, StateStore
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = logging.getLogger(__name__)

CandidateLister = Callable[[Path], list[Path]]


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is a printable character rather than a token."""
    return len(key) == 1 and key.isprintable()


class InputRouter:
    """Translate key tokens into state changes and daemon commands."""

    def __init__(
        self,
        state: DashboardState,
        store: StateStore,
        gateway: DaemonGateway,
        dispatcher: CommandDispatcher,
        torrent_dir: Path,
        candidate_lister: CandidateLister = list_torrent_candidates,
    ) -> None:
        self.state = state
        self.store = store
        self.gateway = gateway
        self.dispatcher = dispatcher
        self.torrent_dir = torrent_dir
        self.candidate_lister = candidate_lister
        self._overlay_bindings = self._build_overlay_bindings()
        self._focus_bindings = self._build_focus_bindings()

    # Selection ---------------------------------------------------------------

    def selected_job(self) -> Job | None:
        return self.state.snapshot.job_at(self.state.snapshot.index_of(self.state.selected_job_id))

    def sync_selection(self) -> None:
        """Re-anchor the selection on the current snapshot.

        The selected job is tracked by id so a re-sort keeps it highlighted.
        When it disappears the cursor stays at the same row index, clamped.
        The detail screen falls back to the list when its job is gone.
        """
        state = self.state
        jobs = state.snapshot.jobs
        index = state.snapshot.index_of(state.selected_job_id)
        if index is None:
            if not jobs:
                state.selected_index = 0
                state.selected_job_id = None
            else:
                state.selected_index = max(0, min(len(jobs) - 1, state.selected_index))
                state.selected_job_id = jobs[state.selected_index].id
                if state.navigation.current().screen is Screen.JOB_DETAIL:
                    self._leave_detail()
        else:
            state.selected_index = index
        if not jobs and state.navigation.current().screen is Screen.JOB_DETAIL:
            self._leave_detail()
        self._reconcile_tree()

    def _reconcile_tree(self) -> None:
        if self.state.navigation.current().screen is not Screen.JOB_DETAIL:
            return
        if self.state.tree.reconcile(self.selected_job()):
            self.state.dirty = True

    def _leave_detail(self) -> None:
        navigation = self.state.navigation
        while navigation.pop() is not None:
            pass
        self.state.selected_tab = DetailTab.OVERVIEW

    def _move_job_selection(self, delta: int) -> bool:
        jobs = self.state.snapshot.jobs
        if not jobs:
            return False
        current = self.state.snapshot.index_of(self.state.selected_job_id)
        if current is None:
            current = max(0, min(len(jobs) - 1, self.state.selected_index))
        target = (current + delta) % len(jobs)
        self.state.selected_index = target
        self.state.selected_job_id = jobs[target].id
        return False

    # Dispatch ----------------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Route one key; return ``True`` when the dashboard should quit."""
        if not key:
            return False
        overlay = self.state.overlay
        if overlay.is_open:
            self.state.dirty = True
            if overlay.widget is OverlayWidget.RENAME_INPUT:
                self._handle_rename_key(key)
                return False
            registry = self._overlay_bindings.get(overlay.widget)
            if registry is not None:
                registry.dispatch(key)
            return False
        registry = self._focus_bindings.get(self.state.navigation.current_focus())
        if registry is None:
            return False
        result = registry.dispatch(key)
        if result is None:
            return False
        if result:
            return True
        self.state.dirty = True
        return False

    def _submit(self, label: str, fn: Callable[..., object], *args: object) -> None:
        logger.debug("submitting %s", label)
        self.dispatcher.submit(label, fn, *args)

    def _quit(self) -> bool:
        return True

    # Overlays ----------------------------------------------------------------

    def _build_overlay_bindings(self) -> dict[OverlayWidget, KeyComboRegistry]:
        overlay = self.state.overlay

        def close() -> bool:
            overlay.close()
            return False

        def move_candidate(delta: int) -> Callable[[], bool]:
            def action() -> bool:
                overlay.move_candidate(delta)
                return False

            return action

        def confirm_add() -> bool:
            overlay.confirm_add()
            return False

        def toggle_paused() -> bool:
            overlay.add_paused = not overlay.add_paused
            return False

        def back_to_add() -> bool:
            overlay.back_to_add()
            return False

        def submit_add() -> bool:
            candidate = overlay.selected_candidate()
            paused = overlay.add_paused
            overlay.close()
            if candidate is not None:
                self._submit(f"add {candidate.name}", self.gateway.add, str(candidate), paused)
            return False

        def toggle_delete_files() -> bool:
            overlay.delete_files = not overlay.delete_files
            return False

        def submit_remove() -> bool:
            job_id = overlay.target_job_id
            delete_files = overlay.delete_files
            overlay.close()
            if job_id is not None:
                self._submit(f"remove #{job_id}", self.gateway.remove, job_id, delete_files)
            return False

        def move_column(delta: int) -> Callable[[], bool]:
            def action() -> bool:
                overlay.column_index = max(0, min(len(self.state.columns) - 1, overlay.column_index + delta))
                return False

            return action

        def toggle_column() -> bool:
            self.state.columns = self.state.columns.toggle(overlay.column_index)
            return False

        def swap_column(offset: int) -> Callable[[], bool]:
            def action() -> bool:
                swapped = self.state.columns.swap(overlay.column_index, offset)
                if swapped is not self.state.columns:
                    self.state.columns = swapped
                    overlay.column_index += offset
                return False

            return action

        def sort_by_column() -> bool:
            field = self.state.columns[overlay.column_index].field
            current = self.store.sort()
            chosen = current.toggled() if current.key is field else SortSpec(field)
            self.store.set_sort(chosen.key, chosen.descending)
            direction = "descending" if chosen.descending else "ascending"
            self.state.set_status_message(f"sorting by {field.title} ({direction})")
            return False

        return {
            OverlayWidget.HELP: KeyComboRegistry().register_bindings(
                KeyComboBinding(("ESC", "?", "q"), close),
            ),
            OverlayWidget.ADD_JOB: KeyComboRegistry().register_bindings(
                KeyComboBinding(("UP", "k"), move_candidate(-1)),
                KeyComboBinding(("DOWN", "j"), move_candidate(1)),
                KeyComboBinding(("RIGHT", "l", "ENTER"), confirm_add),
                KeyComboBinding(("ESC",), close),
            ),
            OverlayWidget.ADD_JOB_CONFIRM: KeyComboRegistry().register_bindings(
                KeyComboBinding(("p",), toggle_paused),
                KeyComboBinding(("LEFT", "h"), back_to_add),
                KeyComboBinding(("ENTER",), submit_add),
                KeyComboBinding(("ESC",), close),
            ),
            OverlayWidget.REMOVE_JOB_CONFIRM: KeyComboRegistry().register_bindings(
                KeyComboBinding(("d", " "), toggle_delete_files),
                KeyComboBinding(("ENTER",), submit_remove),
                KeyComboBinding(("ESC",), close),
            ),
            OverlayWidget.COLUMN_PICKER: KeyComboRegistry().register_bindings(
                KeyComboBinding(("UP", "k"), move_column(-1)),
                KeyComboBinding(("DOWN", "j"), move_column(1)),
                KeyComboBinding((" ",), toggle_column),
                KeyComboBinding(("K",), swap_column(-1)),
                KeyComboBinding(("J",), swap_column(1)),
                KeyComboBinding(("s",), sort_by_column),
                KeyComboBinding(("ENTER", "ESC"), close),
            ),
        }

    def _handle_rename_key(self, key: str) -> None:
        overlay = self.state.overlay
        if key == "ESC":
            overlay.close()
        elif key == "ENTER":
            job_id = overlay.target_job_id
            new_name = overlay.buffer.strip()
            overlay.close()
            if job_id is not None and new_name:
                self._submit(f"rename #{job_id}", self.gateway.rename, job_id, new_name)
        elif key == "BACKSPACE":
            overlay.buffer = overlay.buffer[:-1]
        elif key == "CTRL_U":
            overlay.buffer = ""
        elif is_text_key(key):
            overlay.buffer += key

    # Normal mode -------------------------------------------------------------

    def _build_focus_bindings(self) -> dict[Focus, KeyComboRegistry]:
        return {
            Focus.LIST: self._build_list_bindings(),
            Focus.TABS: self._build_tab_bindings(),
            Focus.FILE_TREE: self._build_file_tree_bindings(),
        }

    def _build_list_bindings(self) -> KeyComboRegistry:
        state = self.state

        def move(delta: int) -> Callable[[], bool]:
            return lambda: self._move_job_selection(delta)

        def open_detail() -> bool:
            if self.selected_job() is None:
                return False
            if state.navigation.dispatch(NavEvent.OPEN_DETAIL):
                state.selected_tab = DetailTab.OVERVIEW
                state.tree_start = 0
                self._reconcile_tree()
            return False

        def toggle_paused() -> bool:
            job = self.selected_job()
            if job is None:
                return False
            action = JobAction.START if job.is_stopped else JobAction.STOP
            self._submit(f"{action.value} {job.name}", self.gateway.apply, action, [job.id])
            return False

        def verify() -> bool:
            job = self.selected_job()
            if job is not None:
                self._submit(f"verify {job.name}", self.gateway.apply, JobAction.VERIFY, [job.id])
            return False

        def open_rename() -> bool:
            job = self.selected_job()
            if job is not None:
                state.overlay.open_rename(job.id)
            return False

        def open_add() -> bool:
            state.overlay.open_add(self.candidate_lister(self.torrent_dir))
            return False

        def open_remove() -> bool:
            job = self.selected_job()
            if job is not None:
                state.overlay.open_remove(job.id)
            return False

        def open_help() -> bool:
            state.overlay.open_help()
            return False

        def open_columns() -> bool:
            state.overlay.open_column_picker()
            return False

        return KeyComboRegistry().register_bindings(
            KeyComboBinding(("UP", "k"), move(-1)),
            KeyComboBinding(("DOWN", "j"), move(1)),
            KeyComboBinding(("RIGHT", "l", "ENTER"), open_detail),
            KeyComboBinding(("p",), toggle_paused),
            KeyComboBinding(("r",), open_rename),
            KeyComboBinding(("a",), open_add),
            KeyComboBinding(("d", "DELETE"), open_remove),
            KeyComboBinding(("v",), verify),
            KeyComboBinding(("?",), open_help),
            KeyComboBinding(("c",), open_columns),
            KeyComboBinding(("q",), self._quit),
        )

    def _build_tab_bindings(self) -> KeyComboRegistry:
        state = self.state

        def previous_tab() -> bool:
            target = state.selected_tab.previous()
            if target is None:
                back()
            else:
                state.selected_tab = target
            return False

        def next_tab() -> bool:
            state.selected_tab = state.selected_tab.next()
            return False

        def focus_tree() -> bool:
            if state.selected_tab is DetailTab.FILES:
                state.navigation.dispatch(NavEvent.FOCUS_FILE_TREE)
            return False

        def back() -> bool:
            if state.navigation.dispatch(NavEvent.BACK):
                state.selected_tab = DetailTab.OVERVIEW
            return False

        return KeyComboRegistry().register_bindings(
            KeyComboBinding(("LEFT", "h"), previous_tab),
            KeyComboBinding(("RIGHT", "l", "TAB"), next_tab),
            KeyComboBinding(("DOWN", "j"), focus_tree),
            KeyComboBinding(("ESC", "BACKSPACE"), back),
            KeyComboBinding(("q",), self._quit),
        )

    def _build_file_tree_bindings(self) -> KeyComboRegistry:
        state = self.state
        tree = state.tree

        def run(action: Callable[[], None]) -> Callable[[], bool]:
            def wrapped() -> bool:
                action()
                return False

            return wrapped

        def change_priority(raise_it: bool) -> Callable[[], bool]:
            def action() -> bool:
                job = self.selected_job()
                indices = tree.selected_file_indices(job)
                if job is None or not indices:
                    return False
                by_index = {item.index: item for item in job.files}
                current = by_index[indices[0]].priority if indices[0] in by_index else FilePriority.NORMAL
                target = current.raised() if raise_it else current.lowered()
                self._submit(
                    f"priority {target.name.lower()} #{job.id}",
                    self.gateway.set_file_priority,
                    job.id,
                    indices,
                    target,
                )
                return False

            return action

        def back_to_tabs() -> bool:
            state.navigation.dispatch(NavEvent.BACK)
            return False

        return KeyComboRegistry().register_bindings(
            KeyComboBinding(("UP", "k"), run(tree.select_previous)),
            KeyComboBinding(("DOWN", "j"), run(tree.select_next)),
            KeyComboBinding(("RIGHT", "l"), run(tree.expand)),
            KeyComboBinding(("LEFT", "h"), run(tree.collapse)),
            KeyComboBinding(("ENTER", " "), run(tree.toggle)),
            KeyComboBinding(("+",), change_priority(True)),
            KeyComboBinding(("-",), change_priority(False)),
            KeyComboBinding(("ESC",), back_to_tabs),
            KeyComboBinding(("q",), self._quit),
        )


__all__ = ["CandidateLister", "InputRouter", "is_text_key"]
