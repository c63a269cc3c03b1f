"""Modal overlay state layered above the navigation stack.

Only the input/render loop touches an ``OverlayState``. Every method keeps
one invariant: ``input_mode`` is ``EDITING`` only while the rename prompt is
the open widget.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class OverlayWidget(Enum):
    NONE = "none"
    HELP = "help"
    RENAME_INPUT = "rename_input"
    ADD_JOB = "add_job"
    ADD_JOB_CONFIRM = "add_job_confirm"
    REMOVE_JOB_CONFIRM = "remove_job_confirm"
    COLUMN_PICKER = "column_picker"


class InputMode(Enum):
    NORMAL = "normal"
    EDITING = "editing"


@dataclass
class OverlayState:
    widget: OverlayWidget = OverlayWidget.NONE
    input_mode: InputMode = InputMode.NORMAL
    buffer: str = ""
    candidates: list[Path] = field(default_factory=list)
    candidate_index: int = 0
    add_paused: bool = False
    delete_files: bool = False
    column_index: int = 0
    target_job_id: int | None = None

    @property
    def is_open(self) -> bool:
        return self.widget is not OverlayWidget.NONE

    def _switch(self, widget: OverlayWidget) -> None:
        self.widget = widget
        self.input_mode = InputMode.EDITING if widget is OverlayWidget.RENAME_INPUT else InputMode.NORMAL

    def open_help(self) -> None:
        self.close()
        self._switch(OverlayWidget.HELP)

    def open_rename(self, job_id: int) -> None:
        """Open the rename prompt for ``job_id`` with an empty buffer."""
        self.close()
        self.target_job_id = job_id
        self._switch(OverlayWidget.RENAME_INPUT)

    def open_add(self, candidates: list[Path]) -> None:
        self.close()
        self.candidates = list(candidates)
        self._switch(OverlayWidget.ADD_JOB)

    def selected_candidate(self) -> Path | None:
        if not (0 <= self.candidate_index < len(self.candidates)):
            return None
        return self.candidates[self.candidate_index]

    def move_candidate(self, delta: int) -> None:
        if not self.candidates:
            self.candidate_index = 0
            return
        self.candidate_index = max(0, min(len(self.candidates) - 1, self.candidate_index + delta))

    def confirm_add(self) -> bool:
        """Advance from the picker to the confirm step when a candidate exists."""
        if self.widget is not OverlayWidget.ADD_JOB or self.selected_candidate() is None:
            return False
        self._switch(OverlayWidget.ADD_JOB_CONFIRM)
        return True

    def back_to_add(self) -> None:
        if self.widget is OverlayWidget.ADD_JOB_CONFIRM:
            self._switch(OverlayWidget.ADD_JOB)

    def open_remove(self, job_id: int) -> None:
        self.close()
        self.target_job_id = job_id
        self._switch(OverlayWidget.REMOVE_JOB_CONFIRM)

    def open_column_picker(self) -> None:
        self.close()
        self._switch(OverlayWidget.COLUMN_PICKER)

    def close(self) -> None:
        """Drop the overlay and every piece of its transient state."""
        self.widget = OverlayWidget.NONE
        self.input_mode = InputMode.NORMAL
        self.buffer = ""
        self.candidates = []
        self.candidate_index = 0
        self.add_paused = False
        self.delete_files = False
        self.column_index = 0
        self.target_job_id = None


__all__ = ["InputMode", "OverlayState", "OverlayWidget"]
