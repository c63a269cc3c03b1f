from __future__ import annotations

import unittest
from pathlib import Path

from spoiler.navigation import InputMode, OverlayState, OverlayWidget


class OverlayStateTests(unittest.TestCase):
    def _assert_mode_invariant(self, overlay: OverlayState) -> None:
        editing = overlay.input_mode is InputMode.EDITING
        self.assertEqual(editing, overlay.widget is OverlayWidget.RENAME_INPUT)

    def test_starts_closed(self) -> None:
        overlay = OverlayState()
        self.assertFalse(overlay.is_open)
        self._assert_mode_invariant(overlay)

    def test_editing_only_while_renaming(self) -> None:
        overlay = OverlayState()
        overlay.open_rename(4)
        self.assertEqual(overlay.target_job_id, 4)
        self.assertEqual(overlay.buffer, "")
        self._assert_mode_invariant(overlay)

        overlay.open_help()
        self._assert_mode_invariant(overlay)
        self.assertIsNone(overlay.target_job_id)

        overlay.open_rename(4)
        overlay.buffer = "draft"
        overlay.close()
        self._assert_mode_invariant(overlay)
        self.assertEqual(overlay.buffer, "")

    def test_add_flow_requires_candidate(self) -> None:
        overlay = OverlayState()
        overlay.open_add([])
        self.assertFalse(overlay.confirm_add())
        self.assertIs(overlay.widget, OverlayWidget.ADD_JOB)

        overlay.open_add([Path("a.torrent"), Path("b.torrent")])
        overlay.move_candidate(5)
        self.assertEqual(overlay.selected_candidate(), Path("b.torrent"))
        overlay.move_candidate(-9)
        self.assertEqual(overlay.selected_candidate(), Path("a.torrent"))

        self.assertTrue(overlay.confirm_add())
        self.assertIs(overlay.widget, OverlayWidget.ADD_JOB_CONFIRM)
        self.assertFalse(overlay.add_paused)
        overlay.back_to_add()
        self.assertIs(overlay.widget, OverlayWidget.ADD_JOB)
        self._assert_mode_invariant(overlay)

    def test_close_resets_transient_state(self) -> None:
        overlay = OverlayState()
        overlay.open_remove(9)
        overlay.delete_files = True
        overlay.close()
        self.assertEqual(overlay, OverlayState())

    def test_opening_another_widget_discards_previous_state(self) -> None:
        overlay = OverlayState()
        overlay.open_remove(3)
        overlay.delete_files = True
        overlay.open_column_picker()
        self.assertFalse(overlay.delete_files)
        self.assertIsNone(overlay.target_job_id)
        self.assertIs(overlay.widget, OverlayWidget.COLUMN_PICKER)


if __name__ == "__main__":
    unittest.main()
