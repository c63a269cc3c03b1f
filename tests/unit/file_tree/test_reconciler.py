"""Tests for tree reconciliation across rebuilds.

Open directories and the selection are keyed by identifier, so collapsing a
directory must survive any number of refreshes that do not change the job.
"""

from __future__ import annotations

import unittest

from spoiler.daemon.types import Job, JobFile
from spoiler.file_tree import NodeKind, TreeNode, TreeReconciler, tree_signature


def _leaf(identifier: str) -> TreeNode:
    return TreeNode(identifier.rsplit("/", 1)[-1], NodeKind.LEAF, identifier)


def _dir(identifier: str, *children: TreeNode) -> TreeNode:
    return TreeNode(identifier.rsplit("/", 1)[-1], NodeKind.DIR, identifier, tuple(children))


def _tree() -> list[TreeNode]:
    return [
        _dir("show", _dir("show/s01", _leaf("show/s01/e01.mkv"), _leaf("show/s01/e02.mkv")), _leaf("show/nfo.txt")),
    ]


def _job(job_id: int = 1, *, done: bool = False) -> Job:
    size = 10
    files = (
        JobFile(index=0, name="show/s01/e01.mkv", size=size, bytes_completed=size if done else 0),
        JobFile(index=1, name="show/s01/e02.mkv", size=size),
        JobFile(index=2, name="show/nfo.txt", size=size),
    )
    return Job(id=job_id, name="show", download_dir="/data", files=files)


class _CountingBuilder:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, download_dir, manifest):
        self.calls += 1
        return _tree()


class TreeReconcilerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = _CountingBuilder()
        self.tree = TreeReconciler(builder=self.builder)

    def _visible_ids(self) -> list[str]:
        return [row.node.identifier for row in self.tree.visible_rows()]

    def test_first_reconcile_selects_first_row_with_everything_closed(self) -> None:
        self.assertTrue(self.tree.reconcile(_job()))
        self.assertEqual(self._visible_ids(), ["show"])
        self.assertEqual(self.tree.selected, "show")

    def test_unchanged_signature_skips_rebuild(self) -> None:
        job = _job()
        self.tree.reconcile(job)
        self.assertFalse(self.tree.reconcile(job))
        self.assertEqual(self.builder.calls, 1)
        self.assertTrue(self.tree.reconcile(job, force=True))
        self.assertEqual(self.builder.calls, 2)

    def test_progress_change_rebuilds_but_keeps_open_and_selection(self) -> None:
        self.tree.reconcile(_job())
        self.tree.expand()
        self.tree.select_next()
        self.tree.expand()
        self.tree.select_next()
        self.assertEqual(self.tree.selected, "show/s01/e01.mkv")

        self.assertTrue(self.tree.reconcile(_job(done=True)))

        self.assertEqual(self.tree.open, {"show", "show/s01"})
        self.assertEqual(self.tree.selected, "show/s01/e01.mkv")
        self.assertEqual(self.builder.calls, 2)

    def test_collapse_persists_across_refreshes(self) -> None:
        self.tree.reconcile(_job())
        self.tree.expand()
        self.tree.select_next()
        self.tree.expand()
        self.tree.collapse()
        self.assertEqual(self.tree.open, {"show"})

        for _ in range(5):
            self.tree.reconcile(_job(), force=True)

        self.assertEqual(self.tree.open, {"show"})
        self.assertEqual(self._visible_ids(), ["show", "show/s01", "show/nfo.txt"])
        self.assertEqual(self.tree.selected, "show/s01")

    def test_collapse_on_leaf_moves_to_parent(self) -> None:
        self.tree.reconcile(_job())
        self.tree.expand()
        self.tree.select_next()
        self.tree.select_next()
        self.assertEqual(self.tree.selected, "show/nfo.txt")
        self.tree.collapse()
        self.assertEqual(self.tree.selected, "show")
        self.tree.collapse()
        self.assertEqual(self.tree.open, set())
        self.tree.collapse()
        self.assertEqual(self.tree.selected, "show")

    def test_switching_jobs_resets_open_set(self) -> None:
        self.tree.reconcile(_job(1))
        self.tree.expand()
        self.tree.reconcile(_job(2))
        self.assertEqual(self.tree.open, set())
        self.assertEqual(self.tree.signature[0], 2)

    def test_none_clears_tree(self) -> None:
        self.tree.reconcile(_job())
        self.assertTrue(self.tree.reconcile(None))
        self.assertEqual(self.tree.visible_rows(), [])
        self.assertIsNone(self.tree.selected)
        self.assertFalse(self.tree.reconcile(None))

    def test_toggle_ignores_leaves(self) -> None:
        self.tree.reconcile(_job())
        self.tree.toggle()
        self.assertEqual(self.tree.open, {"show"})
        self.tree.select_next()
        self.tree.select_next()
        self.tree.toggle()
        self.assertEqual(self.tree.open, {"show"})
        self.tree.select_previous()
        self.tree.select_previous()
        self.tree.toggle()
        self.assertEqual(self.tree.open, set())

    def test_selected_file_indices_cover_subtree(self) -> None:
        job = _job()
        self.tree.reconcile(job)
        self.assertEqual(self.tree.selected_file_indices(job), [0, 1, 2])
        self.tree.expand()
        self.tree.select_next()
        self.assertEqual(self.tree.selected_file_indices(job), [0, 1])
        self.assertEqual(self.tree.selected_file_indices(None), [])

    def test_signature_includes_completion(self) -> None:
        self.assertNotEqual(tree_signature(_job()), tree_signature(_job(done=True)))


if __name__ == "__main__":
    unittest.main()
