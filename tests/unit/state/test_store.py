"""Tests for snapshot publication and the sync loop's last-known-good policy."""

from __future__ import annotations

import threading
import unittest

from spoiler.daemon.types import Job, SessionStats
from spoiler.errors import GatewayError
from spoiler.state import EMPTY_SNAPSHOT, SortKey, SortSpec, StateStore, SyncLoop


class _FakeGateway:
    def __init__(self, jobs: list[Job] | None = None) -> None:
        self.jobs = list(jobs or [])
        self.stats = SessionStats(job_count=len(self.jobs))
        self.fail_with: Exception | None = None
        self.list_calls = 0

    def list_jobs(self) -> list[Job]:
        self.list_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.jobs)

    def session_stats(self) -> SessionStats:
        return self.stats


class StateStoreTests(unittest.TestCase):
    def test_initial_snapshot_is_empty(self) -> None:
        store = StateStore()
        self.assertIs(store.read(), EMPTY_SNAPSHOT)
        self.assertEqual(store.read().generation, 0)

    def test_refresh_publishes_sorted_snapshot(self) -> None:
        gateway = _FakeGateway([Job(id=2, name="b", size=5), Job(id=1, name="a", size=9)])
        store = StateStore(sort=SortSpec(SortKey.SIZE, descending=True))

        snapshot = store.refresh(gateway)

        self.assertIs(store.read(), snapshot)
        self.assertEqual([job.id for job in snapshot.jobs], [1, 2])
        self.assertEqual(snapshot.generation, 1)
        self.assertEqual(snapshot.sort, SortSpec(SortKey.SIZE, descending=True))

    def test_set_sort_applies_on_next_refresh_only(self) -> None:
        gateway = _FakeGateway([Job(id=2, name="b"), Job(id=1, name="a")])
        store = StateStore()
        first = store.refresh(gateway)

        store.set_sort(SortKey.ID, descending=True)

        self.assertIs(store.read(), first)
        self.assertEqual([job.id for job in store.read().jobs], [1, 2])
        second = store.refresh(gateway)
        self.assertEqual([job.id for job in second.jobs], [2, 1])
        self.assertEqual(second.generation, 2)

    def test_failed_refresh_keeps_previous_snapshot(self) -> None:
        gateway = _FakeGateway([Job(id=1, name="a")])
        store = StateStore()
        good = store.refresh(gateway)
        gateway.fail_with = GatewayError("connection refused")

        with self.assertRaises(GatewayError):
            store.refresh(gateway)

        self.assertIs(store.read(), good)

    def test_readers_never_see_partial_snapshot(self) -> None:
        store = StateStore()
        stop = threading.Event()
        mismatches: list[int] = []

        def writer() -> None:
            size = 0
            while not stop.is_set():
                size = size % 50 + 1
                jobs = [Job(id=idx, name=str(idx)) for idx in range(size)]
                store.publish(jobs, SessionStats(job_count=size))

        def reader() -> None:
            for _ in range(2000):
                snapshot = store.read()
                if len(snapshot.jobs) != snapshot.stats.job_count:
                    mismatches.append(snapshot.generation)

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            reader()
        finally:
            stop.set()
            thread.join()

        self.assertEqual(mismatches, [])

    def test_snapshot_lookup_helpers(self) -> None:
        store = StateStore()
        snapshot = store.publish([Job(id=7, name="x"), Job(id=3, name="y")], SessionStats())
        self.assertEqual(snapshot.index_of(7), 1)
        self.assertIsNone(snapshot.index_of(99))
        self.assertIsNone(snapshot.index_of(None))
        self.assertEqual(snapshot.job_at(0).id, 3)
        self.assertIsNone(snapshot.job_at(2))


class SyncLoopTests(unittest.TestCase):
    def test_tick_failure_keeps_last_known_good_and_sets_failing(self) -> None:
        gateway = _FakeGateway([Job(id=1, name="a")])
        store = StateStore()
        sync = SyncLoop(store, gateway, interval=1.0)

        self.assertTrue(sync.tick())
        good = store.read()
        gateway.fail_with = GatewayError("timed out")

        self.assertFalse(sync.tick())
        self.assertTrue(sync.failing)
        self.assertIs(store.read(), good)

        gateway.fail_with = None
        self.assertTrue(sync.tick())
        self.assertFalse(sync.failing)
        self.assertEqual(store.read().generation, good.generation + 1)

    def test_unexpected_exception_does_not_escape_tick(self) -> None:
        gateway = _FakeGateway()
        gateway.fail_with = KeyError("status")
        sync = SyncLoop(StateStore(), gateway)

        with self.assertLogs("spoiler.state.sync", level="ERROR"):
            self.assertFalse(sync.tick())
        self.assertTrue(sync.failing)

    def test_thread_refreshes_until_stopped(self) -> None:
        gateway = _FakeGateway([Job(id=1, name="a")])
        store = StateStore()
        sync = SyncLoop(store, gateway, interval=0.05)

        sync.start()
        try:
            for _ in range(100):
                if store.read().generation >= 2:
                    break
                threading.Event().wait(0.02)
        finally:
            sync.stop(timeout=1.0)

        self.assertGreaterEqual(store.read().generation, 2)


if __name__ == "__main__":
    unittest.main()
