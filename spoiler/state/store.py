"""Lock-guarded holder of the latest published snapshot.

The sync thread is the only writer of snapshots; the render/input thread
reads them and may change the sort spec. The lock is held for a reference
swap or read only, never across an RPC call, and a published ``Snapshot`` is
immutable, so a reader always sees one complete refresh.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass

from ..daemon.gateway import DaemonGateway
from ..daemon.types import EMPTY_STATS, Job, SessionStats
from .sorting import DEFAULT_SORT, SortKey, SortSpec, sort_jobs


@dataclass(frozen=True)
class Snapshot:
    """One internally consistent view of every job plus session aggregates."""

    jobs: tuple[Job, ...] = ()
    stats: SessionStats = EMPTY_STATS
    generation: int = 0
    sort: SortSpec = DEFAULT_SORT

    def index_of(self, job_id: int | None) -> int | None:
        if job_id is None:
            return None
        for idx, job in enumerate(self.jobs):
            if job.id == job_id:
                return idx
        return None

    def job_at(self, index: int | None) -> Job | None:
        if index is None or not (0 <= index < len(self.jobs)):
            return None
        return self.jobs[index]


EMPTY_SNAPSHOT = Snapshot()


class StateStore:
    """Shared container for the current ``Snapshot`` and active ``SortSpec``."""

    def __init__(self, sort: SortSpec = DEFAULT_SORT) -> None:
        self._lock = threading.Lock()
        self._snapshot = EMPTY_SNAPSHOT
        self._sort = sort

    def read(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    def sort(self) -> SortSpec:
        with self._lock:
            return self._sort

    def set_sort(self, key: SortKey, descending: bool = False) -> None:
        """Select the order used by the next refresh; published data is untouched."""
        with self._lock:
            self._sort = SortSpec(key, descending)

    def publish(self, jobs: Iterable[Job], stats: SessionStats, sort: SortSpec | None = None) -> Snapshot:
        """Sort ``jobs`` and atomically replace the published snapshot."""
        spec = self.sort() if sort is None else sort
        ordered = sort_jobs(jobs, spec)
        with self._lock:
            snapshot = Snapshot(
                jobs=ordered,
                stats=stats,
                generation=self._snapshot.generation + 1,
                sort=spec,
            )
            self._snapshot = snapshot
        return snapshot

    def refresh(self, gateway: DaemonGateway) -> Snapshot:
        """Fetch, sort, and publish a new snapshot.

        The sort spec is captured before the round-trip so one refresh applies
        one consistent order. Any gateway error propagates and the previous
        snapshot stays published.
        """
        spec = self.sort()
        jobs = gateway.list_jobs()
        stats = gateway.session_stats()
        return self.publish(jobs, stats, sort=spec)


__all__ = ["EMPTY_SNAPSHOT", "Snapshot", "StateStore"]
