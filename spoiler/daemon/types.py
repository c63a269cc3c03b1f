"""Immutable job records published by the sync loop.

A ``Job`` is rebuilt from scratch on every fetch; nothing mutates one after
construction, so readers on the render thread never see half-updated rows.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum


class JobStatus(IntEnum):
    """Transfer state using the daemon's numeric codes (sorts by value)."""

    STOPPED = 0
    CHECK_PENDING = 1
    CHECKING = 2
    DOWNLOAD_PENDING = 3
    DOWNLOADING = 4
    SEED_PENDING = 5
    SEEDING = 6

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").lower()

    @property
    def is_stopped(self) -> bool:
        return self is JobStatus.STOPPED


class FilePriority(IntEnum):
    LOW = -1
    NORMAL = 0
    HIGH = 1

    def raised(self) -> FilePriority:
        return FilePriority(min(FilePriority.HIGH, self + 1))

    def lowered(self) -> FilePriority:
        return FilePriority(max(FilePriority.LOW, self - 1))


class JobAction(str, Enum):
    """Bulk actions accepted by ``DaemonGateway.apply``."""

    START = "start"
    STOP = "stop"
    VERIFY = "verify"


@dataclass(frozen=True)
class JobFile:
    """One manifest entry; ``name`` is relative to the job's download dir."""

    index: int
    name: str
    size: int
    bytes_completed: int = 0
    priority: FilePriority = FilePriority.NORMAL
    wanted: bool = True

    @property
    def done(self) -> bool:
        return self.size > 0 and self.bytes_completed >= self.size

    @property
    def progress(self) -> float:
        if self.size <= 0:
            return 1.0
        return min(1.0, self.bytes_completed / self.size)


@dataclass(frozen=True)
class Job:
    id: int
    name: str
    status: JobStatus = JobStatus.STOPPED
    progress: float = 0.0
    eta: int | None = None
    download_rate: int = 0
    upload_rate: int = 0
    ratio: float = math.nan
    size: int = 0
    downloaded: int = 0
    uploaded: int = 0
    done_date: int = 0
    added_date: int = 0
    download_dir: str = ""
    files: tuple[JobFile, ...] = ()
    peers_connected: int = 0
    error_string: str = ""

    @property
    def is_stopped(self) -> bool:
        return self.status.is_stopped


@dataclass(frozen=True)
class SessionStats:
    """Session-wide aggregates reported alongside the job list."""

    download_rate: int = 0
    upload_rate: int = 0
    active_count: int = 0
    paused_count: int = 0
    job_count: int = 0
    downloaded_total: int = 0
    uploaded_total: int = 0


EMPTY_STATS = SessionStats()


__all__ = [
    "EMPTY_STATS",
    "FilePriority",
    "Job",
    "JobAction",
    "JobFile",
    "JobStatus",
    "SessionStats",
]
