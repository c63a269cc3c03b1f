"""Human-readable cell text for job fields.

Sizes use decimal units (kB, MB, ...), matching what the daemon reports.
"""

from __future__ import annotations

import datetime as dt
import math

import humanize

from .daemon.types import Job
from .state.sorting import SortKey

NOT_AVAILABLE = "-"


def format_bytes(value: int | None) -> str:
    if value is None or value < 0:
        return NOT_AVAILABLE
    return humanize.naturalsize(value)


def format_rate(value: int | None) -> str:
    if value is None or value <= 0:
        return NOT_AVAILABLE
    return f"{humanize.naturalsize(value)}/s"


def format_eta(seconds: int | None) -> str:
    """Return a coarse remaining-time label; unknown ETAs render as ``-``."""
    if seconds is None or seconds < 0:
        return NOT_AVAILABLE
    if seconds == 0:
        return "done"
    return humanize.naturaldelta(dt.timedelta(seconds=seconds))


def format_percent(progress: float) -> str:
    if math.isnan(progress):
        return NOT_AVAILABLE
    return f"{max(0.0, min(1.0, progress)) * 100:.1f}%"


def format_ratio(ratio: float) -> str:
    if math.isnan(ratio):
        return NOT_AVAILABLE
    if math.isinf(ratio):
        return "inf"
    return f"{ratio:.2f}"


def format_timestamp(epoch_seconds: int, now: dt.datetime | None = None) -> str:
    """Relative time for an epoch timestamp; ``0`` means never."""
    if epoch_seconds <= 0:
        return "never"
    moment = dt.datetime.fromtimestamp(epoch_seconds)
    return humanize.naturaltime(moment, when=now)


def format_field(job: Job, field: SortKey) -> str:
    """Return the table cell text for ``field`` of ``job``."""
    if field is SortKey.NAME:
        return job.name
    if field is SortKey.ID:
        return str(job.id)
    if field is SortKey.STATUS:
        return job.status.label
    if field is SortKey.PROGRESS:
        return format_percent(job.progress)
    if field is SortKey.ETA:
        return format_eta(job.eta)
    if field is SortKey.DOWNLOAD_RATE:
        return format_rate(job.download_rate)
    if field is SortKey.UPLOAD_RATE:
        return format_rate(job.upload_rate)
    if field is SortKey.RATIO:
        return format_ratio(job.ratio)
    if field is SortKey.SIZE:
        return format_bytes(job.size)
    if field is SortKey.DONE_DATE:
        return format_timestamp(job.done_date)
    return format_timestamp(job.added_date)


__all__ = [
    "NOT_AVAILABLE",
    "format_bytes",
    "format_eta",
    "format_field",
    "format_percent",
    "format_rate",
    "format_ratio",
    "format_timestamp",
]
