"""Sort keys and the stable single-field job ordering.

Floats get an explicit total order: NaN and missing values rank below every
number, so a job with an unknown ratio or ETA has a defined place instead of
comparing "equal" to whatever it meets.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from ..daemon.types import Job


class SortKey(Enum):
    NAME = "name"
    ID = "id"
    STATUS = "status"
    PROGRESS = "progress"
    ETA = "eta"
    DOWNLOAD_RATE = "download_rate"
    UPLOAD_RATE = "upload_rate"
    RATIO = "ratio"
    SIZE = "size"
    DONE_DATE = "done_date"
    ADDED_DATE = "added_date"

    @property
    def title(self) -> str:
        return COLUMN_TITLES[self]

    @classmethod
    def parse(cls, raw: object) -> SortKey | None:
        if isinstance(raw, SortKey):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


COLUMN_TITLES: dict[SortKey, str] = {
    SortKey.NAME: "Name",
    SortKey.ID: "ID",
    SortKey.STATUS: "Status",
    SortKey.PROGRESS: "Done",
    SortKey.ETA: "ETA",
    SortKey.DOWNLOAD_RATE: "Down",
    SortKey.UPLOAD_RATE: "Up",
    SortKey.RATIO: "Ratio",
    SortKey.SIZE: "Size",
    SortKey.DONE_DATE: "Completed",
    SortKey.ADDED_DATE: "Added",
}


@dataclass(frozen=True)
class SortSpec:
    key: SortKey = SortKey.ID
    descending: bool = False

    def toggled(self) -> SortSpec:
        return SortSpec(self.key, not self.descending)


DEFAULT_SORT = SortSpec()


def float_order_key(value: float | int | None) -> tuple[int, float]:
    """Total-order key: missing and NaN first, then numbers ascending."""
    if value is None:
        return (0, 0.0)
    number = float(value)
    if math.isnan(number):
        return (0, 0.0)
    return (1, number)


# Python compares str by code point, which matches UTF-8 byte order.
_KEY_FUNCTIONS: dict[SortKey, Callable[[Job], object]] = {
    SortKey.NAME: lambda job: job.name,
    SortKey.ID: lambda job: job.id,
    SortKey.STATUS: lambda job: int(job.status),
    SortKey.PROGRESS: lambda job: float_order_key(job.progress),
    SortKey.ETA: lambda job: float_order_key(job.eta),
    SortKey.DOWNLOAD_RATE: lambda job: job.download_rate,
    SortKey.UPLOAD_RATE: lambda job: job.upload_rate,
    SortKey.RATIO: lambda job: float_order_key(job.ratio),
    SortKey.SIZE: lambda job: job.size,
    SortKey.DONE_DATE: lambda job: job.done_date,
    SortKey.ADDED_DATE: lambda job: job.added_date,
}


def sort_jobs(jobs: Iterable[Job], spec: SortSpec) -> tuple[Job, ...]:
    """Return ``jobs`` stably sorted by ``spec.key``.

    Descending order reverses the ascending result rather than the
    comparator, so the whole output, ties included, is the exact mirror of
    the ascending order.
    """
    ordered = sorted(jobs, key=_KEY_FUNCTIONS[spec.key])
    if spec.descending:
        ordered.reverse()
    return tuple(ordered)


__all__ = [
    "COLUMN_TITLES",
    "DEFAULT_SORT",
    "SortKey",
    "SortSpec",
    "float_order_key",
    "sort_jobs",
]
