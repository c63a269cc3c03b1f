"""Bounded history of session transfer rates for the status-bar sparkline."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from ..daemon.types import SessionStats

DEFAULT_HISTORY_LENGTH = 60
SPARK_CHARS = " ▁▂▃▄▅▆▇█"


@dataclass(frozen=True)
class RateSample:
    download: int
    upload: int


class RateHistory:
    """Ring buffer of ``RateSample`` fed once per published snapshot."""

    def __init__(self, maxlen: int = DEFAULT_HISTORY_LENGTH) -> None:
        self._samples: deque[RateSample] = deque(maxlen=max(1, int(maxlen)))

    def __len__(self) -> int:
        return len(self._samples)

    def append(self, stats: SessionStats) -> None:
        self._samples.append(RateSample(max(0, stats.download_rate), max(0, stats.upload_rate)))

    def samples(self) -> tuple[RateSample, ...]:
        return tuple(self._samples)

    def downloads(self) -> list[int]:
        return [sample.download for sample in self._samples]

    def uploads(self) -> list[int]:
        return [sample.upload for sample in self._samples]


def sparkline(values: list[int], width: int) -> str:
    """Render the newest ``width`` values scaled to the series maximum."""
    if width <= 0:
        return ""
    tail = values[-width:]
    if not tail:
        return ""
    peak = max(tail)
    if peak <= 0:
        return SPARK_CHARS[0] * len(tail)
    steps = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[min(steps, round(value / peak * steps))] for value in tail)


__all__ = ["DEFAULT_HISTORY_LENGTH", "RateHistory", "RateSample", "sparkline"]
