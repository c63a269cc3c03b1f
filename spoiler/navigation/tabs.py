"""Tabs of the job detail screen."""

from __future__ import annotations

from enum import IntEnum


class DetailTab(IntEnum):
    OVERVIEW = 0
    FILES = 1
    TRANSFER = 2

    @property
    def title(self) -> str:
        return self.name.title()

    def previous(self) -> DetailTab | None:
        if self == DetailTab.OVERVIEW:
            return None
        return DetailTab(self - 1)

    def next(self) -> DetailTab:
        return DetailTab(min(len(DetailTab) - 1, self + 1))


__all__ = ["DetailTab"]
