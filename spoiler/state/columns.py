"""Column layout for the job table: order plus visibility per field."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .sorting import SortKey

DEFAULT_VISIBLE: frozenset[SortKey] = frozenset(
    {
        SortKey.NAME,
        SortKey.STATUS,
        SortKey.PROGRESS,
        SortKey.ETA,
        SortKey.DOWNLOAD_RATE,
        SortKey.UPLOAD_RATE,
        SortKey.RATIO,
    }
)

DEFAULT_ORDER: tuple[SortKey, ...] = (
    SortKey.NAME,
    SortKey.STATUS,
    SortKey.PROGRESS,
    SortKey.ETA,
    SortKey.DOWNLOAD_RATE,
    SortKey.UPLOAD_RATE,
    SortKey.RATIO,
    SortKey.ID,
    SortKey.SIZE,
    SortKey.DONE_DATE,
    SortKey.ADDED_DATE,
)


@dataclass(frozen=True)
class Column:
    field: SortKey
    visible: bool


@dataclass(frozen=True)
class ColumnSpec:
    """Immutable column list holding every ``SortKey`` exactly once."""

    columns: tuple[Column, ...]

    def __post_init__(self) -> None:
        fields = [column.field for column in self.columns]
        if len(fields) != len(SortKey) or set(fields) != set(SortKey):
            raise ValueError("column spec must list every field exactly once")

    @classmethod
    def default(cls) -> ColumnSpec:
        return cls(tuple(Column(field, field in DEFAULT_VISIBLE) for field in DEFAULT_ORDER))

    @classmethod
    def from_config(cls, raw: object) -> ColumnSpec:
        """Repair a configured column list.

        Accepts ``[{"field": name, "visible": bool}, ...]``. Unknown and
        duplicate fields are dropped; missing fields are appended hidden in
        default order. Anything that is not a list yields the default spec.
        """
        if not isinstance(raw, list):
            return cls.default()
        seen: set[SortKey] = set()
        columns: list[Column] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            field = SortKey.parse(item.get("field"))
            if field is None or field in seen:
                continue
            visible = item.get("visible", True)
            columns.append(Column(field, visible if isinstance(visible, bool) else True))
            seen.add(field)
        for field in DEFAULT_ORDER:
            if field not in seen:
                columns.append(Column(field, False))
        return cls(tuple(columns))

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)

    def __getitem__(self, index: int) -> Column:
        return self.columns[index]

    def visible_fields(self) -> tuple[SortKey, ...]:
        return tuple(column.field for column in self.columns if column.visible)

    def toggle(self, index: int) -> ColumnSpec:
        if not (0 <= index < len(self.columns)):
            return self
        updated = list(self.columns)
        column = updated[index]
        updated[index] = Column(column.field, not column.visible)
        return ColumnSpec(tuple(updated))

    def swap(self, index: int, offset: int) -> ColumnSpec:
        """Swap entry ``index`` with its neighbour at ``index + offset``."""
        other = index + offset
        if offset not in (-1, 1) or not (0 <= index < len(self.columns)) or not (0 <= other < len(self.columns)):
            return self
        updated = list(self.columns)
        updated[index], updated[other] = updated[other], updated[index]
        return ColumnSpec(tuple(updated))

    def with_visible(self, fields: Iterable[SortKey]) -> ColumnSpec:
        wanted = set(fields)
        return ColumnSpec(tuple(Column(column.field, column.field in wanted) for column in self.columns))


__all__ = ["Column", "ColumnSpec", "DEFAULT_ORDER", "DEFAULT_VISIBLE"]
