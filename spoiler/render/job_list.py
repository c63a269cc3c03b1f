"""Job table: header of visible columns plus one row per job."""

from __future__ import annotations

from ..state import SortKey
from ..formatting import format_field
from .ansi import fit_cell, pad_ansi_line, styled
from .context import RenderContext, scroll_start

COLUMN_WIDTHS: dict[SortKey, int] = {
    SortKey.ID: 5,
    SortKey.STATUS: 16,
    SortKey.PROGRESS: 7,
    SortKey.ETA: 14,
    SortKey.DOWNLOAD_RATE: 11,
    SortKey.UPLOAD_RATE: 11,
    SortKey.RATIO: 6,
    SortKey.SIZE: 10,
    SortKey.DONE_DATE: 15,
    SortKey.ADDED_DATE: 15,
}
RIGHT_ALIGNED = frozenset(
    {
        SortKey.ID,
        SortKey.PROGRESS,
        SortKey.DOWNLOAD_RATE,
        SortKey.UPLOAD_RATE,
        SortKey.RATIO,
        SortKey.SIZE,
    }
)
MIN_NAME_WIDTH = 12
EMPTY_LIST_TEXT = "No jobs. Press a to add a torrent, ? for help."
NO_COLUMNS_TEXT = "All columns are hidden. Press c to pick columns."


def column_widths(fields: tuple[SortKey, ...], width: int) -> dict[SortKey, int]:
    """Fixed widths for data columns; the name column takes what is left."""
    widths = {
        field: COLUMN_WIDTHS.get(field, MIN_NAME_WIDTH) for field in fields if field is not SortKey.NAME
    }
    if SortKey.NAME in fields:
        used = sum(widths.values()) + max(0, len(fields) - 1)
        widths[SortKey.NAME] = max(MIN_NAME_WIDTH, width - used)
    return widths


def _header_title(field: SortKey, context: RenderContext) -> str:
    sort = context.snapshot.sort
    if field is not sort.key:
        return field.title
    return f"{field.title} {'▼' if sort.descending else '▲'}"


def job_list_lines(context: RenderContext) -> list[str]:
    """Return body lines for the job list screen, header first."""
    theme = context.theme
    fields = context.columns.visible_fields()
    if not fields:
        return [styled(NO_COLUMNS_TEXT, theme.help_dim, theme.reset)]
    widths = column_widths(fields, context.width)

    header_cells: list[str] = []
    for field in fields:
        cell = fit_cell(_header_title(field, context), widths[field], field in RIGHT_ALIGNED)
        style = theme.header_sorted if field is context.snapshot.sort.key else theme.header
        header_cells.append(styled(cell, style, theme.reset))
    lines = [" ".join(header_cells)]

    jobs = context.snapshot.jobs
    if not jobs:
        lines.append(styled(EMPTY_LIST_TEXT, theme.help_dim, theme.reset))
        return lines

    visible = max(1, context.body_rows - 1)
    start = scroll_start(context.selected_index, context.list_start, visible, len(jobs))
    for idx in range(start, min(len(jobs), start + visible)):
        job = jobs[idx]
        cells = [fit_cell(format_field(job, field), widths[field], field in RIGHT_ALIGNED) for field in fields]
        row = " ".join(cells)
        if idx == context.selected_index:
            row = styled(pad_ansi_line(row, context.width), theme.highlight, theme.reset)
        elif theme.normal:
            row = styled(row, theme.normal, theme.reset)
        lines.append(row)
    return lines


__all__ = ["COLUMN_WIDTHS", "EMPTY_LIST_TEXT", "column_widths", "job_list_lines"]
