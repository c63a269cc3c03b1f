"""Job detail screen: tab bar plus the active tab's body."""

from __future__ import annotations

from ..daemon.types import Job, JobFile
from ..formatting import (
    format_bytes,
    format_eta,
    format_percent,
    format_rate,
    format_ratio,
    format_timestamp,
)
from ..navigation import DetailTab, Focus
from .ansi import fit_cell, pad_ansi_line, styled
from .context import RenderContext, scroll_start

LABEL_WIDTH = 14
NO_JOB_TEXT = "The selected job is gone."
NO_FILES_TEXT = "Nothing of this job exists on disk yet."


def tab_bar_line(context: RenderContext) -> str:
    theme = context.theme
    focused = context.route.focus is Focus.TABS
    cells: list[str] = []
    for tab in DetailTab:
        label = f" {tab.title} "
        if tab is context.selected_tab:
            cells.append(styled(label, theme.tab_active if focused else theme.reverse, theme.reset))
        else:
            cells.append(styled(label, theme.tab_inactive, theme.reset))
    return "│".join(cells)


def _pairs_lines(pairs: list[tuple[str, str]], context: RenderContext) -> list[str]:
    theme = context.theme
    return [
        f"{styled(fit_cell(label, LABEL_WIDTH), theme.help_key, theme.reset)} {value}"
        for label, value in pairs
    ]


def overview_lines(job: Job, context: RenderContext) -> list[str]:
    pairs = [
        ("Name", job.name),
        ("ID", str(job.id)),
        ("Status", job.status.label),
        ("Done", format_percent(job.progress)),
        ("Size", format_bytes(job.size)),
        ("Location", job.download_dir or "-"),
        ("Files", str(len(job.files))),
        ("Added", format_timestamp(job.added_date)),
        ("Completed", format_timestamp(job.done_date)),
    ]
    lines = _pairs_lines(pairs, context)
    if job.error_string:
        theme = context.theme
        error = f"{fit_cell('Error', LABEL_WIDTH)} {job.error_string}"
        lines.append(styled(error, theme.status_error, theme.reset))
    return lines


def transfer_lines(job: Job, context: RenderContext) -> list[str]:
    pairs = [
        ("Downloaded", format_bytes(job.downloaded)),
        ("Uploaded", format_bytes(job.uploaded)),
        ("Download rate", format_rate(job.download_rate)),
        ("Upload rate", format_rate(job.upload_rate)),
        ("Ratio", format_ratio(job.ratio)),
        ("ETA", format_eta(job.eta)),
        ("Peers", str(job.peers_connected)),
    ]
    return _pairs_lines(pairs, context)


def _file_suffix(item: JobFile | None) -> str:
    if item is None:
        return ""
    flags = "" if item.wanted else " skip"
    return f"  {format_percent(item.progress)} {item.priority.name.lower()}{flags}"


def file_tree_lines(job: Job, context: RenderContext, rows: int) -> list[str]:
    theme = context.theme
    if not context.tree_rows:
        return [styled(NO_FILES_TEXT, theme.help_dim, theme.reset)]
    by_name = {item.name.strip("/"): item for item in job.files}
    focused = context.route.focus is Focus.FILE_TREE
    selected = None
    for idx, row in enumerate(context.tree_rows):
        if row.node.identifier == context.tree_selected:
            selected = idx
            break
    start = scroll_start(selected, context.tree_start, rows, len(context.tree_rows))
    lines: list[str] = []
    for idx in range(start, min(len(context.tree_rows), start + rows)):
        row = context.tree_rows[idx]
        node = row.node
        indent = "  " * row.depth
        if node.is_dir:
            marker = styled("▾ " if row.is_open else "▸ ", theme.tree_marker, theme.reset)
            text = f"{indent}{marker}{styled(node.display_name + '/', theme.tree_dir, theme.reset)}"
        else:
            name = styled(node.display_name, theme.tree_file, theme.reset)
            text = f"{indent}  {name}{_file_suffix(by_name.get(node.identifier))}"
        if idx == selected:
            style = theme.highlight if focused else theme.reverse
            text = styled(pad_ansi_line(text, context.width), style, theme.reset)
        lines.append(text)
    return lines


def job_detail_lines(context: RenderContext) -> list[str]:
    """Return body lines for the detail screen of ``context.selected_job``."""
    theme = context.theme
    lines = [tab_bar_line(context), styled("─" * max(1, context.width), theme.divider, theme.reset)]
    job = context.selected_job
    if job is None:
        lines.append(styled(NO_JOB_TEXT, theme.help_dim, theme.reset))
        return lines
    if context.selected_tab is DetailTab.OVERVIEW:
        lines.extend(overview_lines(job, context))
    elif context.selected_tab is DetailTab.FILES:
        lines.extend(file_tree_lines(job, context, max(1, context.body_rows - len(lines))))
    else:
        lines.extend(transfer_lines(job, context))
    return lines


__all__ = [
    "file_tree_lines",
    "job_detail_lines",
    "overview_lines",
    "tab_bar_line",
    "transfer_lines",
]
