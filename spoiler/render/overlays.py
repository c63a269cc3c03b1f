"""Modal overlay boxes drawn centered above the current screen."""

from __future__ import annotations

from ..navigation import OverlayWidget
from ..ui_theme import UITheme
from .ansi import clip_ansi_line, display_width, fit_cell, pad_ansi_line, styled
from .context import RenderContext, scroll_start
from .help import HELP_FOOTER, help_rows

OVERLAY_TITLES: dict[OverlayWidget, str] = {
    OverlayWidget.HELP: "spoiler help",
    OverlayWidget.RENAME_INPUT: "Rename",
    OverlayWidget.ADD_JOB: "Add torrent",
    OverlayWidget.ADD_JOB_CONFIRM: "Add torrent",
    OverlayWidget.REMOVE_JOB_CONFIRM: "Remove job",
    OverlayWidget.COLUMN_PICKER: "Columns",
}


def _checkbox(checked: bool) -> str:
    return "[x]" if checked else "[ ]"


def _help_body(theme: UITheme) -> list[str]:
    lines: list[str] = []
    for key, description in help_rows():
        if not key:
            lines.append(styled(description, theme.help_heading, theme.reset))
            continue
        lines.append(f"  {styled(fit_cell(key, 16), theme.help_key, theme.reset)}{description}")
    lines.append("")
    lines.append(styled(HELP_FOOTER, theme.help_dim, theme.reset))
    return lines


def _job_name(context: RenderContext) -> str:
    overlay = context.overlay
    index = context.snapshot.index_of(overlay.target_job_id)
    job = context.snapshot.job_at(index)
    if job is not None:
        return job.name
    return f"#{overlay.target_job_id}"


def _rename_body(context: RenderContext) -> list[str]:
    theme = context.theme
    return [
        f"Job: {_job_name(context)}",
        "",
        f"New name: {context.overlay.buffer}{styled(' ', theme.reverse, theme.reset)}",
        "",
        styled("Enter rename  Esc cancel  Ctrl+U clear", theme.help_dim, theme.reset),
    ]


def _add_body(context: RenderContext, rows: int) -> list[str]:
    theme = context.theme
    overlay = context.overlay
    if not overlay.candidates:
        return [
            "No .torrent files found.",
            "",
            styled("Esc close", theme.help_dim, theme.reset),
        ]
    visible = max(1, rows - 2)
    start = scroll_start(overlay.candidate_index, 0, visible, len(overlay.candidates))
    lines: list[str] = []
    for idx in range(start, min(len(overlay.candidates), start + visible)):
        name = overlay.candidates[idx].name
        if idx == overlay.candidate_index:
            lines.append(styled(f"> {name}", theme.highlight, theme.reset))
        else:
            lines.append(f"  {name}")
    lines.append("")
    lines.append(styled("j/k move  l/Enter choose  Esc cancel", theme.help_dim, theme.reset))
    return lines


def _add_confirm_body(context: RenderContext) -> list[str]:
    theme = context.theme
    overlay = context.overlay
    candidate = overlay.selected_candidate()
    return [
        f"File: {candidate.name if candidate is not None else '-'}",
        "",
        f"{_checkbox(overlay.add_paused)} start paused (p)",
        "",
        styled("Enter add  h back  Esc cancel", theme.help_dim, theme.reset),
    ]


def _remove_body(context: RenderContext) -> list[str]:
    theme = context.theme
    return [
        f"Remove {_job_name(context)}?",
        "",
        f"{_checkbox(context.overlay.delete_files)} also delete local data (d)",
        "",
        styled("Enter remove  Esc cancel", theme.help_dim, theme.reset),
    ]


def _column_picker_body(context: RenderContext) -> list[str]:
    theme = context.theme
    sort = context.pending_sort or context.snapshot.sort
    lines: list[str] = []
    for idx, column in enumerate(context.columns):
        marker = ""
        if column.field is sort.key:
            marker = " ▼" if sort.descending else " ▲"
        label = f"{_checkbox(column.visible)} {column.field.title}{marker}"
        style = theme.column_show if column.visible else theme.column_hide
        if idx == context.overlay.column_index:
            label = styled(f"> {label}", theme.highlight, theme.reset)
        else:
            label = "  " + styled(label, style, theme.reset)
        lines.append(label)
    lines.append("")
    lines.append(styled("Space show/hide  K/J move  s sort  Esc close", theme.help_dim, theme.reset))
    return lines


def overlay_body(context: RenderContext, rows: int) -> list[str]:
    widget = context.overlay.widget
    if widget is OverlayWidget.HELP:
        return _help_body(context.theme)
    if widget is OverlayWidget.RENAME_INPUT:
        return _rename_body(context)
    if widget is OverlayWidget.ADD_JOB:
        return _add_body(context, rows)
    if widget is OverlayWidget.ADD_JOB_CONFIRM:
        return _add_confirm_body(context)
    if widget is OverlayWidget.REMOVE_JOB_CONFIRM:
        return _remove_body(context)
    if widget is OverlayWidget.COLUMN_PICKER:
        return _column_picker_body(context)
    return []


def compose_overlay(context: RenderContext) -> str:
    """Return positioned ANSI output for the open overlay, or ``""``."""
    widget = context.overlay.widget
    if widget is OverlayWidget.NONE:
        return ""
    theme = context.theme
    width = context.width
    height = context.height
    max_inner_h = max(1, min(height - 4, 28))
    body = overlay_body(context, max_inner_h)
    content_w = max((display_width(line) for line in body), default=0)
    modal_w = min(max(8, width - 2), max(40, content_w + 4))
    inner_w = max(1, modal_w - 2)
    inner_h = max(1, min(max_inner_h, len(body)))
    modal_h = inner_h + 2
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)

    out: list[str] = []
    out.append(f"\033[{y + 1};{x + 1}H{theme.modal_border}╭{'─' * inner_w}╮{theme.reset}")
    for i in range(inner_h):
        text = body[i] if i < len(body) else ""
        cell = pad_ansi_line(" " + clip_ansi_line(text, inner_w - 2), inner_w)
        out.append(f"\033[{y + 2 + i};{x + 1}H{theme.modal_border}│{theme.reset}")
        out.append(cell)
        out.append(f"{theme.reset}{theme.modal_border}│{theme.reset}")
    out.append(f"\033[{y + modal_h};{x + 1}H{theme.modal_border}╰{'─' * inner_w}╯{theme.reset}")

    title = OVERLAY_TITLES.get(widget, "")
    if title and inner_w > len(title) + 2:
        title_x = x + 1 + (inner_w - len(title) - 2) // 2
        out.append(f"\033[{y + 1};{title_x + 1}H {styled(title, theme.modal_title, theme.reset)} ")
    return "".join(out)


__all__ = ["OVERLAY_TITLES", "compose_overlay", "overlay_body"]
