"""Rendering for the dashboard screens.

Composes full ANSI frames from a ``RenderContext`` and writes them to the
terminal. Nothing here mutates dashboard or store state.
"""

from __future__ import annotations

import os
import sys

from ..formatting import format_rate
from ..navigation import Screen
from ..state import sparkline
from .ansi import clip_ansi_line, pad_ansi_line, styled
from .context import RenderContext, scroll_start
from .job_detail import job_detail_lines
from .job_list import job_list_lines
from .overlays import compose_overlay

SPARKLINE_WIDTH = 12
UNREACHABLE_TEXT = "daemon unreachable, showing last known state"


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _rate_text(arrow: str, rate: int, history: list[int]) -> str:
    spark = sparkline(history, SPARKLINE_WIDTH)
    text = f"{arrow} {format_rate(rate)}"
    return f"{text} {spark}" if spark.strip() else text


def status_left_text(context: RenderContext) -> str:
    """Plain status text: session rates with their sparklines, then job counts."""
    stats = context.snapshot.stats
    parts = [
        _rate_text("↓", stats.download_rate, context.download_history),
        _rate_text("↑", stats.upload_rate, context.upload_history),
        f"{len(context.snapshot.jobs)} jobs, {stats.active_count} active",
    ]
    if context.status_message:
        parts.append(context.status_message)
    elif context.daemon_unreachable:
        parts.append(UNREACHABLE_TEXT)
    return " │ ".join(parts)


def _status_style(context: RenderContext) -> str:
    theme = context.theme
    if context.daemon_unreachable and not context.status_message:
        return theme.status_error
    return theme.reverse


def body_lines(context: RenderContext) -> list[str]:
    if context.route.screen is Screen.JOB_DETAIL:
        return job_detail_lines(context)
    return job_list_lines(context)


def compose_frame(context: RenderContext) -> str:
    """Return one complete ANSI frame for ``context``."""
    theme = context.theme
    out: list[str] = ["\033[H\033[J"]
    lines = body_lines(context)
    for row in range(context.body_rows):
        text = lines[row] if row < len(lines) else ""
        out.append(f"\033[{row + 1};1H")
        out.append(clip_ansi_line(text, context.width))
        out.append(theme.reset)
    status = build_status_line(status_left_text(context), context.width)
    out.append(f"\033[{context.height};1H")
    out.append(styled(pad_ansi_line(status, max(1, context.width - 1)), _status_style(context), theme.reset))
    out.append(compose_overlay(context))
    return "".join(out)


def render_frame(context: RenderContext, fd: int | None = None) -> None:
    """Compose and write one frame to ``fd`` (stdout by default)."""
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, compose_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "body_lines",
    "build_status_line",
    "compose_frame",
    "render_frame",
    "scroll_start",
    "status_left_text",
]
