"""ANSI-aware width measurement, clipping and padding for table cells.

Escape sequences never count toward width; East Asian wide characters count
as two columns so job names in any script keep the table aligned.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
ELLIPSIS = "…"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(" " if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def fit_cell(text: str, width: int, align_right: bool = False) -> str:
    """Clip plain ``text`` to ``width`` columns (with an ellipsis) and pad it."""
    if width <= 0:
        return ""
    if display_width(text) > width:
        text = clip_ansi_line(text, max(0, width - 1)) + ELLIPSIS
    padding = " " * max(0, width - display_width(text))
    return padding + text if align_right else text + padding


def pad_ansi_line(text: str, width: int) -> str:
    """Clip a styled line to ``width`` and pad it with spaces to exactly that width."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def styled(text: str, style: str, reset: str) -> str:
    """Wrap ``text`` in ``style``; an empty style leaves the text untouched."""
    if not style or not text:
        return text
    return f"{style}{text}{reset}"


__all__ = [
    "ANSI_ESCAPE_RE",
    "ELLIPSIS",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_cell",
    "pad_ansi_line",
    "strip_ansi",
    "styled",
]
