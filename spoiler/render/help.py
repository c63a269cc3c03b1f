"""Help overlay content.

Plain text rows; the overlay renderer applies theme colors.
"""

from __future__ import annotations

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Job list",
        (
            ("j/k Up/Down", "move selection"),
            ("l Right Enter", "open job details"),
            ("p", "pause / resume"),
            ("r", "rename"),
            ("a", "add a torrent file"),
            ("d Delete", "remove"),
            ("v", "verify local data"),
            ("c", "columns and sorting"),
            ("?", "help"),
            ("q", "quit"),
        ),
    ),
    (
        "Job details",
        (
            ("h/l Left/Right", "switch tab (h on the first tab goes back)"),
            ("j Down", "focus the file tree (Files tab)"),
            ("Esc Backspace", "back to the job list"),
        ),
    ),
    (
        "File tree",
        (
            ("j/k", "move"),
            ("l / h", "expand / collapse"),
            ("Enter Space", "toggle directory"),
            ("+ / -", "raise / lower priority"),
            ("Esc", "back to the tabs"),
        ),
    ),
    (
        "Columns",
        (
            ("Space", "show / hide column"),
            ("K / J", "move column up / down"),
            ("s", "sort by column (again to reverse)"),
        ),
    ),
)

HELP_FOOTER = "Press ? / Esc / q to close"


def help_rows() -> list[tuple[str, str]]:
    """Return ``(key, description)`` rows; section headings have an empty key."""
    rows: list[tuple[str, str]] = []
    for title, entries in HELP_SECTIONS:
        if rows:
            rows.append(("", ""))
        rows.append(("", title))
        rows.extend(entries)
    return rows


__all__ = ["HELP_FOOTER", "HELP_SECTIONS", "help_rows"]
