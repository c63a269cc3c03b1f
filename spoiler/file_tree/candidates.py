"""Directory listing used by the add-job picker."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TORRENT_SUFFIX = ".torrent"


def list_torrent_candidates(directory: str | Path, suffix: str = TORRENT_SUFFIX) -> list[Path]:
    """Return regular files in ``directory`` ending with ``suffix``, sorted by name.

    An unreadable or missing directory yields an empty list.
    """
    root = Path(directory).expanduser()
    try:
        children = list(root.iterdir())
    except OSError as exc:
        logger.debug("cannot list torrent dir %s: %s", root, exc)
        return []
    wanted = suffix.lower()
    candidates: list[Path] = []
    for child in children:
        if not child.name.lower().endswith(wanted):
            continue
        try:
            if not child.is_file():
                continue
        except OSError:
            continue
        candidates.append(child)
    candidates.sort(key=lambda path: path.name)
    return candidates


__all__ = ["TORRENT_SUFFIX", "list_torrent_candidates"]
