"""spoiler: a terminal dashboard for torrent jobs on a Transmission daemon.

Only ``main`` lives at the top level; importing the package does not pull in
the daemon client or terminal code.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the command-line interface (imported on first call)."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
