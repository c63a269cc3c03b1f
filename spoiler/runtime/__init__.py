"""Interactive dashboard runtime.

``run_dashboard`` wires the daemon, workers and terminal together;
``run_main_loop`` is the key/render loop it drives. Both are imported on
first use so ``spoiler --once`` never touches termios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopTiming


def run_dashboard(*args, **kwargs):
    """Start the full-screen dashboard (see ``spoiler.runtime.app``)."""
    from .app import run_dashboard as _impl

    return _impl(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    from .loop import run_main_loop as _impl

    return _impl(*args, **kwargs)


def __getattr__(name: str):
    if name != "RuntimeLoopTiming":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from .loop import RuntimeLoopTiming as timing

    return timing


__all__ = ["RuntimeLoopTiming", "run_dashboard", "run_main_loop"]
