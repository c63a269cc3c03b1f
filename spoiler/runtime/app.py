"""Runtime composition layer for spoiler.

Builds the gateway, store, sync thread, command pool and router, then runs
the interactive loop. This is the highest-level module where the daemon,
state, input and rendering meet.
"""

from __future__ import annotations

import logging
import sys

from ..config import DashboardSettings
from ..daemon import CommandDispatcher, DaemonGateway, TransmissionGateway
from ..input import InputRouter
from ..state import StateStore, SyncLoop
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopTiming, run_main_loop
from .state import DashboardState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_state(settings: DashboardSettings) -> DashboardState:
    return DashboardState(columns=settings.columns)


def run_dashboard(settings: DashboardSettings, gateway: DaemonGateway | None = None) -> None:
    """Run the interactive dashboard until the quit key is pressed.

    On exit the sync thread is told to stop and the command pool is shut down
    without waiting for in-flight commands.
    """
    if gateway is None:
        gateway = TransmissionGateway(settings.connection)
    store = StateStore(sort=settings.sort)
    sync = SyncLoop(store, gateway, interval=settings.refresh_seconds)
    dispatcher = CommandDispatcher()
    state = build_state(settings)
    router = InputRouter(
        state,
        store,
        gateway,
        dispatcher,
        torrent_dir=settings.resolved_torrent_dir(),
    )
    theme = resolve_theme(settings.theme, no_color=settings.no_color, colors=settings.colors)

    stdin_fd = sys.stdin.fileno()
    connection = settings.connection
    terminal = TerminalController(
        stdin_fd=stdin_fd,
        stdout_fd=sys.stdout.fileno(),
        title=f"spoiler: {connection.host}:{connection.port}",
    )
    logger.info(
        "starting dashboard for %s:%d (refresh %.1fs)",
        connection.host,
        connection.port,
        settings.refresh_seconds,
    )
    sync.start()
    try:
        run_main_loop(
            state,
            router,
            store,
            terminal,
            stdin_fd,
            RuntimeLoopTiming(),
            dispatcher=dispatcher,
            theme=theme,
            is_failing=lambda: sync.failing,
        )
    finally:
        sync.stop()
        dispatcher.shutdown(wait=False)
        logger.info("dashboard stopped")


__all__ = ["build_state", "run_dashboard"]
