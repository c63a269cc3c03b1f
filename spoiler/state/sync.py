"""Background thread that keeps the state store in step with the daemon."""

from __future__ import annotations

import logging
import threading

from ..daemon.gateway import DaemonGateway
from ..errors import GatewayError
from .store import StateStore

logger = logging.getLogger(__name__)

DEFAULT_SYNC_INTERVAL_SECONDS = 1.0


class SyncLoop:
    """Refresh ``store`` from ``gateway`` on a fixed interval.

    A failed fetch keeps the last-known-good snapshot published and is retried
    on the next tick; an outage never blanks the dashboard.
    """

    def __init__(
        self,
        store: StateStore,
        gateway: DaemonGateway,
        interval: float = DEFAULT_SYNC_INTERVAL_SECONDS,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.interval = max(0.05, float(interval))
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._failing = False

    def tick(self) -> bool:
        """Run one refresh synchronously; return whether it succeeded."""
        try:
            snapshot = self.store.refresh(self.gateway)
        except GatewayError as exc:
            self._note_failure(str(exc))
            return False
        except Exception as exc:
            # A malformed payload must not kill the thread either.
            logger.exception("unexpected error while refreshing")
            self._note_failure(f"{type(exc).__name__}: {exc}")
            return False
        if self._failing:
            logger.info("daemon reachable again; %d jobs", len(snapshot.jobs))
            self._failing = False
        return True

    def _note_failure(self, message: str) -> None:
        if not self._failing:
            logger.warning("refresh failed, keeping last snapshot: %s", message)
        else:
            logger.debug("refresh still failing: %s", message)
        self._failing = True

    @property
    def failing(self) -> bool:
        return self._failing

    def _run(self) -> None:
        while not self._stop.is_set():
            self.tick()
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="spoiler-sync", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Ask the thread to exit after its current round-trip."""
        self._stop.set()
        thread = self._thread
        if thread is not None and timeout is not None:
            thread.join(timeout)


__all__ = ["DEFAULT_SYNC_INTERVAL_SECONDS", "SyncLoop"]
