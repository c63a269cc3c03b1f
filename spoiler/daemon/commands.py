"""Fire-and-forget execution of user-issued daemon commands.

Commands never block the render/input loop. Their success is only observed
through the next sync tick; failures are logged and queued so the loop can
flash them in the status bar.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from queue import Empty, Queue

from ..errors import GatewayError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class CommandFailure:
    """One failed command, reported back to the render loop."""

    label: str
    message: str


class CommandDispatcher:
    """Run gateway calls on a small worker pool, never retrying them."""

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, max_workers),
            thread_name_prefix="spoiler-command",
        )
        self._failures: Queue[CommandFailure] = Queue()

    def submit(self, label: str, fn: Callable[..., object], *args: object, **kwargs: object) -> Future:
        """Schedule ``fn(*args, **kwargs)`` and return immediately."""
        logger.debug("submitting command %s", label)
        return self._executor.submit(self._run, label, fn, args, kwargs)

    def _run(
        self,
        label: str,
        fn: Callable[..., object],
        args: tuple[object, ...],
        kwargs: dict[str, object],
    ) -> None:
        try:
            fn(*args, **kwargs)
        except GatewayError as exc:
            logger.warning("command %s failed: %s", label, exc)
            self._failures.put(CommandFailure(label=label, message=str(exc)))
            return
        except Exception as exc:
            logger.exception("command %s crashed", label)
            self._failures.put(CommandFailure(label=label, message=f"{type(exc).__name__}: {exc}"))
            return
        logger.debug("command %s completed", label)

    def drain_failures(self) -> list[CommandFailure]:
        """Return and clear all failures reported since the last drain."""
        out: list[CommandFailure] = []
        while True:
            try:
                out.append(self._failures.get_nowait())
            except Empty:
                break
        return out

    def shutdown(self, wait: bool = False) -> None:
        """Stop accepting commands; in-flight calls finish on their own."""
        self._executor.shutdown(wait=wait, cancel_futures=True)


__all__ = ["CommandDispatcher", "CommandFailure", "DEFAULT_MAX_WORKERS"]
