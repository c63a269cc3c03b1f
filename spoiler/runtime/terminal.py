"""Terminal control helpers for the dashboard session.

Owns raw-mode lifecycle, alternate-screen switching and the window title,
which names the daemon being watched while the dashboard runs.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"
# xterm title stack: push saves the caller's title, pop restores it.
PUSH_TITLE = b"\x1b[22;0t"
POP_TITLE = b"\x1b[23;0t"


def title_sequence(title: str) -> bytes:
    """OSC 2 payload setting the window title; control characters are dropped."""
    clean = "".join(ch for ch in title if ch.isprintable())
    return f"\x1b]2;{clean}\x07".encode("utf-8", errors="replace")


class TerminalController:
    """Manage terminal mode transitions for one dashboard session."""

    def __init__(self, stdin_fd: int, stdout_fd: int, title: str | None = None) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.title = title
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        payload = ENTER_SCREEN
        if self.title:
            payload += PUSH_TITLE + title_sequence(self.title)
        os.write(self.stdout_fd, payload)

    def disable_tui_mode(self) -> None:
        """Restore the title, cursor, main screen buffer and tty state."""
        payload = LEAVE_SCREEN
        if self.title:
            payload = POP_TITLE + payload
        os.write(self.stdout_fd, payload)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController", "title_sequence"]
