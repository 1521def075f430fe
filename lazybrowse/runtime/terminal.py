"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, mouse and bracketed
paste toggles, and size queries.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

MOUSE_ON = b"\x1b[?1000h\x1b[?1006h"
MOUSE_OFF = b"\x1b[?1000l\x1b[?1006l"
ENTER_SCREEN = b"\x1b[?1049h\x1b[2J\x1b[?25l\x1b[?2004h"
LEAVE_SCREEN = b"\x1b[?2004l\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for the browser session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors.

        Raises ``termios.error`` when ``stdin_fd`` is not a terminal.
        """
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse reporting enabled."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Alternate screen, clear, hide cursor, bracketed paste, then mouse.
        os.write(self.stdout_fd, ENTER_SCREEN + MOUSE_ON)

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and disable TUI mouse mode."""
        os.write(self.stdout_fd, MOUSE_OFF + LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def query_size(self) -> tuple[int, int]:
        """Return ``(rows, columns)``, defaulting to 24x80 when unknown."""
        size = shutil.get_terminal_size((80, 24))
        return size.lines, size.columns

    def write(self, data: bytes) -> None:
        os.write(self.stdout_fd, data)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
