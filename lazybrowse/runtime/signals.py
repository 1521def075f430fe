"""Signal notification channel for the main loop.

Resize and termination signals are turned into bytes on a self-pipe via
``signal.set_wakeup_fd``; the loop waits on that pipe together with stdin,
so a signal wakes it even while no input arrives.
"""

from __future__ import annotations

import os
import signal

RESIZE_SIGNALS: tuple[int, ...] = (signal.SIGWINCH,)
TERMINATE_SIGNALS: tuple[int, ...] = (signal.SIGTERM, signal.SIGHUP)


def _record_signal(_signum: int, _frame: object) -> None:
    """Python-level handler; delivery is observed through the wakeup pipe."""


class SignalWakeup:
    """Context manager installing handlers that write to a wakeup pipe."""

    def __init__(self, signums: tuple[int, ...] = RESIZE_SIGNALS + TERMINATE_SIGNALS) -> None:
        self.signums = signums
        self.read_fd: int | None = None
        self._write_fd: int | None = None
        self._previous_wakeup_fd = -1
        self._previous_handlers: dict[int, object] = {}

    def __enter__(self) -> SignalWakeup:
        read_fd, write_fd = os.pipe()
        os.set_blocking(read_fd, False)
        os.set_blocking(write_fd, False)
        self.read_fd = read_fd
        self._write_fd = write_fd
        self._previous_wakeup_fd = signal.set_wakeup_fd(write_fd, warn_on_full_buffer=False)
        for signum in self.signums:
            self._previous_handlers[signum] = signal.signal(signum, _record_signal)
        return self

    def __exit__(self, *_exc_info: object) -> None:
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)
        self._previous_handlers.clear()
        signal.set_wakeup_fd(self._previous_wakeup_fd)
        for fd in (self.read_fd, self._write_fd):
            if fd is not None:
                os.close(fd)
        self.read_fd = None
        self._write_fd = None
