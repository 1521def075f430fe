"""Low-level terminal input polling.

Waits on stdin and an optional signal wakeup descriptor with ``select`` so a
resize or termination signal is noticed even while no key is pressed.
"""

from __future__ import annotations

import os
import select
from dataclasses import dataclass

READ_CHUNK_BYTES = 2048


@dataclass(frozen=True)
class InputPoll:
    """Result of one wait: raw input bytes and/or signal numbers."""

    data: bytes = b""
    signals: tuple[int, ...] = ()
    eof: bool = False


def _drain_wakeup_fd(fd: int) -> tuple[int, ...]:
    """Read all pending signal-number bytes from a non-blocking wakeup pipe."""
    received: list[int] = []
    while True:
        try:
            chunk = os.read(fd, 64)
        except (BlockingIOError, InterruptedError):
            break
        if not chunk:
            break
        received.extend(chunk)
    return tuple(received)


def poll_input(stdin_fd: int, wakeup_fd: int | None = None, timeout_ms: int | None = None) -> InputPoll:
    """Block until input, a signal notification or ``timeout_ms`` elapses.

    Returns an empty ``InputPoll`` on timeout. ``eof`` is set when stdin is
    readable but closed.
    """
    watched = [stdin_fd] if wakeup_fd is None else [stdin_fd, wakeup_fd]
    timeout = None if timeout_ms is None else max(0.0, timeout_ms / 1000.0)
    ready, _, _ = select.select(watched, [], [], timeout)
    if not ready:
        return InputPoll()

    signals: tuple[int, ...] = ()
    if wakeup_fd is not None and wakeup_fd in ready:
        signals = _drain_wakeup_fd(wakeup_fd)
    if stdin_fd not in ready:
        return InputPoll(signals=signals)

    data = os.read(stdin_fd, READ_CHUNK_BYTES)
    if not data:
        return InputPoll(signals=signals, eof=True)
    return InputPoll(data=data, signals=signals)
