"""Main interactive event loop for the terminal UI.

Each iteration re-reads the directory and repaints when the state is dirty,
then blocks until input or a signal notification arrives and hands decoded
events to the controller. Feature logic lives in ``BrowserController``.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from ..config import TopBarButton
from ..input import decode_input, poll_input
from ..navigation import ensure_cursor_visible, reload
from ..render import encode_frame, render_frame
from ..state import BrowserState
from ..status import expire_status_message
from .controller import BrowserController
from .signals import RESIZE_SIGNALS, TERMINATE_SIGNALS
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    status_poll_ms: int = 250


def render_to_terminal(
    state: BrowserState,
    terminal: TerminalController,
    controller: BrowserController,
    buttons: Sequence[TopBarButton],
) -> tuple[int, int]:
    """Reload the listing, fix scrolling for the current size and paint a frame."""
    rows, columns = terminal.query_size()
    reload(state.nav, controller.ops.list_directory)
    ensure_cursor_visible(state.nav, max(1, rows - 1))
    terminal.write(encode_frame(render_frame(state, rows, columns, buttons)))
    state.dirty = False
    return rows, columns


def run_main_loop(
    state: BrowserState,
    terminal: TerminalController,
    controller: BrowserController,
    stdin_fd: int,
    wakeup_fd: int | None = None,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run the browser until a quit key, a terminating signal or stdin EOF.

    Terminal modes are restored on every exit path, exceptions included.
    """
    buttons = controller.ops.top_bar_buttons
    with terminal.raw_mode():
        _rows, columns = terminal.query_size()
        while True:
            expire_status_message(state, time.monotonic())
            if state.dirty:
                _rows, columns = render_to_terminal(state, terminal, controller, buttons)

            timeout_ms = timing.status_poll_ms if state.status_message else None
            try:
                poll = poll_input(stdin_fd, wakeup_fd, timeout_ms)
            except KeyboardInterrupt:
                # Raw mode reads Ctrl-C as a key; a SIGINT here is not a quit.
                continue
            if any(signum in TERMINATE_SIGNALS for signum in poll.signals):
                logger.info("Terminating on signal {}", poll.signals)
                break
            if any(signum in RESIZE_SIGNALS for signum in poll.signals):
                state.dirty = True
            if poll.eof:
                logger.info("Input closed, leaving")
                break
            if not poll.data:
                continue
            if controller.handle_events(decode_input(poll.data), columns):
                break
