"""Browser bootstrap: wire collaborators, terminal and signals, then run."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from functools import partial
from pathlib import Path

from loguru import logger

from .. import fs
from ..config import TopBarButton
from ..launcher import open_with_default_handler, spawn_interactive_shell
from ..state import BrowserState, NavigationState
from .controller import BrowserCollaborators, BrowserController
from .loop import run_main_loop
from .signals import SignalWakeup
from .terminal import TerminalController


def build_collaborators(
    terminal: TerminalController,
    buttons: Sequence[TopBarButton],
) -> BrowserCollaborators:
    """Bind the real filesystem and process launcher for ``terminal``."""
    return BrowserCollaborators(
        list_directory=fs.list_directory,
        rename=fs.rename,
        remove=fs.remove,
        copy=fs.copy,
        make_directory=fs.make_directory,
        open_file=open_with_default_handler,
        open_shell=partial(
            spawn_interactive_shell,
            disable_tui_mode=terminal.disable_tui_mode,
            enable_tui_mode=terminal.enable_tui_mode,
        ),
        top_bar_buttons=tuple(buttons),
    )


def run_browser(path: Path, show_icons: bool, buttons: Sequence[TopBarButton]) -> None:
    """Browse ``path`` full-screen until the user quits.

    Raises ``termios.error`` when stdin is not a controllable terminal.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    state = BrowserState(nav=NavigationState(current_path=path), show_icons=show_icons)
    controller = BrowserController(state, build_collaborators(terminal, buttons))
    logger.info("Browsing {}", path)
    with SignalWakeup() as wakeup:
        run_main_loop(state, terminal, controller, stdin_fd, wakeup.read_fd)
