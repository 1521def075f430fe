"""External program launch helpers.

Opening files and running top-bar commands happen detached from the TUI.
The interactive shell temporarily leaves raw/alternate-screen mode.
Every helper returns an error message string instead of raising so the
caller can show it as a status message.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

DEFAULT_SHELL = "/bin/sh"


def default_open_command() -> str:
    """Return the desktop "open with default application" command."""
    return "open" if sys.platform == "darwin" else "xdg-open"


def spawn_detached(command: str, args: Sequence[str], cwd: Path) -> str | None:
    """Start ``command`` in its own session with stdio detached from the TUI."""
    logger.debug("Spawning {} {} in {}", command, list(args), cwd)
    try:
        subprocess.Popen(
            [command, *args],
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning("Failed to launch {}: {}", command, exc)
        return f"Failed to launch {command}: {exc.strerror or exc}"
    return None


def open_with_default_handler(path: Path) -> str | None:
    return spawn_detached(default_open_command(), [str(path)], path.parent)


def spawn_interactive_shell(
    cwd: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    """Run ``$SHELL`` in ``cwd`` on the normal screen and wait for it to exit.

    Ctrl-C typed in the shell also reaches this process; it must not kill the
    shell or the browser, so interrupts only resume the wait.
    """
    shell = os.environ.get("SHELL", "").strip() or DEFAULT_SHELL
    disable_tui_mode()
    try:
        process = subprocess.Popen([shell], cwd=str(cwd))
        while True:
            try:
                process.wait()
                break
            except KeyboardInterrupt:
                logger.debug("Ignoring interrupt while shell {} runs", shell)
    except OSError as exc:
        logger.warning("Failed to launch shell {}: {}", shell, exc)
        return f"Failed to launch shell: {exc.strerror or exc}"
    finally:
        enable_tui_mode()
    return None
