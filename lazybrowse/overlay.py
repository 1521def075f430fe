"""Modal prompt lifecycle.

An overlay captures every key until Enter commits it or Escape cancels it.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from .state import BrowserState, OverlayState
from .status import set_status_message


def open_overlay(
    state: BrowserState,
    label: str,
    initial_text: str,
    on_commit: Callable[[str], None],
) -> OverlayState:
    """Install a prompt that intercepts subsequent input."""
    overlay = OverlayState(label=label, buffer=initial_text, on_commit=on_commit)
    state.overlay = overlay
    state.dirty = True
    return overlay


def append_text(overlay: OverlayState, run: str) -> None:
    overlay.buffer += run


def backspace(overlay: OverlayState) -> None:
    overlay.buffer = overlay.buffer[:-1]


def commit(state: BrowserState) -> None:
    """Run the prompt callback with the typed text, then close the prompt.

    Filesystem failures raised by the callback become a status message; the
    prompt closes either way.
    """
    overlay = state.overlay
    if overlay is None:
        return
    try:
        overlay.on_commit(overlay.buffer)
    except OSError as exc:
        logger.warning("{} failed: {}", overlay.label, exc)
        set_status_message(state, f"Failed: {exc.strerror or exc}")
    finally:
        if state.overlay is overlay:
            state.overlay = None
        state.dirty = True


def cancel(state: BrowserState) -> None:
    if state.overlay is not None:
        state.overlay = None
        state.dirty = True
