"""Transient status-message helpers shown in the header row."""

from __future__ import annotations

import time

from .state import BrowserState

STATUS_MESSAGE_SECONDS = 3.0


def clear_status_message(state: BrowserState) -> None:
    """Clear transient status message and its expiration timestamp."""
    state.status_message = ""
    state.status_message_until = 0.0
    state.dirty = True


def set_status_message(state: BrowserState, message: str) -> None:
    """Set transient status message visible for a fixed short interval."""
    state.status_message = message
    state.status_message_until = time.monotonic() + STATUS_MESSAGE_SECONDS
    state.dirty = True


def expire_status_message(state: BrowserState, now: float) -> bool:
    """Drop the status message once its display window has passed."""
    if state.status_message and now >= state.status_message_until:
        clear_status_message(state)
        return True
    return False
