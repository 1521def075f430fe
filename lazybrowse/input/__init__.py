"""Input-layer public API.

Low-level polling (`poll_input`), stateless byte decoding (`decode_input`)
and the key dispatch table used by the controller.
"""

from .decoder import decode_input, decode_token
from .events import (
    MOUSE_CLICK,
    MOUSE_SCROLL_DOWN,
    MOUSE_SCROLL_UP,
    UNKNOWN_KEY,
    InputEvent,
    KeyEvent,
    MouseEvent,
    PathDropEvent,
    TextEvent,
)
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import READ_CHUNK_BYTES, InputPoll, poll_input

__all__ = [
    "decode_input",
    "decode_token",
    "poll_input",
    "InputPoll",
    "READ_CHUNK_BYTES",
    "KeyComboBinding",
    "KeyComboRegistry",
    "InputEvent",
    "KeyEvent",
    "MouseEvent",
    "PathDropEvent",
    "TextEvent",
    "UNKNOWN_KEY",
    "MOUSE_CLICK",
    "MOUSE_SCROLL_UP",
    "MOUSE_SCROLL_DOWN",
]
