"""Raw terminal input decoding.

Turns one ``os.read`` worth of bytes into discrete input events. A read may
hold any number of keystrokes, escape sequences and mouse reports glued
together, so the buffer is first cut at every ESC byte and each escape body
is tokenized as CSI (``[`` params final), SS3 (``O`` + one byte) or an
Alt-prefixed character. Tokens are then matched against explicit tables;
anything unrecognized from an escape sequence becomes ``UNKNOWN``.

Decoding never raises and keeps no state between reads.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Iterator

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

ESC = "\x1b"
NUL = "\x00"

ESCAPE_SEQUENCE_KEYS: dict[str, str] = {
    "[A": "UP",
    "[B": "DOWN",
    "[C": "RIGHT",
    "[D": "LEFT",
    "OA": "UP",
    "OB": "DOWN",
    "OC": "RIGHT",
    "OD": "LEFT",
    "[H": "HOME",
    "[F": "END",
    "OH": "HOME",
    "OF": "END",
    "[1~": "HOME",
    "[7~": "HOME",
    "[4~": "END",
    "[8~": "END",
    "[2~": "INSERT",
    "[3~": "DELETE",
    "[5~": "PAGE_UP",
    "[6~": "PAGE_DOWN",
    "OP": "F1",
    "OQ": "F2",
    "OR": "F3",
    "OS": "F4",
    "[11~": "F1",
    "[12~": "F2",
    "[13~": "F3",
    "[14~": "F4",
    "[15~": "F5",
    "[17~": "F6",
    "[18~": "F7",
    "[19~": "F8",
    "[20~": "F9",
    "[21~": "F10",
    "[23~": "F11",
    "[24~": "F12",
    "[200~": "PASTE_START",
    "[201~": "PASTE_END",
}

CONTROL_KEYS: dict[str, str] = {
    "\r": "ENTER",
    "\n": "ENTER",
    "\x7f": "BACKSPACE",
    "\x08": "BACKSPACE",
    "\t": "TAB",
    " ": "SPACE",
    "\x01": "CTRL_A",
    "\x03": "CTRL_C",
    "\x04": "CTRL_D",
    "\x0e": "CTRL_N",
    "\x11": "CTRL_Q",
    "\x12": "CTRL_R",
    "\x14": "CTRL_T",
}

SGR_MOUSE_ACTIONS: dict[int, str] = {
    0: MOUSE_CLICK,
    64: MOUSE_SCROLL_UP,
    65: MOUSE_SCROLL_DOWN,
}

_SGR_MOUSE_RE = re.compile(r"\[<\d+;\d+;\d+[Mm]")

_SEQ_CSI = "csi"
_SEQ_SS3 = "ss3"
_SEQ_ALT = "alt"


def _strip_stray_bytes(token: str) -> str:
    return token.replace(ESC, "").replace(NUL, "")


def _parse_sgr_mouse(token: str) -> MouseEvent | None:
    """Parse ``[<action;column;row`` + ``M``/``m`` into a mouse press event.

    Releases (``m``) and actions other than click/wheel are dropped.
    """
    terminator = token[-1]
    if terminator != "M":
        return None
    parts = token[2:-1].split(";")
    if len(parts) != 3:
        return None
    try:
        action, column, row = (int(part) for part in parts)
    except ValueError:
        return None
    kind = SGR_MOUSE_ACTIONS.get(action)
    if kind is None:
        return None
    return MouseEvent(kind=kind, column=column, row=row)


def dropped_paths(text: str) -> list[str] | None:
    """Return paths when ``text`` is a single-quoted drag-and-drop payload.

    Terminals deliver dropped files as shell-quoted words, sometimes followed
    by a space, e.g. ``'/tmp/a b.txt' '/tmp/c'``.
    """
    candidate = text.strip()
    if len(candidate) < 3 or not (candidate.startswith("'") and candidate.endswith("'")):
        return None
    try:
        words = shlex.split(candidate)
    except ValueError:
        return None
    if not words or any(not word for word in words):
        return None
    return words


def decode_token(token: str, from_escape: bool = False) -> InputEvent | None:
    """Classify one token, or return ``None`` when it carries nothing usable."""
    token = _strip_stray_bytes(token)
    if not token:
        return None
    if token.startswith("[<") and token[-1].isalpha():
        return _parse_sgr_mouse(token)
    if not from_escape:
        paths = dropped_paths(token)
        if paths is not None and len(paths) == 1:
            return PathDropEvent(paths[0])
    key = ESCAPE_SEQUENCE_KEYS.get(token)
    if key is not None:
        return KeyEvent(key, token)
    if from_escape and len(token) > 1:
        return KeyEvent(UNKNOWN_KEY, token)
    if len(token) == 1:
        key = CONTROL_KEYS.get(token)
        if key is not None:
            return KeyEvent(key, token)
        if ord(token) < 0x20:
            return KeyEvent(UNKNOWN_KEY, token)
    return TextEvent(token)


def _decode_plain(text: str) -> Iterator[InputEvent]:
    """Decode text that contains no escape sequences."""
    text = _strip_stray_bytes(text).replace("\r\n", "\r")
    if not text:
        return
    if _SGR_MOUSE_RE.fullmatch(text):
        event = decode_token(text, from_escape=True)
        if event is not None:
            yield event
        return
    paths = dropped_paths(text)
    if paths is not None:
        for path in paths:
            yield PathDropEvent(path)
        return
    tokens = list(text) if len(text) > 1 else [text]
    for token in tokens:
        event = decode_token(token)
        if event is not None:
            yield event


def _decode_paste(text: str) -> Iterator[InputEvent]:
    """Decode a bracketed paste body as a drop or one literal text run."""
    text = _strip_stray_bytes(text)
    if not text:
        return
    paths = dropped_paths(text)
    if paths is not None:
        for path in paths:
            yield PathDropEvent(path)
        return
    yield TextEvent(text.replace("\r\n", " ").replace("\r", " ").replace("\n", " "))


def _split_sequence(body: str) -> tuple[str, str, str]:
    """Split an escape body into ``(kind, sequence, trailing_text)``.

    ``sequence`` is empty for truncated or malformed sequences, which are
    dropped by the caller.
    """
    lead = body[0]
    if lead == "[":
        i = 1
        while i < len(body) and 0x20 <= ord(body[i]) <= 0x3F:
            i += 1
        if i < len(body) and 0x40 <= ord(body[i]) <= 0x7E:
            return _SEQ_CSI, body[: i + 1], body[i + 1 :]
        return _SEQ_CSI, "", body[i:]
    if lead == "O" and len(body) >= 2:
        return _SEQ_SS3, body[:2], body[2:]
    return _SEQ_ALT, lead, body[1:]


def decode_input(data: bytes) -> Iterator[InputEvent]:
    """Yield input events for one raw read, in arrival order."""
    text = data.decode("utf-8", errors="replace")
    if not text:
        return
    if ESC not in text:
        yield from _decode_plain(text)
        return

    head, *bodies = text.split(ESC)
    if head:
        yield from _decode_plain(head)

    paste_chunks: list[str] | None = None
    for body in bodies:
        if not body:
            if paste_chunks is None:
                yield KeyEvent("ESC", "")
            continue
        kind, sequence, rest = _split_sequence(body)
        event = decode_token(sequence, from_escape=kind != _SEQ_ALT) if sequence else None
        if isinstance(event, KeyEvent) and event.key == "PASTE_START":
            paste_chunks = []
        elif isinstance(event, KeyEvent) and event.key == "PASTE_END":
            if paste_chunks is not None:
                yield from _decode_paste("".join(paste_chunks))
            paste_chunks = None
        elif paste_chunks is not None:
            if kind == _SEQ_ALT and sequence:
                paste_chunks.append(sequence)
        elif event is not None:
            yield event
        if rest:
            if paste_chunks is not None:
                paste_chunks.append(rest)
            else:
                yield from _decode_plain(rest)
    if paste_chunks:
        yield from _decode_paste("".join(paste_chunks))


__all__ = [
    "CONTROL_KEYS",
    "ESCAPE_SEQUENCE_KEYS",
    "SGR_MOUSE_ACTIONS",
    "decode_input",
    "decode_token",
    "dropped_paths",
]
