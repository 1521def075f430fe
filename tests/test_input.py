"""Regression tests for raw-input decoding.

Covers escape-sequence splitting, SGR mouse reports, control-key mapping,
drag-and-drop paths and bracketed paste. Decoding must never raise on
malformed bytes because terminals deliver partial sequences.
"""

from __future__ import annotations

import os
import unittest

from lazybrowse.input import (
    MOUSE_CLICK,
    MOUSE_SCROLL_DOWN,
    MOUSE_SCROLL_UP,
    UNKNOWN_KEY,
    KeyEvent,
    MouseEvent,
    PathDropEvent,
    TextEvent,
    decode_input,
    decode_token,
    poll_input,
)


def _decode(data: bytes) -> list:
    return list(decode_input(data))


def _keys(data: bytes) -> list[str]:
    return [event.key for event in decode_input(data) if isinstance(event, KeyEvent)]


class PlainTextDecodingTests(unittest.TestCase):
    def test_multi_character_text_splits_into_one_event_per_character(self) -> None:
        self.assertEqual(_decode(b"abc"), [TextEvent("a"), TextEvent("b"), TextEvent("c")])

    def test_single_character_is_one_text_event(self) -> None:
        self.assertEqual(_decode(b"x"), [TextEvent("x")])

    def test_empty_read_yields_nothing(self) -> None:
        self.assertEqual(_decode(b""), [])

    def test_utf8_character_stays_one_token(self) -> None:
        self.assertEqual(_decode("é".encode("utf-8")), [TextEvent("é")])

    def test_invalid_utf8_does_not_raise(self) -> None:
        self.assertEqual(_decode(b"\xff"), [TextEvent("\ufffd")])

    def test_nul_bytes_are_stripped(self) -> None:
        self.assertEqual(_decode(b"a\x00b"), [TextEvent("a"), TextEvent("b")])


class ControlKeyDecodingTests(unittest.TestCase):
    def test_control_bytes_map_to_named_keys(self) -> None:
        cases = {
            b"\r": "ENTER",
            b"\x7f": "BACKSPACE",
            b"\x03": "CTRL_C",
            b"\x04": "CTRL_D",
            b"\x11": "CTRL_Q",
            b"\x12": "CTRL_R",
            b"\x14": "CTRL_T",
            b" ": "SPACE",
            b"\t": "TAB",
        }
        for data, expected in cases.items():
            with self.subTest(data=data):
                self.assertEqual(_keys(data), [expected])

    def test_crlf_pair_is_a_single_enter(self) -> None:
        self.assertEqual(_keys(b"\r\n"), ["ENTER"])

    def test_unmapped_control_byte_is_unknown(self) -> None:
        self.assertEqual(_keys(b"\x02"), [UNKNOWN_KEY])


class EscapeSequenceDecodingTests(unittest.TestCase):
    def test_arrow_and_delete_sequences(self) -> None:
        self.assertEqual(_keys(b"\x1b[A\x1b[B\x1b[D\x1b[3~"), ["UP", "DOWN", "LEFT", "DELETE"])

    def test_key_event_keeps_raw_token_without_escape(self) -> None:
        self.assertEqual(_decode(b"\x1b[A"), [KeyEvent("UP", "[A")])

    def test_function_keys_in_both_encodings(self) -> None:
        self.assertEqual(_keys(b"\x1bOQ"), ["F2"])
        self.assertEqual(_keys(b"\x1b[12~"), ["F2"])
        self.assertEqual(_keys(b"\x1b[19~"), ["F8"])

    def test_lone_escape_is_esc_key(self) -> None:
        self.assertEqual(_keys(b"\x1b"), ["ESC"])

    def test_text_after_sequence_in_same_read_is_decoded(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[Ajk"),
            [KeyEvent("UP", "[A"), TextEvent("j"), TextEvent("k")],
        )

    def test_text_before_first_escape_is_decoded(self) -> None:
        self.assertEqual(_decode(b"q\x1b[B"), [TextEvent("q"), KeyEvent("DOWN", "[B")])

    def test_alt_prefixed_character_becomes_text(self) -> None:
        self.assertEqual(_decode(b"\x1bx"), [TextEvent("x")])

    def test_unknown_csi_sequence_is_unknown_key(self) -> None:
        self.assertEqual(_keys(b"\x1b[99~"), [UNKNOWN_KEY])

    def test_truncated_sequence_is_discarded(self) -> None:
        self.assertEqual(_decode(b"\x1b["), [])
        self.assertEqual(_decode(b"\x1b[1;5"), [])


class MouseDecodingTests(unittest.TestCase):
    def test_left_press_decodes_to_click_at_column_and_row(self) -> None:
        self.assertEqual(_decode(b"\x1b[<0;12;5M"), [MouseEvent(MOUSE_CLICK, 12, 5)])

    def test_bare_token_decodes_to_click(self) -> None:
        self.assertEqual(decode_token("[<0;12;5M"), MouseEvent(MOUSE_CLICK, 12, 5))

    def test_wheel_codes(self) -> None:
        self.assertEqual(_decode(b"\x1b[<64;0;0M"), [MouseEvent(MOUSE_SCROLL_UP, 0, 0)])
        self.assertEqual(_decode(b"\x1b[<65;7;3M"), [MouseEvent(MOUSE_SCROLL_DOWN, 7, 3)])

    def test_release_and_other_buttons_are_ignored(self) -> None:
        self.assertEqual(_decode(b"\x1b[<0;12;5m"), [])
        self.assertEqual(_decode(b"\x1b[<2;12;5M"), [])
        self.assertEqual(_decode(b"\x1b[<32;12;5M"), [])

    def test_press_and_release_in_one_read_yield_one_click(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[<0;3;4M\x1b[<0;3;4m"),
            [MouseEvent(MOUSE_CLICK, 3, 4)],
        )

    def test_malformed_report_never_produces_mouse_event(self) -> None:
        events = _decode(b"\x1b[<a;b;cM")
        self.assertFalse(any(isinstance(event, MouseEvent) for event in events))

    def test_mixed_keys_and_mouse(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[A\x1b[<0;1;2M"),
            [KeyEvent("UP", "[A"), MouseEvent(MOUSE_CLICK, 1, 2)],
        )


class DropAndPasteDecodingTests(unittest.TestCase):
    def test_quoted_path_is_a_drop(self) -> None:
        self.assertEqual(_decode(b"'/tmp/some file.txt' "), [PathDropEvent("/tmp/some file.txt")])

    def test_several_quoted_paths_yield_several_drops(self) -> None:
        self.assertEqual(
            _decode(b"'/tmp/a' '/tmp/b'"),
            [PathDropEvent("/tmp/a"), PathDropEvent("/tmp/b")],
        )

    def test_shell_escaped_quote_inside_path(self) -> None:
        self.assertEqual(_decode(b"'/tmp/it'\\''s'"), [PathDropEvent("/tmp/it's")])

    def test_lone_quote_is_text(self) -> None:
        self.assertEqual(_decode(b"'"), [TextEvent("'")])

    def test_bracketed_paste_is_one_text_run(self) -> None:
        self.assertEqual(_decode(b"\x1b[200~hello world\x1b[201~"), [TextEvent("hello world")])

    def test_bracketed_paste_of_quoted_path_is_a_drop(self) -> None:
        self.assertEqual(_decode(b"\x1b[200~'/home/me/x.png' \x1b[201~"), [PathDropEvent("/home/me/x.png")])

    def test_unterminated_paste_still_yields_text(self) -> None:
        self.assertEqual(_decode(b"\x1b[200~abc"), [TextEvent("abc")])


class PollInputTests(unittest.TestCase):
    def test_returns_pending_bytes(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b[A")
            poll = poll_input(read_fd, timeout_ms=100)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(poll.data, b"\x1b[A")
        self.assertEqual(poll.signals, ())
        self.assertFalse(poll.eof)

    def test_timeout_returns_empty_poll(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            poll = poll_input(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(poll.data, b"")
        self.assertFalse(poll.eof)

    def test_closed_input_reports_eof(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            poll = poll_input(read_fd, timeout_ms=100)
        finally:
            os.close(read_fd)

        self.assertTrue(poll.eof)

    def test_wakeup_bytes_are_reported_as_signal_numbers(self) -> None:
        stdin_r, stdin_w = os.pipe()
        wake_r, wake_w = os.pipe()
        os.set_blocking(wake_r, False)
        try:
            os.write(wake_w, bytes([28, 15]))
            poll = poll_input(stdin_r, wake_r, timeout_ms=100)
        finally:
            for fd in (stdin_r, stdin_w, wake_r, wake_w):
                os.close(fd)

        self.assertEqual(poll.signals, (28, 15))
        self.assertEqual(poll.data, b"")


if __name__ == "__main__":
    unittest.main()
