"""Tests for frame composition.

Every frame must be exactly ``rows`` lines of exactly ``columns`` cells,
whatever the listing, overlay or header contents are.
"""

from __future__ import annotations

from pathlib import Path
import unittest

from lazybrowse.ansi import ANSI_ESCAPE_RE, display_width
from lazybrowse.config import TopBarButton
from lazybrowse.navigation import reload
from lazybrowse.overlay import open_overlay
from lazybrowse.render import (
    REVERSE_SGR,
    SELECTED_SGR,
    encode_frame,
    format_entry_row,
    header_button_spans,
    render_frame,
)
from lazybrowse.state import BrowserState, DirEntry, NavigationState


def _state(*names: str, path: str = "/data", show_icons: bool = False) -> BrowserState:
    nav = NavigationState(current_path=Path(path), visible_rows=10)
    reload(nav, lambda _path: [DirEntry(name.rstrip("/"), name.endswith("/")) for name in names])
    return BrowserState(nav=nav, show_icons=show_icons)


def _plain(line: str) -> str:
    return ANSI_ESCAPE_RE.sub("", line)


def _button(label: str | None) -> TopBarButton:
    return TopBarButton(label=lambda _folder: label, on_activate=lambda _folder: None)


class FrameShapeTests(unittest.TestCase):
    def test_every_line_fills_exactly_the_terminal_width(self) -> None:
        long_name = "x" * 200
        state = _state("docs/", long_name, "日本語.txt", "a\nb", show_icons=True)
        state.nav.selection.add("docs")
        state.status_message = "Copied"

        for rows, columns in ((5, 20), (12, 80), (2, 7), (30, 3)):
            with self.subTest(rows=rows, columns=columns):
                lines = render_frame(state, rows, columns, [_button(" GUI ")])
                self.assertEqual(len(lines), rows)
                for line in lines:
                    self.assertEqual(display_width(line), columns)

    def test_degenerate_sizes_render_nothing(self) -> None:
        state = _state("a")

        self.assertEqual(render_frame(state, 0, 80), [])
        self.assertEqual(render_frame(state, 10, 0), [])

    def test_header_shows_folder_and_status(self) -> None:
        state = _state("a")
        state.status_message = "Copy failed: x"

        header = render_frame(state, 3, 60)[0]

        self.assertTrue(header.startswith(REVERSE_SGR))
        self.assertTrue(_plain(header).startswith(" /data/  Copy failed: x"))

    def test_root_folder_is_not_double_slashed(self) -> None:
        header = render_frame(_state("etc/", path="/"), 3, 30)[0]

        self.assertTrue(_plain(header).startswith(" / "))

    def test_rows_follow_listing_order_with_cursor_highlight(self) -> None:
        state = _state("b.txt", "a/", "c/")
        state.nav.cursor = 1

        lines = render_frame(state, 5, 20)

        self.assertEqual([_plain(line).rstrip() for line in lines[1:4]], [" c/", " a/", " b.txt"])
        self.assertTrue(lines[2].startswith(REVERSE_SGR))
        self.assertFalse(lines[1].startswith(REVERSE_SGR))
        self.assertEqual(lines[4], " " * 20)

    def test_rows_start_at_scroll_offset(self) -> None:
        state = _state(*(f"f{idx:02d}" for idx in range(30)))
        state.nav.scroll_top = 5
        state.nav.cursor = 5

        lines = render_frame(state, 4, 10)

        self.assertEqual([_plain(line).strip() for line in lines[1:]], ["f24", "f23", "f22"])

    def test_selected_row_is_marked_and_styled(self) -> None:
        state = _state("a", "b")
        state.nav.selection.add("a")

        line = render_frame(state, 3, 20)[2]

        self.assertTrue(line.startswith(SELECTED_SGR))
        self.assertEqual(_plain(line).rstrip(), "*a")

    def test_load_error_shown_in_place_of_listing(self) -> None:
        state = _state()
        state.nav.load_error = "Cannot read /data: Permission denied"

        lines = render_frame(state, 3, 50)

        self.assertEqual(_plain(lines[1]).rstrip(), " Cannot read /data: Permission denied")


class OverlayFrameTests(unittest.TestCase):
    def test_overlay_replaces_listing_with_prompt(self) -> None:
        state = _state("a", "b")
        open_overlay(state, "Do you want to delete b? [y,N]", "y", lambda _text: None)

        lines = render_frame(state, 4, 40)

        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[0], " " * 40)
        self.assertEqual(lines[1].rstrip(), "Do you want to delete b? [y,N]: y")
        self.assertEqual(lines[2:], [" " * 40, " " * 40])

    def test_single_row_overlay_is_blank(self) -> None:
        state = _state("a")
        open_overlay(state, "Rename", "a", lambda _text: None)

        self.assertEqual(render_frame(state, 1, 10), [" " * 10])


class EntryRowTests(unittest.TestCase):
    def test_icons_can_be_turned_off(self) -> None:
        self.assertEqual(format_entry_row(DirEntry("src", True), False, show_icons=False), " src/")

    def test_icon_precedes_name(self) -> None:
        row = format_entry_row(DirEntry("main.py", False), True, show_icons=True)

        self.assertTrue(row.startswith("*"))
        self.assertTrue(row.endswith(" main.py"))
        self.assertEqual(len(row), len("*") + 2 + len("main.py"))


class HeaderButtonTests(unittest.TestCase):
    def test_buttons_are_right_aligned_in_order(self) -> None:
        spans = header_button_spans(Path("/data"), 40, [_button(" A "), _button(None), _button("[BB]")])

        self.assertEqual([(span.label, span.start, span.end) for span in spans], [(" A ", 34, 36), ("[BB]", 37, 40)])

    def test_buttons_dropped_when_too_wide(self) -> None:
        self.assertEqual(header_button_spans(Path("/data"), 5, [_button(" GUI ")]), [])

    def test_header_ends_with_button_labels(self) -> None:
        header = render_frame(_state("a"), 3, 30, [_button(" GUI ")])[0]

        self.assertTrue(_plain(header).endswith(" GUI "))


class EncodeFrameTests(unittest.TestCase):
    def test_frame_homes_cursor_and_joins_with_crlf(self) -> None:
        self.assertEqual(encode_frame(["ab", "cd"]), b"\x1b[Hab\r\ncd")


if __name__ == "__main__":
    unittest.main()
