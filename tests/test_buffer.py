"""Tests for the line buffer and file loading."""

import os
import tempfile

import pytest

from tori.buffer import FileBuffer, split_lines
from tori.navigation import CursorState
from tori.navigator import Navigator


def test_line_count_and_width():
    buf = FileBuffer(["hello", "", "abc"])
    assert buf.line_count() == 3
    assert buf.line_width(0) == 5
    assert buf.line_width(1) == 0
    assert buf.line_width(2) == 3


def test_out_of_range_lines_are_empty():
    """Out-of-range indices behave like empty trailing lines, never errors."""
    buf = FileBuffer(["hello", "world"])
    assert buf.line_width(2) == 0
    assert buf.line_width(1000) == 0
    # Negative indices must not wrap around to the end
    assert buf.line_width(-1) == 0
    assert buf.line(-1) == ""


def test_empty_content_has_one_line():
    buf = FileBuffer([])
    assert buf.line_count() == 1
    assert buf.line_width(0) == 0


def test_gutter_width_is_digit_count():
    assert FileBuffer(["x"] * 9).gutter_width() == 1
    assert FileBuffer(["x"] * 10).gutter_width() == 2
    assert FileBuffer(["x"] * 9999).gutter_width() == 4
    assert FileBuffer(["x"] * 10000).gutter_width() == 5


def test_snapshot_and_restore():
    buf = FileBuffer(["hello", "world"])
    state = CursorState(cursor_x=3, cursor_y=1, desired_cursor_x=4, scroll_x=1, scroll_y=0)
    buf.restore(state)
    assert buf.cursor_x == 3
    assert buf.cursor_y == 1
    assert buf.desired_cursor_x == 4
    assert buf.scroll_x == 1
    assert buf.snapshot() == state


def test_split_lines_trailing_newline():
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("a\n\n") == ["a", ""]
    assert split_lines("") == []


def test_split_lines_crlf_and_tabs():
    assert split_lines("one\r\ntwo\r\n") == ["one", "two"]
    assert split_lines("\tx", tab_width=4) == ["    x"]
    assert split_lines("ab\tx", tab_width=4) == ["ab  x"]


def test_split_lines_replaces_control_characters():
    assert split_lines("ab\x1b[2Jcd\x0cX\n") == ["ab?[2Jcd?X"]
    assert split_lines("bell\x07 del\x7f csi\x9b") == ["bell? del? csi?"]
    # Printable non-ASCII text is left alone
    assert split_lines("caf\u00e9\u00a0ok") == ["caf\u00e9\u00a0ok"]


class TestReadFromPath:
    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, name, data: bytes):
        path = os.path.join(self.temp_dir, name)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def test_reads_lines(self):
        path = self._write("a.txt", b"first\nsecond\n")
        buf = FileBuffer.read_from_path(path)
        assert buf.content == ["first", "second"]
        assert buf.path == path
        assert buf.name == "a.txt"
        assert (buf.cursor_x, buf.cursor_y, buf.scroll_x, buf.scroll_y) == (0, 0, 0, 0)

    def test_empty_file(self):
        path = self._write("empty.txt", b"")
        buf = FileBuffer.read_from_path(path)
        assert buf.content == [""]

    def test_invalid_utf8_is_replaced(self):
        path = self._write("bin.txt", b"ok\xff\n")
        buf = FileBuffer.read_from_path(path)
        assert buf.content == ["ok\ufffd"]

    def test_escape_sequences_never_reach_the_screen(self):
        path = self._write("esc.txt", b"ab\x1b[2Jcd\x0cX\n")
        buf = FileBuffer.read_from_path(path)
        frame = Navigator(buf, 40, 5).render()
        assert not any("\x1b" in line or "\x0c" in line for line in frame.lines)
        assert frame.lines[0] == "1 ab?[2Jcd?X"
        assert buf.line_width(0) == 10

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            FileBuffer.read_from_path(os.path.join(self.temp_dir, "missing.txt"))

    def test_directory_raises_oserror(self):
        with pytest.raises(OSError):
            FileBuffer.read_from_path(self.temp_dir)


def test_name_without_path():
    assert FileBuffer(["x"]).name == "[No Name]"
