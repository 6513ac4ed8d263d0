"""Tests for the emulator state machine — text path, controls, CSI dispatch."""

import io

import pytest

from art_engine.emulator import CP437, AnsiEmulator, State
from art_engine.palette import VGA_PALETTE
from art_engine.render import render_text
from art_engine.tile import DEFAULT_COLOR, Attrib


def parse(data: bytes, width: int = 80, height: int = 25) -> AnsiEmulator:
    return AnsiEmulator(width, height).parse(data)


def chars(emu: AnsiEmulator, start: int, end: int) -> list:
    return [t.char if t is not None else None for t in emu.tiles[start:end]]


class TestScenarios:
    def test_single_char(self):
        emu = parse(b"A")
        assert emu.size_max() == (1, 0)
        assert emu.tiles[0].char == "A"
        assert (emu.cursor.x, emu.cursor.y) == (1, 0)

    def test_newline_keeps_column(self):
        emu = parse(b"AB\nCD")
        assert chars(emu, 0, 2) == ["A", "B"]
        assert emu.tiles[80] is None and emu.tiles[81] is None
        assert emu.tiles[82].char == "C"
        assert emu.tiles[83].char == "D"
        assert render_text(emu) == "AB  \n  CD\n"

    def test_sgr_color_then_reset(self):
        emu = parse(b"\x1b[31mX\x1b[0mY")
        x, y = emu.tiles[0], emu.tiles[1]
        assert (x.char, x.color) == ("X", 1)
        assert (y.char, y.color) == ("Y", DEFAULT_COLOR)
        assert y.attrib == Attrib.NONE

    def test_erase_page_clears_everything(self):
        emu = parse(b"A\x1b[2J B")
        assert emu.tiles[0] is None
        assert emu.tiles[1].char == " "
        assert emu.tiles[2].char == "B"
        assert emu.cursor.x == 3

    def test_cursor_position(self):
        emu = parse(b"\x1b[5;10HZ")
        assert emu.tiles[4 * 80 + 9].char == "Z"
        assert (emu.cursor.x, emu.cursor.y) == (10, 4)

    def test_tab(self):
        emu = parse(b"\tX")
        assert chars(emu, 0, 8) == [" "] * 7 + ["X"]
        assert emu.cursor.x == 8


class TestControls:
    def test_carriage_return(self):
        emu = parse(b"abc\rX")
        assert chars(emu, 0, 3) == ["X", "b", "c"]

    def test_crlf(self):
        emu = parse(b"ab\r\ncd")
        assert render_text(emu) == "ab\ncd\n"

    def test_tab_at_stop_minus_one_emits_nothing(self):
        emu = parse(b"1234567\tX")
        assert emu.tiles[7].char == "X"

    def test_sub_terminates(self):
        emu = parse(b"AB\x1aCD")
        assert chars(emu, 0, 3) == ["A", "B", None]
        assert emu.state is State.EXIT

    def test_feed_after_exit_ignored(self):
        emu = AnsiEmulator(80, 25)
        emu.feed(b"A\x1a")
        emu.feed(b"B")
        assert emu.tiles[1] is None

    def test_cp437_decoding(self):
        emu = parse(bytes([0xB0, 0xDB, 0xC9, 0x82]))
        assert chars(emu, 0, 4) == ["░", "█", "╔", "é"]

    def test_cp437_table(self):
        assert len(CP437) == 256
        assert CP437[0xDC] == "▄"


class TestEscapes:
    def test_stray_escape_written_as_text(self):
        emu = parse(b"\x1bQZ")
        assert chars(emu, 0, 3) == ["\x1b", "Q", "Z"]
        assert emu.state is State.EXIT

    def test_unknown_final_does_not_touch_tiles(self):
        plain = parse(b"AB\nC")
        noisy = parse(b"AB\x1b[?7h\x1b[s\nC\x1b[1;2;3z")
        assert plain.tiles == noisy.tiles

    def test_partial_sequence_discarded_at_eof(self):
        emu = parse(b"A\x1b[3")
        assert emu.state is State.EXIT
        assert len(emu.sequence) == 0
        assert chars(emu, 0, 2) == ["A", None]

    def test_sequence_reset_between_commands(self):
        emu = parse(b"\x1b[5C\x1b[CX")
        assert emu.tiles[6].char == "X"

    def test_handler_failure_is_logged(self, monkeypatch, caplog):
        from art_engine import opcodes

        def boom(buf, seq):
            raise RuntimeError("boom")

        monkeypatch.setitem(opcodes.OPCODES, ord("A"), boom)
        with caplog.at_level("ERROR"):
            emu = parse(b"\x1b[AX")
        assert "boom" in caplog.text
        assert emu.tiles[0].char == "X"
        assert emu.state is State.EXIT


class TestStreams:
    def test_parse_file_object(self):
        emu = AnsiEmulator(80, 25).parse(io.BytesIO(b"\x1b[32mhi"))
        assert emu.tiles[0].color == 2
        assert emu.tiles[1].char == "i"

    def test_read_error_terminates_cleanly(self):
        class Flaky(io.RawIOBase):
            def __init__(self):
                self.calls = 0

            def readable(self):
                return True

            def read(self, n=-1):
                self.calls += 1
                if self.calls == 1:
                    return b"ok"
                raise OSError("disk gone")

        emu = AnsiEmulator(80, 25).parse(Flaky())
        assert chars(emu, 0, 2) == ["o", "k"]

    def test_closed_stream_terminates_cleanly(self, caplog):
        class Closing(io.RawIOBase):
            def __init__(self):
                self.calls = 0

            def readable(self):
                return True

            def read(self, n=-1):
                self.calls += 1
                if self.calls == 1:
                    return b"AB"
                raise ValueError("I/O operation on closed file")

        with caplog.at_level("WARNING"):
            emu = AnsiEmulator(80, 25).parse(Closing())
        assert chars(emu, 0, 2) == ["A", "B"]
        assert emu.state is State.EXIT
        assert "closed file" in caplog.text
        assert emu.state is State.EXIT

    def test_sub_stops_reading(self):
        stream = io.BytesIO(b"A\x1a" + b"B" * 10000)
        emu = AnsiEmulator(80, 25).parse(stream)
        assert emu.tiles[1] is None


class TestAccessors:
    def test_defaults(self):
        emu = AnsiEmulator()
        assert emu.width == 80
        assert len(emu.tiles) == 80 * 25
        assert emu.palette is VGA_PALETTE

    def test_tile_at(self):
        emu = parse(b"\x1b[2;3Hq", width=10)
        assert emu.tile_at(2, 1).char == "q"
        assert emu.tile_at(0, 0) is None
        assert emu.tile_at(10, 0) is None
        assert emu.tile_at(0, 500) is None

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            AnsiEmulator(0, 25)
