"""Tests for tiles, the cursor and the growable buffer."""

import pytest

from art_engine.buffer import Buffer
from art_engine.cursor import Cursor
from art_engine.tile import DEFAULT_BACKGROUND, DEFAULT_COLOR, Attrib, Tile


class TestTile:
    def test_defaults(self):
        t = Tile()
        assert t.char == " "
        assert t.color == DEFAULT_COLOR == 7
        assert t.background == DEFAULT_BACKGROUND == 0
        assert t.attrib == Attrib.NONE
        assert t.font == 0

    def test_update_copies_rendition_only(self):
        template = Tile(char="X", color=3, background=4, attrib=Attrib.BOLD, font=2)
        t = Tile(char="a")
        t.update(template)
        assert t.char == "a"
        assert (t.color, t.background, t.attrib, t.font) == (3, 4, Attrib.BOLD, 2)

    def test_equality(self):
        assert Tile(char="a", color=1) == Tile(char="a", color=1)
        assert Tile(char="a", color=1) != Tile(char="a", color=2)
        assert Tile(attrib=Attrib.BLINK) != Tile()

    def test_not_equal_to_absent(self):
        assert Tile() != None  # noqa: E711

    def test_flags(self):
        t = Tile()
        t.set(Attrib.BOLD | Attrib.ITALICS)
        assert t.has(Attrib.BOLD)
        t.unset(Attrib.BOLD)
        assert not t.has(Attrib.BOLD)
        assert t.has(Attrib.ITALICS)


class TestCursor:
    def test_up_clamps_at_zero(self):
        c = Cursor(x=0, y=2)
        c.up(5)
        assert c.y == 0

    def test_left_clamps_at_zero(self):
        c = Cursor(x=3, y=0)
        c.left(10)
        assert c.x == 0

    def test_down_and_right_unbounded(self):
        c = Cursor()
        c.down(100)
        c.right(500)
        assert (c.x, c.y) == (500, 100)

    def test_negative_motion_clamped(self):
        c = Cursor(x=1, y=1)
        c.down(-5)
        c.right(-5)
        assert (c.x, c.y) == (0, 0)

    def test_goto_clamps(self):
        c = Cursor()
        c.goto(-1, -4)
        assert (c.x, c.y) == (0, 0)
        c.goto(9, 4)
        assert (c.x, c.y) == (9, 4)

    def test_offset(self):
        assert Cursor(x=5, y=2).offset(80) == 165

    def test_normalize(self):
        c = Cursor(x=120, y=40)
        c.normalize(80, 25)
        assert (c.x, c.y) == (79, 24)

    def test_normalize_and_wrap(self):
        c = Cursor(x=80, y=3)
        c.normalize_and_wrap(80)
        assert (c.x, c.y) == (0, 4)
        c.x = 79
        c.normalize_and_wrap(80)
        assert (c.x, c.y) == (79, 4)

    def test_reset_attrib(self):
        c = Cursor()
        c.tile.color = 2
        c.tile.background = 5
        c.tile.font = 3
        c.tile.set(Attrib.BOLD | Attrib.UNDERLINE)
        c.reset_attrib()
        assert c.tile.color == DEFAULT_COLOR
        assert c.tile.background == DEFAULT_BACKGROUND
        assert c.tile.font == 0
        assert c.tile.attrib == Attrib.NONE


class TestBufferConstruction:
    def test_initial_length(self):
        buf = Buffer(80, 25)
        assert len(buf) == 80 * 25
        assert all(t is None for t in buf.tiles)
        assert buf.size() == (80, 25)
        assert buf.size_max() == (0, 0)

    @pytest.mark.parametrize("width", [0, -1])
    def test_invalid_width(self, width):
        with pytest.raises(ValueError, match="width"):
            Buffer(width, 25)

    def test_invalid_height(self):
        with pytest.raises(ValueError, match="height"):
            Buffer(80, -1)


class TestPutChar:
    def test_writes_with_cursor_rendition(self):
        buf = Buffer(80, 25)
        buf.cursor.tile.color = 4
        buf.cursor.tile.set(Attrib.BOLD)
        buf.put_char("Z")
        t = buf.tiles[0]
        assert t.char == "Z"
        assert t.color == 4
        assert t.has(Attrib.BOLD)
        assert (buf.cursor.x, buf.cursor.y) == (1, 0)

    def test_tile_decoupled_from_cursor(self):
        buf = Buffer(80, 25)
        buf.put_char("A")
        buf.cursor.tile.color = 1
        assert buf.tiles[0].color == DEFAULT_COLOR

    def test_wraps_at_width(self):
        buf = Buffer(4, 2)
        for ch in "abcde":
            buf.put_char(ch)
        assert "".join(t.char for t in buf.tiles[:5]) == "abcde"
        assert (buf.cursor.x, buf.cursor.y) == (1, 1)

    def test_cursor_below_width_after_write(self):
        buf = Buffer(3, 1)
        for ch in "abcdefgh":
            buf.put_char(ch)
            assert buf.cursor.x < buf.width

    def test_grows_past_initial_height(self):
        buf = Buffer(10, 2)
        buf.cursor.goto(0, 7)
        buf.put_char("x")
        assert len(buf) >= 71
        assert buf.tiles[70].char == "x"
        assert buf.size() == (10, 8)

    def test_max_extent_monotonic(self):
        buf = Buffer(80, 25)
        buf.cursor.goto(10, 5)
        buf.put_char("a")
        assert buf.size_max() == (11, 5)
        buf.cursor.goto(0, 0)
        buf.put_char("b")
        assert buf.size_max() == (11, 5)

    def test_extent_counts_written_cells(self):
        buf = Buffer(4, 2)
        for ch in "abcd":
            buf.put_char(ch)
        # Cursor wrapped to (0, 1) but only row 0 holds cells
        assert buf.size_max() == (3, 1)
        assert buf.extent() == (4, 1)


class TestTileAccess:
    def test_allocates_default(self):
        buf = Buffer(80, 25)
        t = buf.tile(5)
        assert t == Tile()
        assert buf.tiles[5] is t

    def test_past_tail_is_absent(self):
        buf = Buffer(2, 2)
        assert buf.tile(4) is None
        assert buf.tile(-1) is None


class TestClearing:
    def _filled(self, n=10):
        buf = Buffer(5, 2)
        for i in range(n):
            buf.put_char(str(i))
        return buf

    def test_clear(self):
        buf = self._filled()
        buf.clear()
        assert len(buf) == 10
        assert all(t is None for t in buf.tiles)

    def test_clear_at(self):
        buf = self._filled()
        buf.clear_at(3)
        buf.clear_at(99)
        assert buf.tiles[3] is None
        assert buf.tiles[2] is not None

    def test_clear_from(self):
        buf = self._filled()
        buf.clear_from(6)
        assert all(t is not None for t in buf.tiles[:6])
        assert all(t is None for t in buf.tiles[6:])

    def test_clear_to_inclusive(self):
        buf = self._filled()
        buf.clear_to(3)
        assert all(t is None for t in buf.tiles[:4])
        assert all(t is not None for t in buf.tiles[4:])

    def test_clear_to_past_tail(self):
        buf = self._filled()
        buf.clear_to(500)
        assert all(t is None for t in buf.tiles)


class TestGrowth:
    def test_insert_shifts_tail(self):
        buf = Buffer(3, 1)
        for ch in "abc":
            buf.put_char(ch)
        buf.insert(1, 2)
        assert len(buf) == 5
        assert buf.tiles[0].char == "a"
        assert buf.tiles[1] is None and buf.tiles[2] is None
        assert buf.tiles[3].char == "b"
        assert buf.tiles[4].char == "c"

    def test_expand_preserves_contents(self):
        buf = Buffer(2, 1)
        buf.put_char("q")
        buf.expand(9)
        assert len(buf) == 10
        assert buf.tiles[0].char == "q"
        buf.expand(3)
        assert len(buf) == 10
