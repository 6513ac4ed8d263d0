"""Growable tile canvas.

The canvas has a fixed column stride (``width``) and grows vertically on
demand: a write past the tail appends empty slots. Empty slots are ``None``
and render as blanks.
"""

from __future__ import annotations

from typing import Optional

from art_engine.cursor import Cursor
from art_engine.tile import Tile


class Buffer:
    """A ``width``-stride sequence of optional tiles with an owned cursor.

    Usage:
        buf = Buffer(80, 25)
        buf.put_char("A")
        buf.size_max()  # (1, 0)
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0:
            raise ValueError(f"Buffer width must be positive, got {width}")
        if height < 0:
            raise ValueError(f"Buffer height must not be negative, got {height}")

        self.width = width
        self.height = height
        self.cursor = Cursor()
        self.tiles: list[Optional[Tile]] = [None] * (width * height)

        # Highest cursor position reached after a write
        self._max_width = 0
        self._max_height = 0

        # Bounds of cells actually written (exclusive)
        self._extent_width = 0
        self._extent_height = 0

    def __len__(self) -> int:
        return len(self.tiles)

    def offset(self, x: int, y: int) -> int:
        return y * self.width + x

    # ── Tile access ───────────────────────────────────────────────────────

    def tile(self, o: int) -> Optional[Tile]:
        """Tile at offset o, allocated on demand; None past the tail."""
        if o < 0 or o >= len(self.tiles):
            return None
        if self.tiles[o] is None:
            self.tiles[o] = Tile()
        return self.tiles[o]

    def put_char(self, ch: str) -> None:
        """Write ch at the cursor with the cursor's rendition and advance."""
        cursor = self.cursor
        cursor.tile.char = ch
        o = cursor.offset(self.width)
        tile = self.expand(o).tile(o)
        tile.update(cursor.tile)
        tile.char = ch

        self._extent_width = max(self._extent_width, cursor.x + 1)
        self._extent_height = max(self._extent_height, cursor.y + 1)

        cursor.x += 1
        cursor.normalize_and_wrap(self.width)
        self._max_width = max(self._max_width, cursor.x)
        self._max_height = max(self._max_height, cursor.y)

    # ── Clearing ──────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Mark every position empty."""
        self.tiles = [None] * len(self.tiles)

    def clear_at(self, o: int) -> None:
        if 0 <= o < len(self.tiles):
            self.tiles[o] = None

    def clear_from(self, o: int) -> None:
        """Empty all positions from o to the tail."""
        for i in range(max(0, o), len(self.tiles)):
            self.tiles[i] = None

    def clear_to(self, o: int) -> None:
        """Empty all positions from the head up to and including o."""
        for i in range(min(o, len(self.tiles) - 1) + 1):
            self.tiles[i] = None

    # ── Growth ────────────────────────────────────────────────────────────

    def insert(self, o: int, n: int) -> None:
        """Splice n empty positions at offset o, shifting the tail right."""
        o = max(0, o)
        if o > len(self.tiles):
            self.tiles.extend([None] * (o - len(self.tiles)))
        self.tiles[o:o] = [None] * n

    def expand(self, o: int) -> Buffer:
        """Grow the canvas so offset o is valid."""
        missing = o - len(self.tiles) + 1
        if missing > 0:
            self.tiles.extend([None] * missing)
        return self

    def normalize(self) -> Buffer:
        """Fit the cursor within the allocated canvas."""
        w, h = self.size()
        self.cursor.normalize(w, h)
        return self

    # ── Geometry ──────────────────────────────────────────────────────────

    def size(self) -> tuple[int, int]:
        """Allocated canvas size in cells."""
        return self.width, 1 + (len(self.tiles) - 1) // self.width

    def size_max(self) -> tuple[int, int]:
        """Highest cursor column and row reached by writes."""
        return self._max_width, self._max_height

    def extent(self) -> tuple[int, int]:
        """Columns and rows spanned by written cells."""
        return self._extent_width, self._extent_height
