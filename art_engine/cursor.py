"""Drawing cursor: position plus the template tile applied to every write."""

from __future__ import annotations

from dataclasses import dataclass, field

from art_engine.tile import Tile


@dataclass
class Cursor:
    """Mutable drawing head.

    All motion primitives keep ``x`` and ``y`` non-negative. The embedded
    template tile holds the rendition set by SGR and the last written char.
    """

    x: int = 0
    y: int = 0
    tile: Tile = field(default_factory=Tile)

    def up(self, n: int) -> None:
        self.y = max(0, self.y - n)

    def down(self, n: int) -> None:
        self.y = max(0, self.y + n)

    def left(self, n: int) -> None:
        self.x = max(0, self.x - n)

    def right(self, n: int) -> None:
        self.x = max(0, self.x + n)

    def goto(self, x: int, y: int) -> None:
        """Absolute move, clamped to the non-negative quadrant."""
        self.x = max(0, x)
        self.y = max(0, y)

    def offset(self, width: int) -> int:
        return self.y * width + self.x

    def normalize(self, w: int, h: int) -> None:
        """Fit the cursor inside a w x h canvas."""
        self.x = max(0, min(self.x, w - 1))
        self.y = max(0, min(self.y, h - 1))

    def normalize_and_wrap(self, w: int) -> None:
        if self.x >= w:
            self.x = 0
            self.y += 1

    def reset_attrib(self) -> None:
        """Return the template to the default rendition (SGR 0)."""
        char = self.tile.char
        self.tile = Tile(char=char)
