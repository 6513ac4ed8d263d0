"""Screen cell model: a decoded character plus its rendition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


DEFAULT_CHAR = " "
DEFAULT_COLOR = 7
DEFAULT_BACKGROUND = 0


class Attrib(IntFlag):
    """Rendition flags selected by SGR."""

    NONE = 0
    BOLD = 1 << 0
    FAINT = 1 << 1
    ITALICS = 1 << 2
    UNDERLINE = 1 << 3
    UNDERLINE_DOUBLE = 1 << 4
    BLINK = 1 << 5
    NEGATIVE = 1 << 6
    CONCEAL = 1 << 7
    CROSS_OUT = 1 << 8
    GOTHIC = 1 << 9
    FRAME = 1 << 10
    ENCIRCLE = 1 << 11
    OVERLINE = 1 << 12
    IDEOGRAM_UNDERLINE = 1 << 13
    IDEOGRAM_UNDERLINE_DOUBLE = 1 << 14
    IDEOGRAM_OVERLINE = 1 << 15
    IDEOGRAM_OVERLINE_DOUBLE = 1 << 16
    IDEOGRAM_STRESS_MARKING = 1 << 17


IDEOGRAM_ALL = (
    Attrib.IDEOGRAM_UNDERLINE
    | Attrib.IDEOGRAM_UNDERLINE_DOUBLE
    | Attrib.IDEOGRAM_OVERLINE
    | Attrib.IDEOGRAM_OVERLINE_DOUBLE
    | Attrib.IDEOGRAM_STRESS_MARKING
)


@dataclass
class Tile:
    """A single screen cell.

    Two tiles compare equal when every field matches; a tile never equals
    ``None`` (an absent cell).
    """

    char: str = DEFAULT_CHAR
    color: int = DEFAULT_COLOR
    background: int = DEFAULT_BACKGROUND
    attrib: Attrib = Attrib.NONE
    font: int = 0

    def update(self, template: Tile) -> None:
        """Copy rendition from template, leaving char untouched."""
        self.color = template.color
        self.background = template.background
        self.attrib = template.attrib
        self.font = template.font

    def has(self, flag: Attrib) -> bool:
        return bool(self.attrib & flag)

    def set(self, flag: Attrib) -> None:
        self.attrib |= flag

    def unset(self, flag: Attrib) -> None:
        self.attrib &= ~flag

    def __str__(self) -> str:
        return self.char
