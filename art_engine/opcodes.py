"""CSI handlers keyed by ECMA-48 final byte.

Each handler takes the target buffer and the collected parameter sequence and
mutates the buffer's cursor or tiles. Cursor motions default to 1 when the
parameter is omitted; erase modes default to 0.
"""

from __future__ import annotations

import logging
from typing import Callable

from art_engine.buffer import Buffer
from art_engine.sequence import Sequence
from art_engine.tile import DEFAULT_BACKGROUND, DEFAULT_COLOR, IDEOGRAM_ALL, Attrib

logger = logging.getLogger(__name__)

Handler = Callable[[Buffer, Sequence], None]


# ── ECMA-48 final bytes (no intermediate bytes) ───────────────────────────

CUU = ord("A")  # Cursor Up
CUD = ord("B")  # Cursor Down
CUF = ord("C")  # Cursor Right
CUB = ord("D")  # Cursor Left
CNL = ord("E")  # Cursor Next Line
CPL = ord("F")  # Cursor Preceding Line
CHA = ord("G")  # Cursor Character Absolute
CUP = ord("H")  # Cursor Position
ED = ord("J")   # Erase in Page
EL = ord("K")   # Erase in Line
IL = ord("L")   # Insert Line
HVP = ord("f")  # Character and Line Position
SGR = ord("m")  # Select Graphic Rendition


# ── Cursor motion ─────────────────────────────────────────────────────────

def cursor_character_absolute(buf: Buffer, seq: Sequence) -> None:
    buf.cursor.x = max(0, seq.param(0, 1) - 1)


def cursor_next_line(buf: Buffer, seq: Sequence) -> None:
    buf.cursor.x = 0
    buf.cursor.down(seq.param(0, 1))


def cursor_preceding_line(buf: Buffer, seq: Sequence) -> None:
    buf.cursor.x = 0
    buf.cursor.up(seq.param(0, 1))


def cursor_left(buf: Buffer, seq: Sequence) -> None:
    buf.cursor.left(seq.param(0, 1))


def cursor_down(buf: Buffer, seq: Sequence) -> None:
    buf.cursor.down(seq.param(0, 1))


def cursor_right(buf: Buffer, seq: Sequence) -> None:
    buf.cursor.right(seq.param(0, 1))


def cursor_up(buf: Buffer, seq: Sequence) -> None:
    buf.cursor.up(seq.param(0, 1))


def cursor_position(buf: Buffer, seq: Sequence) -> None:
    """CUP / HVP: row;col, both 1-based."""
    row = seq.param(0, 1)
    col = seq.param(1, 1)
    buf.cursor.goto(col - 1, row - 1)


# ── Erasing ───────────────────────────────────────────────────────────────

def erase_in_page(buf: Buffer, seq: Sequence) -> None:
    mode = seq.param(0, 0)
    o = buf.cursor.offset(buf.width)
    if mode == 0:
        buf.clear_from(o)
    elif mode == 1:
        buf.clear_to(o)
    else:
        buf.clear()


def erase_in_line(buf: Buffer, seq: Sequence) -> None:
    mode = seq.param(0, 0)
    x, y = buf.cursor.x, buf.cursor.y
    if mode == 0:  # cursor to end of line
        start, end = buf.offset(x, y), buf.offset(0, y + 1) - 1
    elif mode == 1:  # start of line to cursor
        start, end = buf.offset(0, y), buf.offset(x, y)
    elif mode == 2:  # whole line
        start, end = buf.offset(0, y), buf.offset(0, y + 1) - 1
    else:
        logger.debug("unsupported EL mode %d", mode)
        return

    start = max(start, 0)
    end = min(end, len(buf) - 1)
    for o in range(start, end + 1):
        buf.clear_at(o)


def insert_line(buf: Buffer, seq: Sequence) -> None:
    n = seq.param(0, 1)
    o = buf.width * buf.normalize().cursor.y
    for _ in range(n):
        buf.insert(o, buf.width)


# ── Select Graphic Rendition ─────────────────────────────────────────────

_SGR_SET: dict[int, Attrib] = {
    1: Attrib.BOLD,
    2: Attrib.FAINT,
    3: Attrib.ITALICS,
    5: Attrib.BLINK,
    6: Attrib.BLINK,
    7: Attrib.NEGATIVE,
    8: Attrib.CONCEAL,
    9: Attrib.CROSS_OUT,
    20: Attrib.GOTHIC,
    51: Attrib.FRAME,
    52: Attrib.ENCIRCLE,
    53: Attrib.OVERLINE,
    60: Attrib.IDEOGRAM_UNDERLINE,
    61: Attrib.IDEOGRAM_UNDERLINE_DOUBLE,
    62: Attrib.IDEOGRAM_OVERLINE,
    63: Attrib.IDEOGRAM_OVERLINE_DOUBLE,
    64: Attrib.IDEOGRAM_STRESS_MARKING,
}

_SGR_CLEAR: dict[int, Attrib] = {
    22: Attrib.BOLD | Attrib.FAINT,
    23: Attrib.ITALICS | Attrib.GOTHIC,
    24: Attrib.UNDERLINE | Attrib.UNDERLINE_DOUBLE,
    25: Attrib.BLINK,
    27: Attrib.NEGATIVE,
    28: Attrib.CONCEAL,
    29: Attrib.CROSS_OUT,
    54: Attrib.FRAME | Attrib.ENCIRCLE,
    55: Attrib.OVERLINE,
    65: IDEOGRAM_ALL,
}


def select_graphic_rendition(buf: Buffer, seq: Sequence) -> None:
    """Apply SGR parameters left to right to the cursor template."""
    cursor = buf.cursor
    codes = seq.ints() or [0]

    for n in codes:
        t = cursor.tile

        if n == 0:
            cursor.reset_attrib()
        elif n in _SGR_SET:
            t.set(_SGR_SET[n])
        elif n in _SGR_CLEAR:
            t.unset(_SGR_CLEAR[n])
        elif n == 4:
            t.unset(Attrib.UNDERLINE_DOUBLE)
            t.set(Attrib.UNDERLINE)
        elif n == 21:
            t.unset(Attrib.UNDERLINE)
            t.set(Attrib.UNDERLINE_DOUBLE)
        elif 10 <= n <= 19:
            t.font = n - 10
        elif 30 <= n <= 37:
            t.color = n - 30
        elif n == 39:
            t.color = DEFAULT_COLOR
        elif 40 <= n <= 47:
            t.background = n - 40
        elif n == 49:
            t.background = DEFAULT_BACKGROUND
        elif 90 <= n <= 97:
            t.color = n - 90
        elif 100 <= n <= 107:
            t.background = n - 100
        else:
            # 38 and 48 are reserved here, following codes still apply
            logger.debug("unsupported SGR %d", n)


# ── Dispatch table ────────────────────────────────────────────────────────

OPCODES: dict[int, Handler] = {
    CHA: cursor_character_absolute,
    CNL: cursor_next_line,
    CPL: cursor_preceding_line,
    CUB: cursor_left,
    CUD: cursor_down,
    CUF: cursor_right,
    CUP: cursor_position,
    CUU: cursor_up,
    ED: erase_in_page,
    EL: erase_in_line,
    IL: insert_line,
    HVP: cursor_position,
    SGR: select_graphic_rendition,
}
