"""ANSI art emulator: a byte-driven ECMA-48 state machine over a tile buffer.

Handles:
  - Text bytes, decoded as IBM Code Page 437
  - C0 controls: SUB (end of file), ESC, LF, CR, TAB
  - CSI sequences (ESC [ params final), dispatched through ``OPCODES``
  - Lenient input: stray ESC bytes are written as text, unknown sequences
    are logged and ignored

The emulator consumes a complete stream; parsing stops at SUB or at the end
of input, whichever comes first.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import BinaryIO, Optional, Union

from art_engine.buffer import Buffer
from art_engine.cursor import Cursor
from art_engine.opcodes import OPCODES
from art_engine.palette import VGA_PALETTE, Palette
from art_engine.sequence import Sequence
from art_engine.tile import Tile

logger = logging.getLogger(__name__)

TABSTOP = 8
READ_CHUNK = 4096

TAB = 0x09
NL = 0x0A
CR = 0x0D
SUB = 0x1A
ESC = 0x1B

# Byte → character lookup for IBM Code Page 437
CP437 = bytes(range(256)).decode("cp437")


class State(Enum):
    """Parser states."""

    TEXT = "text"
    WAIT_INTRODUCER = "wait_introducer"
    WAIT_FINAL = "wait_final"
    EXIT = "exit"


def _is_final(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


class AnsiEmulator:
    """Stateful ANSI art parser.

    Usage:
        emu = AnsiEmulator(80, 25)
        emu.parse(open("art.ans", "rb"))
        cols, rows = emu.size_max()
    """

    def __init__(
        self,
        width: int = 80,
        height: int = 25,
        palette: Optional[Palette] = None,
    ) -> None:
        self.buffer = Buffer(width, height)
        self.palette = palette or VGA_PALETTE
        self.state = State.TEXT
        self.sequence = Sequence()

    # ── Accessors for renderers ───────────────────────────────────────────

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def tiles(self) -> list[Optional[Tile]]:
        return self.buffer.tiles

    @property
    def cursor(self) -> Cursor:
        return self.buffer.cursor

    def size_max(self) -> tuple[int, int]:
        return self.buffer.size_max()

    def extent(self) -> tuple[int, int]:
        return self.buffer.extent()

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        """Tile at column x, row y without allocating; None when empty."""
        o = self.buffer.offset(x, y)
        if 0 <= x < self.width and 0 <= o < len(self.buffer.tiles):
            return self.buffer.tiles[o]
        return None

    # ── Input ─────────────────────────────────────────────────────────────

    def parse(self, source: Union[bytes, bytearray, memoryview, BinaryIO]) -> AnsiEmulator:
        """Consume a whole stream of bytes or a binary file object."""
        if isinstance(source, (bytes, bytearray, memoryview)):
            self.feed(source)
        else:
            while self.state is not State.EXIT:
                try:
                    chunk = source.read(READ_CHUNK)
                except (OSError, ValueError) as e:
                    logger.warning("read error, stopping: %s", e)
                    break
                if not chunk:
                    break
                self.feed(chunk)
        self.finish()
        return self

    def feed(self, data: Union[bytes, bytearray, memoryview]) -> None:
        """Process a chunk of input bytes."""
        for byte in bytes(data):
            if self.state is State.EXIT:
                return
            self._step(byte)

    def finish(self) -> None:
        """Terminate parsing, discarding any partial sequence."""
        self.state = State.EXIT
        self.sequence.reset()
        w, h = self.size_max()
        logger.info("screen at %d x %d", w + 1, h + 1)

    # ── State machine ─────────────────────────────────────────────────────

    def _step(self, byte: int) -> None:
        if self.state is State.TEXT:
            self._text(byte)
        elif self.state is State.WAIT_INTRODUCER:
            if byte == ord("["):
                self.state = State.WAIT_FINAL
            else:
                self.buffer.put_char(CP437[ESC])
                self.buffer.put_char(CP437[byte])
                self.state = State.TEXT
        elif self.state is State.WAIT_FINAL:
            self._control(byte)

    def _text(self, byte: int) -> None:
        buf = self.buffer
        if byte == SUB:
            self.state = State.EXIT
        elif byte == ESC:
            self.state = State.WAIT_INTRODUCER
        elif byte == NL:
            buf.cursor.y += 1
        elif byte == CR:
            buf.cursor.x = 0
        elif byte == TAB:
            k = (buf.cursor.x + 1) % TABSTOP
            if k > 0:
                for _ in range(TABSTOP - k):
                    buf.put_char(" ")
        else:
            buf.put_char(CP437[byte])

    def _control(self, byte: int) -> None:
        seq = self.sequence
        if byte == ord(";"):
            seq.flush()
            return

        if not _is_final(byte):
            seq.buffer(byte)
            return

        seq.flush()
        handler = OPCODES.get(byte)
        if handler is None:
            logger.debug("unsupported ANSI sequence <ESC>[%s%c (0x%02x)", seq, byte, byte)
        else:
            try:
                handler(self.buffer, seq)
            except Exception as e:
                logger.error("handler for <ESC>[%s%c failed: %s", seq, byte, e)
        seq.reset()
        self.state = State.TEXT
