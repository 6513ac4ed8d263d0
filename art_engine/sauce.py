"""SAUCE (Standard Architecture for Universal Comment Extensions) reader.

A SAUCE record is a 128-byte trailer at the end of a file, optionally
preceded by a comment block (``COMNT`` followed by 64-byte lines). Only the
fields needed to size the canvas are interpreted; the rest are exposed as-is.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Optional

RECORD_SIZE = 128
COMMENT_LINE_SIZE = 64
SAUCE_ID = b"SAUCE"
COMMENT_ID = b"COMNT"

# id, version, title, author, group, date, file size, data type, file type,
# tinfo1-4, comment count, flags, tinfos
_RECORD = struct.Struct("<5s2s35s20s20s8sIBBHHHHBB22s")

DATA_TYPE_CHARACTER = 1
FILE_TYPE_ASCII = 0
FILE_TYPE_ANSI = 1


def _text(raw: bytes) -> str:
    return raw.decode("cp437").rstrip("\x00 ")


@dataclass
class SauceRecord:
    """Decoded SAUCE trailer."""

    version: str = "00"
    title: str = ""
    author: str = ""
    group: str = ""
    date: str = ""
    file_size: int = 0
    data_type: int = 0
    file_type: int = 0
    tinfo1: int = 0
    tinfo2: int = 0
    tinfo3: int = 0
    tinfo4: int = 0
    comments: int = 0
    tflags: int = 0
    tinfos: str = ""
    comment_lines: list[str] = field(default_factory=list)

    @property
    def is_character(self) -> bool:
        return self.data_type == DATA_TYPE_CHARACTER

    @property
    def canvas_width(self) -> Optional[int]:
        """Intended column count for ASCII/ANSi character data."""
        if (
            self.is_character
            and self.file_type in (FILE_TYPE_ASCII, FILE_TYPE_ANSI)
            and self.tinfo1 > 0
        ):
            return self.tinfo1
        return None


def _parse_comments(data: bytes, record_start: int, count: int) -> list[str]:
    block_size = len(COMMENT_ID) + count * COMMENT_LINE_SIZE
    block_start = record_start - block_size
    if count == 0 or block_start < 0:
        return []
    block = data[block_start:record_start]
    if not block.startswith(COMMENT_ID):
        return []
    body = block[len(COMMENT_ID):]
    return [
        _text(body[i:i + COMMENT_LINE_SIZE])
        for i in range(0, len(body), COMMENT_LINE_SIZE)
    ]


def parse_sauce(data: bytes) -> Optional[SauceRecord]:
    """Decode the SAUCE trailer of data, or None when there is none."""
    record_start = len(data) - RECORD_SIZE
    if record_start < 0:
        return None
    raw = data[record_start:]
    if not raw.startswith(SAUCE_ID):
        return None

    (_, version, title, author, group, date, file_size, data_type, file_type,
     tinfo1, tinfo2, tinfo3, tinfo4, comments, tflags, tinfos) = _RECORD.unpack(raw)

    return SauceRecord(
        version=_text(version),
        title=_text(title),
        author=_text(author),
        group=_text(group),
        date=_text(date),
        file_size=file_size,
        data_type=data_type,
        file_type=file_type,
        tinfo1=tinfo1,
        tinfo2=tinfo2,
        tinfo3=tinfo3,
        tinfo4=tinfo4,
        comments=comments,
        tflags=tflags,
        tinfos=_text(tinfos),
        comment_lines=_parse_comments(data, record_start, comments),
    )


def strip_sauce(data: bytes, record: Optional[SauceRecord]) -> bytes:
    """Remove the SAUCE trailer, its comment block and EOF marker."""
    if record is None:
        return data
    end = len(data) - RECORD_SIZE
    if record.comment_lines:
        end -= len(COMMENT_ID) + len(record.comment_lines) * COMMENT_LINE_SIZE
    if end > 0 and data[end - 1] == 0x1A:
        end -= 1
    return data[:max(0, end)]
