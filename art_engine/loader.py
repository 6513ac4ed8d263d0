"""Load ANSI art files into an emulator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from art_engine.config import DEFAULT_HEIGHT, DEFAULT_WIDTH
from art_engine.emulator import AnsiEmulator
from art_engine.palette import Palette
from art_engine.sauce import SauceRecord, parse_sauce, strip_sauce

logger = logging.getLogger(__name__)


def canvas_width(sauce: Optional[SauceRecord], default: int = DEFAULT_WIDTH) -> int:
    """Column count for a file: the SAUCE width when present, else default."""
    if sauce is not None and sauce.canvas_width:
        return sauce.canvas_width
    return default


def load_bytes(
    data: bytes,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    palette: Optional[Palette] = None,
) -> AnsiEmulator:
    """Parse raw ANSI art bytes."""
    logger.info("creating %d x %d buffer", width, height)
    return AnsiEmulator(width, height, palette).parse(data)


def load_file(
    path: Union[str, Path],
    width: Optional[int] = None,
    height: int = DEFAULT_HEIGHT,
    palette: Optional[Palette] = None,
    use_sauce: bool = True,
) -> tuple[AnsiEmulator, Optional[SauceRecord]]:
    """Load an ANSI art file from disk.

    The canvas width is taken from ``width`` when given, else from the SAUCE
    record, else the 80-column default. Parsing stops at the SUB byte that
    precedes a SAUCE trailer.
    """
    path = Path(path)
    data = path.read_bytes()

    sauce = parse_sauce(data) if use_sauce else None
    if use_sauce and sauce is None:
        logger.info("%s: no SAUCE record", path)

    data = strip_sauce(data, sauce)

    if width is None:
        width = canvas_width(sauce)

    return load_bytes(data, width, height, palette), sauce
