"""Renderers over a finished emulator's tile grid.

Outputs:
  - Plain text (characters only)
  - HTML (<pre> with one <span> per run of identical rendition)
  - PNG-ready Pillow image (one font cell per tile)

Renderers only read ``tiles``, ``width``, ``extent()`` and ``palette`` from
the emulator.
"""

from __future__ import annotations

import html
from typing import Optional

from PIL import Image, ImageDraw

from art_engine.emulator import AnsiEmulator
from art_engine.fonts import MISSING_GLYPH, FontStack, resolve_font_stack
from art_engine.palette import Palette
from art_engine.tile import DEFAULT_BACKGROUND, Attrib, Tile

# Absent cells render as a blank in the default rendition
BLANK = Tile()


def _rows(emulator: AnsiEmulator):
    """Yield lists of tiles (or None) for each row of the written extent."""
    # extent() rather than size_max(): size_max lags the last row and
    # drops rows filled to full width
    cols, rows = emulator.extent()
    for y in range(rows):
        yield [emulator.tile_at(x, y) for x in range(cols)]


# ── Plain text ────────────────────────────────────────────────────────────

def render_text(emulator: AnsiEmulator) -> str:
    """Render characters only, one line per row."""
    lines = []
    for row in _rows(emulator):
        lines.append("".join(t.char if t is not None else " " for t in row))
        lines.append("\n")
    return "".join(lines)


# ── HTML ──────────────────────────────────────────────────────────────────

def resolve_colors(tile: Tile) -> tuple[int, int]:
    """Foreground and background palette indices after attribute effects.

    BOLD brightens the foreground and BLINK the background (iCE colours),
    NEGATIVE swaps them afterwards and CONCEAL hides the glyph.
    """
    fg, bg = tile.color, tile.background
    if tile.has(Attrib.BOLD) and fg < 8:
        fg += 8
    if tile.has(Attrib.BLINK) and bg < 8:
        bg += 8
    if tile.has(Attrib.NEGATIVE):
        fg, bg = bg, fg
    if tile.has(Attrib.CONCEAL):
        fg = bg
    return fg, bg


def tile_classes(tile: Tile) -> str:
    """CSS class list for a tile's rendition."""
    fg, bg = resolve_colors(tile)
    classes = [f"b{bg:02x}", f"f{fg:02x}"]
    if tile.has(Attrib.ITALICS):
        classes.append("i")
    if tile.has(Attrib.UNDERLINE):
        classes.append(f"u{fg:02x}")
    if tile.has(Attrib.UNDERLINE_DOUBLE):
        classes.append("ud")
    if tile.has(Attrib.CROSS_OUT):
        classes.append("x")
    return " ".join(classes)


def escape_char(char: str) -> str:
    if char.isprintable():
        return html.escape(char)
    return f"&#x{ord(char):02x};"


def render_stylesheet(palette: Palette) -> str:
    """CSS rules for every palette entry plus attribute classes."""
    rules = []
    for i, color in enumerate(palette):
        c = color.hex
        rules.append(
            f".f{i:02x}{{color:{c}}} "
            f".b{i:02x}{{background-color:{c}}} "
            f".u{i:02x}{{border-bottom:1px solid {c}}}"
        )
    rules.append(
        ".i{font-style:italic} .u{border-bottom:1px solid} "
        ".ud{border-bottom:3px double} .x{text-decoration:line-through}"
    )
    return "\n".join(rules)


def render_html(
    emulator: AnsiEmulator,
    palette: Optional[Palette] = None,
    stylesheet: Optional[str] = None,
) -> str:
    """Render a standalone HTML document."""
    palette = palette or emulator.palette
    parts = ["<!doctype html>\n"]
    if stylesheet:
        parts.append(f'<link rel="stylesheet" href="{html.escape(stylesheet)}">\n')
    parts.append('<style type="text/css">\n')
    parts.append(render_stylesheet(palette))
    parts.append("\n</style>\n")

    parts.append("<pre>")
    current = None
    for y, row in enumerate(_rows(emulator)):
        if y > 0:
            parts.append("\n")
        for tile in row:
            tile = tile if tile is not None else BLANK
            classes = tile_classes(tile)
            if classes != current:
                if current is not None:
                    parts.append("</span>")
                parts.append(f'<span class="{classes}">')
                current = classes
            parts.append(escape_char(tile.char))
    if current is not None:
        parts.append("</span>")
    parts.append("</pre>\n")
    return "".join(parts)


# ── Image ─────────────────────────────────────────────────────────────────

def render_image(
    emulator: AnsiEmulator,
    palette: Optional[Palette] = None,
    font_stack: Optional[FontStack] = None,
) -> Image.Image:
    """Render the tile grid to an RGB image, one font cell per tile."""
    palette = palette or emulator.palette
    font_stack = font_stack or resolve_font_stack()
    cell_w, cell_h = font_stack.cell_size()
    cols, rows = emulator.extent()

    img = Image.new(
        "RGB",
        (max(1, cols * cell_w), max(1, rows * cell_h)),
        palette[DEFAULT_BACKGROUND].rgb,
    )
    draw = ImageDraw.Draw(img)

    for y, row in enumerate(_rows(emulator)):
        for x, tile in enumerate(row):
            if tile is None:
                continue
            fg, bg = resolve_colors(tile)
            fg_rgb = palette[fg % len(palette)].rgb
            left, top = x * cell_w, y * cell_h
            draw.rectangle(
                (left, top, left + cell_w - 1, top + cell_h - 1),
                fill=palette[bg % len(palette)].rgb,
            )

            char = tile.char
            if not char.isspace() and char.isprintable():
                font = font_stack.get_font_for_char(char)
                if font is None:
                    char, font = MISSING_GLYPH, font_stack.primary
                draw.text((left, top), char, fill=fg_rgb, font=font)

            if tile.has(Attrib.UNDERLINE) or tile.has(Attrib.UNDERLINE_DOUBLE):
                base = top + cell_h - 1
                draw.line((left, base, left + cell_w - 1, base), fill=fg_rgb)
                if tile.has(Attrib.UNDERLINE_DOUBLE):
                    draw.line((left, base - 2, left + cell_w - 1, base - 2), fill=fg_rgb)

    return img
