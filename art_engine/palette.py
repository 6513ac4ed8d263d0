"""Colour palettes: built-in CGA/VGA tables and a YAML palette registry.

Palette files live in ``art_engine/palettes/`` and define:
  - id and display name
  - a list of ``#rrggbb`` colours, overlaid onto the VGA palette from index 0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

import yaml

from art_engine.config import PALETTES_DIR


class PaletteError(Exception):
    """Raised when a palette is missing or invalid."""

    pass


@dataclass(frozen=True)
class Color:
    """An sRGB colour with 8-bit channels."""

    r: int
    g: int
    b: int

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @classmethod
    def from_hex(cls, value: str) -> Color:
        value = value.lstrip("#")
        if len(value) == 3:
            value = "".join(c * 2 for c in value)
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


@dataclass
class Palette:
    """An indexed colour table."""

    id: str
    colors: list[Color] = field(default_factory=list)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id.upper()

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> Color:
        return self.colors[index]

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)

    def copy(self, id: Optional[str] = None) -> Palette:
        return Palette(id=id or self.id, colors=list(self.colors), name=self.name)


# ── Built-in tables ───────────────────────────────────────────────────────

CGA_PALETTE = Palette(
    id="cga",
    colors=[
        Color(0x00, 0x00, 0x00),  # Black
        Color(0xAA, 0x00, 0x00),  # Red
        Color(0x00, 0xAA, 0x00),  # Green
        Color(0xAA, 0x55, 0x00),  # Brown
        Color(0x00, 0x00, 0xAA),  # Blue
        Color(0xAA, 0x00, 0xAA),  # Magenta
        Color(0x00, 0xAA, 0xAA),  # Cyan
        Color(0xAA, 0xAA, 0xAA),  # White
        Color(0x55, 0x55, 0x55),  # Bright black
        Color(0xFF, 0x55, 0x55),  # Bright red
        Color(0x55, 0xFF, 0x55),  # Bright green
        Color(0xFF, 0xFF, 0x55),  # Bright yellow
        Color(0x55, 0x55, 0xFF),  # Bright blue
        Color(0xFF, 0x55, 0xFF),  # Bright magenta
        Color(0x55, 0xFF, 0xFF),  # Bright cyan
        Color(0xFF, 0xFF, 0xFF),  # Bright white
    ],
)

CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def _build_vga() -> Palette:
    """CGA 16 + 6x6x6 colour cube + 24-step gray ramp."""
    colors = list(CGA_PALETTE.colors)
    for r in CUBE_LEVELS:
        for g in CUBE_LEVELS:
            for b in CUBE_LEVELS:
                colors.append(Color(r, g, b))
    for i in range(24):
        v = 8 + i * 10
        colors.append(Color(v, v, v))
    return Palette(id="vga", colors=colors)


VGA_PALETTE = _build_vga()

BUILTIN_PALETTES: dict[str, Palette] = {
    "vga": VGA_PALETTE,
}


# ── Loader ────────────────────────────────────────────────────────────────

def _is_hex_color(value: object) -> bool:
    if not isinstance(value, str) or not value.startswith("#"):
        return False
    digits = value[1:]
    return len(digits) in (3, 6) and all(c in "0123456789abcdefABCDEF" for c in digits)


def validate_palette_data(data: object, source: str = "<unknown>") -> list[str]:
    """Validate palette YAML data. Returns list of error messages (empty = valid)."""
    if not isinstance(data, dict):
        return [f"{source}: palette must be a mapping"]

    errors = []
    if "id" not in data:
        errors.append(f"{source}: missing required field 'id'")

    colors = data.get("colors")
    if not isinstance(colors, list) or not colors:
        errors.append(f"{source}: 'colors' must be a non-empty list")
        return errors

    if len(colors) > len(VGA_PALETTE):
        errors.append(
            f"{source}: at most {len(VGA_PALETTE)} colors allowed, got {len(colors)}"
        )
    for i, val in enumerate(colors):
        if not _is_hex_color(val):
            errors.append(f"{source}: color {i} must be a hex string (got {val!r})")

    return errors


def load_palette_from_dict(data: dict) -> Palette:
    """Build a Palette from validated data, overlaid onto VGA."""
    palette = VGA_PALETTE.copy(id=str(data["id"]))
    for i, val in enumerate(data["colors"]):
        palette.colors[i] = Color.from_hex(val)
    palette.name = data.get("name", palette.id.upper())
    return palette


def load_palette(name: str, palettes_dir: Optional[Path] = None) -> Palette:
    """Load a palette by name: built-in first, then the palettes directory."""
    if name in BUILTIN_PALETTES and palettes_dir is None:
        return BUILTIN_PALETTES[name]

    palettes_dir = palettes_dir or PALETTES_DIR
    path = palettes_dir / f"{name}.yaml"

    if not path.exists():
        available = list_palettes(palettes_dir)
        raise PaletteError(
            f"Palette '{name}' not found at {path}. "
            f"Available: {', '.join(available) or 'none'}"
        )

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise PaletteError(f"Invalid YAML in {path}: {e}") from e

    errors = validate_palette_data(data, source=str(path))
    if errors:
        raise PaletteError("Palette validation failed:\n  " + "\n  ".join(errors))

    return load_palette_from_dict(data)


def list_palettes(palettes_dir: Optional[Path] = None) -> list[str]:
    """List available palette names."""
    names = set(BUILTIN_PALETTES) if palettes_dir is None else set()
    palettes_dir = palettes_dir or PALETTES_DIR
    if palettes_dir.exists():
        names.update(p.stem for p in palettes_dir.glob("*.yaml"))
    return sorted(names)
