"""Font discovery, fallback chain, and CP437 glyph coverage auditing.

Handles:
  - System font discovery via fontconfig (fc-list)
  - DOS/VGA font preference ordering for image output
  - Per-character font selection for missing glyphs (Pillow workaround)
  - Glyph coverage audit of the CP437 repertoire
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Union

from PIL import ImageFont

# ── Font profiles ─────────────────────────────────────────────────────────

FONT_PROFILES: dict[str, list[str]] = {
    "dos": [
        "Px437 IBM VGA 8x16",
        "Px437 IBM VGA8",
        "Perfect DOS VGA 437",
        "Flexi IBM VGA True",
        "Web437 IBM VGA 8x16",
    ],
    "classic": [
        "DejaVu Sans Mono",
        "Liberation Mono",
        "Noto Sans Mono",
        "Cascadia Mono",
    ],
}

# Box-drawing and block fallbacks (tried after primary stack)
SYMBOL_FALLBACKS = [
    "DejaVu Sans Mono",
    "Noto Sans Symbols2",
    "Symbola",
]

DEFAULT_FONT_SIZE = 16

# Glyph drawn in place of characters no font in the stack can render
MISSING_GLYPH = "?"

AnyFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


@dataclass
class FontStack:
    """Resolved font stack with loaded Pillow font objects."""

    primary: AnyFont
    primary_path: str
    fallbacks: list[AnyFont] = field(default_factory=list)
    fallback_paths: list[str] = field(default_factory=list)
    size: int = DEFAULT_FONT_SIZE

    def get_font_for_char(self, char: str) -> Optional[AnyFont]:
        """Return the first font in the stack that can render char.

        Pillow doesn't do automatic font fallback, so we manually check
        glyph availability and select the appropriate font.
        """
        if _font_has_glyph(self.primary, char):
            return self.primary
        for fb in self.fallbacks:
            if _font_has_glyph(fb, char):
                return fb
        return None

    def cell_size(self) -> tuple[int, int]:
        """Width and height of one character cell for the primary font."""
        left, top, right, bottom = self.primary.getbbox("M")
        width = int(round(self.primary.getlength("M"))) or (right - left)
        if isinstance(self.primary, ImageFont.FreeTypeFont):
            ascent, descent = self.primary.getmetrics()
            height = ascent + descent
        else:
            height = bottom
        return max(1, width), max(1, height)


def _font_has_glyph(font: AnyFont, char: str) -> bool:
    """Check if a font can render a specific character (non-tofu)."""
    if char.isspace():
        return True
    try:
        # Use getmask to check — returns None-width for missing glyphs
        mask = font.getmask(char)
        return mask.size[0] > 0 and mask.size[1] > 0
    except Exception:
        return False


# ── System font discovery ─────────────────────────────────────────────────

@lru_cache(maxsize=1)
def discover_system_fonts() -> dict[str, str]:
    """Discover monospace fonts available on the system via fc-list.

    Returns dict mapping family name → file path.
    """
    fonts: dict[str, str] = {}
    try:
        result = subprocess.run(
            ["fc-list", ":spacing=100", "family", "file"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        for line in result.stdout.strip().split("\n"):
            if ":" not in line:
                continue
            file_part, family_part = line.split(":", 1)
            file_path = file_part.strip()
            # fc-list can return comma-separated family names
            families = [f.strip() for f in family_part.strip().split(",")]
            for fam in families:
                if fam and file_path:
                    fonts[fam] = file_path
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass
    return fonts


def find_font_path(family: str) -> Optional[str]:
    """Find a specific font family's file path on the system."""
    system_fonts = discover_system_fonts()

    if family in system_fonts:
        return system_fonts[family]

    family_lower = family.lower()
    for name, path in system_fonts.items():
        if family_lower in name.lower():
            return path

    return None


def _load_truetype(path: str, size: int) -> Optional[ImageFont.FreeTypeFont]:
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        return None


def resolve_font_stack(
    profile: str = "dos",
    size: int = DEFAULT_FONT_SIZE,
) -> FontStack:
    """Resolve a full font stack from the given profile.

    Tries each font in the profile until one loads, then adds the remaining
    profile fonts and the symbol fallbacks. Falls back to Pillow's built-in
    font when nothing is installed.
    """
    families = FONT_PROFILES.get(profile, FONT_PROFILES["dos"])

    loaded: list[tuple[AnyFont, str]] = []
    seen: set[str] = set()
    for fam in families + SYMBOL_FALLBACKS:
        path = find_font_path(fam)
        if not path or path in seen:
            continue
        seen.add(path)
        font = _load_truetype(path, size)
        if font is not None:
            loaded.append((font, path))

    if not loaded:
        return FontStack(
            primary=ImageFont.load_default(),
            primary_path="<default>",
            size=size,
        )

    (primary, primary_path), rest = loaded[0], loaded[1:]
    return FontStack(
        primary=primary,
        primary_path=primary_path,
        fallbacks=[font for font, _ in rest],
        fallback_paths=[path for _, path in rest],
        size=size,
    )


# ── Glyph audit ──────────────────────────────────────────────────────────

@dataclass
class GlyphAuditResult:
    """Result of auditing glyph coverage for a text corpus."""

    total_chars: int = 0
    covered: int = 0
    missing: list[str] = field(default_factory=list)

    @property
    def coverage_pct(self) -> float:
        return (self.covered / self.total_chars * 100) if self.total_chars else 100.0

    @property
    def is_clean(self) -> bool:
        return len(self.missing) == 0

    def report(self) -> str:
        lines = [
            "Glyph Audit Report",
            f"  Total unique chars: {self.total_chars}",
            f"  Covered:            {self.covered} ({self.coverage_pct:.1f}%)",
            f"  Missing:            {len(self.missing)}",
        ]
        if self.missing:
            chars = ", ".join(
                f"U+{ord(c):04X} ({c})" for c in self.missing[:20]
            )
            lines.append(f"  Missing chars:      {chars}")
        return "\n".join(lines)


def audit_glyphs(text_corpus: str, font_stack: FontStack) -> GlyphAuditResult:
    """Audit glyph coverage for a text corpus against the font stack."""
    unique_chars = {c for c in text_corpus if c.isprintable() and not c.isspace()}
    result = GlyphAuditResult(total_chars=len(unique_chars))

    for char in sorted(unique_chars):
        if font_stack.get_font_for_char(char) is not None:
            result.covered += 1
        else:
            result.missing.append(char)

    return result
