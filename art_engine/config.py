"""Central configuration for the art engine."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# Resolve package paths relative to this file
PACKAGE_ROOT = Path(__file__).resolve().parent
PALETTES_DIR = PACKAGE_ROOT / "palettes"

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 25

FORMATS = ("html", "text", "png")
FORMAT_EXTENSIONS = {"html": "html", "text": "txt", "png": "png"}


@dataclass
class RenderConfig:
    """Full render configuration assembled from CLI flags and defaults."""

    # Output
    format: str = "html"
    outdir: Optional[Path] = None
    stylesheet: Optional[str] = None

    # Canvas
    width: Optional[int] = None  # None = SAUCE width, else DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    use_sauce: bool = True

    # Colours
    palette: str = "vga"

    # Image output
    font_profile: str = "dos"
    font_size: int = 16

    def __post_init__(self) -> None:
        if self.format not in FORMATS:
            raise ValueError(
                f"Unknown format {self.format!r}. Available: {', '.join(FORMATS)}"
            )
        if self.width is not None and self.width <= 0:
            raise ValueError(f"Width must be positive, got {self.width}")
        if self.height < 0:
            raise ValueError(f"Height must not be negative, got {self.height}")
        if self.outdir is not None:
            self.outdir = Path(self.outdir)

    @property
    def extension(self) -> str:
        """File extension for the selected format."""
        return FORMAT_EXTENSIONS[self.format]

    @property
    def to_stdout(self) -> bool:
        """Text formats print to stdout unless an output directory is set."""
        return self.outdir is None and self.format != "png"
