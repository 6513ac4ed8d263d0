"""Multi-format export pipeline.

Writes a parsed emulator to:
  - Plain text (.txt)
  - Standalone HTML (.html)
  - PNG image (.png, via Pillow)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from art_engine.config import FORMAT_EXTENSIONS, RenderConfig
from art_engine.emulator import AnsiEmulator
from art_engine.fonts import FontStack
from art_engine.palette import Palette
from art_engine.render import render_html, render_image, render_text


@dataclass
class ExportResult:
    """Result of an export operation."""

    format: str
    path: Path
    size_bytes: int = 0
    resolution: tuple[int, int] = (0, 0)  # columns x rows

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024

    def __str__(self) -> str:
        return (
            f"{self.format.upper()}: {self.path.name} "
            f"({self.size_kb:.1f}KB, {self.resolution[0]}x{self.resolution[1]})"
        )


@dataclass
class ExportManifest:
    """Complete export output manifest."""

    results: list[ExportResult] = field(default_factory=list)

    def add(self, result: ExportResult) -> None:
        self.results.append(result)

    def summary(self) -> str:
        lines = ["Export Summary:"]
        for r in self.results:
            lines.append(f"  {r}")
        return "\n".join(lines)


def _result(fmt: str, path: Path, emulator: AnsiEmulator) -> ExportResult:
    return ExportResult(
        format=fmt,
        path=path,
        size_bytes=path.stat().st_size,
        resolution=emulator.extent(),
    )


def _prepare(output_path: Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


# ── Writers ───────────────────────────────────────────────────────────────

def export_text(emulator: AnsiEmulator, output_path: Path) -> ExportResult:
    """Write the plain-text rendering as UTF-8."""
    output_path = _prepare(output_path)
    output_path.write_text(render_text(emulator), encoding="utf-8")
    return _result("text", output_path, emulator)


def export_html(
    emulator: AnsiEmulator,
    output_path: Path,
    palette: Optional[Palette] = None,
    stylesheet: Optional[str] = None,
) -> ExportResult:
    """Write a standalone HTML document."""
    output_path = _prepare(output_path)
    output_path.write_text(
        render_html(emulator, palette, stylesheet), encoding="utf-8"
    )
    return _result("html", output_path, emulator)


def export_png(
    emulator: AnsiEmulator,
    output_path: Path,
    palette: Optional[Palette] = None,
    font_stack: Optional[FontStack] = None,
) -> ExportResult:
    """Write the image rendering as PNG."""
    cols, rows = emulator.extent()
    if cols == 0 or rows == 0:
        raise ValueError("Nothing to export: the canvas is empty")
    output_path = _prepare(output_path)
    render_image(emulator, palette, font_stack).save(str(output_path))
    return _result("png", output_path, emulator)


# ── Output naming ─────────────────────────────────────────────────────────

def generate_output_name(source: Path, fmt: str = "html") -> str:
    """Generate output filename: <source stem>.<ext>."""
    return f"{Path(source).stem}.{FORMAT_EXTENSIONS[fmt]}"


# ── Master export orchestrator ────────────────────────────────────────────

def export_all(
    emulator: AnsiEmulator,
    config: RenderConfig,
    source: Path,
    palette: Optional[Palette] = None,
    font_stack: Optional[FontStack] = None,
) -> ExportManifest:
    """Export one parsed file in the configured format.

    Args:
        emulator: Finished emulator.
        config: Render configuration.
        source: Input file path, used for naming.
        palette: Palette override (defaults to the emulator's).
        font_stack: Font stack for image output.

    Returns:
        ExportManifest with the written file.
    """
    manifest = ExportManifest()
    outdir = config.outdir or Path.cwd()
    path = outdir / generate_output_name(source, config.format)

    if config.format == "text":
        manifest.add(export_text(emulator, path))
    elif config.format == "html":
        manifest.add(export_html(emulator, path, palette, config.stylesheet))
    elif config.format == "png":
        manifest.add(export_png(emulator, path, palette, font_stack))

    return manifest
