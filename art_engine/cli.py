"""CLI entrypoint for the art engine.

Usage:
    art-engine --format html art.ans > art.html
    python scripts/render-art.py --format png --outdir out/ *.ans
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from art_engine import __version__
from art_engine.config import FORMATS, RenderConfig
from art_engine.export import ExportManifest, export_all
from art_engine.fonts import FONT_PROFILES, audit_glyphs, resolve_font_stack
from art_engine.loader import load_file
from art_engine.palette import list_palettes, load_palette
from art_engine.render import render_html, render_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="art-engine",
        description="ANSI art engine — render CP437/ANSI art as HTML, text or PNG",
        epilog="Examples:\n"
        "  %(prog)s logo.ans > logo.html\n"
        "  %(prog)s --format text --width 132 wide.ans\n"
        "  %(prog)s --format png --palette xterm --outdir out/ *.ans\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    parser.add_argument("files", nargs="*", type=Path, help="ANSI art files")

    # Output
    parser.add_argument(
        "--format",
        default="html",
        help=f"Output format: {', '.join(FORMATS)} (default: html)",
    )
    parser.add_argument(
        "--outdir",
        type=Path,
        default=None,
        help="Write <name>.<ext> files here instead of stdout",
    )
    parser.add_argument(
        "--stylesheet",
        default=None,
        help="Stylesheet URL linked from HTML output (e.g. cp437.css)",
    )

    # Canvas
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Canvas width in columns (default: SAUCE width or 80)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=25,
        help="Initial canvas height hint in rows (default: 25)",
    )
    parser.add_argument(
        "--no-sauce",
        action="store_true",
        help="Ignore SAUCE metadata",
    )

    # Colours & fonts
    parser.add_argument(
        "--palette",
        default="vga",
        help=f"Colour palette ({', '.join(list_palettes())})",
    )
    parser.add_argument(
        "--font-profile",
        default="dos",
        choices=sorted(FONT_PROFILES),
        help="Font selection profile for PNG output (default: dos)",
    )
    parser.add_argument(
        "--font-size",
        type=int,
        default=16,
        help="Font size for PNG output (default: 16)",
    )

    # Debug
    parser.add_argument(
        "--list-palettes",
        action="store_true",
        help="List available palettes and exit",
    )
    parser.add_argument(
        "--glyph-audit",
        action="store_true",
        help="Report font coverage of the rendered characters and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or every ignored sequence (-vv)",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(args: argparse.Namespace) -> int:
    """Execute the render pipeline for every input file."""

    if args.list_palettes:
        print("Available palettes:")
        for p in list_palettes():
            print(f"  {p}")
        return 0

    if not args.files:
        print("✗ Error: no input files", file=sys.stderr)
        return 1

    try:
        config = RenderConfig(
            format=args.format,
            outdir=args.outdir,
            stylesheet=args.stylesheet,
            width=args.width,
            height=args.height,
            use_sauce=not args.no_sauce,
            palette=args.palette,
            font_profile=args.font_profile,
            font_size=args.font_size,
        )
        palette = load_palette(config.palette)

        font_stack = None
        if config.format == "png" or args.glyph_audit:
            font_stack = resolve_font_stack(config.font_profile, config.font_size)

        manifest = ExportManifest()
        for path in args.files:
            emulator, sauce = load_file(
                path,
                width=config.width,
                height=config.height,
                palette=palette,
                use_sauce=config.use_sauce,
            )
            if sauce is not None:
                logger.info("%s: \"%s\" by %s", path, sauce.title, sauce.author or "unknown")

            if args.glyph_audit:
                audit = audit_glyphs(render_text(emulator), font_stack)
                print(f"▸ {path}: font {font_stack.primary_path}")
                print(audit.report())
                continue

            if config.to_stdout:
                if config.format == "text":
                    print(render_text(emulator), end="")
                else:
                    print(render_html(emulator, palette, config.stylesheet), end="")
                continue

            for result in export_all(emulator, config, path, palette, font_stack).results:
                manifest.add(result)

        if manifest.results:
            print(manifest.summary(), file=sys.stderr)
        return 0

    except Exception as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
