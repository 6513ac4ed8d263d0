#!/usr/bin/env python3
"""CP437 glyph coverage audit tool.

Checks every font profile against the printable CP437 repertoire to show
which profile can draw ANSI art without substitutions.

Usage:
    python3 scripts/glyph-audit.py [--profile dos|classic] [--strict]
"""

import argparse
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from art_engine.emulator import CP437
from art_engine.fonts import FONT_PROFILES, audit_glyphs, resolve_font_stack


def main() -> int:
    parser = argparse.ArgumentParser(description="CP437 glyph coverage audit")
    parser.add_argument("--profile", default=None, choices=sorted(FONT_PROFILES),
                        help="Audit a single profile (default: all)")
    parser.add_argument("--strict", action="store_true", help="Exit 1 on missing glyphs")
    parser.add_argument("--size", type=int, default=16, help="Font size for testing")
    args = parser.parse_args()

    profiles = [args.profile] if args.profile else sorted(FONT_PROFILES)

    print(f"Glyph Audit — CP437, size: {args.size}")
    print("=" * 60)

    has_issues = False
    for profile in profiles:
        font_stack = resolve_font_stack(profile, args.size)
        result = audit_glyphs(CP437, font_stack)
        status = "✓" if result.is_clean else "⚠"
        print(f"  {status} {profile}: {font_stack.primary_path}")
        print(f"    {result.coverage_pct:.1f}% ({result.covered}/{result.total_chars}), "
              f"fallbacks: {len(font_stack.fallback_paths)}")
        if result.missing:
            print(f"    missing: {', '.join(f'U+{ord(c):04X} ({c})' for c in result.missing[:10])}")
            has_issues = True
    print()

    if has_issues and args.strict:
        print("✗ Strict mode: missing glyphs detected")
        return 1

    if not has_issues:
        print("✓ All CP437 glyphs covered")

    return 0


if __name__ == "__main__":
    sys.exit(main())
