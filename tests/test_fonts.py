"""Tests for font stacks and glyph coverage auditing."""

from PIL import ImageFont

from art_engine.fonts import (
    FONT_PROFILES,
    FontStack,
    GlyphAuditResult,
    audit_glyphs,
    resolve_font_stack,
)


def _default_stack() -> FontStack:
    return FontStack(primary=ImageFont.load_default(), primary_path="<default>")


class TestResolveFont:
    def test_profiles_resolve(self):
        for profile in FONT_PROFILES:
            stack = resolve_font_stack(profile, 16)
            assert stack.primary is not None
            assert stack.size == 16

    def test_unknown_profile_falls_back(self):
        stack = resolve_font_stack("bogus", 12)
        assert stack.primary is not None

    def test_cell_size_positive(self):
        w, h = _default_stack().cell_size()
        assert w > 0 and h > 0


class TestGlyphAudit:
    def test_ascii_fully_covered(self):
        result = audit_glyphs("Hello World 123", _default_stack())
        assert result.is_clean
        assert result.coverage_pct == 100.0

    def test_whitespace_and_controls_ignored(self):
        result = audit_glyphs(" \n\t\x01", _default_stack())
        assert result.total_chars == 0
        assert result.is_clean

    def test_counts_unique(self):
        result = audit_glyphs("aaab", _default_stack())
        assert result.total_chars == 2

    def test_report_format(self):
        result = GlyphAuditResult(total_chars=10, covered=8, missing=["☺", "♥"])
        report = result.report()
        assert "10" in report
        assert "80.0%" in report
        assert "Missing" in report
        assert "U+263A" in report
