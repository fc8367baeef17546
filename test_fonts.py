"""Tests for font family resolution."""

from pathlib import Path

import pytest

import textvertical.fonts as fonts
from textvertical.config import DEFAULT_FONT_FAMILY
from textvertical.fonts import (
    ResolvedFont,
    find_local_font,
    load_pillow_font,
    parse_font_families,
    register_pdf_font,
    resolve_font,
)
from textvertical.fonts.google import _extract_font_url_from_css, cache_path_for


@pytest.fixture
def font_dir(tmp_path, monkeypatch):
    """Directory of placeholder font files searched before system fonts."""
    for name in ("Zqxtestfont-Regular.ttf", "Zqxtestfont-Bold.ttf", "Zqxtestfont-Italic.otf"):
        (tmp_path / name).write_bytes(b"")
    monkeypatch.setenv("TEXTVERTICAL_FONTS_DIR", str(tmp_path))
    fonts._font_index.cache_clear()
    yield tmp_path
    fonts._font_index.cache_clear()


class TestParseFontFamilies:
    def test_css_list(self):
        assert parse_font_families("'Noto Sans SC', \"Arial\" ,sans-serif") == [
            "Noto Sans SC", "Arial", "sans-serif",
        ]

    def test_default_family_list(self):
        families = parse_font_families(DEFAULT_FONT_FAMILY)

        assert families[:3] == ["-apple-system", "BlinkMacSystemFont", "Segoe UI"]
        assert families[-1] == "Segoe UI Symbol"

    def test_empty_parts_are_dropped(self):
        assert parse_font_families(" , Arial,, ") == ["Arial"]


class TestFindLocalFont:
    def test_regular_weight(self, font_dir):
        assert find_local_font("Zqxtestfont", 400) == font_dir / "Zqxtestfont-Regular.ttf"

    def test_bold_weight(self, font_dir):
        assert find_local_font("Zqxtestfont", 700) == font_dir / "Zqxtestfont-Bold.ttf"

    def test_generic_family_never_matches(self, font_dir):
        assert find_local_font("sans-serif") is None

    def test_unknown_family(self, font_dir):
        assert find_local_font("Nosuchfamilyzqx") is None

    def test_windows_short_bold_suffix(self, font_dir):
        for name in ("Zqxarial.ttf", "Zqxarialbd.ttf"):
            (font_dir / name).write_bytes(b"")
        fonts._font_index.cache_clear()

        assert find_local_font("Zqxarial", 700) == font_dir / "Zqxarialbd.ttf"
        assert find_local_font("Zqxarial", 400) == font_dir / "Zqxarial.ttf"


class TestResolveFont:
    def test_first_resolvable_family_wins(self, font_dir):
        font = resolve_font("Nosuchfamilyzqx, 'Zqxtestfont', sans-serif")

        assert font.path == font_dir / "Zqxtestfont-Regular.ttf"
        assert font.name == "Zqxtestfont-Regular"

    def test_falls_back_to_builtin(self, font_dir):
        font = resolve_font("Nosuchfamilyzqx, sans-serif")

        assert font == ResolvedFont(name="Helvetica", path=None, weight=400)
        assert font.is_builtin

    def test_bold_fallback(self, font_dir):
        assert resolve_font("Nosuchfamilyzqx", 700).name == "Helvetica-Bold"

    def test_google_fonts_used_when_allowed(self, font_dir, monkeypatch):
        downloaded = font_dir / "Orbitron-700.ttf"
        calls = []

        def fake_get_google_font(family, weight):
            calls.append((family, weight))
            return downloaded

        monkeypatch.setattr(fonts, "get_google_font", fake_get_google_font)

        font = resolve_font("Orbitron, sans-serif", 700, allow_google=True)

        assert calls == [("Orbitron", 700)]
        assert font == ResolvedFont(name="Orbitron-700", path=downloaded, weight=700)

    def test_google_fonts_not_used_by_default(self, font_dir, monkeypatch):
        monkeypatch.setattr(fonts, "get_google_font", pytest.fail)

        assert resolve_font("Orbitron").is_builtin


class TestRegisterPdfFont:
    def test_builtin_font_needs_no_registration(self):
        assert register_pdf_font(ResolvedFont("Helvetica-Bold")) == "Helvetica-Bold"

    def test_non_truetype_file_falls_back(self, font_dir):
        font = ResolvedFont("Zqxtestfont-Italic", font_dir / "Zqxtestfont-Italic.otf", 700)

        assert register_pdf_font(font) == "Helvetica-Bold"

    def test_unreadable_file_falls_back(self, font_dir):
        font = ResolvedFont("Zqxtestfont-Regular", font_dir / "Zqxtestfont-Regular.ttf")

        assert register_pdf_font(font) == "Helvetica"

    def test_registered_font_is_not_registered_again(self, font_dir, monkeypatch):
        monkeypatch.setattr(fonts, "_REGISTERED_FONTS", {"Zqxtestfont-Regular"})
        monkeypatch.setattr(fonts.pdfmetrics, "registerFont", pytest.fail)
        font = ResolvedFont("Zqxtestfont-Regular", font_dir / "Zqxtestfont-Regular.ttf")

        assert register_pdf_font(font) == "Zqxtestfont-Regular"


class TestLoadPillowFont:
    def test_builtin_font_uses_default(self):
        font = load_pillow_font(ResolvedFont("Helvetica"), 12)

        assert font.getlength("A") > 0

    def test_unreadable_file_falls_back(self, font_dir):
        font = load_pillow_font(ResolvedFont("Zqxtestfont-Regular", font_dir / "Zqxtestfont-Regular.ttf"), 12)

        assert font.getlength("A") > 0


class TestGoogleFonts:
    def test_extract_ttf_url_from_css(self):
        css = (
            "@font-face {\n  font-family: 'Orbitron';\n"
            "  src: url(https://fonts.gstatic.com/s/orbitron/v31/abc.ttf) format('truetype');\n}"
        )

        assert _extract_font_url_from_css(css) == "https://fonts.gstatic.com/s/orbitron/v31/abc.ttf"

    def test_no_url_in_css(self):
        assert _extract_font_url_from_css("/* nothing */") is None

    def test_cache_path(self):
        path = cache_path_for("Noto Sans SC", 700)

        assert path.name == "NotoSansSC-700.ttf"
        assert path.parent.parts[-2:] == ("text-vertical", "fonts")
