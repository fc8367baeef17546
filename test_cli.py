"""Tests for the textvertical command line."""

from io import BytesIO

import pytest
from click.testing import CliRunner
from PIL import Image

import textvertical.cli as cli
import textvertical.fonts as fonts
from textvertical.cli import main

NO_FONT = "Nosuchfamilyzqx"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def broken_font_dir(tmp_path, monkeypatch):
    """Font directory holding a file no font library can read."""
    (tmp_path / "Zqxbroken-Regular.ttf").write_bytes(b"")
    monkeypatch.setenv("TEXTVERTICAL_FONTS_DIR", str(tmp_path))
    fonts._font_index.cache_clear()
    yield tmp_path
    fonts._font_index.cache_clear()


class TestRender:
    def test_writes_png(self, runner, tmp_path):
        output = tmp_path / "label.png"

        result = runner.invoke(main, [
            "render", "AB", "--width", "40", "--height", "120",
            "--font-family", NO_FONT, "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert "✓ Rendered 2 characters" in result.output
        assert Image.open(BytesIO(output.read_bytes())).size == (40, 120)

    def test_format_from_extension(self, runner, tmp_path):
        output = tmp_path / "label.pdf"

        result = runner.invoke(main, [
            "render", "AB", "--width", "40", "--height", "120",
            "--font-family", NO_FONT, "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert output.read_bytes().startswith(b"%PDF")

    def test_reports_truncation(self, runner, tmp_path):
        output = tmp_path / "label.png"

        result = runner.invoke(main, [
            "render", "AAAAAAAAAAAAAAAA", "--width", "20", "--height", "40",
            "--font-family", NO_FONT, "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert "truncated to" in result.output

    def test_data_uri(self, runner):
        result = runner.invoke(main, [
            "render", "AB", "--width", "40", "--height", "120",
            "--font-family", NO_FONT, "--data-uri",
        ])

        assert result.exit_code == 0, result.output
        assert "data:image/png;base64," in result.output

    def test_missing_width(self, runner, tmp_path):
        result = runner.invoke(main, ["render", "AB", "--height", "120", "-o", str(tmp_path / "x.png")])

        assert result.exit_code == 1
        assert "Error: The width of TextVertical is required." in result.output
        assert not (tmp_path / "x.png").exists()

    def test_unreadable_font_file_falls_back(self, runner, broken_font_dir):
        result = runner.invoke(main, [
            "render", "AB", "--width", "40", "--height", "120",
            "--font-family", "Zqxbroken", "--data-uri",
        ])

        assert result.exit_code == 0, result.output
        assert "data:image/png;base64," in result.output

    def test_options_from_config(self, runner, tmp_path):
        config = tmp_path / "options.toml"
        config.write_text(f'[text]\nwidth = 40\nheight = 120\nfont_family = "{NO_FONT}"\n')
        output = tmp_path / "label.png"

        result = runner.invoke(main, [
            "render", "AB", "--config", str(config), "--height", "60", "-o", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert Image.open(BytesIO(output.read_bytes())).size == (40, 60)


class TestPlan:
    def test_prints_plan(self, runner):
        result = runner.invoke(main, [
            "plan", "AB", "--width", "40", "--height", "120", "--font-family", NO_FONT,
        ])

        assert result.exit_code == 0, result.output
        assert "truncated: no" in result.output
        assert "character 'A'" in result.output
        assert "x=20" in result.output

    def test_json(self, runner):
        result = runner.invoke(main, [
            "plan", "AB", "--width", "40", "--height", "120", "--font-family", NO_FONT, "--json",
        ])

        assert result.exit_code == 0, result.output
        assert '"truncated": false' in result.output
        assert '"kind": "character"' in result.output

    def test_harfbuzz_with_builtin_font(self, runner):
        result = runner.invoke(main, [
            "plan", "AB", "--width", "40", "--height", "120",
            "--font-family", NO_FONT, "--measurement", "harfbuzz",
        ])

        assert result.exit_code == 1
        assert "HarfBuzz measurement needs a font file" in result.output

    def test_unreadable_font_file_falls_back(self, runner, broken_font_dir):
        result = runner.invoke(main, [
            "plan", "AB", "--width", "40", "--height", "120", "--font-family", "Zqxbroken",
        ])

        assert result.exit_code == 0, result.output
        assert "character 'B'" in result.output

    def test_os_error_is_reported(self, runner, monkeypatch):
        def fail(*args, **kwargs):
            raise OSError("unknown file format")

        monkeypatch.setattr(cli, "create_surface", fail)

        result = runner.invoke(main, [
            "plan", "AB", "--width", "40", "--height", "120", "--font-family", NO_FONT,
        ])

        assert result.exit_code == 1
        assert "Error: unknown file format" in result.output
