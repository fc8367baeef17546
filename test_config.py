"""Tests for option validation and config loading."""

import pytest

from textvertical.config import DEFAULT_FONT_FAMILY, TextVerticalOptions, build_options, load_options
from textvertical.errors import ConfigurationError


class TestBuildOptions:
    def test_defaults_match_canvas_defaults(self):
        options = build_options(width=40, height=200)

        assert options.fill_style == "#000"
        assert options.font_size == 12
        assert options.font_weight == 400
        assert options.line_height == 14
        assert options.ellipsis == "..."
        assert options.font_family == DEFAULT_FONT_FAMILY

    def test_width_is_required(self):
        with pytest.raises(ConfigurationError, match="The width of TextVertical is required."):
            build_options(height=200)

    def test_height_is_required(self):
        with pytest.raises(ConfigurationError, match="The height of TextVertical is required."):
            build_options({"width": 40})

    @pytest.mark.parametrize("field", ["width", "height"])
    def test_dimensions_must_be_positive(self, field):
        values = {"width": 40, "height": 200, field: 0}
        with pytest.raises(ConfigurationError):
            build_options(values)

    def test_unknown_color_is_rejected(self):
        with pytest.raises(ConfigurationError):
            build_options(width=40, height=200, fill_style="not-a-color")

    def test_font_weight_range(self):
        with pytest.raises(ConfigurationError):
            build_options(width=40, height=200, font_weight=1000)

    def test_configuration_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            build_options()

    def test_overrides_replace_model_values(self):
        base = TextVerticalOptions(width=40, height=200, font_size=16)
        options = build_options(base, height=100, font_weight=None)

        assert options.height == 100
        assert options.font_size == 16
        assert options.font_weight == 400


class TestDerivedValues:
    def test_line_height_coefficient(self):
        options = build_options(width=40, height=200, font_size=10, line_height=15)

        assert options.line_height_coefficient == 1.5

    def test_font_description(self):
        options = build_options(width=40, height=200, font_family="Arial")

        assert options.font_description == "400 12px Arial"

    def test_fill_rgb(self):
        assert build_options(width=40, height=200).fill_rgb == (0, 0, 0)
        assert build_options(width=40, height=200, fill_style="#ff0000").fill_rgb == (255, 0, 0)

    def test_center_x(self):
        assert build_options(width=41, height=200).center_x == 20.5


class TestLoadOptions:
    def test_top_level_keys(self, tmp_path):
        path = tmp_path / "options.toml"
        path.write_text('width = 40\nheight = 200\nfill_style = "red"\n')

        options = build_options(load_options(path))

        assert options.width == 40
        assert options.fill_rgb == (255, 0, 0)

    def test_text_table(self, tmp_path):
        path = tmp_path / "options.toml"
        path.write_text('[text]\nwidth = 30\nheight = 90\nline_height = 18\n')

        assert load_options(path) == {"width": 30, "height": 90, "line_height": 18}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_options(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "options.toml"
        path.write_text("width = = 40\n")

        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            load_options(path)
