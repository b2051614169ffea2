"""Tests for YAML configuration loading."""
import pathlib

import pytest

from content_extractor.config import DEFAULT_CONFIG_PATH, load_config
from content_extractor.schemas import ExtractorOptions


def _write(tmp_path: pathlib.Path, body: str) -> pathlib.Path:
    path = tmp_path / "config.yaml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadConfig:

    def test_bundled_config(self):
        config = load_config(DEFAULT_CONFIG_PATH)

        assert config.output_format == "text"
        assert config.log_level == "INFO"
        assert config.parser == "lxml"
        assert config.options is None

    def test_empty_file_gives_defaults(self, tmp_path: pathlib.Path):
        config = load_config(_write(tmp_path, ""))

        assert config.output_format == "text"
        assert config.parser == "lxml"

    def test_values_are_normalized(self, tmp_path: pathlib.Path):
        config = load_config(_write(tmp_path, "output_format: HTML\nlog_level: debug\n"))

        assert config.output_format == "html"
        assert config.log_level == "DEBUG"

    def test_options_block(self, tmp_path: pathlib.Path):
        config = load_config(_write(tmp_path, "options:\n  clean_conditionally: false\n"))

        assert config.options == ExtractorOptions(clean_conditionally=False)

    @pytest.mark.parametrize(
        "body, message",
        [
            ("- a\n- b\n", "mapping"),
            ("output_format: markdown\n", "output_format"),
            ("log_level: LOUD\n", "log_level"),
            ("parser: html5lib\n", "parser"),
            ("options: true\n", "options"),
            ("options:\n  strip: false\n", "unknown options"),
        ],
    )
    def test_invalid_config(self, tmp_path: pathlib.Path, body: str, message: str):
        with pytest.raises(ValueError, match=message):
            load_config(_write(tmp_path, body))
