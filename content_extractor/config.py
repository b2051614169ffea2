from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from typing import Optional

import yaml

from content_extractor.schemas import ExtractorOptions

DEFAULT_CONFIG_PATH = pathlib.Path(__file__).parent / "config.yaml"

_OUTPUT_FORMATS = ("text", "html")
_PARSERS = ("lxml", "html.parser")
_OPTION_KEYS = ("strip_unlikely_candidates", "weight_nodes", "clean_conditionally")


@dataclass(frozen=True)
class Config:
    output_format: str
    log_level: str
    parser: str
    options: Optional[ExtractorOptions]


def load_config(path: str | pathlib.Path = DEFAULT_CONFIG_PATH) -> Config:
    raw = pathlib.Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file must be a YAML mapping, got {type(data).__name__}")

    output_format = str(data.get("output_format", "text")).lower()
    log_level = str(data.get("log_level", "INFO")).upper()
    parser = str(data.get("parser", "lxml"))

    if output_format not in _OUTPUT_FORMATS:
        raise ValueError(f"output_format must be one of {', '.join(_OUTPUT_FORMATS)}, got: {output_format}")
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"log_level is not a logging level name: {log_level}")
    if parser not in _PARSERS:
        raise ValueError(f"parser must be one of {', '.join(_PARSERS)}, got: {parser}")

    options: Optional[ExtractorOptions] = None
    if data.get("options") is not None:
        opts = data["options"]
        if not isinstance(opts, dict):
            raise ValueError("options must be a mapping of option name to true/false")
        unknown = set(opts) - set(_OPTION_KEYS)
        if unknown:
            raise ValueError(f"unknown options: {', '.join(sorted(unknown))}")
        options = ExtractorOptions(**{key: bool(value) for key, value in opts.items()})

    return Config(
        output_format=output_format,
        log_level=log_level,
        parser=parser,
        options=options,
    )
