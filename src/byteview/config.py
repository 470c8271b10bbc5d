# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the byteview configuration file."""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".byteview.yaml"

ON_PARSE_ERROR_CHOICES = ("abort", "partial")


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class InspectConfig:
    """Settings for inspecting files.

    Attributes:
        text_encoding: Codec for rendering byte strings as display text.
        preview_bytes: Number of stream bytes shown in hex previews.
        on_parse_error: ``abort`` to fail on a structural error, ``partial``
            to record it and keep the rest of the model.
        log_level: Name of the logging level for diagnostics.
    """

    text_encoding: str = "cp1252"
    preview_bytes: int = 32
    on_parse_error: str = "abort"
    log_level: str = "WARNING"

    @property
    def recover(self) -> bool:
        return self.on_parse_error == "partial"


def load_config(path: Path) -> InspectConfig:
    """Load and parse a byteview configuration file.

    Args:
        path: Path to the ``.byteview.yaml`` file.

    Returns:
        An InspectConfig populated from the file; missing keys keep their defaults.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def find_config(directory: Path) -> InspectConfig:
    """Load ``.byteview.yaml`` from *directory* if present, else return defaults."""
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return InspectConfig()
    return load_config(path)


def parse_config(text: str, source_label: str = "<string>") -> InspectConfig:
    """Parse configuration YAML text into an InspectConfig.

    An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is invalid or a value is out of range.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return InspectConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    config = InspectConfig()
    if "text-encoding" in data:
        config.text_encoding = _require_string(data, "text-encoding", source_label)
        try:
            codecs.lookup(config.text_encoding)
        except LookupError:
            raise ConfigError(f"{source_label}: unknown text-encoding '{config.text_encoding}'") from None
    if "preview-bytes" in data:
        value = data["preview-bytes"]
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ConfigError(f"{source_label}: 'preview-bytes' must be a non-negative integer")
        config.preview_bytes = value
    if "on-parse-error" in data:
        config.on_parse_error = _require_string(data, "on-parse-error", source_label)
        if config.on_parse_error not in ON_PARSE_ERROR_CHOICES:
            raise ConfigError(
                f"{source_label}: 'on-parse-error' must be one of {', '.join(ON_PARSE_ERROR_CHOICES)}"
            )
    if "log-level" in data:
        config.log_level = _require_string(data, "log-level", source_label).upper()
        if not isinstance(logging.getLevelName(config.log_level), int):
            raise ConfigError(f"{source_label}: unknown log-level '{config.log_level}'")
    return config


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"text-encoding", "preview-bytes", "on-parse-error", "log-level"})


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising ConfigError if it is not a string."""
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value
