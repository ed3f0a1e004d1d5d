"""Mask configuration loading utilities."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from maskedit.config.models import MaskConfig
from maskedit.utils.errors import MaskConfigurationError

_CHAR_TOKEN_MAP = {
    "SPACE": " ",
    "UNDERSCORE": "_",
    "BULLET": "●",
}


def load_config(path: Path | None = None) -> MaskConfig:
    """Load and validate editor configuration from YAML."""

    config_path = path or Path(__file__).with_name("defaults.yaml")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise MaskConfigurationError(
            f"Config file not found: {config_path}", source=config_path
        ) from exc
    except yaml.YAMLError as exc:
        raise MaskConfigurationError(
            f"Invalid YAML in config file: {config_path}", source=config_path
        ) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise MaskConfigurationError(
            f"Config file must contain a mapping: {config_path}", source=config_path
        )

    normalized = _normalize_char_tokens(raw)

    try:
        return MaskConfig.model_validate(normalized)
    except ValidationError as exc:
        raise MaskConfigurationError(
            f"Invalid mask config schema: {config_path}", source=config_path
        ) from exc


def _normalize_char_tokens(raw: dict[object, object]) -> dict[object, object]:
    normalized = dict(raw)
    for key in ("prompt_char", "password_char"):
        value = normalized.get(key)
        if isinstance(value, str) and value in _CHAR_TOKEN_MAP:
            normalized[key] = _CHAR_TOKEN_MAP[value]
    return normalized
