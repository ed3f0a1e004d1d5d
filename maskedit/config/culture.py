"""Culture glyphs for separator placeholders and signed digits."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from maskedit.utils.chars import is_printable_char
from maskedit.utils.errors import MaskConfigurationError

_CULTURES_PATH = Path(__file__).with_name("cultures.yaml")


class CultureInfo(BaseModel):
    """Locale data consumed when a mask is compiled.

    Separator fields may hold more than one character (for example a
    currency symbol such as ``kr.``); each character becomes its own literal
    position in the compiled template.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = "invariant"
    decimal_separator: str = "."
    group_separator: str = ","
    time_separator: str = ":"
    date_separator: str = "/"
    currency_symbol: str = "¤"
    positive_sign: str = "+"
    negative_sign: str = "-"

    @field_validator(
        "decimal_separator",
        "group_separator",
        "time_separator",
        "date_separator",
        "currency_symbol",
    )
    @classmethod
    def _check_glyphs(cls, value: str) -> str:
        if not value:
            raise ValueError("separator glyph must not be empty")
        for ch in value:
            if not is_printable_char(ch):
                raise ValueError(f"separator glyph contains non-printable character {ch!r}")
        return value

    @field_validator("positive_sign", "negative_sign")
    @classmethod
    def _check_sign(cls, value: str) -> str:
        if len(value) != 1 or not is_printable_char(value):
            raise ValueError("sign must be exactly one printable character")
        return value


INVARIANT_CULTURE = CultureInfo()


def get_culture(name: str) -> CultureInfo:
    """Return the bundled culture preset called ``name``."""

    presets = _load_presets()
    try:
        return presets[name]
    except KeyError as exc:
        raise MaskConfigurationError(
            f"Unknown culture: {name}", source=_CULTURES_PATH
        ) from exc


def list_cultures() -> list[str]:
    """Return bundled culture names in stable order."""

    return sorted(_load_presets())


@lru_cache(maxsize=1)
def _load_presets() -> Mapping[str, CultureInfo]:
    try:
        raw = yaml.safe_load(_CULTURES_PATH.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise MaskConfigurationError(
            f"Invalid YAML in culture file: {_CULTURES_PATH}", source=_CULTURES_PATH
        ) from exc

    if not isinstance(raw, dict):
        raise MaskConfigurationError(
            f"Culture file must contain a mapping: {_CULTURES_PATH}", source=_CULTURES_PATH
        )

    presets: dict[str, CultureInfo] = {}
    for name, fields in raw.items():
        try:
            presets[str(name)] = CultureInfo.model_validate({"name": str(name), **fields})
        except (TypeError, ValidationError) as exc:
            raise MaskConfigurationError(
                f"Invalid culture preset '{name}' in {_CULTURES_PATH}", source=_CULTURES_PATH
            ) from exc
    return MappingProxyType(presets)
