"""Construction-time configuration for masked editors."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from maskedit.config.culture import CultureInfo, get_culture
from maskedit.utils.chars import is_printable_char


class MaskConfig(BaseModel):
    """Editor options fixed for the lifetime of one editor instance.

    Rules:
    - prompt_char and password_char are single printable characters.
    - prompt_char != password_char.
    - culture may be given as a preset name (see ``cultures.yaml``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    prompt_char: str = "_"
    password_char: str | None = None
    allow_prompt_as_input: bool = True
    ascii_only: bool = False
    skip_literals: bool = True
    reset_on_prompt: bool = True
    reset_on_space: bool = True
    culture: CultureInfo = Field(default_factory=CultureInfo)

    @field_validator("prompt_char", "password_char")
    @classmethod
    def _check_single_char(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if len(value) != 1:
            raise ValueError("must be exactly one character")
        if not is_printable_char(value):
            raise ValueError(f"{value!r} is not a printable character")
        return value

    @field_validator("culture", mode="before")
    @classmethod
    def _resolve_culture(cls, value: Any) -> Any:
        if isinstance(value, str):
            return get_culture(value)
        return value

    @model_validator(mode="after")
    def _check_prompt_password_collision(self) -> MaskConfig:
        if self.password_char is not None and self.password_char == self.prompt_char:
            raise ValueError("prompt_char and password_char must differ")
        return self

    @property
    def is_password(self) -> bool:
        return self.password_char is not None
