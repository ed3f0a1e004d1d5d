"""Custom exceptions for mask construction and configuration."""

from __future__ import annotations

from pathlib import Path


class MaskError(ValueError):
    """Base class for construction-time mask failures."""


class InvalidMaskCharacterError(MaskError):
    """Raised when a mask specification cannot be compiled into a template."""

    def __init__(
        self,
        message: str,
        *,
        mask: str,
        position: int | None = None,
        char: str | None = None,
    ) -> None:
        super().__init__(message)
        self.mask = mask
        self.position = position
        self.char = char


class MaskConfigurationError(MaskError):
    """Raised when a mask configuration file cannot be loaded or validated."""

    def __init__(self, message: str, *, source: Path | None = None) -> None:
        super().__init__(message)
        self.source = source


class EditScriptError(Exception):
    """Raised when an edit script for the CLI cannot be read or validated."""

    def __init__(self, message: str, *, source: Path | None = None) -> None:
        super().__init__(message)
        self.source = source
