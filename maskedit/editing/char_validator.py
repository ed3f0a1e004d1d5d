"""Per-character acceptance rules for editable slots."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from maskedit.config.models import MaskConfig
from maskedit.editing.models import ResultHint
from maskedit.templates.models import CaseMode, CharClass, PositionDescriptor
from maskedit.utils.chars import SPACE, is_ascii, is_digit, is_letter, is_printable_char


class VerdictAction(str, Enum):
    ASSIGN = "assign"
    RESET = "reset"
    SKIP_LITERAL = "skip_literal"
    REJECT = "reject"


class CharCheck(NamedTuple):
    hint: ResultHint
    char: str

    @property
    def ok(self) -> bool:
        return self.hint.is_success


class CharVerdict(NamedTuple):
    action: VerdictAction
    hint: ResultHint
    char: str


class CharacterValidator:
    """Decides what a single input character does at a template position."""

    def __init__(self, config: MaskConfig) -> None:
        self._config = config

    @property
    def config(self) -> MaskConfig:
        return self._config

    def check_class(self, descriptor: PositionDescriptor, ch: str) -> CharCheck:
        """Class membership for an editable slot, ASCII restriction first.

        The returned character carries the slot's case conversion.
        """

        _require_single_char(ch)
        if self._config.ascii_only and not is_ascii(ch):
            return CharCheck(ResultHint.ASCII_ONLY_VIOLATION, ch)
        if not self._in_class(descriptor, ch):
            return CharCheck(ResultHint.CHARACTER_CLASS_REJECTED, ch)
        return CharCheck(ResultHint.SUCCESS, _convert_case(ch, descriptor.case_mode))

    def check(
        self,
        descriptor: PositionDescriptor,
        ch: str,
        current: str | None = None,
    ) -> CharVerdict:
        """Full keystroke decision at ``descriptor`` holding ``current``.

        Rules:
        - Non-printable input is rejected.
        - At a literal, a matching character is skipped when
          ``skip_literals`` is on, and so is a space when ``reset_on_space``
          is on too; anything else is unavailable.
        - The prompt character resets the slot under ``reset_on_prompt`` and
          is rejected when ``allow_prompt_as_input`` is off.
        - A space resets the slot under ``reset_on_space``.
        - Otherwise the class check decides; rewriting the same character is
          ``NO_EFFECT``.
        """

        _require_single_char(ch)
        config = self._config
        if not is_printable_char(ch):
            return CharVerdict(VerdictAction.REJECT, ResultHint.CHARACTER_CLASS_REJECTED, ch)

        if descriptor.is_literal:
            if self._skips_literal(descriptor, ch):
                return CharVerdict(
                    VerdictAction.SKIP_LITERAL, ResultHint.SIDE_EFFECT_SUCCESS, ch
                )
            return CharVerdict(VerdictAction.REJECT, ResultHint.UNAVAILABLE_EDIT_POSITION, ch)

        if ch == config.prompt_char:
            if config.reset_on_prompt:
                return CharVerdict(VerdictAction.RESET, ResultHint.SIDE_EFFECT_SUCCESS, ch)
            if not config.allow_prompt_as_input:
                return CharVerdict(VerdictAction.REJECT, ResultHint.PROMPT_CHAR_COLLISION, ch)

        if ch == SPACE and config.reset_on_space:
            return CharVerdict(VerdictAction.RESET, ResultHint.SIDE_EFFECT_SUCCESS, ch)

        checked = self.check_class(descriptor, ch)
        if not checked.ok:
            return CharVerdict(VerdictAction.REJECT, checked.hint, ch)
        if checked.char == current:
            return CharVerdict(VerdictAction.ASSIGN, ResultHint.NO_EFFECT, checked.char)
        return CharVerdict(VerdictAction.ASSIGN, ResultHint.SUCCESS, checked.char)

    def is_escape(self, descriptor: PositionDescriptor, ch: str) -> bool:
        """True when ``ch`` is consumed at this position instead of the next slot."""

        _require_single_char(ch)
        if descriptor.is_literal:
            return self._skips_literal(descriptor, ch)
        config = self._config
        if ch == config.prompt_char and config.reset_on_prompt:
            return True
        return ch == SPACE and config.reset_on_space

    def _skips_literal(self, descriptor: PositionDescriptor, ch: str) -> bool:
        config = self._config
        if not config.skip_literals:
            return False
        # Under reset_on_space a space stands in for a literal that was formatted out.
        return ch == descriptor.literal or (ch == SPACE and config.reset_on_space)

    def _in_class(self, descriptor: PositionDescriptor, ch: str) -> bool:
        if ch == SPACE:
            return not descriptor.required

        char_class = descriptor.char_class
        if char_class is CharClass.ANY:
            return is_printable_char(ch)
        if char_class is CharClass.DIGIT:
            return is_digit(ch)
        if char_class is CharClass.LETTER:
            return is_letter(ch)
        if char_class is CharClass.ALPHANUMERIC:
            return is_digit(ch) or is_letter(ch)
        if char_class is CharClass.SIGNED_DIGIT:
            culture = self._config.culture
            return is_digit(ch) or ch in (culture.positive_sign, culture.negative_sign)
        return False


def _convert_case(ch: str, case_mode: CaseMode) -> str:
    if case_mode is CaseMode.UPPER:
        converted = ch.upper()
    elif case_mode is CaseMode.LOWER:
        converted = ch.lower()
    else:
        return ch
    # Some letters expand when case-mapped (``ß`` -> ``SS``); keep those as typed.
    return converted if len(converted) == 1 else ch


def _require_single_char(ch: str) -> None:
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
