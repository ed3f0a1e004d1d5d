from __future__ import annotations

import pytest

from maskedit.config.models import MaskConfig
from maskedit.editing.char_validator import CharacterValidator, VerdictAction
from maskedit.editing.models import ResultHint
from maskedit.templates.mask_compiler import compile_mask
from maskedit.templates.models import PositionDescriptor


def _slot(mask: str, index: int = 0) -> PositionDescriptor:
    return compile_mask(mask)[index]


def test_digit_class() -> None:
    validator = CharacterValidator(MaskConfig())

    assert validator.check_class(_slot("0"), "5").hint is ResultHint.SUCCESS
    assert validator.check_class(_slot("0"), "x").hint is ResultHint.CHARACTER_CLASS_REJECTED
    # ARABIC-INDIC DIGIT THREE is a decimal digit.
    assert validator.check_class(_slot("0"), "٣").ok


def test_ascii_only_checked_before_class() -> None:
    strict = CharacterValidator(MaskConfig(ascii_only=True))
    lenient = CharacterValidator(MaskConfig())

    assert strict.check_class(_slot("L"), "é").hint is ResultHint.ASCII_ONLY_VIOLATION
    assert strict.check_class(_slot("0"), "٣").hint is ResultHint.ASCII_ONLY_VIOLATION
    assert lenient.check_class(_slot("L"), "é").hint is ResultHint.SUCCESS


def test_optional_slots_accept_space() -> None:
    validator = CharacterValidator(MaskConfig())

    assert validator.check_class(_slot("9"), " ").ok
    assert validator.check_class(_slot("C"), " ").ok
    assert not validator.check_class(_slot("0"), " ").ok
    assert not validator.check_class(_slot("&"), " ").ok


def test_signed_digit_accepts_culture_signs() -> None:
    validator = CharacterValidator(MaskConfig())

    assert validator.check_class(_slot("#"), "-").ok
    assert validator.check_class(_slot("#"), "+").ok
    assert validator.check_class(_slot("#"), "7").ok
    assert not validator.check_class(_slot("#"), "x").ok


def test_alphanumeric_and_any_classes() -> None:
    validator = CharacterValidator(MaskConfig())

    assert validator.check_class(_slot("A"), "q").ok
    assert validator.check_class(_slot("A"), "4").ok
    assert not validator.check_class(_slot("A"), "%").ok
    assert validator.check_class(_slot("&"), "%").ok


def test_case_conversion() -> None:
    validator = CharacterValidator(MaskConfig())

    assert validator.check_class(_slot(">L"), "a").char == "A"
    assert validator.check_class(_slot("<L"), "Q").char == "q"
    assert validator.check_class(_slot("L"), "Q").char == "Q"
    assert validator.check_class(_slot(">L"), "ß").char == "ß"


def test_literal_skip_and_blank_literal() -> None:
    validator = CharacterValidator(MaskConfig())
    literal = _slot("0/0", 1)

    assert validator.check(literal, "/") == (
        VerdictAction.SKIP_LITERAL,
        ResultHint.SIDE_EFFECT_SUCCESS,
        "/",
    )
    assert validator.check(literal, " ").action is VerdictAction.SKIP_LITERAL
    assert validator.check(literal, "x").hint is ResultHint.UNAVAILABLE_EDIT_POSITION


def test_literal_not_skipped_when_disabled() -> None:
    validator = CharacterValidator(MaskConfig(skip_literals=False))
    literal = _slot("0/0", 1)

    assert validator.check(literal, "/").hint is ResultHint.UNAVAILABLE_EDIT_POSITION
    assert validator.is_escape(literal, "/") is False


def test_prompt_resets_slot() -> None:
    validator = CharacterValidator(MaskConfig())

    verdict = validator.check(_slot("0"), "_", "4")

    assert verdict.action is VerdictAction.RESET
    assert verdict.hint is ResultHint.SIDE_EFFECT_SUCCESS


def test_prompt_collision_when_prompt_not_allowed() -> None:
    validator = CharacterValidator(
        MaskConfig(reset_on_prompt=False, allow_prompt_as_input=False)
    )

    verdict = validator.check(_slot("C"), "_")

    assert verdict.action is VerdictAction.REJECT
    assert verdict.hint is ResultHint.PROMPT_CHAR_COLLISION


def test_prompt_as_content() -> None:
    validator = CharacterValidator(MaskConfig(reset_on_prompt=False))

    verdict = validator.check(_slot("C"), "_")

    assert verdict == (VerdictAction.ASSIGN, ResultHint.SUCCESS, "_")


def test_space_reset_policy() -> None:
    resetting = CharacterValidator(MaskConfig())
    keeping = CharacterValidator(MaskConfig(reset_on_space=False))

    assert resetting.check(_slot("9"), " ").action is VerdictAction.RESET
    assert keeping.check(_slot("9"), " ") == (VerdictAction.ASSIGN, ResultHint.SUCCESS, " ")
    assert keeping.check(_slot("0"), " ").hint is ResultHint.CHARACTER_CLASS_REJECTED


def test_same_character_is_no_effect() -> None:
    validator = CharacterValidator(MaskConfig())

    assert validator.check(_slot("0"), "5", "5").hint is ResultHint.NO_EFFECT
    assert validator.check(_slot("0"), "5", "6").hint is ResultHint.SUCCESS


def test_non_printable_input_rejected() -> None:
    validator = CharacterValidator(MaskConfig())

    verdict = validator.check(_slot("&"), "\x07")

    assert verdict.hint is ResultHint.CHARACTER_CLASS_REJECTED


def test_is_escape() -> None:
    validator = CharacterValidator(MaskConfig())

    assert validator.is_escape(_slot("0/0", 1), "/")
    assert validator.is_escape(_slot("0"), "_")
    assert validator.is_escape(_slot("0"), " ")
    assert not validator.is_escape(_slot("0"), "5")
    assert not validator.is_escape(_slot("0/0", 1), "5")


def test_multi_character_input_raises() -> None:
    validator = CharacterValidator(MaskConfig())

    with pytest.raises(ValueError):
        validator.check(_slot("0"), "12")


def test_space_skips_literal_only_under_reset_on_space() -> None:
    keeping = CharacterValidator(MaskConfig(reset_on_space=False))
    literal = _slot("0/0", 1)

    assert keeping.check(literal, " ").hint is ResultHint.UNAVAILABLE_EDIT_POSITION
    assert keeping.is_escape(literal, " ") is False
    assert keeping.check(literal, "/").action is VerdictAction.SKIP_LITERAL
