from __future__ import annotations

from maskedit.config.models import MaskConfig
from maskedit.editing.editor import MaskEditor
from maskedit.editing.models import EditResult, ResultHint

DATE_MASK = "00/00/0000"


def test_set_accepts_literals_in_text() -> None:
    editor = MaskEditor(DATE_MASK)

    result = editor.set_text("01/02/2024")

    assert result == EditResult(True, ResultHint.SUCCESS, 9)
    assert editor.to_string() == "01/02/2024"


def test_set_replaces_previous_value() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("12345678")

    editor.set_text("99")

    assert editor.to_string() == "99/__/____"
    assert editor.assigned_count == 2


def test_set_too_long_is_rejected_whole() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("1234")

    result = editor.set_text("123456789")

    assert result == EditResult(False, ResultHint.UNAVAILABLE_EDIT_POSITION, 10)
    assert editor.to_string() == "12/34/____"


def test_set_with_invalid_character_is_atomic() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("1234")
    before = editor.snapshot()

    result = editor.set_text("12a")

    assert result == EditResult(False, ResultHint.CHARACTER_CLASS_REJECTED, 3)
    assert editor.snapshot() == before


def test_set_empty_text_clears() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("1234")

    assert editor.set_text("") == EditResult(True, ResultHint.SUCCESS, 0)
    assert editor.assigned_count == 0


def test_reset_on_space_applies_to_bulk_and_keystrokes() -> None:
    resetting = MaskEditor(DATE_MASK)
    strict = MaskEditor(DATE_MASK, MaskConfig(reset_on_space=False))

    assert resetting.set_text("1 3").ok
    assert resetting.to_string() == "1_/3_/____"
    assert resetting.replace(" ", 0).hint is ResultHint.SIDE_EFFECT_SUCCESS

    bulk = strict.set_text("1 3")
    keystroke = strict.replace(" ", 1)
    assert bulk == EditResult(False, ResultHint.CHARACTER_CLASS_REJECTED, 1)
    assert keystroke == EditResult(False, ResultHint.CHARACTER_CLASS_REJECTED, 1)


def test_reset_on_prompt_applies_to_bulk() -> None:
    editor = MaskEditor(DATE_MASK)

    assert editor.set_text("1_3").ok
    assert editor[1] is None
    assert editor[3] == "3"


def test_prompt_not_allowed_as_input() -> None:
    editor = MaskEditor(
        "CCC", MaskConfig(reset_on_prompt=False, allow_prompt_as_input=False)
    )

    result = editor.set_text("a_b")

    assert result == EditResult(False, ResultHint.PROMPT_CHAR_COLLISION, 1)
    assert editor.assigned_count == 0


def test_round_trip_through_formatted_text() -> None:
    editor = MaskEditor("(999) 000-0000")
    assert editor.set_text("5551234567").ok
    formatted = editor.to_string(include_prompt=False, include_literals=False)

    restored = MaskEditor("(999) 000-0000")
    result = restored.set_text(formatted)

    assert result.ok is True
    assert restored.snapshot() == editor.snapshot()


def test_verify_text_does_not_edit() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("11")

    assert editor.verify_text("01022024").ok is True
    assert editor.verify_text("0x").hint is ResultHint.CHARACTER_CLASS_REJECTED
    assert editor.to_string() == "11/__/____"


def test_end_position_and_counts() -> None:
    editor = MaskEditor(DATE_MASK)
    assert editor.end_position == 0

    editor.set_text("12")
    assert editor.end_position == 3
    assert editor.available_edit_position_count == 6
    assert editor.edit_position_count == 8

    editor.set_text("12345678")
    assert editor.end_position == 10
    assert editor.available_edit_position_count == 0


def test_clone_is_independent() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("12")

    duplicate = editor.clone()
    duplicate.set_text("99")

    assert editor.to_string() == "12/__/____"
    assert duplicate.to_string() == "99/__/____"
    assert duplicate.template is editor.template


def test_space_at_literal_is_not_skipped_without_reset_on_space() -> None:
    strict = MaskEditor(DATE_MASK, MaskConfig(reset_on_space=False))

    result = strict.set_text("12 34")

    assert result == EditResult(False, ResultHint.CHARACTER_CLASS_REJECTED, 3)
    assert strict.assigned_count == 0
    assert strict.set_text("12/34").ok
