from __future__ import annotations

import pytest

from maskedit.config.models import MaskConfig
from maskedit.editing.editor import MaskEditor
from maskedit.editing.position_store import PositionStore
from maskedit.format.formatter import MaskFormat, format_store
from maskedit.templates.mask_compiler import compile_mask

DATE_MASK = "00/00/0000"


def test_format_flags() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("12")

    assert editor.format_as(MaskFormat.INCLUDE_PROMPT_AND_LITERALS) == "12/__/____"
    assert editor.format_as(MaskFormat.INCLUDE_LITERALS) == "12/  /    "
    assert editor.format_as(MaskFormat.INCLUDE_PROMPT) == "12 __ ____"
    assert editor.format_as(MaskFormat.EXCLUDE_PROMPT_AND_LITERALS) == "12        "


def test_password_char_masks_assigned_slots() -> None:
    editor = MaskEditor(DATE_MASK, MaskConfig(password_char="*"))
    editor.set_text("12")

    assert editor.is_password is True
    assert editor.to_display_string() == "**/__/____"
    assert editor.to_string() == "12/__/____"
    assert editor.to_string(ignore_password_char=False, include_prompt=False) == "**/  /    "


def test_custom_prompt_char() -> None:
    editor = MaskEditor(DATE_MASK, MaskConfig(prompt_char="#"))

    assert str(editor) == "##/##/####"


def test_format_window() -> None:
    editor = MaskEditor(DATE_MASK)
    editor.set_text("123")

    assert editor.to_string(start=3, length=2) == "3_"
    assert editor.to_string(start=8) == "__"
    with pytest.raises(IndexError):
        editor.to_string(start=8, length=5)
    with pytest.raises(IndexError):
        editor.to_string(start=-1, length=2)


def test_format_store_is_pure() -> None:
    template = compile_mask("LL-00")
    store = PositionStore(template)
    store.assign(0, "A")
    config = MaskConfig()

    first = format_store(
        store,
        config,
        include_prompt=True,
        include_literals=True,
        ignore_password_char=True,
    )
    second = format_store(
        store,
        config,
        include_prompt=True,
        include_literals=True,
        ignore_password_char=True,
    )

    assert first == second == "A_-__"
    assert store.assigned_count == 1
