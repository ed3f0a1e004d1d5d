"""Render a position store as text."""

from __future__ import annotations

from enum import Flag

from maskedit.config.models import MaskConfig
from maskedit.editing.position_store import PositionStore
from maskedit.utils.chars import SPACE


class MaskFormat(Flag):
    EXCLUDE_PROMPT_AND_LITERALS = 0
    INCLUDE_PROMPT = 1
    INCLUDE_LITERALS = 2
    INCLUDE_PROMPT_AND_LITERALS = 3


def format_store(
    store: PositionStore,
    config: MaskConfig,
    *,
    include_prompt: bool,
    include_literals: bool,
    ignore_password_char: bool,
    start: int = 0,
    length: int | None = None,
) -> str:
    """Format ``length`` positions from ``start`` (the rest of the store by default).

    Excluded literals and unassigned slots without a prompt render as spaces,
    so the output always has one character per position.
    """

    total = len(store)
    if length is None:
        length = total - start
    if start < 0 or length < 0 or start + length > total:
        raise IndexError(f"window [{start}, {start + length}) outside 0..{total}")

    template = store.template
    mask_password = config.password_char is not None and not ignore_password_char
    out: list[str] = []
    for position in range(start, start + length):
        descriptor = template[position]
        if descriptor.is_literal:
            out.append(descriptor.literal if include_literals else SPACE)
            continue

        ch = store.slot(position)
        if ch is None:
            out.append(config.prompt_char if include_prompt else SPACE)
        elif mask_password:
            out.append(config.password_char)
        else:
            out.append(ch)
    return "".join(out)
