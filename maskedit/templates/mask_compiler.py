"""Mask specification compiler.

Turns a mask string such as ``00/00/0000`` into an immutable
:class:`MaskTemplate`. `0`, `L`, `&` and `A` are required slots; `9`, `#`,
`?`, `C` and `a` are optional.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import NoReturn

from maskedit.config.culture import INVARIANT_CULTURE, CultureInfo
from maskedit.templates.models import (
    CaseMode,
    CharClass,
    MaskTemplate,
    PositionDescriptor,
    PositionKind,
)
from maskedit.utils.chars import is_printable_char
from maskedit.utils.errors import InvalidMaskCharacterError
from maskedit.utils.events import log_event

logger = logging.getLogger("maskedit.compiler")

ESCAPE_TOKEN = "\\"

EDIT_TOKENS: Mapping[str, tuple[CharClass, bool]] = MappingProxyType(
    {
        "0": (CharClass.DIGIT, True),
        "9": (CharClass.DIGIT, False),
        "#": (CharClass.SIGNED_DIGIT, False),
        "L": (CharClass.LETTER, True),
        "?": (CharClass.LETTER, False),
        "&": (CharClass.ANY, True),
        "C": (CharClass.ANY, False),
        "A": (CharClass.ALPHANUMERIC, True),
        "a": (CharClass.ALPHANUMERIC, False),
    }
)

SEPARATOR_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        ".": "decimal_separator",
        ",": "group_separator",
        ":": "time_separator",
        "/": "date_separator",
        "$": "currency_symbol",
    }
)

CASE_TOKENS: Mapping[str, CaseMode] = MappingProxyType(
    {
        ">": CaseMode.UPPER,
        "<": CaseMode.LOWER,
        "|": CaseMode.NONE,
    }
)


def compile_mask(mask: str, culture: CultureInfo | None = None) -> MaskTemplate:
    """Compile a mask specification into a template.

    Rules:
    - Edit tokens (see ``EDIT_TOKENS``) become editable slots.
    - Separator tokens become literals holding the culture glyph; a glyph
      longer than one character yields one literal per character.
    - ``>``/``<``/``|`` set the case mode of every following editable slot.
    - ``\\`` makes the next character a literal, even if it is a token.
    - Any other printable character is a literal.

    Raises:
        InvalidMaskCharacterError: for empty masks, non-printable characters,
            a dangling escape, or masks that yield no positions.
    """

    culture = culture or INVARIANT_CULTURE
    if not mask:
        _reject("Mask must not be empty", mask=mask)

    positions: list[PositionDescriptor] = []
    case_mode = CaseMode.NONE
    escaped = False

    for index, token in enumerate(mask):
        if not is_printable_char(token):
            _reject(
                f"Invalid mask character {token!r} at position {index}",
                mask=mask,
                position=index,
                char=token,
            )

        if escaped:
            positions.append(
                PositionDescriptor(kind=PositionKind.LITERAL, source=token, literal=token)
            )
            escaped = False
            continue

        if token == ESCAPE_TOKEN:
            escaped = True
            continue

        if token in CASE_TOKENS:
            case_mode = CASE_TOKENS[token]
            continue

        if token in EDIT_TOKENS:
            char_class, required = EDIT_TOKENS[token]
            positions.append(
                PositionDescriptor(
                    kind=PositionKind.EDITABLE,
                    source=token,
                    char_class=char_class,
                    required=required,
                    case_mode=case_mode,
                )
            )
            continue

        if token in SEPARATOR_TOKENS:
            glyph = getattr(culture, SEPARATOR_TOKENS[token])
            positions.extend(
                PositionDescriptor(kind=PositionKind.LITERAL, source=token, literal=ch)
                for ch in glyph
            )
            continue

        positions.append(PositionDescriptor(kind=PositionKind.LITERAL, source=token, literal=token))

    if escaped:
        _reject(
            "Mask ends with an escape character",
            mask=mask,
            position=len(mask) - 1,
            char=ESCAPE_TOKEN,
        )

    if not positions:
        _reject("Mask yields no positions", mask=mask)

    return MaskTemplate(mask=mask, positions=tuple(positions), culture=culture)


def _reject(
    message: str,
    *,
    mask: str,
    position: int | None = None,
    char: str | None = None,
) -> NoReturn:
    log_event(
        logger,
        logging.INFO,
        "mask_rejected",
        mask=mask,
        position=position,
        reason=message,
    )
    raise InvalidMaskCharacterError(message, mask=mask, position=position, char=char)
