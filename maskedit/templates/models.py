"""Data models for compiled mask templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from maskedit.config.culture import CultureInfo


class PositionKind(str, Enum):
    LITERAL = "literal"
    EDITABLE = "editable"


class CharClass(str, Enum):
    """Character classes an editable slot can accept."""

    DIGIT = "digit"
    LETTER = "letter"
    ALPHANUMERIC = "alphanumeric"
    ANY = "any"
    SIGNED_DIGIT = "signed_digit"


class CaseMode(str, Enum):
    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"


@dataclass(frozen=True)
class PositionDescriptor:
    """One template position: a fixed literal or a typed editable slot.

    ``source`` is the mask token the position came from; for escaped
    characters and culture separators it differs from ``literal``.
    """

    kind: PositionKind
    source: str
    literal: str | None = None
    char_class: CharClass | None = None
    required: bool = False
    case_mode: CaseMode = CaseMode.NONE

    @property
    def is_editable(self) -> bool:
        return self.kind is PositionKind.EDITABLE

    @property
    def is_literal(self) -> bool:
        return self.kind is PositionKind.LITERAL


@dataclass(frozen=True)
class MaskTemplate:
    """Immutable ordered sequence of position descriptors."""

    mask: str
    positions: tuple[PositionDescriptor, ...]
    culture: CultureInfo
    edit_positions: tuple[int, ...] = field(init=False, repr=False)
    required_count: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        edit_positions = tuple(
            index for index, descriptor in enumerate(self.positions) if descriptor.is_editable
        )
        object.__setattr__(self, "edit_positions", edit_positions)
        object.__setattr__(
            self,
            "required_count",
            sum(1 for index in edit_positions if self.positions[index].required),
        )

    def __len__(self) -> int:
        return len(self.positions)

    def __getitem__(self, position: int) -> PositionDescriptor:
        return self.positions[position]

    @property
    def length(self) -> int:
        return len(self.positions)

    @property
    def edit_position_count(self) -> int:
        return len(self.edit_positions)

    def is_editable(self, position: int) -> bool:
        return self.positions[position].is_editable
