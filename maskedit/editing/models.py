"""Result and policy types returned by edit operations."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import NamedTuple


class ResultHint(IntEnum):
    """Outcome of an edit operation.

    Integer order is the "best hint wins" order used by bulk operations:
    every rejection is negative and ranks below ``NO_EFFECT``.
    """

    SUCCESS = 4
    SIDE_EFFECT_SUCCESS = 3
    NO_EFFECT = 2
    CHARACTER_CLASS_REJECTED = -1
    ASCII_ONLY_VIOLATION = -2
    PROMPT_CHAR_COLLISION = -3
    UNAVAILABLE_EDIT_POSITION = -4

    @property
    def is_success(self) -> bool:
        return self > 0


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class BulkPolicy(Enum):
    """How a multi-character edit treats rejected characters."""

    REJECT_ON_FIRST_FAILURE = "reject_on_first_failure"
    APPLY_ACCEPTED = "apply_accepted"


class EditResult(NamedTuple):
    """``(ok, hint, position)`` triple returned by every mutating operation.

    ``position`` is the last position the operation touched on success, the
    offending position on rejection, or the caret target for no-op deletes.
    """

    ok: bool
    hint: ResultHint
    position: int
