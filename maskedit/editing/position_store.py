"""Per-position assignment state for one mask template."""

from __future__ import annotations

from maskedit.editing.models import Direction
from maskedit.templates.models import MaskTemplate


class PositionStore:
    """Slot array plus the counters derived from it.

    Each slot is ``None`` (unassigned) or one character. Only editable
    positions are ever assigned. ``assigned_count``,
    ``required_assigned_count`` and ``last_assigned_position`` are updated
    incrementally on every mutation and always match a full recount.
    """

    def __init__(self, template: MaskTemplate) -> None:
        self._template = template
        self._slots: list[str | None] = [None] * template.length
        self._assigned_count = 0
        self._required_assigned_count = 0
        self._last_assigned_position: int | None = None

    def copy(self) -> PositionStore:
        """Deep copy used as the commit/rollback unit of an edit."""

        duplicate = PositionStore.__new__(PositionStore)
        duplicate._template = self._template
        duplicate._slots = list(self._slots)
        duplicate._assigned_count = self._assigned_count
        duplicate._required_assigned_count = self._required_assigned_count
        duplicate._last_assigned_position = self._last_assigned_position
        return duplicate

    @property
    def template(self) -> MaskTemplate:
        return self._template

    @property
    def assigned_count(self) -> int:
        return self._assigned_count

    @property
    def required_assigned_count(self) -> int:
        return self._required_assigned_count

    @property
    def last_assigned_position(self) -> int | None:
        return self._last_assigned_position

    def __len__(self) -> int:
        return len(self._slots)

    def slot(self, position: int) -> str | None:
        self._check_index(position)
        return self._slots[position]

    def snapshot(self) -> tuple[str | None, ...]:
        return tuple(self._slots)

    def is_assigned(self, position: int) -> bool:
        return self.slot(position) is not None

    def is_edit_position(self, position: int) -> bool:
        self._check_index(position)
        return self._template.is_editable(position)

    def is_available_position(self, position: int) -> bool:
        """True for an editable position that is still unassigned."""

        return self.is_edit_position(position) and self._slots[position] is None

    # Mutations

    def assign(self, position: int, ch: str) -> None:
        self._check_index(position)
        if not self._template.is_editable(position):
            raise ValueError(f"position {position} is a literal and cannot be assigned")
        if len(ch) != 1:
            raise ValueError("a slot holds exactly one character")

        if self._slots[position] is None:
            self._assigned_count += 1
            if self._template[position].required:
                self._required_assigned_count += 1
            if self._last_assigned_position is None or position > self._last_assigned_position:
                self._last_assigned_position = position
        self._slots[position] = ch

    def unassign(self, position: int) -> None:
        self._check_index(position)
        if self._slots[position] is None:
            return

        self._slots[position] = None
        self._assigned_count -= 1
        if self._template[position].required:
            self._required_assigned_count -= 1
        if position == self._last_assigned_position:
            self._last_assigned_position = self.find_assigned_edit_position_in_range(
                0, position, Direction.BACKWARD
            )

    def clear(self) -> None:
        self._slots = [None] * len(self._slots)
        self._assigned_count = 0
        self._required_assigned_count = 0
        self._last_assigned_position = None

    # Queries

    def find_edit_position_from(self, position: int, direction: Direction) -> int | None:
        """First editable position from ``position`` (inclusive) in ``direction``."""

        start, end = self._scan_bounds(position, direction)
        return self.find_edit_position_in_range(start, end, direction)

    def find_assigned_edit_position_from(self, position: int, direction: Direction) -> int | None:
        start, end = self._scan_bounds(position, direction)
        return self.find_assigned_edit_position_in_range(start, end, direction)

    def find_unassigned_edit_position_from(
        self, position: int, direction: Direction
    ) -> int | None:
        start, end = self._scan_bounds(position, direction)
        return self.find_unassigned_edit_position_in_range(start, end, direction)

    def find_non_edit_position_from(self, position: int, direction: Direction) -> int | None:
        start, end = self._scan_bounds(position, direction)
        return self.find_non_edit_position_in_range(start, end, direction)

    def find_edit_position_in_range(
        self, start: int, end: int, direction: Direction
    ) -> int | None:
        return self._find_in_range(start, end, direction, lambda index: True)

    def find_assigned_edit_position_in_range(
        self, start: int, end: int, direction: Direction
    ) -> int | None:
        return self._find_in_range(
            start, end, direction, lambda index: self._slots[index] is not None
        )

    def find_unassigned_edit_position_in_range(
        self, start: int, end: int, direction: Direction
    ) -> int | None:
        return self._find_in_range(start, end, direction, lambda index: self._slots[index] is None)

    def find_non_edit_position_in_range(
        self, start: int, end: int, direction: Direction
    ) -> int | None:
        self._check_range(start, end)
        indices = range(start, end + 1)
        if direction is Direction.BACKWARD:
            indices = range(end, start - 1, -1)
        for index in indices:
            if not self._template.is_editable(index):
                return index
        return None

    def _find_in_range(self, start: int, end: int, direction: Direction, accept) -> int | None:
        self._check_range(start, end)
        indices = range(start, end + 1)
        if direction is Direction.BACKWARD:
            indices = range(end, start - 1, -1)
        for index in indices:
            if self._template.is_editable(index) and accept(index):
                return index
        return None

    def _scan_bounds(self, position: int, direction: Direction) -> tuple[int, int]:
        length = len(self._slots)
        if position < 0 or position > length:
            raise IndexError(f"position {position} outside 0..{length}")
        if direction is Direction.FORWARD:
            return position, length - 1
        return 0, min(position, length - 1)

    def _check_range(self, start: int, end: int) -> None:
        # An empty forward scan from the end position is expressed as start == len.
        length = len(self._slots)
        if start < 0 or end >= length or start > end + 1:
            raise IndexError(f"range [{start}, {end}] outside 0..{length - 1}")

    def _check_index(self, position: int) -> None:
        if position < 0 or position >= len(self._slots):
            raise IndexError(f"position {position} outside 0..{len(self._slots) - 1}")
