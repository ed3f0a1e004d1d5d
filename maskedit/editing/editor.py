"""Masked-text editing engine.

Every mutating operation runs against a copy of the position store and
swaps the copy in only when it commits, so a caller never observes a
half-applied edit. Non-acceptance is reported through ``ResultHint``;
only out-of-range positions raise.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from maskedit.config.models import MaskConfig
from maskedit.editing.char_validator import CharacterValidator, VerdictAction
from maskedit.editing.models import BulkPolicy, Direction, EditResult, ResultHint
from maskedit.editing.position_store import PositionStore
from maskedit.format.formatter import MaskFormat, format_store
from maskedit.templates.mask_compiler import compile_mask
from maskedit.templates.models import MaskTemplate
from maskedit.utils.events import log_event

logger = logging.getLogger("maskedit.engine")

RejectCallback = Callable[[int, ResultHint], None]


class MaskEditor:
    """Editable value of one mask template."""

    def __init__(self, mask: str | MaskTemplate, config: MaskConfig | None = None) -> None:
        self._config = config or MaskConfig()
        if isinstance(mask, MaskTemplate):
            self._template = mask
        else:
            self._template = compile_mask(mask, self._config.culture)
        self._validator = CharacterValidator(self._config)
        self._store = PositionStore(self._template)

    def clone(self) -> MaskEditor:
        duplicate = MaskEditor(self._template, self._config)
        duplicate._store = self._store.copy()
        return duplicate

    # Accessors

    @property
    def template(self) -> MaskTemplate:
        return self._template

    @property
    def config(self) -> MaskConfig:
        return self._config

    @property
    def mask(self) -> str:
        return self._template.mask

    @property
    def length(self) -> int:
        return self._template.length

    def __len__(self) -> int:
        return self._template.length

    def __getitem__(self, position: int) -> str | None:
        descriptor = self._template[position]
        if descriptor.is_literal:
            return descriptor.literal
        return self._store.slot(position)

    @property
    def assigned_count(self) -> int:
        return self._store.assigned_count

    @property
    def edit_position_count(self) -> int:
        return self._template.edit_position_count

    @property
    def available_edit_position_count(self) -> int:
        return self._template.edit_position_count - self._store.assigned_count

    @property
    def last_assigned_position(self) -> int | None:
        return self._store.last_assigned_position

    @property
    def mask_completed(self) -> bool:
        return self._store.required_assigned_count == self._template.required_count

    @property
    def mask_full(self) -> bool:
        return self._store.assigned_count == self._template.edit_position_count

    @property
    def is_password(self) -> bool:
        return self._config.is_password

    @property
    def end_position(self) -> int:
        """Where appended text starts: the next editable slot after the last assigned one."""

        last = self._store.last_assigned_position
        start = 0 if last is None else last + 1
        found = self._store.find_edit_position_from(start, Direction.FORWARD)
        return start if found is None else found

    def snapshot(self) -> tuple[str | None, ...]:
        return self._store.snapshot()

    # Position queries

    def find_edit_position_from(self, position: int, direction: Direction) -> int | None:
        return self._store.find_edit_position_from(position, direction)

    def find_assigned_edit_position_from(self, position: int, direction: Direction) -> int | None:
        return self._store.find_assigned_edit_position_from(position, direction)

    def find_unassigned_edit_position_from(
        self, position: int, direction: Direction
    ) -> int | None:
        return self._store.find_unassigned_edit_position_from(position, direction)

    def find_non_edit_position_from(self, position: int, direction: Direction) -> int | None:
        return self._store.find_non_edit_position_from(position, direction)

    def is_edit_position(self, position: int) -> bool:
        return self._store.is_edit_position(position)

    def is_available_position(self, position: int) -> bool:
        return self._store.is_available_position(position)

    # Insert

    def insert_at(self, ch: str, position: int) -> EditResult:
        _require_single_char(ch)
        return self.insert_text_at(ch, position)

    def insert_text_at(self, text: str, position: int) -> EditResult:
        """Insert ``text`` at ``position``, shifting assigned content right.

        The insert is all-or-nothing: a rejected character, or any assigned
        character that would be pushed past the last editable slot, leaves
        the value untouched.
        """

        self._check_caret(position)
        if not text:
            return EditResult(True, ResultHint.NO_EFFECT, position)

        work = self._store.copy()
        result = self._insert(work, text, position)
        return self._finish("insert", work, result)

    def _insert(self, work: PositionStore, text: str, position: int) -> EditResult:
        template = self._template
        planned: list[tuple[int, str, bool]] = []
        cursor = position
        for ch in text:
            if cursor >= template.length:
                return EditResult(False, ResultHint.UNAVAILABLE_EDIT_POSITION, cursor)
            if self._validator.is_escape(template[cursor], ch):
                target = cursor
            else:
                target = work.find_edit_position_from(cursor, Direction.FORWARD)
                if target is None:
                    return EditResult(False, ResultHint.UNAVAILABLE_EDIT_POSITION, cursor)
            planned.append((target, ch, target > cursor))
            cursor = target + 1

        consumed = sum(1 for target, _, _ in planned if template.is_editable(target))
        first = work.find_edit_position_from(position, Direction.FORWARD)
        last = work.last_assigned_position
        edit_positions = template.edit_positions
        sources: list[int] = []
        moves: list[tuple[int, str]] = []
        if consumed and first is not None and last is not None and last >= first:
            first_index = edit_positions.index(first)
            last_index = edit_positions.index(last)
            for index in range(first_index, last_index + 1):
                source = edit_positions[index]
                sources.append(source)
                ch = work.slot(source)
                if ch is None:
                    continue
                if index + consumed >= len(edit_positions):
                    return EditResult(False, ResultHint.UNAVAILABLE_EDIT_POSITION, source)
                destination = edit_positions[index + consumed]
                checked = self._validator.check_class(template[destination], ch)
                if not checked.ok:
                    return EditResult(False, checked.hint, destination)
                moves.append((destination, checked.char))

        for source in sources:
            work.unassign(source)
        for destination, ch in moves:
            work.assign(destination, ch)

        best: ResultHint | None = None
        last_target = position
        for target, ch, skipped in planned:
            verdict = self._validator.check(template[target], ch, work.slot(target))
            if verdict.action is VerdictAction.REJECT:
                return EditResult(False, verdict.hint, target)
            _apply_verdict(work, target, verdict.action, verdict.char)
            hint = _skipped_hint(verdict.hint, skipped)
            best = hint if best is None else max(best, hint)
            last_target = target
        return EditResult(True, best or ResultHint.NO_EFFECT, last_target)

    # Replace

    def replace(self, ch: str, position: int) -> EditResult:
        """Overwrite the next editable slot at or after ``position``."""

        _require_single_char(ch)
        self._check_caret(position)
        work = self._store.copy()
        hint, target = self._place(work, ch, position)
        return self._finish("replace", work, EditResult(hint.is_success, hint, target))

    def replace_range(self, ch: str, start: int, end: int) -> EditResult:
        """Replace the selection ``[start, end]`` with one character."""

        _require_single_char(ch)
        return self.replace_text(ch, start, end)

    def replace_text(
        self,
        text: str,
        start: int,
        end: int | None = None,
        policy: BulkPolicy = BulkPolicy.REJECT_ON_FIRST_FAILURE,
        on_reject: RejectCallback | None = None,
    ) -> EditResult:
        """Overwrite from ``start`` with ``text``; remove what is left of the selection.

        Rules:
        - Each character is consumed in place when it is an escape at the
          cursor, otherwise it lands on the next editable slot.
        - Editable slots of ``[start, end]`` the text did not reach are
          removed with delete semantics.
        - Text left over once the selection is filled is inserted, shifting
          later content right; overflow rejects it like ``insert_text_at``.
        - ``REJECT_ON_FIRST_FAILURE`` leaves the value untouched on any
          rejection; ``APPLY_ACCEPTED`` keeps accepted characters, calls
          ``on_reject`` per rejection and reports the first one.
        """

        self._check_caret(start)
        if end is not None:
            if start > end:
                raise IndexError(f"selection start {start} is after end {end}")
            if end >= self._template.length:
                return self._reject(
                    "replace_text",
                    EditResult(False, ResultHint.UNAVAILABLE_EDIT_POSITION, end),
                )
            if not text:
                return self.remove_at(start, end)
        if not text:
            return EditResult(True, ResultHint.NO_EFFECT, start)

        work = self._store.copy()
        best: ResultHint | None = None
        first_rejection: EditResult | None = None
        last_target = start
        cursor = start
        for index, ch in enumerate(text):
            if end is not None and cursor > end:
                # Input longer than the selection pushes later content right.
                trial = work.copy()
                inserted = self._insert(trial, text[index:], cursor)
                if not inserted.ok:
                    if policy is BulkPolicy.REJECT_ON_FIRST_FAILURE:
                        return self._reject("replace_text", inserted)
                    if on_reject is not None:
                        on_reject(inserted.position, inserted.hint)
                    first_rejection = first_rejection or inserted
                    break
                work = trial
                best = inserted.hint if best is None else max(best, inserted.hint)
                last_target = inserted.position
                break
            hint, target = self._place(work, ch, cursor)
            if not hint.is_success:
                rejection = EditResult(False, hint, target)
                if policy is BulkPolicy.REJECT_ON_FIRST_FAILURE:
                    return self._reject("replace_text", rejection)
                if on_reject is not None:
                    on_reject(target, hint)
                first_rejection = first_rejection or rejection
                continue
            best = hint if best is None else max(best, hint)
            last_target = target
            cursor = target + 1

        if end is not None and cursor <= end:
            removed = self._remove_range(work, cursor, end)
            if not removed.ok:
                if policy is BulkPolicy.REJECT_ON_FIRST_FAILURE:
                    return self._reject("replace_text", removed)
                if on_reject is not None:
                    on_reject(removed.position, removed.hint)
                first_rejection = first_rejection or removed
            elif best is None or best is ResultHint.NO_EFFECT:
                best = removed.hint

        result = first_rejection or EditResult(True, best or ResultHint.NO_EFFECT, last_target)
        self._commit("replace_text", work, result)
        return result

    def _place(self, work: PositionStore, ch: str, cursor: int) -> tuple[ResultHint, int]:
        """Apply one overwrite keystroke at ``cursor``; ``work`` is only touched on success."""

        template = self._template
        if cursor >= template.length:
            return ResultHint.UNAVAILABLE_EDIT_POSITION, cursor
        if self._validator.is_escape(template[cursor], ch):
            target = cursor
        else:
            target = work.find_edit_position_from(cursor, Direction.FORWARD)
            if target is None:
                return ResultHint.UNAVAILABLE_EDIT_POSITION, cursor

        verdict = self._validator.check(template[target], ch, work.slot(target))
        if verdict.action is VerdictAction.REJECT:
            return verdict.hint, target
        _apply_verdict(work, target, verdict.action, verdict.char)
        return _skipped_hint(verdict.hint, target > cursor), target

    # Remove

    def remove_at(
        self,
        start: int,
        end: int | None = None,
        direction: Direction = Direction.FORWARD,
    ) -> EditResult:
        """Delete ``[start, end]`` and pull later content left.

        ``direction`` only affects where the caret goes when nothing was
        removed: ``BACKWARD`` is Backspace, with ``start`` the position left
        of the caret.
        """

        if end is None:
            end = start
        if start < 0 or start > end:
            raise IndexError(f"invalid removal range [{start}, {end}]")
        if end >= self._template.length:
            return self._reject(
                "remove", EditResult(False, ResultHint.UNAVAILABLE_EDIT_POSITION, start)
            )

        work = self._store.copy()
        result = self._remove_range(work, start, end)
        if result.ok and result.hint is ResultHint.NO_EFFECT:
            return EditResult(True, ResultHint.NO_EFFECT, self._no_effect_caret(start, direction))
        return self._finish("remove", work, result)

    def remove_last(self) -> EditResult:
        last = self._store.last_assigned_position
        if last is None:
            return EditResult(True, ResultHint.NO_EFFECT, 0)
        return self.remove_at(last)

    def _remove_range(self, work: PositionStore, start: int, end: int) -> EditResult:
        template = self._template
        edit_positions = template.edit_positions
        in_range = [position for position in edit_positions if start <= position <= end]
        last = work.last_assigned_position
        if not in_range or last is None or last < in_range[0]:
            return EditResult(True, ResultHint.NO_EFFECT, start)

        removed_assigned = any(work.is_assigned(position) for position in in_range)
        first_index = edit_positions.index(in_range[0])
        sources = [position for position in edit_positions if end < position <= last]
        moves: list[tuple[int, str]] = []
        for offset, source in enumerate(sources):
            ch = work.slot(source)
            if ch is None:
                continue
            destination = edit_positions[first_index + offset]
            checked = self._validator.check_class(template[destination], ch)
            if not checked.ok:
                return EditResult(False, checked.hint, destination)
            moves.append((destination, checked.char))

        for position in in_range + sources:
            work.unassign(position)
        for destination, ch in moves:
            work.assign(destination, ch)

        hint = ResultHint.SUCCESS if removed_assigned else ResultHint.SIDE_EFFECT_SUCCESS
        return EditResult(True, hint, start)

    def _no_effect_caret(self, start: int, direction: Direction) -> int:
        store = self._store
        if direction is Direction.FORWARD:
            found = store.find_edit_position_from(start, Direction.FORWARD)
            return start if found is None else found

        if store.find_assigned_edit_position_from(start, Direction.FORWARD) is None:
            found = store.find_assigned_edit_position_from(start, Direction.BACKWARD)
        else:
            found = store.find_edit_position_from(start, Direction.BACKWARD)
        return start if found is None else found + 1

    # Bulk

    def set_text(self, text: str) -> EditResult:
        """Replace the whole value; never partially applied."""

        work = self._store.copy()
        result = self._set(work, text)
        return self._finish("set", work, result)

    def add(self, text: str) -> EditResult:
        """Append ``text`` after the last assigned character."""

        last = self._store.last_assigned_position
        return self.replace_text(text, 0 if last is None else last + 1)

    def clear(self) -> EditResult:
        had_content = self._store.assigned_count > 0
        work = self._store.copy()
        work.clear()
        result = EditResult(True, ResultHint.SUCCESS if had_content else ResultHint.NO_EFFECT, 0)
        self._commit("clear", work, result)
        return result

    def _set(self, work: PositionStore, text: str) -> EditResult:
        had_content = work.assigned_count > 0
        work.clear()
        if not text:
            hint = ResultHint.SUCCESS if had_content else ResultHint.NO_EFFECT
            return EditResult(True, hint, 0)

        best: ResultHint | None = None
        last_target = 0
        cursor = 0
        for ch in text:
            hint, target = self._place(work, ch, cursor)
            if not hint.is_success:
                return EditResult(False, hint, target)
            best = hint if best is None else max(best, hint)
            last_target = target
            cursor = target + 1
        return EditResult(True, best or ResultHint.NO_EFFECT, last_target)

    # Verification

    def verify_char(self, ch: str, position: int) -> EditResult:
        """Result ``replace(ch, position)`` would return, without editing."""

        _require_single_char(ch)
        self._check_caret(position)
        hint, target = self._place(self._store.copy(), ch, position)
        return EditResult(hint.is_success, hint, target)

    def verify_text(self, text: str) -> EditResult:
        """Result ``set_text(text)`` would return, without editing."""

        return self._set(self._store.copy(), text)

    # Output

    def to_string(
        self,
        include_prompt: bool = True,
        include_literals: bool = True,
        ignore_password_char: bool = True,
        start: int = 0,
        length: int | None = None,
    ) -> str:
        return format_store(
            self._store,
            self._config,
            include_prompt=include_prompt,
            include_literals=include_literals,
            ignore_password_char=ignore_password_char,
            start=start,
            length=length,
        )

    def format_as(self, mask_format: MaskFormat, ignore_password_char: bool = True) -> str:
        return self.to_string(
            include_prompt=bool(mask_format & MaskFormat.INCLUDE_PROMPT),
            include_literals=bool(mask_format & MaskFormat.INCLUDE_LITERALS),
            ignore_password_char=ignore_password_char,
        )

    def to_display_string(self) -> str:
        """Prompt, literals and password masking, as a control would show it."""

        return self.to_string(ignore_password_char=False)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"MaskEditor(mask={self.mask!r}, value={self.to_string()!r})"

    # Commit helpers

    def _finish(self, operation: str, work: PositionStore, result: EditResult) -> EditResult:
        if not result.ok:
            return self._reject(operation, result)
        self._commit(operation, work, result)
        return result

    def _commit(self, operation: str, work: PositionStore, result: EditResult) -> None:
        self._store = work
        log_event(
            logger,
            logging.DEBUG,
            "edit_committed",
            op=operation,
            ok=result.ok,
            hint=result.hint.name,
            position=result.position,
            assigned_count=work.assigned_count,
        )

    def _reject(self, operation: str, result: EditResult) -> EditResult:
        log_event(
            logger,
            logging.DEBUG,
            "edit_rejected",
            op=operation,
            hint=result.hint.name,
            position=result.position,
        )
        return result

    def _check_caret(self, position: int) -> None:
        if position < 0 or position > self._template.length:
            raise IndexError(f"position {position} outside 0..{self._template.length}")


def _apply_verdict(work: PositionStore, target: int, action: VerdictAction, ch: str) -> None:
    if action is VerdictAction.ASSIGN:
        work.assign(target, ch)
    elif action is VerdictAction.RESET:
        work.unassign(target)


def _skipped_hint(hint: ResultHint, skipped: bool) -> ResultHint:
    if skipped and hint is ResultHint.SUCCESS:
        return ResultHint.SIDE_EFFECT_SUCCESS
    return hint


def _require_single_char(ch: str) -> None:
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
