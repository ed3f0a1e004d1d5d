"""Edit script loading for the CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from maskedit.editing.models import EditResult
from maskedit.utils.errors import EditScriptError

StepOp = Literal[
    "insert",
    "replace",
    "replace_range",
    "replace_text",
    "remove",
    "set",
    "add",
    "remove_last",
    "clear",
]

_NEEDS_CHAR = {"insert", "replace", "replace_range"}
_NEEDS_TEXT = {"replace_text", "set", "add"}
_NEEDS_POSITION = {"insert", "replace"}
_NEEDS_RANGE = {"replace_range", "replace_text", "remove"}


class EditStep(BaseModel):
    """One operation of an edit script.

    Rules:
    - insert/replace take ``char`` (or one-character ``text``) and ``position``.
    - replace_range takes ``char``, ``start`` and ``end``.
    - replace_text takes ``text`` and ``start``; ``end`` marks a selection.
    - remove takes ``start`` and optional ``end``/``direction``.
    - set/add take ``text``; clear/remove_last take nothing.
    """

    model_config = ConfigDict(extra="forbid")

    op: StepOp
    char: str | None = None
    text: str | None = None
    position: int | None = None
    start: int | None = None
    end: int | None = None
    direction: Literal["forward", "backward"] = "forward"
    policy: Literal["reject_on_first_failure", "apply_accepted"] = "reject_on_first_failure"

    @model_validator(mode="after")
    def _check_operands(self) -> EditStep:
        if self.op in _NEEDS_CHAR:
            if self.char is None and self.text is not None and len(self.text) == 1:
                self.char = self.text
            if self.char is None or len(self.char) != 1:
                raise ValueError(f"{self.op} requires a single 'char'")
        if self.op in _NEEDS_TEXT and self.text is None:
            raise ValueError(f"{self.op} requires 'text'")
        if self.op in _NEEDS_POSITION and self.position is None:
            raise ValueError(f"{self.op} requires 'position'")
        if self.op in _NEEDS_RANGE and self.start is None:
            raise ValueError(f"{self.op} requires 'start'")
        if self.op == "replace_range" and self.end is None:
            raise ValueError("replace_range requires 'end'")
        return self


def load_edit_script(path: Path) -> list[EditStep]:
    """Load steps from a YAML or JSON file.

    The document is either a list of steps or a mapping with a ``steps`` list.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EditScriptError(f"Cannot read edit script: {path}", source=path) from exc

    try:
        if path.suffix.lower() == ".json":
            raw: Any = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise EditScriptError(f"Invalid edit script syntax: {path}", source=path) from exc

    if isinstance(raw, dict):
        raw = raw.get("steps")
    if not isinstance(raw, list):
        raise EditScriptError(f"Edit script must contain a list of steps: {path}", source=path)

    try:
        return [EditStep.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise EditScriptError(f"Invalid edit script schema: {path}", source=path) from exc


def result_payload(step: EditStep, result: EditResult) -> dict[str, Any]:
    return {
        "op": step.op,
        "ok": result.ok,
        "hint": result.hint.name,
        "position": result.position,
    }
