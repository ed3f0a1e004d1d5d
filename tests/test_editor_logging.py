from __future__ import annotations

import json
import logging

import pytest

from maskedit.editing.editor import MaskEditor


def _engine_events(caplog: pytest.LogCaptureFixture) -> list[dict[str, object]]:
    return [
        json.loads(record.message)
        for record in caplog.records
        if record.name == "maskedit.engine"
    ]


def test_rejection_is_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="maskedit.engine")
    editor = MaskEditor("00/00/0000")

    editor.replace("x", 0)

    events = _engine_events(caplog)
    assert events == [
        {
            "event": "edit_rejected",
            "op": "replace",
            "hint": "CHARACTER_CLASS_REJECTED",
            "position": 0,
        }
    ]


def test_commit_is_logged_with_counters(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="maskedit.engine")
    editor = MaskEditor("00/00/0000")

    editor.set_text("0102")

    events = _engine_events(caplog)
    assert len(events) == 1
    assert events[0]["event"] == "edit_committed"
    assert events[0]["op"] == "set"
    assert events[0]["hint"] == "SUCCESS"
    assert events[0]["assigned_count"] == 4


def test_engine_is_silent_above_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="maskedit.engine")
    editor = MaskEditor("00/00/0000")

    editor.set_text("0102")
    editor.replace("x", 0)

    assert _engine_events(caplog) == []
