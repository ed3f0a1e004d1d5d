"""Typer CLI entrypoint for maskedit."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Literal, cast

import typer

from maskedit.config.config_loader import load_config
from maskedit.config.culture import get_culture
from maskedit.editing.editor import MaskEditor
from maskedit.editing.models import BulkPolicy, Direction, EditResult
from maskedit.templates.mask_compiler import compile_mask
from maskedit.utils.errors import EditScriptError, MaskError
from maskedit.utils.events import log_event
from maskedit_cli.io import EditStep, load_edit_script, result_payload
from maskedit_cli.render_human import render_apply_summary, render_position_table

logger = logging.getLogger("maskedit.cli")

app = typer.Typer(help="Masked text editing CLI", rich_markup_mode=None)
ReportMode = Literal["human", "json"]


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep subcommands explicit."""


@app.command("inspect")
def inspect_command(
    mask: Annotated[str, typer.Option(..., help="Mask specification, e.g. 00/00/0000.")],
    culture: Annotated[str, typer.Option(help="Culture preset name.")] = "invariant",
) -> None:
    """Print the compiled position table of a mask."""

    try:
        template = compile_mask(mask, get_culture(culture))
    except MaskError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=3) from exc

    typer.echo(render_position_table(template))


@app.command("apply")
def apply_command(
    mask: Annotated[str, typer.Option(..., help="Mask specification, e.g. 00/00/0000.")],
    script: Annotated[Path, typer.Option(..., dir_okay=False, help="YAML or JSON edit script.")],
    config: Annotated[
        Path | None, typer.Option(dir_okay=False, help="Mask config YAML.")
    ] = None,
    report: Annotated[str, typer.Option(help="Report format: human or json.")] = "human",
) -> None:
    """Replay an edit script against a fresh editor and report every result."""

    normalized_report = report.lower().strip()
    if normalized_report not in {"human", "json"}:
        typer.echo("ERROR: --report must be one of: human, json.")
        raise typer.Exit(code=1)
    report_mode = cast(ReportMode, normalized_report)

    try:
        editor = MaskEditor(mask, load_config(config))
    except MaskError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=3) from exc

    try:
        steps = load_edit_script(script)
    except EditScriptError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=1) from exc

    payloads = []
    for index, step in enumerate(steps, start=1):
        try:
            result = run_step(editor, step)
        except (IndexError, ValueError) as exc:
            typer.echo(f"ERROR: step {index} ({step.op}): {exc}")
            raise typer.Exit(code=1) from exc
        payloads.append(result_payload(step, result))

    rejected = sum(1 for payload in payloads if not payload["ok"])
    log_event(
        logger,
        logging.INFO,
        "script_applied",
        mask=mask,
        steps=len(payloads),
        rejected=rejected,
    )

    if report_mode == "json":
        typer.echo(
            json.dumps(
                {
                    "mask": mask,
                    "steps": payloads,
                    "value": editor.to_string(),
                    "mask_completed": editor.mask_completed,
                    "mask_full": editor.mask_full,
                },
                ensure_ascii=False,
            )
        )
    else:
        typer.echo(
            render_apply_summary(
                payloads,
                value=editor.to_display_string(),
                mask_completed=editor.mask_completed,
                mask_full=editor.mask_full,
            )
        )

    raise typer.Exit(code=0 if rejected == 0 else 2)


def run_step(editor: MaskEditor, step: EditStep) -> EditResult:
    """Dispatch one validated step to the matching editor operation."""

    direction = Direction(step.direction)
    policy = BulkPolicy(step.policy)
    if step.op == "insert":
        return editor.insert_at(step.char, step.position)
    if step.op == "replace":
        return editor.replace(step.char, step.position)
    if step.op == "replace_range":
        return editor.replace_range(step.char, step.start, step.end)
    if step.op == "replace_text":
        return editor.replace_text(step.text, step.start, step.end, policy=policy)
    if step.op == "remove":
        return editor.remove_at(step.start, step.end, direction=direction)
    if step.op == "set":
        return editor.set_text(step.text)
    if step.op == "add":
        return editor.add(step.text)
    if step.op == "remove_last":
        return editor.remove_last()
    return editor.clear()


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
