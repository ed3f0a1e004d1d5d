"""Human-readable rendering for CLI output."""

from __future__ import annotations

from typing import Any

from maskedit.templates.models import CaseMode, MaskTemplate


def render_position_table(template: MaskTemplate) -> str:
    """Render one line per template position."""

    lines: list[str] = []
    lines.append(f"mask={template.mask!r} culture={template.culture.name}")
    lines.append(
        f"length={template.length} editable={template.edit_position_count} "
        f"required={template.required_count}"
    )
    for index, descriptor in enumerate(template.positions):
        if descriptor.is_literal:
            lines.append(
                f"{index:>3}  literal   {descriptor.literal!r} (from {descriptor.source!r})"
            )
            continue
        required = "required" if descriptor.required else "optional"
        case_mode = ""
        if descriptor.case_mode is not CaseMode.NONE:
            case_mode = f" case={descriptor.case_mode.value}"
        lines.append(
            f"{index:>3}  editable  {descriptor.char_class.value} {required}{case_mode}"
        )
    return "\n".join(lines)


def render_apply_summary(
    steps: list[dict[str, Any]],
    *,
    value: str,
    mask_completed: bool,
    mask_full: bool,
) -> str:
    """Render step results followed by the final value."""

    lines: list[str] = []
    for index, step in enumerate(steps, start=1):
        status = "ok" if step["ok"] else "REJECTED"
        lines.append(
            f"step {index}: {step['op']} -> {status} hint={step['hint']} "
            f"position={step['position']}"
        )
    rejected = sum(1 for step in steps if not step["ok"])
    lines.append(f"value={value!r}")
    lines.append(f"mask_completed={mask_completed} mask_full={mask_full}")
    lines.append(f"result={'PASSED' if rejected == 0 else f'REJECTED ({rejected})'}")
    return "\n".join(lines)
