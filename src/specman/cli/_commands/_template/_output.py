"""Output formatting for template commands."""

from specman.cli._commands._context import OutputFormat
from specman.cli._commands._shared import FormattableData, format_json, format_table
from specman.templates import ResolvedTemplate


def resolved_to_dict(
    resolved: ResolvedTemplate, *, action: str | None = None
) -> FormattableData:
    data = resolved.to_dict()
    if action is not None:
        data = {"action": action, **data}
    return data


def format_resolved(
    resolved: ResolvedTemplate,
    format_: OutputFormat,
    *,
    action: str | None = None,
) -> str:
    """Render a resolution as a two-column table or JSON."""
    data = resolved_to_dict(resolved, action=action)
    if format_ == OutputFormat.JSON:
        return format_json(data)

    rows: list[list[str]] = []
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, list):
            value = ", ".join(value) if value else "-"  # noqa: PLW2901
        rows.append([key, str(value)])
    return format_table(["Field", "Value"], rows)
