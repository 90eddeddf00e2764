"""Output formatters for resolved distribution records."""

import json
from collections.abc import Sequence
from datetime import datetime
from io import StringIO
from typing import Any

from rich.console import Console
from rich.table import Table

from cfinventory.models import ResolvedRecord

EMPTY_MESSAGE = "No distributions found."


def _json_default(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _cell(value: Any) -> str:
    """Render one value as a single-line string."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=_json_default, separators=(",", ":"), sort_keys=True)
    return str(value)


def _escape_md_cell(value: str) -> str:
    """Escape characters that break markdown table cells."""
    return value.replace("|", "\\|").replace("\n", " ")


def format_json(records: Sequence[ResolvedRecord], columns: Sequence[str]) -> str:
    """Format records as JSON."""
    distributions = [{name: record.get(name) for name in columns} for record in records]
    return json.dumps(
        {
            "summary": {"total": len(records)},
            "distributions": distributions,
        },
        indent=2,
        default=_json_default,
    )


def format_markdown(records: Sequence[ResolvedRecord], columns: Sequence[str]) -> str:
    """Format records as a Markdown table."""
    if not records:
        return EMPTY_MESSAGE

    lines = [
        f"## CloudFront distributions ({len(records)})",
        "",
        "| " + " | ".join(columns) + " |",
        "|" + "|".join("---" for _ in columns) + "|",
    ]
    for record in records:
        cells = [_escape_md_cell(_cell(record.get(name))) for name in columns]
        lines.append("| " + " | ".join(cells) + " |")

    return "\n".join(lines)


def format_table(records: Sequence[ResolvedRecord], columns: Sequence[str]) -> str:
    """Format records as a Rich table, returned as a string."""
    if not records:
        return EMPTY_MESSAGE

    console = Console(file=StringIO(), record=True, width=max(120, 24 * len(columns)))
    table = Table(title="CloudFront distributions", show_lines=False)
    for name in columns:
        table.add_column(name, overflow="fold")
    for record in records:
        table.add_row(*(_cell(record.get(name)) for name in columns))

    console.print(table)
    return console.export_text()
