"""Output formatters and stderr diagnostics."""

from __future__ import annotations

import csv
import io
import json
import sys
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    jsonl = "jsonl"
    csv = "csv"
    tsv = "tsv"
    human = "human"


def serialize_value(value: Any) -> Any:
    """Convert a value to something ``json.dumps`` accepts."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    return value


def serialize_object(obj: Any) -> dict[str, Any]:
    """Serialize a model or mapping to a dictionary."""
    serialized = serialize_value(obj)
    if isinstance(serialized, dict):
        return serialized
    return {"value": serialized}


def filter_fields(data: dict[str, Any], fields: list[str] | None) -> dict[str, Any]:
    if fields is None:
        return data
    return {k: v for k, v in data.items() if k in fields}


def _as_rows(data: Any, fields: list[str] | None) -> list[dict[str, Any]]:
    items = data if isinstance(data, (list, tuple)) else [data]
    return [filter_fields(serialize_object(item), fields) for item in items]


def _columns(rows: list[dict[str, Any]], fields: list[str] | None) -> list[str]:
    if fields:
        return fields
    # Keep first-seen key order so model fields appear as declared
    columns: dict[str, None] = {}
    for row in rows:
        columns.update(dict.fromkeys(row))
    return list(columns)


def _cell(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return value


def output_json(data: Any, fields: list[str] | None = None) -> None:
    if isinstance(data, (list, tuple)):
        serialized: Any = _as_rows(data, fields)
    else:
        serialized = filter_fields(serialize_object(data), fields)
    print(json.dumps(serialized, indent=2, default=str))


def output_jsonl(data: Any, fields: list[str] | None = None) -> None:
    """Output data as JSON Lines (one JSON object per line)."""
    for row in _as_rows(data, fields):
        print(json.dumps(row, default=str))


def output_csv(
    data: Any,
    fields: list[str] | None = None,
    no_header: bool = False,
    delimiter: str = ",",
) -> None:
    """Output data as CSV or TSV; nested values are embedded as JSON."""
    rows = _as_rows(data, fields)
    if not rows:
        return
    columns = _columns(rows, fields)

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, delimiter=delimiter, extrasaction="ignore")
    if not no_header:
        writer.writeheader()
    for row in rows:
        writer.writerow({col: _cell(row.get(col)) for col in columns})

    print(buffer.getvalue(), end="")


def output_human(
    data: Any,
    fields: list[str] | None = None,
    columns: list[tuple[str, str]] | None = None,
) -> None:
    """Output data as a rich table.

    Args:
        data: Data to output
        fields: Fields to include
        columns: (field_name, header) pairs; defaults to upper-cased field names
    """
    rows = _as_rows(data, fields)
    if not rows:
        return

    if columns is None:
        columns = [(name, name.upper()) for name in _columns(rows, fields)]

    table = Table(show_header=True, header_style="bold")
    for _, header in columns:
        table.add_column(header)
    for row in rows:
        values = [row.get(name) for name, _ in columns]
        table.add_row(*("-" if v is None else str(_cell(v)) for v in values))

    Console().print(table)


def format_duration(value: timedelta | int | float | None) -> str:
    """Format a duration as ``H:MM:SS`` (or ``M:SS`` under an hour)."""
    if value is None:
        return "-"
    seconds = int(value.total_seconds() if isinstance(value, timedelta) else value)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_date(dt: datetime | None) -> str:
    if dt is None:
        return "-"
    return dt.strftime("%b %d, %Y")


def output(
    data: Any,
    format: OutputFormat = OutputFormat.json,
    fields: list[str] | None = None,
    no_header: bool = False,
    human_columns: list[tuple[str, str]] | None = None,
) -> None:
    """Output data in the specified format."""
    if format == OutputFormat.json:
        output_json(data, fields)
    elif format == OutputFormat.jsonl:
        output_jsonl(data, fields)
    elif format == OutputFormat.csv:
        output_csv(data, fields, no_header)
    elif format == OutputFormat.tsv:
        output_csv(data, fields, no_header, delimiter="\t")
    elif format == OutputFormat.human:
        output_human(data, fields, human_columns)


def emit_result(
    data: Any,
    human_msg: str,
    format: OutputFormat = OutputFormat.json,
    fields: list[str] | None = None,
    no_header: bool = False,
) -> None:
    """Print ``human_msg`` for the human format, structured ``data`` otherwise."""
    if format == OutputFormat.human:
        print(human_msg)
    else:
        output(data, format=format, fields=fields, no_header=no_header)


def verbose_print(message: str, verbose: bool = False) -> None:
    """Print a ``[verbose]`` diagnostic to stderr when --verbose is on."""
    if verbose:
        print(f"[verbose] {message}", file=sys.stderr)
