"""Output formatter abstractions for CLI commands."""

from __future__ import annotations

import csv
import json
import math
from dataclasses import dataclass
from typing import Mapping, MutableSequence, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

FORMAT_NAMES = ("table", "jsonl", "csv")


class OutputFormatter:
    """Protocol-like base class for CLI output formatters."""

    name: str

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        """Render the provided rows to the target stream."""

        raise NotImplementedError


def _resolve_columns(rows: Sequence[Mapping[str, object]], columns: Sequence[str] | None) -> list[str]:
    if columns:
        return list(columns)
    if rows:
        return list(rows[0].keys())
    return []


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render output as a Rich table."""

    name: str = "table"
    no_color: bool = False

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        resolved_columns: MutableSequence[str] = _resolve_columns(rows, columns)

        table = Table(box=SIMPLE, show_lines=False, title=title)
        header_style = "" if self.no_color else "bold"
        for column in resolved_columns:
            table.add_column(column, header_style=header_style)
        for row in rows:
            table.add_row(*(self._format_cell(row.get(column)) for column in resolved_columns))

        if resolved_columns:
            console.print(table)
        if not rows:
            console.print("No data available.")

    def _format_cell(self, value: object) -> str:
        if _is_missing(value):
            return "-"
        if isinstance(value, float):
            return f"{value:.6g}"
        return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """Render output as JSON Lines."""

    name: str = "jsonl"

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        resolved_columns = _resolve_columns(rows, columns)
        for row in rows:
            payload = {column: None if _is_missing(row.get(column)) else row.get(column) for column in resolved_columns}
            if title:
                payload = {"table": title, **payload}
            json.dump(payload, stream, ensure_ascii=False, default=str)
            stream.write("\n")
        stream.flush()


@dataclass(slots=True)
class CSVFormatter(OutputFormatter):
    """Render output as CSV with a header row."""

    name: str = "csv"

    def render(
        self,
        rows: Sequence[Mapping[str, object]],
        *,
        stream: TextIO,
        columns: Sequence[str] | None = None,
        title: str | None = None,
    ) -> None:
        resolved_columns = _resolve_columns(rows, columns)
        writer = csv.DictWriter(stream, fieldnames=resolved_columns, extrasaction="ignore", lineterminator="\n")
        writer.writeheader()
        for row in rows:
            writer.writerow({column: "" if _is_missing(row.get(column)) else row.get(column) for column in resolved_columns})
        stream.flush()


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    if normalized == "csv":
        return CSVFormatter()
    msg = f"Unsupported format '{name}'. Available formats: {', '.join(FORMAT_NAMES)}."
    raise ValueError(msg)


__all__ = ["CSVFormatter", "FORMAT_NAMES", "JSONLFormatter", "OutputFormatter", "TableFormatter", "create_formatter"]
