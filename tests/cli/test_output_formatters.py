from __future__ import annotations

import io
import json

import pandas as pd
import pytest

from priceprism.cli.formatters import CSVFormatter, JSONLFormatter, TableFormatter, create_formatter
from priceprism.cli.utils import frame_to_rows

ROWS = [
    {"ticker": "A", "coverage": 1.0, "ret": None},
    {"ticker": "B", "coverage": float("nan"), "ret": 0.25},
]


def test_create_formatter_rejects_unknown_name() -> None:
    assert isinstance(create_formatter(" CSV "), CSVFormatter)
    with pytest.raises(ValueError):
        create_formatter("xml")


def test_jsonl_tags_rows_with_table_name() -> None:
    buffer = io.StringIO()
    JSONLFormatter().render(ROWS, stream=buffer, title="control")

    lines = [json.loads(line) for line in buffer.getvalue().splitlines()]
    assert lines[0] == {"table": "control", "ticker": "A", "coverage": 1.0, "ret": None}
    assert lines[1]["coverage"] is None


def test_csv_renders_missing_as_blank() -> None:
    buffer = io.StringIO()
    CSVFormatter().render(ROWS, stream=buffer, columns=["ticker", "coverage"])

    assert buffer.getvalue().splitlines() == ["ticker,coverage", "A,1.0", "B,"]


def test_table_shows_dash_for_missing() -> None:
    buffer = io.StringIO()
    TableFormatter(no_color=True).render(ROWS, stream=buffer)

    output = buffer.getvalue()
    assert "ticker" in output
    assert "-" in output


def test_table_without_rows() -> None:
    buffer = io.StringIO()
    TableFormatter(no_color=True).render([], stream=buffer, columns=["ticker"])
    assert "No data available." in buffer.getvalue()


def test_frame_to_rows_renders_dates_and_nulls() -> None:
    frame = pd.DataFrame(
        {
            "ref_date": pd.to_datetime(["2024-01-02", "2024-01-03"]),
            "price_close": [1.5, float("nan")],
            "total_obs": [3, 4],
        }
    )

    rows = frame_to_rows(frame)

    assert rows == [
        {"ref_date": "2024-01-02", "price_close": 1.5, "total_obs": 3},
        {"ref_date": "2024-01-03", "price_close": None, "total_obs": 4},
    ]
