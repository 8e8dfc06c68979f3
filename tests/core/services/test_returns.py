from __future__ import annotations

import math

import pandas as pd
import pytest

from priceprism.core.data.schema import coerce_price_frame
from priceprism.core.models import ReturnType
from priceprism.core.services.returns import compute_returns


@pytest.fixture()
def prices(price_frame) -> pd.DataFrame:
    return coerce_price_frame(price_frame("A", ["2024-01-02", "2024-01-03", "2024-01-04"], [100, 110, 99]))


def test_arithmetic_returns(prices: pd.DataFrame) -> None:
    returns = compute_returns(prices, ReturnType.ARITHMETIC)["ret_closing_prices"].tolist()

    assert math.isnan(returns[0])
    assert returns[1:] == pytest.approx([0.1, -0.1])


def test_log_returns(prices: pd.DataFrame) -> None:
    returns = compute_returns(prices, "log")["ret_adjusted_prices"].tolist()

    assert math.isnan(returns[0])
    assert returns[1:] == pytest.approx([0.0953102, -0.1053605], rel=1e-6)


def test_returns_restart_for_each_ticker(price_frame) -> None:
    panel = coerce_price_frame(
        pd.concat(
            [
                price_frame("A", ["2024-01-02", "2024-01-03"], [10, 20]),
                price_frame("B", ["2024-01-02", "2024-01-03"], [50, 25]),
            ]
        )
    )

    returns = compute_returns(panel)

    assert returns["ret_closing_prices"].isna().tolist() == [True, False, True, False]
    assert returns["ret_closing_prices"].dropna().tolist() == pytest.approx([1.0, -0.5])


def test_null_price_gives_null_return(price_frame) -> None:
    panel = coerce_price_frame(price_frame("A", ["2024-01-02", "2024-01-03", "2024-01-04"], [10, None, 12]))

    returns = compute_returns(panel)["ret_closing_prices"]

    assert returns.isna().tolist() == [True, True, True]


def test_empty_panel_gets_return_columns() -> None:
    returns = compute_returns(coerce_price_frame(None))
    assert returns.empty
    assert {"ret_adjusted_prices", "ret_closing_prices"} <= set(returns.columns)
