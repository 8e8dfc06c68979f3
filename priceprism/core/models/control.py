"""Per-ticker download control records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum

import pandas as pd

from priceprism.core.models.market import PriceSource


class Decision(str, Enum):
    """Keep/drop decision assigned by the quality screen."""

    KEEP = "KEEP"
    OUT = "OUT"


class DownloadStatus(str, Enum):
    OK = "OK"
    NOT_OK = "NOT OK"


CONTROL_COLUMNS: tuple[str, ...] = (
    "ticker",
    "source",
    "first_date",
    "last_date",
    "download_status",
    "total_obs",
    "coverage",
    "decision",
)


@dataclass(frozen=True)
class ControlRecord:
    """Outcome of fetching and screening a single ticker."""

    ticker: str
    source: PriceSource
    first_date: date
    last_date: date
    download_status: DownloadStatus
    total_obs: int
    coverage: float
    decision: Decision

    def __post_init__(self) -> None:
        if not 0.0 <= self.coverage <= 1.0:
            raise ValueError(f"coverage must lie in [0, 1], got {self.coverage}")

    @property
    def kept(self) -> bool:
        return self.decision is Decision.KEEP

    def as_row(self) -> dict[str, object]:
        row = asdict(self)
        row["source"] = self.source.value
        row["download_status"] = self.download_status.value
        row["decision"] = self.decision.value
        return row


def control_frame(records: Iterable[ControlRecord]) -> pd.DataFrame:
    """Build the control table, keeping the order of ``records``."""

    rows = [record.as_row() for record in records]
    frame = pd.DataFrame(rows, columns=list(CONTROL_COLUMNS))
    frame["total_obs"] = frame["total_obs"].astype("int64")
    frame["coverage"] = frame["coverage"].astype("float64")
    return frame


__all__ = ["CONTROL_COLUMNS", "ControlRecord", "Decision", "DownloadStatus", "control_frame"]
