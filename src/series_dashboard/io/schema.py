from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable

import pandas as pd

from series_dashboard.metrics import METRIC_FIELDS


@dataclass(frozen=True)
class RawRecord:
    date: str
    median_house_price_syd: float
    jobseeker_recipients: float
    rba_cash_rate: float
    aud_usd_exchange: float


REQUIRED_FIELDS = ("date", *METRIC_FIELDS)


def records_to_frame(records: Iterable[RawRecord]) -> pd.DataFrame:
    """Build a frame with one row per record, preserving input order."""
    rows = [asdict(record) for record in records]
    return pd.DataFrame(rows, columns=list(REQUIRED_FIELDS))
