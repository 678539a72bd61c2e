"""pandas views over records and aggregates, for charting and CSV export."""

from dataclasses import asdict, fields, is_dataclass
from typing import Iterable, Optional, Sequence

import pandas as pd

from budget_core.analytics import category_trends
from budget_core.domain import MoneyRecord

RECORD_COLUMNS = [f.name for f in fields(MoneyRecord)]


def to_frame(rows: Sequence, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """One row per aggregate dataclass, columns named after its fields.

    Nested dataclasses (e.g. SpendingSummary.most_expensive_day) become dicts.
    """
    rows = list(rows)
    if columns is None and rows and is_dataclass(rows[0]):
        columns = [f.name for f in fields(rows[0])]
    return pd.DataFrame([asdict(r) for r in rows], columns=columns)


def records_frame(records: Iterable[MoneyRecord]) -> pd.DataFrame:
    df = to_frame(list(records), columns=RECORD_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0)
    return df


def category_trends_frame(
    records: Iterable[MoneyRecord], uncategorized: Optional[str] = None
) -> pd.DataFrame:
    """Wide table: one row per date (ascending), one column per category."""
    points = category_trends(records, uncategorized)
    if not points:
        return pd.DataFrame(columns=["date"])
    return pd.DataFrame([{"date": p.date, **dict(p.totals)} for p in points])
