from typing import Callable, Iterable, Iterator, Optional

from budget_core.analytics import category_breakdown
from budget_core.domain import MoneyRecord


def iter_records(
    records: Iterable[MoneyRecord], pred: Callable[[MoneyRecord], bool]
) -> Iterator[MoneyRecord]:
    for r in records:
        if pred(r):
            yield r


def top_categories(
    records: Iterable[MoneyRecord], k: int, uncategorized: Optional[str] = None
) -> Iterator[tuple[str, float]]:
    for row in category_breakdown(records, uncategorized)[: max(0, k)]:
        yield row.category, row.amount
