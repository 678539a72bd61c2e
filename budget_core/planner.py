from datetime import date
from typing import Iterable, List

from budget_core.dates import iso_date_for, week_day_range, week_index_of, week_label
from budget_core.domain import MoneyRecord, MonthSummary, PlannedItem, WeekSummary
from budget_core.functional import safe_amount, total_of


def week_bucket(planned: Iterable[PlannedItem], week_index: int) -> List[PlannedItem]:
    return [p for p in planned if p.week_index == week_index]


def next_week_index(week_index: int, week_count: int) -> int:
    """The week after week_index, clamped to the last row of the month."""
    return min(week_index + 1, week_count - 1)


def current_week_index(year: int, month: int, today: date) -> int:
    if today.year != year or today.month != month + 1:
        return 0
    return week_index_of(year, month, today.day)


def planned_for(planned: Iterable[PlannedItem], iso_date: str) -> List[PlannedItem]:
    return [p for p in planned if p.target_date == iso_date]


def week_records(
    records: Iterable[MoneyRecord], year: int, month: int, week_index: int
) -> List[MoneyRecord]:
    start, end = week_day_range(year, month, week_index)
    first, last = iso_date_for(year, month, start), iso_date_for(year, month, end)
    return [r for r in records if isinstance(r.date, str) and first <= r.date <= last]


def week_summary(
    records: Iterable[MoneyRecord],
    planned: Iterable[PlannedItem],
    year: int,
    month: int,
    week_index: int,
) -> WeekSummary:
    start, end = week_day_range(year, month, week_index)
    return WeekSummary(
        week_index=week_index,
        label=week_label(year, month, week_index),
        start_day=start,
        end_day=end,
        spent=total_of(week_records(records, year, month, week_index)),
        planned=total_of(week_bucket(planned, week_index)),
    )


def month_summary(
    records: Iterable[MoneyRecord], planned: Iterable[PlannedItem], budget: float
) -> MonthSummary:
    budget = safe_amount(budget).get_or_else(0.0)
    spent = total_of(records)
    return MonthSummary(
        total_spent=spent,
        total_planned=total_of(planned),
        remaining=max(0.0, budget - spent),
        budget=budget,
    )
