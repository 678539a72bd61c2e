"""Aggregation engine: folds dated records into the figures a dashboard shows.

Every function here is pure. Inputs are iterables of MoneyRecord (and
PlannedItem where noted); outputs are lists of frozen dataclasses from
budget_core.domain. A malformed amount counts as 0 and a malformed date is
skipped by weekday based views, so one bad record never breaks a whole
report.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from budget_core import config
from budget_core.dates import days_in_month as month_length, iso_date_for, parse_iso_date
from budget_core.domain import (
    CategoryAnalytics,
    CategoryTrendPoint,
    CumulativePoint,
    DailySpending,
    DayTotals,
    HealthScore,
    MoneyRecord,
    MostExpensiveDay,
    PlannedItem,
    SpendingSummary,
    WeeklyPattern,
)
from budget_core.functional import Maybe, Nothing, Some, amount_of, safe_amount, total_of
from budget_core.planner import next_week_index, week_bucket

__all__ = [
    "category_breakdown",
    "daily_spending",
    "cumulative_spending",
    "weekly_pattern",
    "spending_summary",
    "budget_health_score",
    "category_trends",
    "day_totals",
    "filter_by_category",
    "left_after",
    "records_on",
    "spent_on",
    "total_spent",
    "week_bucket",
    "next_week_index",
]

logger = logging.getLogger(__name__)


def _category(r: MoneyRecord, uncategorized: Optional[str]) -> str:
    return r.category or (config.UNCATEGORIZED_LABEL if uncategorized is None else uncategorized)


def _parsed_date(text: str) -> Maybe[date]:
    try:
        return Some(parse_iso_date(text))
    except (TypeError, ValueError):
        logger.warning("Skipping record with malformed date %r", text)
        return Nothing()


def _dated(records: Iterable[MoneyRecord]) -> Iterable[MoneyRecord]:
    """Records whose date is a string; anything else cannot be grouped by day."""
    for r in records:
        if isinstance(r.date, str):
            yield r
        else:
            logger.warning("Skipping record %s with non-text date %r", getattr(r, "id", "?"), r.date)


def _short_day(d: date) -> str:
    # date.weekday() is Monday = 0; DAY_NAMES is Sunday-first
    return config.DAY_NAMES[(d.weekday() + 1) % 7][:3]


def _budget(value: float) -> float:
    return safe_amount(value).get_or_else(0.0)


def total_spent(records: Iterable[MoneyRecord]) -> float:
    return total_of(records)


def category_breakdown(
    records: Iterable[MoneyRecord], uncategorized: Optional[str] = None
) -> List[CategoryAnalytics]:
    amounts: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)

    for r in records:
        name = _category(r, uncategorized)
        amounts[name] += amount_of(r)
        counts[name] += 1

    grand_total = sum(amounts.values())
    rows = [
        CategoryAnalytics(
            category=name,
            amount=amount,
            percentage=amount / grand_total * 100 if grand_total > 0 else 0.0,
            count=counts[name],
        )
        for name, amount in amounts.items()
    ]
    # sorted() is stable, so equal amounts keep first-seen order
    return sorted(rows, key=lambda c: c.amount, reverse=True)


def daily_spending(records: Iterable[MoneyRecord]) -> List[DailySpending]:
    totals: Dict[str, float] = defaultdict(float)
    for r in _dated(records):
        totals[r.date] += amount_of(r)

    rows = []
    for day, amount in sorted(totals.items()):
        parsed = _parsed_date(day)
        rows.append(DailySpending(
            date=day,
            amount=amount,
            day_of_week=parsed.map(_short_day).get_or_else(""),
            day_number=parsed.map(lambda d: d.day).get_or_else(0),
        ))
    return rows


def cumulative_spending(records: Iterable[MoneyRecord], budget: float) -> List[CumulativePoint]:
    budget = _budget(budget)
    running = 0.0
    points = []
    for day in daily_spending(records):
        running += day.amount
        points.append(CumulativePoint(
            date=day.date,
            cumulative=running,
            budget=budget,
            remaining=max(0.0, budget - running),
            day_number=day.day_number,
        ))
    return points


def weekly_pattern(records: Iterable[MoneyRecord]) -> List[WeeklyPattern]:
    totals = [0.0] * 7
    counts = [0] * 7

    for r in records:
        d = _parsed_date(r.date).get_or_else(None)
        if d is None:
            continue
        idx = (d.weekday() + 1) % 7
        totals[idx] += amount_of(r)
        counts[idx] += 1

    return [
        WeeklyPattern(
            day_of_week=name[:3],
            total_amount=totals[i],
            average_amount=totals[i] / counts[i] if counts[i] else 0.0,
            transaction_count=counts[i],
        )
        for i, name in enumerate(config.DAY_NAMES)
    ]


def spending_summary(
    records: Sequence[MoneyRecord], budget: float, uncategorized: Optional[str] = None
) -> SpendingSummary:
    records = tuple(records)
    budget = _budget(budget)
    spent = total_spent(records)
    days = daily_spending(records)
    categories = category_breakdown(records, uncategorized)

    most_expensive = MostExpensiveDay(date="", amount=0.0)
    for day in days:
        if day.amount > most_expensive.amount:
            most_expensive = MostExpensiveDay(date=day.date, amount=day.amount)

    most_common, best_count = config.NO_CATEGORY_LABEL, 0
    for c in categories:
        if c.count > best_count:
            most_common, best_count = c.category, c.count

    return SpendingSummary(
        total_spent=spent,
        average_daily=spent / len(days) if days else 0.0,
        most_expensive_day=most_expensive,
        most_common_category=most_common,
        categories_count=len(categories),
        days_with_spending=len(days),
        budget_utilization=spent / budget * 100 if budget > 0 else 0.0,
    )


def budget_health_score(
    records: Iterable[MoneyRecord],
    budget: float,
    days_in_month: int,
    current_day: Optional[int] = None,
) -> HealthScore:
    """Score how the spending pace compares with a linear budget pace.

    expected = budget / days_in_month * current_day. With no budget, or before
    the month has started, there is no pace to compare against and the
    "no budget" result is returned instead of dividing by zero.
    """
    if current_day is None:
        current_day = date.today().day
    budget = _budget(budget)

    if days_in_month <= 0 or budget <= 0 or current_day <= 0:
        return HealthScore(*config.HEALTH_NO_BUDGET)

    expected = budget / days_in_month * current_day
    ratio = total_spent(records) / expected

    for threshold, score, status, message in config.HEALTH_THRESHOLDS:
        if ratio > threshold:
            return HealthScore(score=score, status=status, message=message)
    return HealthScore(*config.HEALTH_DEFAULT)


def category_trends(
    records: Iterable[MoneyRecord], uncategorized: Optional[str] = None
) -> List[CategoryTrendPoint]:
    by_date: Dict[str, Dict[str, float]] = defaultdict(lambda: defaultdict(float))
    seen: Dict[str, None] = {}

    for r in _dated(records):
        name = _category(r, uncategorized)
        seen.setdefault(name, None)
        by_date[r.date][name] += amount_of(r)

    return [
        CategoryTrendPoint(
            date=day,
            totals=tuple((name, by_date[day].get(name, 0.0)) for name in seen),
        )
        for day in sorted(by_date)
    ]


def filter_by_category(
    records: Iterable[MoneyRecord], category: str, uncategorized: Optional[str] = None
) -> List[MoneyRecord]:
    if category == config.ALL_CATEGORIES:
        return list(records)
    return [r for r in records if _category(r, uncategorized) == category]


def records_on(records: Iterable[MoneyRecord], iso_date: str) -> List[MoneyRecord]:
    return [r for r in records if r.date == iso_date]


def spent_on(records: Iterable[MoneyRecord], iso_date: str) -> float:
    return total_of(records_on(records, iso_date))


def left_after(records: Iterable[MoneyRecord], budget: float, iso_date: str) -> float:
    """Budget left once every record up to and including iso_date is paid."""
    upto = total_of(r for r in _dated(records) if r.date <= iso_date)
    return max(0.0, _budget(budget) - upto)


def day_totals(
    records: Iterable[MoneyRecord],
    planned: Iterable[PlannedItem],
    budget: float,
    year: int,
    month: int,
) -> List[DayTotals]:
    """One entry per calendar day of the month, in day order."""
    spent: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)
    planned_by_day: Dict[str, float] = defaultdict(float)

    for r in _dated(records):
        spent[r.date] += amount_of(r)
        counts[r.date] += 1
    for p in planned:
        if p.target_date:
            planned_by_day[p.target_date] += amount_of(p)

    budget = _budget(budget)
    # records dated before the month still count against the running total
    month_start = iso_date_for(year, month, 1)
    running = sum(v for k, v in spent.items() if k < month_start)

    rows = []
    for day in range(1, month_length(year, month) + 1):
        key = iso_date_for(year, month, day)
        running += spent.get(key, 0.0)
        rows.append(DayTotals(
            day=day,
            date=key,
            spent=spent.get(key, 0.0),
            remaining=max(0.0, budget - running),
            planned=planned_by_day.get(key, 0.0),
            count=counts.get(key, 0),
        ))
    return rows
