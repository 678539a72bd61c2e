import datetime
import json
import logging
from dataclasses import replace
from typing import Optional, Tuple
from uuid import uuid4

from budget_core.dates import format_iso_date, parse_month_key, week_count, week_index_of_date
from budget_core.domain import Budget, MoneyRecord, PlannedItem
from budget_core.planner import next_week_index

logger = logging.getLogger(__name__)


def make_id() -> str:
    return str(uuid4())


def make_record(
    date: str,
    amount: float,
    category: Optional[str] = None,
    note: str = "",
    id: Optional[str] = None,
) -> MoneyRecord:
    return MoneyRecord(
        id=id or make_id(),
        date=date,
        amount=round(float(amount), 2),
        category=category or None,
        note=note,
    )


def make_planned(
    month_key: str,
    amount: float,
    week_index: int = 0,
    category: Optional[str] = None,
    note: str = "",
    target_date: Optional[str] = None,
    id: Optional[str] = None,
) -> PlannedItem:
    # a target date always decides the week
    if target_date:
        week_index = week_index_of_date(target_date)
    return PlannedItem(
        id=id or make_id(),
        month_key=month_key,
        week_index=week_index,
        amount=round(float(amount), 2),
        category=category or None,
        note=note,
        target_date=target_date or None,
    )


def load_seed(
    path: str,
) -> Tuple[
    Tuple[MoneyRecord, ...],
    Tuple[PlannedItem, ...],
    Tuple[Budget, ...],
]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = tuple(MoneyRecord(**r) for r in data.get("records", []))
    planned = tuple(PlannedItem(**p) for p in data.get("planned", []))
    budgets = tuple(Budget(**b) for b in data.get("budgets", []))

    logger.info(
        "Loaded %d records, %d planned items, %d budgets from %s",
        len(records), len(planned), len(budgets), path,
    )
    return records, planned, budgets


def add_record(
    records: Tuple[MoneyRecord, ...], r: MoneyRecord
) -> Tuple[MoneyRecord, ...]:
    # kept in date order, same-day records in insertion order
    return tuple(sorted(records + (r,), key=lambda x: x.date))


def remove_record(
    records: Tuple[MoneyRecord, ...], record_id: str
) -> Tuple[MoneyRecord, ...]:
    return tuple(r for r in records if r.id != record_id)


def set_budget(
    budgets: Tuple[Budget, ...], month_key: str, amount: float
) -> Tuple[Budget, ...]:
    kept = tuple(b for b in budgets if b.month_key != month_key)
    return kept + (Budget(month_key=month_key, amount=round(float(amount), 2)),)


def budget_for(budgets: Tuple[Budget, ...], month_key: str) -> float:
    return next((b.amount for b in budgets if b.month_key == month_key), 0.0)


def add_planned(
    planned: Tuple[PlannedItem, ...], p: PlannedItem
) -> Tuple[PlannedItem, ...]:
    return planned + (p,)


def update_planned(
    planned: Tuple[PlannedItem, ...], item_id: str, **changes
) -> Tuple[PlannedItem, ...]:
    if not any(p.id == item_id for p in planned):
        raise KeyError(item_id)
    return tuple(replace(p, **changes) if p.id == item_id else p for p in planned)


def move_planned(
    planned: Tuple[PlannedItem, ...], item_id: str, week_index: int
) -> Tuple[PlannedItem, ...]:
    return update_planned(planned, item_id, week_index=week_index)


def move_to_next_week(
    planned: Tuple[PlannedItem, ...], item_id: str
) -> Tuple[PlannedItem, ...]:
    item = next((p for p in planned if p.id == item_id), None)
    if item is None:
        raise KeyError(item_id)
    year, month = parse_month_key(item.month_key)
    return move_planned(planned, item_id, next_week_index(item.week_index, week_count(year, month)))


def remove_planned(
    planned: Tuple[PlannedItem, ...], item_id: str
) -> Tuple[PlannedItem, ...]:
    return tuple(p for p in planned if p.id != item_id)


def mark_paid(
    records: Tuple[MoneyRecord, ...],
    planned: Tuple[PlannedItem, ...],
    item_id: str,
    today: Optional[datetime.date] = None,
) -> Tuple[Tuple[MoneyRecord, ...], Tuple[PlannedItem, ...]]:
    """Turn a planned item into a record dated on its target day (or today)."""
    item = next((p for p in planned if p.id == item_id), None)
    if item is None:
        raise KeyError(item_id)
    paid_on = item.target_date or format_iso_date(today or datetime.date.today())
    record = make_record(paid_on, item.amount, item.category, item.note)
    return add_record(records, record), remove_planned(planned, item_id)


def records_for_month(
    records: Tuple[MoneyRecord, ...], month_key: str
) -> Tuple[MoneyRecord, ...]:
    return tuple(r for r in records if r.date.startswith(month_key + "-"))


def clear_month(
    records: Tuple[MoneyRecord, ...],
    planned: Tuple[PlannedItem, ...],
    budgets: Tuple[Budget, ...],
    month_key: str,
) -> Tuple[Tuple[MoneyRecord, ...], Tuple[PlannedItem, ...], Tuple[Budget, ...]]:
    return (
        tuple(r for r in records if not r.date.startswith(month_key + "-")),
        tuple(p for p in planned if p.month_key != month_key),
        tuple(b for b in budgets if b.month_key != month_key),
    )
