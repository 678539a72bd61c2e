from datetime import date
from functools import lru_cache
from typing import Optional

from budget_core.domain import MoneyRecord, MonthReport, PlannedItem
from budget_core.services import BudgetService, default_calculators


def cached_month_report(
    month_key: str,
    records: tuple[MoneyRecord, ...],
    planned: tuple[PlannedItem, ...] = (),
    budget: float = 0.0,
    today: Optional[date] = None,
) -> MonthReport:
    # the health score depends on the day, so the day is part of the key
    return _month_report(month_key, records, planned, budget, today or date.today())


# Keyed on the immutable inputs: any change to the record set gives a new key.
@lru_cache(maxsize=64)
def _month_report(
    month_key: str,
    records: tuple[MoneyRecord, ...],
    planned: tuple[PlannedItem, ...],
    budget: float,
    today: date,
) -> MonthReport:
    service = BudgetService(calculators=default_calculators(today))
    return service.monthly_report(month_key, records, planned, budget)
