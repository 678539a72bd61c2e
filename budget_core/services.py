import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from budget_core import analytics, planner
from budget_core.dates import days_in_month, parse_month_key, week_count
from budget_core.domain import Budget, MoneyRecord, MonthReport, PlannedItem
from budget_core.functional import check_budget, validate_planned, validate_record

logger = logging.getLogger(__name__)

Validator = Callable[[str, Sequence[MoneyRecord], Sequence[PlannedItem], float], Sequence[str]]
Calculator = Callable[..., Dict[str, Any]]


def elapsed_days(year: int, month: int, today: date) -> int:
    """Days of the month that have passed by today (all of them for past months)."""
    if (today.year, today.month - 1) < (year, month):
        return 0
    if (today.year, today.month - 1) > (year, month):
        return days_in_month(year, month)
    return today.day


def validate_records(month_key, records, planned, budget) -> List[str]:
    return [
        res.get_error()["message"]
        for res in (validate_record(r, month_key) for r in records)
        if res.is_left()
    ]


def validate_plans(month_key, records, planned, budget) -> List[str]:
    msgs = []
    for p in planned:
        res = validate_planned(p)
        if res.is_left():
            msgs.append(res.get_error()["message"])
        elif p.month_key != month_key:
            msgs.append(f"Planned item {p.id} belongs to {p.month_key}, not {month_key}")
    return msgs


def validate_budget(month_key, records, planned, budget) -> List[str]:
    res = check_budget(Budget(month_key=month_key, amount=budget), records)
    return [] if res.is_right() else [res.get_error()["message"]]


def calc_categories(month_key, records, planned, budget, acc=None) -> Dict[str, Any]:
    return {"categories": tuple(analytics.category_breakdown(records))}


def calc_daily(month_key, records, planned, budget, acc=None) -> Dict[str, Any]:
    return {
        "daily": tuple(analytics.daily_spending(records)),
        "cumulative": tuple(analytics.cumulative_spending(records, budget)),
        "weekly": tuple(analytics.weekly_pattern(records)),
    }


def calc_days(month_key, records, planned, budget, acc=None) -> Dict[str, Any]:
    year, month = parse_month_key(month_key)
    return {"days": tuple(analytics.day_totals(records, planned, budget, year, month))}


def calc_weeks(month_key, records, planned, budget, acc=None) -> Dict[str, Any]:
    year, month = parse_month_key(month_key)
    return {
        "weeks": tuple(
            planner.week_summary(records, planned, year, month, i)
            for i in range(week_count(year, month))
        ),
        "month": planner.month_summary(records, planned, budget),
    }


def calc_summary(month_key, records, planned, budget, acc=None) -> Dict[str, Any]:
    return {"summary": analytics.spending_summary(records, budget)}


def make_health_calculator(today: Optional[date] = None) -> Calculator:
    def calc_health(month_key, records, planned, budget, acc=None) -> Dict[str, Any]:
        year, month = parse_month_key(month_key)
        current_day = elapsed_days(year, month, today or date.today())
        return {
            "health": analytics.budget_health_score(
                records, budget, days_in_month(year, month), current_day
            )
        }

    return calc_health


DEFAULT_VALIDATORS: Sequence[Validator] = (validate_records, validate_plans, validate_budget)


def default_calculators(today: Optional[date] = None) -> List[Calculator]:
    return [calc_days, calc_categories, calc_daily, calc_summary, make_health_calculator(today), calc_weeks]


class BudgetService:
    """Facade that turns one month of records into a MonthReport.

    validators: functions (month_key, records, planned, budget) -> messages.
        A failing validator is reported as a message, never raised.
    calculators: functions (month_key, records, planned, budget, acc) -> partial
        MonthReport fields. ``acc`` holds what earlier calculators produced.
        Calculator errors propagate; a malformed month_key is rejected with
        ValueError before anything runs.
    """

    def __init__(
        self,
        validators: Sequence[Validator] = DEFAULT_VALIDATORS,
        calculators: Optional[Sequence[Calculator]] = None,
    ):
        self.validators = validators
        self.calculators = calculators if calculators is not None else default_calculators()

    def monthly_report(
        self,
        month_key: str,
        records: Iterable[MoneyRecord],
        planned: Iterable[PlannedItem] = (),
        budget: float = 0.0,
    ) -> MonthReport:
        try:
            parse_month_key(month_key)
        except (AttributeError, ValueError):
            logger.error("Cannot build a report for month key %r", month_key)
            raise ValueError(f"month_key must look like YYYY-MM, got {month_key!r}") from None
        records, planned = tuple(records), tuple(planned)

        messages: List[str] = []
        for v in self.validators:
            name = getattr(v, "__name__", str(v))
            try:
                msgs = list(v(month_key, records, planned, budget))
            except Exception as e:
                logger.exception("Validator %s failed for %s", name, month_key)
                msgs = [f"validator_error: {e}"]
            for m in msgs:
                logger.warning("%s: %s", name, m)
            messages.extend(msgs)

        acc: Dict[str, Any] = {}
        steps = []
        for calc in self.calculators:
            name = getattr(calc, "__name__", str(calc))
            out = calc(month_key, records, planned, budget, acc)
            logger.debug("Calculator %s produced %s", name, sorted(out))
            steps.append(name)
            acc.update(out)

        return MonthReport(
            month_key=month_key,
            budget=budget,
            validation=tuple(messages),
            steps=tuple(steps),
            **acc,
        )
