from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class MoneyRecord:
    id: str
    date: str                 # "YYYY-MM-DD"
    amount: float             # always >= 0, two decimals
    category: Optional[str] = None
    note: str = ""


@dataclass(frozen=True)
class PlannedItem:
    id: str
    month_key: str            # "YYYY-MM"
    week_index: int           # Monday-first row within the month
    amount: float
    category: Optional[str] = None
    note: str = ""
    target_date: Optional[str] = None


# One budget per month, no history
@dataclass(frozen=True)
class Budget:
    month_key: str
    amount: float


@dataclass(frozen=True)
class CategoryAnalytics:
    category: str
    amount: float
    percentage: float
    count: int


@dataclass(frozen=True)
class DailySpending:
    date: str
    amount: float
    day_of_week: str          # "Mon"
    day_number: int


@dataclass(frozen=True)
class CumulativePoint:
    date: str
    cumulative: float
    budget: float
    remaining: float
    day_number: int


@dataclass(frozen=True)
class WeeklyPattern:
    day_of_week: str
    total_amount: float
    average_amount: float
    transaction_count: int


@dataclass(frozen=True)
class MostExpensiveDay:
    date: str
    amount: float


@dataclass(frozen=True)
class SpendingSummary:
    total_spent: float
    average_daily: float
    most_expensive_day: MostExpensiveDay
    most_common_category: str
    categories_count: int
    days_with_spending: int
    budget_utilization: float


@dataclass(frozen=True)
class HealthScore:
    score: int
    status: str               # excellent | good | warning | danger
    message: str


@dataclass(frozen=True)
class DayTotals:
    day: int
    date: str
    spent: float
    remaining: float          # budget left after this day
    planned: float
    count: int


@dataclass(frozen=True)
class WeekSummary:
    week_index: int
    label: str
    start_day: int
    end_day: int
    spent: float
    planned: float


@dataclass(frozen=True)
class MonthSummary:
    total_spent: float
    total_planned: float
    remaining: float
    budget: float


@dataclass(frozen=True)
class CategoryTrendPoint:
    date: str
    totals: Tuple[Tuple[str, float], ...]   # (category, amount) in first-seen order

    def amount_for(self, category: str) -> float:
        return dict(self.totals).get(category, 0.0)


@dataclass(frozen=True)
class MonthReport:
    month_key: str
    budget: float
    validation: Tuple[str, ...] = ()
    days: Tuple[DayTotals, ...] = ()
    categories: Tuple[CategoryAnalytics, ...] = ()
    daily: Tuple[DailySpending, ...] = ()
    cumulative: Tuple[CumulativePoint, ...] = ()
    weekly: Tuple[WeeklyPattern, ...] = ()
    summary: Optional[SpendingSummary] = None
    health: Optional[HealthScore] = None
    weeks: Tuple[WeekSummary, ...] = ()
    month: Optional[MonthSummary] = None
    steps: Tuple[str, ...] = field(default=(), compare=False)
