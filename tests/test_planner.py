from datetime import date

from budget_core.analytics import next_week_index as reexported_next_week, week_bucket as reexported_bucket
from budget_core.dates import week_count
from budget_core.domain import MoneyRecord, PlannedItem
from budget_core.planner import (
    current_week_index,
    month_summary,
    next_week_index,
    planned_for,
    week_bucket,
    week_records,
    week_summary,
)


def make_plans():
    return (
        PlannedItem("p1", "2025-10", 0, 30.0, "bills", target_date="2025-10-03"),
        PlannedItem("p2", "2025-10", 1, 12.0, "gifts"),
        PlannedItem("p3", "2025-10", 1, 8.0, None, target_date="2025-10-06"),
        PlannedItem("p4", "2025-10", 4, 100.0, "bills"),
    )


def make_records():
    # Oct 2025: week 0 is 1-5, week 1 is 6-12
    return (
        MoneyRecord("r1", "2025-10-01", 5.0, "groceries"),
        MoneyRecord("r2", "2025-10-05", 7.5, "transport"),
        MoneyRecord("r3", "2025-10-06", 20.0, "groceries"),
        MoneyRecord("r4", "2025-10-31", 3.0, None),
    )


def test_week_bucket_filters_by_index():
    assert [p.id for p in week_bucket(make_plans(), 1)] == ["p2", "p3"]
    assert week_bucket(make_plans(), 3) == []
    assert reexported_bucket is week_bucket


def test_next_week_is_clamped_to_month_end():
    wc = week_count(2025, 9)
    assert wc == 5
    assert next_week_index(0, wc) == 1
    assert next_week_index(3, wc) == 4
    assert next_week_index(4, wc) == 4
    assert reexported_next_week is next_week_index


def test_this_and_next_week_views():
    plans = make_plans()
    this_week = 0
    nxt = next_week_index(this_week, week_count(2025, 9))
    assert [p.id for p in week_bucket(plans, this_week)] == ["p1"]
    assert [p.id for p in week_bucket(plans, nxt)] == ["p2", "p3"]


def test_current_week_index():
    assert current_week_index(2025, 9, date(2025, 10, 6)) == 1
    assert current_week_index(2025, 9, date(2025, 10, 1)) == 0
    assert current_week_index(2025, 9, date(2025, 11, 20)) == 0


def test_planned_for_day():
    assert [p.id for p in planned_for(make_plans(), "2025-10-06")] == ["p3"]
    assert planned_for(make_plans(), "2025-10-07") == []


def test_week_records_use_day_range():
    assert [r.id for r in week_records(make_records(), 2025, 9, 0)] == ["r1", "r2"]
    assert [r.id for r in week_records(make_records(), 2025, 9, 1)] == ["r3"]
    assert [r.id for r in week_records(make_records(), 2025, 9, 4)] == ["r4"]


def test_week_summary():
    s = week_summary(make_records(), make_plans(), 2025, 9, 1)
    assert s.label == "Week 2 (6-12)"
    assert (s.start_day, s.end_day) == (6, 12)
    assert s.spent == 20.0
    assert s.planned == 20.0


def test_week_spent_adds_up_to_month_total():
    total = sum(week_summary(make_records(), (), 2025, 9, i).spent for i in range(week_count(2025, 9)))
    assert total == 35.5


def test_month_summary():
    m = month_summary(make_records(), make_plans(), 50)
    assert m.total_spent == 35.5
    assert m.total_planned == 150.0
    assert m.remaining == 14.5
    assert m.budget == 50
    assert month_summary(make_records(), (), 10).remaining == 0.0
