import json
from datetime import date

import pytest

from budget_core.domain import Budget, MoneyRecord, PlannedItem
from budget_core.transforms import (
    add_planned,
    add_record,
    budget_for,
    clear_month,
    load_seed,
    make_id,
    make_planned,
    make_record,
    mark_paid,
    move_planned,
    move_to_next_week,
    records_for_month,
    remove_planned,
    remove_record,
    set_budget,
    update_planned,
)


def test_make_record_rounds_amount():
    r = make_record("2025-09-01", 10.005 + 0.001, "food", "lunch")
    assert r.amount == 10.01
    assert r.category == "food"
    assert r.note == "lunch"
    assert r.id


def test_make_record_blank_category_is_none():
    assert make_record("2025-09-01", 3, "").category is None


def test_make_id_is_unique():
    assert len({make_id() for _ in range(100)}) == 100


def test_make_planned_derives_week_from_target_date():
    p = make_planned("2025-09", 12.346, week_index=3, target_date="2025-09-08")
    assert p.week_index == 1
    assert p.amount == 12.35
    q = make_planned("2025-09", 5, week_index=3)
    assert q.week_index == 3
    assert q.target_date is None


def test_add_record_keeps_date_order_and_immutability():
    r1 = make_record("2025-09-05", 1)
    r2 = make_record("2025-09-02", 2)
    records = (r1,)
    new_records = add_record(records, r2)
    assert [r.date for r in new_records] == ["2025-09-02", "2025-09-05"]
    assert records == (r1,)


def test_remove_record():
    r1, r2 = make_record("2025-09-01", 1, id="a"), make_record("2025-09-01", 2, id="b")
    assert remove_record((r1, r2), "a") == (r2,)
    assert remove_record((r1, r2), "zzz") == (r1, r2)


def test_set_budget_replaces_month_value():
    budgets = (Budget("2025-08", 500.0),)
    budgets = set_budget(budgets, "2025-09", 1000)
    budgets = set_budget(budgets, "2025-09", 1200.457)
    assert budget_for(budgets, "2025-09") == 1200.46
    assert budget_for(budgets, "2025-08") == 500.0
    assert budget_for(budgets, "2025-10") == 0.0
    assert len(budgets) == 2


def test_update_and_move_planned():
    p = make_planned("2025-09", 10, week_index=0, id="p")
    plans = add_planned((), p)
    moved = move_planned(plans, "p", 2)
    assert moved[0].week_index == 2
    assert plans[0].week_index == 0
    updated = update_planned(moved, "p", note="rent", amount=11.0)
    assert updated[0].note == "rent"
    assert updated[0].amount == 11.0
    with pytest.raises(KeyError):
        update_planned(plans, "missing", note="x")


def test_move_to_next_week_clamps():
    plans = (make_planned("2025-09", 10, week_index=3, id="p"),)
    # September 2025 has 5 week rows
    plans = move_to_next_week(plans, "p")
    assert plans[0].week_index == 4
    plans = move_to_next_week(plans, "p")
    assert plans[0].week_index == 4


def test_remove_planned():
    plans = (make_planned("2025-09", 1, id="a"), make_planned("2025-09", 2, id="b"))
    assert [p.id for p in remove_planned(plans, "a")] == ["b"]


def test_mark_paid_uses_target_date():
    plans = (make_planned("2025-09", 25, category="bills", note="phone", target_date="2025-09-15", id="p"),)
    records, plans_left = mark_paid((), plans, "p")
    assert plans_left == ()
    assert len(records) == 1
    assert records[0].date == "2025-09-15"
    assert records[0].amount == 25.0
    assert records[0].category == "bills"
    assert records[0].note == "phone"


def test_mark_paid_without_target_uses_today():
    plans = (make_planned("2025-09", 25, id="p"),)
    records, _ = mark_paid((), plans, "p", today=date(2025, 9, 20))
    assert records[0].date == "2025-09-20"
    with pytest.raises(KeyError):
        mark_paid((), plans, "nope")


def test_records_for_month_and_clear_month():
    records = (
        make_record("2025-08-31", 1, id="aug"),
        make_record("2025-09-01", 2, id="sep"),
        make_record("2025-10-01", 3, id="oct"),
    )
    assert [r.id for r in records_for_month(records, "2025-09")] == ["sep"]
    plans = (make_planned("2025-09", 1, id="p9"), make_planned("2025-10", 1, id="p10"))
    budgets = (Budget("2025-09", 100.0), Budget("2025-10", 200.0))
    r, p, b = clear_month(records, plans, budgets, "2025-09")
    assert [x.id for x in r] == ["aug", "oct"]
    assert [x.id for x in p] == ["p10"]
    assert b == (Budget("2025-10", 200.0),)


def test_load_seed(tmp_path):
    seed = {
        "records": [
            {"id": "r1", "date": "2025-09-01", "amount": 10.0, "category": "food", "note": ""},
            {"id": "r2", "date": "2025-09-02", "amount": 4.5},
        ],
        "planned": [
            {"id": "p1", "month_key": "2025-09", "week_index": 1, "amount": 30.0, "target_date": "2025-09-08"},
        ],
        "budgets": [{"month_key": "2025-09", "amount": 800.0}],
    }
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(seed), encoding="utf-8")

    records, planned, budgets = load_seed(str(path))
    assert records[0] == MoneyRecord("r1", "2025-09-01", 10.0, "food", "")
    assert records[1].category is None
    assert planned == (PlannedItem("p1", "2025-09", 1, 30.0, target_date="2025-09-08"),)
    assert budgets == (Budget("2025-09", 800.0),)


def test_load_seed_missing_sections(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text("{}", encoding="utf-8")
    assert load_seed(str(path)) == ((), (), ())
