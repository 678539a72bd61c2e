from itertools import islice
from typing import Iterable

from budget_core.domain import MoneyRecord
from budget_core.filters import by_amount_range, by_category, by_date_range, by_month, up_to
from budget_core.lazy import iter_records, top_categories


def make_sample():
    return (
        MoneyRecord("r1", "2025-08-30", 300.0, "groceries"),
        MoneyRecord("r2", "2025-09-01", 20.0, "transport"),
        MoneyRecord("r3", "2025-09-02", 700.0, "groceries"),
        MoneyRecord("r4", "2025-09-15", 100.0, "transport"),
        MoneyRecord("r5", "2025-09-30", 50.0, None),
    )


def test_by_category():
    result = list(filter(by_category("groceries"), make_sample()))
    assert [r.id for r in result] == ["r1", "r3"]


def test_by_date_range_is_inclusive():
    result = list(filter(by_date_range("2025-09-01", "2025-09-15"), make_sample()))
    assert [r.id for r in result] == ["r2", "r3", "r4"]


def test_by_month():
    assert [r.id for r in filter(by_month("2025-08"), make_sample())] == ["r1"]
    assert len(list(filter(by_month("2025-09"), make_sample()))) == 4


def test_up_to_compares_iso_strings():
    assert [r.id for r in filter(up_to("2025-09-02"), make_sample())] == ["r1", "r2", "r3"]


def test_by_amount_range():
    result = list(filter(by_amount_range(50, 300), make_sample()))
    assert [r.id for r in result] == ["r1", "r4", "r5"]


def test_iter_records_is_lazy_stop_early():
    calls = {"n": 0}

    def pred(r: MoneyRecord) -> bool:
        calls["n"] += 1
        return r.amount >= 100

    first_two = list(islice(iter_records(make_sample(), pred), 2))
    assert [r.id for r in first_two] == ["r1", "r3"]
    assert calls["n"] < len(make_sample())


def test_top_categories_order_and_k():
    assert list(top_categories(make_sample(), 2)) == [("groceries", 1000.0), ("transport", 120.0)]
    assert len(list(top_categories(make_sample(), 10))) == 3
    assert list(top_categories(make_sample(), 0)) == []


def test_top_categories_accepts_generator_input():
    def stream() -> Iterable[MoneyRecord]:
        for r in make_sample():
            yield r

    assert list(top_categories(stream(), 1)) == [("groceries", 1000.0)]
