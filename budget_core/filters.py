from budget_core.domain import MoneyRecord


def by_category(category: str):
    def _filter(r: MoneyRecord) -> bool:
        return r.category == category

    return _filter


def by_date_range(start: str, end: str):
    def _filter(r: MoneyRecord) -> bool:
        return start <= r.date <= end

    return _filter


def by_month(month_key: str):
    prefix = month_key + "-"

    def _filter(r: MoneyRecord) -> bool:
        return r.date.startswith(prefix)

    return _filter


# ISO dates compare chronologically as strings
def up_to(iso_date: str):
    def _filter(r: MoneyRecord) -> bool:
        return r.date <= iso_date

    return _filter


def by_amount_range(min: float, max: float):
    def _filter(r: MoneyRecord) -> bool:
        return min <= r.amount <= max

    return _filter
