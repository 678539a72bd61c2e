import logging
import math
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Callable, Iterable, Any

from budget_core.dates import parse_iso_date, week_index_of
from budget_core.domain import MoneyRecord, PlannedItem, Budget

logger = logging.getLogger(__name__)

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return self

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def safe_amount(value: Any) -> Maybe[float]:
    """Some(amount) for finite, non-negative numbers; Nothing otherwise."""
    if isinstance(value, bool):
        return Nothing()
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return Nothing()
    if not math.isfinite(amount) or amount < 0:
        return Nothing()
    return Some(amount)


def amount_of(record: Any) -> float:
    """Usable amount of a record, 0.0 when the stored value is malformed."""
    result = safe_amount(record.amount)
    if result.is_none():
        logger.warning("Ignoring malformed amount %r on record %s", record.amount, getattr(record, "id", "?"))
    return result.get_or_else(0.0)


def total_of(items: Iterable[Any]) -> float:
    return sum((amount_of(i) for i in items), 0.0)


def validate_record(r: MoneyRecord, month_key: str) -> Either[dict, MoneyRecord]:

    if safe_amount(r.amount).is_none():
        return Left({
            "error": "invalid_amount",
            "message": f"Record {r.id} has an invalid amount {r.amount!r}",
            "record_id": r.id,
            "amount": r.amount
        })

    try:
        parse_iso_date(r.date)
    except (TypeError, ValueError):
        return Left({
            "error": "invalid_date",
            "message": f"Record {r.id} has an invalid date {r.date!r}",
            "record_id": r.id,
            "date": r.date
        })

    if not r.date.startswith(month_key + "-"):
        return Left({
            "error": "wrong_month",
            "message": f"Record {r.id} dated {r.date} does not belong to {month_key}",
            "record_id": r.id,
            "month_key": month_key
        })

    return Right(r)


def validate_planned(p: PlannedItem) -> Either[dict, PlannedItem]:

    if safe_amount(p.amount).is_none():
        return Left({
            "error": "invalid_amount",
            "message": f"Planned item {p.id} has an invalid amount {p.amount!r}",
            "item_id": p.id,
            "amount": p.amount
        })

    if p.target_date is None:
        return Right(p)

    if not p.target_date.startswith(p.month_key + "-"):
        return Left({
            "error": "wrong_month",
            "message": f"Planned item {p.id} targets {p.target_date} outside {p.month_key}",
            "item_id": p.id,
            "month_key": p.month_key
        })

    try:
        target = parse_iso_date(p.target_date)
    except ValueError:
        return Left({
            "error": "invalid_date",
            "message": f"Planned item {p.id} has an invalid target date {p.target_date!r}",
            "item_id": p.id,
            "date": p.target_date
        })
    expected = week_index_of(target.year, target.month - 1, target.day)
    if p.week_index != expected:
        return Left({
            "error": "week_mismatch",
            "message": f"Planned item {p.id} is in week {p.week_index} but {p.target_date} is in week {expected}",
            "item_id": p.id,
            "week_index": p.week_index,
            "expected": expected
        })

    return Right(p)


def check_budget(
    b: Budget,
    records: Iterable[MoneyRecord]
) -> Either[dict, Budget]:
    spent = total_of(
        r for r in records
        if isinstance(r.date, str) and r.date.startswith(b.month_key + "-")
    )

    if b.amount > 0 and spent > b.amount:
        return Left({
            "error": "budget_exceeded",
            "message": f"Budget exceeded for {b.month_key}",
            "month_key": b.month_key,
            "limit": b.amount,
            "spent": spent,
            "over_budget": round(spent - b.amount, 2)
        })

    return Right(b)
