"""Filter Engine — compiles a declarative filter specification into a record predicate.

Invariants:
    - All functions are PURE: the compiled predicate closes over an immutable
      tuple of conditions, so the same record and filter always give the same answer
    - Conjunction across fields and across the operators of a single field
    - eq/neq accept absence (missing key or None) as a regular operand
    - Ordering operators (lt/lte/gt/gte) are False when the record value is absent
    - Date-valued operands and ISO timestamp strings compare chronologically
    - A value that cannot be read as an instant differs from a date operand (only neq holds)

Design Decisions:
    - Conditions are a tagged variant (LiteralCondition | OperatorCondition),
      decided once in parse_filter, never by inspecting shapes at match time
    - Booleans never equal numbers: `True == 1` is a Python quirk, not a filter rule
"""

import operator
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Iterable, Mapping

from todomock.core.domain_types import FilterOperator, RecordLike
from todomock.core.errors import InvalidArgumentError

_MISSING = object()

_COMPARATORS: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.LT: operator.lt,
    FilterOperator.LTE: operator.le,
    FilterOperator.GT: operator.gt,
    FilterOperator.GTE: operator.ge,
}


# ─── Condition Variant ───────────────────────────────────────────

@dataclass(frozen=True)
class LiteralCondition:
    """Shorthand for equality against a single value."""
    value: Any


@dataclass(frozen=True)
class OperatorCondition:
    """One or more (operator, operand) pairs, all of which must hold."""
    operators: tuple[tuple[FilterOperator, Any], ...]

    @classmethod
    def of(cls, **operands: Any) -> "OperatorCondition":
        """OperatorCondition.of(gt=4, lte=8)"""
        return cls(tuple(
            (FilterOperator(name), value) for name, value in operands.items()
        ))


Condition = LiteralCondition | OperatorCondition
Predicate = Callable[[RecordLike], bool]


# ─── Parsing ─────────────────────────────────────────────────────

def _is_operator_token(key: object) -> bool:
    if not isinstance(key, str):
        return False
    try:
        FilterOperator.from_token(key)
    except ValueError:
        return False
    return True


def parse_condition(field: str, raw: Any) -> Condition:
    """Decide the variant for one field of a declarative filter."""
    if isinstance(raw, (LiteralCondition, OperatorCondition)):
        return raw
    if isinstance(raw, Mapping) and raw:
        keys = list(raw.keys())
        if all(_is_operator_token(k) for k in keys):
            return OperatorCondition(tuple(
                (FilterOperator.from_token(k), v) for k, v in raw.items()
            ))
        dollar_keys = [k for k in keys if isinstance(k, str) and k.startswith("$")]
        unknown = [k for k in dollar_keys if not _is_operator_token(k)]
        if unknown:
            raise InvalidArgumentError(
                f"Unknown filter operator(s) {unknown} for field '{field}'",
                argument=field,
            )
        if dollar_keys:
            literal_keys = [k for k in keys if not _is_operator_token(k)]
            raise InvalidArgumentError(
                f"Filter for field '{field}' mixes operators with literal keys "
                f"{literal_keys}",
                argument=field,
            )
    return LiteralCondition(raw)


def parse_filter(spec: Mapping[str, Any]) -> tuple[tuple[str, Condition], ...]:
    """Parse a field→condition mapping. Fields whose value is None are dropped."""
    return tuple(
        (field, parse_condition(field, raw))
        for field, raw in spec.items()
        if raw is not None
    )


# ─── Temporal Coercion ───────────────────────────────────────────

def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 string into an aware UTC datetime, or None."""
    text = value.strip()
    if len(text) < 10 or not text[:4].isdigit() or text[4] != "-":
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _as_utc(parsed)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_instant(value: Any) -> datetime | None:
    """Coerce date, datetime or timestamp string to an aware instant."""
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        return parse_timestamp(value)
    return None


def _needs_temporal(item_value: Any, operand: Any) -> bool:
    if isinstance(operand, date):
        return True
    return isinstance(item_value, str) and parse_timestamp(item_value) is not None


# ─── Comparison ──────────────────────────────────────────────────

def _strict_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def _is_absent(value: Any) -> bool:
    return value is _MISSING or value is None


def evaluate(op: FilterOperator, item_value: Any, operand: Any) -> bool:
    """Apply one operator to a record value. Pure."""
    if op.is_ordering and _is_absent(item_value):
        return False

    left = None if item_value is _MISSING else item_value
    right = operand
    if left is not None and right is not None and _needs_temporal(left, right):
        left, right = to_instant(left), to_instant(right)
        if left is None or right is None:
            # Not comparable as instants, so the values differ
            return op is FilterOperator.NEQ

    if op is FilterOperator.EQ:
        return _strict_equal(left, right)
    if op is FilterOperator.NEQ:
        return not _strict_equal(left, right)

    if right is None:
        return False
    try:
        return bool(_COMPARATORS[op](left, right))
    except TypeError:
        # Mixed, unorderable types
        return False


def _matches(condition: Condition, item_value: Any) -> bool:
    if isinstance(condition, LiteralCondition):
        return evaluate(FilterOperator.EQ, item_value, condition.value)
    return all(
        evaluate(op, item_value, operand) for op, operand in condition.operators
    )


# ─── Compilation ─────────────────────────────────────────────────

def compile_filter(spec: Mapping[str, Any]) -> Predicate:
    """Compile a filter specification into a predicate over a record."""
    conditions = parse_filter(spec)

    def predicate(record: RecordLike) -> bool:
        return all(
            _matches(condition, record.get(field, _MISSING))
            for field, condition in conditions
        )

    return predicate


def apply_filter(
    records: Iterable[RecordLike], spec: Mapping[str, Any] | None,
) -> list:
    """Return the records matching spec (all records when spec is None)."""
    if spec is None:
        return list(records)
    predicate = compile_filter(spec)
    return [r for r in records if predicate(r)]
