"""Declarative field predicates evaluated against in-memory collections.

A ``FilterSpec`` maps a filter name (``"minAmt"``, ``"currency"``, ...) to a
predicate.  Each predicate names the item field it reads, so two filters may
bound the same field.  A predicate whose value is ``None`` or blank is
inactive and keeps every item.  Active predicates combine with AND.

Items may be pydantic models, dataclasses or plain dicts.  Fields are named
in snake_case; a dict without the key is also looked up under the camelCase
name the API uses (``device_id`` -> ``deviceId``).
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class Predicate(Protocol):
    @property
    def is_active(self) -> bool: ...

    def matches(self, item: Any) -> bool: ...


FilterSpec = Mapping[str, Predicate]


def _camel(field: str) -> str:
    head, *rest = field.split("_")
    return head + "".join(part.capitalize() for part in rest)


def field_value(item: Any, field: str) -> Any:
    """Read *field* from a mapping or an attribute-bearing object."""
    if isinstance(item, Mapping):
        if field in item:
            return item[field]
        return item.get(_camel(field))
    return getattr(item, field, None)


def _blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_timestamp(value: object) -> dt.datetime | None:
    """Parse an ISO date or timestamp; naive values are taken as UTC.

    A date-only string (``"2024-03-01"``) means midnight UTC of that day.
    Returns ``None`` for anything unparseable.
    """
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = dt.datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def parse_number(value: object) -> float | None:
    """Parse form input as a float; blank or invalid input gives ``None``."""
    if isinstance(value, bool) or _blank(value):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match on one field."""

    field: str
    query: str | None

    @property
    def is_active(self) -> bool:
        return not _blank(self.query)

    def matches(self, item: Any) -> bool:
        value = field_value(item, self.field)
        if value is None:
            return False
        return self.query.strip().lower() in str(value).lower()


@dataclass(frozen=True)
class AnyContains:
    """Case-insensitive substring match on at least one of several fields."""

    fields: tuple[str, ...]
    query: str | None

    @property
    def is_active(self) -> bool:
        return not _blank(self.query)

    def matches(self, item: Any) -> bool:
        return any(Contains(f, self.query).matches(item) for f in self.fields)


@dataclass(frozen=True)
class IdContains:
    """Partial-id search: the stringified id contains the query."""

    field: str
    query: str | int | None

    @property
    def is_active(self) -> bool:
        return not _blank(self.query)

    def matches(self, item: Any) -> bool:
        value = field_value(item, self.field)
        if value is None:
            return False
        return str(self.query).strip() in str(value)


@dataclass(frozen=True)
class Equals:
    """Exact equality (e.g. currency selected from a dropdown)."""

    field: str
    value: Any

    @property
    def is_active(self) -> bool:
        return not _blank(self.value)

    def matches(self, item: Any) -> bool:
        return field_value(item, self.field) == self.value


@dataclass(frozen=True)
class AtLeast:
    """Inclusive numeric lower bound."""

    field: str
    bound: float | str | None

    @property
    def is_active(self) -> bool:
        return parse_number(self.bound) is not None

    def matches(self, item: Any) -> bool:
        value = parse_number(field_value(item, self.field))
        return value is not None and value >= parse_number(self.bound)


@dataclass(frozen=True)
class AtMost:
    """Inclusive numeric upper bound."""

    field: str
    bound: float | str | None

    @property
    def is_active(self) -> bool:
        return parse_number(self.bound) is not None

    def matches(self, item: Any) -> bool:
        value = parse_number(field_value(item, self.field))
        return value is not None and value <= parse_number(self.bound)


@dataclass(frozen=True)
class OnOrAfter:
    """Inclusive lower bound on a timestamp field."""

    field: str
    bound: dt.datetime | dt.date | str | None

    @property
    def is_active(self) -> bool:
        return parse_timestamp(self.bound) is not None

    def matches(self, item: Any) -> bool:
        value = parse_timestamp(field_value(item, self.field))
        return value is not None and value >= parse_timestamp(self.bound)


@dataclass(frozen=True)
class OnOrBefore:
    """Inclusive upper bound on a timestamp field."""

    field: str
    bound: dt.datetime | dt.date | str | None

    @property
    def is_active(self) -> bool:
        return parse_timestamp(self.bound) is not None

    def matches(self, item: Any) -> bool:
        value = parse_timestamp(field_value(item, self.field))
        return value is not None and value <= parse_timestamp(self.bound)


def apply(items: Iterable[T], spec: FilterSpec | None = None) -> list[T]:
    """Return the items that satisfy every active predicate in *spec*.

    Relative order is preserved and *items* is not modified.  An empty or
    missing spec returns every item.
    """
    active = [p for p in (spec or {}).values() if p.is_active]
    return [item for item in items if all(p.matches(item) for p in active)]


# --- Form-driven specs for the list views ---

USER_SEARCH_FIELDS: tuple[str, ...] = ("name", "email", "phone")


def build_user_filters(query: str | None) -> dict[str, Predicate]:
    """One search box over name, email and phone."""
    return {"query": AnyContains(USER_SEARCH_FIELDS, query)}


def build_transaction_filters(form: Mapping[str, Any]) -> dict[str, Predicate]:
    """Translate raw transaction filter form values into a ``FilterSpec``.

    Recognised keys: ``minAmt``, ``maxAmt``, ``currency``, ``startDate``,
    ``endDate``, ``deviceId``, ``description``.  Missing keys are inactive.
    """
    return {
        "minAmt": AtLeast("amount", form.get("minAmt")),
        "maxAmt": AtMost("amount", form.get("maxAmt")),
        "currency": Equals("currency", form.get("currency")),
        "startDate": OnOrAfter("timestamp", form.get("startDate")),
        "endDate": OnOrBefore("timestamp", form.get("endDate")),
        "deviceId": Contains("device_id", form.get("deviceId")),
        "description": Contains("description", form.get("description")),
    }


def build_cluster_filters(form: Mapping[str, Any]) -> dict[str, Predicate]:
    """Partial-id search over ``transactionId`` and ``clusterId``."""
    return {
        "transactionId": IdContains("transaction_id", form.get("transactionId")),
        "clusterId": IdContains("cluster_id", form.get("clusterId")),
    }


def distinct_values(items: Sequence[Any], field: str) -> list[str]:
    """Sorted distinct non-blank values of *field* (feeds dropdowns)."""
    return sorted({str(v) for v in (field_value(i, field) for i in items) if not _blank(v)})
