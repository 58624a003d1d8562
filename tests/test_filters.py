"""Tests for the declarative filter engine."""

from __future__ import annotations

import datetime as dt

import pytest

from txgraph.models.entities import Event, Person
from txgraph.models.payloads import ClusterAssignment
from txgraph.query.filters import (
    AnyContains,
    AtLeast,
    AtMost,
    Contains,
    Equals,
    IdContains,
    OnOrAfter,
    OnOrBefore,
    apply,
    build_cluster_filters,
    build_transaction_filters,
    build_user_filters,
    distinct_values,
    parse_number,
    parse_timestamp,
)


@pytest.fixture
def people(sample_users) -> list[Person]:
    return [Person.model_validate(u) for u in sample_users]


@pytest.fixture
def transactions(sample_transactions) -> list[Event]:
    return [Event.model_validate(t) for t in sample_transactions]


@pytest.fixture
def assignments(sample_clusters) -> list[ClusterAssignment]:
    return [ClusterAssignment.model_validate(c) for c in sample_clusters["clusters"]]


class TestApply:
    def test_empty_spec_returns_everything_in_order(self, transactions) -> None:
        assert apply(transactions, {}) == transactions
        assert apply(transactions, None) == transactions

    def test_min_amount(self, transactions) -> None:
        result = apply(transactions, {"minAmt": AtLeast("amount", 100)})
        assert [t.id for t in result] == [11, 12]
        assert all(t.amount >= 100 for t in result)

    def test_bounds_are_inclusive(self, transactions) -> None:
        spec = {"minAmt": AtLeast("amount", 50), "maxAmt": AtMost("amount", 100)}
        assert [t.id for t in apply(transactions, spec)] == [10, 11]

    def test_predicates_combine_with_and(self, transactions) -> None:
        spec = {"minAmt": AtLeast("amount", 60), "currency": Equals("currency", "USD")}
        assert [t.id for t in apply(transactions, spec)] == [12]

    def test_does_not_mutate_input(self, transactions) -> None:
        before = list(transactions)
        apply(transactions, {"minAmt": AtLeast("amount", 1000)})
        assert transactions == before

    def test_preserves_relative_order(self) -> None:
        items = [{"n": "b"}, {"n": "a"}, {"n": "ab"}]
        assert apply(items, {"n": Contains("n", "a")}) == [{"n": "a"}, {"n": "ab"}]

    def test_blank_values_are_inactive(self, transactions) -> None:
        spec = {
            "minAmt": AtLeast("amount", ""),
            "currency": Equals("currency", ""),
            "description": Contains("description", "   "),
            "startDate": OnOrAfter("timestamp", None),
        }
        assert apply(transactions, spec) == transactions

    def test_works_on_dicts(self, sample_transactions) -> None:
        result = apply(sample_transactions, {"minAmt": AtLeast("amount", 100)})
        assert [t["id"] for t in result] == [11, 12]

    def test_dicts_use_api_field_names(self, sample_transactions, sample_clusters) -> None:
        """Raw API rows carry camelCase keys; the form builders still apply."""
        by_device = apply(sample_transactions, build_transaction_filters({"deviceId": "B"}))
        assert [t["id"] for t in by_device] == [12]
        by_cluster = apply(sample_clusters["clusters"], build_cluster_filters({"transactionId": "12"}))
        assert [c["transactionId"] for c in by_cluster] == [120, 512]


class TestSubstring:
    def test_case_insensitive(self, transactions) -> None:
        result = apply(transactions, {"d": Contains("description", "RENT")})
        assert [t.id for t in result] == [11]

    def test_missing_field_never_matches_active_query(self, transactions) -> None:
        """A transaction without a device id is excluded by a device filter."""
        result = apply(transactions, {"deviceId": Contains("device_id", "dev")})
        assert [t.id for t in result] == [10, 12]

    def test_any_field(self, people) -> None:
        spec = {"q": AnyContains(("name", "email", "phone"), "corp")}
        assert [p.name for p in apply(people, spec)] == ["Carol"]
        spec = {"q": AnyContains(("name", "email", "phone"), "0101")}
        assert [p.name for p in apply(people, spec)] == ["Bob"]


class TestIdContains:
    def test_partial_id_search(self, assignments) -> None:
        """'12' matches 120 and 512 but not 34."""
        result = apply(assignments, {"transactionId": IdContains("transaction_id", "12")})
        assert [a.transaction_id for a in result] == [120, 512]

    def test_is_containment_not_equality(self, assignments) -> None:
        result = apply(assignments, {"clusterId": IdContains("cluster_id", "1")})
        assert [a.cluster_id for a in result] == [1, 1, 12]

    def test_integer_query(self, assignments) -> None:
        result = apply(assignments, {"transactionId": IdContains("transaction_id", 34)})
        assert [a.transaction_id for a in result] == [34]


class TestDates:
    def test_date_range_inclusive(self, transactions) -> None:
        spec = {
            "startDate": OnOrAfter("timestamp", "2024-01-05T10:00:00Z"),
            "endDate": OnOrBefore("timestamp", "2024-02-10T08:30:00Z"),
        }
        assert [t.id for t in apply(transactions, spec)] == [10, 11]

    def test_date_only_bound_is_midnight_utc(self, transactions) -> None:
        spec = {"endDate": OnOrBefore("timestamp", "2024-03-15")}
        assert [t.id for t in apply(transactions, spec)] == [10, 11]

    def test_datetime_objects_accepted(self, transactions) -> None:
        spec = {"startDate": OnOrAfter("timestamp", dt.date(2024, 2, 1))}
        assert [t.id for t in apply(transactions, spec)] == [11, 12]

    def test_unparseable_timestamp_excluded(self) -> None:
        items = [{"timestamp": "yesterday"}, {"timestamp": "2024-01-01T00:00:00Z"}]
        result = apply(items, {"s": OnOrAfter("timestamp", "2023-01-01")})
        assert result == [{"timestamp": "2024-01-01T00:00:00Z"}]

    def test_unparseable_bound_is_inactive(self, transactions) -> None:
        assert apply(transactions, {"s": OnOrAfter("timestamp", "not a date")}) == transactions


class TestParsers:
    @pytest.mark.parametrize(
        "raw, expected",
        [("100", 100.0), (" 2.5 ", 2.5), (7, 7.0), ("", None), ("abc", None), (None, None), (True, None),
         ("nan", None), ("inf", None), ("-Infinity", None), (float("nan"), None)],
    )
    def test_parse_number(self, raw, expected) -> None:
        assert parse_number(raw) == expected

    def test_parse_timestamp_naive_is_utc(self) -> None:
        parsed = parse_timestamp("2024-01-01T12:00:00")
        assert parsed == dt.datetime(2024, 1, 1, 12, tzinfo=dt.timezone.utc)

    def test_parse_timestamp_keeps_offset(self) -> None:
        parsed = parse_timestamp("2024-01-01T12:00:00+02:00")
        assert parsed == dt.datetime(2024, 1, 1, 10, tzinfo=dt.timezone.utc)


class TestFormBuilders:
    def test_transaction_form(self, transactions) -> None:
        form = {"minAmt": "60", "currency": "USD", "deviceId": "B", "description": ""}
        result = apply(transactions, build_transaction_filters(form))
        assert [t.id for t in result] == [12]

    def test_invalid_number_in_form_is_ignored(self, transactions) -> None:
        result = apply(transactions, build_transaction_filters({"maxAmt": "lots"}))
        assert result == transactions

    def test_non_finite_bound_is_ignored(self, transactions) -> None:
        assert apply(transactions, build_transaction_filters({"minAmt": "nan"})) == transactions
        assert apply(transactions, build_transaction_filters({"maxAmt": "-inf"})) == transactions

    def test_user_search(self, people) -> None:
        assert [p.id for p in apply(people, build_user_filters("ALICE"))] == [1]
        assert apply(people, build_user_filters("")) == people

    def test_cluster_form(self, assignments) -> None:
        spec = build_cluster_filters({"transactionId": "12", "clusterId": "2"})
        assert [a.transaction_id for a in apply(assignments, spec)] == [512]

    def test_distinct_currencies_sorted(self, transactions) -> None:
        assert distinct_values(transactions, "currency") == ["EUR", "USD"]
