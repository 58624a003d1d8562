"""Table views composed from the filter engine and the paginator.

UI state lives in an explicit ``ViewState`` record that is passed in on every
call; the views themselves only hold the collections fetched for the active
screen.  Updating a filter value or the page size through ``ViewState``
always returns a state on page 1.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from txgraph.models.entities import Event, Person
from txgraph.models.payloads import ClusterAssignment
from txgraph.query.filters import (
    apply,
    build_cluster_filters,
    build_transaction_filters,
    build_user_filters,
    distinct_values,
)
from txgraph.query.pagination import Page, paginate


class ViewState(BaseModel):
    """Serializable filter/pagination state of one table."""

    model_config = ConfigDict(frozen=True)

    filters: dict[str, str] = {}
    page: int = 1
    page_size: int = Field(default=10, ge=1)

    def with_filter(self, name: str, value: str) -> ViewState:
        """Set one filter value and go back to page 1."""
        return self.model_copy(update={"filters": {**self.filters, name: value}, "page": 1})

    def with_page_size(self, page_size: int) -> ViewState:
        """Change the page size and go back to page 1."""
        return ViewState(filters=self.filters, page=1, page_size=page_size)

    def with_page(self, page: int) -> ViewState:
        """Request another page; clamping happens when the page is built."""
        return self.model_copy(update={"page": page})


class ClusterView:
    """Transaction-cluster table: partial-id filters then pagination."""

    def __init__(self, assignments: Sequence[ClusterAssignment]) -> None:
        self._assignments = list(assignments)

    def page(self, state: ViewState) -> Page[ClusterAssignment]:
        matching = apply(self._assignments, build_cluster_filters(state.filters))
        return paginate(matching, state.page, state.page_size)


class ListsView:
    """Users and transactions tables, filtered and paged independently."""

    def __init__(self, users: Sequence[Person], transactions: Sequence[Event]) -> None:
        self._users = list(users)
        self._transactions = list(transactions)

    def user_page(self, state: ViewState) -> Page[Person]:
        matching = apply(self._users, build_user_filters(state.filters.get("query")))
        return paginate(matching, state.page, state.page_size)

    def transaction_page(self, state: ViewState) -> Page[Event]:
        matching = apply(self._transactions, build_transaction_filters(state.filters))
        return paginate(matching, state.page, state.page_size)

    def currencies(self) -> list[str]:
        """Distinct currencies, sorted, for the currency selector."""
        return distinct_values(self._transactions, "currency")
