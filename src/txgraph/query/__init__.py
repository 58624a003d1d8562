"""Local filtering and pagination over fetched collections."""

from txgraph.query.filters import apply
from txgraph.query.pagination import Page, paginate
from txgraph.query.views import ClusterView, ListsView, ViewState

__all__ = ["ClusterView", "ListsView", "Page", "ViewState", "apply", "paginate"]
