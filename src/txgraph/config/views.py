"""View configuration: page sizes, layouts and labels.

All values can be overridden via ``config/views.yaml``.  If the file does
not exist, defaults are used.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, model_validator


class TableConfig(BaseModel):
    """Default page size for one table."""

    default_page_size: int = 10


class LayoutConfig(BaseModel):
    """Layout algorithm the renderer runs for each graph view."""

    graph: str = "cose"
    path: str = "breadthfirst"


class ViewConfig(BaseModel):
    """Top-level view configuration."""

    page_sizes: list[int] = [5, 10, 20, 50]
    users: TableConfig = TableConfig(default_page_size=5)
    transactions: TableConfig = TableConfig(default_page_size=5)
    clusters: TableConfig = TableConfig(default_page_size=10)
    layouts: LayoutConfig = LayoutConfig()

    @model_validator(mode="after")
    def check_page_sizes(self) -> ViewConfig:
        """Reject non-positive sizes; warn when a default is not selectable."""
        if any(size < 1 for size in self.page_sizes):
            raise ValueError("page sizes must be >= 1")
        for name in ("users", "transactions", "clusters"):
            default = getattr(self, name).default_page_size
            if default not in self.page_sizes:
                structlog.get_logger().warning(
                    "default_page_size_not_selectable",
                    table=name,
                    default_page_size=default,
                    page_sizes=self.page_sizes,
                )
        return self


def load_view_config(path: Path) -> ViewConfig:
    """Load view configuration from a YAML file.

    Returns all defaults when the file does not exist.  Partial overrides
    are supported.
    """
    if not path.exists():
        return ViewConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return ViewConfig(**data)
