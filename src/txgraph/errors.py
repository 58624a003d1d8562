"""Error taxonomy shared by the API client, assembler and controller."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for all dashboard-layer errors."""


class FetchError(DashboardError):
    """The collaborator API could not be reached or answered with an error.

    Surfaced to the user as a banner; never retried automatically.
    """

    def __init__(self, path: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
        self.status_code = status_code


class EmptyResult(DashboardError):
    """A valid response that contains nothing to show (e.g. no path)."""


class AssemblyError(DashboardError):
    """Payload is structurally malformed (unknown kind, dangling edge, bad schema)."""


class InvalidKind(AssemblyError, ValueError):
    """Entity kind is not one of the two recognised kinds."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"unknown entity kind: {kind!r}")
        self.kind = kind
