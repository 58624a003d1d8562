"""Async client for the dashboard REST API.

Transport failures and non-2xx responses become ``FetchError``; a 2xx body
that is not valid JSON or does not match the endpoint contract becomes
``AssemblyError`` (malformed graph data).  Nothing is retried.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from txgraph.errors import AssemblyError, FetchError
from txgraph.models.entities import Event, Person
from txgraph.models.payloads import (
    ClusterAssignment,
    GraphExport,
    PathResult,
    ShortestPathResponse,
    TransactionClusters,
    TransactionRelationships,
    UserRelationships,
)

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)

_PEOPLE = TypeAdapter(list[Person])
_EVENTS = TypeAdapter(list[Event])

EXPORT_FORMATS = ("json", "csv")


class ApiClient:
    """Thin typed wrapper over ``httpx.AsyncClient``.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str) -> httpx.Response:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("api_request_failed", path=path, status=status)
            raise FetchError(path, f"HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", path=path, error=str(e))
            raise FetchError(path, str(e) or type(e).__name__) from e
        return response

    async def _get_json(self, path: str) -> Any:
        response = await self._get(path)
        try:
            return response.json()
        except ValueError as e:
            raise AssemblyError(f"{path}: invalid JSON body") from e

    async def _get_model(self, path: str, model: type[M]) -> M:
        data = await self._get_json(path)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise AssemblyError(f"{path}: unexpected payload: {e}") from e

    async def get_users(self) -> list[Person]:
        data = await self._get_json("/users")
        try:
            return _PEOPLE.validate_python(data or [])
        except ValidationError as e:
            raise AssemblyError(f"/users: unexpected payload: {e}") from e

    async def get_transactions(self) -> list[Event]:
        data = await self._get_json("/transactions")
        try:
            return _EVENTS.validate_python(data or [])
        except ValidationError as e:
            raise AssemblyError(f"/transactions: unexpected payload: {e}") from e

    async def get_user_relationships(self, user_id: int) -> UserRelationships:
        return await self._get_model(f"/relationships/user/{user_id}", UserRelationships)

    async def get_transaction_relationships(self, transaction_id: int) -> TransactionRelationships:
        return await self._get_model(
            f"/relationships/transaction/{transaction_id}", TransactionRelationships
        )

    async def get_shortest_path(self, from_user_id: int, to_user_id: int) -> PathResult:
        path = f"/analytics/shortest-path/users/{from_user_id}/{to_user_id}"
        data = await self._get_json(path)
        if data is None:
            data = {}
        try:
            return ShortestPathResponse.model_validate(data).to_result()
        except ValidationError as e:
            raise AssemblyError(f"{path}: unexpected payload: {e}") from e

    async def get_transaction_clusters(self) -> list[ClusterAssignment]:
        body = await self._get_model("/analytics/transaction-clusters", TransactionClusters)
        return body.clusters

    async def export_graph(self) -> GraphExport:
        return await self._get_model("/export/json", GraphExport)

    async def download_export(self, fmt: str) -> bytes:
        """Raw export file contents, passed through untouched."""
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"unsupported export format: {fmt!r}")
        response = await self._get(f"/export/{fmt}")
        return response.content
