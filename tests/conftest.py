"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from txgraph.client.api import ApiClient
from txgraph.render.sink import ElementListSink

BASE_URL = "http://test/api"


@pytest.fixture
def sample_users() -> list[dict]:
    return [
        {"id": 1, "name": "Alice", "email": "alice@example.com", "phone": "555-0100"},
        {"id": 2, "name": "Bob", "email": "bob@example.com", "phone": "555-0101"},
        {"id": 3, "name": "Carol", "email": "carol@corp.io", "phone": "555-0199"},
    ]


@pytest.fixture
def sample_transactions() -> list[dict]:
    return [
        {
            "id": 10,
            "fromUserId": 1,
            "toUserId": 2,
            "amount": 50.0,
            "currency": "USD",
            "timestamp": "2024-01-05T10:00:00Z",
            "description": "Lunch split",
            "deviceId": "dev-A",
        },
        {
            "id": 11,
            "fromUserId": 2,
            "toUserId": 3,
            "amount": 100.0,
            "currency": "EUR",
            "timestamp": "2024-02-10T08:30:00Z",
            "description": "Rent share",
            "deviceId": "",
        },
        {
            "id": 12,
            "fromUserId": 3,
            "toUserId": 1,
            "amount": 250.5,
            "currency": "USD",
            "timestamp": "2024-03-15T23:59:00Z",
            "description": "Concert tickets",
            "deviceId": "dev-B",
        },
    ]


@pytest.fixture
def sample_export() -> dict:
    """Two users, one transaction, SENT/RECEIVED_BY and one shared attribute."""
    return {
        "nodes": [
            {"id": 1, "type": "User", "properties": {"name": "Alice", "email": "alice@example.com"}},
            {"id": 2, "type": "User", "properties": {"name": "Bob"}},
            {"id": 7, "type": "Transaction", "properties": {"amount": 50.0, "deviceId": "dev-A"}},
        ],
        "relationships": [
            {"sourceId": 1, "sourceType": "User", "targetId": 7, "targetType": "Transaction", "relationship": "SENT"},
            {"sourceId": 7, "sourceType": "Transaction", "targetId": 2, "targetType": "User", "relationship": "RECEIVED_BY"},
            {"sourceId": 1, "sourceType": "User", "targetId": 2, "targetType": "User", "relationship": "SHARED_EMAIL"},
        ],
    }


@pytest.fixture
def sample_user_relationships() -> dict:
    return {
        "user": {"id": 1, "name": "Alice", "email": "alice@example.com", "phone": "555-0100"},
        "connections": {
            "users": [
                {"relationship": "SHARED_PHONE", "node": {"id": 3, "name": "Carol", "email": "", "phone": "555-0100"}},
            ],
            "transactions": [
                {"relationship": "SENT", "node": {"id": 10, "fromUserId": 1, "toUserId": 2, "amount": 50.0, "deviceId": "dev-A"}},
                {"relationship": "RECEIVED_BY", "node": {"id": 12, "fromUserId": 3, "toUserId": 1, "amount": 250.5}},
            ],
        },
    }


@pytest.fixture
def sample_segments() -> dict:
    return {
        "segments": [
            {
                "from": {"id": 1, "type": "User", "name": "Alice"},
                "to": {"id": 10, "type": "Transaction", "deviceId": "dev-A"},
                "relationship": "SENT",
            },
            {
                "from": {"id": 10, "type": "Transaction", "deviceId": "dev-A"},
                "to": {"id": 2, "type": "User", "name": "Bob"},
                "relationship": "RECEIVED_BY",
            },
        ]
    }


@pytest.fixture
def sample_clusters() -> dict:
    return {
        "clusters": [
            {"transactionId": 120, "clusterId": 1},
            {"transactionId": 34, "clusterId": 1},
            {"transactionId": 512, "clusterId": 2},
            {"transactionId": 7, "clusterId": 12},
        ]
    }


def json_routes(routes: dict[str, object]) -> Callable[[httpx.Request], httpx.Response]:
    """Build a MockTransport handler serving JSON bodies keyed by request path.

    A value that is an ``httpx.Response`` is returned as-is; an exception
    instance is raised (to simulate transport failures).  Unknown paths 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(body, Exception):
            raise body
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})

    return handler


@pytest.fixture
def make_client() -> Callable[[dict[str, object]], ApiClient]:
    """Factory for an ApiClient whose requests are answered from a route table."""

    def factory(routes: dict[str, object]) -> ApiClient:
        return ApiClient(BASE_URL, transport=httpx.MockTransport(json_routes(routes)))

    return factory


@pytest.fixture
def sink() -> ElementListSink:
    return ElementListSink()
