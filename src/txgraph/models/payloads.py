"""Response contracts of the dashboard REST API.

Each model mirrors one endpoint body.  Collections the backend may encode as
``null`` are coerced to empty lists so the assembler only ever sees lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from txgraph.models.entities import Event, Person


def _none_to_list(v: object) -> object:
    """Treat a JSON ``null`` collection as empty."""
    return [] if v is None else v


def _none_to_dict(v: object) -> object:
    return {} if v is None else v


_WIRE = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# --- Relationship neighborhoods ---


class PersonConnection(BaseModel):
    relationship: str
    node: Person
    model_config = _WIRE


class EventConnection(BaseModel):
    relationship: str
    node: Event
    model_config = _WIRE


class UserConnections(BaseModel):
    users: Annotated[list[PersonConnection], BeforeValidator(_none_to_list)] = []
    transactions: Annotated[list[EventConnection], BeforeValidator(_none_to_list)] = []
    model_config = _WIRE


class UserRelationships(BaseModel):
    """Body of ``GET /relationships/user/{id}``."""

    user: Person
    connections: UserConnections = UserConnections()
    model_config = _WIRE


class TransactionConnections(BaseModel):
    users: Annotated[list[PersonConnection], BeforeValidator(_none_to_list)] = []
    model_config = _WIRE


class TransactionRelationships(BaseModel):
    """Body of ``GET /relationships/transaction/{id}``."""

    transaction: Event
    connections: TransactionConnections = TransactionConnections()
    model_config = _WIRE


# --- Shortest path ---


class PathNode(BaseModel):
    """A path endpoint: only the fields needed to key and label it."""

    id: int
    type: str
    name: str | None = None
    device_id: str | None = Field(None, alias="deviceId")
    model_config = _WIRE


class PathSegment(BaseModel):
    from_node: PathNode = Field(alias="from")
    to_node: PathNode = Field(alias="to")
    relationship: str
    model_config = _WIRE


@dataclass(frozen=True)
class SegmentPath:
    """Path given as hops, each carrying its relationship name."""

    segments: tuple[PathSegment, ...] = ()


@dataclass(frozen=True)
class OrderedPath:
    """Path given as an ordered list of entities with no relationship names."""

    nodes: tuple[PathNode, ...] = ()


PathResult = SegmentPath | OrderedPath


class ShortestPathResponse(BaseModel):
    """Body of ``GET /analytics/shortest-path/users/{a}/{b}``.

    The backend has shipped two shapes for this endpoint: ``{"segments": [...]}``
    and ``{"path": [...]}``.  ``to_result`` picks the variant by which field is
    present.
    """

    segments: list[PathSegment] | None = None
    path: list[PathNode] | None = None
    model_config = _WIRE

    def to_result(self) -> PathResult:
        if self.segments is not None:
            return SegmentPath(tuple(self.segments))
        if self.path is not None:
            return OrderedPath(tuple(self.path))
        return SegmentPath()


# --- Full export ---


class ExportNode(BaseModel):
    id: int
    type: str
    properties: Annotated[dict[str, Any], BeforeValidator(_none_to_dict)] = {}
    model_config = _WIRE


class ExportRelationship(BaseModel):
    source_id: int = Field(alias="sourceId")
    source_type: str = Field(alias="sourceType")
    target_id: int = Field(alias="targetId")
    target_type: str = Field(alias="targetType")
    relationship: str
    model_config = _WIRE


class GraphExport(BaseModel):
    """Body of ``GET /export/json``."""

    nodes: Annotated[list[ExportNode], BeforeValidator(_none_to_list)] = []
    relationships: Annotated[list[ExportRelationship], BeforeValidator(_none_to_list)] = []
    model_config = _WIRE


# --- Transaction clusters ---


class ClusterAssignment(BaseModel):
    transaction_id: int = Field(alias="transactionId")
    cluster_id: int = Field(alias="clusterId")
    model_config = _WIRE


class TransactionClusters(BaseModel):
    """Body of ``GET /analytics/transaction-clusters``."""

    clusters: Annotated[list[ClusterAssignment], BeforeValidator(_none_to_list)] = []
    model_config = _WIRE
