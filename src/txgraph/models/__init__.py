"""Typed snapshots of the collaborator API's JSON bodies."""

from txgraph.models.entities import Entity, Event, Person
from txgraph.models.payloads import (
    ClusterAssignment,
    EventConnection,
    ExportNode,
    ExportRelationship,
    GraphExport,
    OrderedPath,
    PathNode,
    PathResult,
    PathSegment,
    PersonConnection,
    SegmentPath,
    ShortestPathResponse,
    TransactionClusters,
    TransactionRelationships,
    UserRelationships,
)

__all__ = [
    "ClusterAssignment",
    "Entity",
    "Event",
    "EventConnection",
    "ExportNode",
    "ExportRelationship",
    "GraphExport",
    "OrderedPath",
    "PathNode",
    "PathResult",
    "PathSegment",
    "Person",
    "PersonConnection",
    "SegmentPath",
    "ShortestPathResponse",
    "TransactionClusters",
    "TransactionRelationships",
    "UserRelationships",
]
