"""Normalize the four backend graph shapes into one node/edge model.

Supported shapes:

* full export (``GET /export/json``): typed node list plus typed relationship list
* entity neighborhood (``GET /relationships/...``): one focal entity plus
  ``{relationship, node}`` connections
* path segments (``{"segments": [...]}``): hops with relationship names
* ordered path (``{"path": [...]}``): consecutive entities, no relationship names

Every shape goes through ``_GraphBuilder``, which keeps a networkx
``MultiDiGraph`` so that an entity appearing in several fragments yields a
single node and parallel relationships between the same pair get distinct
edge ids.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx
import structlog

from txgraph.errors import AssemblyError
from txgraph.graph.elements import AssembledGraph, GraphEdge, GraphNode
from txgraph.graph.keys import EntityKind, entity_key, parse_kind
from txgraph.models.entities import Event, Person
from txgraph.models.payloads import (
    EventConnection,
    ExportNode,
    ExportRelationship,
    OrderedPath,
    PathNode,
    PathResult,
    PathSegment,
    PersonConnection,
    SegmentPath,
    TransactionRelationships,
    UserRelationships,
)

logger = structlog.get_logger()

SENT = "SENT"
PATH_RELATIONSHIP = "PATH"
PATH_LABEL = "path"


def humanize(relationship: str) -> str:
    """``"SHARED_EMAIL"`` -> ``"SHARED EMAIL"``."""
    return relationship.replace("_", " ")


def person_label(entity_id: int, name: str | None) -> str:
    """Label a person node; falls back to ``"User #<id>"`` when unnamed."""
    return name if name else f"User #{entity_id}"


def event_label(entity_id: int, device_id: str | None) -> str:
    """Label a transaction node, with the device id in parentheses when known."""
    if device_id:
        return f"Txn #{entity_id} ({device_id})"
    return f"Txn #{entity_id}"


def _label(kind: EntityKind, entity_id: int, name: str | None, device_id: str | None) -> str:
    if kind is EntityKind.PERSON:
        return person_label(entity_id, name)
    return event_label(entity_id, device_id)


class _GraphBuilder:
    """Accumulates nodes and edges for one assembled graph."""

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._nodes: list[GraphNode] = []
        self._edges: list[GraphEdge] = []

    def add_node(self, kind: EntityKind, entity_id: int, label: str) -> str:
        """Add a node unless its key is already present; return the key.

        Later duplicates are ignored, not merged.
        """
        key = entity_key(kind, entity_id)
        if key not in self._graph:
            self._graph.add_node(key)
            self._nodes.append(GraphNode(key=key, label=label, kind=kind))
        return key

    def add_edge(
        self,
        source: str,
        target: str,
        relationship: str,
        label: str | None = None,
        highlighted: bool = False,
    ) -> GraphEdge:
        for key in (source, target):
            if key not in self._graph:
                raise AssemblyError(f"edge {source}->{target} references undeclared node {key}")

        # Parallel edges between the same pair get an index suffix
        edge_id = f"e_{source}_{target}"
        repeats = self._graph.number_of_edges(source, target)
        if repeats:
            edge_id = f"{edge_id}_{repeats}"

        self._graph.add_edge(source, target, key=edge_id)
        edge = GraphEdge(
            id=edge_id,
            source=source,
            target=target,
            relationship_kind=relationship,
            label=humanize(relationship) if label is None else label,
            highlighted=highlighted,
        )
        self._edges.append(edge)
        return edge

    def build(self, shape: str) -> AssembledGraph:
        logger.debug(
            "graph_assembled",
            shape=shape,
            nodes=len(self._nodes),
            edges=len(self._edges),
        )
        return AssembledGraph(nodes=list(self._nodes), edges=list(self._edges))


def _add_entity(builder: _GraphBuilder, entity: Person | Event | PathNode) -> tuple[str, EntityKind]:
    """Add any entity snapshot as a node; return ``(key, kind)``."""
    if isinstance(entity, Person):
        kind = EntityKind.PERSON
        label = person_label(entity.id, entity.name)
    elif isinstance(entity, Event):
        kind = EntityKind.EVENT
        label = event_label(entity.id, entity.device_id)
    elif isinstance(entity, PathNode):
        kind = parse_kind(entity.type)
        label = _label(kind, entity.id, entity.name, entity.device_id)
    else:
        raise AssemblyError(f"unsupported entity payload: {type(entity).__name__}")
    return builder.add_node(kind, entity.id, label), kind


def from_full_export(
    nodes: Iterable[ExportNode],
    relationships: Iterable[ExportRelationship],
) -> AssembledGraph:
    """Assemble the full graph export.

    Node labels come from ``properties.name`` (people) and
    ``properties.deviceId`` (transactions).  Each relationship keeps its
    declared direction.

    Raises:
        AssemblyError: On an unknown node or relationship type, or a
            relationship whose endpoint was never declared as a node.
    """
    builder = _GraphBuilder()
    for node in nodes:
        kind = parse_kind(node.type)
        props = node.properties
        builder.add_node(kind, node.id, _label(kind, node.id, props.get("name"), props.get("deviceId")))

    for rel in relationships:
        builder.add_edge(
            entity_key(rel.source_type, rel.source_id),
            entity_key(rel.target_type, rel.target_id),
            rel.relationship,
        )
    return builder.build("full_export")


def _orient(
    center: tuple[str, EntityKind],
    related: tuple[str, EntityKind],
    relationship: str,
) -> tuple[str, str]:
    """Pick ``(source, target)`` for a neighborhood edge.

    Between a person and a transaction, ``SENT`` points person -> transaction
    and every other relationship points transaction -> person.  Between two
    entities of the same kind the edge points center -> related.
    """
    (center_key, center_kind), (related_key, related_kind) = center, related
    if center_kind is related_kind:
        return center_key, related_key
    if center_kind is EntityKind.PERSON:
        person, event = center_key, related_key
    else:
        person, event = related_key, center_key
    if relationship.upper() == SENT:
        return person, event
    return event, person


def from_entity_neighborhood(
    center: Person | Event,
    related_people: Iterable[PersonConnection] = (),
    related_events: Iterable[EventConnection] = (),
) -> AssembledGraph:
    """Assemble one entity and its direct connections.

    The center and each related entity produce one node (a related entity
    reached through several relationships still yields one node, with one
    edge per relationship).
    """
    builder = _GraphBuilder()
    center_ref = _add_entity(builder, center)
    for conn in [*related_people, *related_events]:
        related_ref = _add_entity(builder, conn.node)
        source, target = _orient(center_ref, related_ref, conn.relationship)
        builder.add_edge(source, target, conn.relationship)
    return builder.build("neighborhood")


def from_user_relationships(payload: UserRelationships) -> AssembledGraph:
    """Assemble the body of ``GET /relationships/user/{id}``."""
    return from_entity_neighborhood(
        payload.user,
        payload.connections.users,
        payload.connections.transactions,
    )


def from_transaction_relationships(payload: TransactionRelationships) -> AssembledGraph:
    """Assemble the body of ``GET /relationships/transaction/{id}``."""
    return from_entity_neighborhood(payload.transaction, payload.connections.users)


def from_path_segments(segments: Sequence[PathSegment]) -> AssembledGraph:
    """Assemble a walked path given as hops.

    Every hop becomes one highlighted edge.  An empty segment list yields an
    empty graph; the caller decides how to present "no path".
    """
    builder = _GraphBuilder()
    for segment in segments:
        source, _ = _add_entity(builder, segment.from_node)
        target, _ = _add_entity(builder, segment.to_node)
        builder.add_edge(source, target, segment.relationship, highlighted=True)
    return builder.build("path_segments")


def from_ordered_path(nodes: Sequence[PathNode]) -> AssembledGraph:
    """Assemble a walked path given as consecutive entities.

    No relationship names are available, so every hop is labeled ``"path"``.
    """
    builder = _GraphBuilder()
    keys = [_add_entity(builder, node)[0] for node in nodes]
    for source, target in zip(keys, keys[1:]):
        builder.add_edge(source, target, PATH_RELATIONSHIP, label=PATH_LABEL, highlighted=True)
    return builder.build("ordered_path")


def from_path_result(result: PathResult) -> AssembledGraph:
    """Assemble whichever path variant the backend returned."""
    if isinstance(result, SegmentPath):
        return from_path_segments(result.segments)
    if isinstance(result, OrderedPath):
        return from_ordered_path(result.nodes)
    raise AssemblyError(f"unsupported path result: {type(result).__name__}")
