"""Renderable graph elements produced by the assembler."""

from __future__ import annotations

from dataclasses import dataclass, field

from txgraph.graph.keys import EntityKind


@dataclass(frozen=True)
class GraphNode:
    """One entity in an assembled graph.

    Attributes:
        key: Entity key (``"u1"``, ``"t7"``); unique within one graph.
        label: Text shown on the node.
        kind: Entity kind, used by the renderer to pick a shape.
    """

    key: str
    label: str
    kind: EntityKind


@dataclass(frozen=True)
class GraphEdge:
    """One directed relationship in an assembled graph.

    Attributes:
        id: Edge id, unique within one graph.
        source: Key of the node the edge leaves.
        target: Key of the node the edge enters.
        relationship_kind: Backend relationship name, verbatim (``"SHARED_EMAIL"``).
        label: Human-readable relationship name (``"SHARED EMAIL"``).
        highlighted: ``True`` for edges that belong to a computed path.
    """

    id: str
    source: str
    target: str
    relationship_kind: str
    label: str
    highlighted: bool = False


@dataclass
class AssembledGraph:
    """Deduplicated nodes and ordered edges ready for a ``RenderSink``."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def node(self, key: str) -> GraphNode | None:
        """Return the node with *key*, or ``None``."""
        for node in self.nodes:
            if node.key == key:
                return node
        return None
