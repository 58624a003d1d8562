"""Rendering capability the graph layer draws into.

The assembler and controller only know the four operations of
``RenderSink``; any graph engine (a browser canvas, a notebook widget, a JSON
dump) can sit behind it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from txgraph.graph.elements import AssembledGraph, GraphEdge, GraphNode


@runtime_checkable
class RenderSink(Protocol):
    def clear(self) -> None:
        """Remove every element currently rendered."""

    def add(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> None:
        """Add nodes and edges to the canvas."""

    def layout(self) -> None:
        """Start the layout run (not awaited)."""

    def fit(self) -> None:
        """Fit the viewport to the rendered elements."""


HIGHLIGHT_CLASS = "highlight"


def node_element(node: GraphNode) -> dict[str, Any]:
    return {"data": {"id": node.key, "label": node.label, "type": node.kind.value.lower()}}


def edge_element(edge: GraphEdge) -> dict[str, Any]:
    element: dict[str, Any] = {
        "data": {
            "id": edge.id,
            "source": edge.source,
            "target": edge.target,
            "relationship": edge.relationship_kind,
            "label": edge.label,
        }
    }
    if edge.highlighted:
        element["classes"] = HIGHLIGHT_CLASS
    return element


def to_elements(graph: AssembledGraph) -> list[dict[str, Any]]:
    """Serialize a graph to renderer element dicts, nodes first."""
    return [node_element(n) for n in graph.nodes] + [edge_element(e) for e in graph.edges]


class ElementListSink:
    """In-memory ``RenderSink`` that keeps renderer-ready element dicts.

    Attributes:
        elements: Current element dicts (nodes and edges).
        layout_name: Layout algorithm requested on ``layout()``.
        layout_runs: Number of ``layout()`` calls.
        fit_count: Number of ``fit()`` calls.
    """

    def __init__(self, layout_name: str = "cose") -> None:
        self.elements: list[dict[str, Any]] = []
        self.layout_name = layout_name
        self.layout_runs = 0
        self.fit_count = 0

    def clear(self) -> None:
        self.elements = []

    def add(self, nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> None:
        self.elements.extend(node_element(n) for n in nodes)
        self.elements.extend(edge_element(e) for e in edges)

    def layout(self) -> None:
        self.layout_runs += 1

    def fit(self) -> None:
        self.fit_count += 1

    @property
    def node_ids(self) -> list[str]:
        return [el["data"]["id"] for el in self.elements if "source" not in el["data"]]

    @property
    def edge_ids(self) -> list[str]:
        return [el["data"]["id"] for el in self.elements if "source" in el["data"]]

    def snapshot(self) -> dict[str, Any]:
        """JSON-serializable view of the canvas for dumping."""
        return {"layout": self.layout_name, "elements": list(self.elements)}
