"""Graph assembly: entity keys, element types and payload normalization.

``txgraph.graph.controller`` is imported directly by callers; it depends on
the API client and the render sink.
"""

from txgraph.graph.assembler import (
    from_entity_neighborhood,
    from_full_export,
    from_ordered_path,
    from_path_result,
    from_path_segments,
    from_transaction_relationships,
    from_user_relationships,
)
from txgraph.graph.elements import AssembledGraph, GraphEdge, GraphNode
from txgraph.graph.keys import EntityKind, entity_key, parse_kind

__all__ = [
    "AssembledGraph",
    "EntityKind",
    "GraphEdge",
    "GraphNode",
    "entity_key",
    "from_entity_neighborhood",
    "from_full_export",
    "from_ordered_path",
    "from_path_result",
    "from_path_segments",
    "from_transaction_relationships",
    "from_user_relationships",
    "parse_kind",
]
