"""Graph-producing actions: fetch, assemble, replace what is rendered.

Each action replaces the rendered graph rather than merging into it.  The
sink is cleared immediately before the new elements are added, and on any
failure it is left cleared, so a half-built or stale graph is never shown.

Actions are not sequenced against each other: when two overlap, whichever
finishes fetching last owns the sink.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

from txgraph.client.api import ApiClient
from txgraph.errors import AssemblyError, EmptyResult, FetchError
from txgraph.graph import assembler
from txgraph.graph.elements import AssembledGraph
from txgraph.render.sink import RenderSink

logger = structlog.get_logger()

RENDERED = "rendered"
EMPTY = "empty"
FETCH_ERROR = "fetch_error"
ASSEMBLY_ERROR = "assembly_error"
INVALID_INPUT = "invalid_input"

NO_PATH_MESSAGE = "No path found between those users."
EMPTY_GRAPH_MESSAGE = "No graph data to display."
ASSEMBLY_ERROR_MESSAGE = "Error computing graph."
MISSING_ENDPOINT_MESSAGE = "Please select both users."


@dataclass
class GraphOutcome:
    """What happened to one graph action, for the view to display.

    Attributes:
        status: One of ``rendered``, ``empty``, ``fetch_error``,
            ``assembly_error``, ``invalid_input``.
        message: User-facing banner text; ``None`` when rendered.
        graph: The rendered graph, when there is one.
    """

    status: str
    message: str | None = None
    graph: AssembledGraph | None = None

    @property
    def ok(self) -> bool:
        return self.status == RENDERED


class GraphController:
    """Runs graph actions against an ``ApiClient`` and a ``RenderSink``."""

    def __init__(self, client: ApiClient, sink: RenderSink) -> None:
        self._client = client
        self._sink = sink

    async def _run(
        self,
        action: str,
        produce: Callable[[], Awaitable[AssembledGraph]],
        fetch_error_message: str,
    ) -> GraphOutcome:
        log = logger.bind(action=action)
        try:
            graph = await produce()
        except EmptyResult as e:
            self._sink.clear()
            log.info("graph_action_empty")
            return GraphOutcome(EMPTY, str(e))
        except FetchError as e:
            self._sink.clear()
            log.warning("graph_action_failed", error=str(e), status_code=e.status_code)
            return GraphOutcome(FETCH_ERROR, fetch_error_message)
        except AssemblyError:
            self._sink.clear()
            log.exception("graph_action_failed")
            return GraphOutcome(ASSEMBLY_ERROR, ASSEMBLY_ERROR_MESSAGE)

        self._sink.clear()
        self._sink.add(graph.nodes, graph.edges)
        self._sink.layout()
        self._sink.fit()
        log.info("graph_rendered", nodes=len(graph.nodes), edges=len(graph.edges))
        return GraphOutcome(RENDERED, graph=graph)

    async def load_full_graph(self) -> GraphOutcome:
        async def produce() -> AssembledGraph:
            export = await self._client.export_graph()
            graph = assembler.from_full_export(export.nodes, export.relationships)
            if graph.is_empty:
                raise EmptyResult(EMPTY_GRAPH_MESSAGE)
            return graph

        return await self._run("full_graph", produce, "Error loading full graph.")

    async def load_user_graph(self, user_id: int) -> GraphOutcome:
        async def produce() -> AssembledGraph:
            payload = await self._client.get_user_relationships(user_id)
            return assembler.from_user_relationships(payload)

        return await self._run("user_graph", produce, "Error loading user graph.")

    async def load_transaction_graph(self, transaction_id: int) -> GraphOutcome:
        async def produce() -> AssembledGraph:
            payload = await self._client.get_transaction_relationships(transaction_id)
            return assembler.from_transaction_relationships(payload)

        return await self._run("transaction_graph", produce, "Error loading transaction graph.")

    async def compute_path(self, from_user_id: int | None, to_user_id: int | None) -> GraphOutcome:
        """Fetch and render the shortest path between two users.

        Missing endpoints are rejected before any request and leave the
        canvas untouched.
        """
        if from_user_id is None or to_user_id is None:
            return GraphOutcome(INVALID_INPUT, MISSING_ENDPOINT_MESSAGE)

        async def produce() -> AssembledGraph:
            result = await self._client.get_shortest_path(from_user_id, to_user_id)
            graph = assembler.from_path_result(result)
            if graph.is_empty:
                raise EmptyResult(NO_PATH_MESSAGE)
            return graph

        return await self._run("shortest_path", produce, "Error computing path.")
