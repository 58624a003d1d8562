"""CLI entry point: python -m txgraph.cli {graph,path,users,transactions,clusters,export}"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog

from txgraph.client.api import EXPORT_FORMATS, ApiClient
from txgraph.config.settings import Settings, get_settings
from txgraph.config.views import ViewConfig, load_view_config
from txgraph.errors import DashboardError
from txgraph.graph.controller import GraphController, GraphOutcome
from txgraph.logging_config import bind_command, configure_logging
from txgraph.query.pagination import Page
from txgraph.query.views import ClusterView, ListsView, ViewState
from txgraph.render.sink import ElementListSink


def _page_to_dict(page: Page) -> dict[str, Any]:
    return {
        "page": page.page_number,
        "pageSize": page.page_size,
        "totalPages": page.total_pages,
        "totalItems": page.total_items,
        "items": [item.model_dump(by_alias=True) for item in page.items],
    }


def _outcome_to_dict(outcome: GraphOutcome, sink: ElementListSink) -> dict[str, Any]:
    return {"status": outcome.status, "message": outcome.message, **sink.snapshot()}


def _client(settings: Settings) -> ApiClient:
    return ApiClient(settings.api_base_url, timeout=settings.request_timeout)


async def run_graph(args: argparse.Namespace, settings: Settings, config: ViewConfig) -> dict[str, Any]:
    """Load the full graph or one entity's neighborhood."""
    sink = ElementListSink(layout_name=config.layouts.graph)
    async with _client(settings) as client:
        controller = GraphController(client, sink)
        if args.user is not None:
            outcome = await controller.load_user_graph(args.user)
        elif args.transaction is not None:
            outcome = await controller.load_transaction_graph(args.transaction)
        else:
            outcome = await controller.load_full_graph()
    return _outcome_to_dict(outcome, sink)


async def run_path(args: argparse.Namespace, settings: Settings, config: ViewConfig) -> dict[str, Any]:
    """Render the shortest path between two users."""
    sink = ElementListSink(layout_name=config.layouts.path)
    async with _client(settings) as client:
        outcome = await GraphController(client, sink).compute_path(args.from_user, args.to_user)
    return _outcome_to_dict(outcome, sink)


async def run_users(args: argparse.Namespace, settings: Settings, config: ViewConfig) -> dict[str, Any]:
    async with _client(settings) as client:
        users = await client.get_users()
    state = ViewState(
        filters={"query": args.query or ""},
        page=args.page,
        page_size=args.page_size or config.users.default_page_size,
    )
    return _page_to_dict(ListsView(users, []).user_page(state))


async def run_transactions(
    args: argparse.Namespace, settings: Settings, config: ViewConfig
) -> dict[str, Any]:
    async with _client(settings) as client:
        transactions = await client.get_transactions()
    form = {
        "minAmt": args.min_amount,
        "maxAmt": args.max_amount,
        "currency": args.currency,
        "startDate": args.start_date,
        "endDate": args.end_date,
        "deviceId": args.device_id,
        "description": args.description,
    }
    state = ViewState(
        filters={k: v for k, v in form.items() if v},
        page=args.page,
        page_size=args.page_size or config.transactions.default_page_size,
    )
    view = ListsView([], transactions)
    return {**_page_to_dict(view.transaction_page(state)), "currencies": view.currencies()}


async def run_clusters(args: argparse.Namespace, settings: Settings, config: ViewConfig) -> dict[str, Any]:
    async with _client(settings) as client:
        assignments = await client.get_transaction_clusters()
    state = ViewState(
        filters={"transactionId": args.transaction_id or "", "clusterId": args.cluster_id or ""},
        page=args.page,
        page_size=args.page_size or config.clusters.default_page_size,
    )
    return _page_to_dict(ClusterView(assignments).page(state))


async def run_export(fmt: str, output: Path, settings: Settings) -> None:
    """Download the export file untouched and write it to *output*."""
    log = structlog.get_logger()
    async with _client(settings) as client:
        content = await client.download_export(fmt)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(content)
    log.info("export_file_written", path=str(output), format=fmt, size=len(content))


def build_parser(config: ViewConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="txgraph.cli",
        description="User/transaction graph dashboard CLI",
    )
    subparsers = parser.add_subparsers(dest="command")

    def add_paging(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--page", type=int, default=1, help="Page number (clamped)")
        sub.add_argument(
            "--page-size",
            type=int,
            choices=config.page_sizes,
            default=None,
            help="Rows per page",
        )

    graph_parser = subparsers.add_parser("graph", help="Render the full graph or a neighborhood")
    target = graph_parser.add_mutually_exclusive_group()
    target.add_argument("--user", type=int, default=None, help="Center on a user id")
    target.add_argument("--transaction", type=int, default=None, help="Center on a transaction id")

    path_parser = subparsers.add_parser("path", help="Shortest path between two users")
    path_parser.add_argument("from_user", type=int)
    path_parser.add_argument("to_user", type=int)

    users_parser = subparsers.add_parser("users", help="List users")
    users_parser.add_argument("--query", default=None, help="Search name, email or phone")
    add_paging(users_parser)

    tx_parser = subparsers.add_parser("transactions", help="List transactions")
    tx_parser.add_argument("--min-amount", default=None)
    tx_parser.add_argument("--max-amount", default=None)
    tx_parser.add_argument("--currency", default=None)
    tx_parser.add_argument("--start-date", default=None, help="ISO date, inclusive")
    tx_parser.add_argument("--end-date", default=None, help="ISO date, inclusive")
    tx_parser.add_argument("--device-id", default=None)
    tx_parser.add_argument("--description", default=None)
    add_paging(tx_parser)

    clusters_parser = subparsers.add_parser("clusters", help="List transaction cluster assignments")
    clusters_parser.add_argument("--transaction-id", default=None, help="Partial transaction id")
    clusters_parser.add_argument("--cluster-id", default=None, help="Partial cluster id")
    add_paging(clusters_parser)

    export_parser = subparsers.add_parser("export", help="Download the graph export")
    export_parser.add_argument("--format", choices=EXPORT_FORMATS, default="json")
    export_parser.add_argument("--output", type=str, default=None, help="Default: ./graph.<format>")

    return parser


_RUNNERS = {
    "graph": run_graph,
    "path": run_path,
    "users": run_users,
    "transactions": run_transactions,
    "clusters": run_clusters,
}


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    config = load_view_config(settings.view_config_path)

    parser = build_parser(config)
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    bind_command(args.command, settings.api_base_url)
    try:
        if args.command == "export":
            output = Path(args.output or f"graph.{args.format}")
            asyncio.run(run_export(args.format, output, settings))
            return
        result = asyncio.run(_RUNNERS[args.command](args, settings, config))
    except DashboardError as e:
        structlog.get_logger().error("command_failed", command=args.command, error=str(e))
        sys.exit(1)

    json.dump(result, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    if result.get("status") not in (None, "rendered", "empty"):
        sys.exit(1)


if __name__ == "__main__":
    main()
