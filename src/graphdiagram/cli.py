"""Command Line Interface for graph diagrams.

This module provides a CLI for managing the edges of a stored graph and for
running graph calculations over them.

The CLI supports the following commands:
    - connect: Create an edge between two nodes (idempotent)
    - disconnect: Remove the first edge between two nodes
    - list: Print every stored edge as one JSON object per line
    - path: Print the shortest path between two nodes as JSON
    - reachable: Report whether one node can be reached from another
    - degree: Print the number of edges incident to a node

Global options choose where and how edges are stored. The data directory
defaults to $GRAPHDIAGRAM_DATA_DIR, or ./data when that is unset.

Example Usage:
    python -m graphdiagram cli connect A B --cost 4
    python -m graphdiagram cli connect A C --undirected --comment road
    python -m graphdiagram cli --storage sqlite path A B
    graphdiagram degree A
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from .core.calculator import GraphCalculator
from .core.exceptions import GraphOperationError, StorageError, ValidationError
from .core.models import Edge
from .core.node import Node
from .infrastructure.storage import STORAGE_TYPES, StorageService
from .infrastructure.storage.utils import serialize_edge
from .repositories import EdgeRepository

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "GRAPHDIAGRAM_DATA_DIR"


def get_data_dir() -> str:
    """Get the data directory from the environment, falling back to ./data."""
    return os.environ.get(DATA_DIR_ENV) or os.path.join(os.getcwd(), "data")


async def setup_storage(data_dir: str, storage_type: str) -> StorageService:
    """Initialize and configure the storage service.

    Returns:
        StorageService: Initialized storage service instance.
    """
    storage_service = StorageService(storage_dir=data_dir, storage_type=storage_type)
    await storage_service.initialize()
    return storage_service


def format_edge(edge: Edge) -> str:
    """Render an edge as a single JSON line."""
    return json.dumps(serialize_edge(edge), sort_keys=True)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(description="Graph diagram CLI")
    parser.add_argument(
        "--data-dir",
        default=get_data_dir(),
        help=f"Directory holding the edge data (default: ${DATA_DIR_ENV} or ./data)",
    )
    parser.add_argument(
        "--storage", choices=STORAGE_TYPES, default="json", help="Storage backend"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    connect = subparsers.add_parser("connect", help="Create an edge from A to B")
    connect.add_argument("departure")
    connect.add_argument("destination")
    connect.add_argument("--undirected", action="store_true", help="Create an undirected edge")
    connect.add_argument("--comment", default="", help="Edge comment")
    connect.add_argument("--cost", type=int, default=0, help="Edge cost")

    disconnect = subparsers.add_parser("disconnect", help="Remove the edge from A to B")
    disconnect.add_argument("departure")
    disconnect.add_argument("destination")
    disconnect.add_argument("--undirected", action="store_true", help="Remove an undirected edge")

    subparsers.add_parser("list", help="List all edges")

    path = subparsers.add_parser("path", help="Shortest path from A to B")
    path.add_argument("departure")
    path.add_argument("destination")
    path.add_argument(
        "--allow-negative", action="store_true", help="Accept negative edge costs"
    )

    reachable = subparsers.add_parser("reachable", help="Check whether B is reachable from A")
    reachable.add_argument("departure")
    reachable.add_argument("destination")

    degree = subparsers.add_parser("degree", help="Number of edges touching A")
    degree.add_argument("node")

    return parser


async def run_command(args: argparse.Namespace, storage: StorageService) -> int:
    """Execute one parsed command against storage; returns the exit status."""
    repository = EdgeRepository(storage.edge_store)
    calculator = GraphCalculator(storage.edge_store)

    if args.command == "connect":
        node = Node(args.departure, repository, calculator)
        edge = await node.add_connection(
            args.destination,
            directed=not args.undirected,
            comment=args.comment,
            cost=args.cost,
        )
        print(format_edge(edge))

    elif args.command == "disconnect":
        node = Node(args.departure, repository, calculator)
        if args.undirected:
            removed = await node.remove_connection(args.destination)
        else:
            removed = await node.remove_destination(args.destination)
        if removed is None:
            print("no edge")
            return 1
        print(format_edge(removed))

    elif args.command == "list":
        for edge in await storage.edge_store.all_edges():
            print(format_edge(edge))

    elif args.command == "path":
        result = await calculator.shortest_path(
            args.departure, args.destination, allow_negative=args.allow_negative
        )
        if result is None:
            print("no path")
            return 1
        print(json.dumps(result.to_dict()))

    elif args.command == "reachable":
        reachable = await calculator.is_reachable(args.departure, args.destination)
        print("yes" if reachable else "no")
        return 0 if reachable else 1

    elif args.command == "degree":
        print(await calculator.degree(args.node))

    return 0


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Handles command-line argument parsing and executes the appropriate
    command against the configured storage backend.

    Returns:
        Process exit status
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    storage = await setup_storage(args.data_dir, args.storage)
    try:
        return await run_command(args, storage)
    except (ValidationError, GraphOperationError, StorageError) as e:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        print(str(e), file=sys.stderr)
        return 1
    finally:
        # Ensure proper cleanup of storage resources
        await storage.cleanup()


def run(argv: Optional[List[str]] = None) -> None:
    """Console script entry point: run the CLI and exit with its status."""
    sys.exit(asyncio.run(main(argv)))
