"""JSON filesystem implementation of the edge store."""

import json
import logging
import os
import shutil
from typing import Any, Dict, List

import aiofiles

from ...core.exceptions import StorageError, ValidationError
from ...core.models import Edge
from ...utils.validation import validate_edge_file
from .constants import EDGES_JSON
from .memory import MemoryEdgeStore
from .utils import deserialize_edge, serialize_edge

logger = logging.getLogger(__name__)


async def load_json_file(file_path: str) -> Dict[str, Any]:
    """
    Load a JSON document asynchronously.

    Raises:
        OSError: If file reading fails
        json.JSONDecodeError: If JSON parsing fails
    """
    async with aiofiles.open(file_path, "r") as f:
        return json.loads(await f.read())


async def save_json_file(file_path: str, data: Dict[str, Any]) -> None:
    """
    Write a JSON document atomically.

    The document goes to a temporary sibling first and replaces the target
    in one rename, so readers see either the old or the new file.
    """
    tmp_path = f"{file_path}.tmp"
    async with aiofiles.open(tmp_path, "w") as f:
        await f.write(json.dumps(data, indent=2))
    os.replace(tmp_path, file_path)


class JsonEdgeStore(MemoryEdgeStore):
    """
    Edge store persisted to a single JSON file.

    Edges are served from memory; every mutation rewrites the file before
    the in-memory state changes, so a failed write leaves both unchanged.

    Attributes:
        storage_dir (str): Directory where the JSON file is stored
        edges_file (str): Path to the edges JSON file
    """

    def __init__(self, storage_dir: str):
        """
        Initialize JSON edge storage.

        Args:
            storage_dir: Directory for storing the JSON file
        """
        super().__init__()
        self.storage_dir = storage_dir
        self.edges_file = os.path.join(storage_dir, EDGES_JSON)

    async def initialize(self) -> None:
        """
        Load existing edges from the JSON file.

        A missing file means an empty store.

        Raises:
            StorageError: If the file cannot be read or is not a valid edge file
        """
        async with self._lock:
            await self._load()

    async def _load(self) -> None:
        if not os.path.exists(self.edges_file):
            self._replace_all([], 1)
            logger.info(f"No edge file at {self.edges_file}, starting empty")
            return
        try:
            document = await load_json_file(self.edges_file)
            validate_edge_file(document)
            edges = [deserialize_edge(record) for record in document["edges"]]
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to load edges: {str(e)}")
            raise StorageError(f"Failed to load edges: {str(e)}") from e
        self._replace_all(edges, document["next_id"])
        logger.info(f"Loaded {len(edges)} edges from {self.edges_file}")

    async def cleanup(self) -> None:
        """
        Release resources.

        The in-memory copy mirrors the file and holds no handles, so it is
        kept; writes after cleanup still extend the full edge set.
        """
        logger.debug(f"Cleaned up JSON edge storage at {self.edges_file}")

    async def backup(self, backup_dir: str) -> None:
        """
        Copy the edge file into backup_dir.

        Raises:
            StorageError: If backup fails
        """
        try:
            if os.path.exists(self.edges_file):
                os.makedirs(backup_dir, exist_ok=True)
                shutil.copy2(self.edges_file, os.path.join(backup_dir, EDGES_JSON))
        except OSError as e:
            logger.error(f"Failed to create backup: {str(e)}")
            raise StorageError(f"Backup creation failed: {str(e)}") from e

    async def restore_from_backup(self, backup_dir: str) -> None:
        """
        Replace the edge file with the copy in backup_dir and reload it.

        Raises:
            StorageError: If restore fails
        """
        backup_path = os.path.join(backup_dir, EDGES_JSON)
        if not os.path.exists(backup_path):
            raise StorageError(f"No edge backup found in {backup_dir}")
        async with self._lock:
            try:
                shutil.copy2(backup_path, self.edges_file)
            except OSError as e:
                logger.error(f"Failed to restore edges: {str(e)}")
                raise StorageError(f"Backup restoration failed: {str(e)}") from e
            await self._load()

    async def _write(self, edges: List[Edge], next_id: int) -> None:
        document = {"next_id": next_id, "edges": [serialize_edge(edge) for edge in edges]}
        try:
            os.makedirs(self.storage_dir, exist_ok=True)
            await save_json_file(self.edges_file, document)
        except (OSError, TypeError) as e:
            logger.error(f"Failed to persist edges: {str(e)}")
            raise StorageError(f"Edge persistence failed: {str(e)}") from e
        logger.debug(f"Persisted {len(edges)} edges to {self.edges_file}")

    async def _persist_insert(self, edge: Edge) -> None:
        await self._write([*self._edges.values(), edge], int(edge.id) + 1)

    async def _persist_edges(self, edges: List[Edge], next_id: int) -> None:
        await self._write(edges, next_id)
