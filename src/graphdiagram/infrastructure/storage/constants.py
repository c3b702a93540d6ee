"""
Constants for the storage backends.

This module defines:
- File names
- SQL schema definitions
- Common SQL queries
"""

# File names
EDGES_JSON = "edges.json"
STORAGEDB = "storage.db"

# SQL Schema Definitions

# The UNIQUE constraint is the insert-if-absent guarantee for concurrent writers.
EDGE_SCHEMA = """
CREATE TABLE IF NOT EXISTS edges (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    departure TEXT NOT NULL,
    destination TEXT NOT NULL,
    directed INTEGER NOT NULL,
    cost INTEGER NOT NULL,
    comment TEXT NOT NULL,
    created_at TEXT NOT NULL,
    UNIQUE (departure, destination, directed, cost, comment)
);
CREATE INDEX IF NOT EXISTS idx_edges_departure ON edges (departure);
CREATE INDEX IF NOT EXISTS idx_edges_destination ON edges (destination);
CREATE TABLE IF NOT EXISTS store_meta (
    key TEXT PRIMARY KEY,
    value INTEGER NOT NULL
);
INSERT OR IGNORE INTO store_meta (key, value) VALUES ('revision', 0);
"""

# Edge queries
EDGE_COLUMNS = "id, departure, destination, directed, cost, comment, created_at"
SELECT_EDGES = f"SELECT {EDGE_COLUMNS} FROM edges"
SELECT_EDGE_BY_ID = f"SELECT {EDGE_COLUMNS} FROM edges WHERE id = ?"
INSERT_EDGE = """
INSERT INTO edges (departure, destination, directed, cost, comment, created_at)
VALUES (?, ?, ?, ?, ?, ?)
"""
DELETE_EDGE = "DELETE FROM edges WHERE id = ?"
DELETE_NODE_EDGES = "DELETE FROM edges WHERE departure = ? OR destination = ?"
ORDER_BY_ID = " ORDER BY id"

# Revision queries
SELECT_REVISION = "SELECT value FROM store_meta WHERE key = 'revision'"
BUMP_REVISION = "UPDATE store_meta SET value = value + 1 WHERE key = 'revision'"
