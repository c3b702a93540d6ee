"""Repositories wrapping edge storage with validation and query helpers."""

from .edge import EdgeRepository, EdgeValidator

__all__ = ["EdgeRepository", "EdgeValidator"]
