"""Utility packages for the graph diagram system."""
