"""Persistence adapters."""

from outpost.repository.json_store import JsonStateRepository

__all__ = ["JsonStateRepository"]
