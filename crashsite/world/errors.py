"""Errors raised by world generation."""
from __future__ import annotations

from typing import Sequence


class WorldGenerationError(RuntimeError):
    """Base error for the world generator."""


class ConfigurationError(WorldGenerationError, ValueError):
    """Raised when a map size or catalog entry is invalid."""


class UnknownMapSizeError(ConfigurationError, KeyError):
    """Raised when a map size id is not in the catalog."""

    def __init__(self, map_size_id: str, known: Sequence[str]) -> None:
        self.map_size_id = map_size_id
        self.known = tuple(known)
        super().__init__(f"Unknown map size '{map_size_id}' (expected one of: {', '.join(self.known)})")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.args[0]


class IncompleteGenerationError(WorldGenerationError):
    """Raised when a world could not be given any anchor structure."""

    def __init__(self, map_size_id: str, seeds: Sequence[int]) -> None:
        self.map_size_id = map_size_id
        self.seeds = tuple(seeds)
        tried = ", ".join(str(seed) for seed in self.seeds)
        super().__init__(f"No anchor structure could be placed on '{map_size_id}' map (seeds tried: {tried})")


__all__ = [
    "WorldGenerationError",
    "ConfigurationError",
    "UnknownMapSizeError",
    "IncompleteGenerationError",
]
