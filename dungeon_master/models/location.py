"""
World map location model.

Locations are static reference data; sessions only record
which ones have been visited.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, Field


class LocationType(str, Enum):
    TOWN = "town"
    DUNGEON = "dungeon"
    WILDERNESS = "wilderness"
    LANDMARK = "landmark"


class Location(BaseModel):
    """A node of the world graph."""

    id: str
    name: str
    description: str
    type: LocationType
    connections: list[str] = Field(default_factory=list)
    discovered: bool = False
    """Pre-seeded as known to every new character."""

    x: int = 0
    y: int = 0

    model_config = {"frozen": True}

    def is_accessible_from(
        self,
        visited: Iterable[str],
        discovered: Iterable[str] = (),
    ) -> bool:
        """
        Whether a character who has visited these locations may travel here.

        A location is reachable if it was already visited, or is connected
        to a visited or pre-discovered location.
        """
        visited = set(visited)
        if self.id in visited:
            return True
        known = visited | set(discovered)
        return any(connection in known for connection in self.connections)
