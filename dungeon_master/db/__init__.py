"""
Session storage for the Dungeon Master.

Provides the SessionRepository interface and an in-memory
implementation. Sessions are not persisted across restarts.
"""

from __future__ import annotations

from dungeon_master.db.interfaces import SessionRepository
from dungeon_master.db.memory import (
    ConcurrentUpdateError,
    InMemorySessionRepository,
    generate_session_id,
)

__all__ = [
    "ConcurrentUpdateError",
    "InMemorySessionRepository",
    "SessionRepository",
    "generate_session_id",
]
