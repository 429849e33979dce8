"""
Session storage interface for the Dungeon Master.

Uses a Protocol class to define the contract for session persistence.
Implementations can keep sessions in memory or in a real database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dungeon_master.models.session import GameSession


class SessionRepository(Protocol):
    """Interface for storing game sessions by id."""

    def create_session(self, session: GameSession) -> None:
        """Store a new session, replacing any session with the same id."""
        ...

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by id, or None if it does not exist."""
        ...

    def update_session(
        self,
        session_id: str,
        session: GameSession,
        expected_version: int | None = None,
    ) -> GameSession:
        """
        Replace a stored session.

        When expected_version is given, the write only succeeds if the
        stored session still has that version. Returns the stored copy
        with its new version.
        """
        ...

    def list_session_ids(self) -> list[str]:
        """Ids of all stored sessions."""
        ...
