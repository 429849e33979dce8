"""
In-memory session storage.

Sessions live in a process-local dictionary and vanish on restart.
Every read and write copies the session so callers never share state
with the store.
"""

from __future__ import annotations

import logging
import secrets
import string
import threading
import time
from copy import deepcopy

from dungeon_master.models.session import GameSession

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


class ConcurrentUpdateError(RuntimeError):
    """A session changed between being read and being written back."""

    def __init__(self, session_id: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Session {session_id} was modified concurrently "
            f"(expected version {expected}, found {actual})"
        )
        self.session_id = session_id
        self.expected = expected
        self.actual = actual


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def generate_session_id() -> str:
    """Opaque id made of a random part and the current time in milliseconds."""
    random_part = "".join(secrets.choice(_BASE36) for _ in range(11))
    return random_part + _to_base36(int(time.time() * 1000))


class InMemorySessionRepository:
    """
    Thread-safe in-memory SessionRepository.

    Without expected_version, concurrent writers of the same session
    follow last-write-wins.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_session(self, session: GameSession) -> None:
        """Store a new session, replacing any session with the same id."""
        with self._lock:
            self._sessions[session.id] = deepcopy(session)
        logger.info("Created session %s for %s", session.id, session.character.name)

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by id, or None if it does not exist."""
        with self._lock:
            session = self._sessions.get(session_id)
            return deepcopy(session) if session else None

    def update_session(
        self,
        session_id: str,
        session: GameSession,
        expected_version: int | None = None,
    ) -> GameSession:
        """
        Replace a stored session and bump its version.

        Raises:
            ConcurrentUpdateError: If expected_version no longer matches
        """
        with self._lock:
            current = self._sessions.get(session_id)
            current_version = current.version if current else 0
            if expected_version is not None and expected_version != current_version:
                raise ConcurrentUpdateError(session_id, expected_version, current_version)

            stored = session.model_copy(deep=True, update={"version": current_version + 1})
            self._sessions[session_id] = stored
            logger.debug("Updated session %s to version %d", session_id, stored.version)
            return deepcopy(stored)

    def list_session_ids(self) -> list[str]:
        """Ids of all stored sessions."""
        with self._lock:
            return list(self._sessions)
