"""Errors raised at the engine boundary."""

from __future__ import annotations


class ActionValidationError(ValueError):
    """A request was missing a field or asked for something the rules forbid."""


class SessionNotFoundError(LookupError):
    """No session exists under the given id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id
