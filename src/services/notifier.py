"""
Contract for the realtime transport.

The service only knows user IDs. Finding the live session of a user (and actually pushing) is the transport's job.
"""

from typing import Any, Protocol


class SessionNotifier(Protocol):
    def push(self, user_id: str, payload: dict[str, Any]) -> None:
        """Deliver payload to the live session of user_id (if any)."""
        ...


class NullNotifier:
    """Used when no realtime transport is wired in: the opponent picks up the new round by polling."""

    def push(self, user_id: str, payload: dict[str, Any]) -> None:
        return None
