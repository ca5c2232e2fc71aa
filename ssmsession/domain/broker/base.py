"""
Protocol for the session broker client.
"""

from typing import Any, Protocol

from ssmsession.domain.types import SessionRequest


class SessionBroker(Protocol):
    """Remote capability that authorizes a session and returns its descriptor."""

    region: str
    endpoint: str

    def start_session(self, request: SessionRequest) -> dict[str, Any]:
        """
        Start a session on the broker.

        Args:
            request: Target, optional document name and parameters

        Returns:
            Opaque session descriptor (SessionId, TokenValue, StreamUrl, ...)
        """
        ...
