"""In-memory registry of order sessions."""

import logging
from datetime import date
from typing import Callable

from .errors import SessionNotFoundError
from .models import ShopConfig
from .session import OrderSession
from .summary import ShareTarget

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Keeps order sessions by ID for the lifetime of the process.

    Nothing is written to disk; sessions vanish on exit or removal.
    """

    def __init__(
        self,
        config: ShopConfig,
        share: ShareTarget | None = None,
        today: Callable[[], date] | None = None,
    ):
        """
        Initialize SessionStore.

        Args:
            config: Shop config handed to every new session.
            share: Share collaborator used when a session sends its order.
            today: Clock override (for testing).
        """
        self.config = config
        self.share = share
        self._today = today
        self._sessions: dict[str, OrderSession] = {}

    def create(self) -> OrderSession:
        """Create and register a new session."""
        session = OrderSession.create(self.config, share=self.share, today=self._today)
        self._sessions[session.id] = session
        logger.debug("Created session %s", session.id)
        return session

    def get(self, session_id: str) -> OrderSession:
        """
        Get a session by ID.

        Raises:
            SessionNotFoundError: If the session doesn't exist.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def list_sessions(self) -> list[OrderSession]:
        return list(self._sessions.values())

    def remove(self, session_id: str) -> OrderSession:
        """
        Remove a session.

        Raises:
            SessionNotFoundError: If the session doesn't exist.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        logger.debug("Removed session %s", session_id)
        return session

    def clear(self) -> int:
        """Remove all sessions. Returns how many were removed."""
        count = len(self._sessions)
        self._sessions.clear()
        return count

    def __len__(self) -> int:
        return len(self._sessions)
