# services/active_order/src/active_order/stores/memory_session_store.py
"""
In-memory session storage.

Sessions are kept in process memory keyed by token. In a multi-worker
deployment the state is not shared across workers.
"""

import uuid
from typing import Dict, List, Optional

from libs.cart_shared.logging import get_logger

from ..interfaces import SessionStoreInterface
from ..models import Order, RequestContext, Session

logger = get_logger(__name__)


class InMemorySessionStore(SessionStoreInterface):
    """
    Session store backed by a dict.

    This is the single writer of ``Session.active_order_id``; the order
    reference is changed in place on the stored session object, so every
    context holding that session sees the new binding.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def get(self, token: str) -> Optional[Session]:
        """
        Retrieve a session by token.

        Args:
            token: Session token

        Returns:
            Session if found, None otherwise
        """
        return self._sessions.get(token)

    def get_or_create(self, token: Optional[str] = None) -> Session:
        """
        Get or create a session.

        Args:
            token: Optional token to look up; a new one is generated when missing

        Returns:
            The stored session
        """
        if not token:
            token = uuid.uuid4().hex
        session = self._sessions.get(token)
        if session is None:
            session = Session(token=token)
            self._sessions[token] = session
            logger.debug(f"Created new session: {token}")
        return session

    def add(self, session: Session) -> Session:
        """Insert or replace a session, keeping its current order reference."""
        self._sessions[session.token] = session
        return session

    def get_all_tokens(self) -> List[str]:
        """Get all session tokens."""
        return list(self._sessions.keys())

    async def set_active_order(
        self, ctx: RequestContext, session: Session, order: Order
    ) -> None:
        stored = self._sessions.setdefault(session.token, session)
        stored._active_order_id = order.id
        session._active_order_id = order.id

    async def unset_active_order(self, ctx: RequestContext, session: Session) -> None:
        stored = self._sessions.get(session.token)
        if stored is not None:
            stored._active_order_id = None
        session._active_order_id = None
