# services/active_order/src/active_order/interfaces.py
"""
Storage-agnostic interfaces that define the contract between active order
resolution and the session/order storage implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .models import Order, RequestContext, Session


class SessionStoreInterface(ABC):
    """
    Capability to change which order a session points at.

    Holding an implementation of this interface is what grants write access
    to ``Session.active_order_id``. Both operations are idempotent.
    """

    @abstractmethod
    async def set_active_order(
        self, ctx: RequestContext, session: Session, order: Order
    ) -> None:
        """
        Bind an order onto the session.

        Args:
            ctx: Current request context
            session: Session to update
            order: Order to reference
        """
        pass

    @abstractmethod
    async def unset_active_order(self, ctx: RequestContext, session: Session) -> None:
        """
        Clear the session's order reference. Safe when already clear.

        Args:
            ctx: Current request context
            session: Session to update
        """
        pass


class OrderRepositoryInterface(ABC):
    """
    Abstract interface for order storage backends.
    """

    @abstractmethod
    async def find_by_id(
        self, ctx: RequestContext, order_id: str, channel_id: str
    ) -> Optional[Order]:
        """
        Point lookup filtered by channel membership.

        Args:
            ctx: Current request context
            order_id: Order identifier
            channel_id: Channel the order must belong to

        Returns:
            The order, or None when missing or not in the channel
        """
        pass

    @abstractmethod
    async def find_active_for_user(
        self, ctx: RequestContext, user_id: str
    ) -> Optional[Order]:
        """
        The user's current active order, as defined by the backend.

        Args:
            ctx: Current request context
            user_id: Owning user

        Returns:
            At most one canonical order, or None
        """
        pass

    @abstractmethod
    async def create(self, ctx: RequestContext, user_id: Optional[str]) -> Order:
        """
        Create and persist a new active order in the context's channel.

        Args:
            ctx: Current request context
            user_id: Owning user, None for a guest order

        Returns:
            The new order
        """
        pass
