# services/active_order/src/active_order/stores/memory_order_repository.py
"""
In-memory order storage.
"""

import secrets
import string
import uuid
from typing import Dict, List, Optional

from libs.cart_shared.logging import get_logger

from ..interfaces import OrderRepositoryInterface
from ..models import Order, RequestContext

logger = get_logger(__name__)

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_code(length: int = 16) -> str:
    """Random upper-case alphanumeric order reference."""
    return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))


class InMemoryOrderRepository(OrderRepositoryInterface):
    """
    Order repository backed by a dict, kept in insertion order.
    """

    def __init__(self, orders: Optional[List[Order]] = None):
        self._orders: Dict[str, Order] = {}
        for order in orders or []:
            self.add(order)

    def add(self, order: Order) -> Order:
        """Insert or replace an order."""
        self._orders[order.id] = order
        return order

    def get(self, order_id: str) -> Optional[Order]:
        """Unfiltered lookup by id."""
        return self._orders.get(order_id)

    def count(self) -> int:
        return len(self._orders)

    async def find_by_id(
        self, ctx: RequestContext, order_id: str, channel_id: str
    ) -> Optional[Order]:
        order = self._orders.get(order_id)
        if order is None or not order.in_channel(channel_id):
            return None
        return order

    async def find_active_for_user(
        self, ctx: RequestContext, user_id: str
    ) -> Optional[Order]:
        # most recently created active order of the user in the context's channel
        candidates = [
            order
            for order in self._orders.values()
            if order.customer_id == user_id
            and order.active
            and order.in_channel(ctx.channel_id)
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda order: order.created_at)

    async def create(self, ctx: RequestContext, user_id: Optional[str]) -> Order:
        order = Order(
            id=str(uuid.uuid4()),
            code=generate_order_code(),
            active=True,
            channel_ids={ctx.channel_id},
            customer_id=user_id,
        )
        self.add(order)
        logger.info(
            f"Created order {order.code} in channel {ctx.channel_id} "
            f"for {'user ' + user_id if user_id else 'guest'}"
        )
        return order
