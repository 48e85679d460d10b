# services/active_order/tests/helpers.py
"""Shared constants and collaborators for active order tests."""

import asyncio
from typing import Optional

from active_order.models import Order, RequestContext
from active_order.stores.memory_order_repository import InMemoryOrderRepository

CHANNEL = "web"
OTHER_CHANNEL = "wholesale"


class SlowOrderRepository(InMemoryOrderRepository):
    """In-memory repository that yields to the event loop on every call."""

    async def find_active_for_user(
        self, ctx: RequestContext, user_id: str
    ) -> Optional[Order]:
        await asyncio.sleep(0)
        return await super().find_active_for_user(ctx, user_id)

    async def create(self, ctx: RequestContext, user_id: Optional[str]) -> Order:
        await asyncio.sleep(0)
        return await super().create(ctx, user_id)
