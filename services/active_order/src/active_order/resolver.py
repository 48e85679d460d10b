# services/active_order/src/active_order/resolver.py
"""
Active order resolution.

Finds the order a session is currently operating on, repairing session
pointers left behind by orders that were finalized elsewhere.

Concurrent resolutions on the same session are not serialized here. Two
requests on a session without an order may both create one; the last
``set_active_order`` wins and the other order stays valid but unreferenced.
The API layer can opt into per-session locking (see ``locks``).
"""

from typing import Optional

from libs.cart_shared.errors import InternalServerError
from libs.cart_shared.logging import get_logger
from libs.cart_shared.metrics import Metrics

from .interfaces import OrderRepositoryInterface, SessionStoreInterface
from .models import ActiveOrderResult, Order, RequestContext, ResolutionOutcome

logger = get_logger(__name__)

NO_ACTIVE_SESSION = "error.no-active-session"


class ActiveOrderResolver:
    """
    Resolves the active order for a request context.
    """

    def __init__(
        self,
        session_store: SessionStoreInterface,
        order_repository: OrderRepositoryInterface,
    ):
        self.session_store = session_store
        self.order_repository = order_repository

    async def get_order(self, ctx: RequestContext) -> Optional[Order]:
        """Active order of the session, or None. Never creates an order."""
        result = await self.resolve(ctx, create_if_not_exists=False)
        return result.order

    async def get_or_create_order(self, ctx: RequestContext) -> Order:
        """Active order of the session, creating one when none exists."""
        result = await self.resolve(ctx, create_if_not_exists=True)
        return result.order

    async def resolve(
        self, ctx: RequestContext, create_if_not_exists: bool = False
    ) -> ActiveOrderResult:
        """
        Resolve the active order of ``ctx.session``.

        Args:
            ctx: Request context, must carry a session
            create_if_not_exists: Create an order when none can be found

        Returns:
            ActiveOrderResult tagged with how the order was established

        Raises:
            InternalServerError: If the context has no session
        """
        session = ctx.session
        if session is None:
            raise InternalServerError(
                NO_ACTIVE_SESSION, "Active order requested on a request without a session"
            )

        order = None
        repaired = False
        if session.active_order_id:
            order = await self.order_repository.find_by_id(
                ctx, session.active_order_id, ctx.channel_id
            )
            if order is not None and not order.in_channel(ctx.channel_id):
                order = None

        if order is not None and not order.active:
            # finalized without clearing the session, e.g. an interrupted checkout
            logger.info(
                f"Unsetting finalized order {order.id} from session {session.token}"
            )
            await self.session_store.unset_active_order(ctx, session)
            Metrics.counter("active_order_stale_pointer_repaired_total")
            order = None
            repaired = True

        if order is not None:
            return self._result(order, ResolutionOutcome.SESSION, repaired)

        outcome = ResolutionOutcome.NONE
        if ctx.active_user_id:
            order = await self.order_repository.find_active_for_user(
                ctx, ctx.active_user_id
            )
            if order is not None and not self._is_bindable(order, ctx):
                logger.warning(
                    f"Ignoring order {order.id} returned for user {ctx.active_user_id}: "
                    f"active={order.active}, channels={sorted(order.channel_ids)}, "
                    f"request channel={ctx.channel_id}"
                )
                order = None
            if order is not None:
                outcome = ResolutionOutcome.USER

        if order is None and create_if_not_exists:
            order = await self.order_repository.create(ctx, ctx.active_user_id)
            outcome = ResolutionOutcome.CREATED
            logger.debug(f"Created order {order.id} for session {session.token}")

        if order is not None:
            await self.session_store.set_active_order(ctx, session, order)
            logger.debug(f"Bound order {order.id} to session {session.token}")

        return self._result(order, outcome, repaired)

    @staticmethod
    def _is_bindable(order: Order, ctx: RequestContext) -> bool:
        return order.active and order.in_channel(ctx.channel_id)

    @staticmethod
    def _result(
        order: Optional[Order], outcome: ResolutionOutcome, repaired: bool
    ) -> ActiveOrderResult:
        Metrics.counter("active_order_resolutions_total", {"outcome": outcome.value})
        return ActiveOrderResult(
            order=order, outcome=outcome, repaired_stale_pointer=repaired
        )
