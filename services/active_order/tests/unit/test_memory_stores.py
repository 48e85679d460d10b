# services/active_order/tests/unit/test_memory_stores.py

import pytest

from active_order.models import Session
from active_order.stores.memory_order_repository import generate_order_code
from helpers import CHANNEL, OTHER_CHANNEL


@pytest.mark.unit
class TestInMemorySessionStore:
    def test_get_or_create_generates_token(self, session_store):
        session = session_store.get_or_create()

        assert session.token
        assert session.active_order_id is None
        assert session_store.get(session.token) is session

    def test_get_or_create_returns_existing(self, session_store):
        first = session_store.get_or_create("abc")
        second = session_store.get_or_create("abc")

        assert first is second
        assert session_store.get_all_tokens() == ["abc"]

    @pytest.mark.asyncio
    async def test_set_is_idempotent(self, session_store, make_order, make_context, session):
        order = make_order("ord_1")
        ctx = make_context(session=session)

        await session_store.set_active_order(ctx, session, order)
        await session_store.set_active_order(ctx, session, order)

        assert session.active_order_id == "ord_1"
        assert session_store.get(session.token).active_order_id == "ord_1"

    @pytest.mark.asyncio
    async def test_unset_when_already_clear(self, session_store, make_context, session):
        ctx = make_context(session=session)

        await session_store.unset_active_order(ctx, session)
        await session_store.unset_active_order(ctx, session)

        assert session.active_order_id is None

    @pytest.mark.asyncio
    async def test_set_on_unknown_session_stores_it(self, session_store, make_order, make_context):
        session = Session("detached")

        await session_store.set_active_order(
            make_context(session=session), session, make_order("ord_1")
        )

        assert session_store.get("detached") is session
        assert session.active_order_id == "ord_1"

    def test_session_pointer_is_read_only(self, session):
        with pytest.raises(AttributeError):
            session.active_order_id = "ord_1"


@pytest.mark.unit
class TestInMemoryOrderRepository:
    @pytest.mark.asyncio
    async def test_find_by_id_filters_channel(self, order_repository, make_order, make_context):
        order = order_repository.add(make_order("ord_1", channels=(CHANNEL,)))
        ctx = make_context()

        assert await order_repository.find_by_id(ctx, "ord_1", CHANNEL) == order
        assert await order_repository.find_by_id(ctx, "ord_1", OTHER_CHANNEL) is None
        assert await order_repository.find_by_id(ctx, "missing", CHANNEL) is None

    @pytest.mark.asyncio
    async def test_find_by_id_returns_inactive_orders(
        self, order_repository, make_order, make_context
    ):
        order_repository.add(make_order("ord_1", active=False))

        order = await order_repository.find_by_id(make_context(), "ord_1", CHANNEL)

        assert order is not None
        assert order.active is False

    @pytest.mark.asyncio
    async def test_find_active_for_user_skips_inactive(
        self, order_repository, make_order, make_context
    ):
        active = order_repository.add(make_order("ord_1", customer_id="u1"))
        order_repository.add(make_order("ord_2", active=False, customer_id="u1"))

        found = await order_repository.find_active_for_user(make_context(), "u1")

        assert found == active
        assert await order_repository.find_active_for_user(make_context(), "u2") is None

    @pytest.mark.asyncio
    async def test_create(self, order_repository, make_context):
        ctx = make_context(channel_id=OTHER_CHANNEL)

        order = await order_repository.create(ctx, "u1")

        assert order.active is True
        assert order.channel_ids == {OTHER_CHANNEL}
        assert order.customer_id == "u1"
        assert len(order.code) == 16
        assert order_repository.get(order.id) == order
        assert order_repository.count() == 1

    def test_seeded_orders(self, make_order):
        from active_order.stores.memory_order_repository import InMemoryOrderRepository

        repo = InMemoryOrderRepository([make_order("a"), make_order("b")])

        assert repo.count() == 2

    def test_generate_order_code(self):
        code = generate_order_code(8)

        assert len(code) == 8
        assert code.isalnum() and code.upper() == code
