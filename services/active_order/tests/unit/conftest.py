# services/active_order/tests/unit/conftest.py

# Unit test specific fixtures - mocked collaborators and in-memory stores

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from active_order.interfaces import OrderRepositoryInterface, SessionStoreInterface
from active_order.models import Order, RequestContext, Session
from active_order.resolver import ActiveOrderResolver
from active_order.stores.memory_order_repository import InMemoryOrderRepository
from active_order.stores.memory_session_store import InMemorySessionStore
from helpers import CHANNEL

_BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_order():
    """Factory for orders; later calls get later created_at values."""
    counter = {"n": 0}

    def _make(order_id, active=True, channels=(CHANNEL,), customer_id=None):
        counter["n"] += 1
        return Order(
            id=order_id,
            code=f"CODE-{order_id.upper()}",
            active=active,
            channel_ids=set(channels),
            customer_id=customer_id,
            created_at=_BASE_TIME + timedelta(minutes=counter["n"]),
        )

    return _make


@pytest.fixture
def make_context():
    def _make(session=None, channel_id=CHANNEL, user_id=None):
        return RequestContext(
            session=session, channel_id=channel_id, active_user_id=user_id
        )

    return _make


@pytest.fixture
def mock_session_store():
    """Session store mock that records calls without touching sessions."""
    return AsyncMock(spec=SessionStoreInterface)


@pytest.fixture
def mock_order_repository():
    """Order repository mock where every lookup finds nothing by default."""
    mock = AsyncMock(spec=OrderRepositoryInterface)
    mock.find_by_id.return_value = None
    mock.find_active_for_user.return_value = None
    return mock


@pytest.fixture
def mocked_resolver(mock_session_store, mock_order_repository):
    return ActiveOrderResolver(mock_session_store, mock_order_repository)


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def order_repository():
    return InMemoryOrderRepository()


@pytest.fixture
def resolver(session_store, order_repository):
    return ActiveOrderResolver(session_store, order_repository)


@pytest.fixture
def session(session_store):
    return session_store.get_or_create("sess-1")


@pytest.fixture
def bound_session(session_store):
    """Factory for a stored session already pointing at an order id."""

    def _make(order_id, token="sess-bound"):
        return session_store.add(Session(token=token, active_order_id=order_id))

    return _make
