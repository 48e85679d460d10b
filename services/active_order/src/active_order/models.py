# services/active_order/src/active_order/models.py
"""
Models for sessions, orders and active order resolution.

``Session`` and ``RequestContext`` are plain Python objects that live for a
request (or, for sessions, across requests in the store). ``Order`` and the
API payloads are Pydantic models.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session:
    """
    Server-side session state keyed by a session token.

    ``active_order_id`` is read-only here. The session store is the only
    writer of the order reference (see ``stores.memory_session_store``).
    """

    __slots__ = ("token", "created_at", "_active_order_id")

    def __init__(
        self,
        token: str,
        active_order_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ):
        self.token = token
        self.created_at = created_at or _utcnow()
        self._active_order_id = active_order_id

    @property
    def active_order_id(self) -> Optional[str]:
        return self._active_order_id

    def __repr__(self) -> str:
        return f"Session(token={self.token!r}, active_order_id={self._active_order_id!r})"


class Order(BaseModel):
    """
    A persisted order as seen by active order resolution.

    Only the attributes that decide whether an order may be bound to a session
    are modelled: the active flag, channel membership and owning customer.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique order identifier")
    code: str = Field(..., description="Human-readable order reference")
    active: bool = Field(
        True, description="False once the order has completed checkout or been finalized"
    )
    channel_ids: Set[str] = Field(
        default_factory=set, description="Channels the order is visible in"
    )
    customer_id: Optional[str] = Field(
        None, description="Owning user, absent for guest orders"
    )
    created_at: datetime = Field(default_factory=_utcnow)

    def in_channel(self, channel_id: str) -> bool:
        return channel_id in self.channel_ids


@dataclass(frozen=True)
class RequestContext:
    """
    Request-level information passed into active order resolution.

    Attributes:
        session: Session of the request, absent on sessionless request paths
        channel_id: Sales channel the request is scoped to
        active_user_id: Authenticated user, absent for anonymous requests
        correlation_id: Tracing identifier used in logs
    """

    channel_id: str
    session: Optional[Session] = None
    active_user_id: Optional[str] = None
    correlation_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "session_token": self.session.token if self.session else None,
            "channel_id": self.channel_id,
            "active_user_id": self.active_user_id,
            "correlation_id": self.correlation_id,
        }


class ResolutionOutcome(str, Enum):
    """How the active order of a resolution was established."""

    SESSION = "session"  # session pointer was valid
    USER = "user"  # recovered from the authenticated user's active order
    CREATED = "created"
    NONE = "none"


class ActiveOrderResult(BaseModel):
    """
    Tagged result of a resolution.

    ``order`` is set for every outcome except ``NONE``.
    """

    model_config = ConfigDict(frozen=True)

    order: Optional[Order] = None
    outcome: ResolutionOutcome = ResolutionOutcome.NONE
    repaired_stale_pointer: bool = Field(
        False, description="A finalized order was unset from the session"
    )

    @property
    def found(self) -> bool:
        return self.order is not None


# API payloads


class ActiveOrderResponse(BaseModel):
    """Active order returned by the HTTP API."""

    order_id: str = Field(..., description="Unique order identifier")
    code: str = Field(..., description="Human-readable order reference")
    customer_id: Optional[str] = Field(None, description="Owning user, if any")
    channel_id: str = Field(..., description="Channel the order was resolved in")
    outcome: ResolutionOutcome = Field(
        ..., description="How the order was found: session, user or created"
    )
    session_token: str = Field(..., description="Session the order is bound to")

    @classmethod
    def from_result(
        cls, result: ActiveOrderResult, ctx: RequestContext
    ) -> "ActiveOrderResponse":
        return cls(
            order_id=result.order.id,
            code=result.order.code,
            customer_id=result.order.customer_id,
            channel_id=ctx.channel_id,
            outcome=result.outcome,
            session_token=ctx.session.token,
        )
