# services/active_order/src/active_order/app.py
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from libs.cart_shared.errors import InternalServerError, not_found_error, service_error
from libs.cart_shared.logging import configure_logging, get_logger
from libs.cart_shared.metrics import Metrics
from libs.cart_shared.middleware import CorrelationIdMiddleware, MetricsMiddleware
from libs.cart_shared.models import HealthResponse, HealthStatus

from .config import config
from .locks import SessionLockRegistry
from .models import ActiveOrderResponse, ActiveOrderResult, RequestContext, Session
from .resolver import ActiveOrderResolver
from .stores.memory_order_repository import InMemoryOrderRepository
from .stores.memory_session_store import InMemorySessionStore

configure_logging(config.log_level)
logger = get_logger(__name__)


app = FastAPI(
    title="Active Order Service",
    description="Resolves the order a shopping session is currently operating on",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[config.session_header],
)
app.add_middleware(MetricsMiddleware, exclude_paths=["/health"])
app.add_middleware(CorrelationIdMiddleware)

_session_store = InMemorySessionStore()
_order_repository = InMemoryOrderRepository()
_session_locks = SessionLockRegistry()


def get_session_store() -> InMemorySessionStore:
    """
    Dependency provider for the session store.
    In tests, this can be overridden to provide a fresh store.
    """
    return _session_store


def get_order_repository() -> InMemoryOrderRepository:
    """Dependency provider for the order repository."""
    return _order_repository


def get_session_locks() -> SessionLockRegistry:
    return _session_locks


def get_resolver(
    session_store: InMemorySessionStore = Depends(get_session_store),
    order_repository: InMemoryOrderRepository = Depends(get_order_repository),
) -> ActiveOrderResolver:
    return ActiveOrderResolver(session_store, order_repository)


def _build_context(request: Request, session: Optional[Session]) -> RequestContext:
    return RequestContext(
        session=session,
        channel_id=request.headers.get(config.channel_header) or config.default_channel_id,
        active_user_id=request.headers.get(config.user_header) or None,
        correlation_id=getattr(request.state, "correlation_id", None),
    )


def get_request_context(
    request: Request,
    session_store: InMemorySessionStore = Depends(get_session_store),
) -> RequestContext:
    """
    Build the request context from headers, issuing a session if needed.

    Used where the request may start a cart; the new token is returned to
    the client in the session header.
    """
    session = session_store.get_or_create(request.headers.get(config.session_header))
    return _build_context(request, session)


def get_lookup_context(
    request: Request,
    session_store: InMemorySessionStore = Depends(get_session_store),
) -> RequestContext:
    """
    Build the request context for read-only requests.

    Unknown or missing tokens leave ``session`` unset; nothing is stored.
    """
    token = request.headers.get(config.session_header)
    return _build_context(request, session_store.get(token) if token else None)


async def _resolve(
    resolver: ActiveOrderResolver,
    locks: SessionLockRegistry,
    ctx: RequestContext,
    create_if_not_exists: bool,
) -> ActiveOrderResult:
    try:
        if config.session_locking and ctx.session is not None:
            async with locks.hold(ctx.session.token):
                return await resolver.resolve(ctx, create_if_not_exists)
        return await resolver.resolve(ctx, create_if_not_exists)
    except InternalServerError as e:
        logger.error(f"Active order resolution misused: {e} {ctx.to_dict()}")
        raise service_error(e.error_code)
    except Exception as e:
        logger.error(f"Error resolving active order {ctx.to_dict()}: {e}", exc_info=e)
        raise service_error("Active order could not be resolved")


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health(
    session_store: InMemorySessionStore = Depends(get_session_store),
    order_repository: InMemoryOrderRepository = Depends(get_order_repository),
):
    """
    Service health check endpoint.
    Returns session and order counts plus resolution counters.
    """
    return HealthResponse(
        status=HealthStatus.OK,
        version=app.version,
        details={
            "session_count": len(session_store.get_all_tokens()),
            "order_count": order_repository.count(),
            "session_locking": config.session_locking,
            "resolutions": Metrics.snapshot("active_order_"),
        },
    )


@app.get(
    "/active-order",
    response_model=ActiveOrderResponse,
    tags=["active-order"],
    operation_id="get_active_order",
)
async def get_active_order(
    response: Response,
    ctx: RequestContext = Depends(get_lookup_context),
    resolver: ActiveOrderResolver = Depends(get_resolver),
    locks: SessionLockRegistry = Depends(get_session_locks),
):
    """
    Return the active order of the session without creating one.

    Responds with 404 when the session is unknown or has no cart yet.
    """
    if ctx.session is None:
        raise not_found_error(
            "active order",
            ctx.correlation_id or "request",
            "No session; start a cart with POST /active-order",
        )
    response.headers[config.session_header] = ctx.session.token
    result = await _resolve(resolver, locks, ctx, False)
    if not result.found:
        raise not_found_error(
            "active order", ctx.session.token, "No cart has been started yet"
        )
    return ActiveOrderResponse.from_result(result, ctx)


@app.post(
    "/active-order",
    response_model=ActiveOrderResponse,
    tags=["active-order"],
    operation_id="get_or_create_active_order",
)
async def get_or_create_active_order(
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
    resolver: ActiveOrderResolver = Depends(get_resolver),
    locks: SessionLockRegistry = Depends(get_session_locks),
):
    """
    Return the active order of the session, creating one if none exists.
    """
    response.headers[config.session_header] = ctx.session.token
    result = await _resolve(resolver, locks, ctx, True)
    return ActiveOrderResponse.from_result(result, ctx)
