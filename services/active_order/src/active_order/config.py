"""Active order service configuration."""

from libs.cart_shared.config import BaseServiceConfig
from pydantic import AliasChoices, Field


class ActiveOrderConfig(BaseServiceConfig):
    """Active order service specific configuration."""

    # Service settings
    port: int = Field(8003, description="HTTP port (PORT)")

    # Channel used when a request carries no X-Channel-Id header
    default_channel_id: str = Field(
        "default",
        validation_alias=AliasChoices(
            "ACTIVE_ORDER_DEFAULT_CHANNEL_ID", "default_channel_id"
        ),
        description="Channel applied to requests without a channel header",
    )

    # Serialize resolutions per session token (single process only)
    session_locking: bool = Field(
        False,
        validation_alias=AliasChoices(
            "ACTIVE_ORDER_SESSION_LOCKING", "session_locking"
        ),
        description="Wrap each resolution in a per-session asyncio.Lock",
    )

    # Request headers
    session_header: str = Field("X-Session-Token")
    channel_header: str = Field("X-Channel-Id")
    user_header: str = Field("X-User-Id")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }


# Singleton instance
config = ActiveOrderConfig()
