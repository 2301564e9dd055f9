"""Client configuration."""

from dataclasses import dataclass
from typing import Any

import httpx

from vault_api_client.env import VAULT_BACKOFF_MAX_TRIES, VAULT_USER_AGENT
from vault_api_client.retry import DEFAULT_BASE_DELAY, DEFAULT_MAX_DELAY

DEFAULT_BACKOFF_MAX_TRIES = 5


@dataclass(frozen=True)
class ApiClientConfiguration:
    """
    Immutable client settings, fixed at construction.

    backoff_max_tries counts retries after the first attempt; 0 disables
    retrying. logger is any structlog-style logger; None uses the
    package logger. transport replaces the network send, mainly for tests.
    """

    backoff_max_tries: int = DEFAULT_BACKOFF_MAX_TRIES
    logger: Any = None
    user_agent: str | None = None
    transport: httpx.BaseTransport | None = None
    backoff_base_delay: float = DEFAULT_BASE_DELAY
    backoff_max_delay: float = DEFAULT_MAX_DELAY

    def __post_init__(self) -> None:
        if self.backoff_max_tries < 0:
            raise ValueError("backoff_max_tries must be a non-negative integer")
        if self.backoff_base_delay < 0:
            raise ValueError("backoff_base_delay must not be negative")
        if self.backoff_max_delay < self.backoff_base_delay:
            raise ValueError("backoff_max_delay must not be lower than backoff_base_delay")

    @classmethod
    def from_env(cls, **overrides: Any) -> "ApiClientConfiguration":
        """Load configuration from environment, with keyword overrides."""
        values: dict[str, Any] = {
            "backoff_max_tries": VAULT_BACKOFF_MAX_TRIES.get_int(DEFAULT_BACKOFF_MAX_TRIES),
            "user_agent": VAULT_USER_AGENT.get_str() or None,
        }
        values.update(overrides)
        return cls(**values)
