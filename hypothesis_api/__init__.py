from typing import Any, Optional

import pydantic

from .behavior import BehaviorMixin
from .client import (
    _BaseClient,
    ConfigurationError,
    HypothesisError,
    TransportError,
    ValidationError,
)
from .config import DEVELOPMENT_API_URL, PRODUCTION_API_URL, ClientSettings
from .customers import CustomersAPI

__version__ = "0.1.0"


# Public API class = mixins + base client
class HypothesisAPI(BehaviorMixin, _BaseClient):
    """
    Hypothesis customer-tracking client.

        api_key:     your Hypothesis API key (sent as x-api-key)
        session_id:  id of an already logged in customer, if any
        debug:       log every outgoing request and server error detail
        base_url:    API host, defaults to the local development server

    Calls block until the response arrives. Instances are not locked: two
    threads logging in and out through one client race on session_id and
    the last write wins.

    Example:
        api = HypothesisAPI("XXXXXXXX", base_url=PRODUCTION_API_URL)
        api.customers.login("customer-123")
        api.track("checkout", {"total": 42})
        api.customers.logout()
    """

    def __init__(self, api_key: Optional[str] = None, **options: Any):
        super().__init__(api_key, **options)
        self.customers = CustomersAPI(self)

    @classmethod
    def from_env(cls, **overrides: Any) -> "HypothesisAPI":
        """Build a client from HYPOTHESIS_* environment variables (or .env)."""
        try:
            settings = ClientSettings()
        except pydantic.ValidationError as exc:
            raise ConfigurationError(f"Invalid HYPOTHESIS_* settings: {exc}") from exc
        options = {
            "debug": settings.debug,
            "base_url": settings.api_url,
            "timeout": settings.timeout,
            "max_retries": settings.max_retries,
        }
        options.update(overrides)
        api_key = options.pop("api_key", None) or settings.api_key
        return cls(api_key, **options)


__all__ = [
    "HypothesisAPI",
    "HypothesisError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "ClientSettings",
    "DEVELOPMENT_API_URL",
    "PRODUCTION_API_URL",
]
