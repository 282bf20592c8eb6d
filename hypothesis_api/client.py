from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import API_VERSION, DEVELOPMENT_API_URL

logger = logging.getLogger(__name__)

REFERENCE_URL = "https://www.notion.so/Hypothesis-js-Reference-3618ad6c2d5d4447a762a8f63f627efa"


class HypothesisError(Exception):
    """Base class for everything the client raises."""
    def __init__(self, message: str):
        super().__init__(f"[Hypothesis] {message}")
        self.message = message


class ConfigurationError(HypothesisError, ValueError):
    """Raised when the client is built without usable credentials or URL."""
    def __init__(self, message: str):
        super().__init__(f"{message} See {REFERENCE_URL}.")


class ValidationError(HypothesisError, ValueError):
    """Raised before any request when a required argument is missing."""


class TransportError(HypothesisError):
    """Raised when the request fails on the network or the API answers non-2xx."""
    def __init__(
        self,
        message: str,
        status: int | None = None,
        error: str | None = None,
        validation_errors: Any | None = None,
        payload: Any | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.error = error
        self.validation_errors = validation_errors
        self.payload = payload


class _BaseClient:
    """
    Holds credentials, the current session identifier, the HTTP session and
    the low-level _request(). Feature mixins (behavior, etc.) subclass this.

    `session` is the underlying requests.Session; `session_id` is the id of
    the customer currently logged in through this client.
    """
    def __init__(
        self,
        api_key: Optional[str],
        *,
        session_id: Optional[str] = None,
        debug: bool = False,
        base_url: Optional[str] = None,
        timeout: float = 30,
        max_retries: int = 0,
        backoff_factor: float = 0.5,
    ):
        if not api_key:
            raise ConfigurationError("A valid API key is required.")

        base_url = (base_url or DEVELOPMENT_API_URL).strip()
        if not base_url.startswith("http"):
            raise ConfigurationError("base_url must include scheme, e.g. https://api.hypothesis.app")

        self.api_key = api_key
        self.session_id = session_id
        self.debug = debug
        self.base_url = f"{base_url.rstrip('/')}/{API_VERSION}"
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-api-key": api_key,
        })

        # Off by default; callers opt in for transient 5xx/connection failures.
        retry = Retry(
            total=max_retries,
            read=max_retries,
            connect=max_retries,
            status=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset({"GET", "POST", "PUT", "DELETE"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _request(self, method: str, path: str, *, json: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        body = json if json is not None else {}

        if self.debug:
            logger.info(
                "( Hypothesis ) %s",
                {"method": method, "url": url, "headers": {"x-api-key": self.api_key}, "data": body},
            )

        try:
            resp = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Hypothesis API %s %s failed: %s", method, url, exc)
            raise TransportError(f"Hypothesis API {method} {url} failed: {exc}") from exc

        if not (200 <= resp.status_code < 300):
            try:
                payload = resp.json()
            except ValueError:
                payload = {"text": resp.text}
            detail = self._unwrap(payload)
            if not isinstance(detail, dict):
                detail = {}
            error = detail.get("error")
            validation_errors = detail.get("validationErrors")

            logger.warning("[%s] %s", resp.status_code, error)
            if self.debug:
                logger.info("( Hypothesis ) %s", error)
                logger.info("( Hypothesis ) %s", validation_errors)

            raise TransportError(
                f"Hypothesis API {method} {url} failed with {resp.status_code}",
                status=resp.status_code,
                error=error,
                validation_errors=validation_errors,
                payload=payload,
            )

        try:
            return self._unwrap(resp.json())
        except ValueError:
            # DELETE and friends may answer with an empty body
            return None

    @staticmethod
    def _unwrap(payload: Any) -> Any:
        """Pull the payload out of the API's {"data": ...} envelope."""
        if isinstance(payload, dict):
            return payload.get("data")
        return None

    @staticmethod
    def _require(value: Any, message: str) -> None:
        # An empty mapping is still a value; only None and "" count as missing.
        if value is None or value == "":
            raise ValidationError(message)
