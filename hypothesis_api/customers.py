"""
Customer endpoints, exposed on the client as `api.customers` (and
`api.customers.bulk`). Login/logout also maintain the client's stored
session id.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Optional

from .client import ValidationError

if TYPE_CHECKING:
    from . import HypothesisAPI


class BulkCustomersAPI:
    """Bulk customer endpoints."""

    def __init__(self, client: "HypothesisAPI"):
        self.client = client

    def create(self, options: Optional[Dict[str, Any]] = None) -> Any:
        """Create many customers in one request (POST /customers/bulk)."""
        if not options or options.get("items") is None:
            raise ValidationError("Must pass a list of customers as items.")
        return self.client._request("POST", "customers/bulk", json=dict(options))


class CustomersAPI:
    """Customer endpoints."""

    def __init__(self, client: "HypothesisAPI"):
        self.client = client
        self.bulk = BulkCustomersAPI(client)

    def login(self, session_id: Optional[str] = None) -> Any:
        """Start a session (PUT /customers/login); remembers session_id on the client."""
        self.client._require(session_id, "Must pass a sessionId.")
        self.client.session_id = session_id
        return self.client._request("PUT", "customers/login", json={"sessionId": session_id})

    def logout(self, session_id: Optional[str] = None) -> Any:
        """End a session (PUT /customers/logout); forgets the stored id on success."""
        session_id = session_id or self.client.session_id
        self.client._require(session_id, "Must have a sessionId to logout.")
        result = self.client._request("PUT", "customers/logout", json={"sessionId": session_id})
        self.client.session_id = None
        return result

    def create(self, customer: Optional[Dict[str, Any]] = None) -> Any:
        self.client._require(customer, "Must pass a customer.")
        return self.client._request("POST", "customers", json=dict(customer))

    def update(self, session_id: Optional[str] = None, update: Optional[Dict[str, Any]] = None) -> Any:
        self.client._require(session_id, "Must pass a sessionId.")
        self.client._require(update, "Must pass an update for the customer.")
        return self.client._request("PUT", f"customers/{session_id}", json=dict(update))

    def delete(self, session_id: Optional[str] = None) -> Any:
        self.client._require(session_id, "Must pass a sessionId.")
        return self.client._request("DELETE", f"customers/{session_id}")

    def current(self) -> Dict[str, Optional[str]]:
        """The session id this client is currently tracking; no request is made."""
        return {"sessionId": self.client.session_id}
