from __future__ import annotations
from typing import Any, Dict, Optional


# Behavior tracking mixin lives separate from the base client.
class BehaviorMixin:
    def track(self, key: Optional[str] = None, properties: Optional[Dict[str, Any]] = None) -> Any:
        """
        Record a tracked event (POST /behavior).

        The client's stored session id goes into the body when set, and
        properties are then sent as given. Without a stored id, a non-empty
        "sessionId" inside properties is lifted to the top level of the body
        instead. The caller's dict is left untouched.
        """
        self._require(key, "Must pass a key to track.")

        body: Dict[str, Any] = {"key": key}
        if properties is not None:
            properties = dict(properties)

        if self.session_id:
            body["sessionId"] = self.session_id
        elif properties and properties.get("sessionId"):
            body["sessionId"] = properties.pop("sessionId")
            # Nothing left once the id is lifted out
            if not properties:
                properties = None

        if properties is not None:
            body["properties"] = properties

        return self._request("POST", "behavior", json=body)
