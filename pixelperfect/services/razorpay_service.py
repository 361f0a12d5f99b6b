"""Razorpay helper functions.

Subscription creation over the Razorpay REST API. Checkout itself runs in the
browser widget; webhook processing is in pixelperfect/webhooks.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

import requests

from pixelperfect.config import GatewaySettings
from pixelperfect.errors import ConfigurationError, GatewayError


class SubscriptionGateway(Protocol):
    def create_subscription(self, plan_id: str, options: Mapping[str, Any]) -> Dict[str, Any]:
        ...


class RazorpayClient:
    """Minimal Razorpay API client authenticated with the key id and secret"""

    def __init__(self, settings: GatewaySettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()
        self.session.auth = (settings.key_id, settings.key_secret)

    def _post(self, path: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        if not self.settings.configured:
            raise ConfigurationError("Payment system not properly configured")

        response = self.session.post(
            f"{self.settings.api_base}{path}",
            json=dict(payload),
            timeout=self.settings.timeout,
        )
        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            error = body.get("error") if isinstance(body, dict) else None
            if not isinstance(error, dict):
                error = {"description": response.text[:200]}
            raise GatewayError(response.status_code, error)
        return response.json()

    def create_subscription(self, plan_id: str, options: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a subscription for ``plan_id``; returns Razorpay's subscription entity"""
        payload = {"plan_id": plan_id}
        payload.update(options)
        return self._post("/subscriptions", payload)
