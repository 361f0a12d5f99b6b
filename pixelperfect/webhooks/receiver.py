"""
Razorpay webhook receiver

Takes one delivery (method, headers, raw body) through
verify -> dispatch -> respond and returns the JSON body and status code.
Independent of Flask; razorpay_webhook.py adapts it to a route.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

from pixelperfect.config import WebhookSettings
from pixelperfect.errors import ConfigurationError, VerificationError
from pixelperfect.models import WebhookEvent
from pixelperfect.services.notification_service import Notifier
from pixelperfect.webhooks.dispatcher import EventDispatcher
from pixelperfect.webhooks.signature import verify_signature

logger = logging.getLogger(__name__)

Response = Tuple[Dict[str, Any], int]


class EventStore(Protocol):
    def save(self, event: str, payload: Mapping[str, Any]) -> None:
        ...


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class WebhookReceiver:
    def __init__(
        self,
        settings: WebhookSettings,
        dispatcher: EventDispatcher,
        notifier: Notifier,
        store: Optional[EventStore] = None,
    ):
        self.settings = settings
        self.dispatcher = dispatcher
        self.notifier = notifier
        self.store = store

    def handle(self, method: str, headers: Mapping[str, str], body: bytes) -> Response:
        """Process one webhook delivery"""
        if method.upper() != "POST":
            return {"error": "Method not allowed"}, 405

        logger.info("Webhook received at: %s", _now())
        try:
            return self._process(headers, body), 200
        except ConfigurationError as e:
            logger.error("Webhook secret not configured")
            return {"error": "Webhook secret not configured", "message": str(e)}, 500
        except VerificationError:
            logger.error("Invalid webhook signature")
            return {"error": "Invalid webhook signature"}, 400
        except Exception as e:
            logger.exception("Webhook processing error")
            self._send_error_notification(e, body)
            return {
                "error": "Internal server error",
                "message": "Webhook processing failed",
                "timestamp": _now(),
            }, 500

    def _process(self, headers: Mapping[str, str], body: bytes) -> Dict[str, Any]:
        signature = headers.get(self.settings.signature_header)
        if not verify_signature(body, signature, self.settings.secret):
            raise VerificationError("Signature mismatch")

        event = WebhookEvent.from_body(body)
        logger.info("Processing event: %s (subscription %s)", event.event, event.subscription_id or "N/A")

        result = self.dispatcher.dispatch(event.event, event.payload)
        if self.store is not None:
            self.store.save(event.event, event.payload)

        logger.info("Event %s processed successfully", event.event)
        return {
            "received": True,
            "event": event.event,
            "status": "processed",
            "timestamp": _now(),
            "result": result.to_dict(),
        }

    def _send_error_notification(self, error: Exception, body: bytes) -> None:
        """Best effort; never masks the original failure"""
        try:
            data = json.loads(body) if body else {}
            if not isinstance(data, dict):
                data = {}
            payload = data.get("payload") or {}
            subscription = (payload.get("subscription") or {}).get("entity") or {}
        except (ValueError, AttributeError):
            data, subscription = {}, {}

        try:
            self.notifier.notify("webhook_error", {
                "message": str(error),
                "error_type": type(error).__name__,
                "timestamp": _now(),
                "webhook_event": data.get("event") or "unknown",
                "subscription_id": subscription.get("id") or "N/A",
            })
        except Exception:
            logger.exception("Failed to send error notification")
