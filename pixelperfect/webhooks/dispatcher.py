"""
Razorpay subscription event handlers and the registry that routes to them.

Handlers only read the entity ids out of the payload and report back. They are
the place to wire persistence and customer notifications once those exist;
Razorpay retries deliveries on non-2xx, so whatever goes here must tolerate
seeing the same event twice.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from pixelperfect.models import HandlerResult, HandlerStatus

logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any]], HandlerResult]


def _entity(payload: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    return payload[name]["entity"]


def _subscription_result(payload: Mapping[str, Any], message: str) -> HandlerResult:
    subscription = _entity(payload, "subscription")
    return HandlerResult(
        status=HandlerStatus.SUCCESS,
        message=message,
        subscription_id=subscription["id"],
    )


def handle_subscription_authenticated(payload):
    """Customer authorised the mandate; first charge not yet taken"""
    result = _subscription_result(payload, "Subscription authenticated successfully")
    logger.info("Subscription authenticated: %s", result.subscription_id)
    return result


def handle_subscription_activated(payload):
    """Subscription is live, access should be enabled"""
    result = _subscription_result(payload, "Subscription activated successfully")
    logger.info("Subscription activated: %s", result.subscription_id)
    return result


def handle_subscription_charged(payload):
    """Recurring payment captured"""
    payment = _entity(payload, "payment")
    subscription = _entity(payload, "subscription")
    amount = payment.get("amount", 0) / 100

    logger.info(
        "Payment successful: %s for subscription: %s (amount %.2f)",
        payment["id"], subscription["id"], amount,
    )
    return HandlerResult(
        status=HandlerStatus.SUCCESS,
        message="Payment recorded successfully",
        subscription_id=subscription["id"],
        payment_id=payment["id"],
        amount=amount,
    )


def handle_subscription_paused(payload):
    result = _subscription_result(payload, "Subscription paused successfully")
    logger.info("Subscription paused: %s", result.subscription_id)
    return result


def handle_subscription_resumed(payload):
    result = _subscription_result(payload, "Subscription resumed successfully")
    logger.info("Subscription resumed: %s", result.subscription_id)
    return result


def handle_subscription_pending(payload):
    """A charge failed and Razorpay will retry it"""
    result = _subscription_result(payload, "Payment retry pending")
    logger.info("Payment retry pending: %s", result.subscription_id)
    return result


def handle_subscription_halted(payload):
    """Retries exhausted"""
    result = _subscription_result(payload, "Subscription halted successfully")
    logger.warning("Subscription halted: %s", result.subscription_id)
    return result


def handle_subscription_cancelled(payload):
    result = _subscription_result(payload, "Subscription cancelled successfully")
    logger.info("Subscription cancelled: %s", result.subscription_id)
    return result


def handle_subscription_completed(payload):
    result = _subscription_result(payload, "Subscription completed successfully")
    logger.info("Subscription completed: %s", result.subscription_id)
    return result


def handle_subscription_updated(payload):
    result = _subscription_result(payload, "Subscription updated successfully")
    logger.info("Subscription updated: %s", result.subscription_id)
    return result


SUBSCRIPTION_HANDLERS: Dict[str, Handler] = {
    "subscription.authenticated": handle_subscription_authenticated,
    "subscription.activated": handle_subscription_activated,
    "subscription.charged": handle_subscription_charged,
    "subscription.paused": handle_subscription_paused,
    "subscription.resumed": handle_subscription_resumed,
    "subscription.pending": handle_subscription_pending,
    "subscription.halted": handle_subscription_halted,
    "subscription.cancelled": handle_subscription_cancelled,
    "subscription.completed": handle_subscription_completed,
    "subscription.updated": handle_subscription_updated,
}


class EventDispatcher:
    """Routes an event name to its handler; unknown names are ignored"""

    def __init__(self, handlers: Optional[Mapping[str, Handler]] = None):
        self._handlers: Dict[str, Handler] = dict(
            SUBSCRIPTION_HANDLERS if handlers is None else handlers
        )

    @property
    def events(self) -> Iterable[str]:
        return tuple(self._handlers)

    def register(self, event: str, handler: Handler) -> None:
        self._handlers[event] = handler

    def dispatch(self, event: str, payload: Mapping[str, Any]) -> HandlerResult:
        handler = self._handlers.get(event)
        if handler is None:
            logger.warning("Unhandled event type: %s", event)
            return HandlerResult(
                status=HandlerStatus.IGNORED,
                message=f"Event {event} received but not handled",
            )
        return handler(payload)
