"""
Razorpay webhook handling: signature verification, event dispatch and the
receiver that ties them together.
"""
from .dispatcher import SUBSCRIPTION_HANDLERS, EventDispatcher
from .receiver import EventStore, WebhookReceiver
from .signature import compute_signature, verify_payment_signature, verify_signature

__all__ = [
    "SUBSCRIPTION_HANDLERS",
    "EventDispatcher",
    "EventStore",
    "WebhookReceiver",
    "compute_signature",
    "verify_payment_signature",
    "verify_signature",
]
