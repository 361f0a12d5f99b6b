"""
Data models

Key Models:
- WebhookEvent: one Razorpay webhook delivery (event name, payload, created_at)
- HandlerResult: what an event handler reports back to the webhook caller
- ContactSubmission: a validated contact form message

Nothing here is persisted; every request builds its own instances.
"""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


class HandlerStatus(enum.Enum):
    SUCCESS = "success"
    IGNORED = "ignored"


@dataclass(frozen=True)
class WebhookEvent:
    event: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    created_at: Optional[int] = None

    @classmethod
    def from_body(cls, body: bytes) -> "WebhookEvent":
        """Decode a raw webhook body"""
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError("Webhook body must be a JSON object")
        return cls(
            event=data.get("event") or "",
            payload=data.get("payload") or {},
            created_at=data.get("created_at"),
        )

    @property
    def subscription_id(self) -> Optional[str]:
        # payload shape is only guaranteed for the subscription.* events
        if not isinstance(self.payload, Mapping):
            return None
        subscription = self.payload.get("subscription")
        if not isinstance(subscription, Mapping):
            return None
        entity = subscription.get("entity")
        if not isinstance(entity, Mapping):
            return None
        return entity.get("id")


@dataclass
class HandlerResult:
    status: HandlerStatus
    message: str
    subscription_id: Optional[str] = None
    payment_id: Optional[str] = None
    amount: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for API responses"""
        result: Dict[str, Any] = {
            "status": self.status.value,
            "message": self.message,
        }
        if self.subscription_id is not None:
            result["subscription_id"] = self.subscription_id
        if self.payment_id is not None:
            result["payment_id"] = self.payment_id
        if self.amount is not None:
            result["amount"] = self.amount
        return result


@dataclass(frozen=True)
class ContactSubmission:
    name: str
    email: str
    message: str
    ip_address: Optional[str] = None

    def summary(self, limit: int = 100) -> Dict[str, Any]:
        """Loggable view of the submission, message truncated"""
        message = self.message
        if len(message) > limit:
            message = message[:limit] + "..."
        return {
            "name": self.name,
            "email": self.email,
            "message": message,
            "ip": self.ip_address,
        }
