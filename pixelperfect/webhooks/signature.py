"""Razorpay signature verification.

Razorpay signs the exact raw request body with HMAC-SHA256 keyed by the
webhook secret and sends the lowercase hex digest in X-Razorpay-Signature.
The checkout widget uses the same scheme over "<payment_id>|<subscription_id>"
keyed by the API key secret.
"""
from __future__ import annotations

import hashlib
import hmac
from typing import Optional, Union

from pixelperfect.errors import ConfigurationError


def compute_signature(secret: str, body: Union[bytes, str]) -> str:
    """Hex HMAC-SHA256 of ``body`` keyed by ``secret``"""
    if isinstance(body, str):
        body = body.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(body: Union[bytes, str], signature: Optional[str], secret: Optional[str]) -> bool:
    """Check ``signature`` against the body in constant time.

    Raises ConfigurationError when no secret is configured; a missing secret
    is a deployment problem, not a bad request.
    """
    if not secret:
        raise ConfigurationError("Please add WEBHOOK_SECRET to environment variables")
    if not signature or not isinstance(signature, str):
        return False
    expected = compute_signature(secret, body)
    # bytes, since compare_digest rejects non-ASCII str
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))


def verify_payment_signature(
    payment_id: str, subscription_id: str, signature: Optional[str], key_secret: Optional[str]
) -> bool:
    """Verify the signature the checkout widget returns after a subscription payment"""
    if not key_secret:
        raise ConfigurationError("Payment system not properly configured")
    return verify_signature(f"{payment_id}|{subscription_id}", signature, key_secret)
