"""
Error types shared by the webhook receiver and the site API
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class PixelPerfectError(Exception):
    """Base class for application errors"""


class ConfigurationError(PixelPerfectError):
    """A required secret or credential is not configured"""


class VerificationError(PixelPerfectError):
    """A signature did not match the request it came with"""


class GatewayError(PixelPerfectError):
    """The payment gateway answered with an HTTP error.

    ``status_code`` is the gateway's HTTP status and ``error`` the decoded
    ``error`` object of its response body (``code``, ``description``, ...).
    """

    def __init__(self, status_code: int, error: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.error = error or {}
        super().__init__(self.description)

    @property
    def description(self) -> str:
        return self.error.get("description") or "Failed to create subscription"

    @property
    def code(self) -> str:
        return self.error.get("code") or "UNKNOWN_ERROR"
