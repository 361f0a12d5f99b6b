"""Admin notifications.

There is no mail delivery yet; LoggingNotifier writes notifications to the
application log. Swap in anything with a ``notify(kind, data)`` method.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

logger = logging.getLogger(__name__)

ERROR_KINDS = ("webhook_error",)


class Notifier(Protocol):
    def notify(self, kind: str, data: Mapping[str, Any]) -> None:
        ...


class LoggingNotifier:
    """Notifier that only logs"""

    def notify(self, kind: str, data: Mapping[str, Any]) -> None:
        if kind in ERROR_KINDS:
            logger.error("Notification %s: %s", kind, dict(data))
        else:
            logger.info("Notification %s: %s", kind, dict(data))
