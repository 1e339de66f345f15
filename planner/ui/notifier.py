"""Reminder delivery seam for the page: permission handling and display."""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def request_permission(self) -> bool: ...

    def permission_granted(self) -> bool: ...

    def notify(self, title: str, body: str) -> None: ...


class LogNotifier:
    """Notifier that writes reminders to the log; always permitted."""

    def request_permission(self) -> bool:
        return True

    def permission_granted(self) -> bool:
        return True

    def notify(self, title: str, body: str) -> None:
        logger.info(f"🔔 {title}: {body}")
