"""Notifiers that never leave the process."""

from siteledger.config import get_logger
from siteledger.core.entities.notification import Notification
from siteledger.core.interfaces.notifier import INotifier

logger = get_logger(__name__)


class LoggingNotifier(INotifier):
    """Writes every notification to the structured log."""

    async def notify(self, notification: Notification) -> None:
        logger.info(
            "notification",
            **notification.model_dump(mode="json"),
        )


class NullNotifier(INotifier):
    """Drops notifications. Used when notifications are disabled."""

    async def notify(self, notification: Notification) -> None:
        return None
