"""Fire-and-forget notification dispatch."""

from siteledger.config import get_logger
from siteledger.core.entities.notification import Notification
from siteledger.core.interfaces.notifier import INotifier

logger = get_logger(__name__)


class NotificationDispatcher:
    """
    Sends notifications without ever failing the caller.

    Whatever the notifier raises is logged and dropped, so a broken channel
    cannot undo or block an inventory write that already happened.
    """

    def __init__(self, notifier: INotifier | None = None) -> None:
        self._notifier = notifier

    async def dispatch(self, notification: Notification) -> bool:
        """Deliver a notification. Returns False when delivery failed or was skipped."""
        if self._notifier is None:
            return False

        try:
            await self._notifier.notify(notification)
            return True
        except Exception as e:
            logger.warning(
                "notification_failed",
                kind=notification.kind.value,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False
