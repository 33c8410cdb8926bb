"""Abstract interface for notification delivery."""

from abc import ABC, abstractmethod

from siteledger.core.entities.notification import Notification


class INotifier(ABC):
    """Delivers a notification to whatever channel backs it."""

    @abstractmethod
    async def notify(self, notification: Notification) -> None:
        """
        Deliver one notification.

        Implementations raise NotificationError on failure; callers go
        through NotificationDispatcher, which never lets it escape.
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the notifier."""
        return None
