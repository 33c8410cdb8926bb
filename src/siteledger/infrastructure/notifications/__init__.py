"""
Notification delivery.

Picks the notifier implementation from configuration.
"""

from siteledger.config import Settings, get_logger, get_settings
from siteledger.core.interfaces.notifier import INotifier
from siteledger.infrastructure.notifications.logging_notifier import LoggingNotifier, NullNotifier
from siteledger.infrastructure.notifications.webhook_notifier import WebhookNotifier

logger = get_logger(__name__)


def create_notifier(settings: Settings | None = None) -> INotifier:
    """
    Build the notifier for the current configuration.

    disabled          -> NullNotifier
    webhook_url set   -> WebhookNotifier
    otherwise         -> LoggingNotifier
    """
    settings = settings or get_settings()
    config = settings.notifications

    if not config.enabled:
        notifier: INotifier = NullNotifier()
    elif config.webhook_url:
        notifier = WebhookNotifier(config.webhook_url, settings=config)
    else:
        notifier = LoggingNotifier()

    logger.info("notifier_selected", notifier=type(notifier).__name__)
    return notifier


__all__ = [
    "LoggingNotifier",
    "NullNotifier",
    "WebhookNotifier",
    "create_notifier",
]
