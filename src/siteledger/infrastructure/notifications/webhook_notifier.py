"""
Webhook notifier.

POSTs each notification as JSON to a configured URL, retrying transport
failures with exponential backoff.
"""

from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from siteledger.config import get_logger, get_settings
from siteledger.config.settings import NotificationSettings
from siteledger.core.entities.notification import Notification
from siteledger.core.exceptions import NotificationError
from siteledger.core.interfaces.notifier import INotifier

logger = get_logger(__name__)

RETRYABLE_ERRORS = (httpx.TransportError,)


class WebhookNotifier(INotifier):
    """Delivers notifications to an HTTP endpoint."""

    def __init__(
        self,
        url: str,
        settings: NotificationSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.url = url
        self.settings = settings or get_settings().notifications
        self._client = client or httpx.AsyncClient(timeout=self.settings.timeout)
        self._owns_client = client is None

    def _retrying(self) -> AsyncRetrying:
        delay = self.settings.retry_delay
        return AsyncRetrying(
            stop=stop_after_attempt(max(1, self.settings.max_retries)),
            wait=wait_exponential(multiplier=delay, min=delay, max=delay * 8),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=self._log_retry,
            reraise=False,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "webhook_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _post(self, payload: dict[str, Any]) -> None:
        response = await self._client.post(self.url, json=payload)
        response.raise_for_status()

    async def notify(self, notification: Notification) -> None:
        payload = notification.model_dump(mode="json")
        kind = payload["kind"]

        try:
            async for attempt in self._retrying():
                with attempt:
                    await self._post(payload)
        except RetryError as e:
            last = e.last_attempt.exception()
            raise NotificationError(kind, str(last)) from last
        except httpx.HTTPStatusError as e:
            raise NotificationError(kind, f"HTTP {e.response.status_code}") from e

        logger.debug("webhook_delivered", kind=kind, url=self.url)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
