"""Qiita API v2 client.

A pass-through: one authenticated ``POST /items`` per publish, no retries
and no timeout policy beyond httpx's default.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from backend.config import Settings
from backend.errors import ConfigurationError, QiitaAPIError
from backend.metrics import PUBLISH_REQUESTS, QIITA_DURATION
from backend.models import ArticleSubmission

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "Failed to publish the article"


def _upstream_message(exc: httpx.HTTPError) -> str:
    """Best human-readable message for a failed Qiita call."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(exc) or FALLBACK_ERROR_MESSAGE


class QiitaClient:
    """Publishes articles to Qiita on behalf of the configured token."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    @property
    def configured(self) -> bool:
        """Whether an access token is available."""
        return bool(self.settings.qiita_access_token)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.qiita_access_token}",
            "Content-Type": "application/json",
        }

    async def create_item(self, submission: ArticleSubmission) -> dict[str, Any]:
        """POST the submission to Qiita and return the created item JSON.

        Raises:
            ConfigurationError: no access token is configured.
            QiitaAPIError: Qiita answered with an error or was unreachable.
        """
        if not self.configured:
            raise ConfigurationError("Qiita access token is not configured")

        payload = submission.model_dump(include={"title", "body", "tags", "private"})
        start = time.perf_counter()

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    self.settings.items_url, json=payload, headers=self._headers()
                )
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise QiitaAPIError(
                _upstream_message(exc), exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            raise QiitaAPIError(_upstream_message(exc)) from exc
        finally:
            QIITA_DURATION.observe(time.perf_counter() - start)

        item = resp.json()
        PUBLISH_REQUESTS.labels(outcome="success").inc()
        logger.info("Published Qiita item %s — %s", item.get("id"), item.get("url"))
        return item
