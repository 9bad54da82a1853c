"""JSON fetch wrapper shared by all data providers.

Every call performs exactly one GET bounded by a fixed timeout and returns the
decoded body, or ``None`` when the provider produced nothing usable. Failures
are never raised past this boundary.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)

# Body keys that mark a 200 response as a quota notice rather than data
RATE_LIMIT_MARKERS: tuple[str, ...] = ("Note", "Information")

# Body keys used by providers to wrap an error in an otherwise successful response
ERROR_ENVELOPE_MARKERS: tuple[str, ...] = ("Error Message", "error_message", "error", "error-type")


def classify_soft_failure(payload: Any) -> str | None:
    """Return the soft-failure reason for a decoded body, or None if it looks like data."""
    if not isinstance(payload, dict):
        return None
    for key in RATE_LIMIT_MARKERS:
        if payload.get(key):
            return "rate_limited"
    for key in ERROR_ENVELOPE_MARKERS:
        if payload.get(key):
            return "provider_error"
    return None


def _detail(payload: dict[str, Any]) -> str:
    for key in RATE_LIMIT_MARKERS + ERROR_ENVELOPE_MARKERS:
        value = payload.get(key)
        if value:
            return str(value)[:60]
    return ""


class JsonFetcher:
    """Issues single bounded-timeout GET requests and decodes JSON bodies."""

    def __init__(
        self,
        timeout_seconds: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout_seconds,
                follow_redirects=True,
            )
        return self._client

    async def get_json(
        self,
        url: str,
        label: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any | None:
        """Fetch ``url`` and return its JSON body, or None on any failure.

        ``timeout_seconds`` is a deadline for the whole call (connect, headers
        and body), not a per-read limit.
        """
        client = await self._get_client()
        try:
            async with asyncio.timeout(self._timeout_seconds):
                resp = await client.get(
                    url, params=params, headers=headers, timeout=self._timeout_seconds
                )
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.TimeoutException, TimeoutError) as e:
            logger.warning("fetch failed", label=label, reason="timeout", error=str(e))
            return None
        except httpx.HTTPStatusError as e:
            logger.warning(
                "fetch failed",
                label=label,
                reason="http_status",
                status_code=e.response.status_code,
            )
            return None
        except httpx.HTTPError as e:
            logger.warning(
                "fetch failed",
                label=label,
                reason="transport",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
        except ValueError as e:
            logger.warning("fetch failed", label=label, reason="malformed_body", error=str(e))
            return None

        soft_failure = classify_soft_failure(payload)
        if soft_failure is not None:
            logger.warning(
                "fetch failed", label=label, reason=soft_failure, detail=_detail(payload)
            )
            return None

        logger.info("fetch ok", label=label)
        return payload

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
