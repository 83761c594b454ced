"""Async HTTP fetcher.

Every outbound request of the service goes through this module: NFT
metadata documents, the GitHub OAuth token endpoint and the GitHub REST API.

Uses httpx.AsyncClient which is meant to be long-lived and reused.
A single shared client is managed by the module; see ``get_http_client``
and ``close_http_client`` for lifecycle hooks.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx
from tenacity import (
    RetryError,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

from devcred.core.config import settings

logger = logging.getLogger(__name__)

# Module-level shared client
_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared AsyncClient.  Creates one if missing."""
    global _http_client  # noqa: PLW0603
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            follow_redirects=True,
            verify=settings.http_verify_ssl,
            headers={"User-Agent": "DevCredBot/1.0"},
        )
    return _http_client


async def close_http_client() -> None:
    """Close the shared AsyncClient gracefully."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
        _http_client = None
        logger.info("HTTP client closed.")


class FetchError(Exception):
    """Raised when an outbound request does not yield a usable JSON body.

    ``status_code`` is set when the server answered with a non-2xx status.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


async def _send(
    method: str,
    url: str,
    headers: Mapping[str, str] | None = None,
    json: Any = None,
) -> httpx.Response:
    """Send one request.  Timeouts and connection errors propagate as-is."""
    client = get_http_client()
    try:
        return await client.request(method, url, headers=headers, json=json)
    except httpx.InvalidURL as exc:
        raise FetchError(f"Invalid URL '{url}': {exc}") from exc
    except httpx.TimeoutException:
        raise  # propagate for retry logic
    except httpx.ConnectError:
        raise  # propagate for retry logic
    except httpx.RequestError as exc:
        raise FetchError(f"Request error for '{url}': {exc}") from exc


def _decode_json(url: str, response: httpx.Response) -> Any:
    if not response.is_success:
        raise FetchError(
            f"'{url}' answered HTTP {response.status_code}",
            status_code=response.status_code,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise FetchError(f"'{url}' did not return a JSON body") from exc


async def _send_once(
    method: str,
    url: str,
    headers: Mapping[str, str] | None = None,
    json: Any = None,
) -> httpx.Response:
    try:
        return await _send(method, url, headers=headers, json=json)
    except (httpx.TimeoutException, httpx.ConnectError) as exc:
        raise FetchError(f"Request to '{url}' failed: {exc}") from exc


async def fetch_json(url: str, headers: Mapping[str, str] | None = None) -> Any:
    """GET *url* once and return its parsed JSON body.

    No retries: any failure raises :class:`FetchError` immediately.
    """
    response = await _send_once("GET", url, headers=headers)
    return _decode_json(url, response)


async def post_json(
    url: str,
    payload: Mapping[str, Any],
    headers: Mapping[str, str] | None = None,
) -> Any:
    """POST *payload* as JSON to *url* once and return the parsed JSON body."""
    response = await _send_once("POST", url, headers=headers, json=dict(payload))
    return _decode_json(url, response)


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=lambda rs: rs.attempt_number >= settings.http_max_retries + 1,
    wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=False,
)
async def _get_with_retry(url: str, headers: Mapping[str, str] | None) -> httpx.Response:
    """Single GET attempt; tenacity retries on transient errors."""
    return await _send("GET", url, headers=headers)


async def fetch_json_with_retry(
    url: str, headers: Mapping[str, str] | None = None
) -> Any:
    """GET *url* and return its parsed JSON body, retrying transient errors.

    Only for idempotent reads.  Timeouts and connection failures are retried
    with exponential backoff; once ``settings.http_max_retries`` is spent a
    :class:`FetchError` is raised.  The ``stop`` condition reads the setting
    per attempt, so patches in tests take effect.
    """
    try:
        response = await _get_with_retry(url, headers)
    except RetryError as exc:
        raise FetchError(
            f"Failed to fetch {url} after {settings.http_max_retries + 1} attempts: "
            f"{exc.last_attempt.exception()}"
        ) from exc
    return _decode_json(url, response)
