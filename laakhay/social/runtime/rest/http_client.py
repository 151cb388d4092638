"""Async HTTP client with throttle window and response hooks."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from email.utils import parsedate_to_datetime
from typing import Any

import aiohttp

from ...core.exceptions import TransportError

logger = logging.getLogger(__name__)

ResponseHook = Callable[[aiohttp.ClientResponse], float | None | Awaitable[float | None]]

# Fallback throttle when a 429 carries no usable Retry-After header
_DEFAULT_RATE_LIMIT_DELAY = 1.0


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and undecoded body of one HTTP round trip."""

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class HTTPClient:
    """Async HTTP client wrapper.

    One ``aiohttp.ClientSession`` is shared by every request issued through
    the client, so a single instance can serve concurrent callers.

    The client never retries. A 429 response is returned to the caller as-is;
    the Retry-After delay only opens a throttle window that the *next*
    request waits out.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._default_headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response.

        A hook may return a delay in seconds (or an awaitable resolving to
        one) to throttle subsequent requests.
        """
        self._response_hooks.append(hook)

    def set_throttle(self, delay: float) -> None:
        """Hold subsequent requests for ``delay`` seconds."""
        if delay <= 0:
            return
        until = time.time() + delay
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    async def _wait_for_throttle(self) -> None:
        if self._throttle_until is None:
            return
        remaining = self._throttle_until - time.time()
        if remaining > 0:
            await asyncio.sleep(remaining)
        self._throttle_until = None

    def _resolve_url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}{url}"
        return url

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                delay = hook(response)
                if inspect.isawaitable(delay):
                    delay = await delay
            except Exception:
                logger.warning("response_hook_failed", exc_info=True)
                continue
            if delay:
                self.set_throttle(float(delay))

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        data: Any = None,
    ) -> RawResponse:
        """Perform one HTTP round trip.

        Raises:
            TransportError: If no response could be obtained
        """
        url = self._resolve_url(url)
        merged_headers = {**self._default_headers, **(headers or {})}
        await self._wait_for_throttle()

        try:
            async with self.session.request(
                method.upper(),
                url,
                params=params,
                headers=merged_headers or None,
                json=json,
                data=data,
            ) as response:
                body = await response.read()
                await self._run_hooks(response)
                response_headers = dict(response.headers)
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{method.upper()} {url} failed: {e!r}") from e

        if status == 429:
            self.set_throttle(retry_after_seconds(response_headers))

        return RawResponse(status=status, body=body, headers=response_headers)

    async def get(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        """GET request."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Any = None,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        """POST request."""
        return await self.request("POST", url, json=json, data=data, headers=headers)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def retry_after_seconds(headers: Mapping[str, str]) -> float:
    """Delay advertised by a rate-limited response.

    Reads ``Retry-After`` (seconds or HTTP date), then the epoch-seconds
    ``x-rate-limit-reset`` header.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    retry_after = lowered.get("retry-after")
    if retry_after:
        try:
            return max(float(retry_after), 0.0)
        except ValueError:
            try:
                return max(parsedate_to_datetime(retry_after).timestamp() - time.time(), 0.0)
            except (TypeError, ValueError):
                pass
    reset = lowered.get("x-rate-limit-reset")
    if reset:
        try:
            return max(float(reset) - time.time(), 0.0)
        except ValueError:
            pass
    return _DEFAULT_RATE_LIMIT_DELAY
