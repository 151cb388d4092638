"""Opaque-token forward pagination.

A ``PaginationCursor`` turns the server's "next token" contract into a lazy,
forward-only sequence of ``ResponseEnvelope`` pages:

- the first request carries no token (or the caller's initial token);
- each page's ``meta.next_token`` becomes the token of the next request;
- a page without a next token is still returned, then the cursor is
  exhausted and issues no further requests;
- a failed fetch leaves the cursor untouched, so calling ``next_page`` again
  re-requests the same token (at-least-once page delivery).

Tokens are never inspected or transformed. A token the server has already
handed out is treated as consumed: seeing it again means the server would
make the iteration loop, and ``PaginationError`` is raised instead.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from ...core.exceptions import PaginationError
from ...models import ResponseEnvelope
from ..telemetry import log_page_error, log_page_fetched, log_pagination_complete

FetchPage = Callable[[str | None], Awaitable[ResponseEnvelope]]


class PaginationCursor:
    """Forward-only cursor over token-paginated pages.

    Not safe for concurrent use: the current token is mutated in place.
    Distinct cursors are fully independent.

    Every token handed out by the server is remembered for loop detection, so
    memory grows by one token per page for the life of the cursor.
    """

    def __init__(self, token: str | None = None) -> None:
        """Initialize cursor.

        Args:
            token: Token of the first page to request (None = first page)
        """
        self._token = token or None
        self._exhausted = False
        self._seen: set[str] = set()
        if self._token is not None:
            self._seen.add(self._token)
        self.pages_fetched = 0

    @property
    def token(self) -> str | None:
        """Token the next request will carry."""
        return self._token

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    async def next_page(self, fetch: FetchPage) -> ResponseEnvelope | None:
        """Fetch the page for the current token.

        Args:
            fetch: Coroutine function issuing the request for a token

        Returns:
            The page, or None once the cursor is exhausted (no request made)

        Raises:
            PaginationError: If the server returned an already-seen token
            Exception: Whatever ``fetch`` raised; the cursor is unchanged
        """
        if self._exhausted:
            return None

        token = self._token
        try:
            envelope = await fetch(token)
        except Exception as e:
            log_page_error(
                page_index=self.pages_fetched,
                token=token,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        next_token = envelope.next_token
        if next_token is not None and next_token in self._seen:
            raise PaginationError(
                f"Server returned an already consumed pagination token: {next_token!r}",
                token=next_token,
            )

        log_page_fetched(
            page_index=self.pages_fetched,
            token=token,
            result_count=len(envelope.data),
            has_next=next_token is not None,
            error_count=len(envelope.errors),
        )
        self.pages_fetched += 1
        if next_token is None:
            self._exhausted = True
        else:
            self._seen.add(next_token)
            self._token = next_token
        return envelope

    async def pages(
        self, fetch: FetchPage, max_pages: int | None = None
    ) -> AsyncIterator[ResponseEnvelope]:
        """Iterate pages until exhaustion or ``max_pages`` requests.

        ``max_pages`` counts pages fetched through this call. When iteration
        stops early, the cursor keeps its token and can be resumed.
        """
        if max_pages is not None and max_pages <= 0:
            raise ValueError(f"max_pages must be positive, got {max_pages}")

        fetched = 0
        try:
            while max_pages is None or fetched < max_pages:
                page = await self.next_page(fetch)
                if page is None:
                    break
                fetched += 1
                yield page
        finally:
            log_pagination_complete(pages_fetched=self.pages_fetched, exhausted=self._exhausted)

    def __repr__(self) -> str:
        return (
            f"PaginationCursor(token={self._token!r}, exhausted={self._exhausted}, "
            f"pages_fetched={self.pages_fetched})"
        )


def paginate(
    fetch: FetchPage,
    initial_token: str | None = None,
    max_pages: int | None = None,
) -> AsyncIterator[ResponseEnvelope]:
    """Lazy sequence of pages starting at ``initial_token``.

    Example:
        >>> async for page in paginate(fetch, max_pages=10):
        ...     handle(page.data)
    """
    return PaginationCursor(initial_token).pages(fetch, max_pages=max_pages)


async def flatten(
    pages: AsyncIterator[ResponseEnvelope], limit: int | None = None
) -> AsyncIterator[Any]:
    """Iterate records across pages, in server order.

    Args:
        pages: Page iterator (e.g. from ``paginate``)
        limit: Stop after this many records (no further page is requested)
    """
    if limit is not None and limit <= 0:
        return
    count = 0
    try:
        async for page in pages:
            for record in page.data:
                yield record
                count += 1
                if limit is not None and count >= limit:
                    return
    finally:
        aclose = getattr(pages, "aclose", None)
        if aclose is not None:
            await aclose()
