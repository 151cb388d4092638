"""SocialClient facade over the endpoint registry, pagination and uploads.

Architecture:
    This module implements the Facade pattern over the runtime layer.
    SocialClient handles:
    - Configuration and auth headers for every request
    - Endpoint resolution (endpoint id -> definition + compiled spec)
    - Parameter binding (whitelists, defaults, three-state options)
    - Driving list endpoints through PaginationCursor
    - Creating ChunkedUploadSession instances for media uploads
    - Resource lifecycle management

Design Decisions:
    - One generic ``fetch`` instead of one method per endpoint: endpoints are
      data (see ``laakhay.social.endpoints``), not code
    - Executor injection allows testing with mock transports
    - Context manager pattern ensures the HTTP session is closed

Example:
    >>> async with SocialClient(ClientConfig.from_env()) as client:
    ...     me = await client.fetch("get_me")
    ...     async for page in client.paginate("search_recent", query="python"):
    ...         for tweet in page.data:
    ...             print(tweet["text"])
    ...     media_id = await client.upload_file("clip.mp4")
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import AsyncIterator, Callable, Mapping
from os import PathLike
from pathlib import Path
from typing import Any

from ..config import ClientConfig
from ..core.enums import MediaCategory
from ..core.exceptions import ConfigurationError
from ..endpoints import EndpointDefinition, get_endpoint_definition, get_endpoint_spec
from ..models import ResponseEnvelope
from ..runtime.media import ChunkedUploadSession, MediaSource
from ..runtime.pagination import FetchPage, PaginationCursor, flatten
from ..runtime.rest import (
    EnvelopeAdapter,
    RequestExecutor,
    RestEndpointSpec,
    RestRunner,
    RESTTransport,
)

logger = logging.getLogger(__name__)


class SocialClient:
    """High-level client for the versioned REST API."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        bearer_token: str | None = None,
        executor: RequestExecutor | None = None,
        auth_headers: Callable[[], Mapping[str, str]] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration (default: ``ClientConfig()``)
            bearer_token: Overrides ``config.bearer_token``
            executor: Optional request executor (creates a RESTTransport if
                not provided)
            auth_headers: Optional factory of signed auth headers, called
                once per request; takes precedence over the bearer token
        """
        config = config or ClientConfig()
        if bearer_token is not None:
            config = config.with_overrides(bearer_token=bearer_token)
        self.config = config
        self._auth_headers = auth_headers
        self._owns_executor = executor is None
        self._executor: RequestExecutor = executor or RESTTransport(
            base_url=config.api_base_url, timeout=config.timeout
        )
        self._runner = RestRunner(self._executor, default_headers=self._headers)
        self._adapter = EnvelopeAdapter()
        self._closed = False

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.config.bearer_token:
            headers["Authorization"] = f"Bearer {self.config.bearer_token}"
        if self._auth_headers is not None:
            headers.update(self._auth_headers())
        return headers

    def _resolve(self, endpoint_id: str) -> tuple[EndpointDefinition, RestEndpointSpec]:
        definition = get_endpoint_definition(endpoint_id)
        spec = get_endpoint_spec(endpoint_id)
        if definition is None or spec is None:
            raise ConfigurationError(f"Unknown REST endpoint: {endpoint_id}")
        return definition, spec

    # ------------------------------------------------------------------
    # Simple calls
    # ------------------------------------------------------------------

    async def fetch(self, endpoint_id: str, **params: Any) -> ResponseEnvelope:
        """Call one endpoint and decode its envelope.

        Args:
            endpoint_id: Endpoint identifier (e.g. "get_tweets", "create_list")
            **params: Endpoint parameters; omit to use the endpoint default,
                pass None to leave a defaulted parameter out

        Raises:
            ConfigurationError: Unknown endpoint or parameters
            ApiError: API-level failure
            TransportError: No usable response
        """
        definition, spec = self._resolve(endpoint_id)
        bound = definition.bind(params)
        return await self._runner.run(spec=spec, adapter=self._adapter, params=bound)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def page_fetcher(self, endpoint_id: str, **params: Any) -> FetchPage:
        """Bind a paginated endpoint and its fixed parameters to a fetch function.

        The result is what ``PaginationCursor.next_page`` expects, for callers
        that drive the cursor by hand.
        """
        definition, spec = self._resolve(endpoint_id)
        if not definition.paginated:
            raise ConfigurationError(f"Endpoint '{endpoint_id}' is not paginated")
        token_param = definition.token_param
        bound = definition.bind(params)
        bound.pop(token_param, None)

        async def fetch(token: str | None) -> ResponseEnvelope:
            page_params = dict(bound)
            if token is not None:
                page_params[token_param] = token
            return await self._runner.run(spec=spec, adapter=self._adapter, params=page_params)

        return fetch

    def paginate(
        self,
        endpoint_id: str,
        *,
        initial_token: str | None = None,
        max_pages: int | None = None,
        **params: Any,
    ) -> AsyncIterator[ResponseEnvelope]:
        """Lazy sequence of pages of a list endpoint.

        Args:
            endpoint_id: Paginated endpoint identifier
            initial_token: Token to resume from (None = first page)
            max_pages: Maximum number of requests to issue
            **params: Fixed endpoint parameters

        Raises:
            ConfigurationError: Unknown or non-paginated endpoint (raised on call)
        """
        fetch = self.page_fetcher(endpoint_id, **params)
        return PaginationCursor(initial_token).pages(fetch, max_pages=max_pages)

    def iter_records(
        self,
        endpoint_id: str,
        *,
        limit: int | None = None,
        max_pages: int | None = None,
        **params: Any,
    ) -> AsyncIterator[Any]:
        """Records of a list endpoint across pages, stopping after ``limit``."""
        return flatten(self.paginate(endpoint_id, max_pages=max_pages, **params), limit=limit)

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    def media_session(
        self, *, chunk_size: int | None = None, filename: str = "media"
    ) -> ChunkedUploadSession:
        """New upload session for manual initialize/append/finalize control."""
        return ChunkedUploadSession(
            self._executor,
            self.config.media_upload_url,
            chunk_size=chunk_size or self.config.chunk_size,
            headers=self._headers,
            filename=filename,
        )

    async def upload_media(
        self,
        source: MediaSource,
        content_type: str,
        category: str | MediaCategory | None = None,
        *,
        total_size: int | None = None,
        chunk_size: int | None = None,
    ) -> int:
        """Upload media in chunks and return the final media id."""
        session = self.media_session(chunk_size=chunk_size)
        return await session.upload(source, content_type, category, total_size=total_size)

    async def upload_file(
        self,
        path: str | PathLike[str],
        *,
        content_type: str | None = None,
        category: str | MediaCategory | None = None,
        chunk_size: int | None = None,
    ) -> int:
        """Upload a file from disk.

        The content type is guessed from the file name and the category from
        the content type when not given.
        """
        path = Path(path)
        content_type = content_type or mimetypes.guess_type(path.name)[0]
        if not content_type:
            raise ConfigurationError(f"Cannot determine content type of {path.name}")
        if category is None:
            category = MediaCategory.for_content_type(content_type)

        session = self.media_session(chunk_size=chunk_size, filename=path.name)
        with path.open("rb") as stream:
            return await session.upload(
                stream, content_type, category, total_size=path.stat().st_size
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying transport if the client created it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_executor:
            close = getattr(self._executor, "close", None)
            if close is not None:
                await close()
        logger.debug("social_client_closed")

    async def __aenter__(self) -> SocialClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
