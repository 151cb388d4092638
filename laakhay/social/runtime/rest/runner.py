"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from ...models import ResponseEnvelope
from ..telemetry import log_request_completed, log_request_failed
from .decoder import decode_envelope
from .http_client import RawResponse
from .transport import RequestBody, RequestExecutor


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST" | "PUT" | "DELETE"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, str]] | None = None
    build_body: Callable[[dict[str, Any]], RequestBody | None] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # Query parameter carrying the pagination token; None for non-paginated endpoints
    token_param: str | None = None

    @property
    def paginated(self) -> bool:
        return self.token_param is not None


class ResponseAdapter:
    def parse(self, response: RawResponse, params: dict[str, Any]) -> Any:
        return response


class EnvelopeAdapter(ResponseAdapter):
    """Decodes every response into a ``ResponseEnvelope``."""

    def parse(self, response: RawResponse, params: dict[str, Any]) -> ResponseEnvelope:
        return decode_envelope(response)


class RestRunner:
    def __init__(
        self,
        executor: RequestExecutor,
        default_headers: Callable[[], Mapping[str, str]] | None = None,
    ) -> None:
        self._t = executor
        self._default_headers = default_headers

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        body = spec.build_body(params) if spec.build_body else None
        headers = dict(self._default_headers()) if self._default_headers else {}
        if spec.build_headers:
            headers.update(spec.build_headers(params))

        start = perf_counter()
        try:
            response = await self._t.execute(
                spec.method.upper(),
                path,
                params=query or None,
                headers=headers or None,
                body=body,
            )
            result = adapter.parse(response, params)
        except Exception as e:
            log_request_failed(
                endpoint_id=spec.id,
                method=spec.method,
                path=path,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        log_request_completed(
            endpoint_id=spec.id,
            method=spec.method,
            path=path,
            status=response.status,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return result
