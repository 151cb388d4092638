"""REST transport: the request executor the core calls through."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import aiohttp

from .http_client import HTTPClient, RawResponse, ResponseHook


@dataclass(frozen=True)
class FormBody:
    """URL-encoded form body."""

    fields: Mapping[str, str]


@dataclass(frozen=True)
class MultipartFile:
    name: str
    payload: bytes
    filename: str = "blob"
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class MultipartBody:
    """multipart/form-data body made of plain fields and file parts."""

    fields: Mapping[str, str] = field(default_factory=dict)
    files: tuple[MultipartFile, ...] = ()


RequestBody = Mapping[str, Any] | FormBody | MultipartBody


@runtime_checkable
class RequestExecutor(Protocol):
    """Performs one HTTP round trip.

    Implementations return the raw response for any status code and raise
    ``TransportError`` when no response was obtained.
    """

    async def execute(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        body: RequestBody | None = None,
    ) -> RawResponse: ...


class RESTTransport:
    """aiohttp-backed ``RequestExecutor``.

    Relative paths are resolved against ``base_url``; absolute URLs (the media
    upload host) are used as given, so one transport and one connection pool
    serve both hosts.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout, headers=headers)

    def add_response_hook(self, hook: ResponseHook) -> None:
        self._http.add_response_hook(hook)

    async def execute(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        body: RequestBody | None = None,
    ) -> RawResponse:
        json_body, data = _encode_body(body)
        return await self._http.request(
            method, path, params=params, headers=headers, json=json_body, data=data
        )

    async def get(
        self,
        path: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        return await self.execute("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        body: RequestBody | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        return await self.execute("POST", path, headers=headers, body=body)

    async def close(self) -> None:
        await self._http.close()


def _encode_body(body: RequestBody | None) -> tuple[Any, Any]:
    """Map a request body onto aiohttp's ``json``/``data`` arguments."""
    if body is None:
        return None, None
    if isinstance(body, FormBody):
        return None, dict(body.fields)
    if isinstance(body, MultipartBody):
        form = aiohttp.FormData()
        for name, value in body.fields.items():
            form.add_field(name, value)
        for part in body.files:
            form.add_field(
                part.name,
                part.payload,
                filename=part.filename,
                content_type=part.content_type,
            )
        return None, form
    return dict(body), None
