"""Response envelope data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiErrorDetail(BaseModel):
    """One API-level error object.

    The API reports errors either as problem-details objects (``title``,
    ``detail``, ``type``) or as legacy ``code``/``message`` pairs. Unknown
    keys are preserved.
    """

    title: str | None = None
    detail: str | None = None
    type: str | None = None
    status: int | None = None
    value: Any = None
    parameter: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    code: int | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")

    def describe(self) -> str:
        """Human readable one-line summary."""
        text = self.detail or self.message or self.title or "Unknown error"
        if self.code is not None:
            return f"{text} (code: {self.code})"
        return text


class PageMeta(BaseModel):
    """Pagination and count metadata of a response."""

    next_token: str | None = None
    previous_token: str | None = None
    result_count: int | None = None
    newest_id: str | None = None
    oldest_id: str | None = None
    total_tweet_count: int | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


class ResponseEnvelope(BaseModel):
    """Decoded ``{data, includes, meta, errors}`` shape of a response.

    ``data`` keeps the server order. A single-object payload is normalized to
    a one-element list. ``errors`` may be non-empty alongside ``data``
    (partial success); both are always kept.
    """

    data: list[Any] = Field(default_factory=list)
    includes: dict[str, Any] | None = None
    meta: PageMeta | None = None
    errors: list[ApiErrorDetail] = Field(default_factory=list)
    status_code: int = 200

    model_config = ConfigDict(frozen=True)

    @property
    def next_token(self) -> str | None:
        """Next-page token, or None when this is the last page."""
        if self.meta is None or not self.meta.next_token:
            return None
        return self.meta.next_token

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def is_partial(self) -> bool:
        """True when data and errors were returned together."""
        return bool(self.data) and bool(self.errors)

    def first(self) -> Any:
        """First record, or None when the response carried no data."""
        return self.data[0] if self.data else None
