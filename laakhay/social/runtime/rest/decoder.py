"""Response envelope decoding and failure classification.

Classification of a raw response:

    status  body                        outcome
    ------  --------------------------  -------------------------------------
    2xx     envelope with data          ResponseEnvelope (errors kept, if any)
    2xx     errors only, no data        ApiError (envelope attached)
    2xx     empty                       empty ResponseEnvelope
    2xx     unparseable                 TransportError
    429     any                         RateLimitError
    other   parseable error payload     ApiError
    other   unparseable / empty         TransportError

A 429 is classified by status alone: even without a readable body it raises
``RateLimitError`` (an ``ApiError``) carrying ``retry_after``.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ...core.exceptions import ApiError, RateLimitError, TransportError
from ...models import ApiErrorDetail, MediaUploadResult, PageMeta, ResponseEnvelope
from .http_client import RawResponse, retry_after_seconds


class _Unparseable:
    pass


_UNPARSEABLE = _Unparseable()


def _load_json(body: bytes) -> Any:
    """Parse a JSON body. Empty bodies decode to None."""
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return _UNPARSEABLE


def _to_error(item: Any) -> ApiErrorDetail:
    if isinstance(item, dict):
        try:
            return ApiErrorDetail.model_validate(item)
        except PydanticValidationError:
            return ApiErrorDetail(message=json.dumps(item, default=str))
    return ApiErrorDetail(message=str(item))


def extract_errors(payload: Any) -> list[ApiErrorDetail]:
    """Read the ``errors`` list of a payload, preserving order."""
    if not isinstance(payload, dict):
        return []
    raw = payload.get("errors")
    if not raw:
        return []
    if not isinstance(raw, list):
        raw = [raw]
    return [_to_error(item) for item in raw]


def _failure_details(payload: dict[str, Any], status: int) -> list[ApiErrorDetail]:
    """Error details of a non-2xx payload.

    Accepts an ``errors`` list, a problem-details object, or a legacy
    ``error`` string.
    """
    errors = extract_errors(payload)
    if errors:
        return errors
    if any(key in payload for key in ("title", "detail", "type")):
        return [_to_error(payload)]
    if isinstance(payload.get("error"), str):
        return [ApiErrorDetail(message=payload["error"], status=status)]
    return [ApiErrorDetail(title=f"HTTP {status}", status=status)]


def raise_for_failure(response: RawResponse, payload: Any = _UNPARSEABLE) -> None:
    """Raise the classified failure for a non-2xx response."""
    if payload is _UNPARSEABLE:
        payload = _load_json(response.body)

    if response.status == 429:
        errors = _failure_details(payload, 429) if isinstance(payload, dict) else []
        message = "; ".join(e.describe() for e in errors) or "Rate limit exceeded"
        raise RateLimitError(
            message, retry_after=retry_after_seconds(response.headers), errors=errors
        )

    if not isinstance(payload, dict):
        raise TransportError(
            f"HTTP {response.status} with unparseable body", status_code=response.status
        )

    errors = _failure_details(payload, response.status)
    message = "; ".join(e.describe() for e in errors)
    raise ApiError(message, status_code=response.status, errors=errors)


def _normalize_data(raw: Any) -> list[Any]:
    if raw is None:
        return []
    if isinstance(raw, list):
        return list(raw)
    return [raw]


def decode_envelope(response: RawResponse) -> ResponseEnvelope:
    """Decode a raw response into a ``ResponseEnvelope``.

    Partial success (data and errors together) is returned as-is; data is
    never dropped because errors are present.

    Raises:
        ApiError: Structured API failure, or errors without any data
        RateLimitError: HTTP 429
        TransportError: Unparseable body
    """
    payload = _load_json(response.body)
    if not response.ok:
        raise_for_failure(response, payload)

    if payload is _UNPARSEABLE:
        raise TransportError(
            f"HTTP {response.status} with malformed JSON body", status_code=response.status
        )
    if payload is None:
        return ResponseEnvelope(status_code=response.status)
    if not isinstance(payload, dict):
        raise TransportError(
            f"Expected a JSON object, got {type(payload).__name__}",
            status_code=response.status,
        )

    meta = payload.get("meta")
    includes = payload.get("includes")
    try:
        envelope = ResponseEnvelope(
            data=_normalize_data(payload.get("data")),
            includes=includes if isinstance(includes, dict) else None,
            meta=PageMeta.model_validate(meta) if isinstance(meta, dict) else None,
            errors=extract_errors(payload),
            status_code=response.status,
        )
    except PydanticValidationError as e:
        raise TransportError(
            f"Malformed envelope metadata: {e}", status_code=response.status
        ) from e

    if envelope.errors and not envelope.data:
        message = "; ".join(e.describe() for e in envelope.errors)
        raise ApiError(
            message, status_code=response.status, errors=envelope.errors, envelope=envelope
        )
    return envelope


def decode_media_response(response: RawResponse) -> MediaUploadResult | None:
    """Decode a media upload command response.

    Returns None for bodies without a media id (APPEND answers 2xx with an
    empty body).

    Raises:
        ApiError: Structured API failure
        TransportError: Unparseable body
    """
    payload = _load_json(response.body)
    if not response.ok:
        raise_for_failure(response, payload)

    if payload is _UNPARSEABLE:
        raise TransportError(
            f"HTTP {response.status} with malformed JSON body", status_code=response.status
        )
    if not isinstance(payload, dict):
        return None

    errors = extract_errors(payload)
    if errors:
        message = "; ".join(e.describe() for e in errors)
        raise ApiError(message, status_code=response.status, errors=errors)

    if payload.get("media_id") is None:
        return None
    try:
        return MediaUploadResult.model_validate(payload)
    except PydanticValidationError as e:
        raise TransportError(
            f"Malformed media upload response: {e}", status_code=response.status
        ) from e
