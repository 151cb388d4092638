"""Data models for API responses.

Architecture:
    This module exports the Pydantic v2 models produced by the decoders.
    All models are immutable (frozen=True): an envelope is a value produced
    once per call and never mutated afterwards.

Design Decisions:
    - Domain records (tweets, users, lists, spaces) stay plain dicts; their
      shape depends on the field selectors the caller passed through.
    - Unknown keys are preserved (extra="allow") on metadata and error models
      so new server fields are never dropped.
"""

from .envelope import ApiErrorDetail, PageMeta, ResponseEnvelope
from .media import MediaUploadResult

__all__ = [
    "ApiErrorDetail",
    "MediaUploadResult",
    "PageMeta",
    "ResponseEnvelope",
]
