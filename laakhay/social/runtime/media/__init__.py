"""Chunked media upload protocol."""

from .session import ChunkedUploadSession, MediaSource

__all__ = [
    "ChunkedUploadSession",
    "MediaSource",
]
