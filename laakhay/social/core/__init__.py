"""Core components."""

from .enums import MediaCategory, ReplySettings, SpaceState, UploadCommand, UploadState
from .exceptions import (
    ApiError,
    ConfigurationError,
    PaginationError,
    ProtocolViolation,
    RateLimitError,
    SocialError,
    TransportError,
)
from .options import UNSET, is_unset, resolve_option

__all__ = [
    # Enums
    "MediaCategory",
    "ReplySettings",
    "SpaceState",
    "UploadCommand",
    "UploadState",
    # Exceptions
    "SocialError",
    "TransportError",
    "ApiError",
    "RateLimitError",
    "ProtocolViolation",
    "PaginationError",
    "ConfigurationError",
    # Options
    "UNSET",
    "is_unset",
    "resolve_option",
]
