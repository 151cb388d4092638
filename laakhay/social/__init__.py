"""Laakhay Social - async client for a versioned social-media REST API."""

from .api import SocialClient
from .config import ClientConfig, DefaultFields
from .core import (
    UNSET,
    ApiError,
    ConfigurationError,
    MediaCategory,
    PaginationError,
    ProtocolViolation,
    RateLimitError,
    ReplySettings,
    SocialError,
    SpaceState,
    TransportError,
    UploadState,
)
from .endpoints import EndpointDefinition, list_endpoints
from .models import ApiErrorDetail, MediaUploadResult, PageMeta, ResponseEnvelope
from .runtime import (
    ChunkedUploadSession,
    PaginationCursor,
    RawResponse,
    RequestExecutor,
    RESTTransport,
    flatten,
    paginate,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "SocialClient",
    "ClientConfig",
    "DefaultFields",
    # Enums and options
    "MediaCategory",
    "ReplySettings",
    "SpaceState",
    "UploadState",
    "UNSET",
    # Models
    "ApiErrorDetail",
    "MediaUploadResult",
    "PageMeta",
    "ResponseEnvelope",
    # Runtime
    "ChunkedUploadSession",
    "PaginationCursor",
    "RawResponse",
    "RequestExecutor",
    "RESTTransport",
    "paginate",
    "flatten",
    # Endpoints
    "EndpointDefinition",
    "list_endpoints",
    # Exceptions
    "SocialError",
    "TransportError",
    "ApiError",
    "RateLimitError",
    "ProtocolViolation",
    "PaginationError",
    "ConfigurationError",
]
