"""Runtime layer: transport, decoding, pagination and media upload.

Architecture:
    - rest/: request executor (aiohttp), envelope decoder, endpoint runner
    - pagination/: opaque-token cursor over list endpoints
    - media/: chunked upload session state machine
    - telemetry.py: structured logging shared by the above
"""

from .media import ChunkedUploadSession
from .pagination import PaginationCursor, flatten, paginate
from .rest import (
    EnvelopeAdapter,
    HTTPClient,
    RawResponse,
    RequestExecutor,
    RestEndpointSpec,
    RestRunner,
    RESTTransport,
    decode_envelope,
)

__all__ = [
    "ChunkedUploadSession",
    "EnvelopeAdapter",
    "HTTPClient",
    "PaginationCursor",
    "RawResponse",
    "RequestExecutor",
    "RESTTransport",
    "RestEndpointSpec",
    "RestRunner",
    "decode_envelope",
    "flatten",
    "paginate",
]
