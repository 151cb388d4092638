"""REST runtime abstractions."""

from .decoder import decode_envelope, decode_media_response, extract_errors, raise_for_failure
from .http_client import HTTPClient, RawResponse
from .runner import EnvelopeAdapter, ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import (
    FormBody,
    MultipartBody,
    MultipartFile,
    RequestBody,
    RequestExecutor,
    RESTTransport,
)

__all__ = [
    "HTTPClient",
    "RawResponse",
    "RESTTransport",
    "RequestExecutor",
    "RequestBody",
    "FormBody",
    "MultipartBody",
    "MultipartFile",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "EnvelopeAdapter",
    "decode_envelope",
    "decode_media_response",
    "extract_errors",
    "raise_for_failure",
]
