"""Structured logging for requests, pagination and media uploads.

This module provides telemetry hooks for runtime operations, emitting
structured logs: the message is an event name and the fields travel in
``extra`` so handlers can render them as JSON.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def log_request_completed(
    *,
    endpoint_id: str,
    method: str,
    path: str,
    status: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of one REST round trip.

    Args:
        endpoint_id: Endpoint identifier
        method: HTTP method
        path: Request path (without query string)
        status: HTTP status code
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "rest_request_completed",
        extra={
            "endpoint_id": endpoint_id,
            "method": method,
            "path": path,
            "status": status,
            "latency_ms": latency_ms,
        },
    )


def log_request_failed(
    *,
    endpoint_id: str,
    method: str,
    path: str,
    error_type: str,
    error_message: str,
) -> None:
    logger.warning(
        "rest_request_failed",
        extra={
            "endpoint_id": endpoint_id,
            "method": method,
            "path": path,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_page_fetched(
    *,
    page_index: int,
    token: str | None,
    result_count: int,
    has_next: bool,
    error_count: int = 0,
) -> None:
    """Log a fetched page.

    Args:
        page_index: Zero-based index of the page within the iteration
        token: Token the page was requested with (None for the first page)
        result_count: Number of records on the page
        has_next: Whether the server returned a next token
        error_count: Number of partial-success errors carried by the page
    """
    logger.info(
        "page_fetched",
        extra={
            "page_index": page_index,
            "token": token,
            "result_count": result_count,
            "has_next": has_next,
            "error_count": error_count,
        },
    )


def log_page_error(
    *,
    page_index: int,
    token: str | None,
    error_type: str,
    error_message: str,
) -> None:
    logger.error(
        "page_error",
        extra={
            "page_index": page_index,
            "token": token,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_pagination_complete(*, pages_fetched: int, exhausted: bool) -> None:
    logger.info(
        "pagination_complete",
        extra={"pages_fetched": pages_fetched, "exhausted": exhausted},
    )


def log_upload_phase(
    *,
    phase: str,
    media_id: int | None,
    segment_index: int | None = None,
    bytes_sent: int = 0,
    total_size: int = 0,
    latency_ms: float | None = None,
) -> None:
    """Log completion of one upload protocol phase.

    Args:
        phase: INIT, APPEND or FINALIZE
        media_id: Session media identifier
        segment_index: Segment index (APPEND only)
        bytes_sent: Bytes acknowledged so far
        total_size: Declared media size
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "upload_phase_completed",
        extra={
            "phase": phase,
            "media_id": media_id,
            "segment_index": segment_index,
            "bytes_sent": bytes_sent,
            "total_size": total_size,
            "latency_ms": latency_ms,
        },
    )


def log_upload_failed(
    *,
    phase: str,
    media_id: int | None,
    state: Any,
    error_type: str,
    error_message: str,
) -> None:
    logger.error(
        "upload_failed",
        extra={
            "phase": phase,
            "media_id": media_id,
            "state": getattr(state, "value", state),
            "error_type": error_type,
            "error_message": error_message,
        },
    )
