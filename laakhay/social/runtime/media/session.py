"""Chunked media upload session.

The upload host speaks a three-command protocol:

    INIT      declare total size, media type and category; returns a media id
    APPEND    send one segment (multipart: media_id, segment_index, media)
    FINALIZE  close the upload; returns the authoritative media id

``ChunkedUploadSession`` drives that protocol as a state machine::

    CREATED --initialize--> INITIALIZED --append_segment--> APPENDING (loop)
            --finalize (bytes_sent >= total_size)--> FINALIZED

Any failure from a non-terminal state moves the session to FAILED.
FINALIZED and FAILED are terminal: every further call raises
``ProtocolViolation`` and leaves the state unchanged.

A ``TransportError`` during APPEND leaves the session untouched so the same
segment can be re-sent with the identical index and payload. Any ``ApiError``
(rate limiting and 5xx included) fails the session. The session never
retries on its own.
"""

from __future__ import annotations

import asyncio
import hashlib
import io
from collections.abc import AsyncIterator, Callable, Mapping
from time import perf_counter
from typing import BinaryIO

from ...config import DEFAULT_CHUNK_SIZE, MAX_CHUNK_SIZE
from ...core.enums import MediaCategory, UploadCommand, UploadState
from ...core.exceptions import (
    ApiError,
    ConfigurationError,
    ProtocolViolation,
    TransportError,
)
from ...models import ApiErrorDetail, MediaUploadResult
from ..rest.decoder import decode_media_response
from ..rest.transport import FormBody, MultipartBody, MultipartFile, RequestBody, RequestExecutor
from ..telemetry import log_upload_failed, log_upload_phase

MediaSource = bytes | bytearray | memoryview | BinaryIO


def _category_value(category: str | MediaCategory | None) -> str | None:
    if category is None:
        return None
    return category.value if isinstance(category, MediaCategory) else str(category)


class ChunkedUploadSession:
    """Stateful handle for one chunked media upload.

    Intended for a single sequential caller: appends must not be issued
    concurrently on one session. Independent sessions may run concurrently
    over the same executor.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        upload_url: str,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        headers: Callable[[], Mapping[str, str]] | None = None,
        filename: str = "media",
    ) -> None:
        """Initialize upload session.

        Args:
            executor: Request executor issuing the protocol calls
            upload_url: Absolute URL of the media upload endpoint
            chunk_size: Segment size used by ``upload``
            headers: Optional factory for per-request headers (auth)
            filename: File name reported in APPEND multipart parts
        """
        if chunk_size <= 0 or chunk_size > MAX_CHUNK_SIZE:
            raise ConfigurationError(
                f"chunk_size must be in 1..{MAX_CHUNK_SIZE} bytes, got {chunk_size}"
            )
        self._executor = executor
        self._upload_url = upload_url
        self._headers = headers
        self.chunk_size = chunk_size
        self.filename = filename

        self.media_id: int | None = None
        self.total_size = 0
        self.media_type: str | None = None
        self.media_category: str | None = None
        self.state = UploadState.CREATED
        self.next_segment_index = 0
        self.bytes_sent = 0
        self.result: MediaUploadResult | None = None
        # (segment_index, sha256) of an append whose outcome is unknown
        self._in_flight: tuple[int, str] | None = None

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------

    def _fail(self, phase: str, exc: BaseException) -> None:
        if not self.state.is_terminal:
            self.state = UploadState.FAILED
        log_upload_failed(
            phase=phase,
            media_id=self.media_id,
            state=self.state,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )

    def _reject(self, phase: str, message: str) -> ProtocolViolation:
        """Build a ProtocolViolation, failing the session if it is still live."""
        error = ProtocolViolation(f"{phase}: {message}", state=self.state)
        self._fail(phase, error)
        return error

    def _check_media_id(self, phase: str, media_id: int) -> None:
        if media_id != self.media_id:
            raise self._reject(
                phase, f"media id {media_id} does not belong to this session ({self.media_id})"
            )

    async def _send(self, body: RequestBody) -> MediaUploadResult | None:
        headers = dict(self._headers()) if self._headers else None
        response = await self._executor.execute(
            "POST", self._upload_url, headers=headers, body=body
        )
        return decode_media_response(response)

    # ------------------------------------------------------------------
    # Protocol
    # ------------------------------------------------------------------

    async def initialize(
        self,
        total_size: int,
        media_type: str,
        media_category: str | MediaCategory | None = None,
    ) -> int:
        """Declare the upload and obtain a media id.

        Args:
            total_size: Total number of bytes that will be appended (> 0)
            media_type: MIME type of the media (e.g. "video/mp4")
            media_category: Media category (e.g. "tweet_video"); omitted when None

        Returns:
            Media id assigned by the server

        Raises:
            ProtocolViolation: Session not in CREATED, or invalid arguments
            TransportError, ApiError: INIT call failed (session is FAILED)
        """
        phase = UploadCommand.INIT.value
        if self.state is not UploadState.CREATED:
            raise self._reject(phase, f"session is {self.state.value}, expected created")
        if isinstance(total_size, bool) or not isinstance(total_size, int) or total_size <= 0:
            raise self._reject(phase, f"total_size must be a positive integer, got {total_size!r}")
        if not media_type:
            raise self._reject(phase, "media_type is required")

        self.total_size = total_size
        self.media_type = media_type
        self.media_category = _category_value(media_category)

        fields = {
            "command": phase,
            "total_bytes": str(total_size),
            "media_type": media_type,
        }
        if self.media_category:
            fields["media_category"] = self.media_category

        start = perf_counter()
        try:
            result = await self._send(FormBody(fields))
            if result is None:
                raise TransportError("INIT response carried no media id")
        except Exception as e:
            self._fail(phase, e)
            raise

        self.media_id = result.media_id
        self.state = UploadState.INITIALIZED
        log_upload_phase(
            phase=phase,
            media_id=self.media_id,
            total_size=self.total_size,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return self.media_id

    async def append_segment(
        self, media_id: int, segment_index: int, payload: bytes | bytearray | memoryview
    ) -> None:
        """Send one segment.

        Segment indices must be exactly ``next_segment_index``: no gaps, no
        reordering, no re-sending an acknowledged segment.

        Raises:
            ProtocolViolation: Wrong state, media id, index or size
            TransportError: Retry with the same index and payload
            ApiError: API failure, rate limiting included (session is FAILED)
        """
        phase = UploadCommand.APPEND.value
        if self.state not in (UploadState.INITIALIZED, UploadState.APPENDING):
            raise self._reject(phase, f"session is {self.state.value}")
        self._check_media_id(phase, media_id)
        if segment_index != self.next_segment_index:
            raise self._reject(
                phase,
                f"segment index {segment_index} out of order, expected {self.next_segment_index}",
            )

        data = bytes(payload)
        if not data:
            raise self._reject(phase, "segment payload is empty")
        if self.bytes_sent + len(data) > self.total_size:
            raise self._reject(
                phase,
                f"segment of {len(data)} bytes exceeds declared size "
                f"({self.bytes_sent}/{self.total_size} bytes sent)",
            )
        digest = hashlib.sha256(data).hexdigest()
        if (
            self._in_flight is not None
            and self._in_flight[0] == segment_index
            and self._in_flight[1] != digest
        ):
            raise self._reject(
                phase, f"segment {segment_index} re-sent with a different payload"
            )

        body = MultipartBody(
            fields={
                "command": phase,
                "media_id": str(media_id),
                "segment_index": str(segment_index),
            },
            files=(MultipartFile(name="media", payload=data, filename=self.filename),),
        )

        start = perf_counter()
        try:
            await self._send(body)
        except Exception as e:
            if isinstance(e, TransportError):
                self._in_flight = (segment_index, digest)
                log_upload_failed(
                    phase=phase,
                    media_id=self.media_id,
                    state=self.state,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            else:
                self._fail(phase, e)
            raise

        self._in_flight = None
        self.bytes_sent += len(data)
        self.next_segment_index += 1
        self.state = UploadState.APPENDING
        log_upload_phase(
            phase=phase,
            media_id=self.media_id,
            segment_index=segment_index,
            bytes_sent=self.bytes_sent,
            total_size=self.total_size,
            latency_ms=(perf_counter() - start) * 1000.0,
        )

    async def finalize(self, media_id: int) -> int:
        """Close the upload.

        Returns:
            Authoritative media id; may differ from the provisional one for
            media processed server-side. ``result.processing_info`` carries
            the processing state when present.

        Raises:
            ProtocolViolation: Wrong state, media id, or too few bytes sent
            TransportError, ApiError: FINALIZE failed (session is FAILED)
        """
        phase = UploadCommand.FINALIZE.value
        ready = self.state is UploadState.APPENDING or (
            self.state is UploadState.INITIALIZED and self.total_size == 0
        )
        if not ready:
            raise self._reject(phase, f"session is {self.state.value}")
        self._check_media_id(phase, media_id)
        if self.bytes_sent < self.total_size:
            raise self._reject(
                phase, f"only {self.bytes_sent} of {self.total_size} bytes were appended"
            )

        start = perf_counter()
        try:
            result = await self._send(FormBody({"command": phase, "media_id": str(media_id)}))
            if result is None:
                raise TransportError("FINALIZE response carried no media id")
            _raise_for_processing_failure(result)
        except Exception as e:
            self._fail(phase, e)
            raise

        self.result = result
        self.state = UploadState.FINALIZED
        log_upload_phase(
            phase=phase,
            media_id=result.media_id,
            bytes_sent=self.bytes_sent,
            total_size=self.total_size,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return result.media_id

    # ------------------------------------------------------------------
    # Composite
    # ------------------------------------------------------------------

    async def upload(
        self,
        source: MediaSource,
        content_type: str,
        category: str | MediaCategory | None = None,
        *,
        total_size: int | None = None,
    ) -> int:
        """INIT, APPEND every chunk in order, then FINALIZE.

        Args:
            source: Bytes, or a binary stream read in ``chunk_size`` chunks
            content_type: MIME type of the media
            category: Media category; omitted when None
            total_size: Size of a non-seekable stream

        Returns:
            Final media id

        The first failure aborts the upload, fails the session and propagates.
        No cleanup call is issued: the protocol has no abort command.
        """
        try:
            if isinstance(source, (bytes, bytearray, memoryview)):
                data = bytes(source)
                stream: BinaryIO = io.BytesIO(data)
                size = len(data) if total_size is None else total_size
            else:
                stream = source
                size = total_size if total_size is not None else self._remaining_size(stream)

            media_id = await self.initialize(size, content_type, category)
            index = 0
            async for chunk in self._read_chunks(stream):
                await self.append_segment(media_id, index, chunk)
                index += 1
            if self.bytes_sent < self.total_size:
                raise self._reject(
                    "UPLOAD",
                    f"stream ended after {self.bytes_sent} of {self.total_size} bytes",
                )
            return await self.finalize(media_id)
        except Exception as e:
            if not self.state.is_terminal:
                self._fail("UPLOAD", e)
            raise

    def _remaining_size(self, stream: BinaryIO) -> int:
        try:
            position = stream.tell()
            end = stream.seek(0, io.SEEK_END)
            stream.seek(position)
        except (AttributeError, OSError, ValueError) as e:
            raise self._reject("UPLOAD", "total_size is required for non-seekable streams") from e
        return end - position

    async def _read_chunks(self, stream: BinaryIO) -> AsyncIterator[bytes]:
        while True:
            chunk = await asyncio.to_thread(stream.read, self.chunk_size)
            if not chunk:
                return
            yield chunk

    def __repr__(self) -> str:
        return (
            f"ChunkedUploadSession(state={self.state.value}, media_id={self.media_id}, "
            f"bytes_sent={self.bytes_sent}/{self.total_size}, "
            f"next_segment_index={self.next_segment_index})"
        )


def _raise_for_processing_failure(result: MediaUploadResult) -> None:
    info = result.processing_info
    if not info or info.get("state") != "failed":
        return
    error = info.get("error") or {}
    detail = ApiErrorDetail(
        title=error.get("name"),
        message=error.get("message") or "Media processing failed",
        code=error.get("code"),
    )
    raise ApiError(detail.describe(), errors=[detail])
