"""Media upload result model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MediaUploadResult(BaseModel):
    """Payload returned by the INIT and FINALIZE upload commands.

    ``processing_info`` is present for media that is processed server-side
    (e.g. video transcoding) and is passed through untouched.
    """

    media_id: int = Field(..., gt=0)
    media_id_string: str | None = None
    media_key: str | None = None
    size: int | None = None
    expires_after_secs: int | None = None
    processing_info: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def requires_processing(self) -> bool:
        return self.processing_info is not None
