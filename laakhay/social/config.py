"""Shared client settings.

This module centralizes base URLs, upload tuning constants and the default
field-selector sets, plus an environment-driven ``ClientConfig`` so the
client itself can stay small and focused.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .core.exceptions import ConfigurationError

API_BASE_URL = "https://api.twitter.com"
UPLOAD_BASE_URL = "https://upload.twitter.com"
MEDIA_UPLOAD_PATH = "/1.1/media/upload.json"

# Segment size for chunked uploads. Not a protocol constant: any size up to
# MAX_CHUNK_SIZE is accepted by the server.
DEFAULT_CHUNK_SIZE = 4 * 1024 * 1024
MAX_CHUNK_SIZE = 5 * 1024 * 1024

DEFAULT_TIMEOUT = 30.0

ENV_PREFIX = "LAAKHAY_SOCIAL_"


class DefaultFields:
    """Default field selectors sent when the caller does not choose any."""

    expansions = (
        "attachments.poll_ids,attachments.media_keys,author_id,"
        "entities.mentions.username,geo.place_id,in_reply_to_user_id,"
        "referenced_tweets.id,referenced_tweets.id.author_id"
    )
    media_fields = (
        "duration_ms,height,media_key,preview_image_url,public_metrics,type,url,width,alt_text"
    )
    place_fields = "contained_within,country,country_code,full_name,geo,id,name,place_type"
    poll_fields = "duration_minutes,end_datetime,id,options,voting_status"
    tweet_fields = (
        "attachments,author_id,context_annotations,conversation_id,created_at,"
        "entities,geo,id,in_reply_to_user_id,lang,possibly_sensitive,public_metrics,"
        "referenced_tweets,reply_settings,source,text,withheld"
    )
    user_fields = (
        "created_at,description,entities,id,location,name,pinned_tweet_id,"
        "profile_image_url,protected,public_metrics,url,username,verified,withheld"
    )
    user_expansions = "pinned_tweet_id"


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration.

    Attributes:
        api_base_url: Base URL of the versioned REST API
        upload_base_url: Base URL of the media upload host
        bearer_token: Optional bearer token sent as ``Authorization`` header
        chunk_size: Segment size used by chunked uploads
        timeout: Total per-request timeout in seconds
    """

    api_base_url: str = API_BASE_URL
    upload_base_url: str = UPLOAD_BASE_URL
    bearer_token: str | None = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.chunk_size > MAX_CHUNK_SIZE:
            raise ConfigurationError(
                f"chunk_size must not exceed {MAX_CHUNK_SIZE} bytes, got {self.chunk_size}"
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    @property
    def media_upload_url(self) -> str:
        return f"{self.upload_base_url.rstrip('/')}{MEDIA_UPLOAD_PATH}"

    def with_overrides(self, **changes: object) -> ClientConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build configuration from ``LAAKHAY_SOCIAL_*`` environment variables.

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str | None:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value.strip() if value and value.strip() else None

        kwargs: dict[str, object] = {}
        if (value := _get("API_BASE_URL")) is not None:
            kwargs["api_base_url"] = value
        if (value := _get("UPLOAD_BASE_URL")) is not None:
            kwargs["upload_base_url"] = value
        if (value := _get("BEARER_TOKEN")) is not None:
            kwargs["bearer_token"] = value
        if (value := _get("CHUNK_SIZE")) is not None:
            try:
                kwargs["chunk_size"] = int(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {ENV_PREFIX}CHUNK_SIZE: {value!r}") from e
        if (value := _get("TIMEOUT")) is not None:
            try:
                kwargs["timeout"] = float(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {ENV_PREFIX}TIMEOUT: {value!r}") from e
        return cls(**kwargs)
