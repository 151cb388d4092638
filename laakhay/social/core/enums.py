"""Enumerations shared across the library."""

from __future__ import annotations

from enum import Enum


class UploadState(str, Enum):
    """Lifecycle states of a chunked media upload session."""

    CREATED = "created"
    INITIALIZED = "initialized"
    APPENDING = "appending"
    FINALIZED = "finalized"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.FINALIZED, UploadState.FAILED)


class UploadCommand(str, Enum):
    """Commands of the chunked media upload protocol."""

    INIT = "INIT"
    APPEND = "APPEND"
    FINALIZE = "FINALIZE"


class MediaCategory(str, Enum):
    """Media categories accepted by the upload endpoint."""

    TWEET_IMAGE = "tweet_image"
    TWEET_GIF = "tweet_gif"
    TWEET_VIDEO = "tweet_video"
    AMPLIFY_VIDEO = "amplify_video"
    DM_IMAGE = "dm_image"
    DM_GIF = "dm_gif"
    DM_VIDEO = "dm_video"

    @classmethod
    def for_content_type(cls, content_type: str | None) -> MediaCategory | None:
        """Guess the tweet media category for a MIME type.

        Returns None when no category applies; the server then picks one.
        """
        if not content_type:
            return None
        content_type = content_type.lower()
        if content_type == "image/gif":
            return cls.TWEET_GIF
        if content_type.startswith("image/"):
            return cls.TWEET_IMAGE
        if content_type.startswith("video/"):
            return cls.TWEET_VIDEO
        return None


class ReplySettings(str, Enum):
    """Who may reply to a created post."""

    MENTIONED_USERS = "mentionedUsers"
    FOLLOWING = "following"
    EVERYONE = "everyone"


class SpaceState(str, Enum):
    """Space states accepted by space search."""

    LIVE = "live"
    SCHEDULED = "scheduled"
    ALL = "all"
