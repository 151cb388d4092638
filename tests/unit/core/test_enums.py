"""Unit tests for core enumerations."""

import pytest

from laakhay.social.core import MediaCategory, UploadState


class TestUploadState:
    """Test UploadState."""

    @pytest.mark.parametrize(
        "state,terminal",
        [
            (UploadState.CREATED, False),
            (UploadState.INITIALIZED, False),
            (UploadState.APPENDING, False),
            (UploadState.FINALIZED, True),
            (UploadState.FAILED, True),
        ],
    )
    def test_is_terminal(self, state, terminal):
        assert state.is_terminal is terminal


class TestMediaCategory:
    """Test MediaCategory content type mapping."""

    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("video/mp4", MediaCategory.TWEET_VIDEO),
            ("image/png", MediaCategory.TWEET_IMAGE),
            ("IMAGE/JPEG", MediaCategory.TWEET_IMAGE),
            ("image/gif", MediaCategory.TWEET_GIF),
            ("application/pdf", None),
            (None, None),
        ],
    )
    def test_for_content_type(self, content_type, expected):
        assert MediaCategory.for_content_type(content_type) is expected

    def test_values_are_wire_strings(self):
        assert MediaCategory.TWEET_VIDEO == "tweet_video"
