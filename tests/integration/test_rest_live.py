"""Integration tests against the live API."""

import os

import pytest

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LAAKHAY_SOCIAL_NETWORK_TESTS") != "1",
    reason="Requires network access and API credentials",
)


class TestLiveRest:
    """Read-only calls against the live API."""

    @pytest.mark.asyncio
    async def test_get_users_by_username(self, client):
        envelope = await client.fetch("get_users_by", usernames=["TwitterDev"])
        assert envelope.first()["username"].lower() == "twitterdev"

    @pytest.mark.asyncio
    async def test_search_recent_two_pages(self, client):
        pages = [
            page
            async for page in client.paginate(
                "search_recent", query="python -is:retweet", max_results=10, max_pages=2
            )
        ]
        assert 1 <= len(pages) <= 2
        assert all(len(page.data) <= 10 for page in pages)
