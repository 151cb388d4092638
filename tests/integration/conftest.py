"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from laakhay.social import ClientConfig, SocialClient

# Skip all integration tests unless RUN_LAAKHAY_SOCIAL_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LAAKHAY_SOCIAL_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_LAAKHAY_SOCIAL_NETWORK_TESTS=1 to run",
)


@pytest_asyncio.fixture
async def client():
    config = ClientConfig.from_env()
    if not config.bearer_token:
        pytest.skip("LAAKHAY_SOCIAL_BEARER_TOKEN is not set")
    async with SocialClient(config) as client:
        yield client
