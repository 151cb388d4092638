"""Unit tests for SocialClient.

Tests focus on endpoint dispatch, pagination wiring, uploads and lifecycle,
using a mock request executor.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from laakhay.social import ClientConfig, SocialClient
from laakhay.social.core import ConfigurationError, MediaCategory
from laakhay.social.runtime.pagination import PaginationCursor
from laakhay.social.runtime.rest import RawResponse, RESTTransport

MEDIA_ID = 710511363345354753


def _json(payload, status=200):
    return RawResponse(status=status, body=json.dumps(payload).encode())


def _page(ids, next_token=None):
    meta = {"result_count": len(ids)}
    if next_token:
        meta["next_token"] = next_token
    return _json({"data": [{"id": i} for i in ids], "meta": meta})


@pytest.fixture
def executor():
    executor = AsyncMock()
    executor.execute = AsyncMock(return_value=_json({"data": {"id": "1", "username": "me"}}))
    return executor


@pytest.fixture
def client(executor):
    return SocialClient(ClientConfig(bearer_token="token"), executor=executor)


class TestSocialClientFetch:
    """Test SocialClient.fetch."""

    @pytest.mark.asyncio
    async def test_fetch_get_me(self, client, executor):
        envelope = await client.fetch("get_me", tweet_fields=None, expansions=None)

        assert envelope.first() == {"id": "1", "username": "me"}
        args, kwargs = executor.execute.call_args
        assert args == ("GET", "/2/users/me")
        assert kwargs["headers"] == {"Authorization": "Bearer token"}
        assert "tweet.fields" not in kwargs["params"]
        assert "expansions" not in kwargs["params"]
        assert "user.fields" in kwargs["params"]

    @pytest.mark.asyncio
    async def test_fetch_post_body(self, client, executor):
        executor.execute.return_value = _json({"data": {"id": "5", "text": "hi"}}, status=201)

        await client.fetch("create_tweet", text="hi", media_ids=[MEDIA_ID])

        args, kwargs = executor.execute.call_args
        assert args == ("POST", "/2/tweets")
        assert kwargs["body"] == {"text": "hi", "media": {"media_ids": [str(MEDIA_ID)]}}
        assert kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_unknown_endpoint(self, client, executor):
        with pytest.raises(ConfigurationError, match="Unknown REST endpoint"):
            await client.fetch("get_everything")
        executor.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_auth_header_factory(self, executor):
        client = SocialClient(executor=executor, auth_headers=lambda: {"Authorization": "OAuth x"})

        await client.fetch("get_me")

        _, kwargs = executor.execute.call_args
        assert kwargs["headers"] == {"Authorization": "OAuth x"}

    def test_bearer_token_override(self, executor):
        client = SocialClient(ClientConfig(bearer_token="a"), bearer_token="b", executor=executor)
        assert client.config.bearer_token == "b"


class TestSocialClientPagination:
    """Test pagination wiring."""

    @pytest.mark.asyncio
    async def test_paginate_threads_next_token(self, client, executor):
        executor.execute.side_effect = [_page(["1", "2"], "abc"), _page(["3"])]

        pages = [page async for page in client.paginate("search_recent", query="python")]

        assert [len(p.data) for p in pages] == [2, 1]
        first_query = executor.execute.call_args_list[0].kwargs["params"]
        second_query = executor.execute.call_args_list[1].kwargs["params"]
        assert first_query == {"query": "python"}
        assert second_query == {"query": "python", "next_token": "abc"}

    @pytest.mark.asyncio
    async def test_paginate_initial_token_and_max_pages(self, client, executor):
        executor.execute.side_effect = [_page(["1"], "t2")]

        pages = [
            page
            async for page in client.paginate(
                "get_user_tweets", user_id="42", initial_token="t1", max_pages=1
            )
        ]

        assert len(pages) == 1
        args, kwargs = executor.execute.call_args
        assert args == ("GET", "/2/users/42/tweets")
        assert kwargs["params"] == {"pagination_token": "t1"}

    def test_paginate_non_paginated_endpoint(self, client):
        with pytest.raises(ConfigurationError, match="not paginated"):
            client.paginate("get_tweets", ids=["1"])

    @pytest.mark.asyncio
    async def test_token_parameter_is_not_fixed(self, client, executor):
        executor.execute.side_effect = [_page(["1"])]
        fetch = client.page_fetcher("search_recent", query="q", next_token="ignored")

        await PaginationCursor().next_page(fetch)

        assert executor.execute.call_args.kwargs["params"] == {"query": "q"}

    @pytest.mark.asyncio
    async def test_iter_records_limit(self, client, executor):
        executor.execute.side_effect = [_page(["1", "2"], "a"), _page(["3", "4"], "b")]

        records = [r async for r in client.iter_records("search_recent", query="q", limit=3)]

        assert [r["id"] for r in records] == ["1", "2", "3"]
        assert executor.execute.await_count == 2


class TestSocialClientMedia:
    """Test media uploads through the client."""

    @pytest.fixture
    def upload_executor(self):
        async def execute(method, path, params=None, headers=None, body=None):
            command = body.fields["command"]
            if command == "APPEND":
                return RawResponse(status=204)
            return _json({"media_id": MEDIA_ID}, status=201)

        executor = AsyncMock()
        executor.execute = AsyncMock(side_effect=execute)
        return executor

    @pytest.mark.asyncio
    async def test_upload_media(self, upload_executor):
        client = SocialClient(
            ClientConfig(bearer_token="t", upload_base_url="https://upload.example.com"),
            executor=upload_executor,
        )

        media_id = await client.upload_media(b"x" * 10, "image/png", chunk_size=4)

        assert media_id == MEDIA_ID
        calls = upload_executor.execute.call_args_list
        assert len(calls) == 5
        assert {c.args[1] for c in calls} == {
            "https://upload.example.com/1.1/media/upload.json"
        }
        assert all(c.kwargs["headers"] == {"Authorization": "Bearer t"} for c in calls)

    @pytest.mark.asyncio
    async def test_upload_file_guesses_type_and_category(self, upload_executor, tmp_path):
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"v" * 100)
        client = SocialClient(executor=upload_executor)

        assert await client.upload_file(path) == MEDIA_ID

        init = upload_executor.execute.call_args_list[0].kwargs["body"]
        assert init.fields["media_type"] == "video/mp4"
        assert init.fields["media_category"] == MediaCategory.TWEET_VIDEO.value
        assert init.fields["total_bytes"] == "100"
        append = upload_executor.execute.call_args_list[1].kwargs["body"]
        assert append.files[0].filename == "clip.mp4"

    @pytest.mark.asyncio
    async def test_upload_file_unknown_type(self, upload_executor, tmp_path):
        path = tmp_path / "blob.unknownext"
        path.write_bytes(b"x")
        client = SocialClient(executor=upload_executor)

        with pytest.raises(ConfigurationError, match="content type"):
            await client.upload_file(path)
        upload_executor.execute.assert_not_awaited()

    def test_media_session_uses_config_chunk_size(self, upload_executor):
        client = SocialClient(ClientConfig(chunk_size=1024), executor=upload_executor)
        assert client.media_session().chunk_size == 1024
        assert client.media_session(chunk_size=10).chunk_size == 10


class TestSocialClientLifecycle:
    """Test resource ownership."""

    @pytest.mark.asyncio
    async def test_owned_transport_is_closed(self):
        with patch.object(RESTTransport, "close", new_callable=AsyncMock) as close:
            async with SocialClient() as client:
                assert isinstance(client._executor, RESTTransport)
            await client.close()
        close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_injected_executor_is_not_closed(self, executor):
        async with SocialClient(executor=executor):
            pass
        executor.close.assert_not_awaited()
