"""Unit tests for the endpoint registry."""

import pytest

from laakhay.social.core import SpaceState
from laakhay.social.endpoints import get_endpoint_definition, get_endpoint_spec, list_endpoints


def test_unknown_endpoint():
    assert get_endpoint_definition("nope") is None
    assert get_endpoint_spec("nope") is None


@pytest.mark.parametrize(
    "endpoint_id,token_param",
    [
        ("search_recent", "next_token"),
        ("search_all", "next_token"),
        ("count_all", "next_token"),
        ("get_user_tweets", "pagination_token"),
        ("get_following_users", "pagination_token"),
        ("get_list_members", "pagination_token"),
    ],
)
def test_paginated_endpoints(endpoint_id, token_param):
    spec = get_endpoint_spec(endpoint_id)
    assert spec.paginated
    assert spec.token_param == token_param
    assert endpoint_id in list_endpoints(paginated=True)


def test_non_paginated_endpoints():
    paginated = set(list_endpoints(paginated=True))
    for endpoint_id in ("get_tweets", "create_tweet", "get_me", "follow_user", "create_list"):
        assert endpoint_id not in paginated
        assert endpoint_id in list_endpoints()


def test_get_tweets_defaults():
    bound = get_endpoint_definition("get_tweets").bind({"ids": ["1", "2"]})
    query = get_endpoint_definition("get_tweets").build_query(bound)
    assert query["ids"] == "1,2"
    assert "author_id" in query["expansions"]
    assert "tweet.fields" in query


def test_follow_user_request():
    definition = get_endpoint_definition("follow_user")
    bound = definition.bind({"source_user_id": 1, "target_user_id": 2})
    assert definition.method == "POST"
    assert definition.build_path(bound) == "/2/users/1/following"
    assert definition.build_body(bound) == {"target_user_id": "2"}


def test_list_membership_pair():
    add = get_endpoint_definition("add_list_member")
    remove = get_endpoint_definition("delete_list_member")
    assert add.build_path({"list_id": "9"}) == "/2/lists/9/members"
    assert remove.method == "DELETE"
    assert remove.build_path({"list_id": "9", "user_id": "3"}) == "/2/lists/9/members/3"


def test_list_endpoints_sorted():
    endpoints = list_endpoints()
    assert endpoints == sorted(endpoints)
    assert len(endpoints) == len(set(endpoints))


def test_search_spaces_state_enum():
    definition = get_endpoint_definition("search_spaces")
    bound = definition.bind({"query": "python", "state": SpaceState.LIVE})
    assert definition.build_query(bound) == {"query": "python", "state": "live"}
