"""User endpoints: lookup, follows, blocks, mutes."""

from __future__ import annotations

from ..config import DefaultFields
from .definitions import EndpointDefinition, query_fields

_LOOKUP_DEFAULTS = {
    "expansions": DefaultFields.user_expansions,
    "tweet_fields": DefaultFields.tweet_fields,
    "user_fields": DefaultFields.user_fields,
}
_RELATION_QUERY = query_fields(
    "expansions", "max_results", "pagination_token", "tweet_fields", "user_fields"
)


def _relation_list(endpoint_id: str, relation: str) -> EndpointDefinition:
    return EndpointDefinition(
        id=endpoint_id,
        method="GET",
        path=f"/2/users/{{user_id}}/{relation}",
        query=_RELATION_QUERY,
        token_param="pagination_token",
        defaults={"expansions": DefaultFields.user_expansions},
    )


def _relation_pair(relation: str) -> tuple[EndpointDefinition, EndpointDefinition]:
    """POST/DELETE endpoints creating and removing a user-to-user relation."""
    verb = {"following": "follow", "blocking": "block", "muting": "mute"}[relation]
    create = EndpointDefinition(
        id=f"{verb}_user",
        method="POST",
        path=f"/2/users/{{source_user_id}}/{relation}",
        body={"target_user_id": "target_user_id"},
        required=("target_user_id",),
    )
    remove = EndpointDefinition(
        id=f"un{verb}_user",
        method="DELETE",
        path=f"/2/users/{{source_user_id}}/{relation}/{{target_user_id}}",
    )
    return create, remove


DEFINITIONS = (
    EndpointDefinition(
        id="get_users",
        method="GET",
        path="/2/users",
        query=query_fields("ids", "expansions", "tweet_fields", "user_fields"),
        defaults=_LOOKUP_DEFAULTS,
        required=("ids",),
    ),
    EndpointDefinition(
        id="get_users_by",
        method="GET",
        path="/2/users/by",
        query=query_fields("usernames", "expansions", "tweet_fields", "user_fields"),
        defaults=_LOOKUP_DEFAULTS,
        required=("usernames",),
    ),
    EndpointDefinition(
        id="get_me",
        method="GET",
        path="/2/users/me",
        query=query_fields("expansions", "tweet_fields", "user_fields"),
        defaults=_LOOKUP_DEFAULTS,
    ),
    _relation_list("get_following_users", "following"),
    _relation_list("get_follower_users", "followers"),
    _relation_list("get_blocking_users", "blocking"),
    _relation_list("get_muting_users", "muting"),
    *_relation_pair("following"),
    *_relation_pair("blocking"),
    *_relation_pair("muting"),
)
