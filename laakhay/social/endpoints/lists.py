"""List endpoints: lookup, tweets, members, follows, pins, management."""

from __future__ import annotations

from .definitions import EndpointDefinition, query_fields

_PAGE = ("max_results", "pagination_token")


def _paged(endpoint_id: str, path: str, *selectors: str) -> EndpointDefinition:
    return EndpointDefinition(
        id=endpoint_id,
        method="GET",
        path=path,
        query=query_fields(*selectors, *_PAGE),
        token_param="pagination_token",
    )


def _membership(
    add_id: str, remove_id: str, path: str, key: str
) -> tuple[EndpointDefinition, EndpointDefinition]:
    """Add/remove pair for a list relation (member, follow, pin)."""
    add = EndpointDefinition(
        id=add_id,
        method="POST",
        path=path,
        body={key: key},
        required=(key,),
    )
    remove = EndpointDefinition(
        id=remove_id,
        method="DELETE",
        path=f"{path}/{{{key}}}",
    )
    return add, remove


DEFINITIONS = (
    EndpointDefinition(
        id="get_list",
        method="GET",
        path="/2/lists/{id}",
        query=query_fields("expansions", "list_fields", "user_fields"),
    ),
    _paged(
        "get_owned_lists", "/2/users/{id}/owned_lists", "expansions", "list_fields", "user_fields"
    ),
    _paged("get_list_tweets", "/2/lists/{id}/tweets", "expansions", "tweet_fields", "user_fields"),
    _paged(
        "get_list_members", "/2/lists/{id}/members", "expansions", "tweet_fields", "user_fields"
    ),
    _paged(
        "get_list_memberships",
        "/2/users/{id}/list_memberships",
        "expansions",
        "list_fields",
        "user_fields",
    ),
    _paged(
        "get_list_followers",
        "/2/lists/{id}/followers",
        "expansions",
        "tweet_fields",
        "user_fields",
    ),
    _paged("get_followed_lists", "/2/users/{id}/followed_lists", "expansions", "user_fields"),
    EndpointDefinition(
        id="get_pinned_lists",
        method="GET",
        path="/2/users/{id}/pinned_lists",
        query=query_fields("expansions", "list_fields", "user_fields"),
    ),
    EndpointDefinition(
        id="create_list",
        method="POST",
        path="/2/lists",
        body={"name": "name", "description": "description", "private": "private"},
        required=("name",),
    ),
    EndpointDefinition(id="delete_list", method="DELETE", path="/2/lists/{id}"),
    *_membership("add_list_member", "delete_list_member", "/2/lists/{list_id}/members", "user_id"),
    *_membership("follow_list", "unfollow_list", "/2/users/{user_id}/followed_lists", "list_id"),
    *_membership("pin_list", "unpin_list", "/2/users/{user_id}/pinned_lists", "list_id"),
)
