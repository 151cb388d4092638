"""Tweet endpoints: lookup, manage, timelines, search, counts, engagement."""

from __future__ import annotations

from ..config import DefaultFields
from .definitions import EndpointDefinition, query_fields

_TWEET_SELECTORS = (
    "expansions",
    "media_fields",
    "place_fields",
    "poll_fields",
    "tweet_fields",
    "user_fields",
)
_WINDOW = ("start_time", "end_time", "since_id", "until_id")

_TIMELINE_QUERY = query_fields(
    *_TWEET_SELECTORS, *_WINDOW, "max_results", "pagination_token", "exclude"
)
_SEARCH_QUERY = query_fields("query", *_TWEET_SELECTORS, *_WINDOW, "max_results", "next_token")


def _engagement_users(endpoint_id: str, action: str) -> EndpointDefinition:
    return EndpointDefinition(
        id=endpoint_id,
        method="GET",
        path=f"/2/tweets/{{tweet_id}}/{action}",
        query=query_fields("expansions", "tweet_fields", "user_fields"),
    )


DEFINITIONS = (
    EndpointDefinition(
        id="get_tweets",
        method="GET",
        path="/2/tweets",
        query=query_fields("ids", *_TWEET_SELECTORS),
        defaults={
            "expansions": DefaultFields.expansions,
            "media_fields": DefaultFields.media_fields,
            "place_fields": DefaultFields.place_fields,
            "poll_fields": DefaultFields.poll_fields,
            "tweet_fields": DefaultFields.tweet_fields,
            "user_fields": DefaultFields.user_fields,
        },
        required=("ids",),
    ),
    EndpointDefinition(
        id="create_tweet",
        method="POST",
        path="/2/tweets",
        body={
            "text": "text",
            "direct_message_deep_link": "direct_message_deep_link",
            "for_super_followers_only": "for_super_followers_only",
            "place_id": "geo.place_id",
            "media_ids": "media.media_ids",
            "tagged_user_ids": "media.tagged_user_ids",
            "poll_duration_minutes": "poll.duration_minutes",
            "poll_options": "poll.options",
            "quote_tweet_id": "quote_tweet_id",
            "exclude_reply_user_ids": "reply.exclude_reply_user_ids",
            "in_reply_to_tweet_id": "reply.in_reply_to_tweet_id",
            "reply_settings": "reply_settings",
        },
    ),
    EndpointDefinition(id="delete_tweet", method="DELETE", path="/2/tweets/{id}"),
    EndpointDefinition(
        id="get_user_tweets",
        method="GET",
        path="/2/users/{user_id}/tweets",
        query=_TIMELINE_QUERY,
        token_param="pagination_token",
    ),
    EndpointDefinition(
        id="get_user_mentions",
        method="GET",
        path="/2/users/{user_id}/mentions",
        query={k: v for k, v in _TIMELINE_QUERY.items() if k != "exclude"},
        token_param="pagination_token",
    ),
    EndpointDefinition(
        id="get_reverse_chronological_timeline",
        method="GET",
        path="/2/users/{user_id}/timelines/reverse_chronological",
        query=_TIMELINE_QUERY,
        token_param="pagination_token",
    ),
    EndpointDefinition(
        id="search_recent",
        method="GET",
        path="/2/tweets/search/recent",
        query=_SEARCH_QUERY,
        token_param="next_token",
        required=("query",),
    ),
    EndpointDefinition(
        id="search_all",
        method="GET",
        path="/2/tweets/search/all",
        query=_SEARCH_QUERY,
        token_param="next_token",
        required=("query",),
    ),
    EndpointDefinition(
        id="count_recent",
        method="GET",
        path="/2/tweets/counts/recent",
        query=query_fields("query", "granularity", *_WINDOW),
        required=("query",),
    ),
    EndpointDefinition(
        id="count_all",
        method="GET",
        path="/2/tweets/counts/all",
        query=query_fields("query", "granularity", *_WINDOW, "next_token"),
        token_param="next_token",
        required=("query",),
    ),
    _engagement_users("get_retweet_users", "retweeted_by"),
    _engagement_users("get_liking_users", "liking_users"),
    EndpointDefinition(
        id="get_quote_tweets",
        method="GET",
        path="/2/tweets/{id}/quote_tweets",
        query=query_fields(*_TWEET_SELECTORS, "max_results", "exclude", "pagination_token"),
        token_param="pagination_token",
    ),
    EndpointDefinition(
        id="retweet",
        method="POST",
        path="/2/users/{user_id}/retweets",
        body={"tweet_id": "tweet_id"},
        required=("tweet_id",),
    ),
    EndpointDefinition(
        id="unretweet",
        method="DELETE",
        path="/2/users/{user_id}/retweets/{tweet_id}",
    ),
    EndpointDefinition(
        id="get_liked_tweets",
        method="GET",
        path="/2/users/{user_id}/liked_tweets",
        query=query_fields(*_TWEET_SELECTORS, "max_results", "pagination_token"),
        token_param="pagination_token",
    ),
    EndpointDefinition(
        id="like_tweet",
        method="POST",
        path="/2/users/{user_id}/likes",
        body={"tweet_id": "tweet_id"},
        required=("tweet_id",),
    ),
    EndpointDefinition(
        id="unlike_tweet",
        method="DELETE",
        path="/2/users/{user_id}/likes/{tweet_id}",
    ),
    EndpointDefinition(
        id="get_bookmarks",
        method="GET",
        path="/2/users/{id}/bookmarks",
        query=query_fields(*_TWEET_SELECTORS, "max_results", "pagination_token"),
        token_param="pagination_token",
    ),
    EndpointDefinition(
        id="add_bookmark",
        method="POST",
        path="/2/users/{id}/bookmarks",
        body={"tweet_id": "tweet_id"},
        required=("tweet_id",),
    ),
    EndpointDefinition(
        id="delete_bookmark",
        method="DELETE",
        path="/2/users/{id}/bookmarks/{tweet_id}",
    ),
    EndpointDefinition(
        id="hide_replies",
        method="PUT",
        path="/2/tweets/{tweet_id}/hidden",
        body={"hidden": "hidden"},
        required=("hidden",),
    ),
)
