"""Space endpoints."""

from __future__ import annotations

from .definitions import EndpointDefinition, query_fields

_SELECTORS = ("expansions", "space_fields", "user_fields")

DEFINITIONS = (
    EndpointDefinition(
        id="get_spaces",
        method="GET",
        path="/2/spaces",
        query=query_fields("ids", *_SELECTORS),
        required=("ids",),
    ),
    EndpointDefinition(
        id="get_spaces_by_creator_ids",
        method="GET",
        path="/2/spaces/by/creator_ids",
        query=query_fields("user_ids", *_SELECTORS),
        required=("user_ids",),
    ),
    EndpointDefinition(
        id="search_spaces",
        method="GET",
        path="/2/spaces/search",
        query=query_fields("query", "state", "max_results", *_SELECTORS),
        required=("query", "state"),
    ),
)
