"""REST endpoint registry.

This module collects the endpoint definitions of every resource group and
exposes them, compiled into runner specs, by endpoint id.
"""

from __future__ import annotations

from ..runtime.rest import RestEndpointSpec
from . import lists, spaces, tweets, users
from .definitions import EndpointDefinition, format_timestamp, query_fields

# Registry mapping endpoint IDs to definitions and compiled specs
_ENDPOINT_REGISTRY: dict[str, tuple[EndpointDefinition, RestEndpointSpec]] = {}

for _definition in (
    *tweets.DEFINITIONS,
    *users.DEFINITIONS,
    *spaces.DEFINITIONS,
    *lists.DEFINITIONS,
):
    if _definition.id in _ENDPOINT_REGISTRY:
        raise RuntimeError(f"Duplicate endpoint id: {_definition.id}")
    _ENDPOINT_REGISTRY[_definition.id] = (_definition, _definition.to_spec())


def get_endpoint_definition(endpoint_id: str) -> EndpointDefinition | None:
    """Get endpoint definition by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "search_recent", "get_me")

    Returns:
        EndpointDefinition if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get compiled endpoint specification by ID."""
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints(*, paginated: bool | None = None) -> list[str]:
    """Sorted endpoint ids, optionally filtered on pagination support."""
    return sorted(
        endpoint_id
        for endpoint_id, (definition, _) in _ENDPOINT_REGISTRY.items()
        if paginated is None or definition.paginated == paginated
    )


__all__ = [
    "EndpointDefinition",
    "format_timestamp",
    "get_endpoint_definition",
    "get_endpoint_spec",
    "list_endpoints",
    "query_fields",
]
