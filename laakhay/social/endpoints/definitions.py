"""Generic endpoint definition.

Every simple endpoint of the API is the same mechanical mapping: a path
template, a whitelist of query parameters, a whitelist of JSON body fields
and some defaults. ``EndpointDefinition`` captures that mapping once and
compiles into a ``RestEndpointSpec`` for the runner.

Parameter handling:
    - Parameter names are python identifiers (``tweet_fields``); the wire
      name may differ (``tweet.fields``).
    - Body wire names may be dotted to nest (``media.media_ids`` becomes
      ``{"media": {"media_ids": [...]}}``).
    - Omitted parameters take the endpoint default; an explicit None drops
      the parameter even when a default exists (see ``core.options``).
    - Field selectors and expansions are opaque strings, forwarded verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from string import Formatter
from typing import Any
from urllib.parse import quote

from ..core.exceptions import ConfigurationError
from ..core.options import UNSET, resolve_option
from ..runtime.rest import RestEndpointSpec

# Wire names of the field-selector parameters; other names map to themselves
_WIRE_NAMES = {
    "list_fields": "list.fields",
    "media_fields": "media.fields",
    "place_fields": "place.fields",
    "poll_fields": "poll.fields",
    "space_fields": "space.fields",
    "tweet_fields": "tweet.fields",
    "user_fields": "user.fields",
}


def query_fields(*names: str) -> dict[str, str]:
    """Map python parameter names to their wire names."""
    return {name: _WIRE_NAMES.get(name, name) for name in names}


def format_timestamp(value: datetime) -> str:
    """RFC 3339 UTC timestamp; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def serialize_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(serialize_query_value(v) for v in value)
    return str(value)


def serialize_body_value(value: Any, *, ids: bool = False) -> Any:
    """Serialize a JSON body value.

    Identifiers (``ids=True``) are sent as strings, as the API expects.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_body_value(v, ids=ids) for v in value]
    if ids and isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _path_params(template: str) -> tuple[str, ...]:
    return tuple(name for _, name, _, _ in Formatter().parse(template) if name)


@dataclass(frozen=True)
class EndpointDefinition:
    """Declarative description of one REST endpoint.

    Attributes:
        id: Endpoint identifier (e.g. "search_recent")
        method: HTTP method
        path: Path template with ``{name}`` placeholders
        query: Query whitelist, parameter name -> wire name
        body: JSON body whitelist, parameter name -> dotted wire path
        token_param: Pagination token parameter (None if not paginated)
        defaults: Values applied when the caller omits a parameter
        required: Parameters that must be present besides path parameters
    """

    id: str
    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, str] = field(default_factory=dict)
    token_param: str | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.token_param is not None and self.token_param not in self.query:
            raise ValueError(f"{self.id}: token_param {self.token_param!r} is not a query field")

    @property
    def path_params(self) -> tuple[str, ...]:
        return _path_params(self.path)

    @property
    def paginated(self) -> bool:
        return self.token_param is not None

    @property
    def parameters(self) -> frozenset[str]:
        return frozenset((*self.path_params, *self.query, *self.body))

    def bind(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Validate caller parameters and apply defaults.

        Returns:
            The parameters to send; omitted-without-default and explicit-None
            parameters are absent.

        Raises:
            ConfigurationError: Unknown or missing parameters
        """
        allowed = self.parameters
        unknown = sorted(set(params) - allowed)
        if unknown:
            raise ConfigurationError(
                f"Unknown parameter(s) for endpoint '{self.id}': {', '.join(unknown)}"
            )

        bound: dict[str, Any] = {}
        for name in allowed:
            value = resolve_option(params.get(name, UNSET), self.defaults.get(name, UNSET))
            if value is not UNSET:
                bound[name] = value

        missing = [name for name in (*self.path_params, *self.required) if name not in bound]
        if missing:
            raise ConfigurationError(
                f"Missing required parameter(s) for endpoint '{self.id}': {', '.join(missing)}"
            )
        return bound

    def build_path(self, params: dict[str, Any]) -> str:
        values = {
            name: quote(serialize_query_value(params[name]), safe="")
            for name in self.path_params
        }
        return self.path.format(**values)

    def build_query(self, params: dict[str, Any]) -> dict[str, str]:
        return {
            wire: serialize_query_value(params[name])
            for name, wire in self.query.items()
            if name in params
        }

    def build_body(self, params: dict[str, Any]) -> dict[str, Any] | None:
        if not self.body:
            return None
        body: dict[str, Any] = {}
        for name, wire in self.body.items():
            if name not in params:
                continue
            *parents, leaf = wire.split(".")
            target = body
            for part in parents:
                target = target.setdefault(part, {})
            target[leaf] = serialize_body_value(
                params[name], ids=leaf.endswith(("_id", "_ids"))
            )
        return body

    def to_spec(self) -> RestEndpointSpec:
        """Compile into a runner spec."""
        return RestEndpointSpec(
            id=self.id,
            method=self.method,
            build_path=self.build_path,
            build_query=self.build_query if self.query else None,
            build_body=self.build_body if self.body else None,
            token_param=self.token_param,
        )
