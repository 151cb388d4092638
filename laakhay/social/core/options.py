"""Three-state request options.

A request parameter can be:

- omitted by the caller (``UNSET``): the endpoint default applies, if any;
- explicitly ``None``: the parameter is left out of the request even when the
  endpoint declares a default;
- any other value: sent as given.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset.UNSET


def resolve_option(value: Any, default: Any = UNSET) -> Any:
    """Resolve a three-state option against an endpoint default.

    Returns ``UNSET`` when nothing should be sent.
    """
    if value is UNSET:
        return default
    if value is None:
        return UNSET
    return value


def is_unset(value: Any) -> bool:
    return value is UNSET
