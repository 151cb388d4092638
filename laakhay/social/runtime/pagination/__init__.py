"""Cursor-based pagination shared by every list endpoint."""

from .cursor import FetchPage, PaginationCursor, flatten, paginate

__all__ = [
    "FetchPage",
    "PaginationCursor",
    "flatten",
    "paginate",
]
