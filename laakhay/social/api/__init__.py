"""High-level client API."""

from .client import SocialClient

__all__ = ["SocialClient"]
