"""Models package for the short links service."""

from .link import LinkRecord

__all__ = ["LinkRecord"]
