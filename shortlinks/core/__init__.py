"""Core package - configuration, errors, logging and HTTP plumbing."""

from .config import settings, get_settings, Settings
from .errors import ErrorKind, ShortenerError, STATUS_CODES

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "ErrorKind",
    "ShortenerError",
    "STATUS_CODES",
]
