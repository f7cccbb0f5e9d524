"""Utils package for the short links service."""

from .shortener import (
    generate_link_id,
    is_valid_link_id,
    sanitize_url_input,
    create_short_url,
)

__all__ = [
    "generate_link_id",
    "is_valid_link_id",
    "sanitize_url_input",
    "create_short_url",
]
