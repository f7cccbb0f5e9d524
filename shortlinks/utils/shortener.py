"""Link id and URL string helpers.

This module handles generation and shape checks of link ids, input
sanitization and construction of the public short URL.
"""

import re
import secrets


# Accepted shape of a link id on resolve
LINK_ID_PATTERN = re.compile(r"^[A-Za-z0-9]{1,32}$")

# Characters stripped from submitted URLs
MARKUP_CHARACTERS = re.compile(r"[<>]")


def generate_link_id(num_bytes: int = 4) -> str:
    """Generate a random hex link id.

    Args:
        num_bytes: Number of random bytes; the id has twice as many characters.

    Returns:
        Lowercase hex string from a cryptographically strong source.
    """
    return secrets.token_hex(num_bytes)


def is_valid_link_id(link_id: str) -> bool:
    """Check link id format.

    Args:
        link_id: Link id to check.

    Returns:
        True if the id is 1-32 alphanumeric characters, False otherwise.
    """
    if not link_id or not isinstance(link_id, str):
        return False
    return LINK_ID_PATTERN.match(link_id) is not None


def sanitize_url_input(value) -> str:
    """Trim whitespace and strip angle brackets.

    Args:
        value: Raw submitted value.

    Returns:
        Sanitized string, empty when the input is not a string.
    """
    if not isinstance(value, str):
        return ""
    return MARKUP_CHARACTERS.sub("", value.strip())


def create_short_url(base_url: str, link_id: str) -> str:
    """Create full short URL from base URL and link id.

    Args:
        base_url: Base URL of the service.
        link_id: Link id.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{link_id}"
