"""
Utility functions for Browser Agent.

Provides helpers for text processing and log sanitizing.
"""

import re


ELLIPSIS = "…"


def truncate_text(text: str, max_chars: int, suffix: str = ELLIPSIS) -> str:
    """Cut text to max_chars and mark the cut with a suffix.

    The suffix is appended after the kept characters, so a truncated
    result is max_chars + len(suffix) long.

    Args:
        text: Text to truncate
        max_chars: Maximum number of characters kept
        suffix: Marker appended when truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + suffix


def is_password_field(selector: str) -> bool:
    """Check if a selector likely refers to a password field.

    Args:
        selector: The selector to check

    Returns:
        True if likely a password field
    """
    password_patterns = [
        r'password',
        r'type=["\']?password',
        r'#pass',
        r'\.pass',
        r'passwd',
        r'pwd',
    ]
    selector_lower = selector.lower()
    return any(re.search(p, selector_lower) for p in password_patterns)


def slugify(text: str, max_length: int = 30) -> str:
    """Convert text to a filesystem-safe slug."""
    slug = re.sub(r'[^\w\s-]', '', text.lower())
    slug = re.sub(r'[-\s]+', '_', slug).strip('_')
    return slug[:max_length] or "query"
