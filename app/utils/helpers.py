"""
Common utility functions and helpers.
"""
from typing import Optional
from datetime import datetime
import re
import time

UNTITLED_SLUG = "untitled"
SLUG_MAX_LENGTH = 255  # slug column width


def slugify(title: str) -> str:
    """
    Derive a URL-safe slug from a title.

    Lowercases, drops every character that is not an ASCII letter, digit or
    whitespace, then collapses whitespace runs into single hyphens.

    Args:
        title: Raw title string

    Returns:
        Slug made of ``[a-z0-9-]`` only (``"untitled"`` if nothing survives)

    Example:
        >>> slugify("My Cool Project!")
        'my-cool-project'
    """
    slug = title.lower()
    slug = re.sub(r'[^a-z0-9\s]', '', slug)
    slug = re.sub(r'\s+', '-', slug.strip())
    return slug or UNTITLED_SLUG


def timestamp_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def disambiguate_slug(slug: str) -> str:
    """
    Append the current millisecond timestamp to a colliding slug.

    The base is shortened first so the result still fits SLUG_MAX_LENGTH.
    """
    suffix = f"-{timestamp_ms()}"
    base = slug[:SLUG_MAX_LENGTH - len(suffix)].rstrip("-") or UNTITLED_SLUG
    return f"{base}{suffix}"


def truncate_text(text: str, max_length: int = 200, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def estimate_read_time(content: str, words_per_minute: int = 200) -> int:
    """Minutes needed to read ``content``; at least 1."""
    words = len(content.split())
    return max(1, -(-words // words_per_minute))


def format_date_range(start: Optional[datetime], end: Optional[datetime], current: bool = False) -> str:
    """Render ``"Mar 2022 – Present"`` style ranges for experience/education."""
    if start is None:
        return ""
    left = start.strftime("%b %Y")
    if current or end is None:
        return f"{left} – Present"
    return f"{left} – {end.strftime('%b %Y')}"
