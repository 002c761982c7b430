"""Text processing utility functions for the site data pipeline."""

import re

# Placeholder some exports use for "no value"
MISSING_SENTINEL = "N/A"


def clean_value(value) -> str:
    """Convert a raw cell to a stripped string ("" for None)."""
    if value is None:
        return ""
    return str(value).strip()


def is_missing(value) -> bool:
    """True for None, empty, whitespace-only, or the "N/A" sentinel."""
    text = clean_value(value)
    return text == "" or text == MISSING_SENTINEL


def title_case(text: str) -> str:
    """Title-case each whitespace-separated token.

    Unlike ``str.title`` this leaves apostrophes and hyphenated parts alone,
    so "o'brien's" stays "O'brien's" instead of "O'Brien'S".
    """
    return " ".join(token[:1].upper() + token[1:].lower() for token in text.split())


def split_on(value, pattern: str) -> list[str]:
    """Split a delimited cell, trimming parts and dropping empty ones.

    Args:
        value: Raw cell value
        pattern: Regex character class of delimiters, e.g. ``[;,|]``

    Returns:
        List of non-empty trimmed parts
    """
    text = clean_value(value)
    if not text:
        return []
    parts = (part.strip() for part in re.split(pattern, text))
    return [part for part in parts if part]
