"""Text, URL and ingredient normalization for duplicate comparison."""

import re
from collections.abc import Iterable
from urllib.parse import urlsplit

from recipebox.models.recipe import Ingredient

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Canonicalize free text for comparison.

    Lowercases, trims, drops anything that is not a word character or
    whitespace, then collapses whitespace runs to a single space.

    Args:
        text: Raw text

    Returns:
        Normalized text
    """
    text = _PUNCTUATION_RE.sub("", text.lower().strip())
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_url(url: str) -> str:
    """Reduce a URL to ``scheme://host/path`` for equality checks.

    Query string, fragment, port and trailing slash are discarded. Input that
    does not parse as an absolute URL is returned lowercased and trimmed.

    Args:
        url: URL string

    Returns:
        Normalized URL
    """
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        return url.lower().strip()

    if not parts.scheme or not hostname:
        return url.lower().strip()

    path = parts.path.rstrip("/")
    return f"{parts.scheme}://{hostname}{path}".lower()


def normalize_ingredients(ingredients: Iterable[Ingredient]) -> list[str]:
    """Normalized ingredient names in sorted order."""
    return sorted(normalize_text(ingredient.name) for ingredient in ingredients)
