"""Text normalization shared by food matching and legacy parsing."""

import re
import unicodedata

_TOKEN_SPLIT = re.compile(r"[\s,]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, strip diacritics and trim surrounding whitespace."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.strip()


def normalize(text: str) -> list[str]:
    """Return normalized tokens longer than one character."""
    return [token for token in _TOKEN_SPLIT.split(normalize_text(text)) if len(token) > 1]


def collapse_whitespace(text: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return _WHITESPACE.sub(" ", text).strip()
