"""URL slug helpers."""

import re
import unicodedata

MAX_SLUG_SOURCE_LENGTH = 100
FALLBACK_SLUG = "paper"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_length: int = MAX_SLUG_SOURCE_LENGTH) -> str:
    """Lowercase ASCII, hyphen-separated slug of the first ``max_length`` chars."""
    normalized = unicodedata.normalize("NFKD", text[:max_length])
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = _NON_ALNUM.sub("-", ascii_text).strip("-")
    return slug or FALLBACK_SLUG


def with_suffix(base: str, n: int) -> str:
    """Disambiguated slug; n=1 is the base slug itself."""
    return base if n <= 1 else f"{base}-{n}"
