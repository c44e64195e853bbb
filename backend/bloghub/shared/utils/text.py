"""
Text helpers for URL slugs.
"""

import re
import secrets
import unicodedata


_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str, max_length: int = 80) -> str:
    """
    Lowercase ASCII slug of value.

    Accents are folded ("Café" → "cafe"), any run of other characters
    becomes a single hyphen. Falls back to "post" when nothing survives.

    Example:
        slugify("Hidden Gems of Northeast India!")  # "hidden-gems-of-northeast-india"
    """
    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", ascii_value.lower()).strip("-")
    slug = slug[:max_length].rstrip("-")
    return slug or "post"


def random_suffix(length: int = 6) -> str:
    return secrets.token_hex(length // 2)
