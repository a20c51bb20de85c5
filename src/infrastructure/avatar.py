"""Gravatar URL derivation."""

import hashlib
from urllib.parse import urlencode

from core.config import settings

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"


def gravatar_url(
    email: str,
    size: int = settings.avatar_size,
    rating: str = settings.avatar_rating,
    default: str = settings.avatar_default,
) -> str:
    """Build the gravatar image URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}/{digest}?{query}"
