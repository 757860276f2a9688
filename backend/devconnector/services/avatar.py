import hashlib
from urllib.parse import urlencode

GRAVATAR_BASE_URL = "//www.gravatar.com/avatar/"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Build a protocol-relative Gravatar URL for an email address"""
    # Gravatar hashes the trimmed, lower-cased address
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}{digest}?{query}"
