from __future__ import annotations

import re
from urllib.parse import quote, urlencode, urlsplit

from .errors import InvalidPath

# Characters allowed anywhere in a URI (RFC 3986 unreserved + reserved + '%').
_URI_CHARS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")


def join(*segments: str) -> str:
    """Join path segments with a single ``/``.

    Slashes around each segment are trimmed and empty segments are dropped,
    so ``join("http://h/index", "", "42")`` is ``http://h/index/42``.
    """
    parts = []
    for seg in segments:
        seg = seg.strip("/")
        if seg:
            parts.append(seg)
    return "/".join(parts)


def validate(uri: str) -> str:
    if not uri or not _URI_CHARS.match(uri):
        raise InvalidPath(uri)
    try:
        parts = urlsplit(uri)
    except ValueError as e:
        raise InvalidPath(uri) from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidPath(uri)
    return uri


def compose(base: str, *segments: str) -> str:
    return validate(join(base, *segments))


def with_query(uri: str, **params: str) -> str:
    return validate(f"{uri}?{urlencode(params)}")


def quote_segment(value: str) -> str:
    """Percent-encode a free-form key or value so it stays one path segment."""
    return quote(value, safe="")


def segment(name: str) -> str:
    """Check that `name` stays a single path segment once joined."""
    if any(c in name for c in "/?#") or (name and not _URI_CHARS.match(name)):
        raise InvalidPath(name)
    return name
