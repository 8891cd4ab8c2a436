"""
URL resolution and same-domain link filtering.
"""
from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urljoin, urlsplit

ALLOWED_SCHEMES: frozenset[str] = frozenset(("http", "https"))

DEFAULT_PORTS = {"http": 80, "https": 443}


def canonical(url: str) -> str:
    """
    Return the canonical string form of an absolute URL.

    Scheme and host are lower-cased and an empty http(s) path becomes "/".
    Userinfo, path, query and fragment are left exactly as written.
    """
    parts = urlsplit(url)
    prefix = url[:len(parts.scheme) + 3]
    if not parts.scheme or prefix.lower() != parts.scheme + "://":
        return url

    end = len(prefix) + len(parts.netloc)
    if url[len(prefix):end] != parts.netloc:
        return url

    rest = url[end:]
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()
    if parts.scheme in ALLOWED_SCHEMES and netloc and not parts.path:
        rest = "/" + rest
    return f"{parts.scheme}://{netloc}{rest}"


def resolve(base: str, raw: str) -> Optional[str]:
    """
    Resolve an href value against the URL of the page it was found on.

    - Absolute URLs (anything with a scheme) are returned as-is
    - Relative references are joined against base
    - Values urllib cannot parse at all give None
    """
    raw = raw.strip()
    try:
        if urlsplit(raw).scheme:
            return canonical(raw)
        return canonical(urljoin(base, raw))
    except ValueError:
        return None


def strip_fragment(url: str) -> str:
    """Drop the #fragment component."""
    return url.split("#", 1)[0]


def domain(url: str) -> Optional[str]:
    """Host component of the URL, without port."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def origin(url: str) -> Tuple[str, Optional[str], Optional[int]]:
    """(scheme, host, effective port) of the URL."""
    parts = urlsplit(url)
    try:
        port = parts.port
    except ValueError:
        port = None
    if port is None:
        port = DEFAULT_PORTS.get(parts.scheme)
    return parts.scheme, parts.hostname, port


def is_absolute(url: str) -> bool:
    """Check that url has a scheme and a host."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def is_eligible(current_url: str, candidate: str, strict_origin: bool = False) -> bool:
    """
    Check whether a discovered URL belongs in the frontier.

    Args:
        current_url: Fragment-free URL of the page being parsed.
        candidate: Fragment-free URL found on that page.
        strict_origin: Compare scheme and port as well as host.

    Returns:
        True for http(s) URLs on the same domain that are not the page itself.
    """
    try:
        scheme = urlsplit(candidate).scheme
    except ValueError:
        return False
    if scheme not in ALLOWED_SCHEMES:
        return False
    if candidate == current_url:
        return False
    if strict_origin:
        return origin(candidate) == origin(current_url)
    return domain(candidate) == domain(current_url)
