"""URL and filesystem path helpers shared by the resolvers and the assembler."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from ..infrastructure.exceptions import assert_internal

DIRECT_QUERY = "direct"


def to_posix_path(path: str) -> str:
    return path.replace("\\", "/")


def assert_posix_path(path: str) -> None:
    assert_internal("\\" not in path, "Expected a forward-slash path", path=path)


def normalize_path(url_path: str) -> str:
    """Canonicalize a URL path to forward slashes. Idempotent."""
    return to_posix_path(url_path)


def normalize_base_url(base_url: str) -> str:
    """Strip trailing slashes, keeping a lone ``/``."""
    stripped = base_url.rstrip("/")
    return stripped or "/"


def prepend_base_url(url: str, base_url: str) -> str:
    """
    Prefix ``url`` with ``base_url``, with a single ``/`` at the join point.

    Example:
        >>> prepend_base_url("/assets/index.js", "/app/")
        '/app/assets/index.js'
    """
    assert_internal(
        base_url.startswith("/") or base_url.startswith("http"),
        "Base URL must start with '/' or 'http'",
        base_url=base_url,
    )
    base = normalize_base_url(base_url)
    if base == "/":
        return url
    return f"{base}/{url.lstrip('/')}"


def has_direct_query(url: str) -> bool:
    query = parse_qs(urlsplit(url).query, keep_blank_values=True)
    return DIRECT_QUERY in query


def add_direct_query(url: str) -> str:
    """
    Mark a dev stylesheet URL so the dev server serves the raw CSS.

    Adding the marker twice is a no-op.
    """
    if has_direct_query(url):
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{DIRECT_QUERY}"
