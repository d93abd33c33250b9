from __future__ import annotations

import re

from .models import MediaTypeInfo

STYLE_EXTENSIONS = ("css", "less", "sass", "scss", "styl", "stylus", "pcss", "postcss")
SCRIPT_EXTENSIONS = ("js", "jsx", "ts", "tsx", "mjs", "cjs", "vue", "svelte")

IMAGE_MEDIA_TYPES = {
    "png": "image/png",
    "webp": "image/webp",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "avif": "image/avif",
    "ico": "image/x-icon",
}
FONT_MEDIA_TYPES = {
    "ttf": "font/ttf",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "otf": "font/otf",
}

_EXTENSION_RE = re.compile(r"\.([a-zA-Z0-9]+)$")


def _get_extension(url: str) -> str | None:
    path = re.split(r"[?#]", url, maxsplit=1)[0]
    match = _EXTENSION_RE.search(path)
    return match.group(1).lower() if match else None


def infer_media_type(url: str) -> MediaTypeInfo | None:
    """
    Infer the media type and preload category of an asset from its extension.

    Returns None for unknown extensions.

    Example:
        >>> infer_media_type("/assets/logo.4f2a.svg")
        MediaTypeInfo(media_type='image/svg+xml', preload_type='image')
    """
    ext = _get_extension(url)
    if ext is None:
        return None
    if ext in STYLE_EXTENSIONS:
        return MediaTypeInfo("text/css", "style")
    if ext in SCRIPT_EXTENSIONS:
        return MediaTypeInfo("text/javascript", "script")
    if ext in IMAGE_MEDIA_TYPES:
        return MediaTypeInfo(IMAGE_MEDIA_TYPES[ext], "image")
    if ext in FONT_MEDIA_TYPES:
        return MediaTypeInfo(FONT_MEDIA_TYPES[ext], "font")
    return None
