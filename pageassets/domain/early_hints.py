from __future__ import annotations

from dataclasses import dataclass

from .models import AssetType, PageAsset, PreloadType
from .sorting import sort_page_assets_for_early_hints_header


@dataclass(frozen=True, slots=True)
class EarlyHint:
    src: str
    asset_type: AssetType
    media_type: str | None
    preload_type: PreloadType | None
    early_hint_link: str


def infer_early_hint_link(asset: PageAsset) -> str:
    """
    Build the ``Link`` value announcing one asset in an early hints response.

    Example:
        >>> infer_early_hint_link(PageAsset("/assets/a.css", "style", "text/css", None))
        '</assets/a.css>; rel=preload; as=style'
    """
    if asset.asset_type == "script":
        return f"<{asset.src}>; rel=modulepreload; as=script"
    if asset.asset_type == "style":
        return f"<{asset.src}>; rel=preload; as=style"
    if asset.preload_type is None:
        return f"<{asset.src}>; rel=preload"

    link = f"<{asset.src}>; rel=preload; as={asset.preload_type}"
    if asset.media_type:
        link += f"; type={asset.media_type}"
    # Fonts are always fetched in CORS mode
    if asset.preload_type == "font":
        link += "; crossorigin"
    return link


def get_early_hints(page_assets: list[PageAsset], is_production: bool) -> list[EarlyHint]:
    """Order a copy of ``page_assets`` for early hints and attach link values."""
    ordered = list(page_assets)
    sort_page_assets_for_early_hints_header(ordered, is_production)
    return [
        EarlyHint(
            src=asset.src,
            asset_type=asset.asset_type,
            media_type=asset.media_type,
            preload_type=asset.preload_type,
            early_hint_link=infer_early_hint_link(asset),
        )
        for asset in ordered
    ]
