"""
Priority orderings of a page's assets.

Both sorters reorder the list in place with a stable sort, highest priority
first. Assets with equal priority keep their relative order.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar


class _HasAssetType(Protocol):
    asset_type: Any


class _HasPreloadType(_HasAssetType, Protocol):
    preload_type: Any


T = TypeVar("T")
A = TypeVar("A", bound=_HasAssetType)
P = TypeVar("P", bound=_HasPreloadType)


def higher_first(items: list[T], get_priority: Callable[[T], int]) -> None:
    # list.sort keeps equal elements in order even with reverse=True
    items.sort(key=get_priority, reverse=True)


def get_http_push_priority(asset: _HasPreloadType) -> int:
    asset_type = asset.asset_type
    preload_type = asset.preload_type

    # CSS has highest priority
    if asset_type == "style":
        return 0
    if preload_type == "style":
        return -1

    # Visual assets have high priority
    if preload_type == "font":
        return -2
    if preload_type == "image":
        return -3

    # JavaScript has lowest priority
    if asset_type == "script":
        return -5
    if preload_type == "script":
        return -6

    return -4


def sort_page_assets_for_http_push(page_assets: list[P]) -> None:
    higher_first(page_assets, get_http_push_priority)


def get_early_hints_priority(asset: _HasAssetType, is_production: bool) -> int:
    asset_type = asset.asset_type

    # In dev, scripts go first so the dev server compiles them while the
    # other assets are being fetched
    if not is_production and asset_type == "script":
        return 1

    if asset_type == "style":
        return 0
    if asset_type == "font":
        return -1
    if asset_type == "image":
        return -2
    if asset_type != "script":
        return -3
    return -4


def sort_page_assets_for_early_hints_header(page_assets: list[A], is_production: bool) -> None:
    """
    Order assets for an early hints response.

    Ranks by ``asset_type`` only, unlike the push order which also looks at
    ``preload_type``.
    """
    higher_first(page_assets, lambda asset: get_early_hints_priority(asset, is_production))
