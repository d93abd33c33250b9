from __future__ import annotations

from itertools import permutations
from types import SimpleNamespace

import pytest

from pageassets.domain.early_hints import get_early_hints, infer_early_hint_link
from pageassets.domain.models import PageAsset
from pageassets.domain.sorting import (
    sort_page_assets_for_early_hints_header,
    sort_page_assets_for_http_push,
)
from pageassets.infrastructure.exceptions import InternalError

PRELOAD_MEDIA_TYPES = {"font": "font/woff2", "image": "image/png", "script": "text/javascript"}


def script(src: str) -> PageAsset:
    return PageAsset(src, "script", "text/javascript", None)


def style(src: str) -> PageAsset:
    return PageAsset(src, "style", "text/css", None)


def preload(src: str, preload_type: str | None) -> PageAsset:
    return PageAsset(src, "preload", PRELOAD_MEDIA_TYPES.get(preload_type), preload_type)


def srcs(assets) -> list[str]:
    return [asset.src for asset in assets]


class TestPageAssetInvariants:
    def test_preload_type_only_on_preloads(self):
        with pytest.raises(InternalError):
            PageAsset("/a.js", "script", "text/javascript", "script")

    def test_style_requires_css_media_type(self):
        with pytest.raises(InternalError):
            PageAsset("/a.css", "style", None, None)

    def test_css_media_type_requires_style(self):
        with pytest.raises(InternalError):
            PageAsset("/a.css", "preload", "text/css", "style")


class TestHttpPushOrder:
    def test_full_order(self):
        assets = [
            preload("/chunk.js", "script"),
            script("/entry.js"),
            preload("/data.bin", None),
            preload("/logo.png", "image"),
            preload("/inter.woff2", "font"),
            preload("/critical.css", "style"),
            style("/main.css"),
        ]

        sort_page_assets_for_http_push(assets)

        assert srcs(assets) == [
            "/main.css",
            "/critical.css",
            "/inter.woff2",
            "/logo.png",
            "/data.bin",
            "/entry.js",
            "/chunk.js",
        ]

    def test_stable_for_equal_priority(self):
        assets = [script("/b.js"), style("/b.css"), script("/a.js"), style("/a.css")]

        sort_page_assets_for_http_push(assets)

        assert srcs(assets) == ["/b.css", "/a.css", "/b.js", "/a.js"]

    def test_order_holds_for_every_input_order(self):
        base = [
            script("/entry.js"),
            style("/main.css"),
            preload("/inter.woff2", "font"),
            preload("/logo.png", "image"),
            preload("/chunk.js", "script"),
        ]
        for ordering in permutations(base):
            assets = list(ordering)
            sort_page_assets_for_http_push(assets)
            types = [(a.asset_type, a.preload_type) for a in assets]
            assert types.index(("style", None)) < types.index(("preload", "font"))
            assert types.index(("preload", "image")) < types.index(("script", None))
            assert types[-1] == ("preload", "script")


class TestEarlyHintsOrder:
    def test_dev_puts_scripts_first(self):
        assets = [SimpleNamespace(asset_type="style"), SimpleNamespace(asset_type="script")]

        sort_page_assets_for_early_hints_header(assets, is_production=False)

        assert [a.asset_type for a in assets] == ["script", "style"]

    def test_production_order(self):
        assets = [
            SimpleNamespace(asset_type="script"),
            SimpleNamespace(asset_type="style"),
            SimpleNamespace(asset_type="font"),
        ]

        sort_page_assets_for_early_hints_header(assets, is_production=True)

        assert [a.asset_type for a in assets] == ["style", "font", "script"]

    def test_production_places_other_types_between_image_and_script(self):
        assets = [
            SimpleNamespace(asset_type="script"),
            SimpleNamespace(asset_type="preload"),
            SimpleNamespace(asset_type="image"),
            SimpleNamespace(asset_type="style"),
        ]

        sort_page_assets_for_early_hints_header(assets, is_production=True)

        assert [a.asset_type for a in assets] == ["style", "image", "preload", "script"]

    def test_ranks_by_asset_type_not_preload_type(self):
        # Both preloads rank as "other" here, whatever their preload_type
        assets = [
            preload("/chunk.js", "script"),
            preload("/inter.woff2", "font"),
            script("/entry.js"),
        ]

        sort_page_assets_for_early_hints_header(assets, is_production=True)

        assert srcs(assets) == ["/chunk.js", "/inter.woff2", "/entry.js"]

    def test_dev_keeps_script_order(self):
        assets = [script("/a.js"), style("/a.css"), script("/b.js")]

        sort_page_assets_for_early_hints_header(assets, is_production=False)

        assert srcs(assets) == ["/a.js", "/b.js", "/a.css"]


class TestEarlyHints:
    def test_links(self):
        assert infer_early_hint_link(script("/a.js")) == "</a.js>; rel=modulepreload; as=script"
        assert infer_early_hint_link(style("/a.css")) == "</a.css>; rel=preload; as=style"
        assert (
            infer_early_hint_link(preload("/logo.png", "image"))
            == "</logo.png>; rel=preload; as=image; type=image/png"
        )
        assert (
            infer_early_hint_link(preload("/inter.woff2", "font"))
            == "</inter.woff2>; rel=preload; as=font; type=font/woff2; crossorigin"
        )
        assert infer_early_hint_link(preload("/data.bin", None)) == "</data.bin>; rel=preload"

    def test_get_early_hints_orders_a_copy(self):
        assets = [script("/a.js"), preload("/inter.woff2", "font"), style("/a.css")]

        hints = get_early_hints(assets, is_production=True)

        assert [h.src for h in hints] == ["/a.css", "/inter.woff2", "/a.js"]
        assert hints[0].early_hint_link == "</a.css>; rel=preload; as=style"
        assert srcs(assets) == ["/a.js", "/inter.woff2", "/a.css"]

    def test_get_early_hints_dev(self):
        hints = get_early_hints([style("/a.css"), script("/a.js")], is_production=False)
        assert [h.asset_type for h in hints] == ["script", "style"]
