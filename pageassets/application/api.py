"""
Application layer: assemble the asset list of a page.

Callers build a ``PageContext`` once per request (``create_page_context``),
call ``get_page_assets`` and then apply the ordering their delivery mechanism
needs (``sort_page_assets_for_http_push`` or ``get_early_hints``).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..domain.media import infer_media_type
from ..domain.models import ClientDependency, PageAsset
from ..domain.paths import add_direct_query, normalize_path, prepend_base_url
from ..domain.resolvers import (
    AssetCollector,
    DevAssetCollector,
    DevEntryResolver,
    DevServer,
    EntryResolver,
    ModuleResolver,
    ProdAssetCollector,
    ProdEntryResolver,
    resolve_internal_module,
)
from ..domain.schemas import BuildManifest
from ..infrastructure.config import Settings
from ..infrastructure.exceptions import InternalError, assert_internal, log_error_details
from ..infrastructure.logging import LogContext, get_logger
from ..infrastructure.manifests import load_client_manifest, load_plugin_manifest

logger = get_logger(__name__)


@dataclass
class PageContext:
    base_url: str
    base_assets: str | None
    is_production: bool
    dev_server: DevServer | None = None
    client_manifest: BuildManifest | None = None
    manifest_key_map: dict[str, str] = field(default_factory=dict)
    module_resolver: ModuleResolver = resolve_internal_module

    def get_assets_base_url(self) -> str:
        return self.base_assets or self.base_url


def create_page_context(
    settings: Settings,
    dev_server: DevServer | None = None,
    is_pre_rendering: bool = False,
) -> PageContext:
    """
    Build the page context for the configured mode.

    The build manifests are loaded in production and whenever the page is
    pre-rendered, since pre-rendering resolves against the build even while a
    dev server is running. Base URLs then come from the plugin manifest, i.e.
    from the configuration the app was built with.

    Raises:
        UsageError: If the build is missing or was made with another engine version
    """
    if not settings.is_production() and not is_pre_rendering:
        return PageContext(
            base_url=settings.assets.base_server,
            base_assets=settings.assets.base_assets,
            is_production=False,
            dev_server=dev_server,
        )

    plugin_manifest = load_plugin_manifest(str(settings.assets.get_plugin_manifest_path()))
    client_manifest = load_client_manifest(str(settings.assets.get_client_manifest_path()))
    return PageContext(
        base_url=plugin_manifest.base_server,
        base_assets=plugin_manifest.base_assets,
        is_production=settings.is_production(),
        dev_server=dev_server,
        client_manifest=client_manifest,
        manifest_key_map=dict(plugin_manifest.manifest_key_map),
    )


def get_asset_resolvers(
    page_context: PageContext, is_dev: bool
) -> tuple[EntryResolver, AssetCollector]:
    if is_dev:
        dev_server = page_context.dev_server
        assert_internal(dev_server is not None, "Development mode requires a dev server")
        return (
            DevEntryResolver(dev_server.root, page_context.module_resolver),
            DevAssetCollector(dev_server),
        )

    client_manifest = page_context.client_manifest
    assert_internal(client_manifest is not None, "Production mode requires a client manifest")
    return (
        ProdEntryResolver(client_manifest, page_context.manifest_key_map),
        ProdAssetCollector(client_manifest, page_context.manifest_key_map),
    )


def _to_page_asset(src: str, is_dev: bool) -> PageAsset:
    media = infer_media_type(src)
    if media is not None and media.media_type == "text/css":
        src = normalize_path(src)
        if is_dev:
            # Lets the dev server skip its transform pipeline and send raw CSS
            src = add_direct_query(src)
        return PageAsset(src=src, asset_type="style", media_type="text/css", preload_type=None)
    if media is None:
        return PageAsset(src=src, asset_type="preload", media_type=None, preload_type=None)
    return PageAsset(
        src=src,
        asset_type="preload",
        media_type=media.media_type,
        preload_type=media.preload_type,
    )


async def get_page_assets(
    page_context: PageContext,
    client_dependencies: list[ClientDependency],
    client_entries: list[str],
    is_pre_rendering: bool,
) -> list[PageAsset]:
    """
    Resolve the scripts, stylesheets and preloads a page needs.

    Pre-rendering always resolves against the build, even when a dev server
    is running. The list is returned unsorted.

    Raises:
        InternalError: If the manifest and the page's dependencies disagree
    """
    is_dev = not is_pre_rendering and not page_context.is_production
    mode = "development" if is_dev else "production"

    with LogContext(mode=mode):
        try:
            entry_resolver, asset_collector = get_asset_resolvers(page_context, is_dev)
            client_entries_src = entry_resolver.resolve(client_entries)
            asset_urls = await asset_collector.collect(client_dependencies)
        except InternalError as exc:
            error_details = log_error_details(
                exc, {"client_entries": client_entries, "mode": mode}
            )
            logger.error("Failed to resolve page assets", extra=error_details)
            raise

        page_assets = [
            PageAsset(src=src, asset_type="script", media_type="text/javascript", preload_type=None)
            for src in client_entries_src
        ]
        page_assets.extend(_to_page_asset(src, is_dev) for src in asset_urls)

        base_url_assets = page_context.get_assets_base_url()
        for page_asset in page_assets:
            page_asset.src = prepend_base_url(normalize_path(page_asset.src), base_url_assets)

        logger.debug(
            f"Resolved {len(client_entries_src)} client entries and {len(asset_urls)} assets"
        )
        return page_assets
