"""
Turn a page's client entries and dependencies into URLs.

Each concern has a development variant, backed by the live dev server, and a
production variant, backed by the client build manifest. The assembler picks
one pair per request based on the mode it is given.
"""

from __future__ import annotations

import posixpath
import sys
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Protocol

from ..infrastructure.exceptions import InternalError, assert_internal
from ..infrastructure.logging import get_logger
from .manifest import get_manifest_entry
from .models import ClientDependency, InternalModule, parse_client_entry
from .paths import to_posix_path
from .schemas import BuildManifest

logger = get_logger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

# Dev server prefix for plain filesystem reads, bypassing its module graph
FS_PREFIX = "/@fs"

# Emitted by the bundler when CSS code splitting is disabled
SINGLE_STYLE_KEY = "style.css"

ModuleResolver = Callable[[str], str]


class DevServer(Protocol):
    root: str

    async def retrieve_style_assets(
        self, client_dependencies: list[ClientDependency]
    ) -> list[str]: ...


class EntryResolver(Protocol):
    def resolve(self, client_entries: list[str]) -> list[str]: ...


class AssetCollector(Protocol):
    async def collect(self, client_dependencies: list[ClientDependency]) -> list[str]: ...


def resolve_internal_module(path: str) -> str:
    """
    Resolve a path relative to the installed ``pageassets`` package.

    Raises:
        InternalError: If no such file ships with the package
    """
    try:
        return str((PACKAGE_ROOT / path).resolve(strict=True))
    except FileNotFoundError as exc:
        raise InternalError(
            "Internal module not found in the installed package",
            details={"path": path, "package_root": str(PACKAGE_ROOT)},
        ) from exc


class DevEntryResolver:
    """Resolves client entries to ``/@fs/<absolute path>`` URLs for the dev server."""

    def __init__(self, root: str, module_resolver: ModuleResolver = resolve_internal_module):
        assert_internal(root, "Dev server root is not set")
        self.root = to_posix_path(root)
        self.module_resolver = module_resolver

    def resolve(self, client_entries: list[str]) -> list[str]:
        return [self._resolve_entry(entry) for entry in client_entries]

    def _resolve_entry(self, client_entry: str) -> str:
        parsed = parse_client_entry(client_entry)
        if isinstance(parsed, InternalModule):
            file_path = to_posix_path(self.module_resolver(parsed.path))
        else:
            assert_internal(
                posixpath.isabs(parsed.path),
                "Client entry must be an absolute path",
                client_entry=client_entry,
            )
            file_path = posixpath.normpath(self.root.rstrip("/") + parsed.path)

        # Windows paths such as C:/project/pages/index.js
        if not file_path.startswith("/"):
            assert_internal(
                sys.platform == "win32",
                "Resolved client entry is not an absolute path",
                client_entry=client_entry,
                file_path=file_path,
            )
            file_path = "/" + file_path

        return FS_PREFIX + file_path


class ProdEntryResolver:
    """Resolves client entries to the hashed files listed in the client build manifest."""

    def __init__(self, manifest: BuildManifest, manifest_key_map: Mapping[str, str] | None = None):
        self.manifest = manifest
        self.manifest_key_map = manifest_key_map or {}

    def resolve(self, client_entries: list[str]) -> list[str]:
        return [self._resolve_entry(entry) for entry in client_entries]

    def _resolve_entry(self, client_entry: str) -> str:
        found = get_manifest_entry(client_entry, self.manifest, self.manifest_key_map)
        if found is None:
            raise InternalError(
                "Client entry is missing from the client build manifest",
                details={"client_entry": client_entry},
            )
        manifest_key, entry = found
        assert_internal(
            entry.is_entry or entry.is_dynamic_entry,
            "Client entry is not an entry of the build",
            client_entry=client_entry,
            manifest_key=manifest_key,
        )
        assert_internal(
            not entry.file.startswith("/"),
            "Manifest output file must be relative",
            manifest_key=manifest_key,
            file=entry.file,
        )
        return "/" + entry.file


def _collect_assets(
    manifest_key: str,
    manifest: BuildManifest,
    asset_urls: dict[str, None],
    visited: set[str],
    only_assets: bool,
) -> None:
    if manifest_key in visited:
        return
    visited.add(manifest_key)

    entry = manifest.get(manifest_key)
    assert_internal(entry is not None, "Imported chunk missing from manifest", key=manifest_key)

    if not only_assets:
        for import_key in entry.imports:
            imported = manifest.get(import_key)
            assert_internal(
                imported is not None, "Imported chunk missing from manifest", key=import_key
            )
            asset_urls[f"/{imported.file}"] = None
    for css_file in entry.css:
        asset_urls[f"/{css_file}"] = None
    for asset_file in entry.assets:
        asset_urls[f"/{asset_file}"] = None

    for import_key in entry.imports:
        _collect_assets(import_key, manifest, asset_urls, visited, only_assets)


def collect_prod_assets(
    client_dependencies: Iterable[ClientDependency],
    manifest: BuildManifest,
    manifest_key_map: Mapping[str, str] | None = None,
) -> list[str]:
    """
    Collect the stylesheets, static assets and imported chunks of the given
    dependencies from the client build manifest, in first-seen order.
    """
    # dict keeps insertion order and drops duplicates
    asset_urls: dict[str, None] = {}
    visited: set[str] = set()

    for dependency in client_dependencies:
        # Eagerly imported modules are bundled into their importer
        if dependency.eagerly_imported:
            continue
        found = get_manifest_entry(dependency.id, manifest, manifest_key_map)
        if found is None:
            raise InternalError(
                "Client dependency is missing from the client build manifest",
                details={"dependency": dependency.id},
            )
        manifest_key, _ = found
        _collect_assets(manifest_key, manifest, asset_urls, visited, dependency.only_assets)

    single_style = manifest.get(SINGLE_STYLE_KEY)
    if single_style is not None:
        asset_urls[f"/{single_style.file}"] = None

    return list(asset_urls)


class DevAssetCollector:
    def __init__(self, dev_server: DevServer):
        self.dev_server = dev_server

    async def collect(self, client_dependencies: list[ClientDependency]) -> list[str]:
        asset_urls = await self.dev_server.retrieve_style_assets(client_dependencies)
        logger.debug(f"Dev server returned {len(asset_urls)} style assets")
        return asset_urls


class ProdAssetCollector:
    def __init__(self, manifest: BuildManifest, manifest_key_map: Mapping[str, str] | None = None):
        self.manifest = manifest
        self.manifest_key_map = manifest_key_map or {}

    async def collect(self, client_dependencies: list[ClientDependency]) -> list[str]:
        return collect_prod_assets(client_dependencies, self.manifest, self.manifest_key_map)
