"""
Load the production manifests from the build output.

Manifests are read once per process and cached; ``reset_manifest_cache``
clears the cache, e.g. at application startup after a rebuild.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from ..domain.schemas import (
    BuildManifest,
    PluginManifest,
    assert_plugin_manifest,
    parse_build_manifest,
)
from .exceptions import InternalError, ManifestNotFoundError
from .logging import get_logger, log_operation

logger = get_logger(__name__)


def _read_json(manifest_path: Path) -> object:
    if not manifest_path.exists():
        raise ManifestNotFoundError(str(manifest_path))
    try:
        return json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InternalError(
            "Manifest file is not valid JSON",
            details={"manifest_path": str(manifest_path), "error": str(exc)},
        ) from exc


@lru_cache(maxsize=4)
@log_operation("load_plugin_manifest")
def load_plugin_manifest(manifest_path: str) -> PluginManifest:
    manifest = assert_plugin_manifest(_read_json(Path(manifest_path)))
    logger.info(
        f"Loaded plugin manifest {manifest_path} (version {manifest.version}, "
        f"{len(manifest.manifest_key_map)} key renames)"
    )
    return manifest


@lru_cache(maxsize=4)
@log_operation("load_client_manifest")
def load_client_manifest(manifest_path: str) -> BuildManifest:
    manifest = parse_build_manifest(_read_json(Path(manifest_path)))
    logger.info(f"Loaded client manifest {manifest_path} with {len(manifest)} entries")
    return manifest


def reset_manifest_cache() -> None:
    load_plugin_manifest.cache_clear()
    load_client_manifest.cache_clear()
