from __future__ import annotations

from collections.abc import Mapping

from .models import InternalModule, parse_client_entry
from .schemas import BuildManifest, ManifestEntry


def find_manifest_entry_by_suffix(
    suffix: str, manifest: BuildManifest
) -> tuple[str, ManifestEntry] | None:
    for key, entry in manifest.items():
        if key.endswith(suffix):
            return key, entry
    return None


def get_manifest_entry(
    module_id: str,
    manifest: BuildManifest,
    manifest_key_map: Mapping[str, str] | None = None,
) -> tuple[str, ManifestEntry] | None:
    """
    Look up the output record of a logical module id.

    The engine's own client files are installed under a path the build does
    not know in advance, so they are matched by key suffix. Other ids are
    matched by key, after applying the build's key renames.

    Returns:
        ``(manifest_key, entry)``, or None when the manifest has no record.
    """
    parsed = parse_client_entry(module_id)
    if isinstance(parsed, InternalModule):
        return find_manifest_entry_by_suffix(f"/{parsed.path}", manifest)

    key_map = manifest_key_map or {}
    key = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
    key = key_map.get(module_id, key_map.get(key, key))
    entry = manifest.get(key)
    if entry is None:
        return None
    return key, entry
