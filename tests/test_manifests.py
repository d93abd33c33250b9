from __future__ import annotations

import json
from pathlib import Path

import pytest

from pageassets.infrastructure.exceptions import (
    InternalError,
    ManifestNotFoundError,
    UsageError,
)
from pageassets.infrastructure.manifests import (
    load_client_manifest,
    load_plugin_manifest,
    reset_manifest_cache,
)


def write_json(path: Path, data: object) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_load_plugin_manifest(tmp_path, plugin_manifest_data):
    path = write_json(tmp_path / "pageassets-manifest.json", plugin_manifest_data)

    manifest = load_plugin_manifest(path)

    assert manifest.base_server == "/"
    assert load_plugin_manifest(path) is manifest


def test_reset_manifest_cache(tmp_path, plugin_manifest_data):
    path = write_json(tmp_path / "pageassets-manifest.json", plugin_manifest_data)
    first = load_plugin_manifest(path)

    reset_manifest_cache()

    assert load_plugin_manifest(path) is not first


def test_load_client_manifest(tmp_path, client_manifest_data):
    path = write_json(tmp_path / "manifest.json", client_manifest_data)

    manifest = load_client_manifest(path)

    assert manifest["pages/index.js"].file == "assets/index.ab12.js"


def test_missing_manifest_is_usage_error(tmp_path):
    with pytest.raises(ManifestNotFoundError) as exc_info:
        load_client_manifest(str(tmp_path / "manifest.json"))
    assert isinstance(exc_info.value, UsageError)
    assert "build" in exc_info.value.user_message


def test_invalid_json_is_internal_error(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(InternalError):
        load_client_manifest(str(path))


def test_stale_plugin_manifest(tmp_path, plugin_manifest_data):
    plugin_manifest_data["version"] = "0.0.1"
    path = write_json(tmp_path / "pageassets-manifest.json", plugin_manifest_data)

    with pytest.raises(UsageError):
        load_plugin_manifest(path)
