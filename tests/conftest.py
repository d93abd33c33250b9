from __future__ import annotations

import pytest

from pageassets.domain.project_info import PROJECT_VERSION
from pageassets.infrastructure.config import reset_settings
from pageassets.infrastructure.manifests import reset_manifest_cache


@pytest.fixture(autouse=True)
def fresh_caches():
    reset_settings()
    reset_manifest_cache()
    yield
    reset_settings()
    reset_manifest_cache()


@pytest.fixture
def plugin_manifest_data() -> dict[str, object]:
    return {
        "version": PROJECT_VERSION,
        "baseServer": "/",
        "baseAssets": None,
        "usesClientRouter": False,
        "manifestKeyMap": {},
    }


@pytest.fixture
def client_manifest_data() -> dict[str, object]:
    return {
        "pages/index.js": {
            "file": "assets/index.ab12.js",
            "src": "pages/index.js",
            "isEntry": True,
            "imports": ["_vendor.js"],
            "css": ["assets/index.cd34.css"],
            "assets": ["assets/logo.ef56.png"],
        },
        "_vendor.js": {"file": "assets/vendor.9876.js"},
    }
