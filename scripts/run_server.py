from __future__ import annotations

import uvicorn

from pageassets.infrastructure.config import Settings, get_settings
from pageassets.infrastructure.logging import get_logger

logger = get_logger("run_server")


def check_build(settings: Settings) -> bool:
    """In production, report missing manifests before the first request fails on them."""
    if not settings.is_production():
        return True

    missing = [
        path
        for path in (
            settings.assets.get_client_manifest_path(),
            settings.assets.get_plugin_manifest_path(),
        )
        if not path.exists()
    ]
    for path in missing:
        logger.warning(f"[run-server] Build manifest not found: {path}. Build the app first.")
    return not missing


def main() -> None:
    settings = get_settings()
    check_build(settings)

    uvicorn.run(
        "pageassets.web.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development(),
    )


if __name__ == "__main__":
    main()
