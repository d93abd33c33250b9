from __future__ import annotations

from fastapi import Request

from pageassets.infrastructure.config import Settings, get_settings
from pageassets.infrastructure.dev_server import FileSystemDevServer


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = get_settings()
        request.app.state.settings = settings
    return settings


def get_dev_server(request: Request) -> FileSystemDevServer | None:
    settings = get_app_settings(request)
    if settings.is_production():
        return None

    root = settings.assets.dev_server_root
    cached_server = getattr(request.app.state, "dev_server", None)
    cached_root = getattr(request.app.state, "dev_server_config_root", None)
    if cached_server is not None and cached_root == root:
        return cached_server

    dev_server = FileSystemDevServer(root)
    request.app.state.dev_server = dev_server
    request.app.state.dev_server_config_root = root
    return dev_server
