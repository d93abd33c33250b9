from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from pageassets.application import api as app_api
from pageassets.domain.early_hints import get_early_hints
from pageassets.domain.sorting import sort_page_assets_for_http_push
from pageassets.infrastructure.config import Settings
from pageassets.infrastructure.dev_server import FileSystemDevServer
from pageassets.infrastructure.exceptions import InternalError, UsageError, log_error_details
from pageassets.infrastructure.logging import LogContext, get_logger
from pageassets.web.dependencies import get_app_settings, get_dev_server
from pageassets.web.schemas import (
    EarlyHintOut,
    HealthResponse,
    PageAssetOut,
    PageAssetsRequest,
    PageAssetsResponse,
)

router = APIRouter(prefix="/api")
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return HealthResponse(
        environment=settings.app.environment,
        version=settings.app.version,
        mode="production" if settings.is_production() else "development",
    )


@router.post("/page-assets", response_model=PageAssetsResponse)
async def resolve_page_assets(
    payload: PageAssetsRequest,
    settings: Settings = Depends(get_app_settings),
    dev_server: FileSystemDevServer | None = Depends(get_dev_server),
) -> PageAssetsResponse:
    with LogContext(request_id=uuid.uuid4().hex):
        try:
            page_context = app_api.create_page_context(
                settings, dev_server, payload.is_pre_rendering
            )
            page_assets = await app_api.get_page_assets(
                page_context,
                [dependency.to_domain() for dependency in payload.client_dependencies],
                payload.client_entries,
                payload.is_pre_rendering,
            )
        except UsageError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.user_message) from exc
        except InternalError as exc:
            logger.error("Page asset resolution failed", extra=log_error_details(exc))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.user_message
            ) from exc

        early_hints = get_early_hints(
            page_assets, page_context.is_production or payload.is_pre_rendering
        )
        sort_page_assets_for_http_push(page_assets)

    return PageAssetsResponse(
        assets=[
            PageAssetOut(
                src=asset.src,
                asset_type=asset.asset_type,
                media_type=asset.media_type,
                preload_type=asset.preload_type,
            )
            for asset in page_assets
        ],
        early_hints=[
            EarlyHintOut(
                src=hint.src,
                asset_type=hint.asset_type,
                media_type=hint.media_type,
                preload_type=hint.preload_type,
                early_hint_link=hint.early_hint_link,
            )
            for hint in early_hints
        ],
    )
