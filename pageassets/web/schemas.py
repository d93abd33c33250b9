from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pageassets.domain.models import ClientDependency


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ClientDependencyIn(CamelModel):
    id: str = Field(..., min_length=1)
    only_assets: bool = Field(False, alias="onlyAssets")
    eagerly_imported: bool = Field(False, alias="eagerlyImported")

    def to_domain(self) -> ClientDependency:
        return ClientDependency(
            id=self.id,
            only_assets=self.only_assets,
            eagerly_imported=self.eagerly_imported,
        )


class PageAssetsRequest(CamelModel):
    client_dependencies: list[ClientDependencyIn] = Field(
        default_factory=list, alias="clientDependencies"
    )
    client_entries: list[str] = Field(default_factory=list, alias="clientEntries")
    is_pre_rendering: bool = Field(False, alias="isPreRendering")


class PageAssetOut(CamelModel):
    src: str
    asset_type: Literal["script", "style", "preload"] = Field(..., alias="assetType")
    media_type: Optional[str] = Field(None, alias="mediaType")
    preload_type: Optional[str] = Field(None, alias="preloadType")


class EarlyHintOut(PageAssetOut):
    early_hint_link: str = Field(..., alias="earlyHintLink")


class PageAssetsResponse(CamelModel):
    assets: list[PageAssetOut]
    early_hints: list[EarlyHintOut] = Field(..., alias="earlyHints")


class HealthResponse(BaseModel):
    status: str = "ok"
    environment: str
    version: str
    mode: Literal["development", "production"]
