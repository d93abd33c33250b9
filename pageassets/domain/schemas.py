"""
Pydantic schemas for the manifests produced by the build.

Two manifests accompany a production build:

* the plugin manifest, written by this engine's build step, carrying the
  engine version and base URLs the build was made with;
* the client build manifest, written by the bundler, mapping logical module
  ids to hashed output files.

Both are untrusted JSON until they pass through the validators below.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..infrastructure.exceptions import InternalError, assert_usage
from .project_info import PROJECT_NAME, PROJECT_VERSION


class RuntimeManifest(BaseModel):
    """Fields of the plugin manifest the runtime needs for routing and base URLs."""

    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)

    base_server: str = Field(..., alias="baseServer")
    base_assets: str | None = Field(None, alias="baseAssets")
    uses_client_router: bool = Field(..., alias="usesClientRouter")

    def get_assets_base_url(self) -> str:
        return self.base_assets or self.base_server


class PluginManifest(RuntimeManifest):
    version: str
    manifest_key_map: dict[str, str] = Field(..., alias="manifestKeyMap")


class ManifestEntry(BaseModel):
    """One output record of the client build manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file: str
    src: str | None = None
    is_entry: bool = Field(False, alias="isEntry")
    is_dynamic_entry: bool = Field(False, alias="isDynamicEntry")
    imports: list[str] = Field(default_factory=list)
    dynamic_imports: list[str] = Field(default_factory=list, alias="dynamicImports")
    css: list[str] = Field(default_factory=list)
    assets: list[str] = Field(default_factory=list)


BuildManifest = dict[str, ManifestEntry]

_build_manifest_adapter: TypeAdapter[BuildManifest] = TypeAdapter(BuildManifest)


def _shape_error(what: str, exc: PydanticValidationError) -> InternalError:
    return InternalError(
        f"Malformed {what}",
        details={"errors": exc.errors(include_url=False)},
    )


def get_rebuild_message(build_version: object) -> str:
    return (
        "You need to re-build your app. "
        f"(Because you are using {PROJECT_NAME}@{PROJECT_VERSION} while your build "
        f"has been generated with a different version {PROJECT_NAME}@{build_version}.)"
    )


def assert_runtime_manifest(candidate: dict[str, Any]) -> RuntimeManifest:
    try:
        return RuntimeManifest.model_validate(candidate)
    except PydanticValidationError as exc:
        raise _shape_error("runtime manifest", exc) from exc


def assert_plugin_manifest(candidate: object) -> PluginManifest:
    """
    Validate a plugin manifest loaded from the build output.

    Raises:
        InternalError: If the manifest is not a mapping or is mis-shaped
        UsageError: If the build was made with another engine version
    """
    if not isinstance(candidate, dict):
        raise InternalError(
            "Plugin manifest must be a mapping",
            details={"manifest_type": type(candidate).__name__},
        )
    version = candidate.get("version")
    assert_usage(
        version == PROJECT_VERSION,
        get_rebuild_message(version),
        build_version=version,
        engine_version=PROJECT_VERSION,
    )
    assert_runtime_manifest(candidate)
    try:
        return PluginManifest.model_validate(candidate)
    except PydanticValidationError as exc:
        raise _shape_error("plugin manifest", exc) from exc


def parse_build_manifest(candidate: object) -> BuildManifest:
    """Validate the bundler's client manifest."""
    try:
        return _build_manifest_adapter.validate_python(candidate)
    except PydanticValidationError as exc:
        raise _shape_error("client build manifest", exc) from exc
