from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from ..infrastructure.exceptions import assert_internal
from .project_info import INTERNAL_MODULE_PREFIX

AssetType = Literal["script", "style", "preload"]
PreloadType = Literal["style", "font", "image", "script"]


@dataclass(slots=True)
class PageAsset:
    """
    One asset a page needs, ready to be injected or hinted.

    ``src`` is rewritten in place while the list is assembled; lists are
    reordered in place by the sorters.
    """

    src: str
    asset_type: AssetType
    media_type: str | None
    preload_type: PreloadType | None

    def __post_init__(self) -> None:
        # Preloads of unknown media type carry no preload_type
        assert_internal(
            self.preload_type is None or self.asset_type == "preload",
            "preload_type is only set on preload assets",
            src=self.src,
            asset_type=self.asset_type,
            preload_type=self.preload_type,
        )
        assert_internal(
            (self.asset_type == "style") == (self.media_type == "text/css"),
            "Style assets and only style assets have media type text/css",
            src=self.src,
            asset_type=self.asset_type,
            media_type=self.media_type,
        )


@dataclass(frozen=True, slots=True)
class MediaTypeInfo:
    media_type: str
    preload_type: PreloadType


@dataclass(frozen=True, slots=True)
class ClientDependency:
    id: str
    only_assets: bool = False
    eagerly_imported: bool = False


@dataclass(frozen=True, slots=True)
class LocalModule:
    """A user file, given as a forward-slash path absolute to the project root."""

    path: str


@dataclass(frozen=True, slots=True)
class InternalModule:
    """One of the engine's own client runtime files, relative to the package root."""

    path: str


ClientEntry = Union[LocalModule, InternalModule]


def parse_client_entry(entry: str) -> ClientEntry:
    assert_internal("\\" not in entry, "Client entry must be a forward-slash path", entry=entry)
    if entry.startswith(INTERNAL_MODULE_PREFIX):
        return InternalModule(entry[len(INTERNAL_MODULE_PREFIX):])
    return LocalModule(entry)
