"""
Filesystem-backed stand-in for a live dev server's module graph.

Follows static ``import`` statements from each client dependency and reports
the stylesheets, fonts and images they pull in as root-relative URLs, which is
what a dev server's module graph would report for the same page.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

from ..domain.media import SCRIPT_EXTENSIONS, infer_media_type
from ..domain.models import ClientDependency, InternalModule, parse_client_entry
from ..domain.paths import to_posix_path
from .logging import get_logger

logger = get_logger(__name__)

_IMPORT_RE = re.compile(
    r"""(?:^|[;\s])import\s*(?:[\w*{}\s,$]+?\s*from\s*)?['"]([^'"\n]+)['"]""",
    re.MULTILINE,
)


class FileSystemDevServer:
    def __init__(self, root: str | Path):
        self.root = to_posix_path(str(Path(root).resolve()))
        self._root_path = Path(root).resolve()

    async def retrieve_style_assets(self, client_dependencies: list[ClientDependency]) -> list[str]:
        asset_urls: dict[str, None] = {}
        visited: set[Path] = set()
        for dependency in client_dependencies:
            parsed = parse_client_entry(dependency.id)
            if isinstance(parsed, InternalModule):
                continue
            file_path = self._root_path / parsed.path.lstrip("/")
            await self._visit(file_path, asset_urls, visited)
        return list(asset_urls)

    async def _visit(self, file_path: Path, asset_urls: dict[str, None], visited: set[Path]) -> None:
        if file_path in visited:
            return
        visited.add(file_path)

        media = infer_media_type(file_path.name)
        if media is not None and media.preload_type != "script":
            asset_urls[self._to_url(file_path)] = None
            return

        if not file_path.is_file():
            logger.warning(f"Dev server could not find {file_path}")
            return

        source = await asyncio.to_thread(file_path.read_text, encoding="utf-8")
        for specifier in _IMPORT_RE.findall(source):
            target = self._resolve_specifier(specifier, file_path)
            if target is not None:
                await self._visit(target, asset_urls, visited)

    def _resolve_specifier(self, specifier: str, importer: Path) -> Path | None:
        specifier = re.split(r"[?#]", specifier, maxsplit=1)[0]
        if specifier.startswith("./") or specifier.startswith("../"):
            target = (importer.parent / specifier).resolve()
        elif specifier.startswith("/"):
            target = self._root_path / specifier.lstrip("/")
        else:
            # Bare imports are npm packages, served from the dependency cache
            return None

        if target.suffix or target.is_file():
            return target
        for ext in SCRIPT_EXTENSIONS:
            candidate = target.with_name(f"{target.name}.{ext}")
            if candidate.is_file():
                return candidate
        return target

    def _to_url(self, file_path: Path) -> str:
        if file_path.is_relative_to(self._root_path):
            return "/" + file_path.relative_to(self._root_path).as_posix()
        # Outside of the root: served as a plain filesystem read
        posix_path = to_posix_path(str(file_path))
        if not posix_path.startswith("/"):
            posix_path = "/" + posix_path
        return "/@fs" + posix_path
