from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from pageassets.domain.models import ClientDependency
from pageassets.infrastructure.dev_server import FileSystemDevServer


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "pages").mkdir()
    (tmp_path / "components").mkdir()
    (tmp_path / "pages" / "index.page.js").write_text(
        "import './index.css'\n"
        "import { Layout } from '../components/Layout'\n"
        "import logo from '/assets/logo.svg'\n"
        "import React from 'react'\n",
        encoding="utf-8",
    )
    (tmp_path / "components" / "Layout.jsx").write_text(
        'import styles from "./Layout.module.css";\n'
        'import "../styles/fonts.css";\n'
        "import '../pages/index.page.js'\n"
        "import './Missing.js'\n",
        encoding="utf-8",
    )
    return tmp_path


def retrieve(server: FileSystemDevServer, *ids: str) -> list[str]:
    return asyncio.run(server.retrieve_style_assets([ClientDependency(i) for i in ids]))


def test_root_is_posix_string(project: Path):
    server = FileSystemDevServer(project)
    assert server.root == project.resolve().as_posix()


def test_follows_imports(project: Path):
    server = FileSystemDevServer(project)

    assert retrieve(server, "/pages/index.page.js") == [
        "/pages/index.css",
        "/components/Layout.module.css",
        "/styles/fonts.css",
        "/assets/logo.svg",
    ]


def test_each_asset_reported_once(project: Path):
    server = FileSystemDevServer(project)

    urls = retrieve(server, "/pages/index.page.js", "/components/Layout.jsx")

    assert len(urls) == len(set(urls)) == 4


def test_stylesheet_dependency(project: Path):
    server = FileSystemDevServer(project)
    assert retrieve(server, "/styles/direct.css") == ["/styles/direct.css"]


def test_internal_modules_are_ignored(project: Path):
    server = FileSystemDevServer(project)
    assert retrieve(server, "@@pageassets/client/entry.js") == []


def test_missing_file_is_skipped(project: Path):
    server = FileSystemDevServer(project)
    assert retrieve(server, "/pages/missing.page.js") == []
