from __future__ import annotations

from pathlib import Path

import pytest

from pageassets.infrastructure.config import get_settings
from scripts import run_server


@pytest.fixture
def production(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("APP_ENVIRONMENT", "production")
    monkeypatch.setenv("ASSETS_DIST_DIR", str(tmp_path))
    return tmp_path


def test_check_build_skipped_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENVIRONMENT", "development")
    assert run_server.check_build(get_settings()) is True


def test_check_build_reports_missing_manifests(production: Path) -> None:
    assert run_server.check_build(get_settings()) is False


def test_check_build_with_manifests(production: Path) -> None:
    client_dir = production / "client"
    client_dir.mkdir()
    (client_dir / "manifest.json").write_text("{}")
    (client_dir / "pageassets-manifest.json").write_text("{}")

    assert run_server.check_build(get_settings()) is True


def test_main_runs_uvicorn(production: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, dict]] = []

    def fake_run(app: str, **kwargs) -> None:
        calls.append((app, kwargs))

    monkeypatch.setattr(run_server.uvicorn, "run", fake_run)

    run_server.main()

    assert calls == [("pageassets.web.main:app", {"host": "0.0.0.0", "port": 8000, "reload": False})]
