"""Lifespan — startup database check, app.state wiring and shutdown."""

import pytest
from fastapi import FastAPI

import person_service.main as main_module
from person_service.config import Settings
from person_service.core.errors import DatabaseError
from person_service.services.enrichment import EnrichmentOrchestrator


class FakeSessionManager:
    """Stands in for DatabaseSessionManager; records lifecycle calls."""

    instances: list["FakeSessionManager"] = []
    healthy = True

    def __init__(self, database_url, pool_size=20, max_overflow=10):
        self.database_url = database_url
        self.schema_created = False
        self.closed = False
        FakeSessionManager.instances.append(self)

    async def health_check(self) -> bool:
        return self.healthy

    async def create_schema(self) -> None:
        self.schema_created = True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_manager(monkeypatch):
    FakeSessionManager.instances = []
    FakeSessionManager.healthy = True
    monkeypatch.setattr(main_module, "DatabaseSessionManager", FakeSessionManager)
    monkeypatch.setattr(main_module, "setup_logging", lambda level, fmt: None)
    return FakeSessionManager


def _use_settings(monkeypatch, **overrides):
    settings = Settings(_env_file=None, **overrides)
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    return settings


async def test_unreachable_database_aborts_startup(fake_manager, monkeypatch):
    _use_settings(monkeypatch)
    fake_manager.healthy = False
    app = FastAPI()

    with pytest.raises(DatabaseError) as excinfo:
        async with main_module.lifespan(app):
            pass

    assert excinfo.value.http_status == 503
    assert fake_manager.instances[0].closed
    assert not hasattr(app.state, "db_manager")


async def test_startup_wires_state_and_shutdown_closes(fake_manager, monkeypatch):
    settings = _use_settings(monkeypatch)
    app = FastAPI()

    async with main_module.lifespan(app):
        manager = app.state.db_manager
        assert manager.database_url == settings.database_url
        assert isinstance(app.state.enricher, EnrichmentOrchestrator)
        assert not manager.schema_created

    assert manager.closed


async def test_auto_create_schema_runs_at_startup(fake_manager, monkeypatch):
    _use_settings(monkeypatch, auto_create_schema=True)
    app = FastAPI()

    async with main_module.lifespan(app):
        assert app.state.db_manager.schema_created
