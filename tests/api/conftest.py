"""API test fixtures — in-memory SQLite + FastAPI test client + mocked classifiers.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - app.state.enricher wraps a real ClassifierClient over httpx.MockTransport;
      tests reconfigure responses through the `classifier` fixture
    - The lifespan is not run (ASGITransport), so app.state is set here
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from person_service.core.domain_types import ClassifierService
from person_service.db.base import Base
from person_service.infrastructure.classifier_client import ClassifierClient
from person_service.infrastructure.database import (
    DatabaseSessionManager, get_db,
)
from person_service.main import app
from person_service.services.enrichment import EnrichmentOrchestrator

HOSTS = {
    "agify.test": ClassifierService.AGE,
    "genderize.test": ClassifierService.GENDER,
    "nationalize.test": ClassifierService.NATIONALITY,
}


class MockClassifiers:
    """Per-service canned httpx responses plus a request log."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: dict[ClassifierService, httpx.Response] = {
            ClassifierService.AGE: httpx.Response(
                200, json={"count": 1, "name": "Ann", "age": 34},
            ),
            ClassifierService.GENDER: httpx.Response(
                200, json={"count": 1, "name": "Ann", "gender": "female", "probability": 0.99},
            ),
            ClassifierService.NATIONALITY: httpx.Response(
                200, json={"count": 1, "name": "Ann", "country": [
                    {"country_id": "US", "probability": 0.4},
                    {"country_id": "GB", "probability": 0.3},
                ]},
            ),
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        template = self.responses[HOSTS[request.url.host]]
        return httpx.Response(
            template.status_code, headers=template.headers, content=template.content,
        )


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def classifier():
    return MockClassifiers()


@pytest.fixture
async def client(test_engine, test_session_factory, classifier):
    """FastAPI test client with DB dependency and app.state overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    http = httpx.AsyncClient(transport=httpx.MockTransport(classifier.handler))
    app.state.enricher = EnrichmentOrchestrator(ClassifierClient(
        {
            ClassifierService.AGE: "http://agify.test/",
            ClassifierService.GENDER: "http://genderize.test/",
            ClassifierService.NATIONALITY: "http://nationalize.test/",
        },
        client=http,
    ))

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    await http.aclose()
    app.dependency_overrides.clear()
    del app.state.db_manager
    del app.state.enricher


@pytest.fixture
async def people(test_session_factory):
    """Rows currently in the people table, ordered by id."""
    from sqlalchemy import select
    from person_service.models.person import Person

    async def _load():
        async with test_session_factory() as session:
            result = await session.execute(select(Person).order_by(Person.id))
            return list(result.scalars().all())

    return _load
