"""Person Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PersonServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager and classifier client created once in the lifespan and
      held on app.state; an unreachable database aborts startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from person_service.api.error_handlers import register_error_handlers
from person_service.api.routes import health, persons
from person_service.config import Settings, get_settings
from person_service.core.domain_types import ClassifierService
from person_service.core.errors import DatabaseError
from person_service.infrastructure.classifier_client import ClassifierClient
from person_service.infrastructure.database import DatabaseSessionManager
from person_service.infrastructure.observability import setup_logging
from person_service.services.enrichment import EnrichmentOrchestrator

logger = logging.getLogger(__name__)


def build_classifier(settings: Settings) -> ClassifierClient:
    return ClassifierClient(
        {
            ClassifierService.AGE: settings.agify_url,
            ClassifierService.GENDER: settings.genderize_url,
            ClassifierService.NATIONALITY: settings.nationalize_url,
        },
        timeout=settings.enrichment_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not await db_manager.health_check():
        await db_manager.close()
        raise DatabaseError("Database unreachable at startup", "connect")
    if settings.auto_create_schema:
        await db_manager.create_schema()

    classifier = build_classifier(settings)
    app.state.db_manager = db_manager
    app.state.enricher = EnrichmentOrchestrator(
        classifier, concurrent=settings.enrichment_concurrent,
    )
    logger.info("Person service started")
    try:
        yield
    finally:
        logger.info("Person service shutting down")
        await classifier.aclose()
        await db_manager.close()


app = FastAPI(
    title="Person Service API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.root_router)
app.include_router(health.router)
app.include_router(persons.router)

register_error_handlers(app)
