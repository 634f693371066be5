"""Person Routes — create, retrieve, update and delete under /database.

Invariants:
    - Every handler reads a flat key-value map (read_form_values), never typed bodies
    - Handlers delegate to PersonService; no business logic here
    - Errors propagate as PersonServiceError and are rendered by the global handlers

Design Decisions:
    - Paths and verbs kept from existing clients: POST/GET/DELETE /database,
      POST /database/edit
    - PersonService built per request from app.state (enricher, settings) and
      the request's DB session
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from person_service.api.form_values import read_form_values
from person_service.config import get_settings
from person_service.infrastructure.database import get_db
from person_service.infrastructure.person_repository import SqlPersonRepository
from person_service.schemas.person import (
    MessageResponse, PersonMessageResponse, PersonResponse,
)
from person_service.services.person_service import PersonService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/database", tags=["persons"])


def get_person_service(
    request: Request, db: AsyncSession = Depends(get_db),
) -> PersonService:
    """FastAPI dependency: request-scoped PersonService."""
    return PersonService(
        SqlPersonRepository(db),
        request.app.state.enricher,
        max_limit=get_settings().max_limit,
    )


@router.post(
    "", response_model=PersonMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_person(
    values: dict[str, str] = Depends(read_form_values),
    service: PersonService = Depends(get_person_service),
):
    """Create a person enriched with age, gender and nationality."""
    person = await service.create(values)
    return PersonMessageResponse(
        message="Person added successfully",
        person=PersonResponse.model_validate(person),
    )


@router.get("", response_model=list[PersonResponse])
async def get_persons(
    values: dict[str, str] = Depends(read_form_values),
    service: PersonService = Depends(get_person_service),
):
    """Filtered, paginated retrieval. At least one filter is required."""
    persons = await service.retrieve(values)
    return [PersonResponse.model_validate(p) for p in persons]


@router.post("/edit", response_model=PersonMessageResponse)
async def update_person(
    values: dict[str, str] = Depends(read_form_values),
    service: PersonService = Depends(get_person_service),
):
    """Sparse update by id."""
    person = await service.update(values)
    return PersonMessageResponse(
        message="Person updated successfully",
        person=PersonResponse.model_validate(person),
    )


@router.delete("", response_model=MessageResponse)
async def delete_person(
    values: dict[str, str] = Depends(read_form_values),
    service: PersonService = Depends(get_person_service),
):
    await service.delete(values)
    return MessageResponse(message="Person deleted successfully")
