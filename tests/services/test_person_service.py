"""Person Service — create/retrieve/update/delete over an in-memory store.

Tests:
    - create persists exactly the enriched attributes; failure persists nothing
    - presence checks happen before any enrichment or store call
    - update is sparse and idempotent; delete requires id
"""

import pytest

from person_service.core.domain_types import ClassifierService
from person_service.core.errors import (
    EnrichmentServiceError, InvalidIntegerError, MissingFieldError,
    NoFilterError, ResourceNotFoundError,
)
from person_service.services.enrichment import EnrichmentOrchestrator
from person_service.services.person_service import PersonService
from tests.fakes import (
    FakeClassifier, InMemoryPersonRepository, classifier_payloads, failing,
)


@pytest.fixture
def repository():
    return InMemoryPersonRepository()


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def service(repository, classifier):
    return PersonService(
        repository, EnrichmentOrchestrator(classifier), max_limit=100,
    )


def _stored(person):
    return {
        "name": person.name, "surname": person.surname,
        "patronymic": person.patronymic, "age": person.age,
        "gender": person.gender, "nationality": person.nationality,
    }


async def test_create_stores_enriched_record(service, repository):
    person = await service.create({"name": "Ann", "surname": "Lee"})
    assert person.id == 1
    assert _stored(repository.rows[1]) == {
        "name": "Ann", "surname": "Lee", "patronymic": "",
        "age": 34, "gender": "female", "nationality": "US",
    }


async def test_create_keeps_patronymic(service):
    person = await service.create(
        {"name": "Ivan", "surname": "Petrov", "patronymic": "Sergeevich"},
    )
    assert person.patronymic == "Sergeevich"


@pytest.mark.parametrize("values,missing", [
    ({"surname": "Lee"}, "name"),
    ({"name": "Ann"}, "surname"),
    ({"name": " ", "surname": "Lee"}, "name"),
])
async def test_create_requires_name_and_surname(
    service, repository, classifier, values, missing,
):
    with pytest.raises(MissingFieldError) as excinfo:
        await service.create(values)
    assert excinfo.value.field == missing
    assert classifier.calls == []
    assert repository.calls == []


@pytest.mark.parametrize("service_name", list(ClassifierService))
async def test_enrichment_failure_persists_nothing(repository, service_name):
    payloads = classifier_payloads()
    payloads[service_name] = failing(service_name)
    svc = PersonService(
        repository, EnrichmentOrchestrator(FakeClassifier(payloads)),
    )
    for _ in range(2):
        with pytest.raises(EnrichmentServiceError):
            await svc.create({"name": "Ann", "surname": "Lee"})
    assert repository.rows == {}
    assert repository.calls == []


async def test_retrieve_pages_matching_records(service, repository):
    for surname in ["A", "B", "C", "D", "E"]:
        await service.create({"name": "Ann", "surname": surname})
    await service.create({"name": "Bob", "surname": "Z"})
    repository.rows[6].gender = "male"

    result = await service.retrieve({"gender": "female", "limit": "3", "page": "1"})
    assert [p.surname for p in result] == ["A", "B", "C"]
    assert all(p.gender == "female" for p in result)

    page_two = await service.retrieve({"gender": "female", "limit": "3", "page": "2"})
    assert [p.surname for p in page_two] == ["D", "E"]


async def test_retrieve_without_filters_makes_no_store_call(service, repository):
    with pytest.raises(NoFilterError):
        await service.retrieve({"page": "1", "limit": "5"})
    assert repository.calls == []


async def test_update_is_sparse(service, repository):
    await service.create({"name": "Ann", "surname": "Lee", "patronymic": "Jo"})
    person = await service.update({"id": "1", "age": "40", "patronymic": ""})
    assert person.age == 40
    assert person.patronymic == "Jo"
    assert repository.calls[-1] == "save"


async def test_update_twice_converges(service, repository):
    await service.create({"name": "Ann", "surname": "Lee"})
    await service.update({"id": "1", "nationality": "GB"})
    repository.calls.clear()
    person = await service.update({"id": "1", "nationality": "GB"})
    assert person.nationality == "GB"
    assert "save" not in repository.calls


async def test_update_requires_a_field(service, repository):
    with pytest.raises(NoFilterError):
        await service.update({"id": "1"})
    assert repository.calls == []


@pytest.mark.parametrize("values,error", [
    ({"name": "Bo"}, MissingFieldError),
    ({"id": "abc", "name": "Bo"}, InvalidIntegerError),
    ({"id": "1", "age": "old"}, InvalidIntegerError),
])
async def test_update_validation_precedes_store(service, repository, values, error):
    with pytest.raises(error):
        await service.update(values)
    assert repository.calls == []


async def test_update_unknown_id_is_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        await service.update({"id": "99", "name": "Bo"})


async def test_delete_removes_record(service, repository):
    await service.create({"name": "Ann", "surname": "Lee"})
    await service.delete({"id": "1"})
    assert repository.rows == {}


async def test_delete_without_id_makes_no_store_call(service, repository):
    with pytest.raises(MissingFieldError) as excinfo:
        await service.delete({})
    assert excinfo.value.field == "id"
    assert repository.calls == []


async def test_delete_unknown_id_is_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        await service.delete({"id": "7"})


async def test_ids_are_not_reused_after_delete(service):
    await service.create({"name": "Ann", "surname": "Lee"})
    await service.delete({"id": "1"})
    person = await service.create({"name": "Ann", "surname": "Lee"})
    assert person.id == 2
