"""Person Schemas — response models for the person endpoints.

Invariants:
    - Built from ORM rows via from_attributes
    - Request bodies are not modelled here; they arrive as a key-value map
"""

from pydantic import BaseModel, ConfigDict


class PersonResponse(BaseModel):
    """Public view of a stored Person."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    surname: str
    patronymic: str
    gender: str
    age: int
    nationality: str


class PersonMessageResponse(BaseModel):
    message: str
    person: PersonResponse


class MessageResponse(BaseModel):
    message: str
