"""Shared base model for camelCase JSON payloads."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


# Largest value an SQLite INTEGER column can hold.
SQLITE_INT_MAX = 2**63 - 1


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys.

    Request bodies are accepted in either camelCase or snake_case.
    FastAPI serialises response models by alias, so responses are
    always camelCase.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
