"""Shared pydantic base for wire models (camelCase JSON, snake_case Python)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model serialised with camelCase keys.

    Input accepts either the camelCase alias or the Python field name.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
