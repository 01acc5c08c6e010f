"""Base classes for domain models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueObject(BaseModel):
    """Immutable model compared by value.

    Fields serialise with camelCase aliases (``model_dump(by_alias=True)``) and
    can be populated by either name.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
