# dealership/schemas/common.py

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal in Python, plain JSON number on the wire
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base for resources whose wire fields are camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Ref(BaseModel):
    """Reference to another resource by id.

    Accepts a full resource object too; everything but the id is ignored.
    """

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    id: int
