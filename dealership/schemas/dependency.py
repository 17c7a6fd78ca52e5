# dealership/schemas/dependency.py

from pydantic import Field

from dealership.schemas.common import CamelModel


class DependencyCheck(CamelModel):
    can_delete: bool
    message: str
    dependencies: list[str] = Field(default_factory=list)
