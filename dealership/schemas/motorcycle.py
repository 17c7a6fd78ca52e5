# dealership/schemas/motorcycle.py

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dealership.core.enums import MotorcycleType
from dealership.schemas.common import Money


class MotorcycleCreate(BaseModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None
    brand: str = Field(..., min_length=1)
    model: str | None = None
    year: int | None = Field(None, ge=1900)
    engine_capacity: int | None = Field(None, gt=0, description="Engine capacity in cc")
    price: Money = Field(..., ge=0, lt=100_000_000)

    type: MotorcycleType | None = None
    color: str | None = None
    stock: int | None = Field(None, ge=0)
    available: bool = True


class MotorcycleUpdate(BaseModel):
    code: str | None = None
    name: str | None = None
    description: str | None = None
    brand: str | None = None
    model: str | None = None
    year: int | None = Field(None, ge=1900)
    engine_capacity: int | None = Field(None, gt=0)
    price: Money | None = Field(None, ge=0, lt=100_000_000)

    type: MotorcycleType | None = None
    color: str | None = None
    stock: int | None = Field(None, ge=0)
    available: bool | None = None


class MotorcycleResponse(BaseModel):
    id: int
    code: str
    name: str
    description: str | None = None
    brand: str
    model: str | None = None
    year: int | None = None
    engine_capacity: int | None = None
    price: Money

    type: MotorcycleType | None = None
    color: str | None = None
    stock: int | None = None
    available: bool = True

    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
