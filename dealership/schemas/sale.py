# dealership/schemas/sale.py

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from dealership.core.enums import PaymentMethod, SaleStatus
from dealership.schemas.common import CamelModel, Money, Ref
from dealership.schemas.customer import CustomerResponse
from dealership.schemas.employee import EmployeeResponse
from dealership.schemas.motorcycle import MotorcycleResponse


# =========================================================
# INBOUND (backend)
# =========================================================
class DetailSaleInput(CamelModel):
    motorcycle: Ref
    quantity: int = Field(..., ge=1)
    # Snapshot of the motorcycle price; the backend falls back to the current price
    unit_price: Money | None = Field(None, ge=0)
    discount: Money = Field(Decimal("0"), ge=0)
    # Accepted for compatibility, always recomputed
    subtotal: Money | None = None
    notes: str | None = None


class SaleCreate(CamelModel):
    sale_number: str = Field(..., min_length=1)
    customer: Ref
    employee: Ref
    sale_date: datetime | None = None
    status: SaleStatus = SaleStatus.PENDING
    payment_method: PaymentMethod | None = None
    # Accepted for compatibility, always recomputed from the details
    total: Money | None = None
    details: list[DetailSaleInput] = Field(..., min_length=1)


class SaleUpdate(CamelModel):
    sale_number: str = Field(..., min_length=1)
    customer: Ref
    employee: Ref
    sale_date: datetime | None = None
    status: SaleStatus = SaleStatus.PENDING
    payment_method: PaymentMethod | None = None
    total: Money | None = None
    # None keeps the stored lines, a list replaces them
    details: list[DetailSaleInput] | None = Field(None, min_length=1)


class DetailSaleCreate(DetailSaleInput):
    sale_id: int


class DetailSaleUpdate(CamelModel):
    motorcycle: Ref | None = None
    quantity: int | None = Field(None, ge=1)
    unit_price: Money | None = Field(None, ge=0)
    discount: Money | None = Field(None, ge=0)
    notes: str | None = None


# =========================================================
# OUTBOUND (backend)
# =========================================================
class DetailSaleResponse(CamelModel):
    id: int
    sale_id: int | None = None
    motorcycle: MotorcycleResponse
    quantity: int
    unit_price: Money
    discount: Money
    subtotal: Money
    notes: str | None = None


class SaleResponse(CamelModel):
    id: int
    sale_number: str
    customer: CustomerResponse
    employee: EmployeeResponse
    sale_date: datetime
    status: SaleStatus
    payment_method: PaymentMethod | None = None
    total: Money
    details: list[DetailSaleResponse] = []

    @field_validator("details", mode="before")
    @classmethod
    def details_default_to_empty(cls, value):
        # Sales without lines may come back with "details": null
        return [] if value is None else value


# =========================================================
# CLIENT PAYLOAD (built by the composition engine)
# =========================================================
class DetailSalePayload(CamelModel):
    motorcycle: Ref
    quantity: int
    unit_price: Money
    discount: Money
    subtotal: Money


class SalePayload(CamelModel):
    sale_number: str
    customer: Ref | None
    employee: Ref | None
    sale_date: datetime | None
    status: SaleStatus
    payment_method: PaymentMethod
    total: Money
    details: list[DetailSalePayload]
