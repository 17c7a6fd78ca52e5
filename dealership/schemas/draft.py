# dealership/schemas/draft.py
#
# Serializable state of a sale being composed. The composition engine
# takes these values and returns new ones; nothing here is mutated in place.

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from dealership.core.enums import PaymentMethod, SaleStatus
from dealership.schemas.common import CamelModel, Money, Ref


class SelectedMotorcycle(BaseModel):
    """The motorcycle chosen on a line, with the price captured at selection."""

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    id: int
    price: Money
    code: str | None = None
    name: str | None = None


class LineDraft(BaseModel):
    motorcycle: SelectedMotorcycle | None = None
    quantity: int = 1
    discount: Money = Decimal("0")


class SaleDraft(CamelModel):
    sale_number: str = ""
    customer: Ref | None = None
    employee: Ref | None = None
    sale_date: date | None = None
    status: SaleStatus = SaleStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.CASH
    lines: list[LineDraft] = Field(default_factory=lambda: [LineDraft()])
    total: Money = Decimal("0")
