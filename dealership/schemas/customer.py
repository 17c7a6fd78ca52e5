# dealership/schemas/customer.py

from datetime import date, datetime

from pydantic import EmailStr, Field

from dealership.core.enums import CustomerStatus, DocumentType
from dealership.schemas.common import CamelModel


class CustomerCreate(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)

    document_number: str | None = None
    document_type: DocumentType | None = None

    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None

    birth_date: date | None = None
    status: CustomerStatus = CustomerStatus.ACTIVE
    notes: str | None = None


class CustomerUpdate(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None

    document_number: str | None = None
    document_type: DocumentType | None = None

    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None

    birth_date: date | None = None
    status: CustomerStatus | None = None
    notes: str | None = None


class CustomerResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None = None

    document_number: str | None = None
    document_type: DocumentType | None = None

    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None

    birth_date: date | None = None
    status: CustomerStatus | None = None
    notes: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None
