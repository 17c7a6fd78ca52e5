# dealership/schemas/employee.py

from datetime import date, datetime

from pydantic import EmailStr, Field, model_validator

from dealership.core.enums import DocumentType, EmployeeStatus
from dealership.schemas.common import CamelModel, Money


class EmployeeCreate(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str | None = None

    document_number: str | None = None
    document_type: DocumentType | None = None

    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None

    job_title: str = Field(..., min_length=1)
    position: str | None = None
    salary: Money | None = Field(None, ge=0)

    hire_date: date | None = None
    termination_date: date | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    notes: str | None = None

    @model_validator(mode="after")
    def check_termination_date(self):
        # A terminated employee cannot leave before being hired
        if (
            self.status == EmployeeStatus.TERMINATED
            and self.termination_date is not None
            and self.hire_date is not None
            and self.termination_date < self.hire_date
        ):
            raise ValueError("terminationDate must not be earlier than hireDate")
        return self


class EmployeeUpdate(CamelModel):
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

    job_title: str | None = None
    position: str | None = None
    salary: Money | None = Field(None, ge=0)

    hire_date: date | None = None
    termination_date: date | None = None
    status: EmployeeStatus | None = None
    notes: str | None = None


class EmployeeResponse(CamelModel):
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

    job_title: str
    position: str | None = None
    salary: Money | None = None

    hire_date: date | None = None
    termination_date: date | None = None
    status: EmployeeStatus | None = None
    notes: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None
