# dealership/models/employees.py

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum, Integer, Numeric, String
from sqlalchemy.sql import func

from dealership.core.enums import DocumentType, EmployeeStatus
from dealership.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)

    document_number = Column(String, unique=True, nullable=True)
    document_type = Column(Enum(DocumentType, name="document_type"), nullable=True)

    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    country = Column(String, nullable=True)

    job_title = Column(String, nullable=False)
    position = Column(String, nullable=True)
    salary = Column(Numeric(12, 2), nullable=True)

    hire_date = Column(Date, nullable=True)
    termination_date = Column(Date, nullable=True)

    status = Column(
        Enum(EmployeeStatus, name="employee_status"),
        default=EmployeeStatus.ACTIVE,
        nullable=False,
    )
    notes = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("salary IS NULL OR salary >= 0", name="ck_employee_salary_non_negative"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
