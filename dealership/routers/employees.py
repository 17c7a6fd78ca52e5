# dealership/routers/employees.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dealership.core.enums import EmployeeStatus
from dealership.database import get_db
from dealership.models.employees import Employee
from dealership.schemas.employee import (
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeResponse,
)

router = APIRouter(
    prefix="/employees",
    tags=["Employees"],
)

logger = logging.getLogger("dealership")


def _get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )

    return employee


def _ensure_unique(db: Session, email: str | None, document_number: str | None, exclude_id: int | None = None):
    if email is not None:
        query = db.query(Employee).filter(Employee.email == email)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Employee with this email already exists",
            )

    if document_number:
        query = db.query(Employee).filter(Employee.document_number == document_number)
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Employee with this document number already exists",
            )


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_employee(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
):
    _ensure_unique(db, employee_data.email, employee_data.document_number)

    employee = Employee(**employee_data.model_dump())

    db.add(employee)
    db.commit()
    db.refresh(employee)

    return employee


@router.get("", response_model=list[EmployeeResponse])
def list_employees(db: Session = Depends(get_db)):
    return db.query(Employee).order_by(Employee.id.desc()).all()


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: int, db: Session = Depends(get_db)):
    return _get_employee_or_404(db, employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    employee_data: EmployeeUpdate,
    db: Session = Depends(get_db),
):
    employee = _get_employee_or_404(db, employee_id)
    changes = employee_data.model_dump(exclude_unset=True)

    _ensure_unique(
        db,
        changes.get("email"),
        changes.get("document_number"),
        exclude_id=employee.id,
    )

    # Validate the merged state, not just the incoming fields
    new_status = changes.get("status", employee.status)
    new_hire_date = changes.get("hire_date", employee.hire_date)
    new_termination_date = changes.get("termination_date", employee.termination_date)

    if (
        new_status == EmployeeStatus.TERMINATED
        and new_termination_date is not None
        and new_hire_date is not None
        and new_termination_date < new_hire_date
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Termination date cannot be earlier than hire date",
        )

    for field, value in changes.items():
        setattr(employee, field, value)

    db.commit()
    db.refresh(employee)

    return employee


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(employee_id: int, db: Session = Depends(get_db)):
    employee = _get_employee_or_404(db, employee_id)

    try:
        db.delete(employee)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Refused delete of employee {employee_id}: referenced by sales")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Employee has registered sales",
        )

    return None
