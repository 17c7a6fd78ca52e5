# dealership/routers/customers.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dealership.database import get_db
from dealership.models.customers import Customer
from dealership.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
)

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
)

logger = logging.getLogger("dealership")


def _get_customer_or_404(db: Session, customer_id: int) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    return customer


def _ensure_unique(db: Session, email: str | None, document_number: str | None, exclude_id: int | None = None):
    if email is not None:
        query = db.query(Customer).filter(Customer.email == email)
        if exclude_id is not None:
            query = query.filter(Customer.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Customer with this email already exists",
            )

    if document_number:
        query = db.query(Customer).filter(Customer.document_number == document_number)
        if exclude_id is not None:
            query = query.filter(Customer.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Customer with this document number already exists",
            )


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
):
    _ensure_unique(db, customer_data.email, customer_data.document_number)

    customer = Customer(**customer_data.model_dump())

    db.add(customer)
    db.commit()
    db.refresh(customer)

    return customer


@router.get("", response_model=list[CustomerResponse])
def list_customers(db: Session = Depends(get_db)):
    return db.query(Customer).order_by(Customer.id.desc()).all()


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return _get_customer_or_404(db, customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db),
):
    customer = _get_customer_or_404(db, customer_id)
    changes = customer_data.model_dump(exclude_unset=True)

    _ensure_unique(
        db,
        changes.get("email"),
        changes.get("document_number"),
        exclude_id=customer.id,
    )

    for field, value in changes.items():
        setattr(customer, field, value)

    db.commit()
    db.refresh(customer)

    return customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    customer = _get_customer_or_404(db, customer_id)

    try:
        db.delete(customer)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Refused delete of customer {customer_id}: referenced by sales")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Customer has registered sales",
        )

    return None
