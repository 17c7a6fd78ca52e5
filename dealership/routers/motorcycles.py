# dealership/routers/motorcycles.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dealership.database import get_db
from dealership.models.motorcycles import Motorcycle
from dealership.schemas.motorcycle import (
    MotorcycleCreate,
    MotorcycleUpdate,
    MotorcycleResponse,
)

router = APIRouter(
    prefix="/motorcycles",
    tags=["Motorcycles"],
)

logger = logging.getLogger("dealership")


def _get_motorcycle_or_404(db: Session, motorcycle_id: int) -> Motorcycle:
    motorcycle = db.query(Motorcycle).filter(Motorcycle.id == motorcycle_id).first()

    if not motorcycle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Motorcycle not found",
        )

    return motorcycle


def _ensure_code_available(db: Session, code: str, exclude_id: int | None = None):
    query = db.query(Motorcycle).filter(Motorcycle.code == code)
    if exclude_id is not None:
        query = query.filter(Motorcycle.id != exclude_id)

    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Motorcycle with this code already exists",
        )


@router.post(
    "",
    response_model=MotorcycleResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_motorcycle(
    motorcycle_data: MotorcycleCreate,
    db: Session = Depends(get_db),
):
    _ensure_code_available(db, motorcycle_data.code)

    motorcycle = Motorcycle(**motorcycle_data.model_dump())

    db.add(motorcycle)
    db.commit()
    db.refresh(motorcycle)

    return motorcycle


@router.get("", response_model=list[MotorcycleResponse])
def list_motorcycles(db: Session = Depends(get_db)):
    return db.query(Motorcycle).order_by(Motorcycle.id.desc()).all()


@router.get("/{motorcycle_id}", response_model=MotorcycleResponse)
def get_motorcycle(motorcycle_id: int, db: Session = Depends(get_db)):
    return _get_motorcycle_or_404(db, motorcycle_id)


@router.put("/{motorcycle_id}", response_model=MotorcycleResponse)
def update_motorcycle(
    motorcycle_id: int,
    motorcycle_data: MotorcycleUpdate,
    db: Session = Depends(get_db),
):
    motorcycle = _get_motorcycle_or_404(db, motorcycle_id)
    changes = motorcycle_data.model_dump(exclude_unset=True)

    if changes.get("code") is not None and changes["code"] != motorcycle.code:
        _ensure_code_available(db, changes["code"], exclude_id=motorcycle.id)

    for field, value in changes.items():
        setattr(motorcycle, field, value)

    db.commit()
    db.refresh(motorcycle)

    return motorcycle


@router.delete("/{motorcycle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_motorcycle(motorcycle_id: int, db: Session = Depends(get_db)):
    motorcycle = _get_motorcycle_or_404(db, motorcycle_id)

    try:
        db.delete(motorcycle)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Refused delete of motorcycle {motorcycle_id}: referenced by sales")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Motorcycle is referenced by existing sales",
        )

    return None
