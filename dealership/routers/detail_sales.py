# dealership/routers/detail_sales.py
#
# Line-level access to sale details. Every write recomputes the line
# subtotal and the owning sale's total.

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from dealership.database import get_db
from dealership.models.detail_sales import DetailSale
from dealership.routers.sales import (
    build_detail,
    get_motorcycle_or_404,
    get_sale_or_404,
    price_line,
    recalculate_total,
)
from dealership.schemas.sale import DetailSaleCreate, DetailSaleResponse, DetailSaleUpdate

router = APIRouter(
    prefix="/detail-sales",
    tags=["Detail Sales"],
)


def _get_detail_or_404(db: Session, detail_id: int) -> DetailSale:
    detail = db.query(DetailSale).filter(DetailSale.id == detail_id).first()

    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale detail not found",
        )

    return detail


@router.get("", response_model=list[DetailSaleResponse])
def list_detail_sales(db: Session = Depends(get_db)):
    return db.query(DetailSale).order_by(DetailSale.id).all()


@router.get("/sale/{sale_id}", response_model=list[DetailSaleResponse])
def list_details_for_sale(sale_id: int, db: Session = Depends(get_db)):
    return get_sale_or_404(db, sale_id).details


@router.get("/{detail_id}", response_model=DetailSaleResponse)
def get_detail_sale(detail_id: int, db: Session = Depends(get_db)):
    return _get_detail_or_404(db, detail_id)


@router.post("", response_model=DetailSaleResponse, status_code=status.HTTP_201_CREATED)
def create_detail_sale(
    detail_data: DetailSaleCreate,
    db: Session = Depends(get_db),
):
    sale = get_sale_or_404(db, detail_data.sale_id)

    detail = build_detail(db, detail_data)
    sale.details.append(detail)
    recalculate_total(sale)

    db.commit()
    db.refresh(detail)

    return detail


@router.put("/{detail_id}", response_model=DetailSaleResponse)
def update_detail_sale(
    detail_id: int,
    detail_data: DetailSaleUpdate,
    db: Session = Depends(get_db),
):
    detail = _get_detail_or_404(db, detail_id)
    changes = detail_data.model_dump(exclude_unset=True)

    motorcycle = detail.motorcycle
    unit_price = Decimal(detail.unit_price)

    if detail_data.motorcycle is not None and detail_data.motorcycle.id != detail.motorcycle_id:
        motorcycle = get_motorcycle_or_404(db, detail_data.motorcycle.id)
        # A new motorcycle brings its own price unless one is sent
        unit_price = None

    if detail_data.unit_price is not None:
        unit_price = detail_data.unit_price

    quantity = detail_data.quantity if detail_data.quantity is not None else detail.quantity
    discount = detail_data.discount if detail_data.discount is not None else Decimal(detail.discount)

    unit_price, subtotal = price_line(motorcycle, quantity, unit_price, discount)

    detail.motorcycle_id = motorcycle.id
    detail.motorcycle = motorcycle
    detail.quantity = quantity
    detail.unit_price = unit_price
    detail.discount = discount
    detail.subtotal = subtotal
    if "notes" in changes:
        detail.notes = detail_data.notes

    recalculate_total(detail.sale)

    db.commit()
    db.refresh(detail)

    return detail


@router.delete("/{detail_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_detail_sale(detail_id: int, db: Session = Depends(get_db)):
    detail = _get_detail_or_404(db, detail_id)
    sale = detail.sale

    if len(sale.details) <= 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A sale must keep at least one detail",
        )

    sale.details.remove(detail)
    recalculate_total(sale)

    db.commit()

    return None
