# =========================================================
# SALES ROUTER
#
# - A sale is written as a whole: header + every detail line
# - Subtotals and the total are recomputed here, whatever the client sent
# - Unit price defaults to the motorcycle's current price when not sent
# - Customer, employee and motorcycles must exist
# =========================================================

import logging
from datetime import datetime, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from dealership.core.config import settings
from dealership.core.rate_limiter import limiter
from dealership.database import get_db
from dealership.models.customers import Customer
from dealership.models.detail_sales import DetailSale
from dealership.models.employees import Employee
from dealership.models.motorcycles import Motorcycle
from dealership.models.sales import Sale
from dealership.schemas.sale import DetailSaleInput, SaleCreate, SaleResponse, SaleUpdate
from dealership.services.sale_composer import line_subtotal

router = APIRouter(prefix="/sales", tags=["Sales"])

logger = logging.getLogger("dealership")


# =========================================================
# HELPERS
# =========================================================
def get_sale_or_404(db: Session, sale_id: int) -> Sale:
    sale = (
        db.query(Sale)
        .options(joinedload(Sale.details))
        .filter(Sale.id == sale_id)
        .first()
    )

    if not sale:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sale not found",
        )

    return sale


def get_motorcycle_or_404(db: Session, motorcycle_id: int) -> Motorcycle:
    motorcycle = db.query(Motorcycle).filter(Motorcycle.id == motorcycle_id).first()

    if not motorcycle:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Motorcycle {motorcycle_id} not found",
        )

    return motorcycle


def price_line(
    motorcycle: Motorcycle,
    quantity: int,
    unit_price: Decimal | None,
    discount: Decimal,
) -> tuple[Decimal, Decimal]:
    """Return (unit_price, subtotal) for a line, rejecting oversized discounts."""
    if unit_price is None:
        unit_price = Decimal(motorcycle.price)

    if discount >= unit_price * quantity:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Discount must be lower than the line price for {motorcycle.name}",
        )

    return unit_price, line_subtotal(unit_price, quantity, discount)


def build_detail(db: Session, item: DetailSaleInput) -> DetailSale:
    motorcycle = get_motorcycle_or_404(db, item.motorcycle.id)
    unit_price, subtotal = price_line(motorcycle, item.quantity, item.unit_price, item.discount)

    return DetailSale(
        motorcycle_id=motorcycle.id,
        quantity=item.quantity,
        unit_price=unit_price,
        discount=item.discount,
        subtotal=subtotal,
        notes=item.notes,
    )


def recalculate_total(sale: Sale) -> Decimal:
    sale.total = sum((Decimal(detail.subtotal) for detail in sale.details), Decimal("0"))
    return sale.total


def _check_parties(db: Session, customer_id: int, employee_id: int):
    if not db.query(Customer).filter(Customer.id == customer_id).first():
        raise HTTPException(status_code=404, detail="Customer not found")

    if not db.query(Employee).filter(Employee.id == employee_id).first():
        raise HTTPException(status_code=404, detail="Employee not found")


def _check_sale_number(db: Session, sale_number: str, exclude_id: int | None = None):
    query = db.query(Sale).filter(Sale.sale_number == sale_number)
    if exclude_id is not None:
        query = query.filter(Sale.id != exclude_id)

    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Sale number already exists",
        )


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.SALE_CREATE_RATE_LIMIT)
def create_sale(
    request: Request,
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
):
    _check_sale_number(db, sale_data.sale_number)
    _check_parties(db, sale_data.customer.id, sale_data.employee.id)

    try:
        sale = Sale(
            sale_number=sale_data.sale_number,
            customer_id=sale_data.customer.id,
            employee_id=sale_data.employee.id,
            sale_date=sale_data.sale_date or datetime.now(timezone.utc),
            status=sale_data.status,
            payment_method=sale_data.payment_method,
            total=Decimal("0"),
        )
        sale.details = [build_detail(db, item) for item in sale_data.details]
        recalculate_total(sale)

        db.add(sale)
        db.commit()
        db.refresh(sale)

        logger.info(f"Created sale {sale.sale_number} total {sale.total}")
        return sale

    except HTTPException:
        db.rollback()
        raise

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Unable to create sale {sale_data.sale_number}")
        raise HTTPException(status_code=500, detail="Unable to complete sale")


# =========================================================
# LIST / GET
# =========================================================
@router.get("", response_model=list[SaleResponse])
def list_sales(db: Session = Depends(get_db)):
    return (
        db.query(Sale)
        .options(joinedload(Sale.details))
        .order_by(Sale.sale_date.desc(), Sale.id.desc())
        .all()
    )


@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(sale_id: int, db: Session = Depends(get_db)):
    return get_sale_or_404(db, sale_id)


@router.get("/{sale_id}/details", response_model=SaleResponse)
def get_sale_with_details(sale_id: int, db: Session = Depends(get_db)):
    sale = get_sale_or_404(db, sale_id)

    # Details and their motorcycles are eager-loaded; touch them so the
    # response never depends on an open session
    for detail in sale.details:
        _ = detail.motorcycle.brand

    return sale


# =========================================================
# UPDATE SALE
# =========================================================
@router.put("/{sale_id}", response_model=SaleResponse)
def update_sale(
    sale_id: int,
    sale_data: SaleUpdate,
    db: Session = Depends(get_db),
):
    sale = get_sale_or_404(db, sale_id)

    _check_sale_number(db, sale_data.sale_number, exclude_id=sale.id)
    _check_parties(db, sale_data.customer.id, sale_data.employee.id)

    try:
        sale.sale_number = sale_data.sale_number
        sale.customer_id = sale_data.customer.id
        sale.employee_id = sale_data.employee.id
        if sale_data.sale_date is not None:
            sale.sale_date = sale_data.sale_date
        sale.status = sale_data.status
        sale.payment_method = sale_data.payment_method

        if sale_data.details is not None:
            new_details = [build_detail(db, item) for item in sale_data.details]
            sale.details.clear()
            db.flush()
            sale.details.extend(new_details)

        recalculate_total(sale)

        db.commit()
        db.refresh(sale)

        logger.info(f"Updated sale {sale.sale_number} total {sale.total}")
        return sale

    except HTTPException:
        db.rollback()
        raise

    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Unable to update sale {sale_id}")
        raise HTTPException(status_code=500, detail="Unable to update sale")


# =========================================================
# DELETE SALE
# =========================================================
@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(sale_id: int, db: Session = Depends(get_db)):
    sale = get_sale_or_404(db, sale_id)

    db.delete(sale)
    db.commit()

    logger.info(f"Deleted sale {sale_id}")
    return None
