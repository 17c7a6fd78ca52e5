# =========================================================
# SALE COMPOSITION & VALIDATION ENGINE
#
# - A draft is a plain value (SaleDraft); every operation returns a new one
# - Subtotals and the total are always derived, never entered by hand
# - validate() collects every error instead of stopping at the first
# - to_payload() drops lines that have no motorcycle selected
# =========================================================

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from pydantic import ValidationError

from dealership.core.config import settings
from dealership.core.enums import PaymentMethod
from dealership.core.exceptions import SaleValidationError
from dealership.schemas.common import Ref
from dealership.schemas.draft import LineDraft, SaleDraft, SelectedMotorcycle
from dealership.schemas.sale import DetailSalePayload, SalePayload, SaleResponse

logger = logging.getLogger("dealership")

ZERO = Decimal("0")

LINE_FIELDS = ("motorcycle", "quantity", "discount")
HEADER_FIELDS = ("sale_number", "customer", "employee", "sale_date", "status", "payment_method")


# =========================================================
# ARITHMETIC
# =========================================================
def line_subtotal(unit_price: Decimal, quantity: int, discount: Decimal) -> Decimal:
    return Decimal(unit_price) * quantity - Decimal(discount)


def draft_line_subtotal(line: LineDraft) -> Decimal:
    # Lines without a motorcycle contribute nothing
    if line.motorcycle is None:
        return ZERO
    return line_subtotal(line.motorcycle.price, line.quantity, line.discount)


def compute_total(lines: Iterable[LineDraft]) -> Decimal:
    return sum((draft_line_subtotal(line) for line in lines), ZERO)


def recompute_total(draft: SaleDraft) -> SaleDraft:
    return draft.model_copy(update={"total": compute_total(draft.lines)})


# =========================================================
# DRAFT CONSTRUCTION
# =========================================================
def new_draft(today: date | None = None) -> SaleDraft:
    now = datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)

    return SaleDraft(
        sale_number=f"SALE-{millis}",
        sale_date=today or date.today(),
        lines=[LineDraft()],
    )


def draft_from_sale(sale: SaleResponse) -> SaleDraft:
    """Load a stored sale for editing.

    Each line keeps the unit price the sale was made at, not the
    motorcycle's current price.
    """
    lines = [
        LineDraft(
            motorcycle=SelectedMotorcycle(
                id=detail.motorcycle.id,
                price=detail.unit_price,
                code=detail.motorcycle.code,
                name=detail.motorcycle.name,
            ),
            quantity=detail.quantity,
            discount=detail.discount,
        )
        for detail in sale.details
    ]

    draft = SaleDraft(
        sale_number=sale.sale_number,
        customer=Ref(id=sale.customer.id),
        employee=Ref(id=sale.employee.id),
        sale_date=sale.sale_date.date(),
        status=sale.status,
        payment_method=sale.payment_method or PaymentMethod.CASH,
        lines=lines or [LineDraft()],
    )
    return recompute_total(draft)


# =========================================================
# FORM INPUT COERCION
#
# Values arrive as the form produced them. Blank or unparsable input
# falls back to the field's empty value instead of raising.
# =========================================================
def _as_selected_motorcycle(value: Any) -> SelectedMotorcycle | None:
    if value is None or isinstance(value, (str, int)):
        # A bare id or label cannot carry the price snapshot
        return None
    if isinstance(value, SelectedMotorcycle):
        return value

    try:
        if isinstance(value, dict):
            return SelectedMotorcycle.model_validate(value)
        return SelectedMotorcycle.model_validate(value, from_attributes=True)
    except ValidationError:
        return None


def _as_ref(value: Any) -> Ref | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Ref):
        return value
    if isinstance(value, int):
        return Ref(id=value)
    if isinstance(value, str):
        text = value.strip()
        return Ref(id=int(text)) if text.isdigit() else None

    try:
        if isinstance(value, dict):
            return Ref.model_validate(value)
        return Ref.model_validate(value, from_attributes=True)
    except ValidationError:
        return None


def _as_quantity(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        return 1


def _as_discount(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return ZERO
    return number if number.is_finite() else ZERO


def _as_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


LINE_COERCERS = {
    "motorcycle": _as_selected_motorcycle,
    "quantity": _as_quantity,
    "discount": _as_discount,
}


def _check_index(draft: SaleDraft, index: int):
    if index < 0 or index >= len(draft.lines):
        raise IndexError(f"Line {index} does not exist")


# =========================================================
# LINE OPERATIONS
# =========================================================
def add_line(draft: SaleDraft) -> SaleDraft:
    lines = [*draft.lines, LineDraft()]
    return recompute_total(draft.model_copy(update={"lines": lines}))


def remove_line(draft: SaleDraft, index: int) -> SaleDraft:
    # A draft always keeps at least one line
    if len(draft.lines) <= 1:
        return draft

    _check_index(draft, index)
    lines = list(draft.lines)
    del lines[index]
    return recompute_total(draft.model_copy(update={"lines": lines}))


def update_line(draft: SaleDraft, index: int, field: str, value: Any) -> SaleDraft:
    if field not in LINE_FIELDS:
        raise ValueError(f"Unknown line field: {field}")

    _check_index(draft, index)
    line = draft.lines[index]
    updated = line.model_copy(update={field: LINE_COERCERS[field](value)})

    lines = list(draft.lines)
    lines[index] = updated
    return recompute_total(draft.model_copy(update={"lines": lines}))


def update_header(draft: SaleDraft, field: str, value: Any) -> SaleDraft:
    if field not in HEADER_FIELDS:
        raise ValueError(f"Unknown header field: {field}")

    if field in ("customer", "employee"):
        value = _as_ref(value)
    elif field == "sale_date":
        value = _as_date(value)
    elif field == "sale_number":
        value = "" if value is None else str(value)

    values = draft.model_dump()
    values[field] = value
    values["lines"] = draft.lines
    return SaleDraft.model_validate(values)


# =========================================================
# VALIDATION
# =========================================================
def validate(draft: SaleDraft, today: date | None = None) -> dict[str, str]:
    today = today or date.today()
    errors: dict[str, str] = {}

    # Sale number
    sale_number = (draft.sale_number or "").strip()
    if not sale_number:
        errors["saleNumber"] = "Sale number is required"
    elif len(sale_number) < 3:
        errors["saleNumber"] = "Sale number must be at least 3 characters"

    # Customer / employee
    if draft.customer is None:
        errors["customer"] = "Select a customer"

    if draft.employee is None:
        errors["employee"] = "Select an employee"

    # Sale date
    max_days = settings.SALE_DATE_MAX_DAYS_AHEAD
    if draft.sale_date is None:
        errors["saleDate"] = "Sale date is required"
    elif draft.sale_date > today + timedelta(days=max_days):
        errors["saleDate"] = f"Sale date cannot be more than {max_days} days in the future"

    # Lines
    if not any(line.motorcycle is not None for line in draft.lines):
        errors["details"] = "Add at least one sale detail"
    else:
        for index, line in enumerate(draft.lines):
            if line.motorcycle is None:
                continue

            position = index + 1
            line_value = line.motorcycle.price * line.quantity

            if line.quantity <= 0:
                errors[f"details[{index}].quantity"] = (
                    f"Quantity must be greater than 0 on line {position}"
                )

            if line.discount < 0:
                errors[f"details[{index}].discount"] = (
                    f"Discount cannot be negative on line {position}"
                )

            if line.discount >= line_value:
                errors[f"details[{index}].discount"] = (
                    f"Discount must be lower than the line price on line {position}"
                )

    # Total, derived from the lines rather than trusted from the draft
    if compute_total(draft.lines) <= 0:
        errors["total"] = "Total must be greater than 0"

    return errors


# =========================================================
# PAYLOAD
# =========================================================
def to_payload(draft: SaleDraft) -> SalePayload:
    details = [
        DetailSalePayload(
            motorcycle=Ref(id=line.motorcycle.id),
            quantity=line.quantity,
            unit_price=line.motorcycle.price,
            discount=line.discount,
            subtotal=draft_line_subtotal(line),
        )
        for line in draft.lines
        if line.motorcycle is not None
    ]

    sale_date = None
    if draft.sale_date is not None:
        sale_date = datetime.combine(draft.sale_date, time.min, tzinfo=timezone.utc)

    return SalePayload(
        sale_number=draft.sale_number,
        customer=draft.customer,
        employee=draft.employee,
        sale_date=sale_date,
        status=draft.status,
        payment_method=draft.payment_method,
        total=compute_total(draft.lines),
        details=details,
    )


def submit_sale(client, draft: SaleDraft, sale_id: int | None = None, today: date | None = None):
    """Validate a draft and send it through the REST client.

    Creates the sale when ``sale_id`` is None, otherwise replaces it.
    Raises SaleValidationError without touching the network when the
    draft is invalid; ApiError from the client propagates unchanged.
    """
    errors = validate(draft, today=today)
    if errors:
        raise SaleValidationError(errors)

    payload = to_payload(draft)
    logger.info(
        f"Submitting sale {payload.sale_number} "
        f"with {len(payload.details)} detail(s), total {payload.total}"
    )

    if sale_id is None:
        return client.sales.create(payload)
    return client.sales.update(sale_id, payload)
