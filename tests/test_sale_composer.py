"""Tests for sale draft composition, validation and payload building."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from dealership.core.enums import PaymentMethod, SaleStatus
from dealership.core.exceptions import SaleValidationError
from dealership.schemas.common import Ref
from dealership.schemas.draft import LineDraft, SaleDraft, SelectedMotorcycle
from dealership.schemas.sale import SaleResponse
from dealership.services import sale_composer as composer


def _bike(bike_id=7, price="1000"):
    return SelectedMotorcycle(id=bike_id, price=Decimal(price))


class TestArithmetic:
    def test_line_subtotal(self):
        assert composer.line_subtotal(Decimal("1000"), 2, Decimal("100")) == Decimal("1900")

    def test_line_without_motorcycle_contributes_nothing(self):
        assert composer.draft_line_subtotal(LineDraft(quantity=5, discount=Decimal("3"))) == 0

    def test_total_sums_only_lines_with_motorcycle(self):
        lines = [
            LineDraft(motorcycle=_bike(price="1000"), quantity=2, discount=Decimal("100")),
            LineDraft(),
            LineDraft(motorcycle=_bike(8, "500"), quantity=1),
        ]
        assert composer.compute_total(lines) == Decimal("2400")

    def test_recompute_total_is_idempotent(self, valid_draft):
        once = composer.recompute_total(valid_draft)
        twice = composer.recompute_total(once)

        assert once.total == Decimal("1900")
        assert twice.total == once.total


class TestDraftConstruction:
    def test_new_draft_defaults(self, today):
        draft = composer.new_draft(today)

        assert draft.sale_number.startswith("SALE-")
        assert draft.sale_number[len("SALE-"):].isdigit()
        assert draft.sale_date == today
        assert draft.status == SaleStatus.PENDING
        assert draft.payment_method == PaymentMethod.CASH
        assert draft.customer is None
        assert draft.employee is None
        assert len(draft.lines) == 1
        assert draft.lines[0].motorcycle is None
        assert draft.total == 0

    def test_draft_from_sale_keeps_stored_unit_price(self):
        sale = SaleResponse.model_validate({
            "id": 3,
            "saleNumber": "SALE-0003",
            "customer": {"id": 1, "firstName": "Ana", "lastName": "Perez", "email": "ana@example.com"},
            "employee": {"id": 2, "firstName": "Luis", "lastName": "Gomez",
                         "email": "luis@example.com", "jobTitle": "Advisor"},
            "saleDate": "2025-06-10T15:30:00",
            "status": "COMPLETED",
            "paymentMethod": None,
            "total": 1900,
            "details": [
                {
                    "id": 11,
                    "motorcycle": {"id": 7, "code": "MT-07", "name": "MT-07", "brand": "Yamaha", "price": 1200},
                    "quantity": 2,
                    "unitPrice": 1000,
                    "discount": 100,
                    "subtotal": 1900,
                }
            ],
        })

        draft = composer.draft_from_sale(sale)

        assert draft.sale_number == "SALE-0003"
        assert draft.customer == Ref(id=1)
        assert draft.employee == Ref(id=2)
        assert draft.sale_date.isoformat() == "2025-06-10"
        assert draft.payment_method == PaymentMethod.CASH
        assert draft.lines[0].motorcycle.price == Decimal("1000")
        assert draft.total == Decimal("1900")


class TestLineOperations:
    def test_add_line_appends_empty_line(self, valid_draft):
        draft = composer.add_line(valid_draft)

        assert len(draft.lines) == 2
        assert draft.lines[1] == LineDraft()
        assert len(valid_draft.lines) == 1

    def test_remove_line_on_single_line_draft_is_noop(self, valid_draft):
        assert composer.remove_line(valid_draft, 0) == valid_draft

    def test_remove_line_recomputes_total(self, valid_draft):
        draft = composer.add_line(valid_draft)
        draft = composer.update_line(draft, 1, "motorcycle", {"id": 8, "price": 500})
        assert draft.total == Decimal("2400")

        draft = composer.remove_line(draft, 0)

        assert len(draft.lines) == 1
        assert draft.lines[0].motorcycle.id == 8
        assert draft.total == Decimal("500")

    def test_remove_line_out_of_range(self, valid_draft):
        draft = composer.add_line(valid_draft)
        with pytest.raises(IndexError):
            composer.remove_line(draft, 5)

    def test_update_line_quantity_recomputes_total(self, valid_draft):
        draft = composer.update_line(valid_draft, 0, "quantity", 3)

        assert draft.lines[0].quantity == 3
        assert draft.total == Decimal("2900")
        assert valid_draft.lines[0].quantity == 2

    def test_update_line_accepts_motorcycle_object(self, valid_draft):
        motorcycle = SimpleNamespace(id=9, price=Decimal("750"), code="Z-9", name="Z900")
        draft = composer.update_line(valid_draft, 0, "motorcycle", motorcycle)

        assert draft.lines[0].motorcycle.id == 9
        assert draft.total == Decimal("1400")

    def test_clearing_motorcycle_drops_line_from_total(self, valid_draft):
        draft = composer.update_line(valid_draft, 0, "motorcycle", None)
        assert draft.total == 0

    def test_update_line_rejects_unknown_field(self, valid_draft):
        with pytest.raises(ValueError):
            composer.update_line(valid_draft, 0, "subtotal", 10)

    def test_update_header(self, valid_draft):
        draft = composer.update_header(valid_draft, "customer", 5)
        draft = composer.update_header(draft, "status", "COMPLETED")

        assert draft.customer == Ref(id=5)
        assert draft.status == SaleStatus.COMPLETED
        assert draft.lines == valid_draft.lines

    def test_update_header_rejects_unknown_field(self, valid_draft):
        with pytest.raises(ValueError):
            composer.update_header(valid_draft, "total", 1)


class TestFormInput:
    @pytest.mark.parametrize("raw, expected", [("3", 3), ("2.7", 2), ("", 1), ("abc", 1), (None, 1)])
    def test_quantity(self, valid_draft, raw, expected):
        draft = composer.update_line(valid_draft, 0, "quantity", raw)
        assert draft.lines[0].quantity == expected

    @pytest.mark.parametrize("raw, expected", [("50.5", "50.5"), ("", "0"), ("abc", "0"), (None, "0")])
    def test_discount(self, valid_draft, raw, expected):
        draft = composer.update_line(valid_draft, 0, "discount", raw)
        assert draft.lines[0].discount == Decimal(expected)

    def test_blank_discount_recomputes_total(self, valid_draft):
        draft = composer.update_line(valid_draft, 0, "discount", "")
        assert draft.total == Decimal("2000")

    @pytest.mark.parametrize("raw", ["", "7", {"id": 7}])
    def test_unknown_motorcycle_selection_clears_line(self, valid_draft, raw):
        draft = composer.update_line(valid_draft, 0, "motorcycle", raw)

        assert draft.lines[0].motorcycle is None
        assert draft.total == 0

    def test_blank_sale_date_is_reported_as_required(self, valid_draft, today):
        draft = composer.update_header(valid_draft, "sale_date", "")

        assert draft.sale_date is None
        assert composer.validate(draft, today)["saleDate"] == "Sale date is required"

    def test_sale_date_from_text(self, valid_draft):
        draft = composer.update_header(valid_draft, "sale_date", "2025-06-20")
        assert draft.sale_date.isoformat() == "2025-06-20"

    def test_unparsable_sale_date(self, valid_draft):
        assert composer.update_header(valid_draft, "sale_date", "next week").sale_date is None

    @pytest.mark.parametrize("raw, expected", [("5", Ref(id=5)), ("", None), ("abc", None), ({}, None)])
    def test_party_reference(self, valid_draft, today, raw, expected):
        draft = composer.update_header(valid_draft, "employee", raw)

        assert draft.employee == expected
        assert ("employee" in composer.validate(draft, today)) is (expected is None)

    def test_negative_index_is_rejected(self, valid_draft):
        draft = composer.add_line(valid_draft)

        with pytest.raises(IndexError):
            composer.remove_line(draft, -1)
        with pytest.raises(IndexError):
            composer.update_line(draft, -1, "quantity", 2)


class TestValidate:
    def test_minimal_valid_draft(self, today):
        draft = SaleDraft(
            sale_number="SALE-0001",
            customer=Ref(id=1),
            employee=Ref(id=1),
            sale_date=today,
            lines=[LineDraft(motorcycle=_bike(), quantity=2, discount=Decimal("100"))],
        )

        assert composer.validate(draft, today) == {}
        assert composer.recompute_total(draft).total == Decimal("1900")

    def test_missing_customer_and_employee(self, valid_draft, today):
        draft = valid_draft.model_copy(update={"customer": None, "employee": None})
        errors = composer.validate(draft, today)

        assert set(errors) == {"customer", "employee"}

    def test_short_sale_number(self, valid_draft, today):
        draft = composer.update_header(valid_draft, "sale_number", "S1")
        assert "saleNumber" in composer.validate(draft, today)

    def test_blank_sale_number(self, valid_draft, today):
        draft = composer.update_header(valid_draft, "sale_number", "   ")
        assert composer.validate(draft, today)["saleNumber"] == "Sale number is required"

    def test_sale_date_limit(self, valid_draft, today):
        at_limit = composer.update_header(valid_draft, "sale_date", today + timedelta(days=30))
        past_limit = composer.update_header(valid_draft, "sale_date", today + timedelta(days=31))

        assert composer.validate(at_limit, today) == {}
        assert "saleDate" in composer.validate(past_limit, today)

    def test_missing_sale_date(self, valid_draft, today):
        draft = composer.update_header(valid_draft, "sale_date", None)
        assert "saleDate" in composer.validate(draft, today)

    def test_no_line_with_motorcycle(self, valid_draft, today):
        draft = composer.update_line(valid_draft, 0, "motorcycle", None)
        errors = composer.validate(draft, today)

        assert "details" in errors
        assert "total" in errors

    def test_non_positive_quantity(self, valid_draft, today):
        draft = composer.update_line(valid_draft, 0, "quantity", 0)
        errors = composer.validate(draft, today)

        assert "details[0].quantity" in errors

    def test_discount_not_below_line_value(self, valid_draft, today):
        draft = composer.update_line(valid_draft, 0, "discount", Decimal("2000"))
        errors = composer.validate(draft, today)

        assert "details[0].discount" in errors
        assert "total" in errors

    def test_negative_discount(self, valid_draft, today):
        draft = composer.update_line(valid_draft, 0, "discount", Decimal("-5"))
        assert "details[0].discount" in composer.validate(draft, today)

    def test_error_key_uses_line_position(self, valid_draft, today):
        draft = composer.add_line(valid_draft)
        draft = composer.update_line(draft, 1, "motorcycle", {"id": 8, "price": 500})
        draft = composer.update_line(draft, 1, "quantity", -1)

        errors = composer.validate(draft, today)

        assert "details[1].quantity" in errors
        assert "line 2" in errors["details[1].quantity"]

    def test_stale_total_is_not_trusted(self, valid_draft, today):
        draft = valid_draft.model_copy(update={"total": Decimal("0")})
        assert composer.validate(draft, today) == {}


class TestPayload:
    def test_payload_excludes_lines_without_motorcycle(self, valid_draft):
        draft = composer.add_line(valid_draft)
        payload = composer.to_payload(draft)

        assert len(payload.details) == 1
        assert all(detail.motorcycle is not None for detail in payload.details)

    def test_payload_wire_format(self, valid_draft):
        body = composer.to_payload(valid_draft).model_dump(by_alias=True, mode="json")

        assert body["saleNumber"] == "SALE-1"
        assert body["customer"] == {"id": 1}
        assert body["employee"] == {"id": 2}
        assert body["paymentMethod"] == "CASH"
        assert body["total"] == 1900.0
        assert body["details"] == [
            {
                "motorcycle": {"id": 7},
                "quantity": 2,
                "unitPrice": 1000.0,
                "discount": 100.0,
                "subtotal": 1900.0,
            }
        ]

    def test_payload_sale_date_is_midnight_utc(self, valid_draft, today):
        payload = composer.to_payload(valid_draft)
        assert payload.sale_date == datetime(today.year, today.month, today.day, tzinfo=timezone.utc)


class TestSubmit:
    def test_invalid_draft_never_reaches_client(self, valid_draft, today):
        client = MagicMock()
        draft = valid_draft.model_copy(update={"customer": None})

        with pytest.raises(SaleValidationError) as exc_info:
            composer.submit_sale(client, draft, today=today)

        assert "customer" in exc_info.value.errors
        client.sales.create.assert_not_called()
        client.sales.update.assert_not_called()

    def test_creates_new_sale(self, valid_draft, today):
        client = MagicMock()
        composer.submit_sale(client, valid_draft, today=today)

        client.sales.create.assert_called_once()
        payload = client.sales.create.call_args.args[0]
        assert payload.total == Decimal("1900")

    def test_updates_existing_sale(self, valid_draft, today):
        client = MagicMock()
        composer.submit_sale(client, valid_draft, sale_id=4, today=today)

        client.sales.update.assert_called_once()
        assert client.sales.update.call_args.args[0] == 4
        client.sales.create.assert_not_called()
