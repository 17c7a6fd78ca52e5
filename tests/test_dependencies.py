"""Tests for the pre-delete dependency check."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from dealership.client.api import DealershipClient
from dealership.core.enums import EntityKind
from dealership.core.exceptions import ApiError
from dealership.schemas.sale import SaleResponse
from dealership.services.dependencies import DependencyChecker, check_dependencies


def _sale(sale_id, sale_number, customer_id=1, employee_id=2, motorcycle_ids=(7,)):
    return SaleResponse.model_validate({
        "id": sale_id,
        "saleNumber": sale_number,
        "customer": {"id": customer_id, "firstName": "Ana", "lastName": "Perez", "email": "ana@example.com"},
        "employee": {"id": employee_id, "firstName": "Luis", "lastName": "Gomez",
                     "email": "luis@example.com", "jobTitle": "Advisor"},
        "saleDate": "2025-06-10T00:00:00",
        "status": "COMPLETED",
        "total": 1000,
        "details": [
            {
                "id": index + 1,
                "motorcycle": {"id": motorcycle_id, "code": f"M-{motorcycle_id}", "name": "Bike",
                               "brand": "Yamaha", "price": 1000},
                "quantity": 1,
                "unitPrice": 1000,
                "discount": 0,
                "subtotal": 1000,
            }
            for index, motorcycle_id in enumerate(motorcycle_ids)
        ],
    })


@pytest.fixture
def sales():
    return [
        _sale(1, "SALE-0001", motorcycle_ids=(7, 8)),
        _sale(2, "SALE-0002", customer_id=3, motorcycle_ids=(9,)),
    ]


@pytest.fixture
def api():
    return MagicMock()


def test_referenced_motorcycle_cannot_be_deleted(sales):
    result = check_dependencies(EntityKind.MOTORCYCLE, 7, sales)

    assert result.can_delete is False
    assert result.dependencies == ["Sale SALE-0001"]
    assert "1 sale(s)" in result.message


def test_unreferenced_motorcycle_can_be_deleted(sales):
    result = check_dependencies(EntityKind.MOTORCYCLE, 42, sales)

    assert result.can_delete is True
    assert result.dependencies == []


def test_customer_with_several_sales(sales):
    result = check_dependencies(EntityKind.CUSTOMER, 1, [*sales, _sale(3, "SALE-0003")])

    assert result.can_delete is False
    assert result.dependencies == ["Sale SALE-0001", "Sale SALE-0003"]
    assert "2 registered sale(s)" in result.message


def test_employee_check_accepts_plain_kind_value(sales):
    result = check_dependencies("employee", 2, sales)
    assert len(result.dependencies) == 2


def test_check_through_client(api, sales):
    api.sales.list.return_value = sales
    checker = DependencyChecker(api)

    assert checker.check_motorcycle(7).can_delete is False
    assert checker.check_customer(3).dependencies == ["Sale SALE-0002"]
    assert checker.check_employee(99).can_delete is True


def test_fetch_failure_blocks_delete(api):
    api.sales.list.side_effect = ApiError("Unable to reach the API")
    checker = DependencyChecker(api)

    result = checker.check_customer(1)

    assert result.can_delete is False
    assert result.message == "Unable to verify dependencies."
    assert result.dependencies == []


def test_delete_if_unreferenced_deletes(api, sales):
    api.sales.list.return_value = sales
    checker = DependencyChecker(api)

    result = checker.delete_if_unreferenced(EntityKind.MOTORCYCLE, 42)

    assert result.can_delete is True
    api.motorcycles.delete.assert_called_once_with(42)


def test_delete_if_unreferenced_refuses(api, sales):
    api.sales.list.return_value = sales
    checker = DependencyChecker(api)

    result = checker.delete_if_unreferenced(EntityKind.CUSTOMER, 1)

    assert result.can_delete is False
    api.customers.delete.assert_not_called()


def test_delete_error_propagates(api):
    api.sales.list.return_value = []
    api.employees.delete.side_effect = ApiError("Employee has registered sales", status_code=409)
    checker = DependencyChecker(api)

    with pytest.raises(ApiError) as exc_info:
        checker.delete_if_unreferenced(EntityKind.EMPLOYEE, 5)

    assert exc_info.value.status_code == 409


def _client_returning(body):
    response = requests.Response()
    response.status_code = 200
    response._content = json.dumps(body).encode()

    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = response
    return DealershipClient(base_url="http://dealer.test/api", session=session)


def test_sale_with_null_details(sales):
    body = [sale.model_dump(by_alias=True, mode="json") for sale in sales]
    body.append({**body[0], "id": 3, "saleNumber": "SALE-0003", "details": None})
    checker = DependencyChecker(_client_returning(body))

    motorcycle = checker.check_motorcycle(7)
    customer = checker.check_customer(1)

    assert motorcycle.dependencies == ["Sale SALE-0001"]
    assert customer.dependencies == ["Sale SALE-0001", "Sale SALE-0003"]


def test_malformed_sales_response_blocks_delete():
    client = _client_returning([{"id": 1, "saleNumber": "SALE-0001"}])
    client.motorcycles = MagicMock()
    checker = DependencyChecker(client)

    result = checker.delete_if_unreferenced(EntityKind.MOTORCYCLE, 7)

    assert result.can_delete is False
    assert result.message == "Unable to verify dependencies."
    client.motorcycles.delete.assert_not_called()
