"""
Pytest configuration and fixtures for the dealership tests.

The backend runs against a shared in-memory SQLite database that is
rebuilt for every test. Rate limiting is switched off so that sale
creation can be exercised freely.
"""

import os

# Settings are read at import time, so the environment goes first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from dealership.database import Base, engine
from dealership.main import app
from dealership.schemas.common import Ref
from dealership.schemas.draft import LineDraft, SaleDraft, SelectedMotorcycle


TODAY = date(2025, 6, 15)


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def motorcycle_payload():
    return {
        "code": "MT-07",
        "name": "MT-07",
        "brand": "Yamaha",
        "model": "MT",
        "year": 2024,
        "engine_capacity": 689,
        "price": 1000,
        "type": "STANDARD",
        "stock": 3,
    }


@pytest.fixture
def customer_payload():
    return {
        "firstName": "Ana",
        "lastName": "Perez",
        "email": "ana.perez@example.com",
        "phone": "555 123 4567",
        "documentNumber": "12345678",
        "documentType": "DNI",
    }


@pytest.fixture
def employee_payload():
    return {
        "firstName": "Luis",
        "lastName": "Gomez",
        "email": "luis.gomez@example.com",
        "jobTitle": "Sales Advisor",
        "hireDate": "2020-01-10",
    }


@pytest.fixture
def motorcycle(client, motorcycle_payload):
    response = client.post("/api/motorcycles", json=motorcycle_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def second_motorcycle(client):
    response = client.post(
        "/api/motorcycles",
        json={"code": "CB-500", "name": "CB500F", "brand": "Honda", "price": 500},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def customer(client, customer_payload):
    response = client.post("/api/customers", json=customer_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def employee(client, employee_payload):
    response = client.post("/api/employees", json=employee_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def sale_payload(customer, employee, motorcycle, second_motorcycle):
    return {
        "saleNumber": "SALE-0001",
        "customer": {"id": customer["id"]},
        "employee": {"id": employee["id"]},
        "saleDate": "2025-06-15T00:00:00Z",
        "status": "COMPLETED",
        "paymentMethod": "CASH",
        "details": [
            {"motorcycle": {"id": motorcycle["id"]}, "quantity": 2, "discount": 100},
            {"motorcycle": {"id": second_motorcycle["id"]}, "quantity": 1, "discount": 0},
        ],
    }


@pytest.fixture
def sale(client, sale_payload):
    response = client.post("/api/sales", json=sale_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def valid_draft():
    """Smallest draft that passes validation: one line worth 2 x 1000 - 100."""
    return SaleDraft(
        sale_number="SALE-1",
        customer=Ref(id=1),
        employee=Ref(id=2),
        sale_date=TODAY,
        lines=[
            LineDraft(
                motorcycle=SelectedMotorcycle(id=7, price=Decimal("1000"), code="MT-07"),
                quantity=2,
                discount=Decimal("100"),
            )
        ],
    )
