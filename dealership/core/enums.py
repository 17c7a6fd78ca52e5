# dealership/core/enums.py
#
# Closed value sets shared by the ORM models, the wire schemas and the
# sale composition engine. Stored and serialized by name.

from enum import Enum


class SaleStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    FINANCING = "FINANCING"


class CustomerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BLOCKED = "BLOCKED"


class EmployeeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    TERMINATED = "TERMINATED"


class DocumentType(str, Enum):
    DNI = "DNI"
    CEDULA = "CEDULA"
    PASSPORT = "PASSPORT"
    DRIVER_LICENSE = "DRIVER_LICENSE"


class MotorcycleType(str, Enum):
    SPORT = "SPORT"
    CRUISER = "CRUISER"
    TOURING = "TOURING"
    STANDARD = "STANDARD"
    DIRT_BIKE = "DIRT_BIKE"
    SCOOTER = "SCOOTER"
    ELECTRIC = "ELECTRIC"


class EntityKind(str, Enum):
    """Entities that sales reference and that need a pre-delete check."""

    MOTORCYCLE = "motorcycle"
    CUSTOMER = "customer"
    EMPLOYEE = "employee"
