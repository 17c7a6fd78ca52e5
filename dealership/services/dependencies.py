# =========================================================
# PRE-DELETE DEPENDENCY CHECK
#
# A motorcycle, customer or employee that any sale still references
# cannot be deleted. The check lists every sale and scans it, which is
# fine for a single dealership's volume but is O(number of sales).
# =========================================================

import logging
from typing import Iterable

from pydantic import ValidationError

from dealership.core.enums import EntityKind
from dealership.core.exceptions import ApiError
from dealership.schemas.dependency import DependencyCheck
from dealership.schemas.sale import SaleResponse

logger = logging.getLogger("dealership")


def references(kind: EntityKind, entity_id: int, sale: SaleResponse) -> bool:
    match kind:
        case EntityKind.CUSTOMER:
            return sale.customer.id == entity_id
        case EntityKind.EMPLOYEE:
            return sale.employee.id == entity_id
        case EntityKind.MOTORCYCLE:
            return any(detail.motorcycle.id == entity_id for detail in sale.details)
        case _:
            raise ValueError(f"Unsupported entity kind: {kind}")


def _blocked_message(kind: EntityKind, count: int) -> str:
    match kind:
        case EntityKind.CUSTOMER:
            return f"This customer cannot be deleted because they have {count} registered sale(s)."
        case EntityKind.EMPLOYEE:
            return f"This employee cannot be deleted because they have {count} registered sale(s)."
        case EntityKind.MOTORCYCLE:
            return f"This motorcycle cannot be deleted because it is used in {count} sale(s)."
        case _:
            raise ValueError(f"Unsupported entity kind: {kind}")


def check_dependencies(
    kind: EntityKind,
    entity_id: int,
    sales: Iterable[SaleResponse],
) -> DependencyCheck:
    kind = EntityKind(kind)
    dependent = [sale for sale in sales if references(kind, entity_id, sale)]

    if dependent:
        return DependencyCheck(
            can_delete=False,
            message=_blocked_message(kind, len(dependent)),
            dependencies=[f"Sale {sale.sale_number}" for sale in dependent],
        )

    return DependencyCheck(
        can_delete=True,
        message=f"The {kind.value} can be safely deleted.",
        dependencies=[],
    )


class DependencyChecker:
    """Runs dependency checks and guarded deletes through a DealershipClient."""

    def __init__(self, client):
        self.client = client

    def _resource(self, kind: EntityKind):
        match kind:
            case EntityKind.CUSTOMER:
                return self.client.customers
            case EntityKind.EMPLOYEE:
                return self.client.employees
            case EntityKind.MOTORCYCLE:
                return self.client.motorcycles
            case _:
                raise ValueError(f"Unsupported entity kind: {kind}")

    def check(self, kind: EntityKind, entity_id: int) -> DependencyCheck:
        kind = EntityKind(kind)

        try:
            sales = self.client.sales.list()
        except (ApiError, ValidationError) as e:
            logger.error(f"Dependency check failed for {kind.value} {entity_id}: {str(e)}")
            return DependencyCheck(
                can_delete=False,
                message="Unable to verify dependencies.",
                dependencies=[],
            )

        return check_dependencies(kind, entity_id, sales)

    def check_motorcycle(self, motorcycle_id: int) -> DependencyCheck:
        return self.check(EntityKind.MOTORCYCLE, motorcycle_id)

    def check_customer(self, customer_id: int) -> DependencyCheck:
        return self.check(EntityKind.CUSTOMER, customer_id)

    def check_employee(self, employee_id: int) -> DependencyCheck:
        return self.check(EntityKind.EMPLOYEE, employee_id)

    def delete_if_unreferenced(self, kind: EntityKind, entity_id: int) -> DependencyCheck:
        """Delete the entity only when no sale references it.

        Returns the check result either way. ApiError from the delete
        call itself propagates.
        """
        kind = EntityKind(kind)
        result = self.check(kind, entity_id)

        if not result.can_delete:
            logger.info(
                f"Delete of {kind.value} {entity_id} blocked by "
                f"{len(result.dependencies)} sale(s)"
            )
            return result

        self._resource(kind).delete(entity_id)
        logger.info(f"Deleted {kind.value} {entity_id}")
        return result
