# =========================================================
# DEALERSHIP REST CLIENT
#
# - One ApiClient per backend, one Resource per entity
# - Every response goes through unwrap_collection / unwrap_item, so callers
#   always get parsed models whether the backend answers with a bare value
#   or with a {"data": ...} envelope
# - No retries: failures are logged and raised as ApiError
# =========================================================

import logging
from typing import Any, Generic, TypeVar

import requests
from pydantic import BaseModel

from dealership.core.config import settings
from dealership.core.exceptions import ApiError
from dealership.schemas.customer import CustomerResponse
from dealership.schemas.employee import EmployeeResponse
from dealership.schemas.motorcycle import MotorcycleResponse
from dealership.schemas.sale import DetailSaleResponse, SaleResponse

logger = logging.getLogger("dealership")

ModelT = TypeVar("ModelT", bound=BaseModel)


def unwrap_collection(body: Any) -> list:
    if isinstance(body, list):
        return body

    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return body["data"]

    return []


def unwrap_item(body: Any) -> Any:
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]

    return body


def _dump(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True, mode="json", exclude_none=True)
    return payload


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "Request failed"

    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            if body.get(key):
                return str(body[key])

    return str(body)


class ApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def request(self, method: str, path: str, payload: Any = None) -> Any:
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method,
                url,
                json=_dump(payload),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"API connection error: {method} {path}: {str(e)}")
            raise ApiError(f"Unable to reach the API at {self.base_url}") from e

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.error(
                f"API error: {method} {path} "
                f"Status: {response.status_code} Detail: {detail}"
            )
            raise ApiError(detail, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"API returned invalid JSON: {method} {path}")
            raise ApiError("Invalid response from API", status_code=response.status_code) from e

    def close(self):
        self.session.close()


class Resource(Generic[ModelT]):
    def __init__(self, api: ApiClient, path: str, model: type[ModelT]):
        self.api = api
        self.path = path
        self.model = model

    def _parse(self, body: Any) -> ModelT | None:
        item = unwrap_item(body)
        if item is None:
            return None
        return self.model.model_validate(item)

    def _parse_many(self, body: Any) -> list[ModelT]:
        return [self.model.model_validate(item) for item in unwrap_collection(body)]

    def list(self) -> list[ModelT]:
        return self._parse_many(self.api.request("GET", self.path))

    def get(self, item_id: int) -> ModelT | None:
        return self._parse(self.api.request("GET", f"{self.path}/{item_id}"))

    def create(self, payload: Any) -> ModelT | None:
        return self._parse(self.api.request("POST", self.path, payload))

    def update(self, item_id: int, payload: Any) -> ModelT | None:
        return self._parse(self.api.request("PUT", f"{self.path}/{item_id}", payload))

    def delete(self, item_id: int) -> None:
        self.api.request("DELETE", f"{self.path}/{item_id}")


class SalesResource(Resource[SaleResponse]):
    def get_with_details(self, sale_id: int) -> SaleResponse | None:
        return self._parse(self.api.request("GET", f"{self.path}/{sale_id}/details"))


class DetailSalesResource(Resource[DetailSaleResponse]):
    def list_by_sale(self, sale_id: int) -> list[DetailSaleResponse]:
        return self._parse_many(self.api.request("GET", f"{self.path}/sale/{sale_id}"))


class DealershipClient(ApiClient):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        super().__init__(base_url=base_url, timeout=timeout, session=session)

        self.motorcycles = Resource(self, "/motorcycles", MotorcycleResponse)
        self.customers = Resource(self, "/customers", CustomerResponse)
        self.employees = Resource(self, "/employees", EmployeeResponse)
        self.sales = SalesResource(self, "/sales", SaleResponse)
        self.detail_sales = DetailSalesResource(self, "/detail-sales", DetailSaleResponse)
