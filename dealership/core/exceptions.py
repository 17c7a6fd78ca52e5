"""
Exceptions raised by the dealership client-side services.

Backend routers raise FastAPI's HTTPException directly; these classes cover
the dashboard side: talking to the REST API and submitting sale drafts.
"""


class DealershipError(Exception):
    """Base exception for dealership client errors."""

    pass


class ApiError(DealershipError):
    """A REST call failed: connection problem, timeout or error status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        self.detail = message

        if status_code is not None:
            message = f"{message} (status {status_code})"

        super().__init__(message)


class SaleValidationError(DealershipError):
    """A sale draft was submitted while it still had validation errors."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Sale draft is invalid: {fields}")
