# =========================================================
# ENTITY FORM VALIDATION
#
# Field-level checks run on raw form input (strings, as typed) before a
# motorcycle, customer or employee is sent to the API. Each function
# returns {field: message}; an empty dict means the form can be submitted.
# Field names match the wire names of each resource.
# =========================================================

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from email_validator import EmailNotValidError, validate_email

from dealership.core.enums import DocumentType, EmployeeStatus

NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-+()]+$")
CUSTOMER_ZIP_PATTERN = re.compile(r"^[\d\-\s]+$")
EMPLOYEE_ZIP_PATTERN = re.compile(r"^\d{4,6}$")

DOCUMENT_PATTERNS = {
    DocumentType.CEDULA: (re.compile(r"^\d{6,12}$"), "Cedula must have between 6 and 12 digits"),
    DocumentType.DNI: (re.compile(r"^\d{7,9}$"), "DNI must have between 7 and 9 digits"),
    DocumentType.PASSPORT: (
        re.compile(r"^[A-Z0-9]{6,12}$"),
        "Passport must have between 6 and 12 alphanumeric characters",
    ),
    DocumentType.DRIVER_LICENSE: (
        re.compile(r"^.{6,15}$"),
        "Driver license must have between 6 and 15 characters",
    ),
}

MAX_SALARY = Decimal("999999999")
MAX_NOTES_LENGTH = 500
MAX_SERVICE_YEARS = 50


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_int(value: Any) -> int | None:
    try:
        return int(_text(value))
    except ValueError:
        return None


def _parse_decimal(value: Any) -> Decimal | None:
    try:
        number = Decimal(_text(value))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _parse_date(value: Any) -> date | None:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(_text(value))
    except ValueError:
        return None


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February
        return day.replace(year=day.year - years, day=28)


def _check_person_name(errors: dict, form: Mapping[str, Any], field: str, label: str):
    value = _text(form.get(field))
    if not value:
        errors[field] = f"{label} is required"
    elif len(value) < 2:
        errors[field] = f"{label} must be at least 2 characters"
    elif not NAME_PATTERN.match(value):
        errors[field] = f"{label} can only contain letters"


def _check_email(errors: dict, form: Mapping[str, Any]):
    value = _text(form.get("email"))
    if not value:
        errors["email"] = "Email is required"
        return

    # Same rules as EmailStr on the API side
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        errors["email"] = "Invalid email format"


def _check_phone(errors: dict, form: Mapping[str, Any], required: bool):
    value = _text(form.get("phone"))
    if not value:
        if required:
            errors["phone"] = "Phone is required"
        return

    if not PHONE_PATTERN.match(value):
        errors["phone"] = "Invalid phone format"
    elif len(re.sub(r"\D", "", value)) < 7:
        errors["phone"] = "Phone must have at least 7 digits"


# =========================================================
# MOTORCYCLE
# =========================================================
def validate_motorcycle_form(form: Mapping[str, Any], today: date | None = None) -> dict[str, str]:
    today = today or date.today()
    errors: dict[str, str] = {}

    for field, label in (("code", "Code"), ("name", "Name"), ("brand", "Brand"), ("model", "Model")):
        if not _text(form.get(field)):
            errors[field] = f"{label} is required"

    max_year = today.year + 1
    if not _text(form.get("year")):
        errors["year"] = "Year is required"
    else:
        year = _parse_int(form.get("year"))
        if year is None or year < 1900 or year > max_year:
            errors["year"] = f"Year must be between 1900 and {max_year}"

    if not _text(form.get("engine_capacity")):
        errors["engine_capacity"] = "Engine capacity is required"
    else:
        capacity = _parse_int(form.get("engine_capacity"))
        if capacity is None or capacity <= 0:
            errors["engine_capacity"] = "Engine capacity must be a positive number"

    if not _text(form.get("price")):
        errors["price"] = "Price is required"
    else:
        price = _parse_decimal(form.get("price"))
        if price is None or price <= 0:
            errors["price"] = "Price must be a positive number"

    return errors


# =========================================================
# CUSTOMER
# =========================================================
def validate_customer_form(form: Mapping[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}

    _check_person_name(errors, form, "firstName", "First name")
    _check_person_name(errors, form, "lastName", "Last name")
    _check_email(errors, form)
    _check_phone(errors, form, required=True)

    document_number = _text(form.get("documentNumber"))
    if document_number and len(document_number) < 5:
        errors["documentNumber"] = "Document number must be at least 5 characters"

    address = _text(form.get("address"))
    if address and len(address) < 5:
        errors["address"] = "Address must be at least 5 characters"

    city = _text(form.get("city"))
    if city and len(city) < 2:
        errors["city"] = "City must be at least 2 characters"

    zip_code = _text(form.get("zipCode"))
    if zip_code and not CUSTOMER_ZIP_PATTERN.match(zip_code):
        errors["zipCode"] = "Invalid zip code"

    return errors


# =========================================================
# EMPLOYEE
# =========================================================
def _check_document(errors: dict, form: Mapping[str, Any]):
    document_number = _text(form.get("documentNumber"))
    if not document_number:
        return

    raw_type = _text(form.get("documentType"))
    try:
        document_type = DocumentType(raw_type)
    except ValueError:
        # Without a known type only presence is checked
        return

    pattern, message = DOCUMENT_PATTERNS[document_type]
    candidate = document_number.upper() if document_type == DocumentType.PASSPORT else document_number
    if not pattern.match(candidate):
        errors["documentNumber"] = message


def _check_employment_dates(errors: dict, form: Mapping[str, Any], today: date):
    hire_raw = _text(form.get("hireDate"))
    termination_raw = _text(form.get("terminationDate"))
    hire_date = _parse_date(form.get("hireDate")) if hire_raw else None

    if hire_raw:
        if hire_date is None:
            errors["hireDate"] = "Invalid hire date"
        elif hire_date > today:
            errors["hireDate"] = "Hire date cannot be in the future"
        elif hire_date < _years_before(today, MAX_SERVICE_YEARS):
            errors["hireDate"] = f"Hire date cannot be more than {MAX_SERVICE_YEARS} years ago"

    if termination_raw:
        termination_date = _parse_date(form.get("terminationDate"))
        if not hire_raw:
            errors["terminationDate"] = "Set a hire date first"
        elif termination_date is None:
            errors["terminationDate"] = "Invalid termination date"
        elif hire_date is not None and termination_date < hire_date:
            errors["terminationDate"] = "Termination date must be after the hire date"
        elif termination_date > today:
            errors["terminationDate"] = "Termination date cannot be in the future"

    if _text(form.get("status")) == EmployeeStatus.TERMINATED.value and not termination_raw:
        errors["terminationDate"] = "Termination date is required for terminated employees"


def validate_employee_form(form: Mapping[str, Any], today: date | None = None) -> dict[str, str]:
    today = today or date.today()
    errors: dict[str, str] = {}

    _check_person_name(errors, form, "firstName", "First name")
    _check_person_name(errors, form, "lastName", "Last name")
    _check_email(errors, form)

    job_title = _text(form.get("jobTitle"))
    if not job_title:
        errors["jobTitle"] = "Job title is required"
    elif len(job_title) < 3:
        errors["jobTitle"] = "Job title must be at least 3 characters"

    _check_phone(errors, form, required=False)
    _check_document(errors, form)

    if _text(form.get("salary")):
        salary = _parse_decimal(form.get("salary"))
        if salary is None or salary < 0:
            errors["salary"] = "Salary must be a positive number"
        elif salary > MAX_SALARY:
            errors["salary"] = "Salary cannot exceed 999,999,999"

    address = _text(form.get("address"))
    if address and len(address) < 10:
        errors["address"] = "Address must be at least 10 characters"

    city = _text(form.get("city"))
    if city:
        if not NAME_PATTERN.match(city):
            errors["city"] = "City can only contain letters"
        elif len(city) < 2:
            errors["city"] = "City must be at least 2 characters"

    zip_code = _text(form.get("zipCode"))
    if zip_code and not EMPLOYEE_ZIP_PATTERN.match(zip_code):
        errors["zipCode"] = "Zip code must have between 4 and 6 digits"

    _check_employment_dates(errors, form, today)

    notes = form.get("notes") or ""
    if len(str(notes)) > MAX_NOTES_LENGTH:
        errors["notes"] = f"Notes cannot exceed {MAX_NOTES_LENGTH} characters"

    return errors
