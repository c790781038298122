"""
Validation of job payloads and list filters.

Each validator returns a list of error messages; an empty list means valid.
The repository turns a non-empty list into a ValidationError.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

REQUIRED_STR_FIELDS = ["title", "companyHandle"]
UPDATABLE_FIELDS = ["title", "salary", "equity"]
FILTER_KEYS = ["title", "minSalary", "hasEquity", "noFilter"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_non_negative_int(v: Any) -> bool:
    # bool is an int subclass; True is not a salary
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def _valid_equity(v: Any) -> bool:
    if not isinstance(v, str):
        return False
    try:
        d = Decimal(v)
    except InvalidOperation:
        return False
    return d.is_finite() and Decimal(0) <= d <= Decimal(1)


def _validate_numeric_fields(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []

    salary = data.get("salary")
    if salary is not None and not _is_non_negative_int(salary):
        errors.append("Field 'salary' must be a non-negative integer if provided")

    equity = data.get("equity")
    if equity is not None and not _valid_equity(equity):
        errors.append("Field 'equity' must be a decimal string between 0 and 1 if provided")

    return errors


def validate_job(data: Dict[str, Any]) -> List[str]:
    """Validate a payload for creating a job."""
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    unknown = [k for k in data if k not in REQUIRED_STR_FIELDS + UPDATABLE_FIELDS]
    for k in unknown:
        errors.append(f"Unknown field: {k}")

    errors.extend(_validate_numeric_fields(data))
    return errors


def validate_job_update(data: Dict[str, Any]) -> List[str]:
    """
    Validate a partial update payload.

    Only UPDATABLE_FIELDS may appear; id and companyHandle are fixed after
    creation. An empty payload is valid here and rejected later by the
    SET clause builder.
    """
    errors: List[str] = []

    for k in data:
        if k not in UPDATABLE_FIELDS:
            errors.append(f"Field '{k}' cannot be updated")

    if "title" in data and not _is_non_empty_str(data["title"]):
        errors.append("Field 'title' must be a non-empty string")

    errors.extend(_validate_numeric_fields(data))
    return errors


def validate_filters(filters: Dict[str, Any]) -> List[str]:
    """Validate the filter set accepted by JobRepository.find_all."""
    invalid = [k for k in filters if k not in FILTER_KEYS]
    if invalid:
        return [f"Invalid filters: {', '.join(invalid)}"]

    errors: List[str] = []

    title = filters.get("title")
    if title is not None and not isinstance(title, str):
        errors.append("Filter 'title' must be a string")

    min_salary = filters.get("minSalary")
    if min_salary is not None and not _is_non_negative_int(min_salary):
        errors.append("Filter 'minSalary' must be a non-negative integer")

    has_equity = filters.get("hasEquity")
    if has_equity is not None and not isinstance(has_equity, bool):
        errors.append("Filter 'hasEquity' must be a boolean")

    return errors
