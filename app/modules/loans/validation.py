"""
Loan payload validation.

Every validator checks presence of all its required fields first, in the
declared order, and only then checks types and ranges. The first violation
is raised; the return value is the normalized payload with unknown keys
dropped.
"""
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from app.core.config import settings
from app.core.errors import MissingField, InvalidType, InvalidRange, InvalidFormat, NotFound

CREATE_FIELDS = (
    "lender_id",
    "borrower_id",
    "loan_amount",
    "interest_rate",
    "duration_years",
    "start_date",
)
UPDATE_FIELDS = CREATE_FIELDS + ("status",)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
DATE_FORMAT_MESSAGE = "Invalid date format for start_date. Use YYYY-MM-DD"

# Upper bound of the Integer id columns; no stored row can have a larger id
MAX_ENTITY_ID = 2**31 - 1


def is_blank(value: Any) -> bool:
    """True for None, blank strings and empty containers. Zero is not blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def require_fields(payload: Dict[str, Any], fields: Iterable[str]) -> None:
    for field in fields:
        if is_blank(payload.get(field)):
            raise MissingField(field)


def to_decimal(value: Any) -> Optional[Decimal]:
    """Numeric value as a finite Decimal, or None if the value is not numeric"""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        number = Decimal(str(value))
    elif isinstance(value, (int, Decimal)):
        number = Decimal(value)
    elif isinstance(value, str):
        text = value.strip()
        if "_" in text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


def _entity_id(value: Any, field: str, message: str, not_found: str) -> int:
    number = to_decimal(value)
    if number is None or number != number.to_integral_value():
        raise InvalidType(message, field)
    if number <= 0:
        raise InvalidRange(message, field)
    if number > MAX_ENTITY_ID:
        raise NotFound(not_found, field)
    return int(number)


def _number(value: Any, field: str, minimum: Decimal, maximum: Decimal = None,
            inclusive_minimum: bool = False) -> Decimal:
    message = f"Invalid {field}"
    number = to_decimal(value)
    if number is None:
        raise InvalidType(message, field)
    too_low = number < minimum if inclusive_minimum else number <= minimum
    if too_low or (maximum is not None and number > maximum):
        raise InvalidRange(message, field)
    return number


def _start_date(value: Any) -> date:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise InvalidFormat(DATE_FORMAT_MESSAGE, "start_date")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidFormat(DATE_FORMAT_MESSAGE, "start_date")


def _status(value: Any, allowed: List[str]) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidType("Invalid status", "status")
    status = value.strip()
    if not allowed:
        return status
    if status.lower() not in allowed:
        raise InvalidRange(f"Invalid status. Use one of: {', '.join(allowed)}", "status")
    return status.lower()


def _loan_terms(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "lender_id": _entity_id(
            payload["lender_id"], "lender_id", "Invalid Lender ID", "Invalid lender ID"
        ),
        "borrower_id": _entity_id(
            payload["borrower_id"], "borrower_id", "Invalid Borrower ID", "Invalid borrower ID"
        ),
        "loan_amount": _number(payload["loan_amount"], "loan_amount", Decimal(0)),
        "interest_rate": _number(
            payload["interest_rate"], "interest_rate", Decimal(0), Decimal(100), inclusive_minimum=True
        ),
        "duration_years": _number(payload["duration_years"], "duration_years", Decimal(0)),
        "start_date": _start_date(payload["start_date"]),
    }


def validate_create(payload: Dict[str, Any], allowed_statuses: List[str] = None) -> Dict[str, Any]:
    """Validate a create payload. status is optional here."""
    payload = payload or {}
    require_fields(payload, CREATE_FIELDS)
    fields = _loan_terms(payload)
    if not is_blank(payload.get("status")):
        allowed = settings.loan_statuses_list if allowed_statuses is None else allowed_statuses
        fields["status"] = _status(payload["status"], allowed)
    return fields


def validate_update(payload: Dict[str, Any], allowed_statuses: List[str] = None) -> Dict[str, Any]:
    """Validate an update payload. Every updatable field, status included, is required."""
    payload = payload or {}
    require_fields(payload, UPDATE_FIELDS)
    fields = _loan_terms(payload)
    allowed = settings.loan_statuses_list if allowed_statuses is None else allowed_statuses
    fields["status"] = _status(payload["status"], allowed)
    return fields


def validate_delete(payload: Dict[str, Any]) -> Dict[str, Any]:
    payload = payload or {}
    require_fields(payload, ("lender_id",))
    return {"lender_id": _entity_id(payload["lender_id"], "lender_id", "Invalid Lender ID", "Invalid lender ID")}


def parse_loan_id(raw: Any, not_found: str = "Loan not found") -> int:
    """Loan id from the request path; must be a positive integer"""
    if is_blank(raw):
        raise InvalidType("Invalid or missing loan ID", "id")
    return _entity_id(raw, "id", "Invalid or missing loan ID", not_found)
