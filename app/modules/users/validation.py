from typing import Any, Dict

from email_validator import EmailNotValidError, validate_email

from app.core.errors import InvalidFormat, InvalidRange
from app.modules.loans.validation import require_fields
from app.modules.users.models import UserRole

LOGIN_FIELDS = ("email", "password", "role")


def validate_login(payload: Dict[str, Any]) -> Dict[str, str]:
    """Check login payload shape; role is normalized to lower case"""
    payload = payload or {}
    require_fields(payload, LOGIN_FIELDS)

    email = payload["email"]
    if not isinstance(email, str):
        raise InvalidFormat("Invalid email format", "email")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise InvalidFormat("Invalid email format", "email")

    role = payload["role"]
    role = role.lower() if isinstance(role, str) else role
    if role not in (UserRole.LENDER.value, UserRole.BORROWER.value):
        raise InvalidRange('Role must be either "lender" or "borrower"', "role")

    password = payload["password"]
    if not isinstance(password, str):
        password = str(password)

    return {"email": email, "password": password, "role": role}
