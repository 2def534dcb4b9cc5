"""
Error hierarchy for loan and login operations.

Validation and authorization helpers raise these; the services catch
LendingError and turn it into an Outcome, so none of them leave a service.
"""
from app.core.outcomes import OutcomeKind


class LendingError(Exception):
    """Base exception for all loan/login failures."""

    code = "LENDING_ERROR"
    kind = OutcomeKind.BAD_REQUEST

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field


# ─── Validation (400) ───────────────────────────────────────────

class MissingField(LendingError):
    """A required field is absent or blank."""
    code = "MISSING_FIELD"

    def __init__(self, field: str):
        super().__init__(f"Field '{field}' is required", field)


class InvalidType(LendingError):
    """A field is not of the expected type (e.g. not numeric)."""
    code = "INVALID_TYPE"


class InvalidRange(LendingError):
    """A field is of the right type but outside its allowed range or set."""
    code = "INVALID_RANGE"


class InvalidFormat(LendingError):
    """A date or email does not match its expected format."""
    code = "INVALID_FORMAT"


# ─── Lookup / authorization ─────────────────────────────────────

class NotFound(LendingError):
    """The referenced loan or user does not exist."""
    code = "NOT_FOUND"
    kind = OutcomeKind.NOT_FOUND


class Unauthorized(LendingError):
    """The actor exists but has the wrong role or does not own the loan."""
    code = "UNAUTHORIZED"
    kind = OutcomeKind.UNAUTHORIZED


class Unauthenticated(LendingError):
    """Login credentials did not match a user with the requested role."""
    code = "UNAUTHENTICATED"
    kind = OutcomeKind.UNAUTHENTICATED


# ─── Storage ────────────────────────────────────────────────────

class PersistenceFailure(LendingError):
    """A storage write had no effect."""
    code = "PERSISTENCE_FAILURE"
    kind = OutcomeKind.PERSISTENCE_FAILURE


class InvalidPayload(Exception):
    """Request body is not a JSON object. Raised by the API layer only."""

    def __init__(self, message: str = "Invalid JSON format"):
        super().__init__(message)
        self.message = message
