"""
Structured results returned by the loan and auth services.

Services never raise past their boundary: every call ends in an Outcome
that the routers turn into a status code and a JSON body.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import enum

from fastapi.responses import JSONResponse

from app.core.config import settings


class OutcomeKind(str, enum.Enum):
    """Outcome kind enumeration"""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"
    PERSISTENCE_FAILURE = "persistence_failure"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


SUCCESS_KINDS = {
    OutcomeKind.CREATED,
    OutcomeKind.UPDATED,
    OutcomeKind.DELETED,
    OutcomeKind.FOUND,
    OutcomeKind.AUTHENTICATED,
}


@dataclass
class Outcome:
    kind: OutcomeKind
    message: str
    data: Any = None
    error_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind in SUCCESS_KINDS

    @classmethod
    def from_error(cls, exc) -> "Outcome":
        """Build a failure outcome from a LendingError"""
        return cls(kind=exc.kind, message=exc.message, error_code=exc.code)


def status_code_for(kind: OutcomeKind) -> int:
    """HTTP status for an outcome kind"""
    return {
        OutcomeKind.CREATED: 201,
        OutcomeKind.UPDATED: 200,
        OutcomeKind.DELETED: 200,
        OutcomeKind.FOUND: 200,
        OutcomeKind.AUTHENTICATED: 200,
        OutcomeKind.NOT_FOUND: 404,
        # No distinct 403 unless configured
        OutcomeKind.UNAUTHORIZED: settings.UNAUTHORIZED_STATUS_CODE,
        OutcomeKind.BAD_REQUEST: 400,
        OutcomeKind.PERSISTENCE_FAILURE: 400,
        OutcomeKind.UNAUTHENTICATED: 401,
    }[kind]


def render(outcome: Outcome, body: Optional[Dict[str, Any]] = None) -> JSONResponse:
    """Render an outcome as a JSON response; failures only ever carry a message"""
    if outcome.ok and body is not None:
        content = body
    else:
        content = {"message": outcome.message}
    return JSONResponse(status_code=status_code_for(outcome.kind), content=content)
