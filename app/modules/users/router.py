from fastapi import APIRouter, Depends
from typing import Any, Dict

from app.core.dependencies import get_json_payload, get_repository
from app.core.outcomes import render
from app.modules.loans.repository import LoanRepository
from app.modules.users import schemas
from app.modules.users.services import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def get_auth_service(repository: LoanRepository = Depends(get_repository)) -> AuthService:
    return AuthService(repository)


@router.post("/login", response_model=schemas.LoginResponse)
async def login(
    payload: Dict[str, Any] = Depends(get_json_payload),
    service: AuthService = Depends(get_auth_service),
):
    """
    Login as a lender or borrower.

    - Requires email, password and role ("lender" or "borrower")
    - Returns the user's email, role and name; no token is issued
    """
    outcome = await service.login(payload)
    body = None
    if outcome.ok:
        body = {"message": outcome.message, "user": outcome.data}
    return render(outcome, body)
