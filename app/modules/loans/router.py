from fastapi import APIRouter, Depends, status
from typing import Any, Dict, Optional

from app.core.clock import Clock
from app.core.dependencies import get_caller_id, get_clock, get_json_payload, get_repository
from app.core.outcomes import render
from app.modules.loans.repository import LoanRepository
from app.modules.loans.schemas import (
    LoanCreatedResponse, LoanListResponse, LoanResponse, MessageResponse
)
from app.modules.loans.services import LoanService

router = APIRouter(prefix="/api/v1/loans", tags=["loans"])


def get_loan_service(
    repository: LoanRepository = Depends(get_repository),
    clock: Clock = Depends(get_clock),
) -> LoanService:
    return LoanService(repository, clock=clock)


@router.post("", response_model=LoanCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_loan(
    payload: Dict[str, Any] = Depends(get_json_payload),
    service: LoanService = Depends(get_loan_service),
):
    """
    Create a loan between a lender and a borrower.

    - All of lender_id, borrower_id, loan_amount, interest_rate,
      duration_years and start_date (YYYY-MM-DD) are required
    - lender_id must belong to a lender, borrower_id to a borrower
    """
    outcome = await service.create(payload)
    body = None
    if outcome.ok:
        body = {"message": outcome.message, "loan_id": outcome.data.id}
    return render(outcome, body)


@router.get("", response_model=LoanListResponse)
async def list_loans(service: LoanService = Depends(get_loan_service)):
    """List every loan. An empty table answers 404 unless configured otherwise."""
    outcome = await service.list_all()
    body = None
    if outcome.ok:
        loans = [LoanResponse.model_validate(loan).model_dump(mode="json") for loan in outcome.data]
        body = {"loans": loans, "message": outcome.message}
    return render(outcome, body)


@router.get("/{loan_id}", response_model=LoanResponse)
async def read_loan(loan_id: str, service: LoanService = Depends(get_loan_service)):
    outcome = await service.get(loan_id)
    body = None
    if outcome.ok:
        body = LoanResponse.model_validate(outcome.data).model_dump(mode="json")
    return render(outcome, body)


@router.put("/{loan_id}", response_model=MessageResponse)
async def update_loan(
    loan_id: str,
    payload: Dict[str, Any] = Depends(get_json_payload),
    caller_id: Optional[int] = Depends(get_caller_id),
    service: LoanService = Depends(get_loan_service),
):
    """
    Update a loan. Only the loan's original lender may do this.

    - Every field, status included, must be supplied
    - updated_at is refreshed
    """
    outcome = await service.update(loan_id, payload, caller_id=caller_id)
    return render(outcome, {"message": outcome.message})


@router.delete("/{loan_id}", response_model=MessageResponse)
async def delete_loan(
    loan_id: str,
    payload: Dict[str, Any] = Depends(get_json_payload),
    caller_id: Optional[int] = Depends(get_caller_id),
    service: LoanService = Depends(get_loan_service),
):
    """Delete a loan. The body must carry the original lender's lender_id."""
    outcome = await service.delete(loan_id, payload, caller_id=caller_id)
    return render(outcome, {"message": outcome.message})
