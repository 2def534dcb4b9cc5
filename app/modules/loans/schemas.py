from pydantic import BaseModel
from datetime import date, datetime
from typing import List, Optional


class LoanResponse(BaseModel):
    id: int
    lender_id: int
    borrower_id: int
    loan_amount: float
    interest_rate: float
    duration_years: float
    start_date: date
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoanListResponse(BaseModel):
    loans: List[LoanResponse]
    message: str


class MessageResponse(BaseModel):
    message: str


class LoanCreatedResponse(MessageResponse):
    loan_id: int
