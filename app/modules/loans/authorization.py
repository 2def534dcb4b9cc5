"""
Party checks for loan operations.

Only a loan's original lender may change or remove it; borrowers have no
mutation rights. A user id that does not exist is reported as NotFound,
one that exists with the wrong role or does not own the loan as
Unauthorized.
"""
from typing import Optional

from app.core.errors import NotFound, Unauthorized
from app.modules.loans.repository import LoanRepository
from app.modules.users.models import UserRole


class LoanAuthorizer:
    def __init__(self, repository: LoanRepository):
        self.repository = repository

    async def is_valid_lender(self, lender_id: int) -> bool:
        return await self.repository.find_user(lender_id, UserRole.LENDER.value) is not None

    async def is_valid_borrower(self, borrower_id: int) -> bool:
        return await self.repository.find_user(borrower_id, UserRole.BORROWER.value) is not None

    async def is_original_lender(self, loan_id: int, lender_id: int) -> bool:
        return await self.repository.find_loan_with_lender(loan_id, lender_id) is not None

    async def require_lender(self, lender_id: int) -> None:
        if not await self.is_valid_lender(lender_id):
            await self._reject_party(lender_id, "Invalid lender ID")

    async def require_borrower(self, borrower_id: int) -> None:
        if not await self.is_valid_borrower(borrower_id):
            await self._reject_party(borrower_id, "Invalid borrower ID")

    async def require_original_lender(
        self, loan_id: int, lender_id: int, caller_id: Optional[int] = None
    ) -> None:
        """
        The claimed lender must own the loan. When the request carries an
        authenticated caller id, the claim must also be the caller's own.
        """
        if caller_id is not None and caller_id != lender_id:
            raise Unauthorized("Invalid lender ID", "lender_id")
        if not await self.is_original_lender(loan_id, lender_id):
            raise Unauthorized("Invalid lender ID", "lender_id")

    async def _reject_party(self, user_id: int, message: str) -> None:
        if await self.repository.find_user(user_id) is None:
            raise NotFound(message)
        raise Unauthorized(message)
