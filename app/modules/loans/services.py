import logging
from typing import Any, Dict, Optional

from app.core.clock import Clock, make_clock
from app.core.config import settings
from app.core.errors import LendingError, NotFound, PersistenceFailure
from app.core.outcomes import Outcome, OutcomeKind
from app.modules.loans.authorization import LoanAuthorizer
from app.modules.loans.models import Loan
from app.modules.loans.repository import LoanRepository
from app.modules.loans import validation

logger = logging.getLogger(__name__)

LOAN_NOT_FOUND = "Loan not found"
DELETE_NOT_FOUND = "Invalid or missing loan ID"


class LoanService:
    """
    Create, update, delete and read loans.

    Each call validates the payload, then checks the parties, then makes a
    single storage call. The first failure ends the call and is returned as
    an Outcome; nothing is raised to the caller.
    """

    def __init__(
        self,
        repository: LoanRepository,
        authorizer: Optional[LoanAuthorizer] = None,
        clock: Optional[Clock] = None,
        empty_list_is_not_found: Optional[bool] = None,
    ):
        self.repository = repository
        self.authorizer = authorizer or LoanAuthorizer(repository)
        self.clock = clock or make_clock()
        if empty_list_is_not_found is None:
            empty_list_is_not_found = settings.EMPTY_LOAN_LIST_IS_NOT_FOUND
        self.empty_list_is_not_found = empty_list_is_not_found

    async def create(self, payload: Dict[str, Any]) -> Outcome:
        try:
            fields = validation.validate_create(payload)
            await self.authorizer.require_lender(fields["lender_id"])
            await self.authorizer.require_borrower(fields["borrower_id"])

            fields["created_at"] = self.clock()
            loan = await self.repository.insert_loan(fields)
            if loan is None:
                raise PersistenceFailure("Failed to create loan")
        except LendingError as e:
            logger.warning(f"Loan create rejected: {e.message}")
            return Outcome.from_error(e)

        logger.info(f"Loan {loan.id} created by lender {loan.lender_id}")
        return Outcome(OutcomeKind.CREATED, "Loan created successfully", data=loan)

    async def update(
        self, loan_id: Any, payload: Dict[str, Any], caller_id: Optional[int] = None
    ) -> Outcome:
        try:
            loan_id = validation.parse_loan_id(loan_id)
            await self._require_loan(loan_id)

            fields = validation.validate_update(payload)
            await self.authorizer.require_original_lender(loan_id, fields["lender_id"], caller_id)
            await self.authorizer.require_borrower(fields["borrower_id"])

            fields["updated_at"] = self.clock()
            if not await self.repository.update_loan(loan_id, fields):
                # Zero rows: the loan may have been deleted since the first read
                await self._require_loan(loan_id)
                raise PersistenceFailure("Failed to update loan or loan not found")
        except LendingError as e:
            logger.warning(f"Loan {loan_id} update rejected: {e.message}")
            return Outcome.from_error(e)

        logger.info(f"Loan {loan_id} updated by lender {fields['lender_id']}")
        return Outcome(OutcomeKind.UPDATED, "Loan updated successfully")

    async def delete(
        self, loan_id: Any, payload: Dict[str, Any], caller_id: Optional[int] = None
    ) -> Outcome:
        try:
            loan_id = validation.parse_loan_id(loan_id, not_found=DELETE_NOT_FOUND)
            await self._require_loan(loan_id, DELETE_NOT_FOUND)

            fields = validation.validate_delete(payload)
            await self.authorizer.require_original_lender(loan_id, fields["lender_id"], caller_id)

            if not await self.repository.delete_loan(loan_id):
                await self._require_loan(loan_id, DELETE_NOT_FOUND)
                raise PersistenceFailure("Failed to delete loan")
        except LendingError as e:
            logger.warning(f"Loan {loan_id} delete rejected: {e.message}")
            return Outcome.from_error(e)

        logger.info(f"Loan {loan_id} deleted by lender {fields['lender_id']}")
        return Outcome(OutcomeKind.DELETED, "Loan deleted successfully")

    async def get(self, loan_id: Any) -> Outcome:
        try:
            loan_id = validation.parse_loan_id(loan_id)
            loan = await self._require_loan(loan_id)
        except LendingError as e:
            return Outcome.from_error(e)
        return Outcome(OutcomeKind.FOUND, "Loan retrieved successfully", data=loan)

    async def list_all(self) -> Outcome:
        loans = await self.repository.fetch_all_loans()
        if not loans and self.empty_list_is_not_found:
            return Outcome(OutcomeKind.NOT_FOUND, "No loans found")
        return Outcome(OutcomeKind.FOUND, "Loans retrieved successfully", data=loans)

    async def _require_loan(self, loan_id: int, message: str = LOAN_NOT_FOUND) -> Loan:
        loan = await self.repository.fetch_loan(loan_id)
        if loan is None:
            raise NotFound(message, "id")
        return loan
