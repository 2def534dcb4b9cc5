import logging
from typing import Any, Dict

from app.core.errors import LendingError, Unauthenticated
from app.core.outcomes import Outcome, OutcomeKind
from app.core.security import mask_email
from app.modules.loans.repository import LoanRepository
from app.modules.users.validation import validate_login

logger = logging.getLogger(__name__)


class AuthService:
    """Credential check for lenders and borrowers. Stateless: no session or token is issued."""

    def __init__(self, repository: LoanRepository):
        self.repository = repository

    async def login(self, payload: Dict[str, Any]) -> Outcome:
        try:
            credentials = validate_login(payload)
            user = await self.repository.find_user_by_credentials(
                credentials["email"], credentials["password"], credentials["role"]
            )
            if user is None:
                raise Unauthenticated("User not found or role mismatch")
        except LendingError as e:
            logger.warning(f"Login rejected: {e.message}")
            return Outcome.from_error(e)

        logger.info(f"Login successful for {mask_email(user.email)} ({user.role})")
        summary = {"email": user.email, "role": user.role, "name": user.name}
        return Outcome(OutcomeKind.AUTHENTICATED, "Login successful", data=summary)
