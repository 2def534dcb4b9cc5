"""
Storage gateway for the loans and users tables.

No business rules live here. Each write is committed on its own; a failed
write is rolled back, logged and reported as having had no effect.
"""
import logging
from typing import Any, Dict, List, Optional

from passlib.context import CryptContext
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import pwd_context
from app.modules.loans.models import Loan
from app.modules.users.models import User, UserRole

logger = logging.getLogger(__name__)


class LoanRepository:
    """Async storage gateway over one request-scoped session"""

    def __init__(self, db: AsyncSession, password_context: CryptContext = None):
        self.db = db
        self.password_context = password_context or pwd_context

    # ─── Loans ──────────────────────────────────────────────────

    async def insert_loan(self, fields: Dict[str, Any]) -> Optional[Loan]:
        loan = Loan(**fields)
        try:
            self.db.add(loan)
            await self.db.commit()
            await self.db.refresh(loan)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Loan insert failed: {str(e)}")
            return None
        return loan

    async def fetch_loan(self, loan_id: int) -> Optional[Loan]:
        result = await self.db.execute(select(Loan).where(Loan.id == loan_id))
        return result.scalar_one_or_none()

    async def update_loan(self, loan_id: int, fields: Dict[str, Any]) -> bool:
        try:
            result = await self.db.execute(
                update(Loan).where(Loan.id == loan_id).values(**fields)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Loan {loan_id} update failed: {str(e)}")
            return False
        return result.rowcount > 0

    async def delete_loan(self, loan_id: int) -> bool:
        try:
            result = await self.db.execute(delete(Loan).where(Loan.id == loan_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Loan {loan_id} delete failed: {str(e)}")
            return False
        return result.rowcount > 0

    async def fetch_all_loans(self) -> List[Loan]:
        result = await self.db.execute(select(Loan).order_by(Loan.id))
        return list(result.scalars().all())

    # ─── Users ──────────────────────────────────────────────────

    async def find_user(self, user_id: int, role: Optional[str] = None) -> Optional[User]:
        """User by id, optionally restricted to a role"""
        query = select(User).where(User.id == user_id)
        if role is not None:
            query = query.where(User.role == role)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_loan_with_lender(self, loan_id: int, lender_id: int) -> Optional[int]:
        """Lender's user id if the loan exists, is owned by lender_id and that user is a lender"""
        result = await self.db.execute(
            select(User.id)
            .join(Loan, Loan.lender_id == User.id)
            .where(
                Loan.id == loan_id,
                Loan.lender_id == lender_id,
                User.role == UserRole.LENDER.value,
            )
        )
        return result.scalar_one_or_none()

    async def find_user_by_credentials(self, email: str, password: str, role: str) -> Optional[User]:
        """
        User matching email, role and password.
        Hashes in a deprecated scheme are replaced with a fresh hash once verified.
        """
        result = await self.db.execute(
            select(User).where(User.email == email, User.role == role).order_by(User.id)
        )
        for user in result.scalars().all():
            try:
                verified, new_hash = self.password_context.verify_and_update(password, user.password_hash)
            except ValueError:
                # Stored hash not recognised by any configured scheme
                logger.warning(f"Unrecognised password hash for user {user.id}")
                continue
            if not verified:
                continue
            if new_hash:
                await self._upgrade_password_hash(user, new_hash)
            return user
        return None

    async def _upgrade_password_hash(self, user: User, new_hash: str) -> None:
        # Detached so a rollback cannot expire the caller's copy
        self.db.expunge(user)
        try:
            await self.db.execute(
                update(User).where(User.id == user.id).values(password_hash=new_hash)
            )
            await self.db.commit()
            logger.info(f"Upgraded password hash for user {user.id}")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Password hash upgrade failed for user {user.id}: {str(e)}")
