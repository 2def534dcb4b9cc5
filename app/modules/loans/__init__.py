# Loans module
from app.modules.loans.models import Loan
from app.modules.loans.repository import LoanRepository
from app.modules.loans.authorization import LoanAuthorizer
from app.modules.loans.services import LoanService

__all__ = ["Loan", "LoanRepository", "LoanAuthorizer", "LoanService"]
