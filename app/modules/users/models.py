from sqlalchemy import Column, Integer, String
from app.core.database import Base
import enum


class UserRole(str, enum.Enum):
    """User role enumeration"""
    LENDER = "lender"
    BORROWER = "borrower"


class User(Base):
    """Lender or borrower account. Read-only for the loan and login flows."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), index=True, nullable=False)  # lender, borrower
    name = Column(String(200), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, role={self.role})>"
