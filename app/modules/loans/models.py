from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Date, DateTime
from app.core.database import Base


class Loan(Base):
    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, index=True)
    lender_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    borrower_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    loan_amount = Column(Numeric(15, 2), nullable=False)
    interest_rate = Column(Numeric(5, 2), nullable=False)
    duration_years = Column(Numeric(6, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    status = Column(String(50), default="active", nullable=False)  # free text: active, completed, ...
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
