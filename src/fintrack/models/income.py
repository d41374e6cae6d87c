"""Income model representing money received by a user."""
import datetime as dt
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fintrack.models.base import BaseModel


class Income(BaseModel):
    """A single income entry owned by one user."""

    __tablename__ = "incomes"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    type: Mapped[str] = mapped_column(String(10), default="income", nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="incomes")

    def __repr__(self) -> str:
        return f"<Income(id={self.id}, title={self.title}, amount={self.amount})>"
