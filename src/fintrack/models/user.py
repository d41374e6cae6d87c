"""User model for authentication and ledger ownership."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fintrack.models.base import BaseModel


class User(BaseModel):
    """User model representing registered account holders."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    # Rely on DB-level ON DELETE CASCADE; prevent SQLAlchemy from NULLing FKs on delete.
    incomes: Mapped[list["Income"]] = relationship(
        "Income", back_populates="user", lazy="selectin", passive_deletes="all"
    )
    expenses: Mapped[list["Expense"]] = relationship(
        "Expense", back_populates="user", lazy="selectin", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"
