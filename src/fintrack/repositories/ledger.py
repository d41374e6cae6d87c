"""Income and expense repositories, always scoped to the owning user."""
from typing import TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.expense import Expense
from fintrack.models.income import Income
from fintrack.repositories.base import BaseRepository

E = TypeVar("E", Income, Expense)


class LedgerRepository(BaseRepository[E]):
    """Owner-scoped queries shared by income and expense entries."""

    async def get_by_user(self, user_id: UUID, skip: int = 0, limit: int = 1000) -> list[E]:
        """Get all entries for a user, newest first."""
        result = await self.db.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def delete_owned(self, entry_id: UUID, user_id: UUID) -> bool:
        """Delete an entry only if it belongs to the given user."""
        result = await self.db.execute(
            delete(self.model).where(
                self.model.id == entry_id, self.model.user_id == user_id
            )
        )
        await self.db.commit()
        return result.rowcount > 0

    async def get_total(self, user_id: UUID) -> float:
        """Sum of all amounts for a user."""
        result = await self.db.execute(
            select(func.sum(self.model.amount)).where(self.model.user_id == user_id)
        )
        total = result.scalar_one_or_none()
        return float(total) if total else 0.0

    async def get_total_by_category(self, user_id: UUID) -> dict[str, float]:
        """
        Aggregate amounts by category.
        Returns dict of {category: total_amount}.
        """
        result = await self.db.execute(
            select(self.model.category, func.sum(self.model.amount).label("total"))
            .where(self.model.user_id == user_id)
            .group_by(self.model.category)
        )
        return {row.category: float(row.total) for row in result}


class IncomeRepository(LedgerRepository[Income]):
    """Repository for Income entries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Income)


class ExpenseRepository(LedgerRepository[Expense]):
    """Repository for Expense entries (amounts stored negative)."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Expense)
