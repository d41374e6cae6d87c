"""Database models."""
from fintrack.models.user import User
from fintrack.models.income import Income
from fintrack.models.expense import Expense

__all__ = ["User", "Income", "Expense"]
