"""Income/expense request and response schemas."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# Largest magnitude a Numeric(14, 2) column holds.
MAX_AMOUNT = 10**12


class LedgerEntryCreate(BaseModel):
    """Fields shared by new income and expense entries."""

    title: str = Field(..., min_length=1, max_length=50)
    amount: float = Field(..., lt=MAX_AMOUNT, allow_inf_nan=False)
    date: dt.date = Field(..., description="Transaction date (YYYY-MM-DD)")
    category: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=50)

    model_config = ConfigDict(str_strip_whitespace=True)


class IncomeCreate(LedgerEntryCreate):
    """Request to record an income."""

    amount: float = Field(
        ..., ge=0, lt=MAX_AMOUNT, allow_inf_nan=False, description="Non-negative amount received"
    )


class ExpenseCreate(LedgerEntryCreate):
    """Request to record an expense."""

    amount: float = Field(
        ..., gt=0, lt=MAX_AMOUNT, allow_inf_nan=False, description="Positive amount spent (stored negative)"
    )


class LedgerEntryResponse(BaseModel):
    """Income or expense entry for API responses."""

    id: UUID
    user_id: UUID
    title: str
    amount: float
    type: str
    date: dt.date
    category: str
    description: str
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class LedgerSummary(BaseModel):
    """Aggregates used by the dashboard charts. Expense figures are absolute values."""

    total_income: float
    total_expense: float
    balance: float
    income_by_category: dict[str, float]
    expense_by_category: dict[str, float]
