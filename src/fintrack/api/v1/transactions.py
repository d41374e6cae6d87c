"""Income and expense endpoints. Every route requires a valid session."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from fintrack.api.deps import get_current_user, get_expense_repository, get_income_repository
from fintrack.core.exceptions import NotFoundError
from fintrack.models.expense import Expense
from fintrack.models.income import Income
from fintrack.repositories.ledger import ExpenseRepository, IncomeRepository
from fintrack.schemas.auth import CurrentUser, MessageResponse
from fintrack.schemas.ledger import (
    ExpenseCreate,
    IncomeCreate,
    LedgerEntryResponse,
    LedgerSummary,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post(
    "/incomes",
    response_model=LedgerEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add income",
)
async def add_income(
    data: IncomeCreate,
    current_user: CurrentUser = Depends(get_current_user),
    repo: IncomeRepository = Depends(get_income_repository),
) -> LedgerEntryResponse:
    """Record an income for the authenticated user."""
    income = await repo.create(Income(user_id=current_user.id, **data.model_dump()))
    return LedgerEntryResponse.model_validate(income)


@router.get(
    "/incomes",
    response_model=list[LedgerEntryResponse],
    summary="List incomes",
)
async def list_incomes(
    current_user: CurrentUser = Depends(get_current_user),
    repo: IncomeRepository = Depends(get_income_repository),
) -> list[LedgerEntryResponse]:
    """List the authenticated user's incomes, newest first."""
    incomes = await repo.get_by_user(current_user.id)
    return [LedgerEntryResponse.model_validate(income) for income in incomes]


@router.delete(
    "/incomes/{income_id}",
    response_model=MessageResponse,
    summary="Delete income",
    responses={404: {"description": "Income not found"}},
)
async def delete_income(
    income_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    repo: IncomeRepository = Depends(get_income_repository),
) -> MessageResponse:
    """
    Delete one of the authenticated user's incomes.

    Raises:
        404: Income does not exist or belongs to another user
    """
    if not await repo.delete_owned(income_id, current_user.id):
        raise NotFoundError("TXN_001", details={"income_id": str(income_id)})
    return MessageResponse(message="Income deleted successfully")


@router.post(
    "/expenses",
    response_model=LedgerEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add expense",
)
async def add_expense(
    data: ExpenseCreate,
    current_user: CurrentUser = Depends(get_current_user),
    repo: ExpenseRepository = Depends(get_expense_repository),
) -> LedgerEntryResponse:
    """Record an expense for the authenticated user. The amount is stored negative."""
    fields = data.model_dump()
    fields["amount"] = -abs(fields["amount"])
    expense = await repo.create(Expense(user_id=current_user.id, **fields))
    return LedgerEntryResponse.model_validate(expense)


@router.get(
    "/expenses",
    response_model=list[LedgerEntryResponse],
    summary="List expenses",
)
async def list_expenses(
    current_user: CurrentUser = Depends(get_current_user),
    repo: ExpenseRepository = Depends(get_expense_repository),
) -> list[LedgerEntryResponse]:
    """List the authenticated user's expenses, newest first."""
    expenses = await repo.get_by_user(current_user.id)
    return [LedgerEntryResponse.model_validate(expense) for expense in expenses]


@router.delete(
    "/expenses/{expense_id}",
    response_model=MessageResponse,
    summary="Delete expense",
    responses={404: {"description": "Expense not found"}},
)
async def delete_expense(
    expense_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    repo: ExpenseRepository = Depends(get_expense_repository),
) -> MessageResponse:
    """
    Delete one of the authenticated user's expenses.

    Raises:
        404: Expense does not exist or belongs to another user
    """
    if not await repo.delete_owned(expense_id, current_user.id):
        raise NotFoundError("TXN_002", details={"expense_id": str(expense_id)})
    return MessageResponse(message="Expense deleted successfully")


@router.get(
    "/summary",
    response_model=LedgerSummary,
    summary="Income/expense totals",
    description="Totals and per-category breakdowns for dashboard charts.",
)
async def get_summary(
    current_user: CurrentUser = Depends(get_current_user),
    income_repo: IncomeRepository = Depends(get_income_repository),
    expense_repo: ExpenseRepository = Depends(get_expense_repository),
) -> LedgerSummary:
    """Aggregate the authenticated user's incomes and expenses."""
    total_income = await income_repo.get_total(current_user.id)
    total_expense = abs(await expense_repo.get_total(current_user.id))
    expense_by_category = await expense_repo.get_total_by_category(current_user.id)

    return LedgerSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        income_by_category=await income_repo.get_total_by_category(current_user.id),
        expense_by_category={
            category: abs(total) for category, total in expense_by_category.items()
        },
    )
