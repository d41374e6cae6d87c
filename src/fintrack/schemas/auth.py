"""Pydantic schemas for authentication endpoints."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from fintrack.models.user import User


class SignupRequest(BaseModel):
    """Request model for account signup."""

    name: str = Field(..., min_length=3, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=4, max_length=100, description="Password (4-100 characters)")


class LoginRequest(BaseModel):
    """Request model for user login.

    The password minimum is one character looser than signup; existing
    clients rely on it, so it is kept as-is.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=3, max_length=100, description="User password")


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by auth and delete endpoints."""

    message: str
    success: bool = True


class CurrentUser(BaseModel):
    """Identity attached to an authenticated request (never includes the hash)."""

    id: UUID
    name: str
    email: str
    incomes: list[UUID] = Field(default_factory=list, description="IDs of owned income entries")
    expenses: list[UUID] = Field(default_factory=list, description="IDs of owned expense entries")

    @classmethod
    def from_user(cls, user: User) -> "CurrentUser":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            incomes=[income.id for income in user.incomes],
            expenses=[expense.id for expense in user.expenses],
        )


class VerifyResponse(BaseModel):
    """Response model for the session check endpoint."""

    success: bool = True
    message: str = "User is authenticated"
    user: CurrentUser
