"""
Pydantic schemas for Account endpoints.

AccountResponse is the view every lifecycle operation returns; it is
built straight from the ORM entity (from_attributes).
"""

from datetime import datetime

from pydantic import BaseModel, Field

from bank_accounts.database import MAX_BIGINT
from bank_accounts.models.account import AccountStatus


class AccountCreateRequest(BaseModel):
    """Request body for POST /accounts."""
    user_id: int = Field(ge=1, le=MAX_BIGINT, description="Owner of the new account")
    initial_balance: int = Field(ge=0, le=MAX_BIGINT, description="Opening balance")


class AccountResponse(BaseModel):
    """Public representation of a bank account."""
    id: int
    user_id: int
    account_number: str
    balance: int
    account_status: AccountStatus
    registered_at: datetime
    unregistered_at: datetime | None

    model_config = {"from_attributes": True}
