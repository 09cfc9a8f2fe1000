"""
Pydantic schemas for Transaction records.
"""

from datetime import datetime

from pydantic import BaseModel

from bank_accounts.models.transaction import TransactionResultType, TransactionType


class TransactionResponse(BaseModel):
    """Public representation of a transaction record."""
    transaction_id: str
    account_id: int
    transaction_type: TransactionType
    transaction_result_type: TransactionResultType
    amount: int
    balance_snapshot: int
    transacted_at: datetime

    model_config = {"from_attributes": True}
