"""
Transaction model — a record of balance being used or a use being cancelled.

Transactions are append-only: nothing in the service layer mutates a row
once written. Key fields:
  - transaction_type: USE (money spent) or CANCEL (a prior use reversed)
  - transaction_result_type: SUCCESS or FAIL; failed attempts are kept too
  - amount: The amount the transaction asked for
  - balance_snapshot: The account balance right after the transaction
  - transaction_id: External-facing identifier handed to callers, distinct
    from the surrogate id
"""

import enum
from datetime import datetime

from sqlalchemy import BigInteger, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bank_accounts.database import AuditMixin, Base, BigIntegerId


class TransactionType(str, enum.Enum):
    USE = "USE"
    CANCEL = "CANCEL"


class TransactionResultType(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"


class Transaction(AuditMixin, Base):
    __tablename__ = "transactions"

    transaction_type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, native_enum=False, length=10),
        nullable=False,
    )

    transaction_result_type: Mapped[TransactionResultType] = mapped_column(
        Enum(TransactionResultType, native_enum=False, length=10),
        nullable=False,
    )

    account_id: Mapped[int] = mapped_column(
        BigIntegerId,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )

    amount: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    balance_snapshot: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    transaction_id: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
    )

    transacted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # --- Relationships ---
    account: Mapped["Account"] = relationship()
