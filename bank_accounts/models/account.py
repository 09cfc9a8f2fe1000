"""
Account model — a bank account owned by a User.

Each account has:
  - A unique account number (decimal string, allocated sequentially
    starting from 1000000000)
  - A balance in integer units
  - A status: IN_USE while open, UNREGISTERED once closed

Lifecycle:
  Accounts are never deleted. Closing an account flips the status to
  UNREGISTERED and stamps unregistered_at; the transition is one-way.
  The owning user_id is set at creation and never changes.
"""

import enum
from datetime import datetime

from sqlalchemy import BigInteger, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bank_accounts.database import AuditMixin, Base, BigIntegerId


class AccountStatus(str, enum.Enum):
    """
    Lifecycle status of an account.

    Inherits from str so the value serializes naturally to JSON; stored
    as a plain string column (native_enum=False) rather than a DB enum type.
    """
    IN_USE = "IN_USE"
    UNREGISTERED = "UNREGISTERED"


class Account(AuditMixin, Base):
    __tablename__ = "accounts"

    # Owner of this account
    user_id: Mapped[int] = mapped_column(
        BigIntegerId,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    account_number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
    )

    balance: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
    )

    account_status: Mapped[AccountStatus] = mapped_column(
        Enum(AccountStatus, native_enum=False, length=20),
        nullable=False,
        default=AccountStatus.IN_USE,
    )

    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    # Only set when the account is closed
    unregistered_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # --- Relationships ---
    user: Mapped["User"] = relationship(
        back_populates="accounts",
    )
