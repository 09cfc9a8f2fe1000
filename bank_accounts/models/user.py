"""
User model — the owner of bank accounts.

Users are provisioned outside this service (see demo/seed.py for local
data); the account endpoints only ever look them up by id.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bank_accounts.database import AuditMixin, Base


class User(AuditMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    # --- Relationships ---
    # One User can own many Accounts
    accounts: Mapped[list["Account"]] = relationship(
        back_populates="user",
        order_by="Account.id",
    )
