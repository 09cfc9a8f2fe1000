"""
SQLAlchemy ORM models package.

All models are imported here so that:
  1. Base.metadata knows every table before create_all() runs
  2. Other modules can import from bank_accounts.models directly
"""

from bank_accounts.models.user import User  # noqa: F401
from bank_accounts.models.account import Account, AccountStatus  # noqa: F401
from bank_accounts.models.transaction import (  # noqa: F401
    Transaction,
    TransactionResultType,
    TransactionType,
)
