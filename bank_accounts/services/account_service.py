"""
Account service — business logic for the account lifecycle.

This module handles:
  - Account lookup by surrogate id
  - Account creation (per-user cap, sequential account numbers)
  - Account closure (ownership, status and balance checks)
  - Listing a user's accounts

Every function runs inside the caller's session and only flushes; the
commit or rollback belongs to the session owner (get_db() for HTTP
requests). A raised error therefore leaves nothing persisted.

Account numbering:
  The next number is the highest numeric account number in the table plus
  one, or ACCOUNT_NUMBER_SEED when the table is empty. The unique
  constraint on account_number is the final guard: if two creates race to
  the same number, the loser gets AccountNumberConflictError instead of a
  duplicate.

Locking:
  create_account() selects the user row with_for_update(). That is a
  no-op on SQLite, whose single writer already serializes creates, and on
  PostgreSQL it makes concurrent creates for the same user wait on each
  other so the per-user count can't be raced past the cap.
"""

import logging

from sqlalchemy import BigInteger, cast, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bank_accounts.config import settings
from bank_accounts.database import utcnow
from bank_accounts.exceptions import (
    AccountAlreadyUnregisteredError,
    AccountNotFoundError,
    AccountNumberConflictError,
    BalanceNotEmptyError,
    InvalidArgumentError,
    MaxAccountsPerUserExceededError,
    UserAccountMismatchError,
    UserNotFoundError,
)
from bank_accounts.models.account import Account, AccountStatus
from bank_accounts.models.user import User
from bank_accounts.schemas.account import AccountResponse

logger = logging.getLogger(__name__)


async def _get_user(db: AsyncSession, user_id: int, for_update: bool = False) -> User:
    stmt = select(User).where(User.id == user_id)
    if for_update:
        stmt = stmt.with_for_update()  # No-op on SQLite, locks row on PostgreSQL
    result = await db.execute(stmt)
    user = result.scalar_one_or_none()

    if user is None:
        raise UserNotFoundError(user_id)

    return user


async def _next_account_number(db: AsyncSession) -> str:
    """
    Allocate the next account number.

    Ordering is by the numeric value of the account number, not by the
    surrogate id, so rows inserted out of order can't push the sequence
    backwards.
    """
    result = await db.execute(
        select(func.max(cast(Account.account_number, BigInteger)))
    )
    highest = result.scalar()

    if highest is None:
        return settings.ACCOUNT_NUMBER_SEED

    return str(int(highest) + 1)


async def get_account(db: AsyncSession, account_id: int) -> Account:
    """
    Get a single account by its surrogate id.

    Raises:
        InvalidArgumentError: If account_id is negative (the store is not queried).
        AccountNotFoundError: If no account has this id.
    """
    if account_id < 0:
        raise InvalidArgumentError(f"Account id must not be negative, got {account_id}")

    account = await db.get(Account, account_id)
    if account is None:
        raise AccountNotFoundError(account_id)

    return account


async def create_account(
    db: AsyncSession,
    user_id: int,
    initial_balance: int,
) -> AccountResponse:
    """
    Open a new account for a user.

    Args:
        db: Database session.
        user_id: The owner of the new account.
        initial_balance: Opening balance.

    Returns:
        A view of the newly created account (status IN_USE).

    Raises:
        UserNotFoundError: If the user doesn't exist.
        MaxAccountsPerUserExceededError: If the user already owns
            MAX_ACCOUNTS_PER_USER accounts, open or closed.
        AccountNumberConflictError: If a concurrent create took the number.
    """
    user = await _get_user(db, user_id, for_update=True)

    count_result = await db.execute(
        select(func.count()).select_from(Account).where(Account.user_id == user.id)
    )
    if count_result.scalar_one() >= settings.MAX_ACCOUNTS_PER_USER:
        logger.info("User %s refused a new account: cap reached", user.id)
        raise MaxAccountsPerUserExceededError(user.id, settings.MAX_ACCOUNTS_PER_USER)

    account_number = await _next_account_number(db)

    account = Account(
        user=user,
        account_number=account_number,
        balance=initial_balance,
        account_status=AccountStatus.IN_USE,
        registered_at=utcnow(),
    )
    db.add(account)
    try:
        await db.flush()
    except IntegrityError as exc:
        logger.warning("Account number %s collided for user %s", account_number, user_id)
        raise AccountNumberConflictError(account_number) from exc

    logger.info("Opened account %s for user %s", account.account_number, user.id)
    return AccountResponse.model_validate(account)


async def delete_account(
    db: AsyncSession,
    user_id: int,
    account_number: str,
) -> AccountResponse:
    """
    Close (unregister) an account.

    The checks run in a fixed order, each telling the caller something
    different to fix: ownership, then already-closed, then balance.

    Raises:
        UserNotFoundError: If the user doesn't exist.
        AccountNotFoundError: If no account has this number.
        UserAccountMismatchError: If the account belongs to another user.
        AccountAlreadyUnregisteredError: If the account is already closed.
        BalanceNotEmptyError: If the balance is not zero.
    """
    user = await _get_user(db, user_id)

    result = await db.execute(
        select(Account)
        .where(Account.account_number == account_number)
        .with_for_update()
    )
    account = result.scalar_one_or_none()
    if account is None:
        raise AccountNotFoundError(account_number)

    _validate_delete_account(user, account)

    account.account_status = AccountStatus.UNREGISTERED
    account.unregistered_at = utcnow()
    await db.flush()

    logger.info("Closed account %s for user %s", account.account_number, user.id)
    return AccountResponse.model_validate(account)


def _validate_delete_account(user: User, account: Account) -> None:
    if account.user_id != user.id:
        logger.warning(
            "User %s tried to close account %s owned by user %s",
            user.id, account.account_number, account.user_id,
        )
        raise UserAccountMismatchError(user.id, account.account_number)

    if account.account_status == AccountStatus.UNREGISTERED:
        raise AccountAlreadyUnregisteredError(account.account_number)

    if account.balance > 0:
        raise BalanceNotEmptyError(account.account_number, account.balance)


async def get_accounts_by_user(
    db: AsyncSession,
    user_id: int,
) -> list[AccountResponse]:
    """
    List every account a user owns, open or closed, oldest first.

    Raises:
        UserNotFoundError: If the user doesn't exist.
    """
    user = await _get_user(db, user_id)

    result = await db.execute(
        select(Account)
        .where(Account.user_id == user.id)
        .order_by(Account.id)
    )
    return [AccountResponse.model_validate(a) for a in result.scalars().all()]
