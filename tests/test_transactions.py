"""
Tests for the Transaction record shape.

Transactions are append-only rows tied to an account. These tests verify
that a record persists with its enum columns stored as plain strings,
that transaction_id is unique, and that the response view reads it back.
"""

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError

from bank_accounts.database import utcnow
from bank_accounts.models.account import Account
from bank_accounts.models.transaction import (
    Transaction,
    TransactionResultType,
    TransactionType,
)
from bank_accounts.models.user import User
from bank_accounts.schemas.transaction import TransactionResponse


async def _account(db) -> Account:
    user = User(name="Pobi")
    account = Account(
        user=user,
        account_number="1000000000",
        balance=10000,
        registered_at=utcnow(),
    )
    db.add_all([user, account])
    await db.flush()
    return account


def _transaction(account, transaction_id="a1b2c3", **overrides) -> Transaction:
    fields = dict(
        account=account,
        transaction_type=TransactionType.USE,
        transaction_result_type=TransactionResultType.SUCCESS,
        amount=1000,
        balance_snapshot=9000,
        transaction_id=transaction_id,
        transacted_at=utcnow(),
    )
    fields.update(overrides)
    return Transaction(**fields)


class TestTransactionRecord:

    async def test_persists_with_account(self, db_session):
        account = await _account(db_session)
        db_session.add(_transaction(account))
        await db_session.flush()

        stored = (await db_session.execute(select(Transaction))).scalar_one()
        assert stored.account_id == account.id
        assert stored.amount == 1000
        assert stored.balance_snapshot == 9000
        assert stored.created_at is not None

    async def test_enums_stored_as_strings(self, db_session):
        account = await _account(db_session)
        db_session.add(
            _transaction(
                account,
                transaction_type=TransactionType.CANCEL,
                transaction_result_type=TransactionResultType.FAIL,
            )
        )
        await db_session.flush()

        row = (
            await db_session.execute(
                text("SELECT transaction_type, transaction_result_type FROM transactions")
            )
        ).one()
        assert tuple(row) == ("CANCEL", "FAIL")

    async def test_transaction_id_is_unique(self, db_session):
        account = await _account(db_session)
        db_session.add(_transaction(account, transaction_id="dup"))
        await db_session.flush()

        db_session.add(_transaction(account, transaction_id="dup"))
        with pytest.raises(IntegrityError):
            await db_session.flush()

    async def test_response_view(self, db_session):
        account = await _account(db_session)
        txn = _transaction(account, transaction_id="xyz")
        db_session.add(txn)
        await db_session.flush()

        view = TransactionResponse.model_validate(txn)
        assert view.transaction_id == "xyz"
        assert view.account_id == account.id
        assert view.transaction_type == TransactionType.USE
        assert view.model_dump(mode="json")["transaction_result_type"] == "SUCCESS"

    async def test_amounts_beyond_32_bits(self, db_session):
        account = await _account(db_session)
        db_session.add(
            _transaction(account, amount=2**40, balance_snapshot=2**62)
        )
        await db_session.flush()

        stored = (await db_session.execute(select(Transaction))).scalar_one()
        assert stored.amount == 2**40
        assert stored.balance_snapshot == 2**62
