"""
Accounts router — account lifecycle endpoints.

    POST   /accounts                           — Open a new account
    GET    /accounts?user_id=                  — List a user's accounts
    GET    /accounts/{account_id}              — Get an account by id
    DELETE /accounts/{account_number}?user_id= — Close an account

Callers identify the user with user_id directly; authentication happens
in front of this service. Domain errors raised by the service are turned
into HTTP responses by the handler in bank_accounts.exceptions.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bank_accounts.database import MAX_BIGINT, get_db
from bank_accounts.schemas.account import AccountCreateRequest, AccountResponse
from bank_accounts.services import account_service

router = APIRouter()


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a new bank account",
)
async def create_account(
    request: AccountCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Open an account for the given user with an opening balance.

    Fails with 404 if the user doesn't exist and 422 if the user already
    owns the maximum number of accounts.
    """
    return await account_service.create_account(
        db=db,
        user_id=request.user_id,
        initial_balance=request.initial_balance,
    )


@router.get(
    "",
    response_model=list[AccountResponse],
    summary="List a user's accounts",
)
async def list_accounts(
    user_id: int = Query(ge=1, le=MAX_BIGINT),
    db: AsyncSession = Depends(get_db),
):
    return await account_service.get_accounts_by_user(db, user_id)


@router.get(
    "/{account_id}",
    response_model=AccountResponse,
    summary="Get account details",
)
async def get_account(
    account_id: int = Path(le=MAX_BIGINT),
    db: AsyncSession = Depends(get_db),
):
    """
    Get a single account by its id.

    Returns 400 for a negative id, 404 if the account doesn't exist, and
    422 for an id past the BIGINT range.
    """
    return await account_service.get_account(db, account_id)


@router.delete(
    "/{account_number}",
    response_model=AccountResponse,
    summary="Close a bank account",
)
async def delete_account(
    account_number: str,
    user_id: int = Query(ge=1, le=MAX_BIGINT),
    db: AsyncSession = Depends(get_db),
):
    """
    Close an account. The account must belong to the user, still be in
    use, and hold a zero balance.
    """
    return await account_service.delete_account(db, user_id, account_number)
