"""
Custom exception classes and FastAPI exception handlers.

The service layer raises these domain errors without importing HTTP
concepts. The handler registered below translates them into HTTP
responses, so:
    - Service code is testable without HTTP
    - Error responses are consistent across all endpoints
    - Every error kind reaches the caller as a distinct code/message pair

Exception hierarchy:
    AccountAPIError (base)
    ├── InvalidArgumentError             — structurally invalid input (e.g. negative id)
    ├── UserNotFoundError                — referenced user doesn't exist
    ├── AccountNotFoundError             — referenced account doesn't exist
    ├── MaxAccountsPerUserExceededError  — user already owns the maximum
    ├── UserAccountMismatchError         — account belongs to someone else
    ├── AccountAlreadyUnregisteredError  — closing an already-closed account
    ├── BalanceNotEmptyError             — closing an account that still holds money
    └── AccountNumberConflictError       — concurrent create took the same number
"""

import enum

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class ErrorCode(str, enum.Enum):
    """Machine-readable error kinds, returned as ``error_type``."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    MAX_ACCOUNT_PER_USER_10 = "MAX_ACCOUNT_PER_USER_10"
    USER_ACCOUNT_UN_MATCH = "USER_ACCOUNT_UN_MATCH"
    ACCOUNT_ALREADY_UNREGISTERED = "ACCOUNT_ALREADY_UNREGISTERED"
    BALANCE_NOT_EMPTY = "BALANCE_NOT_EMPTY"
    ACCOUNT_NUMBER_CONFLICT = "ACCOUNT_NUMBER_CONFLICT"


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class AccountAPIError(Exception):
    """Base exception for all domain errors."""

    error_code: ErrorCode = ErrorCode.INVALID_ARGUMENT
    status_code: int = 400

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class InvalidArgumentError(AccountAPIError):
    """Raised when the caller supplies a structurally invalid value."""

    error_code = ErrorCode.INVALID_ARGUMENT
    status_code = 400


class UserNotFoundError(AccountAPIError):
    """Raised when a referenced user does not exist."""

    error_code = ErrorCode.USER_NOT_FOUND
    status_code = 404

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class AccountNotFoundError(AccountAPIError):
    """Raised when a requested account does not exist.

    ``account_ref`` is either the surrogate id or the account number,
    depending on how the account was looked up.
    """

    error_code = ErrorCode.ACCOUNT_NOT_FOUND
    status_code = 404

    def __init__(self, account_ref: int | str):
        self.account_ref = account_ref
        super().__init__(f"Account {account_ref} not found")


class MaxAccountsPerUserExceededError(AccountAPIError):
    """
    Raised when a user already owns the maximum number of accounts.

    Attributes:
        user_id: The user who hit the cap.
        limit: The configured maximum.
    """

    error_code = ErrorCode.MAX_ACCOUNT_PER_USER_10
    status_code = 422

    def __init__(self, user_id: int, limit: int):
        self.user_id = user_id
        self.limit = limit
        super().__init__(f"User {user_id} already owns the maximum of {limit} accounts")


class UserAccountMismatchError(AccountAPIError):
    """Raised when the account is not owned by the requesting user."""

    error_code = ErrorCode.USER_ACCOUNT_UN_MATCH
    status_code = 403

    def __init__(self, user_id: int, account_number: str):
        self.user_id = user_id
        self.account_number = account_number
        super().__init__(f"Account {account_number} does not belong to user {user_id}")


class AccountAlreadyUnregisteredError(AccountAPIError):
    """Raised when closing an account that is already closed."""

    error_code = ErrorCode.ACCOUNT_ALREADY_UNREGISTERED
    status_code = 409

    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(f"Account {account_number} is already unregistered")


class BalanceNotEmptyError(AccountAPIError):
    """
    Raised when closing an account whose balance is not zero.

    Attributes:
        account_number: The account the caller tried to close.
        balance: The balance still held in the account.
    """

    error_code = ErrorCode.BALANCE_NOT_EMPTY
    status_code = 422

    def __init__(self, account_number: str, balance: int):
        self.account_number = account_number
        self.balance = balance
        super().__init__(
            f"Account {account_number} still holds a balance of {balance}"
        )


class AccountNumberConflictError(AccountAPIError):
    """Raised when another request claimed the same new account number first."""

    error_code = ErrorCode.ACCOUNT_NUMBER_CONFLICT
    status_code = 409

    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(
            f"Account number {account_number} was taken concurrently; retry the request"
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the domain exception handler with the FastAPI application.

    Every AccountAPIError subclass carries its own status code and error
    code, so one handler covers the whole hierarchy with a consistent body:
    {"detail": "error message", "error_type": "ERROR_CODE"}

    This is called once during app startup in main.py.
    """

    @app.exception_handler(AccountAPIError)
    async def account_api_error_handler(
        request: Request, exc: AccountAPIError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error_type": exc.error_code.value},
        )
