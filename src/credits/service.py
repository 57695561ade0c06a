"""Credit checks and deductions.

A deduction is one read followed by one update; atomicity is left to the
store's row-level guarantees.
"""

import logging

from src.credits import repository
from src.credits.schemas import CheckCreditsRequest, CreditsRequest, CreditsResult, DeductCreditsRequest
from src.utils.errors import EdgeFunctionError, ErrorCode

logger = logging.getLogger(__name__)


def _balance(user_id: str) -> int:
    balance = repository.get_balance(user_id)
    if balance is None:
        raise EdgeFunctionError(ErrorCode.NOT_FOUND, "Profile not found")
    return balance


def check_credits(user_id: str) -> CreditsResult:
    balance = _balance(user_id)
    return CreditsResult(allowed=balance > 0, remaining=balance)


def deduct_credits(user_id: str, req: DeductCreditsRequest) -> CreditsResult:
    balance = _balance(user_id)
    if balance < req.amount:
        logger.info("Insufficient credits for user %s: balance=%d required=%d", user_id, balance, req.amount)
        raise EdgeFunctionError(ErrorCode.PAYMENT_REQUIRED, "Insufficient credits. Please upgrade your plan.")

    new_balance = balance - req.amount
    repository.set_balance(user_id, new_balance)
    transaction = repository.log_transaction(user_id, -req.amount, new_balance, req.operation_type, req.metadata)
    logger.info("Deducted %d credits from user %s for %s", req.amount, user_id, req.operation_type)
    return CreditsResult(
        allowed=True,
        remaining=new_balance,
        transaction_id=transaction["id"] if transaction else None,
    )


def handle(user_id: str, req: CreditsRequest) -> CreditsResult:
    if isinstance(req, CheckCreditsRequest):
        return check_credits(user_id)
    return deduct_credits(user_id, req)
