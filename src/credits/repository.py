"""Data access layer for credit balances."""

from typing import Any

from src.db.client import get_supabase
from src.db.models import CREDIT_TRANSACTIONS, PROFILES


def get_balance(user_id: str) -> int | None:
    db = get_supabase()
    result = db.table(PROFILES).select("credits").eq("id", user_id).execute()
    if not result.data:
        return None
    return result.data[0].get("credits") or 0


def set_balance(user_id: str, credits: int) -> None:
    db = get_supabase()
    db.table(PROFILES).update({"credits": credits}).eq("id", user_id).execute()


def log_transaction(user_id: str, amount: int, balance_after: int, operation_type: str, metadata: dict[str, Any]) -> dict | None:
    db = get_supabase()
    result = db.table(CREDIT_TRANSACTIONS).insert({
        "user_id": user_id,
        "credits_amount": amount,
        "balance_after": balance_after,
        "transaction_type": "deduction" if amount < 0 else "grant",
        "operation_type": operation_type,
        "metadata": metadata,
    }).execute()
    return result.data[0] if result.data else None
