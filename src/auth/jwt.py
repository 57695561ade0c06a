"""Unverified JWT inspection for logging and rate-limit keys."""

import jwt


def extract_user_id(token: str | None) -> str | None:
    """Return the `sub` claim without checking the signature.

    Never use the result for authorization; identities are verified by the
    auth service in `src.auth.dependencies`.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
    except jwt.InvalidTokenError:
        return None
    sub = payload.get("sub")
    return sub if isinstance(sub, str) else None
