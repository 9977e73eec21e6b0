"""Helpers for reading marketplace-issued bearer tokens."""

from typing import Any

from jose import JWTError, jwt

from hotelhub.core.session import SessionContext, UserRole


def read_token_claims(token: str) -> dict[str, Any]:
    """Return the claims of a marketplace token, raising JWTError when malformed.

    Signatures are verified by the marketplace on every forwarded request;
    the claims are only used to key local state by caller.
    """
    return jwt.get_unverified_claims(token)


def build_session_context(token: str) -> SessionContext:
    """Create a session context from a bearer token."""
    claims = read_token_claims(token)
    subject = claims.get("id") or claims.get("sub")
    if not subject:
        raise JWTError("Token has no subject")
    role_value = claims.get("role")
    try:
        role = UserRole(role_value) if role_value else None
    except ValueError:
        role = None
    return SessionContext(token=token, user_id=str(subject), role=role)
