"""Role helper for explicit authorization checks."""

from __future__ import annotations

from fastapi import HTTPException, status

from hotelhub.core.session import SessionContext, UserRole

PROVIDER_ROLES = {UserRole.SERVICE, UserRole.SUPERADMIN}
HOTEL_ADMIN_ROLES = {UserRole.HOTEL, UserRole.SUPER_HOTEL, UserRole.SUPERADMIN}


def require_roles(session: SessionContext, allowed: set[UserRole]) -> None:
    """Raise HTTP 403 if the caller is not a member of the allowed role set."""

    if session.role not in allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )


__all__ = ["HOTEL_ADMIN_ROLES", "PROVIDER_ROLES", "require_roles"]
