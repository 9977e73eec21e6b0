"""Explicit session context injected into the marketplace client and services."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class UserRole(str, enum.Enum):
    """Roles issued by the marketplace authentication service."""

    SUPERADMIN = "superadmin"
    SUPER_HOTEL = "superHotel"
    HOTEL = "hotel"
    SERVICE = "service"
    GUEST = "guest"


@dataclass(slots=True)
class SessionContext:
    """Bearer token and identity of the caller.

    The context replaces ambient storage lookups: whoever owns the session
    passes it to the client, and the client clears it when the backend
    answers 401.
    """

    token: str | None = None
    user_id: str | None = None
    role: UserRole | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def clear(self) -> None:
        """Drop credentials after the backend rejected them."""

        self.token = None
        self.user_id = None
        self.role = None


__all__ = ["SessionContext", "UserRole"]
