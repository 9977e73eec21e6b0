"""Error taxonomy for marketplace interactions."""

from __future__ import annotations

from typing import Any


class MarketplaceError(RuntimeError):
    """Base class for failures talking to the marketplace backend."""

    status_code: int | None = None

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
        suppress_notice: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        self.suppress_notice = suppress_notice


class Unauthorized(MarketplaceError):
    """Session is missing or expired; the session is cleared silently."""

    status_code = 401

    def __init__(self, message: str = "Session expired", **kwargs: Any) -> None:
        kwargs.setdefault("suppress_notice", True)
        super().__init__(message, **kwargs)


class Forbidden(MarketplaceError):
    """The caller is not allowed to perform the action."""

    status_code = 403


class NotFoundOrUnreachable(MarketplaceError):
    """No backend route (404) or the backend could not be reached."""

    status_code = 404

    def __init__(
        self, message: str = "Marketplace unreachable", *, network: bool = False, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        self.network = network


class ServerError(MarketplaceError):
    """The backend failed with a 5xx response."""

    status_code = 500


class MarketplaceValidationError(MarketplaceError):
    """Any other 4xx rejection from the backend."""

    status_code = 400


class CategoryUnavailable(ValueError):
    """Raised when a category is unknown or flagged as coming soon."""


class ActivationInFlight(RuntimeError):
    """Raised when a toggle is requested while one is already pending."""


def _extract_message(payload: Any) -> str | None:
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("detail")
        if isinstance(message, str) and message:
            return message
    return None


def classify_response(status_code: int, payload: Any = None) -> MarketplaceError:
    """Map a failed HTTP response to the matching taxonomy member."""

    message = _extract_message(payload)
    if status_code == 401:
        return Unauthorized(message or "Session expired", status_code=401, detail=message)
    if status_code == 403:
        return Forbidden(message or "Access denied", status_code=403, detail=message)
    if status_code == 404:
        return NotFoundOrUnreachable(
            message or "The requested resource was not found",
            status_code=404,
            detail=message,
        )
    if status_code >= 500:
        return ServerError(
            message or "Server error", status_code=status_code, detail=message
        )
    return MarketplaceValidationError(
        message or "Request rejected", status_code=status_code, detail=message
    )


__all__ = [
    "ActivationInFlight",
    "CategoryUnavailable",
    "Forbidden",
    "MarketplaceError",
    "MarketplaceValidationError",
    "NotFoundOrUnreachable",
    "ServerError",
    "Unauthorized",
    "classify_response",
]
