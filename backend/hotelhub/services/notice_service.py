"""User-facing notices produced by service operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hotelhub.core.errors import (
    Forbidden,
    MarketplaceError,
    NotFoundOrUnreachable,
    ServerError,
)
from hotelhub.schemas.notice import NoticeLevel, NoticeRead

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Notice:
    """Transient message shown to the user after an action."""

    level: NoticeLevel
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(NoticeLevel.SUCCESS, message)

    @classmethod
    def info(cls, message: str) -> "Notice":
        return cls(NoticeLevel.INFO, message)

    @classmethod
    def warning(cls, message: str) -> "Notice":
        return cls(NoticeLevel.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(NoticeLevel.ERROR, message)

    def to_read(self) -> NoticeRead:
        return NoticeRead(level=self.level, message=self.message)


def notice_for_error(exc: MarketplaceError, operation: str = "complete the request") -> Notice | None:
    """Translate a marketplace failure into a notice, or ``None`` when suppressed."""

    if exc.suppress_notice:
        logger.debug("Notice suppressed for %s", exc.message)
        return None
    if isinstance(exc, NotFoundOrUnreachable) and exc.network:
        return Notice.error(exc.message)
    if isinstance(exc, Forbidden):
        return Notice.error(
            exc.detail
            or "Access denied. You do not have permission to perform this action."
        )
    if isinstance(exc, NotFoundOrUnreachable):
        return Notice.error(exc.detail or "The requested resource was not found.")
    if isinstance(exc, ServerError):
        return Notice.error("Server error. Please try again later.")
    return Notice.error(exc.detail or f"Failed to {operation}. Please try again.")


__all__ = ["Notice", "notice_for_error"]
