"""Logging filters that keep forwarded marketplace credentials out of logs."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Bearer\s+[\w-]+\.[\w-]+\.[\w-]+|Authorization: Bearer\s+[\w\.-]+|"
    r"(?:access_token|token|password)\"\s*:\s*\"[^\"]+\")",
    re.IGNORECASE,
)
_MARKER = "**REDACTED**"


def _scrub(value: object) -> object:
    if isinstance(value, str):
        return _SENSITIVE_PATTERN.sub(_MARKER, value)
    return value


class SensitiveFilter(logging.Filter):
    """Redact bearer tokens in the message and in its %-style arguments.

    Marketplace errors are logged through arguments (``"%s", exc``), so the
    arguments are rendered and scrubbed as well.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = _scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                _scrub(str(arg)) if isinstance(arg, BaseException) else _scrub(arg)
                for arg in record.args
            )
        elif isinstance(record.args, dict):
            record.args = {key: _scrub(value) for key, value in record.args.items()}
        return True


__all__ = ["SensitiveFilter"]
