"""Currency formatting for guest-facing prices."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from hotelhub.core.config import get_settings

MONEY_PLACES = Decimal("0.01")
_ARABIC_SYMBOLS = {"EGP": "ج.م"}


def to_money(value: Decimal | float | int | str) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def currency_symbol(language: str | None = None, currency: str | None = None) -> str:
    settings = get_settings()
    currency = currency or settings.currency_code
    language = language or settings.default_language
    if language == "ar":
        return _ARABIC_SYMBOLS.get(currency, currency)
    return currency


def format_price(
    price: Decimal | float | int | str | None,
    language: str | None = None,
    *,
    currency: str | None = None,
) -> str:
    """Format a price such as ``EGP 1,234.50`` or ``1,234.50 ج.م``."""

    settings = get_settings()
    language = language or settings.default_language
    if price is None:
        return "غير محدد" if language == "ar" else "Not specified"
    try:
        amount = to_money(price)
    except (InvalidOperation, ValueError):
        return "غير محدد" if language == "ar" else "Not specified"
    symbol = currency_symbol(language, currency)
    if language == "ar":
        return f"{amount:,.2f} {symbol}"
    return f"{symbol} {amount:,.2f}"


__all__ = ["MONEY_PLACES", "currency_symbol", "format_price", "to_money"]
