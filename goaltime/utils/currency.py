from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel


class CurrencyInfo(BaseModel):
    code: str
    name: str
    symbol: str
    decimals: int = 2


# Display metadata only. No exchange rates: amounts are never converted.
CURRENCIES: List[CurrencyInfo] = [
    CurrencyInfo(code="USD", name="US Dollar", symbol="$"),
    CurrencyInfo(code="EUR", name="Euro", symbol="€"),
    CurrencyInfo(code="GBP", name="British Pound", symbol="£"),
    CurrencyInfo(code="JPY", name="Japanese Yen", symbol="¥", decimals=0),
    CurrencyInfo(code="CHF", name="Swiss Franc", symbol="CHF"),
    CurrencyInfo(code="CAD", name="Canadian Dollar", symbol="C$"),
    CurrencyInfo(code="AUD", name="Australian Dollar", symbol="A$"),
    CurrencyInfo(code="CNY", name="Chinese Yuan", symbol="¥"),
    CurrencyInfo(code="INR", name="Indian Rupee", symbol="₹"),
    CurrencyInfo(code="KRW", name="South Korean Won", symbol="₩", decimals=0),
    CurrencyInfo(code="BRL", name="Brazilian Real", symbol="R$"),
    CurrencyInfo(code="MXN", name="Mexican Peso", symbol="MX$"),
    CurrencyInfo(code="SGD", name="Singapore Dollar", symbol="S$"),
    CurrencyInfo(code="HKD", name="Hong Kong Dollar", symbol="HK$"),
    CurrencyInfo(code="NOK", name="Norwegian Krone", symbol="kr"),
    CurrencyInfo(code="SEK", name="Swedish Krona", symbol="kr"),
    CurrencyInfo(code="DKK", name="Danish Krone", symbol="kr"),
    CurrencyInfo(code="NZD", name="New Zealand Dollar", symbol="NZ$"),
    CurrencyInfo(code="ZAR", name="South African Rand", symbol="R"),
    CurrencyInfo(code="TRY", name="Turkish Lira", symbol="₺"),
    CurrencyInfo(code="PLN", name="Polish Zloty", symbol="zł"),
    CurrencyInfo(code="THB", name="Thai Baht", symbol="฿"),
    CurrencyInfo(code="IDR", name="Indonesian Rupiah", symbol="Rp", decimals=0),
    CurrencyInfo(code="PHP", name="Philippine Peso", symbol="₱"),
    CurrencyInfo(code="ILS", name="Israeli Shekel", symbol="₪"),
    CurrencyInfo(code="AED", name="UAE Dirham", symbol="د.إ"),
    CurrencyInfo(code="TWD", name="Taiwan Dollar", symbol="NT$"),
    CurrencyInfo(code="NGN", name="Nigerian Naira", symbol="₦"),
    CurrencyInfo(code="VND", name="Vietnamese Dong", symbol="₫", decimals=0),
    CurrencyInfo(code="UAH", name="Ukrainian Hryvnia", symbol="₴"),
]

_BY_CODE: Dict[str, CurrencyInfo] = {c.code: c for c in CURRENCIES}
DEFAULT_CURRENCY = CURRENCIES[0]


def currency_for(code: Optional[str]) -> Optional[CurrencyInfo]:
    return _BY_CODE.get((code or "").strip().upper())


def symbol_for(code: Optional[str]) -> str:
    """Symbol for a known code; unknown codes fall back to the code itself plus a space."""
    info = currency_for(code)
    if info is not None:
        return info.symbol
    return f"{(code or '').strip().upper()} " if code else DEFAULT_CURRENCY.symbol


def format_currency(value: float, currency: str = "USD") -> str:
    """Whole-unit amount with thousands separators, e.g. '$12,345'."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol_for(currency)}{abs(value):,.0f}"


def format_compact(value: float, currency: str = "USD") -> str:
    """
    Compact notation for large amounts:
    - >= 1M -> '$1.2M'
    - >= 1K -> '$607K'
    - otherwise falls back to format_currency
    """
    sym = symbol_for(currency)
    if value >= 1_000_000:
        return f"{sym}{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{sym}{value / 1_000:.0f}K"
    return format_currency(value, currency)
