"""Indonesian (id-ID) display formatting for money and dates."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional


MONTHS_ID = (
    'Januari', 'Februari', 'Maret', 'April', 'Mei', 'Juni',
    'Juli', 'Agustus', 'September', 'Oktober', 'November', 'Desember',
)


def _to_decimal(value: Any) -> Decimal:
    if value in (None, ''):
        return Decimal(0)
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)


def format_currency(amount: Any) -> str:
    """Format an amount as IDR with no fraction digits, e.g. ``Rp25.000.000``."""

    value = _to_decimal(amount).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    sign = '-' if value < 0 else ''
    digits = f'{abs(int(value)):,}'.replace(',', '.')
    return f'{sign}Rp{digits}'


def format_discount(discount_type: str, value: Any) -> str:
    if discount_type == 'percentage':
        number = _to_decimal(value).normalize()
        text = format(number, 'f')
        return f'{text}%'
    return format_currency(value)


def _coerce_date(value: Any) -> Optional[date]:
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00')).date()
    except ValueError:
        return None


def format_date(value: Any, long: bool = False) -> str:
    """``dd/mm/yyyy`` by default, ``d Bulan yyyy`` when ``long`` is set."""

    parsed = _coerce_date(value)
    if parsed is None:
        return '-'
    if long:
        return f'{parsed.day} {MONTHS_ID[parsed.month - 1]} {parsed.year}'
    return f'{parsed.day}/{parsed.month}/{parsed.year}'
