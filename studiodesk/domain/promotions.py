from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from studiodesk.domain.enums import DiscountType


class PromoCodeRejected(ValueError):
    """The code exists but cannot be applied to this order."""


@dataclass(frozen=True)
class DiscountQuote:
    code: str
    discount: Decimal
    total_before: Decimal
    total_after: Decimal


def _dec(value: Any) -> Decimal:
    return Decimal(str(value or 0))


def _as_date(value: Any) -> Optional[date]:
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def quote_discount(promo: Any, order_amount: Any, today: Optional[date] = None) -> DiscountQuote:
    """Work out what ``promo`` takes off ``order_amount``.

    ``promo`` is any object with the PromoCode attributes. A fixed discount
    never exceeds the order amount.
    """

    today = today or date.today()
    amount = _dec(order_amount)

    if not getattr(promo, 'is_active', False):
        raise PromoCodeRejected('Kode promo tidak aktif.')

    valid_from = _as_date(getattr(promo, 'valid_from', None))
    valid_until = _as_date(getattr(promo, 'valid_until', None))
    if valid_from and today < valid_from:
        raise PromoCodeRejected('Kode promo belum berlaku.')
    if valid_until and today > valid_until:
        raise PromoCodeRejected('Kode promo sudah kedaluwarsa.')

    max_usage = int(getattr(promo, 'max_usage', 0) or 0)
    usage_count = int(getattr(promo, 'usage_count', 0) or 0)
    if max_usage > 0 and usage_count >= max_usage:
        raise PromoCodeRejected('Kuota kode promo sudah habis.')

    min_order = _dec(getattr(promo, 'min_order_amount', 0))
    if min_order > 0 and amount < min_order:
        raise PromoCodeRejected('Total pesanan belum memenuhi minimum kode promo.')

    value = _dec(getattr(promo, 'discount_value', 0))
    if getattr(promo, 'discount_type', None) == DiscountType.PERCENTAGE:
        discount = (amount * value / Decimal(100)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    else:
        discount = value
    discount = max(Decimal(0), min(discount, amount))

    return DiscountQuote(
        code=str(getattr(promo, 'code', '')),
        discount=discount,
        total_before=amount,
        total_after=amount - discount,
    )
