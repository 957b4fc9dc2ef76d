"""Kode Promo: discount codes redeemable on public bookings."""

from flask import Blueprint

promo_codes_bp = Blueprint('promo_codes', __name__)

from . import routes  # noqa: E402,F401
