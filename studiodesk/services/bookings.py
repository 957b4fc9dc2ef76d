"""Public intake: bookings, leads, suggestions and client feedback.

A booking touches several tables (client, project, transaction, promo code,
notification). Each write is its own call and commit; a failure part-way
leaves the earlier rows in place.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

import sqlalchemy as sa
from flask import current_app
from slugify import slugify

from studiodesk.domain.enums import LeadStatus, PaymentStatus, TransactionType, View
from studiodesk.domain.formatting import format_currency
from studiodesk.domain.promotions import DiscountQuote, PromoCodeRejected, quote_discount
from studiodesk.extensions import db
from studiodesk.models import PromoCode
from studiodesk.services import table_service as ts
from studiodesk.services.notifications import push_notification, send_owner_alert


class BookingError(ValueError):
    pass


@dataclass
class BookingRequest:
    client_name: str
    email: str
    phone: str
    package_id: str
    project_type: str = ''
    location: str = ''
    event_date: Optional[date] = None
    instagram: str = ''
    add_on_ids: tuple[str, ...] = ()
    promo_code: str = ''
    transfer_amount: Decimal = Decimal(0)
    notes: str = ''


@dataclass
class BookingResult:
    client: Any
    project: Any
    transaction: Any
    quote: Optional[DiscountQuote]


def new_portal_access_id(name: str) -> str:
    base = slugify(name or '') or 'klien'
    return f'{base}-{secrets.token_hex(4)}'


def find_promo_code(code: str) -> Optional[PromoCode]:
    normalized = (code or '').strip().upper()
    if not normalized:
        return None
    return db.session.execute(
        sa.select(PromoCode).where(sa.func.upper(PromoCode.code) == normalized)
    ).scalars().first()


def _add_on_total(add_on_ids: Iterable[str]) -> tuple[Decimal, list[str]]:
    total = Decimal(0)
    kept: list[str] = []
    for add_on_id in add_on_ids:
        add_on = ts.add_ons_service.get_by_id(add_on_id)
        if add_on is None:
            continue
        total += Decimal(str(add_on.price or 0))
        kept.append(add_on.id)
    return total, kept


def _payment_status(total: Decimal, paid: Decimal) -> str:
    if paid <= 0:
        return PaymentStatus.UNPAID
    if paid >= total:
        return PaymentStatus.PAID
    return PaymentStatus.DOWN_PAYMENT


def create_booking(req: BookingRequest) -> BookingResult:
    package = ts.packages_service.get_by_id(req.package_id)
    if package is None:
        raise BookingError('Paket tidak ditemukan.')

    add_on_total, add_on_ids = _add_on_total(req.add_on_ids)
    subtotal = Decimal(str(package.price or 0)) + add_on_total

    promo = None
    quote = None
    if req.promo_code.strip():
        promo = find_promo_code(req.promo_code)
        if promo is None:
            raise BookingError('Kode promo tidak ditemukan.')
        try:
            quote = quote_discount(promo, subtotal)
        except PromoCodeRejected as exc:
            raise BookingError(str(exc)) from exc

    total = quote.total_after if quote else subtotal
    paid = max(Decimal(0), min(Decimal(req.transfer_amount or 0), total))

    client = ts.clients_service.create({
        'name': req.client_name.strip(),
        'email': req.email.strip(),
        'phone': req.phone.strip(),
        'whatsapp': req.phone.strip(),
        'instagram': req.instagram.strip(),
        'client_type': 'Langsung',
        'status': 'Aktif',
        'portal_access_id': new_portal_access_id(req.client_name),
    })

    project = ts.projects_service.create({
        'project_name': f'{req.project_type or "Acara"} {client.name}'.strip(),
        'client_id': client.id,
        'client_name': client.name,
        'project_type': req.project_type,
        'package_id': package.id,
        'package_name': package.name,
        'add_on_ids': add_on_ids,
        'location': req.location,
        'date': req.event_date,
        'status': 'Dikonfirmasi',
        'total_cost': total,
        'amount_paid': paid,
        'payment_status': _payment_status(total, paid),
        'promo_code_id': promo.id if promo else None,
        'discount_amount': quote.discount if quote else Decimal(0),
        'notes': req.notes,
    })

    transaction = None
    if paid > 0:
        transaction = ts.transactions_service.create({
            'date': date.today(),
            'description': f'DP Proyek {project.project_name}',
            'amount': paid,
            'type': TransactionType.INCOME,
            'project_id': project.id,
            'category': 'DP Proyek',
            'method': 'Transfer Bank',
        })

    if promo is not None:
        ts.promo_codes_service.update(promo.id, {'usage_count': int(promo.usage_count or 0) + 1})

    push_notification(
        'Pemesanan Baru',
        f'Klien {client.name} memesan paket "{package.name}" ({format_currency(total)}).',
        icon='lead',
        link_view=View.PROJECTS,
        link_action={'type': 'VIEW_PROJECT_DETAILS', 'id': project.id},
    )

    send_owner_alert(
        ts.profile_service.get(),
        f'Pemesanan baru: {client.name}',
        (
            f'Klien: {client.name}\n'
            f'Email: {client.email}\n'
            f'Telepon: {client.phone}\n'
            f'Paket: {package.name}\n'
            f'Total: {format_currency(total)}\n'
            f'Dibayar: {format_currency(paid)}\n'
        ),
    )

    current_app.logger.info('Public booking stored: client=%s project=%s', client.id, project.id)
    return BookingResult(client=client, project=project, transaction=transaction, quote=quote)


def create_lead(name: str, whatsapp: str, *, location: str = '', channel: str = 'Formulir Web',
                notes: str = '', event_date: Optional[date] = None):
    lead = ts.leads_service.create({
        'name': name.strip(),
        'whatsapp': whatsapp.strip(),
        'contact_channel': channel,
        'location': location.strip(),
        'status': LeadStatus.DISCUSSION,
        'date': event_date or date.today(),
        'notes': notes.strip(),
    })
    push_notification(
        'Prospek Baru',
        f'Prospek baru dari {lead.name} melalui {channel}.',
        icon='lead',
        link_view=View.PROSPEK,
        link_action={'type': 'VIEW_LEAD', 'id': lead.id},
    )
    return lead


def create_feedback(client_name: str, rating: int, feedback: str, satisfaction: str = ''):
    if not satisfaction:
        satisfaction = 'Sangat Puas' if rating >= 5 else 'Puas' if rating >= 4 else 'Biasa Saja' if rating >= 3 else 'Tidak Puas'
    return ts.client_feedback_service.create({
        'client_name': client_name.strip(),
        'rating': rating,
        'satisfaction': satisfaction,
        'feedback': feedback.strip(),
        'date': date.today(),
    })
