from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from flask import abort, request

from studiodesk.domain.enums import View
from studiodesk.domain.formatting import format_currency, format_date, format_discount
from studiodesk.forms import PromoCodeForm
from studiodesk.routes.helpers import (
    bind_form,
    filter_items,
    json_page,
    store_failure,
    validation_failed,
    view_required,
)
from studiodesk.services.entity_store import EntityStore
from studiodesk.services.notifications import flash_notifier
from studiodesk.services.table_service import TableServiceError, promo_codes_service
from . import promo_codes_bp


def _store(autoload: bool = True) -> EntityStore:
    return EntityStore(promo_codes_service, flash_notifier, 'Promo Code', autoload=autoload)


def is_expired(promo, today: date | None = None) -> bool:
    today = today or date.today()
    return bool(promo.valid_until and promo.valid_until < today)


def _serialize(promo) -> dict:
    data = promo.to_dict()
    data['discount_display'] = format_discount(promo.discount_type, promo.discount_value)
    data['min_order_amount_display'] = format_currency(promo.min_order_amount)
    data['usage_display'] = f'{promo.usage_count or 0} / {promo.max_usage or "Tanpa batas"}'
    data['valid_until_display'] = format_date(promo.valid_until)
    data['is_expired'] = is_expired(promo)
    return data


def _fields(form: PromoCodeForm) -> dict:
    return {
        'code': form.code.data.strip().upper(),
        'description': (form.description.data or '').strip(),
        'discount_type': form.discount_type.data,
        'discount_value': form.discount_value.data,
        'min_order_amount': form.min_order_amount.data or Decimal(0),
        'max_usage': form.max_usage.data or 0,
        'valid_from': form.valid_from.data,
        'valid_until': form.valid_until.data,
        'is_active': bool(form.is_active.data),
    }


@promo_codes_bp.route('/', methods=['GET'])
@view_required(View.PROMO_CODES)
def index():
    store = _store()
    items = filter_items(store.items, request.args.get('q', ''), ('code', 'description'))
    active = [promo for promo in store.items if promo.is_active and not is_expired(promo)]
    return json_page({
        'items': [_serialize(promo) for promo in items],
        'stats': {
            'total': len(store.items),
            'active': len(active),
            'total_usage': sum(int(promo.usage_count or 0) for promo in store.items),
        },
        'error': store.error,
    }, 500 if store.error else 200)


@promo_codes_bp.route('/<promo_id>', methods=['GET'])
@view_required(View.PROMO_CODES)
def detail(promo_id):
    promo = promo_codes_service.get_by_id(promo_id)
    if promo is None:
        abort(404)
    return json_page({'item': _serialize(promo)})


@promo_codes_bp.route('/', methods=['POST'])
@view_required(View.PROMO_CODES)
def create():
    form = bind_form(PromoCodeForm)
    if not form.validate():
        return validation_failed(form)

    fields = _fields(form)
    fields['usage_count'] = 0
    fields['created_at'] = datetime.utcnow()

    store = _store(autoload=False)
    try:
        promo = store.create(fields)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(promo)}, 201)


@promo_codes_bp.route('/<promo_id>', methods=['POST'])
@view_required(View.PROMO_CODES)
def edit(promo_id):
    promo = promo_codes_service.get_by_id(promo_id)
    if promo is None:
        abort(404)
    form = bind_form(PromoCodeForm, obj=promo)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        promo = store.update(promo_id, _fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(promo)})


@promo_codes_bp.route('/<promo_id>/delete', methods=['POST'])
@view_required(View.PROMO_CODES)
def delete(promo_id):
    store = _store(autoload=False)
    try:
        store.delete(promo_id)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'deleted': promo_id})
