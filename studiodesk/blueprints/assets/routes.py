from __future__ import annotations

from decimal import Decimal

from flask import abort, request

from studiodesk.domain.enums import AssetStatus, View
from studiodesk.domain.formatting import format_currency, format_date
from studiodesk.forms import AssetForm
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
from studiodesk.services.table_service import TableServiceError, assets_service
from . import assets_bp


def _store(autoload: bool = True) -> EntityStore:
    return EntityStore(assets_service, flash_notifier, 'Aset', autoload=autoload)


def _serialize(asset) -> dict:
    data = asset.to_dict()
    data['purchase_price_display'] = format_currency(asset.purchase_price)
    data['purchase_date_display'] = format_date(asset.purchase_date)
    data['status_label'] = AssetStatus.LABELS.get(asset.status, asset.status)
    return data


def _fields(form: AssetForm) -> dict:
    return {
        'name': form.name.data.strip(),
        'category': form.category.data.strip(),
        'purchase_date': form.purchase_date.data,
        'purchase_price': form.purchase_price.data,
        'serial_number': (form.serial_number.data or '').strip(),
        'status': form.status.data,
        'notes': form.notes.data or '',
    }


def asset_stats(assets) -> dict:
    total_value = sum((Decimal(str(a.purchase_price or 0)) for a in assets), Decimal(0))
    by_status = {status: 0 for status in AssetStatus.ALL}
    for asset in assets:
        by_status[asset.status] = by_status.get(asset.status, 0) + 1
    return {
        'total': len(assets),
        'total_value': float(total_value),
        'total_value_display': format_currency(total_value),
        'by_status': by_status,
        'categories': sorted({a.category for a in assets if a.category}),
    }


@assets_bp.route('/', methods=['GET'])
@view_required(View.ASSETS)
def index():
    store = _store()
    items = filter_items(store.items, request.args.get('q', ''), ('name', 'category', 'serial_number'))
    status = (request.args.get('status') or 'ALL').upper()
    if status != 'ALL':
        items = [asset for asset in items if asset.status == status]
    return json_page({
        'items': [_serialize(asset) for asset in items],
        'stats': asset_stats(store.items),
        'error': store.error,
    }, 500 if store.error else 200)


@assets_bp.route('/<asset_id>', methods=['GET'])
@view_required(View.ASSETS)
def detail(asset_id):
    asset = assets_service.get_by_id(asset_id)
    if asset is None:
        abort(404)
    return json_page({'item': _serialize(asset)})


@assets_bp.route('/', methods=['POST'])
@view_required(View.ASSETS)
def create():
    form = bind_form(AssetForm)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        asset = store.create(_fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(asset)}, 201)


@assets_bp.route('/<asset_id>', methods=['POST'])
@view_required(View.ASSETS)
def edit(asset_id):
    asset = assets_service.get_by_id(asset_id)
    if asset is None:
        abort(404)
    form = bind_form(AssetForm, obj=asset)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        asset = store.update(asset_id, _fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(asset)})


@assets_bp.route('/<asset_id>/delete', methods=['POST'])
@view_required(View.ASSETS)
def delete(asset_id):
    store = _store(autoload=False)
    try:
        store.delete(asset_id)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'deleted': asset_id})
