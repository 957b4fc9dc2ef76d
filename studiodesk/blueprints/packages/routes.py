from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from flask import abort, request

from studiodesk.domain.enums import View
from studiodesk.domain.formatting import format_currency
from studiodesk.forms import PackageForm
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
from studiodesk.services.table_service import TableServiceError, packages_service
from . import packages_bp


def _store(autoload: bool = True) -> EntityStore:
    return EntityStore(packages_service, flash_notifier, 'Paket', autoload=autoload)


def clean_physical_items(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep items with a name and a positive price."""

    cleaned = []
    for item in items:
        name = (item.get('name') or '').strip()
        price = item.get('price')
        if not name or price is None or Decimal(str(price)) <= 0:
            continue
        cleaned.append({'name': name, 'price': float(price)})
    return cleaned


def clean_digital_items(items: Iterable[Any]) -> list[str]:
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def _serialize(package) -> dict:
    data = package.to_dict()
    data['price_display'] = format_currency(package.price)
    data['physical_items'] = [
        {**item, 'price_display': format_currency(item.get('price'))}
        for item in (package.physical_items or [])
    ]
    return data


def _fields(form: PackageForm) -> dict:
    return {
        'name': form.name.data.strip(),
        'price': form.price.data,
        'physical_items': clean_physical_items(form.physical_items.data),
        'digital_items': clean_digital_items(form.digital_items.data),
        'processing_time': (form.processing_time.data or '').strip(),
        'default_printing_cost': form.default_printing_cost.data or Decimal(0),
        'default_transport_cost': form.default_transport_cost.data or Decimal(0),
        'photographers': (form.photographers.data or '').strip(),
        'videographers': (form.videographers.data or '').strip(),
    }


@packages_bp.route('/', methods=['GET'])
@view_required(View.PACKAGES)
def index():
    store = _store()
    items = filter_items(store.items, request.args.get('q', ''), ('name',))
    return json_page({
        'items': [_serialize(package) for package in items],
        'stats': {'total': len(store.items)},
        'error': store.error,
    }, 500 if store.error else 200)


@packages_bp.route('/<package_id>', methods=['GET'])
@view_required(View.PACKAGES)
def detail(package_id):
    package = packages_service.get_by_id(package_id)
    if package is None:
        abort(404)
    return json_page({'item': _serialize(package)})


@packages_bp.route('/', methods=['POST'])
@view_required(View.PACKAGES)
def create():
    form = bind_form(PackageForm)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        package = store.create(_fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(package)}, 201)


@packages_bp.route('/<package_id>', methods=['POST'])
@view_required(View.PACKAGES)
def edit(package_id):
    package = packages_service.get_by_id(package_id)
    if package is None:
        abort(404)
    form = bind_form(PackageForm, obj=package)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        package = store.update(package_id, _fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(package)})


@packages_bp.route('/<package_id>/delete', methods=['POST'])
@view_required(View.PACKAGES)
def delete(package_id):
    store = _store(autoload=False)
    try:
        store.delete(package_id)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'deleted': package_id})
