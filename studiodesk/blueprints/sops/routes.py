from __future__ import annotations

from datetime import datetime

from flask import abort, request

from studiodesk.domain.enums import View
from studiodesk.domain.formatting import format_date
from studiodesk.forms import SOPForm
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
from studiodesk.services.table_service import TableServiceError, sops_service
from . import sops_bp


def _store(autoload: bool = True) -> EntityStore:
    return EntityStore(sops_service, flash_notifier, 'SOP', autoload=autoload)


def _serialize(sop) -> dict:
    data = sop.to_dict()
    data['last_updated_display'] = format_date(sop.last_updated)
    return data


def _fields(form: SOPForm) -> dict:
    return {
        'title': form.title.data.strip(),
        'category': form.category.data.strip(),
        'content': form.content.data,
        'last_updated': datetime.utcnow(),
    }


@sops_bp.route('/', methods=['GET'])
@view_required(View.SOP)
def index():
    store = _store()
    items = filter_items(store.items, request.args.get('q', ''), ('title', 'content'))
    category = request.args.get('category') or 'ALL'
    if category != 'ALL':
        items = [sop for sop in items if sop.category == category]

    latest = max((sop.last_updated for sop in store.items if sop.last_updated), default=None)
    return json_page({
        'items': [_serialize(sop) for sop in items],
        'stats': {
            'total': len(store.items),
            'categories': sorted({sop.category for sop in store.items if sop.category}),
            'last_updated': latest.isoformat() if latest else None,
            'last_updated_display': format_date(latest),
        },
        'error': store.error,
    }, 500 if store.error else 200)


@sops_bp.route('/<sop_id>', methods=['GET'])
@view_required(View.SOP)
def detail(sop_id):
    sop = sops_service.get_by_id(sop_id)
    if sop is None:
        abort(404)
    return json_page({'item': _serialize(sop)})


@sops_bp.route('/', methods=['POST'])
@view_required(View.SOP)
def create():
    form = bind_form(SOPForm)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        sop = store.create(_fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(sop)}, 201)


@sops_bp.route('/<sop_id>', methods=['POST'])
@view_required(View.SOP)
def edit(sop_id):
    sop = sops_service.get_by_id(sop_id)
    if sop is None:
        abort(404)
    form = bind_form(SOPForm, obj=sop)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        sop = store.update(sop_id, _fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(sop)})


@sops_bp.route('/<sop_id>/delete', methods=['POST'])
@view_required(View.SOP)
def delete(sop_id):
    store = _store(autoload=False)
    try:
        store.delete(sop_id)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'deleted': sop_id})
