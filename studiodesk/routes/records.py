"""
Records Blueprint - generic JSON CRUD for the tables without a dedicated page.

Each table is guarded by the dashboard view that owns it.
"""

from flask import Blueprint, abort, request
from werkzeug.security import generate_password_hash

from studiodesk.domain.enums import View
from studiodesk.routes.helpers import access_check, json_page, store_failure
from studiodesk.services.entity_store import EntityStore
from studiodesk.services.notifications import flash_notifier
from studiodesk.services.table_service import SERVICES, TableServiceError

records_bp = Blueprint('records', __name__)


# table -> (owning view, label used in notifications)
RECORD_TABLES = {
    'clients': (View.CLIENTS, 'Klien'),
    'projects': (View.PROJECTS, 'Proyek'),
    'leads': (View.PROSPEK, 'Prospek'),
    'transactions': (View.FINANCE, 'Transaksi'),
    'financial_pockets': (View.FINANCE, 'Kantong'),
    'cards': (View.FINANCE, 'Kartu'),
    'team_project_payments': (View.TEAM, 'Pembayaran Tim'),
    'team_payment_records': (View.TEAM, 'Slip Pembayaran'),
    'reward_ledger_entries': (View.TEAM, 'Catatan Hadiah'),
    'add_ons': (View.PACKAGES, 'Add-On'),
    'contracts': (View.CONTRACTS, 'Kontrak'),
    'client_feedback': (View.CLIENT_REPORTS, 'Feedback'),
    'social_media_posts': (View.SOCIAL_MEDIA_PLANNER, 'Postingan'),
    'calendar_events': (View.CALENDAR, 'Acara'),
    'notifications': (View.DASHBOARD, 'Notifikasi'),
    'users': (View.SETTINGS, 'Pengguna'),
}


def _resolve(table):
    """Service and store for ``table`` after the access check, or an error response."""
    entry = RECORD_TABLES.get(table)
    if entry is None:
        abort(404)
    view, label = entry
    denied = access_check(view)
    if denied is not None:
        return None, denied
    return EntityStore(SERVICES[table], flash_notifier, label, autoload=False), None


def _payload():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        abort(400)
    return body


def _prepare(table, fields):
    fields = dict(fields)
    if table == 'users':
        # hashes are only ever derived from a submitted password
        fields.pop('password_hash', None)
        password = fields.pop('password', None)
        if password:
            fields['password_hash'] = generate_password_hash(password)
    return fields


@records_bp.route('/<table>/', methods=['GET'])
def index(table):
    store, denied = _resolve(table)
    if denied is not None:
        return denied
    store.refresh()
    return json_page({
        'table': table,
        'items': [record.to_dict() for record in store.items],
        'error': store.error,
    }, 500 if store.error else 200)


@records_bp.route('/<table>/<record_id>', methods=['GET'])
def detail(table, record_id):
    store, denied = _resolve(table)
    if denied is not None:
        return denied
    record = store.service.get_by_id(record_id)
    if record is None:
        abort(404)
    return json_page({'table': table, 'item': record.to_dict()})


@records_bp.route('/<table>/', methods=['POST'])
def create(table):
    store, denied = _resolve(table)
    if denied is not None:
        return denied
    try:
        record = store.create(_prepare(table, _payload()))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'table': table, 'item': record.to_dict()}, 201)


@records_bp.route('/<table>/<record_id>', methods=['POST'])
def update(table, record_id):
    store, denied = _resolve(table)
    if denied is not None:
        return denied
    try:
        record = store.update(record_id, _prepare(table, _payload()))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'table': table, 'item': record.to_dict()})


@records_bp.route('/<table>/<record_id>/delete', methods=['POST'])
def delete(table, record_id):
    store, denied = _resolve(table)
    if denied is not None:
        return denied
    try:
        store.delete(record_id)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'table': table, 'deleted': record_id})
