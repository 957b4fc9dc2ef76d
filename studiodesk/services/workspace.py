"""Dashboard shell state: every collection, fetched in one parallel batch."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Optional

from flask import current_app

from studiodesk.domain.enums import TransactionType
from studiodesk.domain.formatting import format_currency
from studiodesk.extensions import db
from studiodesk.services import table_service as ts


# Collection key -> service, in the order the shell exposes them.
COLLECTIONS: dict[str, ts.TableService] = {
    'users': ts.users_service,
    'clients': ts.clients_service,
    'projects': ts.projects_service,
    'team_members': ts.team_members_service,
    'transactions': ts.transactions_service,
    'packages': ts.packages_service,
    'add_ons': ts.add_ons_service,
    'pockets': ts.pockets_service,
    'team_project_payments': ts.team_project_payments_service,
    'team_payment_records': ts.team_payment_records_service,
    'leads': ts.leads_service,
    'reward_ledger_entries': ts.reward_ledger_entries_service,
    'cards': ts.cards_service,
    'assets': ts.assets_service,
    'client_feedback': ts.client_feedback_service,
    'contracts': ts.contracts_service,
    'notifications': ts.notifications_service,
    'social_media_posts': ts.social_media_posts_service,
    'promo_codes': ts.promo_codes_service,
    'sops': ts.sops_service,
    'calendar_events': ts.calendar_events_service,
}

LOAD_ERROR_MESSAGE = 'Error loading data from database'


@dataclass
class Workspace:
    collections: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    profile: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    def get(self, name: str) -> list[dict[str, Any]]:
        return self.collections.get(name, [])


def _empty_collections() -> dict[str, list[dict[str, Any]]]:
    return {name: [] for name in COLLECTIONS}


def _run_in_context(app, fn: Callable[[], Any]) -> Any:
    with app.app_context():
        try:
            return fn()
        finally:
            try:
                db.session.remove()
            except Exception as exc:
                app.logger.warning('Workspace worker session remove failed: %s', exc)


def _fetch_collection(service: ts.TableService) -> Callable[[], list[dict[str, Any]]]:
    def _job() -> list[dict[str, Any]]:
        return [record.to_dict() for record in service.get_all()]
    return _job


def _fetch_profile() -> Optional[dict[str, Any]]:
    profile = ts.profile_service.get()
    return profile.to_dict() if profile is not None else None


def load_workspace(max_workers: Optional[int] = None) -> Workspace:
    """Fetch every collection and the profile concurrently.

    Each worker runs in its own app context (and therefore its own session).
    Any failure leaves the whole workspace empty with ``error`` set.
    """

    app = current_app._get_current_object()
    workers = max_workers or int(app.config.get('WORKSPACE_LOAD_WORKERS', 8))
    workers = max(1, workers)

    jobs: dict[str, Callable[[], Any]] = {
        name: _fetch_collection(service) for name, service in COLLECTIONS.items()
    }
    jobs['__profile__'] = _fetch_profile

    try:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='workspace') as executor:
            futures = {name: executor.submit(_run_in_context, app, job) for name, job in jobs.items()}
            results = {name: future.result() for name, future in futures.items()}
    except Exception as exc:
        app.logger.exception('Workspace load failed: %s', exc)
        return Workspace(collections=_empty_collections(), profile=None, error=LOAD_ERROR_MESSAGE)

    profile = results.pop('__profile__')
    return Workspace(collections={name: results[name] or [] for name in COLLECTIONS}, profile=profile)


def _sum(rows: list[dict[str, Any]], key: str, predicate: Callable[[dict[str, Any]], bool] = lambda _row: True) -> Decimal:
    total = Decimal(0)
    for row in rows:
        if predicate(row):
            total += Decimal(str(row.get(key) or 0))
    return total


def summarize_workspace(workspace: Workspace) -> dict[str, Any]:
    """Headline numbers for the dashboard home view."""

    transactions = workspace.get('transactions')
    income = _sum(transactions, 'amount', lambda row: row.get('type') == TransactionType.INCOME)
    expense = _sum(transactions, 'amount', lambda row: row.get('type') == TransactionType.EXPENSE)
    unpaid_team = _sum(workspace.get('team_project_payments'), 'fee', lambda row: row.get('status') == 'Unpaid')
    projects = workspace.get('projects')

    return {
        'counts': {name: len(rows) for name, rows in workspace.collections.items()},
        'active_projects': sum(1 for row in projects if row.get('status') not in ('Selesai', 'Dibatalkan')),
        'total_income': float(income),
        'total_expense': float(expense),
        'balance': float(income - expense),
        'total_income_display': format_currency(income),
        'total_expense_display': format_currency(expense),
        'balance_display': format_currency(income - expense),
        'unpaid_team_fees_display': format_currency(unpaid_team),
        'unread_notifications': sum(1 for row in workspace.get('notifications') if not row.get('is_read')),
    }
