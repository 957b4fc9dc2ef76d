"""Writes coming from the client and freelancer portals plus signatures.

JSON columns are replaced with fresh lists/dicts on every write so the ORM
sees the change.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import current_app

from studiodesk.domain.enums import ConfirmationStage, RevisionStatus, Signer, View
from studiodesk.services import table_service as ts
from studiodesk.services.notifications import push_notification


class PortalActionError(ValueError):
    pass


STAGE_FLAGS = {
    ConfirmationStage.EDITING: 'is_editing_confirmed_by_client',
    ConfirmationStage.PRINTING: 'is_printing_confirmed_by_client',
    ConfirmationStage.DELIVERY: 'is_delivery_confirmed_by_client',
}


def _require(service: ts.TableService, record_id: str, label: str):
    record = service.get_by_id(record_id)
    if record is None:
        raise PortalActionError(f'{label} tidak ditemukan.')
    return record


def find_by_portal_id(service: ts.TableService, access_id: str):
    for record in service.get_all():
        if record.portal_access_id and record.portal_access_id == access_id:
            return record
    return None


def update_revision(project_id: str, revision_id: str, *, freelancer_notes: str, drive_link: str,
                    status: str):
    if status not in RevisionStatus.ALL:
        raise PortalActionError(f'Status revisi tidak dikenal: {status}')

    project = _require(ts.projects_service, project_id, 'Proyek')
    revisions = [dict(item) for item in (project.revisions or [])]
    for revision in revisions:
        if revision.get('id') == revision_id:
            revision['freelancer_notes'] = freelancer_notes
            revision['drive_link'] = drive_link
            revision['status'] = status
            if status == RevisionStatus.COMPLETED:
                revision['completed_date'] = date.today().isoformat()
            break
    else:
        raise PortalActionError('Revisi tidak ditemukan.')

    return ts.projects_service.update(project.id, {'revisions': revisions})


def confirm_stage(project_id: str, stage: str):
    flag = STAGE_FLAGS.get(stage)
    if flag is None:
        raise PortalActionError(f'Tahap tidak dikenal: {stage}')
    project = _require(ts.projects_service, project_id, 'Proyek')
    return ts.projects_service.update(project.id, {flag: True})


def confirm_sub_status(project_id: str, sub_status: str, note: str = ''):
    """Client ticks off a sub-status; a note is kept and raises a notification."""

    project = _require(ts.projects_service, project_id, 'Proyek')
    confirmed = list(project.confirmed_sub_statuses or [])
    if sub_status not in confirmed:
        confirmed.append(sub_status)
    notes = dict(project.client_sub_status_notes or {})
    note = (note or '').strip()
    if note:
        notes[sub_status] = note

    updated = ts.projects_service.update(project.id, {
        'confirmed_sub_statuses': confirmed,
        'client_sub_status_notes': notes,
    })

    if note:
        push_notification(
            'Catatan Klien Baru',
            f'Klien {project.client_name} memberikan catatan pada "{sub_status}" di proyek "{project.project_name}".',
            icon='comment',
            link_view=View.PROJECTS,
            link_action={'type': 'VIEW_PROJECT_DETAILS', 'id': project.id},
        )
    return updated


def sign_contract(contract_id: str, signature: str, signer: str):
    if signer not in Signer.ALL:
        raise PortalActionError(f'Penanda tangan tidak dikenal: {signer}')
    if not (signature or '').strip():
        raise PortalActionError('Tanda tangan kosong.')
    contract = _require(ts.contracts_service, contract_id, 'Kontrak')
    column = 'vendor_signature' if signer == Signer.VENDOR else 'client_signature'
    current_app.logger.info('Contract %s signed by %s', contract.id, signer)
    return ts.contracts_service.update(contract.id, {column: signature})


def _sign(service: ts.TableService, record_id: str, column: str, signature: str, label: str):
    if not (signature or '').strip():
        raise PortalActionError('Tanda tangan kosong.')
    record = _require(service, record_id, label)
    return service.update(record.id, {column: signature})


def sign_invoice(project_id: str, signature: str):
    return _sign(ts.projects_service, project_id, 'invoice_signature', signature, 'Proyek')


def sign_transaction(transaction_id: str, signature: str):
    return _sign(ts.transactions_service, transaction_id, 'vendor_signature', signature, 'Transaksi')


def sign_payment_record(record_id: str, signature: str):
    return _sign(ts.team_payment_records_service, record_id, 'vendor_signature', signature, 'Slip pembayaran')


def mark_notification_read(notification_id: str):
    return ts.notifications_service.update(notification_id, {'is_read': True})


def mark_all_notifications_read() -> int:
    changed = 0
    for notification in ts.notifications_service.get_all():
        if not notification.is_read:
            ts.notifications_service.update(notification.id, {'is_read': True})
            changed += 1
    return changed


def _dicts(records) -> list[dict[str, Any]]:
    return [record.to_dict() for record in records]


def client_portal(access_id: str) -> Optional[dict[str, Any]]:
    client = find_by_portal_id(ts.clients_service, access_id)
    if client is None:
        return None
    projects = [p for p in ts.projects_service.get_all() if p.client_id == client.id]
    project_ids = {p.id for p in projects}
    return {
        'client': client.to_dict(),
        'projects': _dicts(projects),
        'contracts': _dicts(c for c in ts.contracts_service.get_all() if c.client_id == client.id),
        'transactions': _dicts(t for t in ts.transactions_service.get_all() if t.project_id in project_ids),
        'packages': _dicts(ts.packages_service.get_all()),
        'add_ons': _dicts(ts.add_ons_service.get_all()),
    }


def freelancer_portal(access_id: str) -> Optional[dict[str, Any]]:
    member = find_by_portal_id(ts.team_members_service, access_id)
    if member is None:
        return None
    payments = [p for p in ts.team_project_payments_service.get_all() if p.team_member_id == member.id]
    project_ids = {p.project_id for p in payments}
    projects = [p for p in ts.projects_service.get_all() if p.id in project_ids]
    revisions = [
        {**revision, 'project_id': project.id, 'project_name': project.project_name}
        for project in ts.projects_service.get_all()
        for revision in (project.revisions or [])
        if revision.get('team_member_id') == member.id
    ]
    return {
        'member': member.to_dict(),
        'projects': _dicts(projects),
        'payments': _dicts(payments),
        'payment_records': _dicts(r for r in ts.team_payment_records_service.get_all() if r.team_member_id == member.id),
        'reward_ledger': _dicts(e for e in ts.reward_ledger_entries_service.get_all() if e.team_member_id == member.id),
        'revisions': revisions,
        'sops': _dicts(ts.sops_service.get_all()),
    }
