"""
Dashboard Blueprint - the application shell.

- ``GET /app/?view=`` returns the whole workspace snapshot for one view
- notification, signature and profile endpoints used across views
"""

from flask import Blueprint, abort, current_app, flash, request
from flask_login import current_user

from studiodesk.domain.enums import View
from studiodesk.domain.permissions import access_denied_payload, allowed_views, has_permission
from studiodesk.forms import ProfileForm, SignatureForm
from studiodesk.routes.helpers import (
    bind_form,
    json_page,
    login_required_response,
    submitted_keys,
    validation_failed,
    view_required,
)
from studiodesk.services import portal_actions
from studiodesk.services.notifications import flash_notifier
from studiodesk.services.portal_actions import PortalActionError
from studiodesk.services.table_service import RecordNotFound, TableServiceError, profile_service
from studiodesk.services.workspace import load_workspace, summarize_workspace

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/', methods=['GET'])
def index():
    """Shell snapshot for the requested view."""

    if not current_user.is_authenticated:
        return login_required_response()

    view = View.resolve(request.args.get('view'))
    if not has_permission(current_user, view):
        flash_notifier(access_denied_payload(view)['message'], 'danger')
        return json_page(access_denied_payload(view), 403)

    workspace = load_workspace()
    if workspace.error:
        flash_notifier(workspace.error, 'danger')

    return json_page({
        'user': current_user.to_dict(),
        'active_view': view,
        'views': allowed_views(current_user),
        'collections': workspace.collections,
        'profile': workspace.profile,
        'summary': summarize_workspace(workspace),
        'error': workspace.error,
    })


@dashboard_bp.route('/notifications/<notification_id>/read', methods=['POST'])
@view_required(View.DASHBOARD)
def mark_notification_read(notification_id):
    try:
        notification = portal_actions.mark_notification_read(notification_id)
    except RecordNotFound:
        abort(404)
    return json_page({'item': notification.to_dict()})


@dashboard_bp.route('/notifications/read-all', methods=['POST'])
@view_required(View.DASHBOARD)
def mark_all_notifications_read():
    changed = portal_actions.mark_all_notifications_read()
    return json_page({'updated': changed})


def _sign(action, record_id, *args):
    try:
        record = action(record_id, *args)
    except (PortalActionError, RecordNotFound) as exc:
        flash(str(exc), 'danger')
        return json_page({'ok': False, 'error': str(exc)}, 404)
    flash('Tanda tangan berhasil disimpan', 'success')
    return json_page({'item': record.to_dict()})


@dashboard_bp.route('/contracts/<contract_id>/sign', methods=['POST'])
@view_required(View.CONTRACTS)
def sign_contract(contract_id):
    form = bind_form(SignatureForm)
    if not form.validate():
        return validation_failed(form)
    return _sign(portal_actions.sign_contract, contract_id, form.signature.data, form.signer.data)


@dashboard_bp.route('/projects/<project_id>/invoice/sign', methods=['POST'])
@view_required(View.PROJECTS)
def sign_invoice(project_id):
    form = bind_form(SignatureForm)
    if not form.validate():
        return validation_failed(form)
    return _sign(portal_actions.sign_invoice, project_id, form.signature.data)


@dashboard_bp.route('/transactions/<transaction_id>/sign', methods=['POST'])
@view_required(View.FINANCE)
def sign_transaction(transaction_id):
    form = bind_form(SignatureForm)
    if not form.validate():
        return validation_failed(form)
    return _sign(portal_actions.sign_transaction, transaction_id, form.signature.data)


@dashboard_bp.route('/team-payment-records/<record_id>/sign', methods=['POST'])
@view_required(View.TEAM)
def sign_payment_record(record_id):
    form = bind_form(SignatureForm)
    if not form.validate():
        return validation_failed(form)
    return _sign(portal_actions.sign_payment_record, record_id, form.signature.data)


@dashboard_bp.route('/profile', methods=['GET'])
@view_required(View.SETTINGS)
def profile():
    current = profile_service.get()
    return json_page({'profile': current.to_dict() if current else None})


@dashboard_bp.route('/profile', methods=['POST'])
@view_required(View.SETTINGS)
def update_profile():
    form = bind_form(ProfileForm)
    if not form.validate():
        return validation_failed(form)

    keys = submitted_keys()
    fields = {name: value for name, value in form.data.items() if name in keys and name != 'csrf_token'}
    body = request.get_json(silent=True) if request.is_json else None
    if isinstance(body, dict) and isinstance(body.get('notification_settings'), dict):
        fields['notification_settings'] = body['notification_settings']

    try:
        updated = profile_service.upsert(fields)
    except TableServiceError as exc:
        current_app.logger.error('Profile update failed: %s', exc)
        flash(f'Error mengupdate profil: {exc}', 'danger')
        return json_page({'ok': False, 'error': str(exc)}, 409)
    flash('Profil berhasil diupdate', 'success')
    return json_page({'profile': updated.to_dict()})
