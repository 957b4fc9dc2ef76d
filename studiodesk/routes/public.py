"""
Public Blueprint - routes reachable without logging in.

- booking, lead, suggestion and feedback forms
- freelancer revision form
- client and freelancer portals, addressed by their portal access id

Form submissions are rate limited per client IP.
"""

from decimal import Decimal

from flask import Blueprint, abort, current_app, flash, request

from studiodesk.domain.enums import Signer
from studiodesk.domain.formatting import format_currency
from studiodesk.extensions import limiter
from studiodesk.forms import (
    FeedbackForm,
    PublicBookingForm,
    PublicLeadForm,
    RevisionUpdateForm,
    SignatureForm,
    StageConfirmationForm,
    SubStatusConfirmationForm,
    SuggestionForm,
)
from studiodesk.routes.helpers import bind_form, json_page, validation_failed
from studiodesk.services import bookings, portal_actions
from studiodesk.services.portal_actions import PortalActionError
from studiodesk.services.table_service import (
    RecordNotFound,
    add_ons_service,
    clients_service,
    contracts_service,
    packages_service,
    projects_service,
)

public_bp = Blueprint('public', __name__)


def _form_rate_limit():
    return current_app.config.get('PUBLIC_FORM_RATE_LIMIT', '20 per hour')


def _rejected(exc, status=400):
    flash(str(exc), 'danger')
    return json_page({'ok': False, 'error': str(exc)}, status)


@public_bp.route('/public-booking', methods=['GET'])
def booking_catalog():
    """Packages and add-ons the booking form offers."""
    packages = []
    for package in packages_service.get_all():
        data = package.to_dict()
        data['price_display'] = format_currency(package.price)
        packages.append(data)
    return json_page({
        'packages': packages,
        'add_ons': [add_on.to_dict() for add_on in add_ons_service.get_all()],
    })


@public_bp.route('/public-booking', methods=['POST'])
@limiter.limit(_form_rate_limit, methods=['POST'])
def public_booking():
    form = bind_form(PublicBookingForm)
    if not form.validate():
        return validation_failed(form)

    req = bookings.BookingRequest(
        client_name=form.client_name.data,
        email=form.email.data,
        phone=form.phone.data,
        package_id=form.package_id.data,
        project_type=form.project_type.data or '',
        location=form.location.data or '',
        event_date=form.event_date.data,
        instagram=form.instagram.data or '',
        add_on_ids=tuple(item for item in form.add_on_ids.data if item),
        promo_code=form.promo_code.data or '',
        transfer_amount=form.transfer_amount.data or Decimal(0),
        notes=form.notes.data or '',
    )
    try:
        result = bookings.create_booking(req)
    except bookings.BookingError as exc:
        return _rejected(exc)

    flash('Terima kasih! Pemesanan Anda telah kami terima.', 'success')
    return json_page({
        'client': result.client.to_dict(),
        'project': result.project.to_dict(),
        'transaction': result.transaction.to_dict() if result.transaction else None,
        'discount': float(result.quote.discount) if result.quote else 0,
        'total_display': format_currency(result.project.total_cost),
        'portal_access_id': result.client.portal_access_id,
    }, 201)


@public_bp.route('/public-lead-form', methods=['POST'])
@limiter.limit(_form_rate_limit, methods=['POST'])
def public_lead():
    form = bind_form(PublicLeadForm)
    if not form.validate():
        return validation_failed(form)
    lead = bookings.create_lead(
        form.name.data,
        form.whatsapp.data,
        location=form.location.data or '',
        notes=form.notes.data or '',
        event_date=form.event_date.data,
    )
    flash('Terima kasih! Kami akan segera menghubungi Anda.', 'success')
    return json_page({'lead': lead.to_dict()}, 201)


@public_bp.route('/suggestion-form', methods=['POST'])
@limiter.limit(_form_rate_limit, methods=['POST'])
def suggestion():
    form = bind_form(SuggestionForm)
    if not form.validate():
        return validation_failed(form)
    lead = bookings.create_lead(
        form.name.data,
        form.whatsapp.data or '',
        channel='Formulir Saran',
        notes=form.suggestion.data,
    )
    flash('Terima kasih atas saran Anda!', 'success')
    return json_page({'lead': lead.to_dict()}, 201)


@public_bp.route('/feedback', methods=['POST'])
@limiter.limit(_form_rate_limit, methods=['POST'])
def feedback():
    form = bind_form(FeedbackForm)
    if not form.validate():
        return validation_failed(form)
    entry = bookings.create_feedback(
        form.client_name.data,
        form.rating.data,
        form.feedback.data or '',
        satisfaction=form.satisfaction.data or '',
    )
    flash('Terima kasih atas masukan Anda!', 'success')
    return json_page({'feedback': entry.to_dict()}, 201)


@public_bp.route('/revision-form', methods=['GET'])
def revision_detail():
    project = projects_service.get_by_id(request.args.get('project_id', ''))
    if project is None:
        abort(404)
    member_id = request.args.get('freelancer_id')
    revisions = [
        revision for revision in (project.revisions or [])
        if not member_id or revision.get('team_member_id') == member_id
    ]
    return json_page({
        'project': {'id': project.id, 'project_name': project.project_name},
        'revisions': revisions,
    })


@public_bp.route('/revision-form', methods=['POST'])
@limiter.limit(_form_rate_limit, methods=['POST'])
def revision_update():
    form = bind_form(RevisionUpdateForm)
    if not form.validate():
        return validation_failed(form)
    try:
        project = portal_actions.update_revision(
            form.project_id.data,
            form.revision_id.data,
            freelancer_notes=form.freelancer_notes.data or '',
            drive_link=form.drive_link.data or '',
            status=form.status.data,
        )
    except PortalActionError as exc:
        return _rejected(exc, 404)
    flash('Revisi berhasil diupdate', 'success')
    return json_page({'project': project.to_dict()})


def _portal_client(access_id):
    client = portal_actions.find_by_portal_id(clients_service, access_id)
    if client is None:
        abort(404)
    return client


def _client_project(client, project_id):
    project = projects_service.get_by_id(project_id)
    if project is None or project.client_id != client.id:
        abort(404)
    return project


@public_bp.route('/portal/<access_id>', methods=['GET'])
def client_portal(access_id):
    data = portal_actions.client_portal(access_id)
    if data is None:
        abort(404)
    return json_page(data)


@public_bp.route('/portal/<access_id>/confirm-stage', methods=['POST'])
def confirm_stage(access_id):
    client = _portal_client(access_id)
    form = bind_form(StageConfirmationForm)
    if not form.validate():
        return validation_failed(form)
    project = _client_project(client, form.project_id.data)
    project = portal_actions.confirm_stage(project.id, form.stage.data)
    flash('Konfirmasi berhasil dikirim', 'success')
    return json_page({'project': project.to_dict()})


@public_bp.route('/portal/<access_id>/confirm-sub-status', methods=['POST'])
def confirm_sub_status(access_id):
    client = _portal_client(access_id)
    form = bind_form(SubStatusConfirmationForm)
    if not form.validate():
        return validation_failed(form)
    project = _client_project(client, form.project_id.data)
    project = portal_actions.confirm_sub_status(project.id, form.sub_status.data, form.note.data or '')
    flash('Konfirmasi berhasil dikirim', 'success')
    return json_page({'project': project.to_dict()})


@public_bp.route('/portal/<access_id>/contracts/<contract_id>/sign', methods=['POST'])
def client_sign_contract(access_id, contract_id):
    client = _portal_client(access_id)
    contract = contracts_service.get_by_id(contract_id)
    if contract is None or contract.client_id != client.id:
        abort(404)
    form = bind_form(SignatureForm)
    if not form.validate():
        return validation_failed(form)
    try:
        contract = portal_actions.sign_contract(contract.id, form.signature.data, Signer.CLIENT)
    except (PortalActionError, RecordNotFound) as exc:
        return _rejected(exc)
    flash('Kontrak berhasil ditandatangani', 'success')
    return json_page({'contract': contract.to_dict()})


@public_bp.route('/freelancer-portal/<access_id>', methods=['GET'])
def freelancer_portal(access_id):
    data = portal_actions.freelancer_portal(access_id)
    if data is None:
        abort(404)
    return json_page(data)
