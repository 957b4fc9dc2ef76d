from __future__ import annotations

import secrets
import time
from decimal import Decimal

from flask import abort, request

from studiodesk.domain.enums import FREELANCER_ROLES, View
from studiodesk.domain.formatting import format_currency
from studiodesk.forms import FreelancerForm
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
from studiodesk.services.table_service import TableServiceError, team_members_service
from . import freelancers_bp


def _store(autoload: bool = True) -> EntityStore:
    return EntityStore(team_members_service, flash_notifier, 'Freelancer', autoload=autoload)


def new_portal_access_id() -> str:
    return f'freelancer_{int(time.time() * 1000)}_{secrets.token_hex(3)}'


def _serialize(member) -> dict:
    data = member.to_dict()
    data['standard_fee_display'] = format_currency(member.standard_fee)
    data['reward_balance_display'] = format_currency(member.reward_balance)
    return data


def _fields(form: FreelancerForm) -> dict:
    return {
        'name': form.name.data.strip(),
        'role': form.role.data,
        'email': (form.email.data or '').strip(),
        'phone': (form.phone.data or '').strip(),
        'standard_fee': form.standard_fee.data or Decimal(0),
        'no_rek': (form.no_rek.data or '').strip(),
        'reward_balance': form.reward_balance.data or Decimal(0),
        'rating': form.rating.data or 0,
    }


@freelancers_bp.route('/', methods=['GET'])
@view_required(View.TEAM)
def index():
    store = _store()
    items = filter_items(store.items, request.args.get('q', ''), ('name', 'role', 'email', 'phone'))
    role = request.args.get('role') or 'ALL'
    if role != 'ALL':
        items = [member for member in items if member.role == role]

    by_role = {name: 0 for name in FREELANCER_ROLES}
    for member in store.items:
        by_role[member.role] = by_role.get(member.role, 0) + 1
    total_rewards = sum((Decimal(str(m.reward_balance or 0)) for m in store.items), Decimal(0))

    return json_page({
        'items': [_serialize(member) for member in items],
        'stats': {
            'total': len(store.items),
            'by_role': by_role,
            'total_reward_balance_display': format_currency(total_rewards),
        },
        'error': store.error,
    }, 500 if store.error else 200)


@freelancers_bp.route('/<member_id>', methods=['GET'])
@view_required(View.TEAM)
def detail(member_id):
    member = team_members_service.get_by_id(member_id)
    if member is None:
        abort(404)
    return json_page({'item': _serialize(member)})


@freelancers_bp.route('/', methods=['POST'])
@view_required(View.TEAM)
def create():
    form = bind_form(FreelancerForm)
    if not form.validate():
        return validation_failed(form)

    fields = _fields(form)
    fields['portal_access_id'] = new_portal_access_id()
    fields['performance_notes'] = []

    store = _store(autoload=False)
    try:
        member = store.create(fields)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(member)}, 201)


@freelancers_bp.route('/<member_id>', methods=['POST'])
@view_required(View.TEAM)
def edit(member_id):
    member = team_members_service.get_by_id(member_id)
    if member is None:
        abort(404)
    form = bind_form(FreelancerForm, obj=member)
    if not form.validate():
        return validation_failed(form)

    store = _store(autoload=False)
    try:
        member = store.update(member_id, _fields(form))
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'item': _serialize(member)})


@freelancers_bp.route('/<member_id>/delete', methods=['POST'])
@view_required(View.TEAM)
def delete(member_id):
    store = _store(autoload=False)
    try:
        store.delete(member_id)
    except TableServiceError as exc:
        return store_failure(store, exc)
    return json_page({'deleted': member_id})
