"""
Authentication Blueprint - Dashboard Login/Logout

Session based (Flask-Login). Login attempts are rate limited per client IP.
"""

from datetime import datetime

import sqlalchemy as sa
from flask import Blueprint, current_app, flash
from flask_login import current_user, login_required, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError

from studiodesk.domain.permissions import allowed_views
from studiodesk.extensions import db, limiter
from studiodesk.forms import LoginForm
from studiodesk.models import User
from studiodesk.routes.helpers import bind_form, json_page, login_required_response, validation_failed

auth_bp = Blueprint('auth', __name__)


def _login_rate_limit():
    return current_app.config.get('LOGIN_RATE_LIMIT', '10 per minute')


def _session_payload(user):
    return {
        'user': user.to_dict(),
        'views': allowed_views(user),
    }


@auth_bp.route('/login', methods=['GET'])
def login_status():
    """Who is logged in, if anyone."""
    if not current_user.is_authenticated:
        return login_required_response()
    return json_page(_session_payload(current_user))


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(_login_rate_limit, methods=['POST'])
def login():
    form = bind_form(LoginForm)
    if not form.validate():
        return validation_failed(form)

    email = (form.email.data or '').strip().lower()
    try:
        user = db.session.execute(
            sa.select(User).where(sa.func.lower(User.email) == email)
        ).scalars().first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error('Login query failed: %s', exc, exc_info=True)
        flash('Database sedang tidak tersedia. Coba lagi sebentar.', 'danger')
        return json_page({'ok': False, 'error': 'database_unavailable'}, 503)

    if user is None or not user.check_password(form.password.data):
        flash('Email atau password salah.', 'danger')
        return json_page({'ok': False, 'error': 'invalid_credentials'}, 401)

    if not user.is_active:
        flash('Akun ini dinonaktifkan. Hubungi admin.', 'danger')
        return json_page({'ok': False, 'error': 'account_disabled'}, 403)

    login_user(user, remember=bool(form.remember_me.data))
    try:
        user.last_login = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.warning('Could not record last_login for %s: %s', user.id, exc)

    current_app.logger.info('User %s logged in', user.email)
    flash(f'Selamat datang, {user.full_name}!', 'success')
    return json_page(_session_payload(user))


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    flash('Anda telah keluar.', 'info')
    return json_page({'logged_out': True})


def unauthorized():
    """Flask-Login hook: JSON 401 instead of a redirect."""
    return login_required_response()
