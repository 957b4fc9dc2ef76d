"""Shared plumbing for the JSON routes: form binding, responses, access checks."""

from __future__ import annotations

from decimal import Decimal
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request
from flask_login import current_user
from werkzeug.datastructures import MultiDict
from wtforms import BooleanField

from studiodesk.domain.permissions import access_denied_payload, has_permission
from studiodesk.services.notifications import pop_toast
from studiodesk.services.table_service import RecordNotFound


def _scalar(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return value


def _flatten(prefix: str, value: Any, out: MultiDict) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f'{prefix}-{key}' if prefix else str(key), item, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f'{prefix}-{index}', item, out)
    else:
        out.add(prefix, _scalar(value))


def request_formdata() -> MultiDict:
    """Form data for the current request, with JSON bodies flattened to
    WTForms field names (``items-0-name``)."""

    if request.is_json:
        payload = request.get_json(silent=True) or {}
        flat = MultiDict()
        if isinstance(payload, dict):
            _flatten('', payload, flat)
        return flat
    return MultiDict(request.form)


def bind_form(form_cls, obj: Any = None):
    """Instantiate ``form_cls`` against the current request.

    When editing ``obj``, fields missing from the request are filled from the
    record so a partial body validates like the full form. On a JSON create,
    checkboxes left out of the body take their default; an HTML form omits
    unchecked boxes, so their absence still reads as unchecked.
    """

    formdata = request_formdata()
    if obj is not None and hasattr(obj, 'to_dict'):
        present = submitted_keys()
        for key, value in obj.to_dict().items():
            if key not in present:
                _flatten(key, value, formdata)

    form = form_cls(formdata=formdata)
    if obj is None and request.is_json:
        for field in form:
            if isinstance(field, BooleanField) and field.name not in formdata:
                field.data = bool(field.default)
    return form


def submitted_keys() -> set[str]:
    """Top-level keys present in the request body."""

    if request.is_json:
        payload = request.get_json(silent=True) or {}
        return set(payload) if isinstance(payload, dict) else set()
    return {key.split('-', 1)[0] for key in request.form.keys()}


def form_errors(form) -> dict[str, Any]:
    return {name: errors for name, errors in form.errors.items() if errors}


def json_page(payload: Optional[dict[str, Any]] = None, status: int = 200):
    """JSON response carrying the pending toast (if any)."""

    body = dict(payload or {})
    body.setdefault('ok', 200 <= status < 400)
    body['toast'] = pop_toast()
    return jsonify(body), status


def validation_failed(form):
    return json_page({'ok': False, 'error': 'validation_failed', 'errors': form_errors(form)}, 400)


def login_required_response():
    return jsonify({'ok': False, 'error': 'login_required', 'message': 'Silakan login terlebih dahulu.'}), 401


def access_check(view: str):
    """``None`` when the current user may open ``view``, else the error response.

    Anonymous callers get 401; users outside their permission set get the
    access-denied payload with a 403.
    """

    if not current_user.is_authenticated:
        return login_required_response()
    if not has_permission(current_user, view):
        return jsonify(access_denied_payload(view)), 403
    return None


def view_required(view: str):
    """Decorator form of ``access_check``."""

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            denied = access_check(view)
            if denied is not None:
                return denied
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def filter_items(items, query: str, fields: tuple[str, ...]):
    """Case-insensitive substring match of ``query`` on any of ``fields``."""

    needle = (query or '').strip().lower()
    if not needle:
        return list(items)
    return [
        item for item in items
        if any(needle in str(getattr(item, name, '') or '').lower() for name in fields)
    ]


def store_failure(store, exc: Exception):
    """Error response after an ``EntityStore`` mutation was rejected.

    The store has already queued the failure toast.
    """

    status = 404 if isinstance(exc, RecordNotFound) else 409
    return json_page({'ok': False, 'error': store.error or str(exc)}, status)
