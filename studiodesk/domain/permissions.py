from __future__ import annotations

from typing import Any, Iterable

from studiodesk.domain.enums import UserRole, View


ACCESS_DENIED_TITLE = 'Akses Ditolak'
ACCESS_DENIED_MESSAGE = 'Anda tidak memiliki izin untuk mengakses halaman ini.'


def _permission_set(user: Any) -> set[str]:
    raw: Iterable[str] | None = getattr(user, 'permissions', None)
    if not raw:
        return set()
    return {str(item) for item in raw}


def has_permission(user: Any, view: str) -> bool:
    """Static permission-set membership check.

    Admins see everything and every authenticated user sees the dashboard.
    Anyone else needs the view listed in their permissions.
    """

    if user is None or not getattr(user, 'is_authenticated', True):
        return False
    if getattr(user, 'role', None) == UserRole.ADMIN:
        return True
    if view == View.DASHBOARD:
        return True
    return view in _permission_set(user)


def allowed_views(user: Any) -> list[str]:
    """Navigation entries the user may open, in sidebar order."""
    return [view for view in View.ALL if has_permission(user, view)]


def access_denied_payload(view: str) -> dict[str, Any]:
    return {
        'ok': False,
        'error': 'access_denied',
        'title': ACCESS_DENIED_TITLE,
        'message': ACCESS_DENIED_MESSAGE,
        'requested_view': view,
        'fallback_view': View.DASHBOARD,
    }
