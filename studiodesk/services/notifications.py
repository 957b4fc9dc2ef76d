"""User-facing notifications.

Two channels:
- the transient toast, carried by Flask's flash queue and popped into the
  next JSON response;
- persistent in-app notifications (``notifications`` table) shown in the
  header bell, plus a best-effort e-mail alert to the studio owner.
"""

from __future__ import annotations

from typing import Any, Optional

from flask import current_app, flash, get_flashed_messages
from flask_mail import Message as MailMessage

from studiodesk.extensions import mail
from studiodesk.services.table_service import notifications_service


def flash_notifier(message: str, category: str = 'info') -> None:
    """``EntityStore`` notifier bound to the session flash queue."""
    flash(message, category)


def pop_toast() -> Optional[dict[str, str]]:
    """Consume queued flashes; the most recent one is the toast shown."""

    messages = get_flashed_messages(with_categories=True)
    if not messages:
        return None
    category, message = messages[-1]
    return {'message': message, 'category': category}


def push_notification(
    title: str,
    message: str,
    *,
    icon: str = 'info',
    link_view: Optional[str] = None,
    link_action: Optional[dict[str, Any]] = None,
):
    return notifications_service.create({
        'title': title,
        'message': message,
        'icon': icon,
        'is_read': False,
        'link_view': link_view,
        'link_action': link_action,
    })


def send_owner_alert(profile: Any, subject: str, body: str) -> bool:
    """E-mail the studio owner if the profile opted into new-project alerts.

    Failures are logged and reported as ``False``; they never propagate.
    """

    if profile is None:
        return False
    settings = getattr(profile, 'notification_settings', None) or {}
    if not settings.get('newProject', True):
        return False
    recipient = (getattr(profile, 'email', '') or '').strip() or current_app.config.get('ADMIN_EMAIL')
    if not recipient:
        return False

    try:
        msg = MailMessage(subject=subject, recipients=[recipient])
        msg.body = body
        mail.send(msg)
        return True
    except Exception as exc:
        current_app.logger.error('Failed to send owner alert "%s": %s', subject, exc)
        return False
