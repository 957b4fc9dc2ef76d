import os

import click
import sqlalchemy as sa
from flask.cli import with_appcontext

from studiodesk.domain.enums import UserRole
from studiodesk.extensions import db
from studiodesk.models import User


@click.command('create-admin')
@click.option('--email', prompt=True, help='Admin email (login name)')
@click.option('--name', 'full_name', default=None, help='Display name (defaults to the email)')
@click.option(
    '--password',
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help='Admin password (will not be echoed)'
)
@with_appcontext
def create_admin_command(email: str, full_name: str, password: str) -> None:
    """Create (or update) an Admin dashboard user."""

    email = (email or os.getenv('ADMIN_EMAIL') or '').strip().lower()
    if not email:
        raise click.ClickException('Email is required.')
    if not password:
        raise click.ClickException('Password is required.')

    user = db.session.execute(
        sa.select(User).where(sa.func.lower(User.email) == email)
    ).scalars().first()

    if user is None:
        user = User(
            email=email,
            full_name=(full_name or email).strip(),
            role=UserRole.ADMIN,
            permissions=[],
            is_active=True,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        click.echo(f"Created admin user '{user.email}'.")
        return

    # Update path
    if full_name:
        user.full_name = full_name.strip()
    user.role = UserRole.ADMIN
    user.is_active = True
    user.set_password(password)
    db.session.commit()
    click.echo(f"Updated admin user '{user.email}'.")
