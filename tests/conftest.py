"""Test configuration and fixtures."""

import os

import pytest
import tempfile
from pathlib import Path

from studiodesk import create_app
from studiodesk.domain.enums import UserRole
from studiodesk.extensions import db as _db
from studiodesk.models import User


PASSWORD = 'rahasia-123'


@pytest.fixture
def app():
    """Create application for testing.

    A file-backed SQLite database, since the workspace loader reads from
    worker threads with their own connections. No app context stays pushed:
    every test-client request gets its own, as in production.
    """
    db_fd, db_path = tempfile.mkstemp(suffix='.db')

    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f'sqlite:///{db_path}',
        'SECRET_KEY': 'test-secret-key',
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'MAIL_SUPPRESS_SEND': True,
        'SERVER_NAME': 'localhost',
        'WORKSPACE_LOAD_WORKERS': 4,
    })

    with app.app_context():
        _db.create_all()

    yield app

    with app.app_context():
        _db.session.remove()
        _db.drop_all()

    os.close(db_fd)
    Path(db_path).unlink(missing_ok=True)


@pytest.fixture
def ctx(app):
    """Pushed app context for service-level tests."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Test client for making requests."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """CLI test runner."""
    return app.test_cli_runner()


@pytest.fixture
def db(ctx):
    """Database fixture."""
    return _db


@pytest.fixture
def make_user(app):
    """Factory for dashboard accounts; returns the new user's id."""

    def _make(email='owner@studio.test', role=UserRole.ADMIN, permissions=None, full_name='Owner Studio'):
        with app.app_context():
            user = User(
                email=email,
                full_name=full_name,
                role=role,
                permissions=list(permissions or []),
                is_active=True,
            )
            user.set_password(PASSWORD)
            _db.session.add(user)
            _db.session.commit()
            return user.id

    return _make


@pytest.fixture
def seed(app):
    """Create a row through its table service; returns the row as a dict."""

    from studiodesk.services.table_service import get_service

    def _seed(table, **fields):
        with app.app_context():
            return get_service(table).create(fields).to_dict()

    return _seed


def login(client, email):
    return client.post('/auth/login', json={'email': email, 'password': PASSWORD})


@pytest.fixture
def admin_client(client, make_user):
    """Test client logged in as an Admin."""
    make_user()
    resp = login(client, 'owner@studio.test')
    assert resp.status_code == 200
    return client


@pytest.fixture
def member_client(app, make_user):
    """Factory: a fresh client logged in as a Member with the given views."""

    def _make(permissions, email='crew@studio.test'):
        make_user(email=email, role=UserRole.MEMBER, permissions=permissions, full_name='Crew')
        member = app.test_client()
        resp = login(member, email)
        assert resp.status_code == 200
        return member

    return _make
