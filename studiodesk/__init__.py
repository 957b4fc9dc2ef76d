"""
Flask Application Factory

This module implements the application factory pattern for creating
StudioDesk application instances with different configurations.
"""

import os
from collections.abc import Mapping

from flask import Flask, jsonify

from studiodesk.config import config
from studiodesk.extensions import ckeditor, db, limiter, login_manager, mail, migrate


def _resolve_config(config_name):
    """Config class instance plus any explicit overrides.

    ``config_name`` is either a name from ``studiodesk.config.config`` or a
    mapping of settings applied on top of ``TestingConfig``.
    """
    overrides = {}
    if isinstance(config_name, Mapping):
        overrides = dict(config_name)
        config_name = 'testing' if overrides.get('TESTING') else 'default'
    config_name = (config_name or 'default').lower()
    cfg = config.get(config_name) or config['default']
    return config_name, (cfg() if isinstance(cfg, type) else cfg), overrides


def create_app(config_name='default'):
    """
    Application factory function

    Args:
        config_name: Configuration name ('development', 'production', 'testing')
            or a dict of settings for tests.

    Returns:
        Flask: Configured Flask application instance
    """

    config_name, cfg_obj, overrides = _resolve_config(config_name)

    app = Flask(__name__)
    app.config.from_object(cfg_obj)
    app.config.update(overrides)

    if config_name == 'production':
        if not app.config.get('SECRET_KEY'):
            app.logger.error('Production requires SECRET_KEY to be set via environment variable')
            raise RuntimeError('Missing SECRET_KEY in production')

        db_uri = app.config.get('SQLALCHEMY_DATABASE_URI')
        if not db_uri:
            app.logger.error('Production requires DATABASE_URL (SQLALCHEMY_DATABASE_URI) to be set')
            raise RuntimeError('Missing DATABASE_URL in production')
        if db_uri.strip().startswith('sqlite:'):
            app.logger.error('Production requires PostgreSQL (DATABASE_URL must not be sqlite): %s', db_uri)
            raise RuntimeError('SQLite not allowed in production')
    elif not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = os.urandom(32)
        app.logger.warning('SECRET_KEY was missing; generated an ephemeral key for this process.')

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    mail.init_app(app)
    limiter.init_app(app)
    ckeditor.init_app(app)

    from studiodesk.routes.auth import unauthorized
    login_manager.unauthorized_handler(unauthorized)

    # Models must be imported so metadata and the user loader are registered.
    from studiodesk import models  # noqa: F401

    register_blueprints(app)
    register_error_handlers(app)
    register_shell_context(app)
    register_cli_commands(app)

    @app.teardown_appcontext
    def _cleanup_appcontext(exc):
        """Ensure scoped sessions are removed when the app context ends."""
        try:
            db.session.remove()
        except Exception as remove_exc:
            app.logger.error('Session remove during appcontext teardown failed: %s', remove_exc, exc_info=True)
        return None

    return app


def register_blueprints(app):
    """Register Flask blueprints"""

    from studiodesk.routes.auth import auth_bp
    from studiodesk.routes.health import health_bp
    from studiodesk.routes.dashboard import dashboard_bp
    from studiodesk.routes.records import records_bp
    from studiodesk.routes.sql_console import sql_console_bp
    from studiodesk.routes.public import public_bp
    from studiodesk.blueprints.assets import assets_bp
    from studiodesk.blueprints.freelancers import freelancers_bp
    from studiodesk.blueprints.packages import packages_bp
    from studiodesk.blueprints.promo_codes import promo_codes_bp
    from studiodesk.blueprints.sops import sops_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(health_bp)  # No prefix - accessible at /health
    app.register_blueprint(public_bp)
    app.register_blueprint(dashboard_bp, url_prefix='/app')
    app.register_blueprint(records_bp, url_prefix='/app/records')
    app.register_blueprint(sql_console_bp, url_prefix='/app/sql')
    app.register_blueprint(assets_bp, url_prefix='/app/assets')
    app.register_blueprint(freelancers_bp, url_prefix='/app/freelancers')
    app.register_blueprint(packages_bp, url_prefix='/app/packages')
    app.register_blueprint(promo_codes_bp, url_prefix='/app/promo-codes')
    app.register_blueprint(sops_bp, url_prefix='/app/sops')


def register_error_handlers(app):
    """JSON bodies for HTTP errors"""

    def _error(status, code, message):
        return jsonify({'ok': False, 'error': code, 'message': message}), status

    @app.errorhandler(400)
    def bad_request_error(error):
        return _error(400, 'bad_request', 'Permintaan tidak valid.')

    @app.errorhandler(401)
    def unauthorized_error(error):
        return _error(401, 'login_required', 'Silakan login terlebih dahulu.')

    @app.errorhandler(403)
    def forbidden_error(error):
        return _error(403, 'forbidden', 'Anda tidak memiliki izin untuk mengakses halaman ini.')

    @app.errorhandler(404)
    def not_found_error(error):
        return _error(404, 'not_found', 'Data tidak ditemukan.')

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return _error(405, 'method_not_allowed', 'Metode tidak diizinkan.')

    @app.errorhandler(429)
    def rate_limited_error(error):
        return _error(429, 'rate_limited', 'Terlalu banyak permintaan. Coba lagi nanti.')

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.exception('Unhandled exception (500): %s', error)
        db.session.rollback()
        return _error(500, 'server_error', 'Terjadi kesalahan pada server.')


def register_shell_context(app):
    """Register shell context for Flask CLI"""

    @app.shell_context_processor
    def make_shell_context():
        from studiodesk import models
        from studiodesk.services.table_service import SERVICES
        return {
            'db': db,
            'models': models,
            'User': models.User,
            'Profile': models.Profile,
            'services': SERVICES,
        }


def register_cli_commands(app):
    """Register custom Flask CLI commands."""
    from studiodesk.cli import create_admin_command

    app.cli.add_command(create_admin_command)
