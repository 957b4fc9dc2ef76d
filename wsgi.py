"""
WSGI Entry Point for the StudioDesk Application

This module serves as the entry point for WSGI servers (like Gunicorn)
to run the Flask application in production environments.
"""

import os
import sys

# Load .env ONLY for local development. In production, environment variables
# must be provided by the platform.
if os.environ.get('FLASK_ENV', '').lower() != 'production' and os.environ.get('FLASK_CONFIG', '').lower() != 'production':
    from dotenv import load_dotenv

    load_dotenv(override=False)

from studiodesk import create_app

# Local/dev defaults to development; production must be set explicitly.
config_name = (os.getenv('FLASK_CONFIG') or os.getenv('FLASK_ENV') or 'development').lower()

print(f'Initializing StudioDesk with config: {config_name}', file=sys.stderr)

if config_name == 'production':
    required_vars = {
        'SECRET_KEY': 'Required for session encryption and CSRF protection',
        'DATABASE_URL': 'Required for PostgreSQL connection',
        'ADMIN_EMAIL': 'Required for owner alerts and the admin account',
    }

    missing_vars = [
        f'  - {var_name}: {description}'
        for var_name, description in required_vars.items()
        if not os.getenv(var_name)
    ]

    if missing_vars:
        print(
            '\nDEPLOYMENT FAILED: Missing required environment variables\n\n'
            + '\n'.join(missing_vars)
            + '\n',
            file=sys.stderr,
        )
        raise RuntimeError('Missing required environment variables in production')

try:
    app = create_app(config_name)
except Exception as exc:
    print(f'FATAL: Application initialization failed: {exc}', file=sys.stderr)
    print('Common causes: DATABASE_URL unreachable, tables missing (run: flask db upgrade).', file=sys.stderr)
    raise
