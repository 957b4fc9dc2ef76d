"""Input Package: service packages offered to clients."""

from flask import Blueprint

packages_bp = Blueprint('packages', __name__)

from . import routes  # noqa: E402,F401
