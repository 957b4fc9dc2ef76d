"""SOP: the studio's standard operating procedures."""

from flask import Blueprint

sops_bp = Blueprint('sops', __name__)

from . import routes  # noqa: E402,F401
