"""Freelancer: team member directory."""

from flask import Blueprint

freelancers_bp = Blueprint('freelancers', __name__)

from . import routes  # noqa: E402,F401
