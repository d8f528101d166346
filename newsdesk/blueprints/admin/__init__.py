from flask import Blueprint
from newsdesk.utils.permissions import guard_admin_routes

# url_prefix is set at registration in newsdesk/__init__.py
admin_bp = Blueprint('admin', __name__)
admin_bp.before_request(guard_admin_routes)

from . import routes
