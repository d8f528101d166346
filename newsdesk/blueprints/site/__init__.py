from flask import Blueprint

# url_prefix is set at registration in newsdesk/__init__.py
site_bp = Blueprint('site', __name__)

from . import routes
