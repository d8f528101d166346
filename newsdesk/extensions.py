from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_caching import Cache
from flask_wtf.csrf import CSRFProtect

# Extension objects, bound to an app inside create_app
db = SQLAlchemy()
migrate = Migrate()
cache = Cache()
login_manager = LoginManager()
csrf = CSRFProtect()

login_manager.login_view = 'admin.login'
login_manager.login_message = 'Please sign in to access the newsroom.'
login_manager.login_message_category = 'warning'
login_manager.session_protection = 'strong'


@login_manager.user_loader
def load_user(user_id):
    """Flask-Login loader; goes through the active backend so the mock never hits SQL."""
    from newsdesk.services.backend import get_backend
    return get_backend().load_author(user_id)
