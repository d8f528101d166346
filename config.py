import os
from dotenv import load_dotenv

# Load .env before reading any setting
load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))


def _database_url(default=None):
    """DATABASE_URL with the postgres:// scheme some hosts hand out rewritten."""
    url = os.environ.get('DATABASE_URL') or default
    if url and url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'

    # Database
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = None

    # Image bucket storage
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'instance', 'uploads')
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    MAX_IMAGE_SIZE = 5 * 1024 * 1024

    # Settings cache (SimpleCache by default, point at Redis in production)
    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'SimpleCache')
    CACHE_DEFAULT_TIMEOUT = 300

    # Listing sizes
    HOME_FEED_SIZE = 20
    ADMIN_PAGE_SIZE = 10
    SEARCH_PAGE_SIZE = 12

    @staticmethod
    def init_app(app):
        upload_folder = app.config['UPLOAD_FOLDER']
        if not os.path.exists(upload_folder):
            os.makedirs(upload_folder)


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _database_url(
        'sqlite:///' + os.path.join(basedir, 'instance', 'newsdesk.db'))


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    # No default: a missing DATABASE_URL puts the site on the mock backend
    SQLALCHEMY_DATABASE_URI = _database_url()

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    CACHE_TYPE = 'SimpleCache'

    @staticmethod
    def init_app(app):
        pass


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
