import logging
import colorlog
from flask import Flask, render_template, jsonify, request
from config import config
from newsdesk.extensions import db, migrate, login_manager, cache, csrf
from newsdesk.exceptions import NewsdeskException

from newsdesk import commands


def create_app(config_name='default', overrides=None):
    """Newsdesk application factory"""
    app = Flask(__name__)

    # 1. Configuration
    app.config.from_object(config[config_name])
    if overrides:
        app.config.update(overrides)
    config[config_name].init_app(app)

    # 2. Logging first, so backend selection is visible
    configure_logging(app)

    # 3. Content backend (SQL store or mock), then the extensions bound to it
    from newsdesk.services.backend import init_backend
    from newsdesk.services.content_service import init_content_service
    backend = init_backend(app)
    init_content_service(app, backend)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cache.init_app(app)
    csrf.init_app(app)

    # 4. Blueprints, template helpers, error handlers, CLI
    register_blueprints(app)
    register_template_filters(app)
    register_error_handlers(app)
    register_commands(app)

    return app


def register_blueprints(app):
    # Public site
    from newsdesk.blueprints.site import site_bp
    app.register_blueprint(site_bp)

    # Admin dashboard
    from newsdesk.blueprints.admin import admin_bp
    app.register_blueprint(admin_bp, url_prefix='/admin')


def register_template_filters(app):
    from newsdesk.utils.markdown import markdown_to_html
    from newsdesk.utils.text import format_date, format_relative_date, truncate_text

    app.add_template_filter(markdown_to_html, 'markdown')
    app.add_template_filter(format_date, 'date')
    app.add_template_filter(format_relative_date, 'relative_date')
    app.add_template_filter(truncate_text, 'truncate_text')


def register_error_handlers(app):
    @app.errorhandler(NewsdeskException)
    def newsdesk_error(e):
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(404)
    def page_not_found(e):
        if request.path.startswith('/api/'):
            return jsonify({'success': False, 'code': 404, 'message': 'Not found'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        return render_template('errors/500.html'), 500


def register_commands(app):
    app.cli.add_command(commands.forge)
    app.cli.add_command(commands.status)
    app.cli.add_command(commands.create_admin)


def configure_logging(app):
    """Coloured console logging in debug"""
    if app.debug:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)

        formatter = colorlog.ColoredFormatter(
            "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(message)s",
            datefmt="%H:%M:%S",
            reset=True,
            log_colors={
                'DEBUG':    'cyan',
                'INFO':     'green',
                'WARNING':  'yellow',
                'ERROR':    'red',
                'CRITICAL': 'red,bg_white',
            },
            secondary_log_colors={},
            style='%'
        )
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)
        app.logger.setLevel(logging.INFO)
