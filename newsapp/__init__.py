import logging
import os
import sys

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .extensions import db, migrate
from .config import DevConfig, ProdConfig
from .errors import NewsAppError


def _configure_logging(app):
    """Set up structured logging for production."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
    ))
    level = logging.INFO if not app.debug else logging.DEBUG
    app.logger.setLevel(level)
    app.logger.addHandler(handler)
    logging.getLogger('gunicorn.error').setLevel(level)


def _register_error_handlers(app):
    """Render every failure as {success: false, error, message?}."""

    @app.errorhandler(NewsAppError)
    def handle_app_error(e):
        if e.status_code >= 500:
            app.logger.warning('%s', e)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'success': False, 'error': e.name, 'message': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        app.logger.exception('Unhandled error')
        return jsonify({
            'success': False,
            'error': 'Internal server error',
            'message': str(e),
        }), 500


def _ensure_schema(app):
    """Create tables and indexes that don't exist yet."""
    with app.app_context():
        try:
            db.create_all()
            app.logger.info('Schema check completed')
        except Exception as e:
            db.session.rollback()
            app.logger.warning('Schema check failed: %s', e)


def create_app(config=None):
    app = Flask(__name__, static_folder=None)

    if config is None:
        config = ProdConfig if os.environ.get('FLASK_ENV') == 'production' else DevConfig
    app.config.from_object(config)

    _configure_logging(app)

    # Import models so they are registered with SQLAlchemy (needed for migrations)
    from . import models  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)

    _ensure_schema(app)

    from flask_cors import CORS
    CORS(app)

    from .api import register_blueprints
    register_blueprints(app)
    _register_error_handlers(app)

    # Health check endpoint
    @app.route('/healthz')
    def health_check():
        try:
            db.session.execute(db.text('SELECT 1'))
            return jsonify(status='healthy'), 200
        except Exception:
            app.logger.exception('Health check failed')
            return jsonify(status='unhealthy'), 503

    return app
