import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from flask_restx import Api
from flask_sqlalchemy import SQLAlchemy
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    from folio.config import CONFIG_MAPPING

    config_name = config_name or os.getenv('FLASK_ENV', 'default')
    app = Flask(__name__)
    app.config.from_object(CONFIG_MAPPING.get(config_name, CONFIG_MAPPING['default']))

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s - %(message)s',
    )

    app.json.sort_keys = False

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})

    # Swagger UI lives at /docs so it does not shadow the JSON routes
    Api(app, version='1.0', title='Folio API', doc='/docs')

    from folio.services.cache import build_cache
    from folio.services.project_service import ProjectService
    from folio.services.storage import SupabaseImageStore

    app.extensions['project_service'] = ProjectService(
        project_cache=build_cache(app.config, namespace='project'),
        page_group_cache=build_cache(app.config, namespace='page_group'),
        storage=SupabaseImageStore.from_config(app.config),
    )

    # Create tables with error handling
    with app.app_context():
        try:
            app.extensions['project_service'].initialize()
        except Exception as e:
            logger.warning(f'Could not initialize database: {e}. This is OK if the database is not ready yet.')

    from folio.routes import register_routes
    register_routes(app)

    register_error_handlers(app)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app


def register_error_handlers(app):
    """Return JSON bodies for errors raised outside the route handlers."""

    @app.errorhandler(RequestEntityTooLarge)
    def payload_too_large(_):
        return jsonify({'error': 'File is too large'}), 413

    @app.errorhandler(404)
    def not_found(_):
        return jsonify({'error': 'Endpoint not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(_):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(Exception)
    def unhandled_error(e):
        if isinstance(e, HTTPException):
            return jsonify({'error': e.description}), e.code
        logger.exception('Unhandled server error')
        return jsonify({'error': 'Internal server error'}), 500
