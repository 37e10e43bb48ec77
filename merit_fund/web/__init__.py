"""Flask application factory."""
import locale
import logging
from pathlib import Path
from typing import Optional

from flask import Flask
from flask_cors import CORS

from .config import config
from .config.logging_config import setup_logging
from .routes import main_bp, api_bp
from .services.app_services import init_services
from .services.storage_service import KeyValueStore
from .utils.error_handlers import register_error_handlers

logger = logging.getLogger(__name__)


def use_system_date_locale() -> None:
    """Make '%x' render dates in the user's locale rather than C."""
    try:
        locale.setlocale(locale.LC_TIME, '')
    except locale.Error as e:
        logger.warning(f"Keeping C date format, system locale unavailable: {str(e)}")


def create_app(config_name='default', test_config: Optional[dict] = None,
               store: Optional[KeyValueStore] = None):
    """Create Flask application."""
    # Create Flask app
    app = Flask(__name__)

    # Load config
    app_config = config[config_name]
    app.config.from_object(app_config)
    if test_config:
        app.config.update(test_config)

    # Set up logging
    setup_logging(Path(app.config['LOGS_DIR']), config_name)
    use_system_date_locale()

    # Initialize services
    init_services(app, store)

    # Only the JSON API is reachable cross-origin
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api')
    register_error_handlers(app)

    return app
