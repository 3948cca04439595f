# app.py

from flask import Flask
from config import get_config
from extensions import db
from logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def create_app(config_name=None, test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize app with config
    config_class.init_app(app)

    if test_config:
        app.config.update(test_config)

    setup_logging(app_name=app.config['APP_NAME'], log_level=app.config['LOG_LEVEL'])

    db.init_app(app)

    # Import models so they are registered on db.metadata
    import apartment_database  # noqa: F401

    # Service registry; repositories always use the session of the current app context
    from services.registry import create_service_registry
    app.services = create_service_registry(
        session_factory=lambda: db.session,
        export_column_width=app.config['EXPORT_COLUMN_WIDTH']
    )

    with app.app_context():
        # The database file is created on first run
        db.create_all()

    from scripts.commands import init_app as init_commands
    init_commands(app)

    logger.info(
        "Application created",
        config=config_class.__name__,
        database=app.config['SQLALCHEMY_DATABASE_URI']
    )
    return app
