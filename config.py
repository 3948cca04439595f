import os
from dotenv import load_dotenv
from typing import Optional

# Find the absolute path of the root directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load the .env file from the root directory
load_dotenv(os.path.join(basedir, '.env'))


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid"""
    pass


class Config:
    """
    Base configuration class. Contains default configuration settings
    and settings applicable to all environments.
    """
    FLASK_ENV = os.environ.get('FLASK_ENV')

    # Database settings - a single embedded SQLite file, created on first run
    SQLALCHEMY_DATABASE_URI = os.environ.get('APARTMENTS_DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'apartments.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    APP_NAME = 'apartment-registry'

    # Spreadsheet export layout
    EXPORT_COLUMN_WIDTH = int(os.environ.get('EXPORT_COLUMN_WIDTH', '20'))

    @classmethod
    def validate_required_config(cls) -> None:
        """Validate that all required configuration is present"""
        if not cls.SQLALCHEMY_DATABASE_URI:
            raise ConfigurationError("SQLALCHEMY_DATABASE_URI must not be empty")

        if cls.EXPORT_COLUMN_WIDTH <= 0:
            raise ConfigurationError(
                f"EXPORT_COLUMN_WIDTH must be positive, got {cls.EXPORT_COLUMN_WIDTH}"
            )

    @classmethod
    def init_app(cls, app):
        """Initialize application with this config"""
        cls.validate_required_config()


class DevelopmentConfig(Config):
    """Development environment configuration"""
    DEBUG = True
    TESTING = False

    # Development-specific database URI
    SQLALCHEMY_DATABASE_URI = os.environ.get('DEV_DATABASE_URL') or \
        Config.SQLALCHEMY_DATABASE_URI

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """Testing environment configuration"""
    TESTING = True
    DEBUG = True

    # Use in-memory SQLite for tests
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    """Production environment configuration"""
    DEBUG = False
    TESTING = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name: Optional[str] = None) -> type[Config]:
    """Get configuration class based on environment"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    return config.get(config_name, DevelopmentConfig)
