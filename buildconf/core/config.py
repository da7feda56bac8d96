"""Tool settings."""
import os


class BaseConfig:
    """Base configuration."""
    DEBUG = False
    TESTING = False

    # Project
    PROJECT_ROOT = os.environ.get('BUILDCONF_ROOT', '.')
    OUTPUT_FORMAT = os.environ.get('BUILDCONF_FORMAT', 'json')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE = os.environ.get('BUILDCONF_LOG_FILE')
    LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'
    LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
    LOG_BACKUP_COUNT = 5


class DevelopmentConfig(BaseConfig):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(BaseConfig):
    """CI / release configuration."""
    DEBUG = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')


class TestingConfig(BaseConfig):
    TESTING = True
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None
    PROJECT_ROOT = '.'
    OUTPUT_FORMAT = 'json'


config_by_name = {
    'production': ProductionConfig,
    'development': DevelopmentConfig,
    'testing': TestingConfig,
}


def get_config(config_name=None):
    """Get settings class by name, defaulting to BUILDCONF_SETTINGS."""
    if config_name is None:
        config_name = os.environ.get('BUILDCONF_SETTINGS', 'development')
    return config_by_name.get(config_name, DevelopmentConfig)
