import os
import logging
from logging.handlers import RotatingFileHandler

LOGGER_NAME = 'buildconf'


def setup_logging(settings):
    """Configure the package logger from a settings class."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(settings.LOG_FORMAT)

    if settings.LOG_FILE and not settings.DEBUG:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        handler = RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
    else:
        # stderr keeps stdout clean for rendered output
        handler = logging.StreamHandler()

    log_level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)
    handler.setFormatter(formatter)
    handler.setLevel(log_level)
    logger.setLevel(log_level)
    logger.addHandler(handler)

    logger.debug(f"Logging initialized: level={settings.LOG_LEVEL} file={settings.LOG_FILE}")
    return logger
