"""Error types and CLI error handling."""
import logging
from functools import wraps

import click

logger = logging.getLogger(__name__)


class BuildConfError(Exception):
    """Base error for build configuration tooling."""


class ProjectFileError(BuildConfError):
    """Project file exists but is unreadable or malformed."""


class UnknownFormatError(BuildConfError):
    """Requested output format is not supported."""


def handle_errors(f):
    """Report BuildConfError as a CLI error; everything else propagates."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except BuildConfError as e:
            logger.error(f'{type(e).__name__}: {e}')
            raise click.ClickException(str(e)) from e
    return decorated_function
