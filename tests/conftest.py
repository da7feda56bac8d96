"""Test configuration and fixtures."""
import json
import logging

import pytest
from click.testing import CliRunner

from buildconf.core.project import ProjectLayout
from buildconf.extensions import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI invocations."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def layout():
    """Default project layout rooted at the working directory."""
    return ProjectLayout.default()


@pytest.fixture
def project_dir(tmp_path):
    """Project root with an Aurelia project file pointing at 'build'."""
    project_file = tmp_path / 'aurelia_project' / 'aurelia.json'
    project_file.parent.mkdir(parents=True)
    project_file.write_text(json.dumps({
        'name': 'electron-aurelia',
        'platform': {'id': 'web', 'displayName': 'Web', 'output': 'build', 'index': 'index.html'},
    }), encoding='utf-8')
    return tmp_path
