"""Project directory layout."""
import json
import logging
import os
from typing import NamedTuple

from buildconf.core.errors import ProjectFileError

logger = logging.getLogger(__name__)

PROJECT_FILE = os.path.join('aurelia_project', 'aurelia.json')
DEFAULT_OUTPUT = 'dist'
SOURCE_DIR = 'src'


class ProjectLayout(NamedTuple):
    """Directories the composed configuration points at."""
    root: str
    src_dir: str
    out_dir: str

    @classmethod
    def default(cls, root: str = '.') -> 'ProjectLayout':
        """Default output directory under the absolute root. Reads no files."""
        return cls.from_output(os.path.abspath(root), DEFAULT_OUTPUT)

    @classmethod
    def from_output(cls, root: str, output: str) -> 'ProjectLayout':
        return cls(
            root=root,
            src_dir=os.path.join(root, SOURCE_DIR),
            out_dir=os.path.join(root, output),
        )


def load_project(root: str = '.') -> ProjectLayout:
    """Read the output directory from the Aurelia project file under root.

    A missing project file yields the default layout. A file that exists but
    cannot be read or parsed raises ProjectFileError.
    """
    root = os.path.abspath(root)
    path = os.path.join(root, PROJECT_FILE)

    if not os.path.exists(path):
        logger.info(f"No project file at {path}, using output '{DEFAULT_OUTPUT}'")
        return ProjectLayout.default(root)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            project = json.load(f)
    except (OSError, ValueError) as e:
        raise ProjectFileError(f"Cannot read project file {path}: {e}") from e

    platform = project.get('platform') if isinstance(project, dict) else None
    if not isinstance(platform, dict):
        raise ProjectFileError(f"Project file {path} has no 'platform' section")

    output = platform.get('output', DEFAULT_OUTPUT)
    if not isinstance(output, str) or not output.strip():
        raise ProjectFileError(f"Invalid platform.output in {path}: {output!r}")

    logger.debug(f"Loaded project file {path}: output={output}")
    return ProjectLayout.from_output(root, output)
