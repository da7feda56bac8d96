"""Flag-driven bundler configuration for the Electron + Aurelia desktop app."""
from buildconf.core.composer import BuildConfig, compose
from buildconf.core.flags import Flags, Mode
from buildconf.core.helpers import conditional_include, normalize_to_list
from buildconf.core.project import ProjectLayout, load_project

__all__ = [
    'BuildConfig',
    'Flags',
    'Mode',
    'ProjectLayout',
    'compose',
    'conditional_include',
    'load_project',
    'normalize_to_list',
]
