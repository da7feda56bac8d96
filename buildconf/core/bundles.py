"""Entry points and output naming."""
from typing import Dict, NamedTuple, Tuple

from buildconf.core.flags import Mode
from buildconf.core.project import ProjectLayout


TITLE = 'Electron-Aurelia-cli Starter'
BASE_URL = 'dist/'
TARGET = 'electron-renderer'

ENTRY_POINTS = {
    'app': ('aurelia-bootstrapper',),
    'vendor': ('bluebird',),
}

RESOLVE_EXTENSIONS = ('.ts', '.js')


class OutputNaming(NamedTuple):
    """Output location and filename templates."""
    path: str
    public_path: str
    filename: str
    source_map_filename: str
    chunk_filename: str


class ResolveOptions(NamedTuple):
    extensions: Tuple[str, ...]
    modules: Tuple[str, ...]


class DevServerOptions(NamedTuple):
    content_base: str
    # serve index.html for all 404s (push-state routing)
    history_api_fallback: bool = True


def entry_points() -> Dict[str, Tuple[str, ...]]:
    """Fresh copy of the bundle name -> modules mapping."""
    return {name: tuple(modules) for name, modules in ENTRY_POINTS.items()}


def output_naming(mode: Mode, project: ProjectLayout) -> OutputNaming:
    """Filename templates for the given mode; the hash token is never mixed."""
    hash_token = mode.hash_placeholder
    return OutputNaming(
        path=project.out_dir,
        public_path=BASE_URL,
        filename=f'[name].[{hash_token}].bundle.js',
        source_map_filename=f'[name].[{hash_token}].bundle.map',
        chunk_filename=f'[name].[{hash_token}].chunk.js',
    )


def css_filename(mode: Mode) -> str:
    """Filename template for extracted stylesheets."""
    return f'[name].[{mode.hash_placeholder}].bundle.css'


def resolve_options(project: ProjectLayout) -> ResolveOptions:
    return ResolveOptions(
        extensions=RESOLVE_EXTENSIONS,
        modules=(project.src_dir, 'node_modules'),
    )
