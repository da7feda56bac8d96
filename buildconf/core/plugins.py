"""Cross-cutting bundler plugins."""
from typing import Any, List, NamedTuple, Optional, Tuple

from buildconf.core.bundles import BASE_URL, TITLE, css_filename
from buildconf.core.flags import Mode


class Plugin(NamedTuple):
    """Plugin class name, the package that exports it, and constructor args."""
    name: str
    module: str
    args: Tuple[Any, ...] = ()
    default_export: bool = False


def base_plugins(server: Optional[str]) -> List[Plugin]:
    """Plugins present in every configuration."""
    return [
        Plugin('AureliaPlugin', 'aurelia-webpack-plugin'),
        Plugin('ProvidePlugin', 'webpack', ({'Promise': 'bluebird'},)),
        Plugin('ModuleDependenciesPlugin', 'aurelia-webpack-plugin',
               ({'aurelia-testing': ['./compile-spy', './view-spy']},)),
        Plugin('HtmlWebpackPlugin', 'html-webpack-plugin', args=({
            'template': 'index.ejs',
            'filename': '../index.html',
            'metadata': {'title': TITLE, 'server': server, 'baseUrl': BASE_URL},
        },), default_export=True),
        Plugin('CopyWebpackPlugin', 'copy-webpack-plugin',
               ([{'from': 'static/favicon.ico', 'to': 'favicon.ico'}],), default_export=True),
    ]


def extraction_plugin(mode: Mode) -> Plugin:
    return Plugin('ExtractTextPlugin', 'extract-text-webpack-plugin',
                  ({'filename': css_filename(mode), 'allChunks': True},), default_export=True)


def analyzer_plugin() -> Plugin:
    return Plugin('BundleAnalyzerPlugin', 'webpack-bundle-analyzer')
