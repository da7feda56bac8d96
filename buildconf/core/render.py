"""Serialize a BuildConfig for the external bundler."""
import json
from typing import Any, Dict, List

from jinja2 import Environment, PackageLoader, StrictUndefined

from buildconf.core.composer import BuildConfig
from buildconf.core.errors import UnknownFormatError
from buildconf.core.filters import Call, register_filters, to_plain
from buildconf.core.rules import Rule, TransformStep


FORMATS = ('json', 'js')
EXTRACT_LOADER = 'extract'
EXTRACT_CALLEE = 'ExtractTextPlugin.extract'

_environment = None


def get_environment() -> Environment:
    """Jinja2 environment for the packaged templates."""
    global _environment
    if _environment is None:
        env = Environment(
            loader=PackageLoader('buildconf', 'templates'),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        _environment = register_filters(env)
    return _environment


def step_to_dict(step: TransformStep):
    if step.options:
        return {'loader': step.loader, 'options': dict(step.options)}
    return step.loader


def chain_to_use(chain) -> Any:
    """Loader list for a rule; an extraction chain becomes an extract() call."""
    steps = list(chain)
    if steps and steps[0].loader == EXTRACT_LOADER:
        head, rest = steps[0], steps[1:]
        use = [step_to_dict(s) for s in rest]
        return Call(EXTRACT_CALLEE, ({'fallback': head.options['fallback'], 'use': use},))
    return [step_to_dict(s) for s in steps]


def rule_to_dict(rule: Rule) -> Dict[str, Any]:
    entry: Dict[str, Any] = {'test': rule.test}
    if rule.include:
        entry['include'] = list(rule.include)
    if rule.exclude:
        entry['exclude'] = rule.exclude[0] if len(rule.exclude) == 1 else list(rule.exclude)
    if len(rule.transform_chain) == 1 and rule.transform_chain[0].loader != EXTRACT_LOADER:
        only = rule.transform_chain[0]
        entry['loader'] = only.loader
        if only.options:
            entry['options'] = dict(only.options)
    else:
        entry['use'] = chain_to_use(rule.transform_chain)
    if rule.enforce:
        entry['enforce'] = rule.enforce
    if rule.options:
        entry['options'] = dict(rule.options)
    return entry


def to_dict(config: BuildConfig) -> Dict[str, Any]:
    """Webpack-shaped configuration tree."""
    return {
        'resolve': {
            'extensions': list(config.resolve.extensions),
            'modules': list(config.resolve.modules),
        },
        'entry': {name: list(modules) for name, modules in config.entry_points.items()},
        'mode': config.mode.value,
        'output': {
            'path': config.output.path,
            'publicPath': config.output.public_path,
            'filename': config.output.filename,
            'sourceMapFilename': config.output.source_map_filename,
            'chunkFilename': config.output.chunk_filename,
        },
        'plugins': [Call(p.name, tuple(p.args), new=True) for p in config.plugins],
        'target': config.target,
        'performance': {'hints': config.performance_hints},
        'devServer': {
            'contentBase': config.dev_server.content_base,
            'historyApiFallback': config.dev_server.history_api_fallback,
        },
        'devtool': config.source_map_level,
        'module': {'rules': [rule_to_dict(rule) for rule in config.transform_rules]},
    }


def plugin_requires(config: BuildConfig) -> List[Dict[str, Any]]:
    """require() statements needed by the plugin list, in first-use order."""
    requires: Dict[str, Dict[str, Any]] = {}
    for plugin in config.plugins:
        key = plugin.name if plugin.default_export else plugin.module
        entry = requires.setdefault(key, {
            'module': plugin.module,
            'default': plugin.name if plugin.default_export else None,
            'names': [],
        })
        if not plugin.default_export and plugin.name not in entry['names']:
            entry['names'].append(plugin.name)
    return list(requires.values())


def render_json(config: BuildConfig, indent: int = 2) -> str:
    return json.dumps(to_plain(to_dict(config)), indent=indent) + '\n'


def render_js(config: BuildConfig) -> str:
    """CommonJS webpack.config.js module for the configuration."""
    template = get_environment().get_template('webpack.config.js.j2')
    return template.render(
        flags=json.dumps(config.flags.to_dict()),
        requires=plugin_requires(config),
        tree=to_dict(config),
    )


def render(config: BuildConfig, fmt: str = 'json') -> str:
    """Render in the requested format."""
    if fmt == 'json':
        return render_json(config)
    if fmt == 'js':
        return render_js(config)
    raise UnknownFormatError(f"Unknown output format '{fmt}', expected one of: {', '.join(FORMATS)}")
