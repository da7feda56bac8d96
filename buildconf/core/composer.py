"""Compose a complete bundler configuration from build flags."""
from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

from buildconf.core.bundles import (
    BASE_URL, TARGET, TITLE, DevServerOptions, OutputNaming, ResolveOptions,
    entry_points, output_naming, resolve_options,
)
from buildconf.core.flags import Flags, Mode, coerce_flags
from buildconf.core.helpers import conditional_include
from buildconf.core.plugins import Plugin, analyzer_plugin, base_plugins, extraction_plugin
from buildconf.core.project import ProjectLayout
from buildconf.core.rules import Rule, StyleDelivery, coverage_rule, primary_rules


class BuildConfig(NamedTuple):
    """Immutable snapshot handed to the bundler for one build."""
    flags: Flags
    mode: Mode
    entry_points: Mapping[str, Tuple[str, ...]]
    output: OutputNaming
    resolve: ResolveOptions
    transform_rules: Tuple[Rule, ...]
    plugins: Tuple[Plugin, ...]
    source_map_level: str
    style_delivery: StyleDelivery
    dev_server: DevServerOptions
    target: str = TARGET
    title: str = TITLE
    base_url: str = BASE_URL
    performance_hints: bool = False

    @property
    def instrumentation_rule(self) -> Optional[Rule]:
        """Coverage rule if instrumentation is enabled; always the last rule."""
        if self.transform_rules and self.transform_rules[-1].enforce == 'post':
            return self.transform_rules[-1]
        return None

    def plugin_names(self):
        return [plugin.name for plugin in self.plugins]

    def rule_names(self):
        return [rule.name for rule in self.transform_rules]


def compose(flags: Any = None, project: Optional[ProjectLayout] = None) -> BuildConfig:
    """Build the configuration for the given flags.

    Accepts a Flags instance, a plain mapping (unrecognized keys are ignored)
    or None. Never raises for well-typed input and reads no files; the
    default project layout is rooted at the working directory.
    """
    flags = coerce_flags(flags)
    project = project or ProjectLayout.default()
    mode = flags.mode

    plugins = [
        *base_plugins(flags.server),
        *conditional_include(flags.extract_css, extraction_plugin(mode)),
        *conditional_include(flags.analyze, analyzer_plugin()),
    ]

    delivery = StyleDelivery.from_flag(flags.extract_css)
    rules = [
        *primary_rules(delivery),
        *conditional_include(flags.coverage, coverage_rule(project)),
    ]

    return BuildConfig(
        flags=flags,
        mode=mode,
        entry_points=MappingProxyType(entry_points()),
        output=output_naming(mode, project),
        resolve=resolve_options(project),
        transform_rules=tuple(rules),
        plugins=tuple(plugins),
        source_map_level=mode.source_map_level,
        style_delivery=delivery,
        dev_server=DevServerOptions(content_base=project.out_dir),
    )


def summary(config: BuildConfig) -> Dict[str, Any]:
    """Short description of a configuration for display."""
    return {
        'mode': config.mode.value,
        'entries': {name: list(modules) for name, modules in config.entry_points.items()},
        'filename': config.output.filename,
        'source_map_filename': config.output.source_map_filename,
        'chunk_filename': config.output.chunk_filename,
        'devtool': config.source_map_level,
        'styles': config.style_delivery.value,
        'rules': config.rule_names(),
        'plugins': config.plugin_names(),
        'instrumented': config.instrumentation_rule is not None,
    }
