"""Invariant checks for composed configurations."""
import itertools
import logging
import os
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from buildconf.core.composer import BuildConfig, compose
from buildconf.core.flags import Flags, Mode
from buildconf.core.plugins import extraction_plugin
from buildconf.core.project import ProjectLayout
from buildconf.core.rules import SPEC_FILES, Rule, StyleDelivery

logger = logging.getLogger(__name__)

# One representative file per asset class, plus near-miss names
SAMPLE_PATHS = (
    'src/main.ts',
    'src/app.tsx',
    'src/app.js',
    'src/app.html',
    'src/styles/site.css',
    'src/styles/site.SASS',
    'src/styles/theme.sass',
    'src/resources/data.json',
    'src/app.spec.ts',
    'test/unit/app.test.js',
    'node_modules/bluebird/js/browser/bluebird.js',
    'node_modules/aurelia-framework/dist/index.ts',
    'static/logo.png',
    'static/banner.JPG',
    'static/anim.gif',
    'static/pointer.cur',
    'static/fonts/icons.woff2',
    'static/fonts/icons.woff2?v=4.7.0',
    'static/fonts/icons.woff',
    'static/fonts/icons.woff?v=4.7.0',
    'static/fonts/icons.ttf',
    'static/fonts/icons.eot?v=4.7.0',
    'static/fonts/icons.svg',
    'static/fonts/icons.otf',
)

SPEC_SAMPLES = ('app.spec.ts', 'app.spec.js', 'app.test.ts', 'APP.TEST.JS')


def find_overlaps(rules: Sequence[Rule], paths: Iterable[str]) -> List[Tuple[str, List[str]]]:
    """Paths matched by more than one rule, with the names of those rules."""
    overlaps = []
    for path in paths:
        names = [rule.name for rule in rules if rule.matches(path)]
        if len(names) > 1:
            overlaps.append((path, names))
    return overlaps


def primary(rules: Sequence[Rule]) -> List[Rule]:
    """Rules applied in the normal phase (not post-enforced)."""
    return [rule for rule in rules if rule.enforce is None]


def _sample(path: str, project_root: str) -> str:
    return os.path.join(project_root, *path.split('/'))


def verify(config: BuildConfig, sample_paths: Optional[Iterable[str]] = None,
           project: Optional[ProjectLayout] = None) -> List[str]:
    """Return a list of problems; an empty list means the configuration is valid."""
    problems = []
    project = project or ProjectLayout.default()
    paths = [_sample(p, project.root) for p in (sample_paths or SAMPLE_PATHS)]

    for path, names in find_overlaps(primary(config.transform_rules), paths):
        problems.append(f"{path} matches several rules: {', '.join(names)}")

    # Naming and devtool follow the mode and only the mode
    expected, other = ('chunkhash', 'hash') if config.mode is Mode.PRODUCTION else ('hash', 'chunkhash')
    for template in (config.output.filename, config.output.source_map_filename,
                     config.output.chunk_filename):
        if f'[{expected}]' not in template or f'[{other}]' in template:
            problems.append(f"Template {template} does not use [{expected}] for {config.mode.value}")
    if config.source_map_level != config.mode.source_map_level:
        problems.append(f"Source maps '{config.source_map_level}' do not match {config.mode.value} mode")

    post_rules = [i for i, rule in enumerate(config.transform_rules) if rule.enforce == 'post']
    if config.flags.coverage:
        if len(post_rules) != 1 or post_rules[0] != len(config.transform_rules) - 1:
            problems.append('Coverage rule must appear exactly once, as the last rule')
        else:
            rule = config.transform_rules[-1]
            if SPEC_FILES not in rule.exclude:
                problems.append('Coverage rule does not exclude spec/test files')
            leaked = [name for name in SPEC_SAMPLES if rule.matches(_sample('src/' + name, project.root))]
            if leaked:
                problems.append(f"Coverage rule instruments spec files: {', '.join(leaked)}")
            if not rule.include:
                problems.append('Coverage rule is not scoped to the source directory')
    elif post_rules:
        problems.append('Instrumentation rule present without the coverage flag')

    extract_plugins = [p for p in config.plugins if p.name == extraction_plugin(config.mode).name]
    extracting = config.style_delivery is StyleDelivery.EXTRACTED
    if extracting != bool(extract_plugins) or extracting != config.flags.extract_css:
        problems.append('CSS extraction plugin and stylesheet rules disagree')
    if config.flags.analyze != any(p.name == 'BundleAnalyzerPlugin' for p in config.plugins):
        problems.append('Bundle analyzer presence does not follow the analyze flag')

    return problems


def flag_matrix() -> List[Flags]:
    """Every combination of the boolean flags."""
    return [
        Flags(production=p, extract_css=e, coverage=c, analyze=a)
        for p, e, c, a in itertools.product((False, True), repeat=4)
    ]


def verify_matrix(project: Optional[ProjectLayout] = None) -> Dict[Flags, List[str]]:
    """Verify every flag combination; returns only combinations with problems."""
    failures = {}
    for flags in flag_matrix():
        problems = verify(compose(flags, project), project=project)
        if problems:
            logger.warning(f"{flags}: {len(problems)} problem(s)")
            failures[flags] = problems
    return failures
