"""Source transformation rules, one per asset class."""
import os
import re
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from buildconf.core.project import ProjectLayout


FONT_VERSION = r'(\?v=[0-9]\.[0-9]\.[0-9])?'
SPEC_FILES = re.compile(r'\.(spec|test)\.[jt]s$', re.IGNORECASE)


class TransformStep(NamedTuple):
    """One loader in a transform chain."""
    loader: str
    options: Optional[Dict[str, Any]] = None


class Rule(NamedTuple):
    """Match pattern plus the ordered chain of steps applied to matching files."""
    name: str
    test: re.Pattern
    transform_chain: Tuple[TransformStep, ...]
    exclude: Tuple[re.Pattern, ...] = ()
    include: Tuple[str, ...] = ()
    enforce: Optional[str] = None
    options: Optional[Dict[str, Any]] = None

    def matches(self, path: str) -> bool:
        """Whether a file path would be handled by this rule."""
        if not self.test.search(path):
            return False
        if any(pattern.search(path) for pattern in self.exclude):
            return False
        if self.include:
            return any(_within(path, directory) for directory in self.include)
        return True


class StyleDelivery(Enum):
    """How compiled stylesheets reach the page."""
    INLINE = 'inline'
    EXTRACTED = 'extracted'

    @classmethod
    def from_flag(cls, extract_css: bool) -> 'StyleDelivery':
        return cls.EXTRACTED if extract_css else cls.INLINE


def _within(path: str, directory: str) -> bool:
    path = os.path.normpath(path)
    directory = os.path.normpath(directory)
    return path == directory or path.startswith(directory + os.sep)


def step(loader: str, **options) -> TransformStep:
    return TransformStep(loader, options)


def style_chain(delivery: StyleDelivery, *preprocessors: str) -> Tuple[TransformStep, ...]:
    """Full transform chain for a stylesheet rule.

    Inline delivery injects styles at runtime through style-loader; extracted
    delivery writes minimized CSS files, keeping style-loader only as the
    fallback for chunks that are not extracted.
    """
    tail = tuple(step(loader) for loader in preprocessors)
    if delivery is StyleDelivery.EXTRACTED:
        return (step('extract', fallback='style-loader'), step('css-loader', minimize=True)) + tail
    return (step('style-loader'), step('css-loader')) + tail


def _pattern(source: str, ignore_case: bool = True) -> re.Pattern:
    return re.compile(source, re.IGNORECASE if ignore_case else 0)


def primary_rules(delivery: StyleDelivery) -> List[Rule]:
    """Mandatory rules in bundler order."""
    return [
        Rule('css', _pattern(r'\.css$'), style_chain(delivery)),
        Rule('sass', _pattern(r'\.sass$', ignore_case=False), style_chain(delivery, 'sass-loader')),
        Rule('html', _pattern(r'\.html$'), (step('html-loader'),)),
        Rule('typescript', _pattern(r'\.tsx?$', ignore_case=False), (step('ts-loader'),),
             exclude=(_pattern(r'node_modules', ignore_case=False),)),
        Rule('json', _pattern(r'\.json$'), (step('json-loader'),)),
        # use Bluebird as the global Promise implementation
        Rule('bluebird', _pattern(r'[\/\\]node_modules[\/\\]bluebird[\/\\].+\.js$', ignore_case=False),
             (step('expose-loader', exposes='Promise'),)),
        # small images and fonts are embedded as data URLs, larger ones emitted as files
        Rule('images', _pattern(r'\.(png|gif|jpg|cur)$'), (step('url-loader', limit=8192),)),
        Rule('woff2', _pattern(r'\.woff2' + FONT_VERSION + '$'),
             (step('url-loader', limit=10000, mimetype='application/font-woff2'),)),
        Rule('woff', _pattern(r'\.woff' + FONT_VERSION + '$'),
             (step('url-loader', limit=10000, mimetype='application/font-woff'),)),
        Rule('fonts', _pattern(r'\.(ttf|eot|svg|otf)' + FONT_VERSION + '$'), (step('file-loader'),)),
    ]


def coverage_rule(project: ProjectLayout) -> Rule:
    """Post-compilation instrumentation of source files, skipping specs."""
    return Rule(
        'coverage',
        _pattern(r'\.[jt]s$'),
        (step('istanbul-instrumenter-loader'),),
        exclude=(SPEC_FILES,),
        include=(project.src_dir,),
        enforce='post',
        options={'esModules': True},
    )
