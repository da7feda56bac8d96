"""Build-mode flags supplied once per invocation."""
import logging
from enum import Enum
from typing import Any, Dict, Mapping, NamedTuple, Optional

logger = logging.getLogger(__name__)

TRUTHY = ('true', '1', 'yes', 'on')

# Accepted spellings -> Flags field
FLAG_ALIASES = {
    'production': 'production',
    'server': 'server',
    'extractCss': 'extract_css',
    'extract_css': 'extract_css',
    'extract-css': 'extract_css',
    'coverage': 'coverage',
    'analyze': 'analyze',
}

FLAG_HELP = {
    'production': 'Production mode: stable hashes, minimal source maps',
    'server': 'Server identifier passed through to the HTML metadata',
    'extract_css': 'Extract CSS into separate files instead of injecting styles',
    'coverage': 'Instrument source files for coverage reporting',
    'analyze': 'Add the bundle analyzer plugin',
}


class Mode(Enum):
    """Bundler mode derived from the production flag."""
    DEVELOPMENT = 'development'
    PRODUCTION = 'production'

    @property
    def hash_placeholder(self) -> str:
        """Filename hash token for this mode."""
        if self is Mode.PRODUCTION:
            return 'chunkhash'
        return 'hash'

    @property
    def source_map_level(self) -> str:
        """Devtool setting for this mode."""
        if self is Mode.PRODUCTION:
            return 'nosources-source-map'
        return 'cheap-module-source-map'


def to_bool(value: Any) -> bool:
    """Interpret a flag value, accepting string spellings from CLI and env."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return bool(value)


class Flags(NamedTuple):
    """Immutable set of recognized build switches."""
    production: bool = False
    server: Optional[str] = None
    extract_css: bool = False
    coverage: bool = False
    analyze: bool = False

    @property
    def mode(self) -> Mode:
        return Mode.PRODUCTION if self.production else Mode.DEVELOPMENT

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> 'Flags':
        """Build flags from a mapping, ignoring keys that are not recognized."""
        if not values:
            return cls()

        fields: Dict[str, Any] = {}
        for key, value in values.items():
            field = FLAG_ALIASES.get(key)
            if field is None:
                logger.debug(f"Ignoring unrecognized flag: {key}")
                continue
            if field == 'server':
                fields[field] = None if value is None or value is False else str(value)
            else:
                fields[field] = to_bool(value)
        return cls(**fields)

    def to_dict(self) -> Dict[str, Any]:
        """Flags keyed by their bundler (camelCase) names."""
        return {
            'production': self.production,
            'server': self.server,
            'extractCss': self.extract_css,
            'coverage': self.coverage,
            'analyze': self.analyze,
        }


def coerce_flags(flags: Any) -> Flags:
    """Accept Flags, a mapping, or None."""
    if isinstance(flags, Flags):
        return flags
    return Flags.from_mapping(flags)


def parse_env_pairs(pairs) -> Dict[str, str]:
    """Parse webpack-style ``KEY=VALUE`` (or bare ``KEY``) env arguments."""
    values = {}
    for pair in pairs or ():
        key, sep, value = pair.partition('=')
        key = key.strip()
        if key.startswith('env.'):
            key = key[len('env.'):]
        if not key:
            raise ValueError(f"Invalid env argument: {pair!r}")
        values[key] = value if sep else 'true'
    return values
