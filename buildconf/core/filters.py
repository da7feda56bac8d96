"""Jinja2 filters for rendering JavaScript configuration modules."""
import json
import re
from typing import Any, NamedTuple, Tuple

from jinja2 import Environment

IDENTIFIER = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')
UNESCAPED_SLASH = re.compile(r'(?<!\\)/')
INLINE_WIDTH = 72
INDENT = '  '


class Call(NamedTuple):
    """A JavaScript call expression, optionally a constructor call."""
    callee: str
    args: Tuple[Any, ...] = ()
    new: bool = False


def js_regex(pattern) -> str:
    """Format a compiled pattern as a JavaScript regex literal."""
    flags = 'i' if pattern.flags & re.IGNORECASE else ''
    source = UNESCAPED_SLASH.sub(r'\\/', pattern.pattern)
    return f'/{source}/{flags}'


def js_key(key) -> str:
    key = str(key)
    if IDENTIFIER.match(key):
        return key
    return json.dumps(key)


def js_value(value: Any, level: int = 0) -> str:
    """Format a Python value as a JavaScript expression."""
    if value is None:
        return 'undefined'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, re.Pattern):
        return js_regex(value)
    if isinstance(value, Call):
        args = ', '.join(js_value(arg, level) for arg in value.args)
        prefix = 'new ' if value.new else ''
        return f'{prefix}{value.callee}({args})'
    if isinstance(value, dict):
        items = [f'{js_key(k)}: {js_value(v, level + 1)}' for k, v in value.items()]
        return _block(items, '{', '}', level)
    if isinstance(value, (list, tuple)):
        items = [js_value(v, level + 1) for v in value]
        return _block(items, '[', ']', level)
    raise TypeError(f'Cannot render {type(value).__name__} as JavaScript')


def _block(items, opening: str, closing: str, level: int) -> str:
    if not items:
        return opening + closing
    pad = ' ' if opening == '{' else ''
    inline = f'{opening}{pad}{", ".join(items)}{pad}{closing}'
    if len(inline) <= INLINE_WIDTH and '\n' not in inline:
        return inline
    inner = INDENT * (level + 1)
    body = ',\n'.join(inner + item for item in items)
    return f'{opening}\n{body},\n{INDENT * level}{closing}'


def to_plain(value: Any) -> Any:
    """Convert patterns and call expressions into JSON-compatible values."""
    if isinstance(value, re.Pattern):
        return js_regex(value)
    if isinstance(value, Call):
        key = 'new' if value.new else 'call'
        return {key: value.callee, 'args': [to_plain(arg) for arg in value.args]}
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def register_filters(env: Environment) -> Environment:
    """Register custom filters with a Jinja2 environment."""
    env.filters['js'] = js_value
    env.filters['js_regex'] = js_regex
    env.filters['js_key'] = js_key
    return env
