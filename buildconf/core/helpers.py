"""Composition helpers for assembling rule and plugin lists."""
from typing import Any, Sequence


def normalize_to_list(value: Any) -> Sequence[Any]:
    """Wrap a single value into a list; None becomes an empty list.

    Only lists and plain tuples count as sequences. Record types such as
    Rule or Plugin are tuple subclasses but are single values.
    """
    if value is None:
        return []
    if isinstance(value, list) or type(value) is tuple:
        return value
    return [value]


def conditional_include(condition, when_true=None, when_false=None) -> Sequence[Any]:
    """Return the normalized branch selected by condition."""
    if condition:
        return normalize_to_list(when_true)
    return normalize_to_list(when_false)
