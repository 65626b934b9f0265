"""
Small helpers for query mappings and scalar coercion
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

_INTEGER = re.compile(r'^-?\d+$')
_DECIMAL = re.compile(r'^-?\d+\.\d+$')


def empty(value: Any) -> bool:
    """True for None and for empty containers or strings"""
    return value is None or (hasattr(value, '__len__') and len(value) == 0)


def tuples(query: Optional[Mapping[str, Any]]) -> List[Tuple[str, str]]:
    """
    Flatten a query mapping into (key, value) string tuples

    One level of nesting is expanded into bracket notation, so
    ``{'filter': {'id': '[1|5]'}}`` becomes ``[('filter[id]', '[1|5]')]``.
    Sequence values are joined with commas inside brackets, which is how the
    web service expects ``display`` field lists.
    """
    pairs = []
    for key, value in (query or {}).items():
        if isinstance(value, Mapping):
            for subkey, subvalue in value.items():
                pairs.append((f"{key}[{subkey}]", _scalar(subvalue)))
        else:
            pairs.append((str(key), _scalar(value)))
    return pairs


def _scalar(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return '[' + ','.join(str(v) for v in value) + ']'
    if isinstance(value, bool):
        return '1' if value else '0'
    return str(value)


def coerce(text: Optional[str]) -> Any:
    """Convert numeric text to int or float; leave anything else untouched"""
    if text is None:
        return None
    stripped = text.strip()
    if _INTEGER.match(stripped):
        return int(stripped)
    if _DECIMAL.match(stripped):
        return float(stripped)
    return text


def merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge; ``overrides`` wins, nested dicts are merged"""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = merge(merged[key], value)
        else:
            merged[key] = value
    return merged
