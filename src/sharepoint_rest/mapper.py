# -*- coding: utf-8 -*-
"""
Payload mapping for SharePoint REST responses.

This module resolves path expressions against nested JSON payloads and
hydrates objects from a mapping table (local attribute name -> path).

Path expressions use '.' or '/' to descend into nested mappings by key:

    resolve({'d': {'Author': {'LoginName': 'bob'}}}, 'd.Author/LoginName')  # 'bob'

Unresolvable paths yield ABSENT instead of raising.
"""

import re
from datetime import datetime, timedelta, timezone

from .exceptions import MappingError

_SEPARATORS = re.compile(r'[./]')


class _Absent:
    """Marker for a path that does not resolve in a payload."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'ABSENT'

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


def split_path(path):
    """Split a path expression into its ordered key segments."""
    return [segment for segment in _SEPARATORS.split(path) if segment]


def resolve(payload, path):
    """
    Resolve a path expression against a nested payload.

    Args:
        payload (Mapping): Decoded JSON object
        path (str): Path expression ('a.b', 'a/b' or a mix of both)

    Returns:
        The nested value, or ABSENT if a key is missing or an intermediate
        value is not a mapping
    """
    node = payload
    for segment in split_path(path):
        if not isinstance(node, dict) or segment not in node:
            return ABSENT
        node = node[segment]
    return node


def merge_mappings(default, extra=None):
    """
    Merge a default mapping table with caller supplied extra entries.

    Extra entries override defaults on conflicting keys and extend the table
    otherwise. Neither input is modified.

    Args:
        default (dict): Built-in mapping (local name -> path)
        extra (dict): Extra mapping supplied by the caller

    Returns:
        dict: The merged mapping table
    """
    merged = dict(default)
    merged.update(extra or {})
    return merged


def to_int(value):
    """Coerce a payload value to int (None is kept)."""
    if value is None:
        return None
    return int(value)


def to_datetime(value):
    """
    Coerce a payload value to a timezone-aware datetime (None is kept).

    SharePoint returns ISO-8601 strings such as '2016-03-01T10:20:30Z'.
    Naive values are assumed to be UTC.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_expiration(value, now=None):
    """
    Convert a relative lifetime in seconds into an absolute expiration.

    Datetime values are taken as already absolute. `now` defaults to the
    current UTC instant truncated to whole seconds, so the result is an
    integral epoch second.
    """
    if isinstance(value, datetime):
        return to_datetime(value)
    if now is None:
        now = datetime.now(timezone.utc).replace(microsecond=0)
    return now + timedelta(seconds=int(value))


def hydrate(target, payload, mapping, strict=False, fields=None):
    """
    Populate a target object from a payload using a mapping table.

    For each (name, path) pair the path is resolved against the payload.
    Names declared in the target class' `fields` (name -> coercion callable
    or None) are assigned as attributes, anything else is stored in
    `target.extra`.

    Absent paths raise MappingError in strict mode. In non-strict mode they
    are skipped: declared attributes keep their current value and extra
    entries that were never set default to None.

    All values are resolved and coerced before anything is assigned, so a
    failure leaves the target untouched.

    Args:
        target: Object exposing an `extra` dict
        payload (Mapping): Decoded JSON object
        mapping (dict): Mapping table (local name -> path)
        strict (bool): Fail on absent paths
        fields (dict): Coercion table to use instead of the class declaration

    Returns:
        The target object

    Raises:
        MappingError: A path is absent (strict mode) or a value cannot be coerced
    """
    if fields is None:
        fields = getattr(type(target), 'fields', {})
    resolved = []

    for name, path in mapping.items():
        value = resolve(payload, path)

        if value is ABSENT:
            if strict:
                raise MappingError(path)
            resolved.append((name, ABSENT))
            continue

        coerce = fields.get(name)
        if coerce is not None:
            try:
                value = coerce(value)
            except (TypeError, ValueError) as e:
                raise MappingError(path, f"Invalid value for '{name}' at '{path}': {value!r}") from e
        resolved.append((name, value))

    for name, value in resolved:
        if name in fields:
            if value is not ABSENT:
                setattr(target, name, value)
        elif value is ABSENT:
            target.extra.setdefault(name, None)
        else:
            target.extra[name] = value

    return target
