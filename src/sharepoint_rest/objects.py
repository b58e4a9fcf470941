# -*- coding: utf-8 -*-
"""
Base class for objects hydrated from SharePoint REST payloads.
"""

from datetime import datetime, timezone
from functools import partial

from . import mapper


class SharePointObject:
    """
    Object built from a REST payload through a mapping table.

    Subclasses declare:
        fields (dict): Core attribute name -> coercion callable (or None)
        mapping (dict): Default mapping table (core attribute name -> path)
        lifetimes (tuple): Core attributes whose payload value is a lifetime
            in seconds, converted to an absolute expiration once, at hydration

    Mapped names that are not core attributes end up in `extra`.
    """

    fields = {}
    mapping = {}
    lifetimes = ()

    def __init__(self, payload, extra=None, strict=False, now=None):
        self.extra = {}
        for name in self.fields:
            if name not in self.__dict__:
                setattr(self, name, getattr(type(self), name, None))

        self.mapper = mapper.merge_mappings(self.mapping, extra)
        self.hydrate(payload, strict=strict, now=now)

    def hydrate(self, payload, strict=False, now=None):
        """Rehydrate this object from a payload using its mapping table."""
        fields = self.fields
        if self.lifetimes:
            if now is None:
                now = datetime.now(timezone.utc).replace(microsecond=0)
            fields = dict(fields)
            for name in self.lifetimes:
                fields[name] = partial(mapper.to_expiration, now=now)

        return mapper.hydrate(self, payload, self.mapper, strict=strict, fields=fields)

    def to_dict(self):
        """Snapshot of the core attributes plus the extra attributes."""
        data = {name: getattr(self, name) for name in self.fields}
        data['extra'] = dict(self.extra)
        return data

    def __repr__(self):
        label = getattr(self, 'title', None) or getattr(self, 'guid', None)
        return f"<{type(self).__name__} {label!r}>"
