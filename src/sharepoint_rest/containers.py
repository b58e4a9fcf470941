# -*- coding: utf-8 -*-
"""
Base class for lists and folders: containers of items keyed by GUID.
"""

from .interfaces import FolderInterface, ItemInterface
from .objects import SharePointObject
from .utils import join_relative_url


class ListObject(SharePointObject, FolderInterface):
    """
    Hydrated object that holds child items and forwards requests to its Site.

    Children are stored by GUID. Iterating yields the children.
    """

    item_count = 0

    def __init__(self, site, payload, extra=None, strict=False):
        self.site = site
        self.items = {}
        super().__init__(payload, extra, strict=strict)

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items.values())

    def __contains__(self, guid):
        return guid in self.items

    def __getitem__(self, guid):
        try:
            return self.items[guid]
        except KeyError:
            raise KeyError(f"Invalid SharePoint Item GUID: {guid}") from None

    def __setitem__(self, guid, value):
        if not isinstance(value, ItemInterface):
            raise TypeError(f"SharePoint Item expected, got {type(value).__name__}")

        # The GUID of the item is always used as the key
        self.items[value.guid] = value

    def __delitem__(self, guid):
        del self.items[guid]

    def request(self, url, options=None, method='GET', json=True):
        return self.site.request(url, options, method, json)

    def get_access_token(self):
        return self.site.get_access_token()

    def get_form_digest(self):
        return self.site.get_form_digest()

    def get_site(self):
        return self.site

    def get_relative_url(self, path=''):
        if not path:
            return self.relative_url
        return join_relative_url(self.relative_url, path)

    def get_url(self, path=''):
        return self.site.get_hostname(self.get_relative_url(path))
